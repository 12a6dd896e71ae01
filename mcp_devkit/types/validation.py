"""Validation types for mcp-devkit document checks."""

from __future__ import annotations

from collections.abc import Awaitable, Mapping, Sequence
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Protocol, runtime_checkable

VALIDATOR_ID = "mcp-devkit"


class ValidationSeverity(StrEnum):
    """Issue severity, ordered by decreasing blocking-ness."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"
    HINT = "hint"


@dataclass(frozen=True)
class ValidationIssue:
    """A single finding produced by a rule."""

    severity: ValidationSeverity
    message: str
    rule: str
    line: int | None = None
    column: int | None = None
    fix: str | None = None

    @property
    def location(self) -> str:
        """``:line[:column]`` suffix, empty when the issue has no line."""
        if not self.line:
            return ""
        if self.column:
            return f":{self.line}:{self.column}"
        return f":{self.line}"

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "severity": self.severity.value,
            "message": self.message,
            "rule": self.rule,
        }
        if self.line is not None:
            data["line"] = self.line
        if self.column is not None:
            data["column"] = self.column
        if self.fix is not None:
            data["fix"] = self.fix
        return data


@dataclass(frozen=True)
class ValidationContext:
    """Input to one rule invocation on one file."""

    file_path: str
    project_root: str
    content: str
    options: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ValidationResult:
    """Output of one rule on one file."""

    valid: bool
    issues: tuple[ValidationIssue, ...] = ()


@dataclass(frozen=True)
class ValidationReport:
    """All rules' findings for a single file."""

    file_path: str
    valid: bool
    issues: tuple[ValidationIssue, ...] = ()
    execution_time: float = 0.0  # milliseconds
    validator: str = VALIDATOR_ID

    def to_dict(self) -> dict[str, Any]:
        return {
            "filePath": self.file_path,
            "valid": self.valid,
            "issues": [issue.to_dict() for issue in self.issues],
            "executionTime": self.execution_time,
            "validator": self.validator,
        }


def empty_severity_counts() -> dict[ValidationSeverity, int]:
    return {severity: 0 for severity in ValidationSeverity}


@dataclass(frozen=True)
class ValidationSummary:
    """Aggregate over every file in a validation run."""

    total_files: int
    valid_files: int
    invalid_files: int
    total_issues: int
    issues_by_severity: dict[ValidationSeverity, int] = field(
        default_factory=empty_severity_counts
    )
    reports: tuple[ValidationReport, ...] = ()
    execution_time: float = 0.0  # milliseconds, wall-clock for the whole run

    @classmethod
    def empty(cls) -> ValidationSummary:
        return cls(total_files=0, valid_files=0, invalid_files=0, total_issues=0)

    @classmethod
    def from_reports(
        cls, reports: Sequence[ValidationReport], execution_time: float = 0.0
    ) -> ValidationSummary:
        """Build a summary, keeping *reports* in the order given."""
        counts = empty_severity_counts()
        for report in reports:
            for issue in report.issues:
                counts[issue.severity] += 1

        valid = sum(1 for r in reports if r.valid)
        return cls(
            total_files=len(reports),
            valid_files=valid,
            invalid_files=len(reports) - valid,
            total_issues=sum(len(r.issues) for r in reports),
            issues_by_severity=counts,
            reports=tuple(reports),
            execution_time=execution_time,
        )

    def count(self, severity: ValidationSeverity) -> int:
        return self.issues_by_severity.get(severity, 0)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the camelCase wire shape used by JSON output."""
        return {
            "totalFiles": self.total_files,
            "validFiles": self.valid_files,
            "invalidFiles": self.invalid_files,
            "totalIssues": self.total_issues,
            "issuesBySeverity": {
                severity.value: self.count(severity) for severity in ValidationSeverity
            },
            "reports": [report.to_dict() for report in self.reports],
            "executionTime": self.execution_time,
        }


@runtime_checkable
class ValidationRule(Protocol):
    """A named check over one file's content.

    ``validate`` may return the result directly or an awaitable of it.
    """

    name: str
    description: str

    def validate(
        self, context: ValidationContext
    ) -> ValidationResult | Awaitable[ValidationResult]: ...


class ValidatorPlugin(Protocol):
    """A named, versioned bundle of rules.

    Plugins may also define ``configure(options)``; the registry calls it
    once at registration time when present.
    """

    name: str
    version: str
    rules: Sequence[ValidationRule]
