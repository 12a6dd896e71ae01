"""BaseValidationRule -- shared helpers for concrete rules."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Iterable

from mcp_devkit.types.validation import (
    ValidationContext,
    ValidationIssue,
    ValidationResult,
    ValidationSeverity,
)


class BaseValidationRule(ABC):
    """Abstract base for built-in rules.

    Subclasses set ``name``/``description`` through ``__init__`` and
    implement ``validate(context)``. Issues created through
    ``create_issue`` are stamped with the rule's bare name.
    """

    def __init__(self, name: str, description: str) -> None:
        self.name = name
        self.description = description

    @abstractmethod
    def validate(
        self, context: ValidationContext
    ) -> ValidationResult | Awaitable[ValidationResult]:
        ...  # pragma: no cover

    def create_issue(
        self,
        message: str,
        severity: ValidationSeverity = ValidationSeverity.ERROR,
        line: int | None = None,
        column: int | None = None,
        fix: str | None = None,
    ) -> ValidationIssue:
        return ValidationIssue(
            severity=severity,
            message=message,
            rule=self.name,
            line=line,
            column=column,
            fix=fix,
        )

    def create_result(self, issues: Iterable[ValidationIssue] = ()) -> ValidationResult:
        """Wrap *issues*; the result is valid iff none is an error."""
        issues = tuple(issues)
        return ValidationResult(
            valid=not any(i.severity == ValidationSeverity.ERROR for i in issues),
            issues=issues,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name!r})"
