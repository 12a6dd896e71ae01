"""Markdown rule -- structural checks for context documents."""

from __future__ import annotations

import re
from pathlib import PurePath

from mcp_devkit.types.validation import (
    ValidationContext,
    ValidationIssue,
    ValidationResult,
    ValidationSeverity,
)
from mcp_devkit.validation.base import BaseValidationRule

_HEADING = re.compile(r"^(#{1,6})\s+(.+)$")
_HEADING_START = re.compile(r"^(#{1,6})\s+")
# Also matches bare "##" so headings without text can be reported
_HEADING_ANY = re.compile(r"^(#{1,6})(?:\s+(.*))?$")
_CHECKBOX = re.compile(r"^(\s*)-\s*\[(.)\]\s*(.*)$")
_LINK = re.compile(r"\[([^\]]*)\]\(([^)]+)\)")

PLACEHOLDER_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"TODO\s*:?\s*", re.IGNORECASE),
    re.compile(r"FIXME\s*:?\s*", re.IGNORECASE),
    re.compile(r"XXX\s*:?\s*", re.IGNORECASE),
    re.compile(r"\[TODO\]", re.IGNORECASE),
    re.compile(r"\[FIXME\]", re.IGNORECASE),
    re.compile(r"\{\{[^}]+\}\}"),  # {{name}}
    re.compile(r"\$\{[^}]+\}"),  # ${PROJECT_NAME}
    re.compile(r"<[A-Z_]+>"),  # <PROJECT_NAME>
    re.compile(r"Your\s+(?:project|name|description|etc)", re.IGNORECASE),
    re.compile(r"Replace\s+(?:this|with)", re.IGNORECASE),
    re.compile(r"Enter\s+(?:your|the)", re.IGNORECASE),
)

VALID_CHECKBOX_STATES = frozenset({" ", "x", "X"})


def required_sections_for(file_path: str) -> list[str]:
    """Sections a document must contain, inferred from its file name."""
    name = PurePath(file_path.replace("\\", "/")).name.lower()
    if name == "readme.md":
        return ["# ", "## installation", "## usage"]
    if "prd" in name or "requirements" in name:
        return ["# ", "## overview", "## requirements"]
    if "architecture" in name:
        return ["# ", "## architecture", "## components"]
    if "task" in name or "todo" in name:
        return ["# ", "## tasks"]
    return []


class MarkdownRule(BaseValidationRule):
    """Validates markdown files for structure and content issues.

    Checks run in a fixed order: empty sections, placeholder text,
    required sections, checkbox format, heading hierarchy, link integrity.
    Only missing sections, malformed checkboxes and empty headings are
    errors; everything else is a warning.
    """

    def __init__(self) -> None:
        super().__init__(
            "markdown", "Validates markdown files for structure and content issues"
        )

    def validate(self, context: ValidationContext) -> ValidationResult:
        if not context.file_path.endswith(".md"):
            return self.create_result()

        lines = context.content.splitlines()
        issues: list[ValidationIssue] = []
        issues.extend(self.check_empty_sections(lines))
        issues.extend(self.check_placeholder_text(lines))
        issues.extend(self.check_required_sections(context.content, context.file_path))
        issues.extend(self.check_checkbox_format(lines))
        issues.extend(self.check_heading_structure(lines))
        issues.extend(self.check_link_integrity(lines))
        return self.create_result(issues)

    # -- Checks ---------------------------------------------------------------

    def check_empty_sections(self, lines: list[str]) -> list[ValidationIssue]:
        issues: list[ValidationIssue] = []
        for index, raw in enumerate(lines):
            match = _HEADING.match(raw.strip())
            if not match:
                continue
            level = len(match.group(1))

            has_content = False
            for following in lines[index + 1 :]:
                stripped = following.strip()
                if not stripped:
                    continue
                next_heading = _HEADING_START.match(stripped)
                if next_heading and len(next_heading.group(1)) <= level:
                    break
                has_content = True
                break

            if not has_content:
                issues.append(
                    self.create_issue(
                        f'Empty section: "{match.group(2)}" has no content',
                        ValidationSeverity.WARNING,
                        line=index + 1,
                        fix="Add content to this section or remove the header",
                    )
                )
        return issues

    def check_placeholder_text(self, lines: list[str]) -> list[ValidationIssue]:
        issues: list[ValidationIssue] = []
        for index, line in enumerate(lines):
            if not line:
                continue
            for pattern in PLACEHOLDER_PATTERNS:
                match = pattern.search(line)
                if not match or not match.group(0):
                    continue
                issues.append(
                    self.create_issue(
                        f'Placeholder text found: "{match.group(0)}"',
                        ValidationSeverity.WARNING,
                        line=index + 1,
                        column=match.start() + 1,
                        fix="Replace placeholder text with actual content",
                    )
                )
        return issues

    def check_required_sections(self, content: str, file_path: str) -> list[ValidationIssue]:
        body = content.lower()
        return [
            self.create_issue(
                f'Missing required section: "{section}"',
                ValidationSeverity.ERROR,
                fix=f'Add a "{section}" section to the document',
            )
            for section in required_sections_for(file_path)
            if section not in body
        ]

    def check_checkbox_format(self, lines: list[str]) -> list[ValidationIssue]:
        issues: list[ValidationIssue] = []
        for index, line in enumerate(lines):
            match = _CHECKBOX.match(line)
            if not match:
                continue
            state, text = match.group(2), match.group(3)

            if state not in VALID_CHECKBOX_STATES:
                issues.append(
                    self.create_issue(
                        f'Invalid checkbox format: "[{state}]" should be "[ ]" or "[x]"',
                        ValidationSeverity.ERROR,
                        line=index + 1,
                        column=match.start(2),
                        fix=(
                            f'Replace "[{state}]" with "[ ]" for unchecked'
                            ' or "[x]" for checked'
                        ),
                    )
                )
            if not text.strip():
                issues.append(
                    self.create_issue(
                        "Empty task: checkbox has no description",
                        ValidationSeverity.WARNING,
                        line=index + 1,
                        fix="Add a description for this task",
                    )
                )
        return issues

    def check_heading_structure(self, lines: list[str]) -> list[ValidationIssue]:
        issues: list[ValidationIssue] = []
        last_level = 0
        for index, raw in enumerate(lines):
            match = _HEADING_ANY.match(raw.strip())
            if not match:
                continue
            level = len(match.group(1))
            text = match.group(2) or ""

            if last_level > 0 and level > last_level + 1:
                issues.append(
                    self.create_issue(
                        f"Heading level jump: jumped from H{last_level} to H{level}",
                        ValidationSeverity.WARNING,
                        line=index + 1,
                        fix=f"Use H{last_level + 1} instead of H{level}",
                    )
                )
            if not text.strip():
                issues.append(
                    self.create_issue(
                        "Empty heading: heading has no text",
                        ValidationSeverity.ERROR,
                        line=index + 1,
                        column=raw.index("#") + level + 1,
                        fix="Add text to the heading",
                    )
                )
            last_level = level
        return issues

    def check_link_integrity(self, lines: list[str]) -> list[ValidationIssue]:
        issues: list[ValidationIssue] = []
        for index, line in enumerate(lines):
            for match in _LINK.finditer(line):
                text, url = match.group(1), match.group(2)
                link_column = match.start() + 1
                url_column = match.start(2) + 1

                if not text.strip():
                    issues.append(
                        self.create_issue(
                            "Empty link text",
                            ValidationSeverity.WARNING,
                            line=index + 1,
                            column=link_column,
                            fix="Add descriptive text for the link",
                        )
                    )
                if "localhost" in url or "127.0.0.1" in url:
                    issues.append(
                        self.create_issue(
                            f'Local URL in link: "{url}"',
                            ValidationSeverity.WARNING,
                            line=index + 1,
                            column=url_column,
                            fix="Replace with a public URL or relative path",
                        )
                    )
                if "example.com" in url or url in ("#", "TODO"):
                    issues.append(
                        self.create_issue(
                            f'Placeholder URL: "{url}"',
                            ValidationSeverity.WARNING,
                            line=index + 1,
                            column=url_column,
                            fix="Replace with the actual URL",
                        )
                    )
        return issues
