"""Render validation summaries for the console, JSON and Markdown.

Every renderer is a pure function of the summary and returns text; the
caller decides where to print it.
"""

from __future__ import annotations

import json

from mcp_devkit.types.validation import ValidationSeverity, ValidationSummary

SEVERITY_ICONS: dict[ValidationSeverity, str] = {
    ValidationSeverity.ERROR: "✗",
    ValidationSeverity.WARNING: "⚠",
    ValidationSeverity.INFO: "ℹ",
    ValidationSeverity.HINT: "💡",
}

SEVERITY_LABELS: dict[ValidationSeverity, str] = {
    ValidationSeverity.ERROR: "Errors",
    ValidationSeverity.WARNING: "Warnings",
    ValidationSeverity.INFO: "Info",
    ValidationSeverity.HINT: "Hints",
}

OUTPUT_FORMATS = ("table", "json", "markdown")


def severity_icon(severity: ValidationSeverity) -> str:
    return SEVERITY_ICONS.get(severity, "•")


def exit_code(summary: ValidationSummary, strict: bool = False) -> int:
    """0 when the run passes, 1 otherwise.

    A run passes with no errors, and in strict mode with no issues at all.
    """
    if summary.count(ValidationSeverity.ERROR) > 0:
        return 1
    if strict and summary.total_issues > 0:
        return 1
    return 0


def render_table(summary: ValidationSummary) -> str:
    if not summary.reports:
        return "No files found to validate"

    lines: list[str] = []
    for report in summary.reports:
        if report.valid:
            lines.append(f"✓ {report.file_path}")
            continue

        lines.append(f"✗ {report.file_path}")
        for issue in report.issues:
            fix = f" ({issue.fix})" if issue.fix else ""
            lines.append(
                f"  {severity_icon(issue.severity)} {issue.message}{issue.location}{fix}"
            )
        lines.append("")
    return "\n".join(lines).rstrip("\n")


def render_json(summary: ValidationSummary) -> str:
    return json.dumps(summary.to_dict(), indent=2, ensure_ascii=False)


def render_markdown(summary: ValidationSummary) -> str:
    lines = ["# Validation Report", ""]
    if not summary.reports:
        lines.append("No files found to validate.")
        return "\n".join(lines)

    lines += [
        "## Summary",
        "",
        "| Metric | Count |",
        "|--------|-------|",
        f"| Total Files | {summary.total_files} |",
        f"| Valid Files | {summary.valid_files} |",
        f"| Files with Issues | {summary.invalid_files} |",
        f"| Total Issues | {summary.total_issues} |",
    ]
    for severity in ValidationSeverity:
        lines.append(f"| {SEVERITY_LABELS[severity]} | {summary.count(severity)} |")
    lines.append("")

    with_issues = [r for r in summary.reports if r.issues]
    if with_issues:
        lines += ["## Issues by File", ""]
        for report in with_issues:
            lines += [f"### {report.file_path}", ""]
            for issue in report.issues:
                lines.append(
                    f"- **{issue.severity.value.upper()}**{issue.location}: {issue.message}"
                )
                if issue.fix:
                    lines.append(f"  - *Suggested fix: {issue.fix}*")
            lines.append("")

    return "\n".join(lines).rstrip("\n")


RENDERERS = {
    "table": render_table,
    "json": render_json,
    "markdown": render_markdown,
}


def render(summary: ValidationSummary, output_format: str = "table") -> str:
    """Render *summary* in one of ``OUTPUT_FORMATS``."""
    try:
        renderer = RENDERERS[output_format]
    except KeyError:
        raise ValueError(
            f"Unknown output format: '{output_format}'. Available: {', '.join(OUTPUT_FORMATS)}"
        ) from None
    return renderer(summary)


def format_summary(
    summary: ValidationSummary, duration_ms: float, strict: bool = False
) -> str:
    """Footer block with totals and the overall PASS/FAIL verdict."""
    lines = [
        "Validation Summary",
        "─" * 50,
        f"Files processed: {summary.total_files}",
        f"Valid files: {summary.valid_files}",
        f"Files with issues: {summary.invalid_files}",
        f"Total issues: {summary.total_issues}",
    ]

    if summary.total_issues > 0:
        lines += ["", "Issues by severity:"]
        for severity in ValidationSeverity:
            count = summary.count(severity)
            if count:
                lines.append(f"  {severity_icon(severity)} {SEVERITY_LABELS[severity]}: {count}")

    verdict = "PASS" if exit_code(summary, strict) == 0 else "FAIL"
    mode = " (strict)" if strict else ""
    lines += ["", f"Result: {verdict}{mode}", f"Completed in {duration_ms:.0f}ms"]
    return "\n".join(lines)
