"""Tests for the validation value types."""

from __future__ import annotations

import dataclasses

import pytest

from mcp_devkit.types.validation import (
    VALIDATOR_ID,
    ValidationRule,
    ValidationSeverity,
    ValidationSummary,
)
from mcp_devkit.validation.rules.markdown import MarkdownRule
from tests.factories import make_issue, make_report


class TestValidationIssue:
    def test_location(self):
        assert make_issue(line=3, column=7).location == ":3:7"
        assert make_issue(line=3, column=None).location == ":3"
        assert make_issue(line=None, column=None).location == ""

    def test_to_dict_omits_absent_fields(self):
        issue = make_issue(line=None, column=None, fix=None)
        assert issue.to_dict() == {
            "severity": "warning",
            "message": issue.message,
            "rule": "markdown",
        }

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            make_issue().message = "changed"

    def test_severity_is_str(self):
        assert ValidationSeverity.ERROR == "error"
        assert [s.value for s in ValidationSeverity] == ["error", "warning", "info", "hint"]


class TestValidationReport:
    def test_defaults(self):
        report = make_report()
        assert report.validator == VALIDATOR_ID

    def test_to_dict_camel_case(self):
        data = make_report(issues=(make_issue(),)).to_dict()
        assert set(data) == {"filePath", "valid", "issues", "executionTime", "validator"}
        assert data["issues"][0]["line"] == 3


class TestValidationSummary:
    def test_empty(self):
        summary = ValidationSummary.empty()
        assert summary.total_files == 0
        assert summary.reports == ()
        assert all(summary.count(s) == 0 for s in ValidationSeverity)

    def test_from_reports(self):
        reports = [
            make_report(file_path="a.md", valid=True),
            make_report(
                file_path="b.md",
                valid=False,
                issues=(
                    make_issue(severity=ValidationSeverity.ERROR),
                    make_issue(severity=ValidationSeverity.WARNING),
                ),
            ),
            make_report(
                file_path="c.md",
                valid=True,
                issues=(make_issue(severity=ValidationSeverity.INFO),),
            ),
        ]
        summary = ValidationSummary.from_reports(reports, execution_time=12.0)

        assert summary.total_files == 3
        assert summary.valid_files == 2
        assert summary.invalid_files == 1
        assert summary.total_issues == 3
        assert summary.count(ValidationSeverity.ERROR) == 1
        assert summary.count(ValidationSeverity.HINT) == 0
        assert sum(summary.issues_by_severity.values()) == summary.total_issues
        assert [r.file_path for r in summary.reports] == ["a.md", "b.md", "c.md"]

    def test_to_dict(self):
        summary = ValidationSummary.from_reports([make_report(issues=(make_issue(),))])
        data = summary.to_dict()
        assert data["totalFiles"] == 1
        assert data["issuesBySeverity"] == {"error": 0, "warning": 1, "info": 0, "hint": 0}
        assert data["reports"][0]["filePath"] == ".mcp/context_prd.md"


class TestRuleProtocol:
    def test_builtin_rule_satisfies_protocol(self):
        assert isinstance(MarkdownRule(), ValidationRule)
