"""mcp-devkit type definitions.

Import from this package:
    from mcp_devkit.types import ValidationIssue, ValidationSeverity
"""

from __future__ import annotations

from mcp_devkit.types.validation import (
    VALIDATOR_ID,
    ValidationContext,
    ValidationIssue,
    ValidationReport,
    ValidationResult,
    ValidationRule,
    ValidationSeverity,
    ValidationSummary,
    ValidatorPlugin,
)

__all__ = [
    "VALIDATOR_ID",
    "ValidationContext",
    "ValidationIssue",
    "ValidationReport",
    "ValidationResult",
    "ValidationRule",
    "ValidationSeverity",
    "ValidationSummary",
    "ValidatorPlugin",
]
