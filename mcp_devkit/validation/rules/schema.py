"""Schema rule -- validates JSON documents against bundled JSON Schemas."""

from __future__ import annotations

import asyncio
import json
import logging
import re
from pathlib import Path
from typing import Any

from jsonschema import FormatChecker
from jsonschema.exceptions import SchemaError
from jsonschema.exceptions import ValidationError as SchemaValidationError
from jsonschema.protocols import Validator as SchemaValidator
from jsonschema.validators import validator_for

from mcp_devkit.types.validation import (
    ValidationContext,
    ValidationIssue,
    ValidationResult,
    ValidationSeverity,
)
from mcp_devkit.validation.base import BaseValidationRule

logger = logging.getLogger("mcp_devkit.validation.schema")

BUNDLED_SCHEMAS_DIR = Path(__file__).resolve().parent.parent / "schemas"

_SCHEMA_URL_NAME = re.compile(r"/([^/]+)\.json$")
_REQUIRED_PROPERTY = re.compile(r"^'(.+)' is a required property")

# (path fragment, schema name), checked in order
PATH_SCHEMAS: tuple[tuple[str, str], ...] = (
    ("package.json", "package"),
    ("tsconfig.json", "tsconfig"),
    (".vscode/settings.json", "vscode-settings"),
    (".mcp/config.json", "mcp-config"),
    (".mcp/metadata.json", "metadata"),
)


def schema_name_for(file_path: str, data: Any) -> str | None:
    """Resolve the schema name from ``$schema`` or, failing that, the path."""
    if isinstance(data, dict):
        hint = data.get("$schema")
        if isinstance(hint, str):
            match = _SCHEMA_URL_NAME.search(hint)
            if match:
                return match.group(1)

    normalized = file_path.replace("\\", "/")
    for fragment, name in PATH_SCHEMAS:
        if fragment in normalized:
            return name
    return None


def suggest_fix(error: SchemaValidationError) -> str | None:
    """Human-readable remedy for a schema error, by keyword."""
    if error.validator == "required":
        match = _REQUIRED_PROPERTY.match(error.message)
        prop = match.group(1) if match else error.message
        return f"Add required property: {prop}"
    if error.validator == "type":
        expected = error.validator_value
        if isinstance(expected, list):
            expected = ", ".join(expected)
        return f"Expected type: {expected}"
    if error.validator == "enum":
        return "Must be one of: " + ", ".join(str(v) for v in error.validator_value)
    if error.validator == "format":
        return f"Must match format: {error.validator_value}"
    return None


def instance_path(error: SchemaValidationError) -> str:
    """JSON pointer to the offending value, empty for the document root."""
    return "".join(f"/{part}" for part in error.absolute_path)


class SchemaRule(BaseValidationRule):
    """Validates ``.json`` files against a schema chosen by naming convention.

    Compiled validators are cached per instance and loaded on first use
    from *schemas_dir* (the bundled schemas when not given).
    """

    def __init__(self, schemas_dir: str | Path | None = None) -> None:
        super().__init__("schema", "Validates JSON documents against JSON schemas")
        self._schemas_dir = Path(schemas_dir) if schemas_dir else None
        self._validators: dict[str, SchemaValidator] = {}

    @property
    def schemas_dir(self) -> Path:
        if self._schemas_dir is not None:
            return self._schemas_dir

        from mcp_devkit.config import get_settings

        configured = get_settings().mcp_devkit_schemas_dir
        return Path(configured) if configured else BUNDLED_SCHEMAS_DIR

    async def validate(self, context: ValidationContext) -> ValidationResult:
        if not context.file_path.endswith(".json"):
            return self.create_result()

        try:
            data = json.loads(context.content)
        except json.JSONDecodeError as e:
            return self.create_result(
                [self.create_issue(f"Invalid JSON: {e}", ValidationSeverity.ERROR)]
            )

        try:
            schema_name = schema_name_for(context.file_path, data)
            if not schema_name:
                return self.create_result()

            validator = await self._get_validator(schema_name)
            if validator is None:
                return self.create_result(
                    [
                        self.create_issue(
                            f"Schema '{schema_name}' not found",
                            ValidationSeverity.WARNING,
                        )
                    ]
                )

            return self.create_result(
                self._to_issue(error) for error in validator.iter_errors(data)
            )
        except Exception as e:
            logger.error(f"Schema validation failed for {context.file_path}: {e}")
            return self.create_result(
                [
                    self.create_issue(
                        f"Schema validation error: {e}", ValidationSeverity.ERROR
                    )
                ]
            )

    # -- Schema management ----------------------------------------------------

    def add_schema(self, name: str, schema: dict[str, Any]) -> None:
        """Compile *schema* and register it under *name*."""
        self._validators[name] = _compile(schema)

    def load_schema(self, name: str, schema_path: str | Path) -> None:
        """Load and register a schema from an explicit file.

        Raises ``ValueError`` when the file cannot be read or compiled.
        """
        try:
            schema = json.loads(Path(schema_path).read_text(encoding="utf-8"))
            self._validators[name] = _compile(schema)
        except (OSError, json.JSONDecodeError, SchemaError) as e:
            raise ValueError(
                f"Failed to load schema '{name}' from '{schema_path}': {e}"
            ) from e

    def has_schema(self, name: str) -> bool:
        return name in self._validators

    async def _get_validator(self, name: str) -> SchemaValidator | None:
        if name in self._validators:
            return self._validators[name]

        path = self.schemas_dir / f"{name}.json"
        try:
            text = await asyncio.to_thread(path.read_text, encoding="utf-8")
            validator = _compile(json.loads(text))
        except (OSError, json.JSONDecodeError, SchemaError) as e:
            logger.debug(f"Could not load schema '{name}' from {path}: {e}")
            return None

        self._validators[name] = validator
        return validator

    def _to_issue(self, error: SchemaValidationError) -> ValidationIssue:
        path = instance_path(error)
        message = f"{path}: {error.message}" if path else error.message
        return self.create_issue(
            message, ValidationSeverity.ERROR, fix=suggest_fix(error)
        )


def _compile(schema: dict[str, Any]) -> SchemaValidator:
    cls = validator_for(schema)
    cls.check_schema(schema)
    return cls(schema, format_checker=FormatChecker())
