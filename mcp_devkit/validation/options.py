"""Validation options and the optional per-project options file.

A project may keep defaults in ``.mcp/validation.yaml``::

    strict: true
    rules: [markdown]
    exclude: ["**/drafts/*"]

Command-line flags override values from the file.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

logger = logging.getLogger("mcp_devkit.validation.options")

PROJECT_OPTIONS_FILE = "validation.yaml"


class ConfigError(ValueError):
    """Raised when a project options file cannot be used."""


class ValidationOptions(BaseModel):
    """Immutable options snapshot for one Validator."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    strict: bool = False
    rules: list[str] | None = None  # allow-list; "*" is a wildcard
    exclude: list[str] = Field(default_factory=list)
    parallel: bool = True
    fix: bool = False  # reserved for auto-fix; currently has no effect
    rule_timeout: float | None = None  # seconds per rule invocation

    def merged(self, **overrides: Any) -> ValidationOptions:
        """Copy with every non-``None`` override applied."""
        updates = {k: v for k, v in overrides.items() if v is not None}
        return self.model_validate({**self.model_dump(), **updates})


def load_project_options(project_root: str | Path, mcp_dir: str = ".mcp") -> ValidationOptions:
    """Read ``<root>/<mcp_dir>/validation.yaml``; defaults when absent.

    Raises ``ConfigError`` for unparseable YAML or unknown/ill-typed keys.
    """
    path = Path(project_root) / mcp_dir / PROJECT_OPTIONS_FILE
    if not path.exists():
        return ValidationOptions()

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a mapping, got {type(data).__name__}")

    try:
        options = ValidationOptions.model_validate(data)
    except PydanticValidationError as e:
        raise ConfigError(f"Invalid validation options in {path}: {e}") from e

    logger.debug(f"Loaded validation options from {path}")
    return options
