"""Shared pytest fixtures for the mcp-devkit test suite."""

from __future__ import annotations

import pytest

from mcp_devkit.config import get_settings
from mcp_devkit.validation.plugin import builtin_plugin
from mcp_devkit.validation.registry import ValidatorRegistry, validator_registry

# ---------------------------------------------------------------------------
# Environment isolation -- no real .env or MCP_DEVKIT_* values leak into tests
# ---------------------------------------------------------------------------

_SETTINGS_ENV = (
    "MCP_DEVKIT_DIR",
    "MCP_DEVKIT_RULE_TIMEOUT",
    "MCP_DEVKIT_SCHEMAS_DIR",
    "MCP_DEVKIT_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _isolate_settings(monkeypatch, tmp_path):
    """Every test gets default settings and an empty working directory."""
    get_settings.cache_clear()
    for key in _SETTINGS_ENV:
        monkeypatch.delenv(key, raising=False)
    # Settings read .env from the working directory
    monkeypatch.chdir(tmp_path)

    yield

    get_settings.cache_clear()


@pytest.fixture(autouse=True)
def _clean_registry():
    """The process-wide registry starts and ends each test empty."""
    validator_registry.clear()
    yield
    validator_registry.clear()


# ---------------------------------------------------------------------------
# Registries and projects
# ---------------------------------------------------------------------------


@pytest.fixture
def registry():
    """A fresh registry holding only the built-in plugin."""
    reg = ValidatorRegistry()
    reg.register(builtin_plugin)
    return reg


@pytest.fixture
def project(tmp_path):
    """Factory writing ``{relative path: content}`` into a temp project root."""
    from tests.factories import write_files

    def _make(files: dict[str, str]):
        return write_files(tmp_path, files)

    return _make
