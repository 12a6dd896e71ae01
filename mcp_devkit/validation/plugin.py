"""Built-in validator plugin bundling the core rules."""

from __future__ import annotations

from typing import Any

from mcp_devkit import __version__
from mcp_devkit.validation.registry import ValidatorRegistry, validator_registry
from mcp_devkit.validation.rules.markdown import MarkdownRule
from mcp_devkit.validation.rules.schema import SchemaRule


class BuiltinValidatorPlugin:
    """Plugin ``builtin``: the schema rule followed by the markdown rule."""

    name = "builtin"
    version = __version__

    def __init__(self) -> None:
        self.rules = [SchemaRule(), MarkdownRule()]

    def configure(self, options: dict[str, Any]) -> None:
        # Nothing to configure; rules read per-run options from their context
        pass


builtin_plugin = BuiltinValidatorPlugin()


def register_builtin(registry: ValidatorRegistry | None = None) -> ValidatorRegistry:
    """Register the built-in plugin unless it is already present."""
    registry = registry if registry is not None else validator_registry
    if BuiltinValidatorPlugin.name not in registry:
        registry.register(builtin_plugin)
    return registry
