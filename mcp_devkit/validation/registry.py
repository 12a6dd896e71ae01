"""Validator registry -- plugin registration and rule lookup.

Usage::

    from mcp_devkit.validation.registry import ValidatorRegistry
    from mcp_devkit.validation.plugin import builtin_plugin

    registry = ValidatorRegistry()
    registry.register(builtin_plugin)
    registry.get_rule("markdown")

Rules are keyed ``<plugin>/<rule>``. Registration happens at startup;
registering while a validation run is in flight is unsupported.
"""

from __future__ import annotations

import logging

from mcp_devkit.types.validation import ValidationRule, ValidatorPlugin

logger = logging.getLogger("mcp_devkit.validation.registry")


class RegistryError(ValueError):
    """Raised when a plugin or rule key is already registered."""


class ValidatorRegistry:
    """Owns registered plugins and their ``plugin/rule`` keyed rules."""

    def __init__(self) -> None:
        self._plugins: dict[str, ValidatorPlugin] = {}
        self._rules: dict[str, ValidationRule] = {}

    def register(self, plugin: ValidatorPlugin) -> None:
        """Register *plugin* and all of its rules.

        Raises ``RegistryError`` if the plugin name or any qualified rule
        key is taken. Nothing is inserted when registration fails.
        """
        if plugin.name in self._plugins:
            raise RegistryError(f"Validator plugin '{plugin.name}' is already registered")

        keyed: dict[str, ValidationRule] = {}
        for rule in plugin.rules:
            key = f"{plugin.name}/{rule.name}"
            if key in self._rules or key in keyed:
                raise RegistryError(f"Validation rule '{key}' is already registered")
            keyed[key] = rule

        self._plugins[plugin.name] = plugin
        self._rules.update(keyed)
        logger.debug(
            "Registered plugin %s %s with rules: %s",
            plugin.name,
            getattr(plugin, "version", "?"),
            ", ".join(keyed),
        )

        configure = getattr(plugin, "configure", None)
        if callable(configure):
            configure({})

    def get_plugin(self, name: str) -> ValidatorPlugin | None:
        return self._plugins.get(name)

    def get_all_plugins(self) -> list[ValidatorPlugin]:
        return list(self._plugins.values())

    def get_rule(self, rule_name: str) -> ValidationRule | None:
        """Look up a rule by qualified key, then by bare name.

        A bare name resolves to the earliest registered plugin that
        defines it. Returns ``None`` when nothing matches.
        """
        if rule_name in self._rules:
            return self._rules[rule_name]
        suffix = f"/{rule_name}"
        for key, rule in self._rules.items():
            if key.endswith(suffix):
                return rule
        return None

    def get_all_rules(self) -> list[ValidationRule]:
        """All rules, in plugin then declaration order."""
        return list(self._rules.values())

    def get_all_rule_names(self) -> list[str]:
        return list(self._rules.keys())

    def items(self) -> list[tuple[str, ValidationRule]]:
        """``(qualified key, rule)`` pairs in registration order."""
        return list(self._rules.items())

    def clear(self) -> None:
        """Remove all plugins and rules (for testing)."""
        self._plugins.clear()
        self._rules.clear()

    def __contains__(self, plugin_name: object) -> bool:
        return plugin_name in self._plugins

    def __len__(self) -> int:
        return len(self._rules)


validator_registry = ValidatorRegistry()
