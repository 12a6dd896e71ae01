"""mcp-devkit validation system.

Typical use::

    from mcp_devkit.validation import Validator, register_builtin

    register_builtin()
    summary = asyncio.run(Validator().validate_project("."))
"""

from mcp_devkit.validation.options import ConfigError, ValidationOptions
from mcp_devkit.validation.plugin import BuiltinValidatorPlugin, builtin_plugin, register_builtin
from mcp_devkit.validation.registry import RegistryError, ValidatorRegistry, validator_registry
from mcp_devkit.validation.validator import Validator, run_validation

__all__ = [
    "BuiltinValidatorPlugin",
    "ConfigError",
    "RegistryError",
    "ValidationOptions",
    "Validator",
    "ValidatorRegistry",
    "builtin_plugin",
    "register_builtin",
    "run_validation",
    "validator_registry",
]
