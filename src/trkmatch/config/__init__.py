"""Configuration loading system.

Provides YAML configuration loading with:
- Hierarchical file includes with cycle detection
- Override semantics with dot-notation
- Key removal directives
"""

from .errors import (
    ConfigCycleError,
    ConfigError,
    ConfigIncludeError,
    ConfigOperationError,
    ConfigPathError,
    ConfigTypeError,
)
from .load import load_config, load_config_file
from .operations import parse_value, set_nested_value

__all__ = [
    "load_config",
    "load_config_file",
    "parse_value",
    "set_nested_value",
    "ConfigError",
    "ConfigIncludeError",
    "ConfigCycleError",
    "ConfigPathError",
    "ConfigTypeError",
    "ConfigOperationError",
]
