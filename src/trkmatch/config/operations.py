"""Helpers used to combine configuration blocks.

- `deep_merge`: recursive merge of two blocks
- `parse_value`: YAML parsing of values provided as strings
- `set_nested_value`: dot-notation assignment or deletion
- `extract_includes_and_overrides`: splits the directives from the content
- `apply_overrides`: applies the `remove` then `override` directives
"""

from copy import deepcopy
from typing import Any, Dict, List, Tuple

import yaml

from .errors import ConfigOperationError, ConfigPathError, ConfigTypeError

__all__ = [
    "deep_merge",
    "parse_value",
    "set_nested_value",
    "extract_includes_and_overrides",
    "apply_overrides",
]

# Top-level keys interpreted as directives rather than content
DIRECTIVES = ("include", "override", "remove")


def deep_merge(base: Dict[str, Any], update: Dict[str, Any]) -> Dict[str, Any]:
    """Merges a configuration block into another one.

    Nested blocks present in both are merged key by key, any other value in
    `update` replaces the one in `base`. Neither input is modified.

    Parameters
    ----------
    base : Dict[str, Any]
        Block to merge into
    update : Dict[str, Any]
        Block which takes precedence

    Returns
    -------
    Dict[str, Any]
        Merged block
    """
    merged = deepcopy(base)
    for key, value in update.items():
        if isinstance(merged.get(key), dict) and isinstance(value, dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = deepcopy(value)

    return merged


def parse_value(value: Any) -> Any:
    """Interprets a string as a YAML value (number, boolean, list, etc.).

    Non-string inputs, blank strings and strings which are not valid YAML
    are returned as is.

    Parameters
    ----------
    value : Any
        Value to interpret

    Returns
    -------
    Any
        Interpreted value
    """
    if isinstance(value, str) and value.strip():
        try:
            return yaml.safe_load(value)
        except yaml.YAMLError:
            pass

    return value


def set_nested_value(
    config: Dict[str, Any], key_path: str, value: Any, delete: bool = False
) -> Dict[str, Any]:
    """Sets (or deletes) the value found at a dot-separated key path.

    Missing intermediate blocks are created when setting a value.

    Parameters
    ----------
    config : Dict[str, Any]
        Configuration, modified in place
    key_path : str
        Dot-separated path (e.g. "post.track_match.score_cutoff")
    value : Any
        Value to set (ignored when deleting)
    delete : bool, default False
        If `True`, remove the key instead of setting it

    Returns
    -------
    Dict[str, Any]
        Modified configuration
    """
    *parents, leaf = key_path.split(".")
    block = config
    for depth, key in enumerate(parents):
        if key not in block:
            if delete:
                missing = ".".join(parents[: depth + 1])
                raise ConfigPathError(
                    f"Cannot delete '{key_path}': '{missing}' does not exist."
                )
            block[key] = {}

        block = block[key]
        if not isinstance(block, dict):
            raise ConfigTypeError(
                f"Cannot reach '{key_path}': '{key}' is not a block."
            )

    if not delete:
        block[leaf] = value
    elif leaf in block:
        del block[leaf]
    else:
        raise ConfigPathError(f"Cannot delete '{key_path}': key does not exist.")

    return config


def _as_path_list(name: str, value: Any) -> List[str]:
    """Normalizes a directive which accepts one or several key paths."""
    if isinstance(value, str):
        return [value]
    if isinstance(value, list):
        return list(value)

    raise ConfigOperationError(
        f"'{name}' must be a string or a list of strings, got {type(value)}."
    )


def extract_includes_and_overrides(
    config: Any,
) -> Tuple[List[str], Dict[str, Any], List[str], Any]:
    """Separates the loading directives from the content of a block.

    Parameters
    ----------
    config : Any
        Parsed YAML content

    Returns
    -------
    List[str]
        Files to include
    Dict[str, Any]
        Dot-notation overrides
    List[str]
        Key paths to remove
    Any
        Content stripped of its directives
    """
    if not isinstance(config, dict):
        return [], {}, [], config

    content = {k: v for k, v in config.items() if k not in DIRECTIVES}
    includes = _as_path_list("include", config.get("include", []))
    removals = _as_path_list("remove", config.get("remove", []))

    overrides = config.get("override", {})
    if not isinstance(overrides, dict):
        raise ConfigOperationError(
            f"'override' must be a dictionary, got {type(overrides)}."
        )

    return includes, overrides, removals, content


def apply_overrides(
    config: Dict[str, Any], overrides: Dict[str, Any], removals: List[str]
) -> Dict[str, Any]:
    """Removes keys, then applies dot-notation overrides.

    Parameters
    ----------
    config : Dict[str, Any]
        Configuration, modified in place
    overrides : Dict[str, Any]
        Maps key paths onto their new value
    removals : List[str]
        Key paths to delete

    Returns
    -------
    Dict[str, Any]
        Modified configuration
    """
    for key_path in removals:
        set_nested_value(config, key_path, None, delete=True)

    for key_path, value in overrides.items():
        set_nested_value(config, key_path, parse_value(value))

    return config
