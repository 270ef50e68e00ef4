"""Configuration loading functions.

The configuration language is plain YAML with three top-level directives:

.. code-block:: yaml

    include: [base.yaml]                   # Merged first, in order
    override:
      post.track_match.score_cutoff: 50    # Dot-notation override
    remove: post.track_match.mean_t        # Key deletion

Includes are resolved relative to the including file and may be nested.
"""

import os
from typing import Any, Dict, List, Optional

import yaml

from .errors import ConfigCycleError, ConfigIncludeError
from .operations import apply_overrides, deep_merge, extract_includes_and_overrides

__all__ = ["load_config", "load_config_file"]


def _read_yaml(cfg_path: str) -> Any:
    """Parses one YAML file, wrapping failures in a configuration error.

    Parameters
    ----------
    cfg_path : str
        Path to the YAML file

    Returns
    -------
    Any
        Parsed content
    """
    try:
        with open(cfg_path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f)

    except FileNotFoundError as err:
        raise ConfigIncludeError(f"Configuration file not found: {cfg_path}") from err

    except yaml.YAMLError as err:
        raise ConfigIncludeError(f"Could not parse {cfg_path}: {err}") from err


def _resolve(content: Any, root_dir: str, stack: List[str]) -> Dict[str, Any]:
    """Resolves the directives of one parsed configuration block.

    Parameters
    ----------
    content : Any
        Parsed YAML content
    root_dir : str
        Directory against which relative includes are resolved
    stack : List[str]
        Files currently being loaded, outermost first

    Returns
    -------
    Dict[str, Any]
        Fully resolved configuration
    """
    if content is None:
        return {}

    includes, overrides, removals, content = extract_includes_and_overrides(content)

    # Included files are merged depth-first, in order, then the block itself
    config = {}
    for include in includes:
        path = include if os.path.isabs(include) else os.path.join(root_dir, include)
        config = deep_merge(config, _load_file(path, stack))

    config = deep_merge(config, content)

    return apply_overrides(config, overrides, removals)


def _load_file(cfg_path: str, stack: List[str]) -> Dict[str, Any]:
    """Loads one configuration file, checking for circular includes.

    Parameters
    ----------
    cfg_path : str
        Path to the configuration file
    stack : List[str]
        Files currently being loaded, outermost first

    Returns
    -------
    Dict[str, Any]
        Fully resolved configuration
    """
    cfg_path = os.path.abspath(cfg_path)
    if cfg_path in stack:
        raise ConfigCycleError(stack + [cfg_path])

    content = _read_yaml(cfg_path)

    return _resolve(content, os.path.dirname(cfg_path), stack + [cfg_path])


def load_config(config_string: str, root_dir: Optional[str] = None) -> Dict[str, Any]:
    """Load a configuration from a YAML string.

    Parameters
    ----------
    config_string : str
        YAML configuration string
    root_dir : str, optional
        Directory used to resolve relative includes (default: cwd)

    Returns
    -------
    Dict[str, Any]
        Configuration dictionary
    """
    try:
        content = yaml.safe_load(config_string)
    except yaml.YAMLError as err:
        raise ConfigIncludeError(f"Could not parse configuration string: {err}") from err

    return _resolve(content, root_dir or os.getcwd(), [])


def load_config_file(cfg_path: str) -> Dict[str, Any]:
    """Load a configuration from a YAML file.

    Parameters
    ----------
    cfg_path : str
        Path to the configuration file

    Returns
    -------
    Dict[str, Any]
        Configuration dictionary
    """
    return _load_file(cfg_path, [])
