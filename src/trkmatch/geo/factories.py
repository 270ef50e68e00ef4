"""Construct a geometry object from its name or from a configuration block."""

from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .base import MatchGeometry

# Get config directory relative to this module
GEO_CONFIG_DIR = Path(__file__).parent / "config"

__all__ = ["geo_dict", "geo_factory"]


def geo_dict() -> Dict[Path, Dict[str, str]]:
    """Builds a dictionary of available geometry files.

    Returns
    -------
    dict
        Dictionary which maps geometry file paths to their name, tag, version
    """
    options = {}
    for path in GEO_CONFIG_DIR.glob("*/*_geometry.yaml"):
        with open(path, "r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f)

        options[path] = {k: cfg[k] for k in ("name", "tag", "version")}
        options[path]["version"] = str(float(options[path]["version"]))

    return options


def geo_factory(
    detector: Optional[str] = None,
    tag: Optional[str] = None,
    version: Optional[Union[str, int, float]] = None,
    geometry: Optional[Dict[str, Any]] = None,
) -> MatchGeometry:
    """Instantiates a geometry object from a detector name or a
    configuration block.

    Parameters
    ----------
    detector : str, optional
        Name of the detector pair (e.g. "ndlar_tms")
    tag : str, optional
        Geometry tag. If not specified, the most recent version is used.
    version : str, optional
        Geometry version (e.g. "1", "1.0")
    geometry : dict, optional
        Explicit geometry configuration, used instead of a packaged file

    Returns
    -------
    MatchGeometry
         Initialized geometry object
    """
    # If an explicit configuration is provided, use it
    if geometry is not None:
        if detector is not None:
            raise ValueError("Specify one of `detector` or `geometry`, not both.")
        return MatchGeometry(**geometry)

    if detector is None:
        raise ValueError("Must specify one of `detector` or `geometry`.")

    # Find the geometry files that match the requested detector
    options = geo_dict()
    paths, tags, versions = [], [], []
    for path, cfg in options.items():
        if cfg["name"].lower() == detector.lower():
            paths.append(path)
            tags.append(cfg["tag"])
            versions.append(cfg["version"])

    if len(paths) == 0:
        raise ValueError(f"No geometry found for detector '{detector}'.")

    # If a tag is specified, must find the exact tag or throw
    if tag is not None:
        if tag not in tags:
            raise ValueError(
                f"No geometry found for detector '{detector}' with tag '{tag}'. "
                f"Available tags are: {set(tags)}"
            )
        file_path = paths[tags.index(tag)]

    # If a version is specified, it must match the major (and minor) revision
    elif version is not None:
        version_parts = str(version).split(".")
        file_path = None
        for path, ver in zip(paths, versions):
            if ver.split(".")[: len(version_parts)] == version_parts:
                file_path = path
                break

        if file_path is None:
            raise ValueError(
                f"No geometry found for detector '{detector}' with version "
                f"'{version}'. Available versions are: {set(versions)}"
            )

    # If no tag or version is specified, return the most recent version
    else:
        file_path = paths[versions.index(max(versions, key=float))]

    # Parse configuration file as a dictionary
    with open(file_path, "r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f)

    return MatchGeometry(**cfg)
