"""Module with the geometry of the two subsystems on either side of the
boundary plane."""

from dataclasses import dataclass
from typing import Any, Dict

from .box import Box

__all__ = ["MatchGeometry"]


@dataclass
class MatchGeometry:
    """Fiducial volumes of the upstream and downstream subsystems.

    The two volumes are axis-aligned boxes which sit one after the other
    along the z axis. The upstream volume exits through its upper z face,
    the downstream volume is entered through its lower z face.

    Attributes
    ----------
    name : str
        Name of the detector pair
    tag : str
        Tag or label for the geometry instance
    version : str
        Version number of the geometry
    upstream : Box
        Fiducial volume of the upstream subsystem
    downstream : Box
        Fiducial volume of the downstream subsystem
    """

    name: str
    tag: str
    version: str
    upstream: Box
    downstream: Box

    def __init__(
        self,
        upstream: Dict[str, Any],
        downstream: Dict[str, Any],
        name: str = "custom",
        tag: str = "custom",
        version: str = "1.0",
    ):
        """Initialize the detector geometry.

        Parameters
        ----------
        upstream : dict
            Upstream fiducial volume as a `{lower: [...], upper: [...]}` block
        downstream : dict
            Downstream fiducial volume as a `{lower: [...], upper: [...]}` block
        name : str, default 'custom'
            Name of the detector pair
        tag : str, default 'custom'
            Tag or label for the geometry instance
        version : str, default '1.0'
            Version number of the geometry
        """
        self.name = name
        self.tag = tag
        self.version = str(version)
        self.upstream = upstream if isinstance(upstream, Box) else Box(**upstream)
        self.downstream = (
            downstream if isinstance(downstream, Box) else Box(**downstream)
        )

        if self.down_entrance_z < self.up_exit_z:
            raise ValueError(
                f"The downstream volume entrance (z={self.down_entrance_z}) "
                f"must not lie before the upstream volume exit "
                f"(z={self.up_exit_z})."
            )

    @property
    def up_exit_z(self) -> float:
        """Position of the upstream exit plane along z.

        Returns
        -------
        float
            Upstream exit face z coordinate in cm
        """
        return float(self.upstream.upper[2])

    @property
    def down_entrance_z(self) -> float:
        """Position of the downstream entrance plane along z.

        Returns
        -------
        float
            Downstream entrance face z coordinate in cm
        """
        return float(self.downstream.lower[2])
