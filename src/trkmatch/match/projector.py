"""Linear extrapolation of track endpoints across the boundary plane."""

import numpy as np

from trkmatch.utils.enums import ProjectionEnum, enum_factory
from trkmatch.utils.logger import logger

__all__ = ["extrapolate_to_plane", "project"]


def extrapolate_to_plane(point, direction, z_plane):
    """Extrapolates a point along a direction to a plane of constant z.

    Parameters
    ----------
    point : np.ndarray
        (3) Reference point
    direction : np.ndarray
        (3) Direction of travel (need not be normalized)
    z_plane : float
        Position of the target plane along z

    Returns
    -------
    np.ndarray
        (3) Intercept with the plane. If the direction is parallel to the
        plane (or has a non-finite z component), the transverse coordinates
        are set to `-inf`, which places the point outside of any volume.
    """
    dir_z = direction[2]
    if dir_z == 0.0 or not np.isfinite(dir_z):
        logger.debug(
            "Cannot project direction %s onto the z=%.2f plane.", direction, z_plane
        )
        return np.array([-np.inf, -np.inf, z_plane])

    scale = (z_plane - point[2]) / dir_z

    return np.array(
        [point[0] + direction[0] * scale, point[1] + direction[1] * scale, z_plane]
    )


def project(track, direction, geometry):
    """Projects a track onto the boundary plane on the other side.

    - `forward`: extrapolates the track end point along its end direction
      to the downstream entrance plane. Used to check whether an upstream
      track would continue into the downstream volume.
    - `backward`: extrapolates the track start point along its start
      direction, reversed, to the upstream exit plane. Used to check whether
      a downstream track could originate from the upstream volume.

    In both cases, with `dz` the distance travelled along z from the
    reference point to the plane and `sign` +1 (forward) or -1 (backward),
    `x' = x + sign * dir_x * dz / dir_z` (same for y).

    Parameters
    ----------
    track : Track
        Track to project
    direction : Union[str, ProjectionEnum]
        Projection direction, one of 'forward' or 'backward'
    geometry : MatchGeometry
        Geometry which provides the boundary planes

    Returns
    -------
    np.ndarray
        (3) Projected point. The z coordinate is that of the target plane.
    """
    if isinstance(direction, str):
        direction = enum_factory("projection", direction)

    if direction == ProjectionEnum.FORWARD:
        return extrapolate_to_plane(track.end, track.end_dir, geometry.down_entrance_z)

    elif direction == ProjectionEnum.BACKWARD:
        return extrapolate_to_plane(track.start, track.start_dir, geometry.up_exit_z)

    raise ValueError(
        f"Projection direction not recognized: {direction}. Must be one of "
        f"{[e.name.lower() for e in ProjectionEnum]}."
    )
