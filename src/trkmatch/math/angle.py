"""Numba JIT compiled routines to measure angles between track directions."""

import numba as nb
import numpy as np

__all__ = ["angle", "planar_angles", "track_angles"]


@nb.njit(cache=True)
def _angle_from_dot(dot: nb.float64, norm_u: nb.float64, norm_v: nb.float64) -> nb.float64:
    """Converts a dot product into an angle in degrees.

    The dot product is normalized by the product of the two vector norms
    before taking the inverse cosine. The normalized value is clipped to
    [-1, 1] to absorb rounding errors.

    Parameters
    ----------
    dot : float
        Dot product of the two vectors
    norm_u : float
        Norm of the first vector
    norm_v : float
        Norm of the second vector

    Returns
    -------
    float
        Angle in degrees, NaN if either vector has zero length
    """
    denom = norm_u * norm_v
    if denom == 0.0:
        return np.nan

    cos = dot / denom
    cos = min(1.0, max(-1.0, cos))

    return np.arccos(cos) * 180.0 / np.pi


@nb.njit(cache=True)
def angle(u: nb.float64[:], v: nb.float64[:]) -> nb.float64:
    """Overall 3D angle between two vectors.

    Parameters
    ----------
    u : np.ndarray
        (3) First vector
    v : np.ndarray
        (3) Second vector

    Returns
    -------
    float
        Angle in degrees, NaN if either vector has zero length
    """
    dot = u[0] * v[0] + u[1] * v[1] + u[2] * v[2]
    norm_u = np.sqrt(u[0] ** 2 + u[1] ** 2 + u[2] ** 2)
    norm_v = np.sqrt(v[0] ** 2 + v[1] ** 2 + v[2] ** 2)

    return _angle_from_dot(dot, norm_u, norm_v)


@nb.njit(cache=True)
def planar_angles(u: nb.float64[:], v: nb.float64[:]) -> (nb.float64, nb.float64):
    """Angles between two vectors projected onto the x-z and y-z planes.

    Each planar dot product is normalized by the norms of the projected
    vectors in that plane.

    Parameters
    ----------
    u : np.ndarray
        (3) First vector
    v : np.ndarray
        (3) Second vector

    Returns
    -------
    float
        Angle in the x-z plane, in degrees
    float
        Angle in the y-z plane, in degrees
    """
    dot_xz = u[0] * v[0] + u[2] * v[2]
    norm_u_xz = np.sqrt(u[0] ** 2 + u[2] ** 2)
    norm_v_xz = np.sqrt(v[0] ** 2 + v[2] ** 2)

    dot_yz = u[1] * v[1] + u[2] * v[2]
    norm_u_yz = np.sqrt(u[1] ** 2 + u[2] ** 2)
    norm_v_yz = np.sqrt(v[1] ** 2 + v[2] ** 2)

    return (
        _angle_from_dot(dot_xz, norm_u_xz, norm_v_xz),
        _angle_from_dot(dot_yz, norm_u_yz, norm_v_yz),
    )


@nb.njit(cache=True)
def track_angles(u: nb.float64[:], v: nb.float64[:]) -> nb.float64[:]:
    """Full set of angles between two track directions.

    Parameters
    ----------
    u : np.ndarray
        (3) First direction
    v : np.ndarray
        (3) Second direction

    Returns
    -------
    np.ndarray
        (3) x-z angle, y-z angle and overall angle, in degrees
    """
    angles = np.empty(3, dtype=np.float64)
    xz, yz = planar_angles(u, v)
    angles[0] = xz
    angles[1] = yz
    angles[2] = angle(u, v)

    return angles
