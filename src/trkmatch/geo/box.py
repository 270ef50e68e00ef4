"""Axis-aligned fiducial volume."""

from dataclasses import dataclass
from typing import Sequence

import numpy as np

__all__ = ["Box"]


@dataclass
class Box:
    """Axis-aligned box used as the fiducial volume of one subsystem.

    Attributes
    ----------
    boundaries : np.ndarray
        (3, 2) Lower and upper bound along each axis, in cm
    """

    boundaries: np.ndarray

    def __init__(self, lower: Sequence[float], upper: Sequence[float]):
        """Builds the box from its two opposite corners.

        Parameters
        ----------
        lower : np.ndarray
            (3) Lower bound along each axis
        upper : np.ndarray
            (3) Upper bound along each axis
        """
        lower = np.asarray(lower, dtype=np.float64)
        upper = np.asarray(upper, dtype=np.float64)
        if lower.shape != (3,) or upper.shape != (3,):
            raise ValueError("Box boundaries must be provided as two 3-vectors.")
        if np.any(upper <= lower):
            raise ValueError(
                f"Box upper bounds {upper} must exceed its lower bounds {lower}."
            )

        self.boundaries = np.stack((lower, upper), axis=1)

    @property
    def lower(self) -> np.ndarray:
        """(3) Lower bound along each axis."""
        return self.boundaries[:, 0]

    @property
    def upper(self) -> np.ndarray:
        """(3) Upper bound along each axis."""
        return self.boundaries[:, 1]

    @property
    def center(self) -> np.ndarray:
        """(3) Center of the box."""
        return self.boundaries.mean(axis=1)

    @property
    def dimensions(self) -> np.ndarray:
        """(3) Extent of the box along each axis."""
        return self.upper - self.lower

    def contains(self, point: np.ndarray, axes: Sequence[int] = (0, 1, 2)) -> bool:
        """Checks whether a point lies strictly inside the box.

        Points which sit exactly on a boundary are outside. Non-finite
        coordinates are always outside.

        Parameters
        ----------
        point : np.ndarray
            Coordinates of the point, either one per axis in `axes` or a
            full (3) point
        axes : List[int], default (0, 1, 2)
            Axes along which to check containment

        Returns
        -------
        bool
            `True` if the point is strictly inside along all requested axes
        """
        axes = list(axes)
        point = np.asarray(point, dtype=np.float64)
        if len(point) != len(axes):
            point = point[axes]

        inside = (point > self.lower[axes]) & (point < self.upper[axes])

        return bool(inside.all())
