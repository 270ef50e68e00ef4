"""Numba-accelerated numerical routines."""

from .angle import angle, planar_angles, track_angles
