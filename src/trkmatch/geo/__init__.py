"""Geometry of the two subsystems on either side of the boundary plane."""

from .base import MatchGeometry
from .box import Box
from .factories import geo_factory

__all__ = ["Box", "MatchGeometry", "geo_factory"]
