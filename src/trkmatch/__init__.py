"""Unique matching of tracks across the boundary of two detector subsystems."""

from .data import Interaction, MatchCollection, MatchResult, Track, Trigger
from .driver import Driver
from .match import TrackMatcher
from .version import __version__
