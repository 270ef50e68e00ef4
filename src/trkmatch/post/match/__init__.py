"""Cross-subsystem track matching post-processors."""

from .track_match import *
