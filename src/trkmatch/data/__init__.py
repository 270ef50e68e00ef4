"""Data structures consumed and produced by the track matching engine.

- `Track`, `Interaction`: reconstructed inputs from either subsystem
- `Trigger`: trigger timing information
- `Particle`: true particle information used for time matching
- `TrackRef`, `MatchCandidate`, `MatchResult`, `MatchCollection`: matching
  bookkeeping and output
"""

from .match import *
from .particle import *
from .track import *
from .trigger import *
