"""Track matching engine.

- `project`: linear projection of a track across the boundary plane
- `FiducialFilter`: admissibility of upstream and downstream tracks
- `CompatibilityScorer`: score of a (downstream, upstream) pair
- `CandidateGenerator`: one candidate pool per upstream source
- `select`: greedy unique assignment within a pool
- `TrackMatcher`: per-event entry point
"""

from .fiducial import FiducialFilter
from .generator import CandidateGenerator
from .matcher import TrackMatcher
from .projector import extrapolate_to_plane, project
from .scorer import CompatibilityScorer
from .selector import select
