"""Sets up fixtures general to the entire test suite of this package.

This file is read during the collection phase of pytest when running anything
inside this directory.

The tests use a simple geometry with round numbers so that projections can be
computed by hand:
- upstream volume: [-100, 100] x [-100, 100] x [0, 100], exit plane z = 100
- downstream volume: [-150, 150] x [-150, 150] x [200, 400], entrance z = 200
"""

import pytest

from trkmatch.data import Interaction, Track
from trkmatch.geo import MatchGeometry

GEOMETRY_CFG = {
    "upstream": {"lower": [-100.0, -100.0, 0.0], "upper": [100.0, 100.0, 100.0]},
    "downstream": {"lower": [-150.0, -150.0, 200.0], "upper": [150.0, 150.0, 400.0]},
    "name": "test",
    "tag": "test",
}


@pytest.fixture(name="geometry_cfg")
def fixture_geometry_cfg():
    """Configuration block of the test geometry."""
    return {k: (dict(v) if isinstance(v, dict) else v) for k, v in GEOMETRY_CFG.items()}


@pytest.fixture(name="geometry")
def fixture_geometry(geometry_cfg):
    """Test geometry object."""
    return MatchGeometry(**geometry_cfg)


@pytest.fixture(name="up_track")
def fixture_up_track():
    """Builds upstream tracks which end near the upstream exit plane.

    The returned function takes the end point coordinates and the end
    direction of the track. The track starts well inside the volume.
    """

    def _make(x=0.0, y=0.0, z=90.0, direction=(0.0, 0.0, 1.0), **kwargs):
        return Track(
            start=[0.0, 0.0, 10.0],
            end=[x, y, z],
            start_dir=direction,
            end_dir=direction,
            **kwargs,
        )

    return _make


@pytest.fixture(name="down_track")
def fixture_down_track():
    """Builds downstream tracks which start near the downstream entrance.

    The returned function takes the start point coordinates and the start
    direction of the track. The track ends deep inside the volume.
    """

    def _make(x=0.0, y=0.0, z=210.0, direction=(0.0, 0.0, 1.0), **kwargs):
        return Track(
            start=[x, y, z],
            end=[x, y, 350.0],
            start_dir=direction,
            end_dir=direction,
            **kwargs,
        )

    return _make


@pytest.fixture(name="interactions")
def fixture_interactions():
    """Groups lists of tracks into interactions, one list per interaction."""

    def _make(*track_lists):
        return [Interaction(id=i, tracks=list(t)) for i, t in enumerate(track_lists)]

    return _make
