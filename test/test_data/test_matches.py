"""Tests for the match bookkeeping data classes."""

import numpy as np

from trkmatch.data import (
    MatchCandidate,
    MatchCollection,
    MatchResult,
    Track,
    TrackRef,
)
from trkmatch.utils.enums import MatchTypeEnum


def make_candidate(uses_time=False, is_scored=True, with_tracks=True):
    """Builds a candidate between two simple tracks."""
    down = Track(
        start=[0.0, 0.0, 210.0],
        end=[1.0, 2.0, 350.0],
        start_dir=[0.0, 0.0, 1.0],
        end_dir=[0.0, 0.1, 1.0],
        time=12.0,
        visible_energy=50.0,
    )
    up = Track(
        start=[3.0, 4.0, 10.0],
        end=[0.0, 0.0, 90.0],
        start_dir=[0.1, 0.0, 1.0],
        end_dir=[0.0, 0.0, 1.0],
        time=100.0,
        visible_energy=25.0,
    )

    return MatchCandidate(
        down_ref=TrackRef(0, 1, -1),
        up_ref=TrackRef(2, 3, 0),
        score=1.5,
        transverse_displacement=2.0,
        angular_displacement_cosine=0.99,
        uses_time=uses_time,
        is_scored=is_scored,
        down_track=down if with_tracks else None,
        up_track=up if with_tracks else None,
    )


class TestTrackRef:
    """Test the track references."""

    def test_equality(self):
        """References are equal iff all three fields match."""
        assert TrackRef(0, 1, 0) == TrackRef(0, 1, 0)
        assert TrackRef(0, 1, 0) != TrackRef(0, 1, 1)
        assert TrackRef(0, 1, 0) != TrackRef(1, 1, 0)
        assert TrackRef(0, 1, 0) != TrackRef(0, 2, 0)

    def test_hashable(self):
        """References can key sets."""
        claimed = {TrackRef(0, 1, 0), TrackRef(0, 1, 0), TrackRef(0, 1, 1)}

        assert len(claimed) == 2

    def test_str(self):
        """References print with their source name."""
        assert str(TrackRef(0, 1, 0)) == "pandora[0][1]"
        assert str(TrackRef(2, 0, -1)) == "downstream[2][0]"
        assert str(TrackRef(0, 0, 9)) == "9[0][0]"


class TestMatchResult:
    """Test the accepted match data class."""

    def test_from_candidate(self):
        """Matches copy the candidate quantities."""
        match = MatchResult.from_candidate(make_candidate())

        assert match.down_ref == TrackRef(0, 1, -1)
        assert match.up_ref == TrackRef(2, 3, 0)
        assert match.score == 1.5
        assert match.transverse_displacement == 2.0
        assert match.angular_displacement_cosine == 0.99
        assert match.match_type == MatchTypeEnum.UNIQUE_NO_TIME

    def test_match_type(self):
        """Time-matched candidates produce the time match type."""
        match = MatchResult.from_candidate(make_candidate(uses_time=True))

        assert match.match_type == MatchTypeEnum.UNIQUE_WITH_TIME
        assert match.is_scored

    def test_unscored_match_type(self):
        """Candidates whose time term failed keep the flag and no time type."""
        match = MatchResult.from_candidate(
            make_candidate(uses_time=True, is_scored=False)
        )

        assert not match.is_scored
        assert match.match_type == MatchTypeEnum.UNIQUE_NO_TIME
        assert match.scalar_dict()["is_scored"] is False

    def test_joint_track(self):
        """The joint track spans from the upstream start to the downstream end."""
        cand = make_candidate()
        track = MatchResult.from_candidate(cand).track

        np.testing.assert_array_equal(track.start, cand.up_track.start)
        np.testing.assert_array_equal(track.start_dir, cand.up_track.start_dir)
        np.testing.assert_array_equal(track.end, cand.down_track.end)
        np.testing.assert_array_equal(track.end_dir, cand.down_track.end_dir)
        assert track.time == 12.0
        assert track.visible_energy == 75.0

        # The joint track does not share memory with its inputs
        track.start[0] = -1.0
        assert cand.up_track.start[0] == 3.0

    def test_joint_energy_unset(self):
        """The joint visible energy stays unset if either input is unset."""
        cand = make_candidate()
        cand.up_track.visible_energy = -1.0
        assert MatchResult.joint_track(cand.down_track, cand.up_track).visible_energy == -1.0

        cand.down_track.visible_energy = -1.0
        assert MatchResult.joint_track(cand.down_track, cand.up_track).visible_energy == -1.0

    def test_no_tracks(self):
        """Candidates without tracks produce no joint track."""
        match = MatchResult.from_candidate(make_candidate(with_tracks=False))

        assert match.track is None

    def test_scalar_dict(self):
        """References and the joint track are flattened with a prefix."""
        scalars = MatchResult.from_candidate(make_candidate()).scalar_dict()

        assert scalars["down_ref_ixn"] == 0
        assert scalars["down_ref_idx"] == 1
        assert scalars["down_ref_source"] == -1
        assert scalars["up_ref_ixn"] == 2
        assert scalars["up_ref_source"] == 0
        assert scalars["score"] == 1.5
        assert scalars["match_type"] == MatchTypeEnum.UNIQUE_NO_TIME
        assert scalars["is_scored"] is True
        assert scalars["track_start_x"] == 3.0
        assert scalars["track_end_z"] == 350.0
        assert not any(k.startswith("track_truth") for k in scalars)

    def test_str(self):
        """Matches print both references."""
        string = str(MatchResult.from_candidate(make_candidate()))

        assert "downstream[0][1]" in string
        assert "pandora[2][3]" in string


class TestMatchCollection:
    """Test the match output collection."""

    def test_append(self):
        """Appending keeps the count in sync."""
        output = MatchCollection()
        output.append(MatchResult.from_candidate(make_candidate()))
        output.extend([MatchResult.from_candidate(make_candidate())] * 2)

        assert output.num_matches == 3
        assert len(output) == 3
        assert output[0].score == 1.5
        assert len(list(output)) == 3

    def test_from_source(self):
        """Matches can be filtered by upstream source."""
        output = MatchCollection()
        output.append(MatchResult(up_ref=TrackRef(0, 0, 0)))
        output.append(MatchResult(up_ref=TrackRef(0, 0, 1)))
        output.append(MatchResult(up_ref=TrackRef(0, 1, 1)))

        assert len(output.from_source(0)) == 1
        assert len(output.from_source(1)) == 2
