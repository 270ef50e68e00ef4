"""Test the compatibility score of (downstream, upstream) track pairs."""

import numpy as np
import pytest

from trkmatch.data import Particle, TrackRef, Trigger
from trkmatch.match import CompatibilityScorer
from trkmatch.utils.truth import TruthResolver

DOWN_REF = TrackRef(0, 0, -1)
UP_REF = TrackRef(0, 0, 0)


@pytest.fixture(name="scorer")
def fixture_scorer(geometry):
    """Single-angle scorer without the time term."""
    return CompatibilityScorer(geometry, sigma_x=10.0, sigma_y=10.0, sigma_angle=5.0)


@pytest.fixture(name="time_inputs")
def fixture_time_inputs():
    """Trigger and truth resolver used for the time term.

    The trigger sits at 1 s + 500 ns. Particle 7 was created 30 ns after it.
    """
    trigger = Trigger(time_s=1, time_ns=500)
    particles = [
        Particle(id=3, time=0.0),
        Particle(id=7, time=1e9 + 530.0),
    ]

    return trigger, TruthResolver(particles)


def score(scorer, down, up, trigger=None, truth=None):
    """Shorthand to score one pair with dummy references."""
    return scorer.score(down, up, DOWN_REF, UP_REF, trigger, truth)


class TestBaseScore:
    """Spatial and angular terms of the score."""

    def test_aligned(self, scorer, down_track, up_track):
        """A perfectly aligned pair scores zero."""
        cand = score(scorer, down_track(), up_track())

        assert cand.score == 0.0
        assert cand.is_scored
        assert not cand.uses_time
        assert cand.transverse_displacement == 0.0
        assert cand.angular_displacement_cosine == pytest.approx(1.0)
        assert cand.down_ref == DOWN_REF and cand.up_ref == UP_REF

    def test_displacement(self, scorer, down_track, up_track):
        """The score grows with the displacement, irrespective of its sign."""
        up = up_track()
        score_pos = score(scorer, down_track(x=5.0), up).score
        score_neg = score(scorer, down_track(x=-5.0), up).score
        score_far = score(scorer, down_track(x=10.0), up).score

        assert score_pos == pytest.approx(0.25)
        assert score_neg == pytest.approx(score_pos)
        assert score_far == pytest.approx(1.0)
        assert score_far > score_pos

    def test_transverse_displacement(self, scorer, down_track, up_track):
        """The transverse displacement is the distance in the plane."""
        cand = score(scorer, down_track(x=3.0, y=-4.0), up_track())

        assert cand.transverse_displacement == pytest.approx(5.0)
        assert cand.score == pytest.approx(0.25)

    def test_single_angle(self, scorer, down_track, up_track):
        """The single-angle mode uses the overall 3D angle."""
        cand = score(scorer, down_track(direction=(1.0, 1.0, 1.0)), up_track())
        angle = np.degrees(np.arccos(1.0 / np.sqrt(3.0)))

        assert cand.score == pytest.approx((angle / 5.0) ** 2)
        assert cand.angular_displacement_cosine == pytest.approx(1.0 / np.sqrt(3.0))

    def test_two_angles(self, geometry, down_track, up_track):
        """The two-angle mode uses the x-z and y-z angles separately."""
        scorer = CompatibilityScorer(
            geometry,
            sigma_x=10.0,
            sigma_y=10.0,
            single_angle=False,
            sigma_angle_x=5.0,
            sigma_angle_y=10.0,
        )
        cand = score(scorer, down_track(direction=(1.0, 1.0, 1.0)), up_track())

        # Both planar angles are 45 degrees
        assert cand.score == pytest.approx((45.0 / 5.0) ** 2 + (45.0 / 10.0) ** 2)

        # The cosine always refers to the overall angle
        assert cand.angular_displacement_cosine == pytest.approx(1.0 / np.sqrt(3.0))

    def test_direction_scale(self, scorer, down_track, up_track):
        """Direction norms do not affect the angular term."""
        cand_a = score(scorer, down_track(direction=(1.0, 0.0, 2.0)), up_track())
        cand_b = score(scorer, down_track(direction=(5.0, 0.0, 10.0)), up_track())

        assert cand_a.score == pytest.approx(cand_b.score)

    def test_degenerate_direction(self, scorer, down_track, up_track):
        """A zero-length direction cannot be scored."""
        cand = score(scorer, down_track(direction=(0.0, 0.0, 0.0)), up_track())

        assert not cand.is_scored
        assert cand.score == np.inf


class TestTimeScore:
    """Time term of the score."""

    def test_time_term(self, geometry, down_track, up_track, time_inputs):
        """The time term uses the leading true particle of the upstream track."""
        scorer = CompatibilityScorer(
            geometry, 10.0, 10.0, sigma_angle=5.0, use_time=True, sigma_t=10.0
        )
        up = up_track(truth_ids=[3, 7], truth_overlap=[0.2, 0.8])
        down = down_track(time=10.0)
        cand = score(scorer, down, up, *time_inputs)

        # dt = 30 - 10 = 20 ns
        assert scorer.time_residual(down, up, *time_inputs) == pytest.approx(20.0)
        assert cand.score == pytest.approx(4.0)
        assert cand.is_scored
        assert cand.uses_time

    def test_time_offset(self, geometry, down_track, up_track, time_inputs):
        """The expected time difference is subtracted from the residual."""
        scorer = CompatibilityScorer(
            geometry, 10.0, 10.0, sigma_angle=5.0, use_time=True, mean_t=20.0, sigma_t=10.0
        )
        up = up_track(truth_ids=[7], truth_overlap=[1.0])
        cand = score(scorer, down_track(time=10.0), up, *time_inputs)

        assert cand.score == pytest.approx(0.0)

    def test_unscored_exclude(self, geometry, down_track, up_track, time_inputs):
        """Without truth, the default policy excludes the candidate."""
        scorer = CompatibilityScorer(
            geometry, 10.0, 10.0, sigma_angle=5.0, use_time=True, sigma_t=10.0
        )
        cand = score(scorer, down_track(), up_track(), *time_inputs)

        assert not cand.is_scored
        assert cand.uses_time
        assert cand.score == np.inf

    def test_unscored_base(self, geometry, down_track, up_track, time_inputs):
        """Without truth, the 'base' policy keeps the base score."""
        scorer = CompatibilityScorer(
            geometry,
            10.0,
            10.0,
            sigma_angle=5.0,
            use_time=True,
            sigma_t=10.0,
            unscored_policy="base",
        )
        cand = score(scorer, down_track(x=5.0), up_track(), *time_inputs)

        assert not cand.is_scored
        assert cand.score == pytest.approx(0.25)

    def test_unknown_particle(self, geometry, down_track, up_track, time_inputs):
        """A truth ID missing from the particle list leaves the pair unscored."""
        scorer = CompatibilityScorer(
            geometry, 10.0, 10.0, sigma_angle=5.0, use_time=True, sigma_t=10.0
        )
        up = up_track(truth_ids=[42], truth_overlap=[1.0])

        assert scorer.time_residual(down_track(), up, *time_inputs) is None
        assert score(scorer, down_track(), up, *time_inputs).score == np.inf


class TestScorerConfig:
    """Validation of the scorer configuration."""

    def test_non_positive_sigma(self, geometry):
        """Tolerances must be positive."""
        with pytest.raises(ValueError):
            CompatibilityScorer(geometry, 0.0, 10.0, sigma_angle=5.0)
        with pytest.raises(ValueError):
            CompatibilityScorer(geometry, 10.0, 10.0, sigma_angle=-1.0)

    def test_missing_angle_sigmas(self, geometry):
        """Each angular mode requires its own tolerances."""
        with pytest.raises(ValueError):
            CompatibilityScorer(geometry, 10.0, 10.0)
        with pytest.raises(ValueError):
            CompatibilityScorer(
                geometry, 10.0, 10.0, single_angle=False, sigma_angle_x=5.0
            )

    def test_missing_time_sigma(self, geometry):
        """The time term requires a time tolerance."""
        with pytest.raises(ValueError):
            CompatibilityScorer(geometry, 10.0, 10.0, sigma_angle=5.0, use_time=True)

    def test_unknown_policy(self, geometry):
        """Unknown unscored policies are rejected."""
        with pytest.raises(ValueError):
            CompatibilityScorer(
                geometry, 10.0, 10.0, sigma_angle=5.0, unscored_policy="ignore"
            )
