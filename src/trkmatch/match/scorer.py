"""Compatibility score of a (downstream, upstream) track pair."""

import numpy as np

from trkmatch.data import MatchCandidate
from trkmatch.math import track_angles
from trkmatch.utils.enums import UnscoredPolicyEnum, enum_factory
from trkmatch.utils.logger import logger

from .projector import project

__all__ = ["CompatibilityScorer"]


class CompatibilityScorer:
    """Scores how compatible a downstream track is with the continuation of
    an upstream track across the boundary plane.

    The score is a sum of squared normalized residuals (lower is better):

    - transverse displacement in x and y between the downstream track start
      and the forward projection of the upstream track;
    - angle between the downstream start direction and the upstream end
      direction, either as one overall 3D angle or as two planar angles
      (x-z and y-z);
    - optionally, the residual between the upstream true particle time and
      the downstream track time.

    When the time term is requested but the upstream track truth cannot be
    resolved, the candidate is flagged as unscored (`is_scored=False`). The
    `unscored_policy` decides what happens to it:

    - 'exclude': its score is set to infinity, it can never be selected;
    - 'base': it keeps its score without the time term.
    """

    def __init__(
        self,
        geometry,
        sigma_x,
        sigma_y,
        single_angle=True,
        sigma_angle=None,
        sigma_angle_x=None,
        sigma_angle_y=None,
        use_time=False,
        mean_t=0.0,
        sigma_t=None,
        unscored_policy="exclude",
    ):
        """Initialize the scorer.

        Parameters
        ----------
        geometry : MatchGeometry
            Geometry which provides the boundary planes
        sigma_x : float
            Tolerance on the transverse displacement along x, in cm
        sigma_y : float
            Tolerance on the transverse displacement along y, in cm
        single_angle : bool, default True
            If `True`, use the overall 3D angle. If `False`, use the x-z and
            y-z planar angles separately.
        sigma_angle : float, optional
            Tolerance on the overall angle, in degrees (single-angle mode)
        sigma_angle_x : float, optional
            Tolerance on the x-z angle, in degrees (two-angle mode)
        sigma_angle_y : float, optional
            Tolerance on the y-z angle, in degrees (two-angle mode)
        use_time : bool, default False
            Whether to include the timing term
        mean_t : float, default 0.
            Expected time difference between the two tracks, in ns
        sigma_t : float, optional
            Tolerance on the time difference, in ns (required with `use_time`)
        unscored_policy : str, default 'exclude'
            How to handle candidates which cannot be time-scored, one of
            'exclude' or 'base'
        """
        # Check that the required tolerances are provided and positive
        required = {"sigma_x": sigma_x, "sigma_y": sigma_y}
        if single_angle:
            required["sigma_angle"] = sigma_angle
        else:
            required["sigma_angle_x"] = sigma_angle_x
            required["sigma_angle_y"] = sigma_angle_y
        if use_time:
            required["sigma_t"] = sigma_t

        for key, value in required.items():
            if value is None or not value > 0:
                raise ValueError(
                    f"The `{key}` tolerance must be a positive number, got {value}."
                )

        # Store the parameters
        self.geo = geometry
        self.sigma_x = sigma_x
        self.sigma_y = sigma_y
        self.single_angle = single_angle
        self.sigma_angle = sigma_angle
        self.sigma_angle_x = sigma_angle_x
        self.sigma_angle_y = sigma_angle_y
        self.use_time = use_time
        self.mean_t = mean_t
        self.sigma_t = sigma_t
        if isinstance(unscored_policy, str):
            unscored_policy = enum_factory("unscored", unscored_policy)
        self.unscored_policy = UnscoredPolicyEnum(unscored_policy)

    def base_score(self, dx, dy, angles):
        """Computes the score without the timing term.

        Parameters
        ----------
        dx : float
            Displacement along x, in cm
        dy : float
            Displacement along y, in cm
        angles : np.ndarray
            (3) x-z angle, y-z angle and overall angle, in degrees

        Returns
        -------
        float
            Base score
        """
        score = (dx / self.sigma_x) ** 2 + (dy / self.sigma_y) ** 2
        if self.single_angle:
            score += (angles[2] / self.sigma_angle) ** 2
        else:
            score += (angles[0] / self.sigma_angle_x) ** 2
            score += (angles[1] / self.sigma_angle_y) ** 2

        return float(score)

    def time_residual(self, down_track, up_track, trigger, truth):
        """Computes the time difference between the upstream true particle
        and the downstream track.

        The upstream time is taken from the true particle which contributes
        the largest fraction of the upstream track, relative to the trigger.

        Parameters
        ----------
        down_track : Track
            Downstream track
        up_track : Track
            Upstream track
        trigger : Trigger
            Trigger which provides the time offset
        truth : object
            Truth resolver which provides a `resolve(track)` method returning
            the leading true particle, or `None` if it cannot be found

        Returns
        -------
        float
            Time difference in ns, or `None` if the truth lookup failed
        """
        particle = truth.resolve(up_track)
        if particle is None:
            return None

        up_time = particle.time - trigger.offset_ns

        return up_time - down_track.time

    def score(self, down_track, up_track, down_ref, up_ref, trigger=None, truth=None):
        """Scores one (downstream, upstream) track pair.

        Parameters
        ----------
        down_track : Track
            Downstream track
        up_track : Track
            Upstream track
        down_ref : TrackRef
            Reference to the downstream track
        up_ref : TrackRef
            Reference to the upstream track
        trigger : Trigger, optional
            Trigger information (required with `use_time`)
        truth : object, optional
            Truth resolver (required with `use_time`)

        Returns
        -------
        MatchCandidate
            Scored candidate
        """
        # Transverse displacement in the downstream entrance plane
        proj = project(up_track, "forward", self.geo)
        dx = down_track.start[0] - proj[0]
        dy = down_track.start[1] - proj[1]

        # Angles between the two track directions
        angles = track_angles(
            np.ascontiguousarray(down_track.start_dir, dtype=np.float64),
            np.ascontiguousarray(up_track.end_dir, dtype=np.float64),
        )

        score = self.base_score(dx, dy, angles)
        is_scored = bool(np.isfinite(score))
        if not is_scored:
            logger.debug(
                "Could not score candidate (%s, %s): degenerate geometry.",
                down_ref,
                up_ref,
            )
            score = np.inf

        # Add the time residual, if requested
        if self.use_time and is_scored:
            dt = self.time_residual(down_track, up_track, trigger, truth)
            if dt is not None:
                score += ((dt - self.mean_t) / self.sigma_t) ** 2
            else:
                logger.debug(
                    "Could not resolve the truth of %s: candidate (%s, %s) "
                    "is unscored.",
                    up_ref,
                    down_ref,
                    up_ref,
                )
                is_scored = False
                if self.unscored_policy == UnscoredPolicyEnum.EXCLUDE:
                    score = np.inf

        return MatchCandidate(
            down_ref=down_ref,
            up_ref=up_ref,
            score=float(score),
            transverse_displacement=float(np.sqrt(dx**2 + dy**2)),
            angular_displacement_cosine=float(np.cos(np.radians(angles[2]))),
            uses_time=self.use_time,
            is_scored=is_scored,
            down_track=down_track,
            up_track=up_track,
        )
