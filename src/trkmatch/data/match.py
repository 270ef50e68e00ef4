"""Module with data classes which represent track associations across the
boundary between the upstream and downstream subsystems."""

from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from trkmatch.utils.enums import MatchTypeEnum, RecoSourceEnum

from .base import DataBase
from .track import Track

__all__ = ["TrackRef", "MatchCandidate", "MatchResult", "MatchCollection"]


@dataclass(frozen=True)
class TrackRef:
    """Reference to one track of one interaction of one reconstruction source.

    Two references are equal if and only if all three fields match.

    Attributes
    ----------
    ixn : int
        Index of the interaction in its container
    idx : int
        Index of the track within the interaction
    source : int
        Reconstruction source tag (see :class:`RecoSourceEnum`)
    """

    ixn: int
    idx: int
    source: int

    def scalar_dict(self):
        """Returns the reference as a dictionary of scalars.

        Returns
        -------
        dict
            Dictionary of (field, value) pairs
        """
        return {"ixn": self.ixn, "idx": self.idx, "source": int(self.source)}

    def __str__(self):
        try:
            source = RecoSourceEnum(self.source).name.lower()
        except ValueError:
            source = str(self.source)

        return f"{source}[{self.ixn}][{self.idx}]"


@dataclass
class MatchCandidate:
    """Scored, not-yet-committed pairing of a downstream and upstream track.

    Attributes
    ----------
    down_ref : TrackRef
        Reference to the downstream track
    up_ref : TrackRef
        Reference to the upstream track
    score : float
        Compatibility score (lower is better). Infinite if the candidate is
        excluded from the selection.
    transverse_displacement : float
        Distance between the downstream start point and the projected
        upstream track in the boundary plane, in cm
    angular_displacement_cosine : float
        Cosine of the overall 3D angle between the two track directions
    uses_time : bool
        Whether the time term was requested for this candidate
    is_scored : bool
        Whether all requested score terms could be evaluated
    down_track : Track, optional
        Downstream track, used to build the joint track
    up_track : Track, optional
        Upstream track, used to build the joint track
    """

    down_ref: TrackRef
    up_ref: TrackRef
    score: float
    transverse_displacement: float
    angular_displacement_cosine: float
    uses_time: bool = False
    is_scored: bool = True
    down_track: Optional[Track] = field(default=None, repr=False)
    up_track: Optional[Track] = field(default=None, repr=False)


@dataclass(eq=False)
class MatchResult(DataBase):
    """Accepted association between a downstream and an upstream track.

    Attributes
    ----------
    down_ref : TrackRef
        Reference to the downstream track
    up_ref : TrackRef
        Reference to the upstream track
    score : float
        Compatibility score of the association
    transverse_displacement : float
        Transverse displacement in the boundary plane in cm
    angular_displacement_cosine : float
        Cosine of the overall angle between the two track directions
    match_type : int
        Type of association (see :class:`MatchTypeEnum`). Only matches whose
        time term was evaluated are of the time-matched type.
    is_scored : bool
        Whether all requested score terms could be evaluated
    track : Track
        Joint track which combines the start of the upstream track with the
        end of the downstream track. This is a convenience projection which
        is not independently validated.
    """

    down_ref: TrackRef = None
    up_ref: TrackRef = None
    score: float = np.inf
    transverse_displacement: float = -1.0
    angular_displacement_cosine: float = -np.inf
    match_type: int = MatchTypeEnum.UNIQUE_NO_TIME
    is_scored: bool = True
    track: Track = None

    @classmethod
    def from_candidate(cls, candidate):
        """Builds an accepted match from a candidate.

        Parameters
        ----------
        candidate : MatchCandidate
            Candidate accepted by the selection

        Returns
        -------
        MatchResult
            Match object
        """
        match_type = (
            MatchTypeEnum.UNIQUE_WITH_TIME
            if candidate.uses_time and candidate.is_scored
            else MatchTypeEnum.UNIQUE_NO_TIME
        )

        track = None
        if candidate.down_track is not None and candidate.up_track is not None:
            track = cls.joint_track(candidate.down_track, candidate.up_track)

        return cls(
            down_ref=candidate.down_ref,
            up_ref=candidate.up_ref,
            score=candidate.score,
            transverse_displacement=candidate.transverse_displacement,
            angular_displacement_cosine=candidate.angular_displacement_cosine,
            match_type=int(match_type),
            is_scored=bool(candidate.is_scored),
            track=track,
        )

    @staticmethod
    def joint_track(down_track, up_track):
        """Builds a track which spans both subsystems.

        The joint track starts where the upstream track starts and ends
        where the downstream track ends. Its time is the downstream track
        time and its visible energy is the sum of both tracks, or `-1` if
        either of them is unset (negative).

        Parameters
        ----------
        down_track : Track
            Downstream track
        up_track : Track
            Upstream track

        Returns
        -------
        Track
            Joint track
        """
        visible_energy = -1.0
        if up_track.visible_energy >= 0 and down_track.visible_energy >= 0:
            visible_energy = up_track.visible_energy + down_track.visible_energy

        return Track(
            start=up_track.start.copy(),
            start_dir=up_track.start_dir.copy(),
            end=down_track.end.copy(),
            end_dir=down_track.end_dir.copy(),
            time=down_track.time,
            visible_energy=visible_energy,
        )

    def __str__(self):
        return (
            f"Match({self.down_ref} <-> {self.up_ref}, score={self.score:.3f}, "
            f"transdispl={self.transverse_displacement:.2f}, "
            f"angdispl={self.angular_displacement_cosine:.4f})"
        )


@dataclass
class MatchCollection:
    """Event-scoped output collection of accepted matches.

    Owned by the caller: the matching engine only appends to it.

    Attributes
    ----------
    matches : List[MatchResult]
        Accepted matches, in order of acceptance
    num_matches : int
        Running count of accepted matches
    """

    matches: List[MatchResult] = field(default_factory=list)
    num_matches: int = 0

    def append(self, match):
        """Append one match to the collection and update the count.

        Parameters
        ----------
        match : MatchResult
            Accepted match
        """
        self.matches.append(match)
        self.num_matches += 1

    def extend(self, matches):
        """Append several matches to the collection.

        Parameters
        ----------
        matches : List[MatchResult]
            Accepted matches
        """
        for match in matches:
            self.append(match)

    def from_source(self, source):
        """Returns the matches made with one upstream reconstruction source.

        Parameters
        ----------
        source : int
            Upstream source tag

        Returns
        -------
        List[MatchResult]
            Matches for that source
        """
        return [m for m in self.matches if m.up_ref.source == source]

    def __len__(self):
        return len(self.matches)

    def __iter__(self):
        return iter(self.matches)

    def __getitem__(self, idx):
        return self.matches[idx]
