"""Module with data classes which represent reconstructed tracks and the
interactions which group them."""

from dataclasses import dataclass, field
from typing import List

import numpy as np

from .base import DataBase

__all__ = ["Track", "Interaction"]


@dataclass(eq=False)
class Track(DataBase):
    """Reconstructed track segment in one detector subsystem.

    Attributes
    ----------
    id : int
        Index of the track within its interaction
    start : np.ndarray
        (3) Start point of the track in cm
    end : np.ndarray
        (3) End point of the track in cm
    start_dir : np.ndarray
        (3) Direction of the track at its start point (not necessarily
        normalized)
    end_dir : np.ndarray
        (3) Direction of the track at its end point (not necessarily
        normalized)
    time : float
        Track time in the subsystem clock (ns)
    visible_energy : float
        Visible energy deposited by the track
    truth_ids : np.ndarray
        (T) IDs of the true particles which contribute to the track
    truth_overlap : np.ndarray
        (T) Fraction of the track signal attributable to each true particle
    """

    id: int = -1
    start: np.ndarray = None
    end: np.ndarray = None
    start_dir: np.ndarray = None
    end_dir: np.ndarray = None
    time: float = -np.inf
    visible_energy: float = -1.0
    truth_ids: np.ndarray = None
    truth_overlap: np.ndarray = None

    # Fixed-length attributes
    _fixed_length_attrs = (
        ("start", 3),
        ("end", 3),
        ("start_dir", 3),
        ("end_dir", 3),
    )

    # Variable-length attributes
    _var_length_attrs = (("truth_ids", np.int64), ("truth_overlap", np.float32))

    # Attributes specifying coordinates
    _pos_attrs = ("start", "end")

    # Attributes specifying vector components
    _vec_attrs = ("start_dir", "end_dir")

    def __str__(self):
        """Human-readable string representation of the track object.

        Returns
        -------
        str
            Basic information about the track
        """
        return (
            f"Track(id={self.id}, start={np.round(self.start, 2)}, "
            f"end={np.round(self.end, 2)}, time={self.time})"
        )


@dataclass(eq=False)
class Interaction(DataBase):
    """Group of tracks produced by one reconstruction pass for one event.

    Attributes
    ----------
    id : int
        Index of the interaction in the event
    tracks : List[Track]
        List of tracks which make up the interaction
    """

    id: int = -1
    tracks: List[Track] = field(default_factory=list)

    # Attributes that must never be stored to file
    _skip_attrs = ("tracks",)

    def __len__(self):
        """Number of tracks in the interaction."""
        return len(self.tracks)

    def __getitem__(self, idx):
        """Fetch one track by index."""
        return self.tracks[idx]

    def __iter__(self):
        """Iterate over the tracks of the interaction."""
        return iter(self.tracks)

    @property
    def num_tracks(self):
        """Number of tracks in the interaction.

        Returns
        -------
        int
            Number of tracks
        """
        return len(self.tracks)
