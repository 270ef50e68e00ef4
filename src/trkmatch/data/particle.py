"""Module with a data class object which represents a true particle."""

from dataclasses import dataclass

import numpy as np

from .base import DataBase

__all__ = ["Particle"]


@dataclass(eq=False)
class Particle(DataBase):
    """True (simulated) particle information.

    Attributes
    ----------
    id : int
        Unique particle ID, as referenced by the track truth IDs
    pdg_code : int
        PDG code of the particle
    time : float
        Particle creation time in ns, in the same clock as the trigger time
    start_pos : np.ndarray
        (3) Particle start position in cm
    """

    id: int = -1
    pdg_code: int = -1
    time: float = -np.inf
    start_pos: np.ndarray = None

    # Fixed-length attributes
    _fixed_length_attrs = (("start_pos", 3),)

    # Attributes specifying coordinates
    _pos_attrs = ("start_pos",)
