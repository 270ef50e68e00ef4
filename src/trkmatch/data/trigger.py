"""Module with a data class object which represents trigger information."""

from dataclasses import dataclass

from trkmatch.utils.globals import SEC_TO_NS

from .base import DataBase

__all__ = ["Trigger"]


@dataclass(eq=False)
class Trigger(DataBase):
    """Trigger information.

    Attributes
    ----------
    id : int
        Trigger ID
    time_s : int
        Integer seconds component of the trigger time
    time_ns : int
        Integer nanoseconds component of the trigger time
    type : int
        DAQ-specific trigger type
    """

    id: int = -1
    time_s: int = 0
    time_ns: int = 0
    type: int = -1

    @property
    def offset_ns(self):
        """Trigger time expressed in nanoseconds, the unit of stored times.

        Returns
        -------
        float
            Trigger time offset in ns
        """
        return SEC_TO_NS * self.time_s + self.time_ns
