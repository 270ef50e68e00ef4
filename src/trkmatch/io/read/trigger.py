"""Lookup table of trigger information parsed from a CSV file."""

import os

import pandas as pd

from trkmatch.data import Trigger

__all__ = ["TriggerTable"]


class TriggerTable:
    """Provides the trigger of an event given its (run, event) key.

    The lookup is keyed explicitly, it makes no assumption on the order in
    which events are requested.

    The CSV file is expected to contain the following columns:
    `run_number`, `event_no`, `time_s`, `time_ns` and, optionally,
    `trigger_type` and `trigger_id`.
    """

    # Columns which must be present in the trigger file
    _required_columns = ("run_number", "event_no", "time_s", "time_ns")

    def __init__(self, file_path):
        """Load the trigger information.

        Parameters
        ----------
        file_path : str
            Path to the csv file which contains the trigger information
        """
        if not os.path.isfile(file_path):
            raise FileNotFoundError(f"Cannot find the trigger CSV file: {file_path}")

        self.trigger_df = pd.read_csv(file_path)
        missing = set(self._required_columns).difference(self.trigger_df.columns)
        if len(missing):
            raise KeyError(f"The trigger file is missing column(s): {sorted(missing)}")

        # Index the triggers by (run, event), check for duplicates
        self.trigger_df = self.trigger_df.set_index(["run_number", "event_no"])
        self.trigger_df = self.trigger_df.sort_index()
        if not self.trigger_df.index.is_unique:
            dups = self.trigger_df.index[self.trigger_df.index.duplicated()]
            raise KeyError(
                f"Found more than one trigger associated with (run, event) "
                f"pair(s): {list(dups)}"
            )

    def __len__(self):
        return len(self.trigger_df)

    def __contains__(self, key):
        return tuple(key) in self.trigger_df.index

    def get(self, run, event):
        """Fetch the trigger of one event.

        Parameters
        ----------
        run : int
            Run number
        event : int
            Event number

        Returns
        -------
        Trigger
            Trigger information
        """
        if (run, event) not in self:
            raise KeyError(f"Could not find run {run}, event {event} in the trigger file.")

        row = self.trigger_df.loc[(run, event)]

        return Trigger(
            id=int(row.get("trigger_id", -1)),
            time_s=int(row["time_s"]),
            time_ns=int(row["time_ns"]),
            type=int(row.get("trigger_type", -1)),
        )
