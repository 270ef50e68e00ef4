"""Module to write flat records, one row at a time, to a CSV file."""

import os

__all__ = ["CSVWriter"]


class CSVWriter:
    """Writes rows of scalars to a CSV file.

    The columns are fixed by the first row written (or, in append mode, by
    the header of the existing file). Every subsequent row must provide
    exactly the same keys, in the same order.

    Typical configuration should look like:

    .. code-block:: yaml

        writer:
          file_name: matches.csv
    """

    name = "csv"

    def __init__(self, file_name="output.csv", overwrite=False, append=False):
        """Sets up the output file.

        Parameters
        ----------
        file_name : str, default 'output.csv'
            Path to the output CSV file
        overwrite : bool, default False
            Replace the file if it already exists
        append : bool, default False
            Add rows to an existing file, keeping its header
        """
        exists = os.path.isfile(file_name)
        if append and not exists:
            raise FileNotFoundError(
                f"Cannot append to {file_name}: the file does not exist."
            )
        if exists and not (append or overwrite):
            raise FileExistsError(f"File with name {file_name} already exists.")

        self.file_name = file_name
        self.result_keys = None
        if append:
            with open(file_name, "r", encoding="utf-8") as in_file:
                self.result_keys = in_file.readline().strip().split(",")

    def create(self, result_blob):
        """Writes the header of the file from the keys of a first row.

        Parameters
        ----------
        result_blob : dict
            Dictionary of (column, value) pairs
        """
        self.result_keys = list(result_blob)
        with open(self.file_name, "w", encoding="utf-8") as out_file:
            out_file.write(",".join(self.result_keys) + "\n")

    def append(self, result_blob):
        """Writes one row to the file.

        Parameters
        ----------
        result_blob : dict
            Dictionary of (column, value) pairs
        """
        if self.result_keys is None:
            self.create(result_blob)

        elif list(result_blob) != self.result_keys:
            missing = set(self.result_keys).difference(result_blob)
            excess = set(result_blob).difference(self.result_keys)
            raise KeyError(
                "Row keys do not match the CSV header. Missing: "
                f"{sorted(missing)}, unexpected: {sorted(excess)}."
            )

        row = ",".join(str(result_blob[k]) for k in self.result_keys)
        with open(self.file_name, "a", encoding="utf-8") as out_file:
            out_file.write(row + "\n")
