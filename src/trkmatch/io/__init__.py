"""Input/output helpers around the matching engine.

- `TriggerTable`: trigger lookup parsed from a CSV file
- `CSVWriter`: flat CSV output of the accepted matches
"""

from .read import TriggerTable
from .write import CSVWriter
