from .csv import CSVWriter
