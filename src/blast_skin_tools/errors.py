# blast_skin_tools/errors.py
"""
Exception types raised while building the joined BLAST/metadata table.

All of them are fatal for a run: the CLI logs the message and exits non-zero.
"""


class BlastSkinError(Exception):
    """Base class for all errors raised by blast_skin_tools."""


class ParseError(BlastSkinError):
    """
    A BLAST result file is missing, empty or has a malformed row.

    ``record`` is the 1-based number of the offending data row. Blank lines
    are not records, so it can differ from the physical line number.
    """

    def __init__(self, message, path=None, record=None):
        self.path = path
        self.record = record
        location = ""
        if path is not None:
            location = f"{path}: "
        if record is not None:
            location += f"record {record}: "
        super().__init__(f"{location}{message}")


class AggregationError(BlastSkinError):
    """Aggregating a set of BLAST files failed; the failing ParseError is the __cause__."""

    def __init__(self, message, path=None):
        self.path = path
        super().__init__(message)


class LoadError(BlastSkinError):
    """The sample metadata table is missing, empty or lacks its run column."""

    def __init__(self, message, path=None, column=None):
        self.path = path
        self.column = column
        super().__init__(message)


class JoinKeyError(BlastSkinError, KeyError):
    """A join key column is absent from one side of the join."""

    def __init__(self, column, side):
        self.column = column
        self.side = side
        super().__init__(f"Join key column '{column}' not found in {side} table")

    def __str__(self):
        # KeyError quotes its argument; keep the plain message
        return self.args[0]
