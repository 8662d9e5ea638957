"""
Error types raised by the minefield core.
"""


class MinefieldError(Exception):
    """Base class for all minefield errors."""


class ConstructionError(MinefieldError, ValueError):
    """Invalid dimensions, mine count or input grid."""


class PreconditionError(MinefieldError, IndexError):
    """A coordinate outside the field was passed to an operation."""

    def __init__(self, row: int, col: int, num_rows: int, num_cols: int) -> None:
        super().__init__(
            f"Location ({row}, {col}) out of range for "
            f"{num_rows}x{num_cols} field"
        )
        self.row = row
        self.col = col
