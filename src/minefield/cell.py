"""
Cell status module for the visible field.

Each location on the visible field holds a small integer code. Negative
codes are the covered family, non-negative codes are the uncovered family.
Codes 0-8 are adjacent mine counts and have no named member.
"""
from enum import IntEnum
from typing import Union


# ============================================================================
# Constants
# ============================================================================

class CellStatus(IntEnum):
    """Named display codes of a single location."""

    # Covered family
    COVERED = -1
    MINE_GUESS = -2
    QUESTION = -3

    # Uncovered family (0-8 are adjacent mine counts)
    MINE = 9
    INCORRECT_GUESS = 10
    EXPLODED_MINE = 11


MIN_CODE = int(CellStatus.QUESTION)
MAX_CODE = int(CellStatus.EXPLODED_MINE)
MAX_ADJACENT = 8

Status = Union[CellStatus, int]

_GLYPHS = {
    CellStatus.COVERED: ".",
    CellStatus.MINE_GUESS: "F",
    CellStatus.QUESTION: "?",
    CellStatus.MINE: "*",
    CellStatus.INCORRECT_GUESS: "X",
    CellStatus.EXPLODED_MINE: "#",
}


# ============================================================================
# Code Helpers
# ============================================================================

def to_status(code: int) -> Status:
    """
    Convert a raw display code to its public form.

    Args:
        code: Integer code stored in the display array.

    Returns:
        The matching CellStatus member, or the plain int for counts 0-8.
    """
    code = int(code)
    if 0 <= code <= MAX_ADJACENT:
        return code
    return CellStatus(code)


def is_uncovered_code(code: int) -> bool:
    """Check if a code belongs to the uncovered family."""
    return int(code) >= 0


def is_guess_code(code: int) -> bool:
    """Check if a code is a player mark (flag or question)."""
    return int(code) in (CellStatus.MINE_GUESS, CellStatus.QUESTION)


def to_glyph(code: int) -> str:
    """
    Single character used for text rendering.

    Returns:
        ".": covered, "F": flagged, "?": questioned,
        " ": zero count, "1"-"8": counts,
        "*": mine, "X": incorrect flag, "#": exploded mine
    """
    code = int(code)
    if code == 0:
        return " "
    if 0 < code <= MAX_ADJACENT:
        return str(code)
    return _GLYPHS[CellStatus(code)]
