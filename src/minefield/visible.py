"""
Visible state module.

Tracks what the player can see of a MineLayout: the display code of every
location, flag bookkeeping, the flood-fill uncover and end of game.
"""
from typing import List, Tuple

import numpy as np

from .cell import (
    CellStatus,
    Status,
    is_guess_code,
    is_uncovered_code,
    to_glyph,
    to_status,
)
from .errors import PreconditionError
from .layout import MineLayout


# ============================================================================
# VisibleState Class
# ============================================================================

class VisibleState:
    """
    Displayed state of one game over a MineLayout.

    The layout is held by reference and never modified here. Once the game
    is over, further cycle_flag() and uncover() calls still run; the
    end-of-game pass is repeated after every uncover() and is idempotent.
    """

    def __init__(self, layout: MineLayout) -> None:
        """
        Create a visible field over layout, fully covered.

        Args:
            layout: Mine layout this state uncovers.
        """
        self._layout = layout
        self._display = np.empty(
            (layout.num_rows(), layout.num_cols()), dtype=np.int8
        )
        self._flagged_count = 0
        self._uncovered_count = 0
        self._is_over = False
        self.reset()

    def reset(self) -> None:
        """Cover every location and clear counters. The layout is untouched."""
        self._display.fill(CellStatus.COVERED)
        self._flagged_count = 0
        self._uncovered_count = 0
        self._is_over = False

    # ========================================================================
    # Player Actions
    # ========================================================================

    def cycle_flag(self, row: int, col: int) -> None:
        """
        Advance the mark on a covered location.

        COVERED -> MINE_GUESS -> QUESTION -> COVERED. Has no effect on an
        uncovered location.

        Raises:
            PreconditionError: If (row, col) is out of range.
        """
        self._check_range(row, col)
        code = self._display[row, col]
        if code == CellStatus.COVERED:
            self._display[row, col] = CellStatus.MINE_GUESS
            self._flagged_count += 1
        elif code == CellStatus.MINE_GUESS:
            self._display[row, col] = CellStatus.QUESTION
            self._flagged_count -= 1
        elif code == CellStatus.QUESTION:
            self._display[row, col] = CellStatus.COVERED

    def uncover(self, row: int, col: int) -> bool:
        """
        Uncover a location, flooding out from it when it has no adjacent mines.

        The flood stops at mine-adjacent locations (which are uncovered),
        at the field edge, and at flagged or questioned locations (which are
        neither uncovered nor searched past). The game ends on a mine or
        once every location without a mine is uncovered; at that point all
        unflagged mines are shown and wrong flags are marked.

        Args:
            row: Row of the location.
            col: Column of the location.

        Returns:
            False iff there is a mine at (row, col).

        Raises:
            PreconditionError: If (row, col) is out of range.
        """
        self._check_range(row, col)
        result = self._flood_uncover(row, col)

        total = self._layout.num_rows() * self._layout.num_cols()
        if self._uncovered_count == total - self._layout.num_mines():
            self._is_over = True

        if self._is_over:
            self._finalize()
        return result

    # ========================================================================
    # Flood Fill (Low-level)
    # ========================================================================

    def _flood_uncover(self, row: int, col: int) -> bool:
        """Uncover from (row, col) with an explicit stack of locations."""
        pending: List[Tuple[int, int]] = []
        result = self._uncover_location(row, col, pending)
        while pending:
            next_row, next_col = pending.pop()
            self._uncover_location(next_row, next_col, pending)
        return result

    def _uncover_location(
        self, row: int, col: int, pending: List[Tuple[int, int]]
    ) -> bool:
        """
        Apply the uncover rule to one location.

        Pushes the neighbors of a zero-count location onto pending. Locations
        already uncovered or marked are left as they are.

        Returns:
            False iff the location is a mine.
        """
        code = self._display[row, col]
        if is_uncovered_code(code) or is_guess_code(code):
            return True

        if self._layout.has_mine(row, col):
            self._display[row, col] = CellStatus.EXPLODED_MINE
            self._is_over = True
            return False

        count = self._layout.num_adjacent_mines(row, col)
        self._display[row, col] = count
        self._uncovered_count += 1
        if count == 0:
            pending.extend(self._layout.neighbors(row, col))
        return True

    def _finalize(self) -> None:
        """Show unflagged mines and mark flags placed on empty locations."""
        mines = self._layout.mine_mask()
        display = self._display
        hidden_mines = (
            mines
            & (display != CellStatus.MINE_GUESS)
            & (display != CellStatus.EXPLODED_MINE)
        )
        wrong_guesses = ~mines & (display == CellStatus.MINE_GUESS)
        display[hidden_mines] = CellStatus.MINE
        display[wrong_guesses] = CellStatus.INCORRECT_GUESS

    # ========================================================================
    # State Accessors
    # ========================================================================

    def get_layout(self) -> MineLayout:
        """Get the layout this state covers."""
        return self._layout

    def get_status(self, row: int, col: int) -> Status:
        """
        Get the displayed status of a location.

        Returns:
            A CellStatus member, or an int 0-8 for an uncovered count.

        Raises:
            PreconditionError: If (row, col) is out of range.
        """
        self._check_range(row, col)
        return to_status(self._display[row, col])

    def is_uncovered(self, row: int, col: int) -> bool:
        """Check if a location is in any of the uncovered states."""
        self._check_range(row, col)
        return is_uncovered_code(self._display[row, col])

    def mines_left(self) -> int:
        """
        Declared mines minus flags placed.

        Says nothing about whether the flags are correct, and is negative
        when more flags than mines have been placed.
        """
        return self._layout.num_mines() - self._flagged_count

    def is_game_over(self) -> bool:
        return self._is_over

    def is_lost(self) -> bool:
        """Check if the game ended on an exploded mine."""
        return self._is_over and bool(
            np.any(self._display == CellStatus.EXPLODED_MINE)
        )

    def is_won(self) -> bool:
        """Check if the game ended with every empty location uncovered."""
        return self._is_over and not self.is_lost()

    def num_uncovered(self) -> int:
        return self._uncovered_count

    def num_flagged(self) -> int:
        return self._flagged_count

    def get_display(self) -> np.ndarray:
        """
        Get the display codes as an array.

        Returns:
            Copy of the 2D int8 display array where:
                -1 = covered, -2 = flagged, -3 = questioned
                0-8 = uncovered with adjacent count
                9 = mine, 10 = incorrect flag, 11 = exploded mine
        """
        return self._display.copy()

    def covered_cells(self) -> List[Tuple[int, int]]:
        """
        Get locations that uncover() would open.

        Returns:
            (row, col) of every COVERED location; flagged and questioned
            locations are excluded.
        """
        return [
            (int(row), int(col))
            for row, col in np.argwhere(self._display == CellStatus.COVERED)
        ]

    def to_display_string(self) -> str:
        """Render the visible field as text, one glyph per location."""
        return "\n".join(
            " ".join(to_glyph(code) for code in row) for row in self._display
        )

    def __str__(self) -> str:
        return self.to_display_string()

    def _check_range(self, row: int, col: int) -> None:
        if not self._layout.in_range(row, col):
            raise PreconditionError(
                row, col, self._layout.num_rows(), self._layout.num_cols()
            )
