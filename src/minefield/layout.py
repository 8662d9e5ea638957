"""
Mine layout module.

Holds the ground-truth grid of mine locations, random mine placement
around a safe location, and adjacent mine counting.
"""
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from .errors import ConstructionError, PreconditionError


# ============================================================================
# Configuration
# ============================================================================

def _validate_dimensions(num_rows: int, num_cols: int, num_mines: int) -> None:
    """Ensure an empty field of this size may later hold num_mines mines."""
    if num_rows < 1 or num_cols < 1:
        raise ConstructionError("Field dimensions must be positive")
    if num_mines < 0:
        raise ConstructionError("Number of mines cannot be negative")
    if num_mines * 3 >= num_rows * num_cols:
        raise ConstructionError(
            f"Too many mines (must be under a third of {num_rows * num_cols} locations)"
        )


@dataclass(frozen=True)
class FieldConfig:
    """
    Size and mine count of a field.

    Attributes:
        rows: Number of rows.
        cols: Number of columns.
        num_mines: Mines placed when the field is populated.
    """

    rows: int = 9
    cols: int = 9
    num_mines: int = 10

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        _validate_dimensions(self.rows, self.cols, self.num_mines)


# Preset sizes
BEGINNER = FieldConfig(9, 9, 10)
INTERMEDIATE = FieldConfig(16, 16, 40)
EXPERT = FieldConfig(16, 30, 99)

PRESETS: Dict[str, FieldConfig] = {
    "beginner": BEGINNER,
    "intermediate": INTERMEDIATE,
    "expert": EXPERT,
}


# ============================================================================
# MineLayout Class
# ============================================================================

class MineLayout:
    """
    Locations of the mines for one game.

    A layout built from explicit data reports the number of mines it holds.
    A layout built empty from dimensions only records how many mines it will
    hold: until populate() is called, num_mines() does not match the live
    count. reset_empty() returns a layout to that same state. The only
    mutators are populate() and reset_empty(); dimensions never change.
    """

    def __init__(self, num_rows: int, num_cols: int, num_mines: int) -> None:
        """
        Create an empty layout that populate() will later fill.

        Args:
            num_rows: Number of rows, must be positive.
            num_cols: Number of columns, must be positive.
            num_mines: Mines to place on populate, 0 <= num_mines and
                under a third of all locations.

        Raises:
            ConstructionError: If any of the above does not hold.
        """
        _validate_dimensions(num_rows, num_cols, num_mines)
        self._grid = np.zeros((num_rows, num_cols), dtype=bool)
        self._num_mines = num_mines

    # ========================================================================
    # Alternate Constructors
    # ========================================================================

    @classmethod
    def from_data(cls, mine_data: Sequence[Sequence[bool]]) -> "MineLayout":
        """
        Create a layout holding exactly the mines in mine_data.

        Args:
            mine_data: Rectangular grid, truthy where a mine is. Nested
                sequences or a 2D numpy array.

        Returns:
            Layout whose num_mines() is the number of truthy entries.

        Raises:
            ConstructionError: If mine_data is empty, ragged or not a 2D grid.
        """
        try:
            rows = [list(row) for row in mine_data]
        except TypeError:
            raise ConstructionError("Mine data must be a 2D grid of rows") from None
        if not rows or not rows[0]:
            raise ConstructionError(
                "Mine data must have at least one row and one column"
            )
        width = len(rows[0])
        if any(len(row) != width for row in rows):
            raise ConstructionError("Mine data must be rectangular")

        try:
            grid = np.array(rows, dtype=bool)
        except ValueError:
            raise ConstructionError("Mine data must be a 2D grid of rows") from None
        if grid.ndim != 2:
            raise ConstructionError("Mine data must be a 2D grid of rows")

        layout = cls.__new__(cls)
        layout._grid = grid
        layout._num_mines = int(np.count_nonzero(grid))
        return layout

    @classmethod
    def from_config(cls, config: FieldConfig) -> "MineLayout":
        """Create an empty layout sized by a FieldConfig."""
        return cls(config.rows, config.cols, config.num_mines)

    @classmethod
    def from_debug_string(cls, text: str) -> "MineLayout":
        """
        Parse the format produced by to_debug_string().

        Raises:
            ConstructionError: On tokens other than "0"/"1" or ragged rows.
        """
        mine_data = []
        for line in text.strip().splitlines():
            tokens = line.split()
            if any(token not in ("0", "1") for token in tokens):
                raise ConstructionError(f"Unexpected token in row {line!r}")
            mine_data.append([token == "1" for token in tokens])
        return cls.from_data(mine_data)

    # ========================================================================
    # Mutators
    # ========================================================================

    def populate(
        self,
        safe_row: int,
        safe_col: int,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        """
        Replace the current mines with num_mines() mines at random locations.

        Locations are drawn uniformly; a draw that hits an existing mine or
        the safe location is discarded and drawn again.

        Args:
            safe_row: Row of the location that must stay mine-free.
            safe_col: Column of the location that must stay mine-free.
            rng: Random generator to draw from (default: fresh generator).

        Raises:
            PreconditionError: If the safe location is out of range.
            ConstructionError: If the declared count leaves no free location.
        """
        self._check_range(safe_row, safe_col)
        num_cols = self.num_cols()
        total = self.num_rows() * num_cols
        if self._num_mines >= total:
            raise ConstructionError(
                f"Cannot place {self._num_mines} mines around a safe location "
                f"in {total} locations"
            )
        if rng is None:
            rng = np.random.default_rng()

        self.reset_empty()
        placed = 0
        while placed < self._num_mines:
            row, col = divmod(int(rng.integers(total)), num_cols)
            if self._grid[row, col] or (row == safe_row and col == safe_col):
                continue
            self._grid[row, col] = True
            placed += 1

    def reset_empty(self) -> None:
        """Remove every mine. num_mines() is left unchanged."""
        self._grid[:, :] = False

    # ========================================================================
    # Queries
    # ========================================================================

    def in_range(self, row: int, col: int) -> bool:
        """Check if (row, col) is a location on this field."""
        return 0 <= row < self.num_rows() and 0 <= col < self.num_cols()

    def has_mine(self, row: int, col: int) -> bool:
        """Check if there is a mine at (row, col)."""
        self._check_range(row, col)
        return bool(self._grid[row, col])

    def num_adjacent_mines(self, row: int, col: int) -> int:
        """
        Count mines in the 8 surrounding locations.

        A mine at (row, col) itself is not counted.

        Returns:
            Count in the range [0, 8].
        """
        self._check_range(row, col)
        block = self._grid[max(row - 1, 0):row + 2, max(col - 1, 0):col + 2]
        return int(np.count_nonzero(block)) - int(self._grid[row, col])

    def neighbors(self, row: int, col: int) -> List[Tuple[int, int]]:
        """
        Get in-range locations around (row, col), excluding itself.

        Returns:
            List of (row, col) tuples in row-major order.
        """
        neighbors = []
        for delta_row in (-1, 0, 1):
            for delta_col in (-1, 0, 1):
                if delta_row == 0 and delta_col == 0:
                    continue
                new_row = row + delta_row
                new_col = col + delta_col
                if self.in_range(new_row, new_col):
                    neighbors.append((new_row, new_col))
        return neighbors

    def num_rows(self) -> int:
        return self._grid.shape[0]

    def num_cols(self) -> int:
        return self._grid.shape[1]

    def num_mines(self) -> int:
        """
        Declared number of mines.

        For a layout built empty, or after reset_empty(), this differs from
        the live count until the next populate().
        """
        return self._num_mines

    def is_populated(self) -> bool:
        """Check if the live mine count equals the declared count."""
        return int(np.count_nonzero(self._grid)) == self._num_mines

    def mine_positions(self) -> List[Tuple[int, int]]:
        """Get (row, col) of every mine in row-major order."""
        return [(int(row), int(col)) for row, col in np.argwhere(self._grid)]

    def mine_mask(self) -> np.ndarray:
        """Get a copy of the mine grid as a 2D boolean array."""
        return self._grid.copy()

    # ========================================================================
    # Rendering
    # ========================================================================

    def to_debug_string(self) -> str:
        """
        Render the mines as text.

        One "1" (mine) or "0" (empty) per location, space separated within a
        row, rows separated by newlines.
        """
        lines = [
            " ".join("1" if mine else "0" for mine in row)
            for row in self._grid
        ]
        return "\n".join(lines).strip()

    def __str__(self) -> str:
        return self.to_debug_string()

    def __repr__(self) -> str:
        return (
            f"MineLayout(rows={self.num_rows()}, cols={self.num_cols()}, "
            f"num_mines={self._num_mines})"
        )

    def _check_range(self, row: int, col: int) -> None:
        if not self.in_range(row, col):
            raise PreconditionError(row, col, self.num_rows(), self.num_cols())
