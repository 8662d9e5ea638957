"""
Gymnasium environment wrapper for the minefield.

Drives one MineLayout / VisibleState pair through a standard RL interface.
"""
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .cell import MAX_CODE, MIN_CODE, CellStatus
from .layout import FieldConfig, MineLayout
from .visible import VisibleState


# ============================================================================
# Minefield Environment
# ============================================================================

class MinefieldEnv(gym.Env):
    """
    Gymnasium environment over a VisibleState.

    Observation:
        2D int8 array of display codes (see VisibleState.get_display).

    Actions:
        Discrete action space of size rows * cols.
        Action i uncovers the location (i // cols, i % cols). The first
        uncover of an episode populates the layout with that location safe.

    Rewards:
        - +1 for uncovering a safe location
        - +10 for winning the game
        - -10 for uncovering a mine
        - -0.1 for an invalid action (not a covered location)
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[FieldConfig] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the environment.

        Args:
            config: Field configuration (default: 9x9 with 10 mines).
            render_mode: How to render the environment.
        """
        super().__init__()

        self.config = config or FieldConfig()
        self.layout = MineLayout.from_config(self.config)
        self.visible = VisibleState(self.layout)
        self.render_mode = render_mode

        self.observation_space = spaces.Box(
            low=MIN_CODE,
            high=MAX_CODE,
            shape=(self.config.rows, self.config.cols),
            dtype=np.int8,
        )
        self.action_space = spaces.Discrete(self.config.rows * self.config.cols)

        self._steps = 0
        self._populated = False

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Reset the environment for a new episode.

        Args:
            seed: Random seed for mine placement.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        self.layout.reset_empty()
        self.visible.reset()
        self._steps = 0
        self._populated = False

        return self.visible.get_display(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Uncover one location.

        Args:
            action: Location index (row * cols + col).

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        row, col = self._action_to_position(action)
        self._steps += 1

        reward = self._calculate_reward(row, col)
        observation = self.visible.get_display()
        terminated = self.visible.is_game_over()

        return observation, reward, terminated, False, self._get_info()

    def _action_to_position(self, action: int) -> Tuple[int, int]:
        """Convert flat action index to (row, col) position."""
        return divmod(int(action), self.config.cols)

    def _calculate_reward(self, row: int, col: int) -> float:
        """Uncover (row, col) and score the result."""
        if self.visible.is_game_over():
            return -0.1
        if self.visible.get_status(row, col) != CellStatus.COVERED:
            return -0.1

        if not self._populated:
            self.layout.populate(row, col, rng=self.np_random)
            self._populated = True

        if not self.visible.uncover(row, col):
            return -10.0
        if self.visible.is_game_over():
            return 10.0
        return 1.0

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        return {
            "steps": self._steps,
            "uncovered": self.visible.num_uncovered(),
            "total_safe": self.config.rows * self.config.cols - self.config.num_mines,
            "mines_left": self.visible.mines_left(),
            "won": self.visible.is_won(),
            "lost": self.visible.is_lost(),
            "valid_actions": len(self.visible.covered_cells()),
        }

    def render(self) -> Optional[str]:
        """Render the current visible field."""
        if self.render_mode == "ansi":
            return self.visible.to_display_string()
        if self.render_mode == "human":
            print(self.visible.to_display_string())
        return None

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of valid actions.

        Returns:
            Boolean array where True = covered location.
        """
        mask = np.zeros(self.action_space.n, dtype=bool)
        for row, col in self.visible.covered_cells():
            mask[row * self.config.cols + col] = True
        return mask
