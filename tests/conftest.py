"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path

# Add src (package) and the project root (main.py) to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minefield import MineLayout, VisibleState, FieldConfig


# ============================================================================
# Layout Fixtures
# ============================================================================

@pytest.fixture
def center_mine_layout() -> MineLayout:
    """3x3 layout with a single mine in the middle."""
    return MineLayout.from_data([
        [False, False, False],
        [False, True, False],
        [False, False, False],
    ])


@pytest.fixture
def empty_layout() -> MineLayout:
    """5x5 layout with no mines for flood fill testing."""
    return MineLayout.from_data([[False] * 5 for _ in range(5)])


@pytest.fixture
def row_layout() -> MineLayout:
    """1x5 layout with no mines."""
    return MineLayout.from_data([[False] * 5])


@pytest.fixture
def unpopulated_layout() -> MineLayout:
    """Beginner-sized layout before any mines are placed."""
    return MineLayout(9, 9, 10)


# ============================================================================
# Visible State Fixtures
# ============================================================================

@pytest.fixture
def center_mine_state(center_mine_layout: MineLayout) -> VisibleState:
    """Fresh visible state over the single-mine layout."""
    return VisibleState(center_mine_layout)


@pytest.fixture
def empty_state(empty_layout: MineLayout) -> VisibleState:
    """Fresh visible state over the mine-free layout."""
    return VisibleState(empty_layout)


@pytest.fixture
def row_state(row_layout: MineLayout) -> VisibleState:
    """Fresh visible state over the 1x5 layout."""
    return VisibleState(row_layout)


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def beginner_config() -> FieldConfig:
    """Beginner size configuration."""
    return FieldConfig(9, 9, 10)


@pytest.fixture
def small_config() -> FieldConfig:
    """Small configuration for quick environment episodes."""
    return FieldConfig(4, 4, 2)
