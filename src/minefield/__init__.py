"""
Minefield game-state core.

Provides the mine layout, the visible field state machine, and a
Gymnasium environment over them.
"""
from .errors import MinefieldError, ConstructionError, PreconditionError
from .cell import CellStatus
from .layout import MineLayout, FieldConfig, BEGINNER, INTERMEDIATE, EXPERT, PRESETS
from .visible import VisibleState
from .environment import MinefieldEnv

__all__ = [
    "MinefieldError",
    "ConstructionError",
    "PreconditionError",
    "CellStatus",
    "MineLayout",
    "FieldConfig",
    "BEGINNER",
    "INTERMEDIATE",
    "EXPERT",
    "PRESETS",
    "VisibleState",
    "MinefieldEnv",
]
