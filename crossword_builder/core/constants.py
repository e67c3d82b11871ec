"""Shared constants and enumerations for the crossword builder."""

from __future__ import annotations

from enum import Enum


class Direction(str, Enum):
    """Word directions supported by the grid."""

    ACROSS = "across"
    DOWN = "down"

    def toggled(self) -> "Direction":
        return Direction.DOWN if self is Direction.ACROSS else Direction.ACROSS

    @property
    def step(self) -> tuple[int, int]:
        return (0, 1) if self is Direction.ACROSS else (1, 0)


class Mode(str, Enum):
    """Editing modes of the board."""

    INPUT = "input"
    EDIT_BLACK = "edit_black"


class MessageKind(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


MIN_GRID_SIZE = 3
MAX_GRID_SIZE = 10
DEFAULT_ROWS = 5
DEFAULT_COLS = 5

DEFAULT_PROJECT_NAME = "Untitled crossword"

# Keys of the session key-value store
SESSION_SIZE_KEY = "cw_size"
SESSION_GRID_KEY = "cw_grid"
SESSION_CLUES_KEY = "cw_clues"

# Key names understood by the input state machine
KEY_BACKSPACE = "Backspace"
KEY_SPACE = " "
KEY_ARROW_UP = "ArrowUp"
KEY_ARROW_DOWN = "ArrowDown"
KEY_ARROW_LEFT = "ArrowLeft"
KEY_ARROW_RIGHT = "ArrowRight"

# Arrow key -> (axis, forward)
ARROW_MOVES: dict[str, tuple[Direction, bool]] = {
    KEY_ARROW_UP: (Direction.DOWN, False),
    KEY_ARROW_DOWN: (Direction.DOWN, True),
    KEY_ARROW_LEFT: (Direction.ACROSS, False),
    KEY_ARROW_RIGHT: (Direction.ACROSS, True),
}
