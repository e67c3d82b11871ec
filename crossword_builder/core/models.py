"""Data models supporting the crossword builder."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .constants import (
    DEFAULT_COLS,
    DEFAULT_ROWS,
    MAX_GRID_SIZE,
    MIN_GRID_SIZE,
    Direction,
)


@dataclass(frozen=True)
class GridSize:
    """Grid dimensions, always within ``[MIN_GRID_SIZE, MAX_GRID_SIZE]``."""

    rows: int = DEFAULT_ROWS
    cols: int = DEFAULT_COLS

    @classmethod
    def clamped(cls, rows: int, cols: int) -> GridSize:
        return cls(rows=_clamp(rows), cols=_clamp(cols))

    def contains(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def is_valid(self) -> bool:
        return (
            MIN_GRID_SIZE <= self.rows <= MAX_GRID_SIZE
            and MIN_GRID_SIZE <= self.cols <= MAX_GRID_SIZE
        )


def _clamp(value: int) -> int:
    return max(MIN_GRID_SIZE, min(MAX_GRID_SIZE, value))


@dataclass(frozen=True)
class Cell:
    """A single grid square. ``number`` is derived, never typed by the user."""

    char: str = ""
    is_black: bool = False
    number: Optional[int] = None


Row = Tuple[Cell, ...]
Grid = Tuple[Row, ...]


@dataclass(frozen=True)
class Cursor:
    r: int
    c: int


@dataclass(frozen=True)
class WordSpan:
    """Inclusive run of cells along ``axis`` with the other coordinate fixed."""

    axis: Direction
    fixed: int
    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start + 1

    @property
    def start_cursor(self) -> Cursor:
        return self.cursor_at(self.start)

    @property
    def cells(self) -> List[Cursor]:
        return [self.cursor_at(i) for i in range(self.start, self.end + 1)]

    def cursor_at(self, index: int) -> Cursor:
        if self.axis == Direction.ACROSS:
            return Cursor(self.fixed, index)
        return Cursor(index, self.fixed)

    def contains(self, cursor: Cursor) -> bool:
        if self.axis == Direction.ACROSS:
            return cursor.r == self.fixed and self.start <= cursor.c <= self.end
        return cursor.c == self.fixed and self.start <= cursor.r <= self.end


def make_word_key(number: int, direction: Direction) -> str:
    return f"{number}-{Direction(direction).value}"


def parse_word_key(key: str) -> Tuple[int, Direction]:
    """Split ``"12-across"`` into ``(12, Direction.ACROSS)``."""

    number, _, direction = key.partition("-")
    return int(number), Direction(direction)


@dataclass(frozen=True)
class ClueEntry:
    """A clue as it appears in an exported project."""

    number: int
    direction: Direction
    text: str

    @property
    def key(self) -> str:
        return make_word_key(self.number, self.direction)


@dataclass(frozen=True)
class ActiveWordCell:
    char: str
    is_active: bool


@dataclass(frozen=True)
class ActiveWord:
    """The word under the cursor together with its clue."""

    number: int
    direction: Direction
    key: str
    clue_text: str
    cells: Tuple[ActiveWordCell, ...]


@dataclass
class CrosswordData:
    """Snapshot of a puzzle as stored inside a project document."""

    size: GridSize
    grid: Grid
    clues: List[ClueEntry] = field(default_factory=list)


@dataclass
class ProjectMeta:
    """Identity of the project the session is currently associated with."""

    id: str
    name: str
    created_at: str


@dataclass
class Project:
    """A named puzzle document.

    ``data`` is the serialized :class:`CrosswordData` payload. The store keeps
    it opaque; :mod:`crossword_builder.io.serialization` validates it on load.
    """

    id: str
    name: str
    created_at: str
    updated_at: str
    data: Dict[str, Any] = field(default_factory=dict)

    @property
    def meta(self) -> ProjectMeta:
        return ProjectMeta(id=self.id, name=self.name, created_at=self.created_at)


ClueTexts = Dict[str, str]
