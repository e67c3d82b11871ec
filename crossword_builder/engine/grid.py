"""Grid representation and helper utilities.

Grids are tuples of row tuples of frozen :class:`Cell` values. Every helper
returns a new grid; nothing here mutates its input.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Optional

from ..core.constants import Direction
from ..core.models import Cell, Cursor, Grid, GridSize
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


def empty_grid(size: GridSize) -> Grid:
    return tuple(tuple(Cell() for _ in range(size.cols)) for _ in range(size.rows))


def grid_from_pattern(lines: Iterable[str]) -> Grid:
    """Build an unnumbered grid from text rows: ``#`` black, ``.`` empty, else a letter."""

    rows = []
    for line in lines:
        row = []
        for symbol in line:
            if symbol == "#":
                row.append(Cell(is_black=True))
            elif symbol == ".":
                row.append(Cell())
            else:
                row.append(Cell(char=symbol))
        rows.append(tuple(row))
    return tuple(rows)


def is_open(grid: Grid, size: GridSize, row: int, col: int) -> bool:
    """True when ``(row, col)`` is inside the grid and not a black square."""

    return size.contains(row, col) and not grid[row][col].is_black


def replace_cell(grid: Grid, row: int, col: int, cell: Cell) -> Grid:
    new_row = grid[row][:col] + (cell,) + grid[row][col + 1:]
    return grid[:row] + (new_row,) + grid[row + 1:]


def write_char(grid: Grid, row: int, col: int, char: str) -> Grid:
    return replace_cell(grid, row, col, replace(grid[row][col], char=char))


def toggle_black(grid: Grid, row: int, col: int) -> Grid:
    """Flip the black flag of one cell; a cell turning black loses its char."""

    cell = grid[row][col]
    if cell.is_black:
        toggled = replace(cell, is_black=False)
    else:
        toggled = replace(cell, is_black=True, char="", number=None)
    LOGGER.debug("Cell (%s,%s) black=%s", row, col, toggled.is_black)
    return replace_cell(grid, row, col, toggled)


def resize_grid(grid: Grid, old_size: GridSize, new_size: GridSize) -> Grid:
    """Build a default grid at ``new_size`` keeping the overlapping top-left block.

    Characters and black flags are copied verbatim; numbers are dropped so the
    caller can renumber.
    """

    rows = []
    for r in range(new_size.rows):
        row = []
        for c in range(new_size.cols):
            if r < old_size.rows and c < old_size.cols:
                row.append(replace(grid[r][c], number=None))
            else:
                row.append(Cell())
        rows.append(tuple(row))
    LOGGER.info(
        "Resized grid %sx%s -> %sx%s",
        old_size.rows,
        old_size.cols,
        new_size.rows,
        new_size.cols,
    )
    return tuple(rows)


def neighbor(cursor: Cursor, direction: Direction, forward: bool = True) -> Cursor:
    dr, dc = direction.step
    if not forward:
        dr, dc = -dr, -dc
    return Cursor(cursor.r + dr, cursor.c + dc)


def scan_open_cell(
    grid: Grid,
    size: GridSize,
    start: Cursor,
    direction: Direction,
    forward: bool = True,
) -> Optional[Cursor]:
    """Return the nearest non-black cell past ``start``, skipping black squares.

    ``None`` when the edge is reached first. There is no wraparound.
    """

    current = neighbor(start, direction, forward)
    while size.contains(current.r, current.c):
        if not grid[current.r][current.c].is_black:
            return current
        current = neighbor(current, direction, forward)
    return None
