"""Standard crossword numbering of a grid."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import List, Tuple

from ..core.constants import Direction
from ..core.models import Grid, GridSize, make_word_key, parse_word_key


@dataclass(frozen=True)
class NumberingResult:
    """Numbered copy of a grid plus the word keys it produces, in scan order."""

    grid: Grid
    active_keys: Tuple[str, ...]


@dataclass(frozen=True)
class ClueListing:
    across: Tuple[Tuple[int, str], ...]
    down: Tuple[Tuple[int, str], ...]


def number_grid(grid: Grid, size: GridSize) -> NumberingResult:
    """Scan L→R, T→B and assign sequential numbers where a word starts.

    A cell is numbered when it begins a run of at least two open cells across
    or down. One counter is shared by both directions. The input grid is left
    untouched.
    """

    counter = 1
    keys: List[str] = []
    rows = []
    for r in range(size.rows):
        row = []
        for c in range(size.cols):
            cell = grid[r][c]
            if cell.is_black:
                row.append(replace(cell, number=None))
                continue

            starts_across = _starts_across(grid, size, r, c)
            starts_down = _starts_down(grid, size, r, c)
            if not (starts_across or starts_down):
                row.append(replace(cell, number=None))
                continue

            row.append(replace(cell, number=counter))
            if starts_across:
                keys.append(make_word_key(counter, Direction.ACROSS))
            if starts_down:
                keys.append(make_word_key(counter, Direction.DOWN))
            counter += 1
        rows.append(tuple(row))
    return NumberingResult(grid=tuple(rows), active_keys=tuple(keys))


def clue_listing(result: NumberingResult) -> ClueListing:
    """Split the active keys into across and down lists sorted by number."""

    across: List[Tuple[int, str]] = []
    down: List[Tuple[int, str]] = []
    for key in result.active_keys:
        number, direction = parse_word_key(key)
        if direction == Direction.ACROSS:
            across.append((number, key))
        else:
            down.append((number, key))
    across.sort()
    down.sort()
    return ClueListing(across=tuple(across), down=tuple(down))


def _starts_across(grid: Grid, size: GridSize, r: int, c: int) -> bool:
    """Left is black/edge and right is open."""
    left_is_edge_or_black = c == 0 or grid[r][c - 1].is_black
    right_is_open = c + 1 < size.cols and not grid[r][c + 1].is_black
    return left_is_edge_or_black and right_is_open


def _starts_down(grid: Grid, size: GridSize, r: int, c: int) -> bool:
    """Top is black/edge and bottom is open."""
    top_is_edge_or_black = r == 0 or grid[r - 1][c].is_black
    bottom_is_open = r + 1 < size.rows and not grid[r + 1][c].is_black
    return top_is_edge_or_black and bottom_is_open
