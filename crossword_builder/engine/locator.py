"""Locate the word running through the cursor."""

from __future__ import annotations

from typing import Mapping, Optional

from ..core.constants import Direction
from ..core.models import (
    ActiveWord,
    ActiveWordCell,
    Cursor,
    Grid,
    GridSize,
    WordSpan,
    make_word_key,
)
from .grid import is_open


def locate_word(
    grid: Grid,
    size: GridSize,
    cursor: Optional[Cursor],
    direction: Direction,
) -> Optional[WordSpan]:
    """Return the maximal open run through ``cursor`` along ``direction``.

    ``None`` when there is no cursor or it sits on a black square.
    """

    if cursor is None or not is_open(grid, size, cursor.r, cursor.c):
        return None

    if direction == Direction.ACROSS:
        start = end = cursor.c
        while start > 0 and not grid[cursor.r][start - 1].is_black:
            start -= 1
        while end < size.cols - 1 and not grid[cursor.r][end + 1].is_black:
            end += 1
        return WordSpan(axis=Direction.ACROSS, fixed=cursor.r, start=start, end=end)

    start = end = cursor.r
    while start > 0 and not grid[start - 1][cursor.c].is_black:
        start -= 1
    while end < size.rows - 1 and not grid[end + 1][cursor.c].is_black:
        end += 1
    return WordSpan(axis=Direction.DOWN, fixed=cursor.c, start=start, end=end)


def word_key_at(
    grid: Grid,
    size: GridSize,
    cursor: Optional[Cursor],
    direction: Direction,
) -> Optional[str]:
    """Clue key of the word under the cursor, if its first cell is numbered."""

    span = locate_word(grid, size, cursor, direction)
    if span is None:
        return None
    start = span.start_cursor
    number = grid[start.r][start.c].number
    if number is None:
        return None
    return make_word_key(number, direction)


def active_word(
    grid: Grid,
    size: GridSize,
    cursor: Optional[Cursor],
    direction: Direction,
    clue_texts: Mapping[str, str],
) -> Optional[ActiveWord]:
    span = locate_word(grid, size, cursor, direction)
    if span is None or cursor is None:
        return None
    start = span.start_cursor
    number = grid[start.r][start.c].number
    if number is None:
        return None

    key = make_word_key(number, direction)
    cells = tuple(
        ActiveWordCell(char=grid[pos.r][pos.c].char, is_active=pos == cursor)
        for pos in span.cells
    )
    return ActiveWord(
        number=number,
        direction=direction,
        key=key,
        clue_text=clue_texts.get(key, ""),
        cells=cells,
    )
