"""Tabular clue sheet export."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Mapping, Optional

import pandas as pd

from ..core.constants import Direction
from ..core.models import Cursor, Grid, GridSize
from ..engine.locator import locate_word
from ..engine.numbering import clue_listing, number_grid
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

CLUE_SHEET_COLUMNS = ["number", "direction", "key", "length", "answer", "clue"]
EMPTY_CELL_MARK = "_"


def build_clue_sheet(grid: Grid, size: GridSize, clue_texts: Mapping[str, str]) -> pd.DataFrame:
    """One row per word in the grid, across words first, each group by number."""

    numbering = number_grid(grid, size)
    starts: Dict[int, Cursor] = {}
    for r, row in enumerate(numbering.grid):
        for c, cell in enumerate(row):
            if cell.number is not None:
                starts[cell.number] = Cursor(r, c)

    listing = clue_listing(numbering)
    records: List[dict] = []
    for direction, items in ((Direction.ACROSS, listing.across), (Direction.DOWN, listing.down)):
        for number, key in items:
            span = locate_word(numbering.grid, size, starts[number], direction)
            answer = "".join(
                numbering.grid[pos.r][pos.c].char or EMPTY_CELL_MARK for pos in span.cells
            )
            records.append(
                {
                    "number": number,
                    "direction": direction.value,
                    "key": key,
                    "length": span.length,
                    "answer": answer,
                    "clue": clue_texts.get(key, ""),
                }
            )
    return pd.DataFrame.from_records(records, columns=CLUE_SHEET_COLUMNS)


def write_clue_sheet(frame: pd.DataFrame, path: Optional[Path | str] = None, sep: str = ",") -> str:
    """Render ``frame`` as CSV/TSV text and write it to ``path`` when given."""

    text = frame.to_csv(sep=sep, index=False)
    if path is not None:
        Path(path).write_text(text, encoding="utf-8")
        LOGGER.info("Clue sheet written to %s (%s rows)", path, len(frame))
    return text
