"""Conversion between editor models and their JSON documents."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping

import grapheme

from ..core.constants import Direction
from ..core.exceptions import ProjectFormatError
from ..core.models import (
    Cell,
    ClueEntry,
    ClueTexts,
    CrosswordData,
    Grid,
    GridSize,
    Project,
    parse_word_key,
)
from ..engine.numbering import NumberingResult, number_grid
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


# ----------------------------------------------------------------------
# Grid parts
# ----------------------------------------------------------------------


def size_to_jsonable(size: GridSize) -> Dict[str, int]:
    return {"rows": size.rows, "cols": size.cols}


def cell_to_jsonable(cell: Cell) -> Dict[str, Any]:
    return {"char": cell.char, "isBlack": cell.is_black, "number": cell.number}


def grid_to_jsonable(grid: Grid) -> List[List[Dict[str, Any]]]:
    return [[cell_to_jsonable(cell) for cell in row] for row in grid]


def parse_size(value: Any) -> GridSize:
    if not isinstance(value, Mapping):
        raise ProjectFormatError("Puzzle data has no size")
    rows, cols = value.get("rows"), value.get("cols")
    if not _is_int(rows) or not _is_int(cols):
        raise ProjectFormatError(f"Invalid grid size: {dict(value)!r}")
    size = GridSize(rows=rows, cols=cols)
    if not size.is_valid():
        raise ProjectFormatError(f"Grid size {rows}x{cols} is out of range")
    return size


def parse_cell(value: Any) -> Cell:
    if not isinstance(value, Mapping):
        raise ProjectFormatError(f"Invalid cell: {value!r}")
    is_black = bool(value.get("isBlack", False))
    char = value.get("char") or ""
    if not isinstance(char, str):
        raise ProjectFormatError(f"Invalid cell character: {char!r}")
    if grapheme.length(char) > 1:
        raise ProjectFormatError(f"Cell holds more than one character: {char!r}")
    # stored numbers may be stale, they are recomputed after parsing
    return Cell(char="" if is_black else char, is_black=is_black)


def parse_grid(value: Any, size: GridSize) -> Grid:
    if not isinstance(value, list):
        raise ProjectFormatError("Puzzle data has no grid")
    if len(value) != size.rows or any(
        not isinstance(row, list) or len(row) != size.cols for row in value
    ):
        raise ProjectFormatError(
            f"Grid shape does not match size {size.rows}x{size.cols}"
        )
    return tuple(tuple(parse_cell(cell) for cell in row) for row in value)


# ----------------------------------------------------------------------
# Clues
# ----------------------------------------------------------------------


def export_clues(numbering: NumberingResult, clue_texts: Mapping[str, str]) -> List[ClueEntry]:
    """Clues for the words that currently exist; orphaned texts are dropped."""

    entries = []
    for key in numbering.active_keys:
        number, direction = parse_word_key(key)
        entries.append(ClueEntry(number=number, direction=direction, text=clue_texts.get(key, "")))
    return entries


def clue_texts_from_entries(entries: List[ClueEntry]) -> ClueTexts:
    return {entry.key: entry.text for entry in entries}


def clue_to_jsonable(entry: ClueEntry) -> Dict[str, Any]:
    return {"number": entry.number, "direction": entry.direction.value, "text": entry.text}


def parse_clues(value: Any) -> List[ClueEntry]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ProjectFormatError("Puzzle clues must be a list")
    entries: List[ClueEntry] = []
    for item in value:
        try:
            entries.append(
                ClueEntry(
                    number=int(item["number"]),
                    direction=Direction(item["direction"]),
                    text=str(item.get("text") or ""),
                )
            )
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            LOGGER.warning("Skipping malformed clue %r: %s", item, exc)
    return entries


# ----------------------------------------------------------------------
# Puzzle payload and project documents
# ----------------------------------------------------------------------


def crossword_to_payload(size: GridSize, grid: Grid, clue_texts: Mapping[str, str]) -> Dict[str, Any]:
    """Serialize the puzzle for a project's ``data`` field."""

    numbering = number_grid(grid, size)
    return {
        "size": size_to_jsonable(size),
        "grid": grid_to_jsonable(numbering.grid),
        "clues": [clue_to_jsonable(entry) for entry in export_clues(numbering, clue_texts)],
    }


def crossword_from_payload(payload: Any) -> CrosswordData:
    """Parse and validate a project's ``data`` field, renumbering the grid."""

    if not isinstance(payload, Mapping):
        raise ProjectFormatError("Project has no puzzle data")
    if "size" not in payload or "grid" not in payload:
        raise ProjectFormatError("Puzzle data is missing size or grid")
    size = parse_size(payload["size"])
    grid = parse_grid(payload["grid"], size)
    return CrosswordData(
        size=size,
        grid=number_grid(grid, size).grid,
        clues=parse_clues(payload.get("clues")),
    )


def project_to_document(project: Project) -> Dict[str, Any]:
    return {
        "id": project.id,
        "name": project.name,
        "createdAt": project.created_at,
        "updatedAt": project.updated_at,
        "data": project.data,
    }


def project_from_document(document: Any) -> Project:
    if not isinstance(document, Mapping):
        raise ProjectFormatError("Project document must be a JSON object")
    try:
        return Project(
            id=str(document["id"]),
            name=str(document.get("name") or ""),
            created_at=str(document.get("createdAt") or ""),
            updated_at=str(document.get("updatedAt") or ""),
            data=document.get("data") or {},
        )
    except KeyError as exc:
        raise ProjectFormatError(f"Project document is missing {exc}") from exc


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
