"""Pretty-print helpers for the editor board."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Iterable, List

from ..core.models import Cell, Cursor
from ..engine.numbering import clue_listing

if TYPE_CHECKING:
    from ..core.models import Project
    from ..engine.state import EditorState


BLACK_SYMBOL = "#"
EMPTY_SYMBOL = "."
CURSOR_MARK = "*"
WORD_MARK = "~"
DIRECTION_ARROWS = {"across": "→", "down": "↓"}


def cell_symbol(cell: Cell) -> str:
    if cell.is_black:
        return BLACK_SYMBOL
    return cell.char or EMPTY_SYMBOL


def format_grid(state: EditorState) -> str:
    """Render the board; each cell shows its number, content and a cursor mark.

    The cursor cell is marked with ``*`` and the other cells of the active
    word with ``~``.
    """

    span = state.active_span()
    cols = state.size.cols
    lines = ["    " + "".join(f"{c:>4} " for c in range(cols))]
    lines.append("    " + "-" * (5 * cols))
    for r, row in enumerate(state.grid):
        rendered = []
        for c, cell in enumerate(row):
            number = "" if cell.number is None else str(cell.number)
            mark = " "
            if state.cursor is not None and (state.cursor.r, state.cursor.c) == (r, c):
                mark = CURSOR_MARK
            elif span is not None and span.contains(Cursor(r, c)):
                mark = WORD_MARK
            rendered.append(f"{number:>2}{cell_symbol(cell):>2}{mark}")
        lines.append(f"{r:>2} |" + "".join(rendered))
    return "\n".join(lines)


def format_status(state: EditorState) -> str:
    arrow = DIRECTION_ARROWS[state.direction.value]
    cursor = "-" if state.cursor is None else f"({state.cursor.r},{state.cursor.c})"
    head = f"mode={state.mode.value} direction={state.direction.value}{arrow} cursor={cursor}"
    word = state.active_word()
    if word is None:
        return head + "\nSelect a cell to see its clue."
    letters = " ".join(
        f"[{c.char or EMPTY_SYMBOL}]" if c.is_active else (c.char or EMPTY_SYMBOL) for c in word.cells
    )
    clue = word.clue_text or "(no clue yet)"
    return f"{head}\n{word.number} {word.direction.value}: {clue}\n  {letters}"


def format_clue_lists(state: EditorState) -> str:
    listing = clue_listing(state.numbering())
    lines: List[str] = []
    for title, items in (("Across", listing.across), ("Down", listing.down)):
        lines.append(f"{title}:")
        if not items:
            lines.append("  (none)")
        for number, key in items:
            lines.append(f"  {number:>2}. {state.clue_texts.get(key, '')}")
    return "\n".join(lines)


def format_project_list(projects: Iterable[Project]) -> str:
    lines = [f"{p.id}  {p.updated_at}  {p.name}" for p in projects]
    return "\n".join(lines) if lines else "(no saved projects)"


def pretty_print_state(state: EditorState, *, label: str | None = None, stream=None) -> None:
    """Print the board, the current word and both clue lists."""

    stream = stream or sys.stdout
    if label:
        print(label, file=stream)
    print(format_grid(state), file=stream)
    print(file=stream)
    print(format_status(state), file=stream)
    print(file=stream)
    print(format_clue_lists(state), file=stream)
