"""Cursor and input state machine of the editor board.

The board state is a frozen :class:`EditorState`. Every user action is an
event object, and :func:`reduce` maps ``(state, event)`` to a
:class:`Transition` holding the next state and, when the cursor should take
keyboard focus, the cell to focus. Transitions never fail and never leave the
cursor on a black square or outside the grid.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Callable, Dict, Mapping, Optional, Type, Union

import grapheme

from ..core.constants import (
    ARROW_MOVES,
    KEY_BACKSPACE,
    KEY_SPACE,
    Direction,
    Mode,
)
from ..core.models import (
    ActiveWord,
    Cursor,
    Grid,
    GridSize,
    WordSpan,
)
from ..utils.logger import get_logger
from .grid import (
    empty_grid,
    is_open,
    neighbor,
    resize_grid,
    scan_open_cell,
    toggle_black,
    write_char,
)
from .locator import active_word, locate_word, word_key_at
from .numbering import NumberingResult, number_grid


LOGGER = get_logger(__name__)


@dataclass(frozen=True)
class EditorState:
    """Everything the board needs to render and to handle the next event."""

    size: GridSize
    grid: Grid
    clue_texts: Mapping[str, str] = field(default_factory=dict)
    mode: Mode = Mode.INPUT
    direction: Direction = Direction.ACROSS
    cursor: Optional[Cursor] = None
    composing: bool = False

    @classmethod
    def initial(
        cls,
        size: Optional[GridSize] = None,
        grid: Optional[Grid] = None,
        clue_texts: Optional[Mapping[str, str]] = None,
    ) -> EditorState:
        """Build a state from optional stored parts, renumbering the grid."""

        size = size or GridSize()
        grid = grid if grid is not None else empty_grid(size)
        return cls(
            size=size,
            grid=number_grid(grid, size).grid,
            clue_texts=dict(clue_texts or {}),
        )

    def numbering(self) -> NumberingResult:
        return number_grid(self.grid, self.size)

    def active_span(self) -> Optional[WordSpan]:
        return locate_word(self.grid, self.size, self.cursor, self.direction)

    def active_key(self) -> Optional[str]:
        return word_key_at(self.grid, self.size, self.cursor, self.direction)

    def active_word(self) -> Optional[ActiveWord]:
        return active_word(self.grid, self.size, self.cursor, self.direction, self.clue_texts)


@dataclass(frozen=True)
class Transition:
    state: EditorState
    focus: Optional[Cursor] = None


# ----------------------------------------------------------------------
# Events
# ----------------------------------------------------------------------


@dataclass(frozen=True)
class CellClick:
    """Click on a cell. ``secondary`` marks a right-click (context menu)."""

    r: int
    c: int
    secondary: bool = False


@dataclass(frozen=True)
class ClickOutside:
    pass


@dataclass(frozen=True)
class TextInput:
    """Text committed into the cell at ``(r, c)``, one or more characters."""

    r: int
    c: int
    text: str


@dataclass(frozen=True)
class CompositionStart:
    pass


@dataclass(frozen=True)
class CompositionEnd:
    """Input-method composition finished with ``text`` at ``(r, c)``."""

    r: int
    c: int
    text: str


@dataclass(frozen=True)
class KeyPress:
    """Key pressed while a cell has focus; defaults to the cursor cell."""

    key: str
    r: Optional[int] = None
    c: Optional[int] = None


@dataclass(frozen=True)
class ToggleDirection:
    pass


@dataclass(frozen=True)
class SetMode:
    mode: Mode


@dataclass(frozen=True)
class Resize:
    rows: int
    cols: int


@dataclass(frozen=True)
class SetClueText:
    key: str
    text: str


@dataclass(frozen=True)
class Clear:
    pass


Event = Union[
    CellClick,
    ClickOutside,
    TextInput,
    CompositionStart,
    CompositionEnd,
    KeyPress,
    ToggleDirection,
    SetMode,
    Resize,
    SetClueText,
    Clear,
]


# ----------------------------------------------------------------------
# Transition function
# ----------------------------------------------------------------------


def reduce(state: EditorState, event: Event) -> Transition:
    """Apply one event to ``state``."""

    handler = _HANDLERS.get(type(event))
    if handler is None:
        raise TypeError(f"Unsupported editor event: {event!r}")
    transition = handler(state, event)
    LOGGER.debug(
        "%s -> cursor=%s direction=%s mode=%s",
        type(event).__name__,
        transition.state.cursor,
        transition.state.direction.value,
        transition.state.mode.value,
    )
    return transition


def _on_cell_click(state: EditorState, event: CellClick) -> Transition:
    if not state.size.contains(event.r, event.c):
        return Transition(state)

    if state.mode == Mode.EDIT_BLACK or event.secondary:
        return Transition(_toggle_black_square(state, event.r, event.c))

    if state.grid[event.r][event.c].is_black:
        return Transition(state)

    target = Cursor(event.r, event.c)
    if state.cursor == target:
        return Transition(replace(state, direction=state.direction.toggled()), focus=target)
    return Transition(replace(state, cursor=target), focus=target)


def _toggle_black_square(state: EditorState, r: int, c: int) -> EditorState:
    grid = number_grid(toggle_black(state.grid, r, c), state.size).grid
    cursor = state.cursor
    if cursor is not None and grid[cursor.r][cursor.c].is_black:
        cursor = None
    return replace(state, grid=grid, cursor=cursor)


def _on_click_outside(state: EditorState, event: ClickOutside) -> Transition:
    return Transition(replace(state, cursor=None))


def _on_text_input(state: EditorState, event: TextInput) -> Transition:
    if state.composing:
        # Intermediate composition text; the final string arrives with CompositionEnd.
        return Transition(state)
    return fill_sequence(state, event.r, event.c, event.text)


def _on_composition_start(state: EditorState, event: CompositionStart) -> Transition:
    return Transition(replace(state, composing=True))


def _on_composition_end(state: EditorState, event: CompositionEnd) -> Transition:
    return fill_sequence(replace(state, composing=False), event.r, event.c, event.text)


def fill_sequence(state: EditorState, r: int, c: int, text: str) -> Transition:
    """Write ``text`` one grapheme per cell from ``(r, c)`` along the direction.

    Writing stops at a black square or the edge and the rest of the text is
    dropped. The cursor lands after the last written cell, or on it when the
    next cell is blocked.
    """

    if state.mode == Mode.EDIT_BLACK or not text:
        return Transition(state)
    if not is_open(state.grid, state.size, r, c):
        return Transition(state)

    grid = state.grid
    current = Cursor(r, c)
    last = current
    for char in grapheme.graphemes(text):
        if not is_open(grid, state.size, current.r, current.c):
            break
        grid = write_char(grid, current.r, current.c, char)
        last = current
        current = neighbor(current, state.direction)

    following = neighbor(last, state.direction)
    if is_open(grid, state.size, following.r, following.c):
        cursor = following
    else:
        cursor = last
    return Transition(replace(state, grid=grid, cursor=cursor), focus=cursor)


def _on_key_press(state: EditorState, event: KeyPress) -> Transition:
    if state.mode == Mode.EDIT_BLACK:
        return Transition(state)

    if event.r is not None and event.c is not None:
        origin: Optional[Cursor] = Cursor(event.r, event.c)
    else:
        origin = state.cursor
    if origin is None or not is_open(state.grid, state.size, origin.r, origin.c):
        return Transition(state)

    if event.key == KEY_SPACE:
        return Transition(replace(state, direction=state.direction.toggled()))

    if event.key == KEY_BACKSPACE:
        if state.grid[origin.r][origin.c].char == "":
            return _move(state, origin, state.direction, forward=False)
        grid = write_char(state.grid, origin.r, origin.c, "")
        return Transition(replace(state, grid=grid))

    arrow = ARROW_MOVES.get(event.key)
    if arrow is not None:
        axis, forward = arrow
        return _move(state, origin, axis, forward=forward)

    return Transition(state)


def _move(state: EditorState, origin: Cursor, axis: Direction, forward: bool) -> Transition:
    target = scan_open_cell(state.grid, state.size, origin, axis, forward=forward)
    if target is None:
        return Transition(state)
    return Transition(replace(state, cursor=target), focus=target)


def _on_toggle_direction(state: EditorState, event: ToggleDirection) -> Transition:
    return Transition(replace(state, direction=state.direction.toggled()))


def _on_set_mode(state: EditorState, event: SetMode) -> Transition:
    return Transition(replace(state, mode=Mode(event.mode), composing=False))


def _on_resize(state: EditorState, event: Resize) -> Transition:
    size = GridSize.clamped(event.rows, event.cols)
    grid = resize_grid(state.grid, state.size, size)
    grid = number_grid(grid, size).grid
    return Transition(replace(state, size=size, grid=grid, cursor=None))


def _on_set_clue_text(state: EditorState, event: SetClueText) -> Transition:
    clue_texts = dict(state.clue_texts)
    clue_texts[event.key] = event.text
    return Transition(replace(state, clue_texts=clue_texts))


def _on_clear(state: EditorState, event: Clear) -> Transition:
    fresh = EditorState.initial()
    return Transition(replace(fresh, mode=state.mode, direction=state.direction))


_HANDLERS: Dict[Type, Callable[[EditorState, Event], Transition]] = {
    CellClick: _on_cell_click,
    ClickOutside: _on_click_outside,
    TextInput: _on_text_input,
    CompositionStart: _on_composition_start,
    CompositionEnd: _on_composition_end,
    KeyPress: _on_key_press,
    ToggleDirection: _on_toggle_direction,
    SetMode: _on_set_mode,
    Resize: _on_resize,
    SetClueText: _on_set_clue_text,
    Clear: _on_clear,
}
