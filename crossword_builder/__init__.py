"""Crossword grid editor with automatic numbering and a typing cursor.

This package exposes the public API surface via:

- ``crossword_builder.engine.numbering.number_grid``: standard crossword numbering.
- ``crossword_builder.engine.locator.locate_word``: word span under the cursor.
- ``crossword_builder.engine.state``: the editor state machine (``EditorState``,
  event types and ``reduce``).
- ``crossword_builder.engine.session.EditorSession``: state plus project and
  session persistence.
"""

from .engine.numbering import NumberingResult, number_grid
from .engine.locator import locate_word
from .engine.state import EditorState, Transition, reduce
from .engine.session import EditorSession, SessionConfig

__all__ = [
    "NumberingResult",
    "number_grid",
    "locate_word",
    "EditorState",
    "Transition",
    "reduce",
    "EditorSession",
    "SessionConfig",
]

__version__ = "0.1.0"
