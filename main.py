"""CLI entrypoint for the crossword grid builder."""

from __future__ import annotations

import argparse
import shlex
import sys
from pathlib import Path
from typing import Callable, Dict, List, Optional, TextIO

from crossword_builder.core.constants import KEY_SPACE, Mode
from crossword_builder.engine.session import EditorSession, SessionConfig
from crossword_builder.engine.state import (
    CellClick,
    ClickOutside,
    CompositionEnd,
    CompositionStart,
    KeyPress,
    Resize,
    SetClueText,
    SetMode,
    TextInput,
    ToggleDirection,
)
from crossword_builder.io.clue_sheet import build_clue_sheet, write_clue_sheet
from crossword_builder.utils.logger import configure_logging, get_logger
from crossword_builder.utils.pretty import format_project_list, pretty_print_state


LOGGER = get_logger(__name__)

KEY_ALIASES = {
    "space": KEY_SPACE,
    "backspace": "Backspace",
    "up": "ArrowUp",
    "down": "ArrowDown",
    "left": "ArrowLeft",
    "right": "ArrowRight",
}


def _cell(args: List[str]) -> tuple[int, int]:
    if len(args) < 2:
        raise ValueError("expected ROW COL")
    return int(args[0]), int(args[1])


def _text_after_cell(args: List[str]) -> str:
    if len(args) < 3:
        raise ValueError("expected ROW COL TEXT")
    return " ".join(args[2:])


def _cmd_compose(session: EditorSession, args: List[str], out: TextIO) -> None:
    r, c = _cell(args)
    session.dispatch(CompositionStart())
    session.dispatch(CompositionEnd(r, c, _text_after_cell(args)))


def _cmd_key(session: EditorSession, args: List[str], out: TextIO) -> None:
    if not args:
        raise ValueError("expected a key name")
    session.dispatch(KeyPress(KEY_ALIASES.get(args[0].lower(), args[0])))


def _cmd_clue(session: EditorSession, args: List[str], out: TextIO) -> None:
    if len(args) < 2:
        raise ValueError("expected KEY TEXT")
    session.dispatch(SetClueText(args[0], " ".join(args[1:])))


def _cmd_save(session: EditorSession, args: List[str], out: TextIO) -> None:
    session.save(" ".join(args) if args else None)


def _cmd_single_id(action: Callable[[EditorSession, str], object]):
    def run(session: EditorSession, args: List[str], out: TextIO) -> None:
        if len(args) != 1:
            raise ValueError("expected a project id")
        action(session, args[0])

    return run


COMMANDS: Dict[str, Callable[[EditorSession, List[str], TextIO], None]] = {
    "click": lambda s, a, o: s.dispatch(CellClick(*_cell(a))),
    "rclick": lambda s, a, o: s.dispatch(CellClick(*_cell(a), secondary=True)),
    "outside": lambda s, a, o: s.dispatch(ClickOutside()),
    "type": lambda s, a, o: s.dispatch(TextInput(*_cell(a), _text_after_cell(a))),
    "compose": _cmd_compose,
    "key": _cmd_key,
    "mode": lambda s, a, o: s.dispatch(SetMode(Mode(a[0] if a else ""))),
    "toggle": lambda s, a, o: s.dispatch(ToggleDirection()),
    "resize": lambda s, a, o: s.dispatch(Resize(*_cell(a))),
    "clue": _cmd_clue,
    "save": _cmd_save,
    "load": _cmd_single_id(EditorSession.load),
    "delete": _cmd_single_id(EditorSession.delete),
    "clear": lambda s, a, o: s.clear(),
    "show": lambda s, a, o: pretty_print_state(s.state, stream=o),
}


def run_command(session: EditorSession, line: str, out: Optional[TextIO] = None) -> None:
    """Apply one editor command line such as ``type 0 0 CAT`` to ``session``."""

    out = out or sys.stdout
    parts = shlex.split(line, comments=True)
    if not parts:
        return
    name, args = parts[0].lower(), parts[1:]
    command = COMMANDS.get(name)
    if command is None:
        raise ValueError(f"unknown command {name!r}")
    session.message = None
    command(session, args, out)
    if session.message is not None:
        print(f"[{session.message.kind.value}] {session.message.text}", file=out)


def run_script(session: EditorSession, lines, out: Optional[TextIO] = None) -> int:
    """Run every command line, returning the number of rejected lines."""

    errors = 0
    for lineno, line in enumerate(lines, start=1):
        try:
            run_command(session, line, out)
        except ValueError as exc:
            errors += 1
            LOGGER.warning("Line %s rejected (%s): %s", lineno, line.strip(), exc)
    return errors


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Build crossword grids with automatic numbering and clues",
    )
    parser.add_argument(
        "--home",
        type=Path,
        help="Directory holding saved projects and the session file "
        "(default: $CROSSWORD_BUILDER_HOME or local_db/)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("show", help="Print the current board and clues")

    edit = sub.add_parser("edit", help="Apply editor commands from a script or stdin")
    edit.add_argument("--script", type=Path, help="File with one editor command per line")

    sub.add_parser("list", help="List saved projects")

    delete = sub.add_parser("delete", help="Delete a saved project")
    delete.add_argument("project_id")

    export = sub.add_parser("export-clues", help="Export the clue sheet of the current board")
    export.add_argument("--output", type=Path, help="Optional path for the sheet")
    export.add_argument(
        "--sep",
        type=str,
        default=",",
        help="Column separator, ',' for CSV or '\\t' for TSV",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    config = SessionConfig.from_home(args.home) if args.home else SessionConfig.from_env()
    session = EditorSession(config=config)

    if args.command == "show":
        pretty_print_state(session.state)
        return 0

    if args.command == "edit":
        if args.script:
            lines = args.script.read_text(encoding="utf-8").splitlines()
        else:
            lines = sys.stdin
        errors = run_script(session, lines)
        pretty_print_state(session.state)
        return 1 if errors else 0

    if args.command == "list":
        print(format_project_list(session.list_projects()))
        return 0

    if args.command == "delete":
        ok = session.delete(args.project_id)
        if session.message is not None:
            print(session.message.text)
        return 0 if ok else 1

    if args.command == "export-clues":
        sep = "\t" if args.sep in ("\\t", "tab") else args.sep
        frame = build_clue_sheet(session.state.grid, session.state.size, session.state.clue_texts)
        text = write_clue_sheet(frame, args.output, sep=sep)
        if args.output is None:
            print(text, end="")
        return 0

    parser.error(f"unknown command {args.command}")
    return 2


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
