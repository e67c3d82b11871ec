"""Editing session orchestration.

:class:`EditorSession` owns the current :class:`EditorState`, feeds events
through the state machine, mirrors the working puzzle into the session
key-value store and runs the project save/load/delete operations. Failures at
those boundaries are logged and reported as a :class:`Message`; the in-memory
state is only replaced after a boundary call has succeeded.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Callable, List, Optional

from ..core.constants import (
    DEFAULT_PROJECT_NAME,
    SESSION_CLUES_KEY,
    SESSION_GRID_KEY,
    SESSION_SIZE_KEY,
    MessageKind,
)
from ..core.exceptions import CrosswordBuilderError, ProjectNotFoundError, StorageError
from ..core.models import Project, ProjectMeta
from ..io.kv_store import DEFAULT_SESSION_FILE, JsonKeyValueStore
from ..io.project_store import DEFAULT_STORE_DIR, ProjectStore, new_project_id, utc_now
from ..io.serialization import (
    clue_texts_from_entries,
    crossword_from_payload,
    crossword_to_payload,
    grid_to_jsonable,
    parse_grid,
    parse_size,
    size_to_jsonable,
)
from ..utils.logger import get_logger
from .state import Clear, EditorState, Event, Transition, reduce


LOGGER = get_logger(__name__)

HOME_ENV = "CROSSWORD_BUILDER_HOME"

NamePrompt = Callable[[str], Optional[str]]
Confirm = Callable[[str], bool]


@dataclass
class SessionConfig:
    """Locations and defaults used by :class:`EditorSession`."""

    projects_dir: Path = field(default_factory=lambda: DEFAULT_STORE_DIR)
    session_file: Path = field(default_factory=lambda: DEFAULT_SESSION_FILE)
    default_project_name: str = DEFAULT_PROJECT_NAME

    @classmethod
    def from_home(cls, home: Path | str) -> SessionConfig:
        home = Path(home)
        return cls(projects_dir=home / "projects", session_file=home / "crossword-session.json")

    @classmethod
    def from_env(cls) -> SessionConfig:
        home = os.environ.get(HOME_ENV)
        return cls.from_home(home) if home else cls()


@dataclass
class Message:
    text: str
    kind: MessageKind = MessageKind.SUCCESS


def _accept_default_name(default: str) -> Optional[str]:
    return default


def _always_confirm(question: str) -> bool:
    return True


class EditorSession:
    """Stateful façade a user interface talks to."""

    def __init__(
        self,
        project_store: Optional[ProjectStore] = None,
        session_store: Optional[JsonKeyValueStore] = None,
        *,
        config: Optional[SessionConfig] = None,
        prompt_name: NamePrompt = _accept_default_name,
        confirm: Confirm = _always_confirm,
    ) -> None:
        self.config = config or SessionConfig()
        self.project_store = project_store or ProjectStore(self.config.projects_dir)
        self.session_store = session_store or JsonKeyValueStore(self.config.session_file)
        self.prompt_name = prompt_name
        self.confirm = confirm
        self.project_meta: Optional[ProjectMeta] = None
        self.message: Optional[Message] = None
        self.state = self._restore()

    # ------------------------------------------------------------------
    # Board events
    # ------------------------------------------------------------------

    def dispatch(self, event: Event) -> Transition:
        """Run ``event`` through the state machine and persist the result."""

        transition = reduce(self.state, event)
        self._replace_state(transition.state)
        if isinstance(event, Clear):
            # a cleared board no longer belongs to the open project
            self.project_meta = None
        return transition

    def clear(self) -> bool:
        """Reset the board and forget the open project, after confirmation."""

        if not self.confirm("Clear the whole board? Unsaved changes will be lost."):
            return False
        self.dispatch(Clear())
        LOGGER.info("Board cleared")
        return True

    # ------------------------------------------------------------------
    # Project operations
    # ------------------------------------------------------------------

    def list_projects(self) -> List[Project]:
        try:
            return self.project_store.list_projects()
        except CrosswordBuilderError as exc:
            self._fail("Could not list projects", exc)
            return []

    def save(self, name: Optional[str] = None) -> Optional[Project]:
        """Save to the open project, or create a new one named by ``name`` or the prompt.

        Returns ``None`` when the user cancels or the store fails.
        """

        meta = self.project_meta
        if meta is None:
            if name is None:
                name = self.prompt_name(self.config.default_project_name)
                if name is None:
                    LOGGER.debug("Save cancelled")
                    return None
            meta = ProjectMeta(
                id=new_project_id(),
                name=name.strip() or self.config.default_project_name,
                created_at=utc_now(),
            )

        state = self.state
        project = Project(
            id=meta.id,
            name=meta.name,
            created_at=meta.created_at,
            updated_at=utc_now(),
            data=crossword_to_payload(state.size, state.grid, state.clue_texts),
        )
        try:
            saved = self.project_store.save(project)
        except CrosswordBuilderError as exc:
            self._fail("Saving failed", exc)
            return None

        self.project_meta = meta
        self._succeed(f'Saved "{meta.name}"')
        return saved

    def load(self, project_id: str) -> bool:
        try:
            project = self.project_store.load(project_id)
            if project is None:
                raise ProjectNotFoundError(f"Project {project_id} does not exist")
            data = crossword_from_payload(project.data)
        except ProjectNotFoundError as exc:
            self._fail("Project not found", exc)
            return False
        except CrosswordBuilderError as exc:
            self._fail("Loading failed", exc)
            return False

        restored = EditorState.initial(
            size=data.size,
            grid=data.grid,
            clue_texts=clue_texts_from_entries(data.clues),
        )
        self._replace_state(replace(restored, mode=self.state.mode, direction=self.state.direction))
        self.project_meta = project.meta
        self._succeed(f'Loaded "{project.name}"')
        return True

    def delete(self, project_id: str) -> bool:
        if not self.confirm("Delete this project? This cannot be undone."):
            return False
        try:
            self.project_store.delete(project_id)
        except CrosswordBuilderError as exc:
            self._fail("Deleting failed", exc)
            return False

        if self.project_meta is not None and self.project_meta.id == project_id:
            self.project_meta = None
            self._succeed("The open project was deleted; the next save creates a new one")
        else:
            self._succeed("Project deleted")
        return True

    # ------------------------------------------------------------------
    # Session persistence
    # ------------------------------------------------------------------

    def _restore(self) -> EditorState:
        try:
            raw_size = self.session_store.get(SESSION_SIZE_KEY)
            raw_grid = self.session_store.get(SESSION_GRID_KEY)
            raw_clues = self.session_store.get(SESSION_CLUES_KEY)
        except StorageError as exc:
            self._fail("Could not restore the previous session", exc)
            return EditorState.initial()

        clue_texts = {}
        if isinstance(raw_clues, dict):
            clue_texts = {str(k): str(v) for k, v in raw_clues.items()}
        elif raw_clues is not None:
            LOGGER.warning("Stored clue texts are invalid, ignoring them")

        if raw_size is None or raw_grid is None:
            return EditorState.initial(clue_texts=clue_texts)
        try:
            size = parse_size(raw_size)
            grid = parse_grid(raw_grid, size)
        except CrosswordBuilderError as exc:
            LOGGER.warning("Stored session is invalid, starting fresh: %s", exc)
            return EditorState.initial(clue_texts=clue_texts)

        LOGGER.debug("Restored session %sx%s", size.rows, size.cols)
        return EditorState.initial(size=size, grid=grid, clue_texts=clue_texts)

    def _replace_state(self, new_state: EditorState) -> None:
        previous = self.state
        self.state = new_state
        try:
            # The stored grid is only readable together with its size.
            if previous.size != new_state.size or previous.grid != new_state.grid:
                self.session_store.set(SESSION_SIZE_KEY, size_to_jsonable(new_state.size))
                self.session_store.set(SESSION_GRID_KEY, grid_to_jsonable(new_state.grid))
            if previous.clue_texts != new_state.clue_texts:
                self.session_store.set(SESSION_CLUES_KEY, dict(new_state.clue_texts))
        except StorageError as exc:
            self._fail("Could not persist the session", exc)

    # ------------------------------------------------------------------
    # Messages
    # ------------------------------------------------------------------

    def _succeed(self, text: str) -> None:
        LOGGER.info(text)
        self.message = Message(text, MessageKind.SUCCESS)

    def _fail(self, text: str, exc: Exception) -> None:
        LOGGER.error("%s: %s", text, exc)
        self.message = Message(text, MessageKind.ERROR)
