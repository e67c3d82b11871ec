"""Persistent project document store.

Every project is saved as ``<id>.json`` under ``local_db/projects/``. The
documents carry the project identity, timestamps and the puzzle payload.
"""

from __future__ import annotations

import json
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from ..core.exceptions import ProjectFormatError, StorageError
from ..core.models import Project
from ..utils.logger import get_logger
from .serialization import project_from_document, project_to_document


LOGGER = get_logger(__name__)

DEFAULT_STORE_DIR = Path("local_db/projects")


def utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


def new_project_id() -> str:
    ts = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%S")
    short_uuid = uuid.uuid4().hex[:8]
    return f"{ts}_{short_uuid}"


class ProjectStore:
    """Save, list, load and delete named puzzle projects as JSON documents."""

    def __init__(self, store_dir: Path | str = DEFAULT_STORE_DIR) -> None:
        self.store_dir = Path(store_dir)

    # ------------------------------------------------------------------
    # Public interface
    # ------------------------------------------------------------------

    def list_projects(self) -> List[Project]:
        """Return every readable project, most recently updated first."""

        try:
            self.store_dir.mkdir(parents=True, exist_ok=True)
            paths = sorted(p for p in self.store_dir.iterdir() if p.suffix == ".json")
        except OSError as exc:
            raise StorageError(f"Cannot list projects in {self.store_dir}: {exc}") from exc

        projects: List[Project] = []
        for path in paths:
            if not path.is_file():
                continue
            try:
                project = project_from_document(json.loads(path.read_text(encoding="utf-8")))
            except (OSError, UnicodeDecodeError, json.JSONDecodeError, ProjectFormatError) as exc:
                LOGGER.warning("Skipping unreadable project file %s: %s", path.name, exc)
                continue
            if project.id != path.stem:
                LOGGER.warning("Project id mismatch: file=%s, document=%s", path.stem, project.id)
            projects.append(project)

        projects.sort(key=lambda p: p.updated_at, reverse=True)
        return projects

    def save(self, project: Project) -> Project:
        """Write ``project`` with a fresh ``updated_at`` and return what was written."""

        project.updated_at = utc_now()
        path = self._path(project.id)
        try:
            self.store_dir.mkdir(parents=True, exist_ok=True)
            path.write_text(
                json.dumps(project_to_document(project), ensure_ascii=False, indent=2),
                encoding="utf-8",
            )
        except OSError as exc:
            raise StorageError(f"Cannot save project {project.id}: {exc}") from exc
        LOGGER.info("Project saved: %s (%s)", project.name, project.id)
        return project

    def load(self, project_id: str) -> Optional[Project]:
        path = self._path(project_id)
        if not path.exists():
            LOGGER.debug("Project not found: %s", project_id)
            return None
        try:
            document = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise StorageError(f"Cannot read project {project_id}: {exc}") from exc
        return project_from_document(document)

    def delete(self, project_id: str) -> None:
        path = self._path(project_id)
        if not path.exists():
            return
        try:
            path.unlink()
        except OSError as exc:
            raise StorageError(f"Cannot delete project {project_id}: {exc}") from exc
        LOGGER.info("Project deleted: %s", project_id)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _path(self, project_id: str) -> Path:
        if not project_id or "/" in project_id or "\\" in project_id or project_id.startswith("."):
            raise StorageError(f"Invalid project id: {project_id!r}")
        return self.store_dir / f"{project_id}.json"
