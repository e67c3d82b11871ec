import json
import tempfile
import unittest
from pathlib import Path

from crossword_builder.core.exceptions import ProjectFormatError, StorageError
from crossword_builder.core.models import Project
from crossword_builder.io.kv_store import JsonKeyValueStore
from crossword_builder.io.project_store import ProjectStore, new_project_id


def make_project(project_id: str, name: str = "Demo") -> Project:
    return Project(
        id=project_id,
        name=name,
        created_at="2026-01-01T00:00:00+00:00",
        updated_at="",
        data={"size": {"rows": 3, "cols": 3}, "grid": [], "clues": []},
    )


class ProjectStoreTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name) / "projects"
        self.store = ProjectStore(self.root)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_save_then_load(self) -> None:
        saved = self.store.save(make_project("p1"))
        self.assertTrue(saved.updated_at)
        loaded = self.store.load("p1")
        self.assertEqual(loaded.name, "Demo")
        self.assertEqual(loaded.updated_at, saved.updated_at)
        self.assertEqual(loaded.data["size"], {"rows": 3, "cols": 3})

    def test_document_uses_camel_case_keys(self) -> None:
        self.store.save(make_project("p1"))
        doc = json.loads((self.root / "p1.json").read_text(encoding="utf-8"))
        self.assertEqual(set(doc), {"id", "name", "createdAt", "updatedAt", "data"})

    def test_load_missing_returns_none(self) -> None:
        self.assertIsNone(self.store.load("nope"))

    def test_load_corrupt_file_raises_storage_error(self) -> None:
        self.root.mkdir(parents=True)
        (self.root / "bad.json").write_text("{not json", encoding="utf-8")
        with self.assertRaises(StorageError):
            self.store.load("bad")

    def test_load_document_without_id_raises_format_error(self) -> None:
        self.root.mkdir(parents=True)
        (self.root / "anon.json").write_text(json.dumps({"name": "x"}), encoding="utf-8")
        with self.assertRaises(ProjectFormatError):
            self.store.load("anon")

    def test_load_undecodable_file_raises_storage_error(self) -> None:
        self.root.mkdir(parents=True)
        (self.root / "bad.json").write_bytes(b'{"id": "bad", "name": "\xff"}')
        with self.assertRaises(StorageError):
            self.store.load("bad")

    def test_list_skips_undecodable_file(self) -> None:
        self.store.save(make_project("good"))
        (self.root / "bad.json").write_bytes(b'{"id": "bad", "name": "\xff"}')
        with self.assertLogs("crossword_builder.io.project_store", level="WARNING"):
            projects = self.store.list_projects()
        self.assertEqual([p.id for p in projects], ["good"])

    def test_list_sorted_newest_first_and_skips_bad_files(self) -> None:
        self.root.mkdir(parents=True)
        for project_id, updated in (("old", "2026-01-01T00:00:00+00:00"), ("new", "2026-03-01T00:00:00+00:00")):
            doc = {"id": project_id, "name": project_id, "createdAt": updated, "updatedAt": updated, "data": {}}
            (self.root / f"{project_id}.json").write_text(json.dumps(doc), encoding="utf-8")
        (self.root / "broken.json").write_text("[", encoding="utf-8")
        (self.root / "notes.txt").write_text("ignored", encoding="utf-8")

        with self.assertLogs("crossword_builder.io.project_store", level="WARNING"):
            projects = self.store.list_projects()
        self.assertEqual([p.id for p in projects], ["new", "old"])

    def test_list_creates_missing_directory(self) -> None:
        self.assertEqual(self.store.list_projects(), [])
        self.assertTrue(self.root.is_dir())

    def test_delete_removes_file_and_ignores_missing(self) -> None:
        self.store.save(make_project("p1"))
        self.store.delete("p1")
        self.assertIsNone(self.store.load("p1"))
        self.store.delete("p1")

    def test_rejects_path_like_ids(self) -> None:
        with self.assertRaises(StorageError):
            self.store.load("../escape")

    def test_new_ids_are_unique(self) -> None:
        self.assertNotEqual(new_project_id(), new_project_id())


class JsonKeyValueStoreTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.path = Path(self._tmp.name) / "nested" / "session.json"

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_values_survive_reopen(self) -> None:
        store = JsonKeyValueStore(self.path)
        store.set("cw_size", {"rows": 4, "cols": 6})
        reopened = JsonKeyValueStore(self.path)
        self.assertEqual(reopened.get("cw_size"), {"rows": 4, "cols": 6})

    def test_get_default(self) -> None:
        store = JsonKeyValueStore(self.path)
        self.assertEqual(store.get("missing", 7), 7)
        store.set("k", None)
        self.assertEqual(JsonKeyValueStore(self.path).get("k", "fallback"), "fallback")

    def test_undecodable_file_raises_storage_error(self) -> None:
        self.path.parent.mkdir(parents=True)
        self.path.write_bytes(b'{"cw_size": "\xff"}')
        with self.assertRaises(StorageError):
            JsonKeyValueStore(self.path).get("cw_size")

    def test_corrupt_file_raises_storage_error(self) -> None:
        self.path.parent.mkdir(parents=True)
        self.path.write_text("nope", encoding="utf-8")
        with self.assertRaises(StorageError):
            JsonKeyValueStore(self.path).get("cw_grid")


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
