import io
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path

import main
from crossword_builder.core.constants import Direction
from crossword_builder.core.models import Cursor
from crossword_builder.engine.session import EditorSession, SessionConfig
from crossword_builder.engine.state import EditorState
from crossword_builder.utils.pretty import format_clue_lists, format_grid, format_status


class RunScriptTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.home = Path(self._tmp.name)
        self.session = EditorSession(config=SessionConfig.from_home(self.home))
        self.out = io.StringIO()

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_editing_commands_drive_the_session(self) -> None:
        script = [
            "click 0 0",
            "type 0 0 CAT",
            "key left",
            "key space",
            "clue 1-across Small feline",
            "# comments and blank lines are ignored",
            "",
        ]
        errors = main.run_script(self.session, script, self.out)
        state = self.session.state
        self.assertEqual(errors, 0)
        self.assertEqual("".join(cell.char for cell in state.grid[0][:3]), "CAT")
        self.assertEqual(state.cursor, Cursor(0, 2))
        self.assertEqual(state.direction, Direction.DOWN)
        self.assertEqual(state.clue_texts["1-across"], "Small feline")

    def test_black_squares_and_resize(self) -> None:
        main.run_script(self.session, ["mode edit_black", "click 1 1", "rclick 0 4", "resize 4 12"], self.out)
        state = self.session.state
        self.assertTrue(state.grid[1][1].is_black)
        self.assertTrue(state.grid[0][4].is_black)
        self.assertEqual((state.size.rows, state.size.cols), (4, 10))

    def test_compose_fills_sequence(self) -> None:
        main.run_script(self.session, ["toggle", "compose 0 1 ねこ"], self.out)
        grid = self.session.state.grid
        self.assertEqual((grid[0][1].char, grid[1][1].char), ("ね", "こ"))

    def test_save_and_load_print_messages(self) -> None:
        main.run_script(self.session, ["type 0 0 AB", 'save "First grid"'], self.out)
        project_id = self.session.project_meta.id
        main.run_script(self.session, ["clear", f"load {project_id}"], self.out)
        output = self.out.getvalue()
        self.assertIn('[success] Saved "First grid"', output)
        self.assertIn('[success] Loaded "First grid"', output)
        self.assertEqual(self.session.state.grid[0][1].char, "B")

    def test_bad_lines_are_counted(self) -> None:
        with self.assertLogs("main", level="WARNING"):
            errors = main.run_script(self.session, ["jump 1 1", "click x y", "mode sideways", "load"], self.out)
        self.assertEqual(errors, 4)


class MainTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.home = self._tmp.name

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def run_main(self, *argv: str) -> tuple[int, str]:
        buffer = io.StringIO()
        with redirect_stdout(buffer):
            code = main.main(["--home", self.home, *argv])
        return code, buffer.getvalue()

    def test_edit_script_then_export_clues(self) -> None:
        script = Path(self.home) / "script.txt"
        script.write_text("type 0 0 HELLO\nclue 1-across Greeting\n", encoding="utf-8")
        code, output = self.run_main("edit", "--script", str(script))
        self.assertEqual(code, 0)
        self.assertIn("Greeting", output)

        code, output = self.run_main("export-clues", "--sep", "\\t")
        self.assertEqual(code, 0)
        self.assertIn("1\tacross\t1-across\t5\tHELLO\tGreeting", output)

    def test_list_and_delete(self) -> None:
        session = EditorSession(config=SessionConfig.from_home(self.home))
        project = session.save("Listed")
        code, output = self.run_main("list")
        self.assertIn("Listed", output)
        code, output = self.run_main("delete", project.id)
        self.assertEqual(code, 0)
        code, output = self.run_main("list")
        self.assertIn("(no saved projects)", output)


class PrettyTests(unittest.TestCase):
    def test_grid_marks_cursor_and_word(self) -> None:
        state = EditorState.initial()
        state = EditorState(size=state.size, grid=state.grid, cursor=Cursor(0, 1))
        rendered = format_grid(state).splitlines()
        self.assertEqual(len(rendered), 2 + 5)
        self.assertIn(" 2 .*", rendered[2])
        self.assertIn(" 1 .~", rendered[2])

    def test_status_and_clue_lists(self) -> None:
        state = EditorState.initial(clue_texts={"1-across": "First row"})
        self.assertIn("Select a cell", format_status(state))
        state = EditorState(size=state.size, grid=state.grid, clue_texts=state.clue_texts, cursor=Cursor(0, 0))
        self.assertIn("1 across: First row", format_status(state))
        lists = format_clue_lists(state)
        self.assertIn("Across:", lists)
        self.assertIn(" 1. First row", lists)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
