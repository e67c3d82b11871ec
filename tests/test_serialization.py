import unittest

from crossword_builder.core.constants import Direction
from crossword_builder.core.exceptions import ProjectFormatError
from crossword_builder.core.models import ClueEntry, GridSize
from crossword_builder.engine.grid import grid_from_pattern
from crossword_builder.engine.numbering import number_grid
from crossword_builder.io.serialization import (
    clue_texts_from_entries,
    crossword_from_payload,
    crossword_to_payload,
    export_clues,
    parse_clues,
)


SIZE = GridSize(rows=3, cols=3)


def cell(char="", black=False, number=None):
    return {"char": char, "isBlack": black, "number": number}


class PayloadTests(unittest.TestCase):
    def test_payload_shape(self) -> None:
        grid = grid_from_pattern(["CAT", ".#.", "..."])
        payload = crossword_to_payload(SIZE, grid, {"1-across": "Feline"})
        self.assertEqual(payload["size"], {"rows": 3, "cols": 3})
        self.assertEqual(payload["grid"][0][0], cell("C", number=1))
        self.assertEqual(payload["grid"][1][1], cell(black=True))
        self.assertEqual(payload["clues"][0], {"number": 1, "direction": "across", "text": "Feline"})

    def test_export_drops_orphaned_clues(self) -> None:
        numbering = number_grid(grid_from_pattern([".#.", "...", "..."]), SIZE)
        entries = export_clues(numbering, {"1-across": "gone", "1-down": "kept"})
        keys = [entry.key for entry in entries]
        self.assertNotIn("1-across", keys)
        self.assertEqual(entries[0], ClueEntry(1, Direction.DOWN, "kept"))
        self.assertEqual(len(entries), len(numbering.active_keys))
        self.assertTrue(all(entry.text == "" for entry in entries[1:]))

    def test_load_recomputes_stale_numbers(self) -> None:
        payload = {
            "size": {"rows": 3, "cols": 3},
            "grid": [
                [cell("A", number=9), cell(black=True, number=4), cell(number=7)],
                [cell(), cell(), cell()],
                [cell(), cell(), cell()],
            ],
            "clues": [{"number": 1, "direction": "down", "text": "First"}],
        }
        data = crossword_from_payload(payload)
        self.assertEqual(data.grid[0][0].number, 1)
        self.assertIsNone(data.grid[0][1].number)
        self.assertEqual(data.grid[0][2].number, 2)
        self.assertEqual(data.grid[0][0].char, "A")
        self.assertEqual(clue_texts_from_entries(data.clues), {"1-down": "First"})

    def test_black_cells_lose_stored_characters(self) -> None:
        payload = {"size": {"rows": 3, "cols": 3}, "grid": [[cell("Z", black=True)] * 3] * 3}
        data = crossword_from_payload(payload)
        self.assertEqual(data.grid[0][0].char, "")
        self.assertEqual(data.clues, [])

    def test_missing_size_or_grid_is_rejected(self) -> None:
        with self.assertRaises(ProjectFormatError):
            crossword_from_payload({"grid": []})
        with self.assertRaises(ProjectFormatError):
            crossword_from_payload({"size": {"rows": 3, "cols": 3}})
        with self.assertRaises(ProjectFormatError):
            crossword_from_payload(None)

    def test_shape_and_range_are_validated(self) -> None:
        with self.assertRaises(ProjectFormatError):
            crossword_from_payload({"size": {"rows": 3, "cols": 3}, "grid": [[cell()] * 3] * 2})
        with self.assertRaises(ProjectFormatError):
            crossword_from_payload({"size": {"rows": 2, "cols": 3}, "grid": [[cell()] * 3] * 2})
        with self.assertRaises(ProjectFormatError):
            crossword_from_payload({"size": {"rows": "3", "cols": 3}, "grid": []})

    def test_cells_hold_at_most_one_grapheme(self) -> None:
        with self.assertRaises(ProjectFormatError):
            crossword_from_payload({"size": {"rows": 3, "cols": 3}, "grid": [[cell("ABC")] * 3] * 3})
        data = crossword_from_payload({"size": {"rows": 3, "cols": 3}, "grid": [[cell("é")] * 3] * 3})
        self.assertEqual(data.grid[2][2].char, "é")

    def test_malformed_clues_are_skipped(self) -> None:
        entries = parse_clues(
            [
                {"number": 2, "direction": "across", "text": "ok"},
                {"number": 3, "direction": "sideways", "text": "bad"},
                {"direction": "down"},
            ]
        )
        self.assertEqual(entries, [ClueEntry(2, Direction.ACROSS, "ok")])


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
