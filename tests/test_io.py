import io
import tempfile
import unittest
from pathlib import Path

from crossfill.core.exceptions import GridFormatError, WordSetError
from crossfill.engine.samples import sample_crossword
from crossfill.io.grid_file import dumps, load_crossword, loads, save_crossword
from crossfill.utils.pretty import (
    format_crossword,
    format_grid,
    pretty_print_crossword,
    pretty_print_grid,
)


class GridFileTests(unittest.TestCase):
    def test_save_and_load_round_trip(self) -> None:
        for kind in ("simple", "full", "partial"):
            puzzle = sample_crossword(kind)
            with tempfile.TemporaryDirectory() as tmpdir:
                path = save_crossword(puzzle, Path(tmpdir) / f"{kind}.txt")
                loaded = load_crossword(path)
            self.assertEqual(loaded, puzzle)
            self.assertEqual(sorted(w.text for w in loaded.words), sorted(w.text for w in puzzle.words))

    def test_manual_black_cells_survive_round_trip(self) -> None:
        loaded = loads(dumps(sample_crossword("full")))
        manual = {pos for pos, black in loaded.black_cells.items() if black.manual}
        self.assertEqual(manual, {(2, 5), (5, 5)})

    def test_dumps_format(self) -> None:
        text = dumps(sample_crossword("simple"))
        self.assertEqual(text.splitlines()[1], "#CAT#.")
        self.assertTrue(text.endswith("\n"))

    def test_ragged_lines_are_padded(self) -> None:
        puzzle = loads("CAT\n.\n#..\n")
        self.assertEqual(puzzle.size, (3, 3))
        self.assertTrue(puzzle.cell(2, 3).is_empty())
        self.assertIsNotNone(puzzle.find_word("CAT"))
        self.assertTrue(puzzle.black_cells[(3, 1)].manual)

    def test_lowercase_letters_are_accepted(self) -> None:
        puzzle = loads("dog\n")
        self.assertIsNotNone(puzzle.find_word("DOG"))

    def test_bad_input(self) -> None:
        with self.assertRaises(GridFormatError):
            loads("")
        with self.assertRaises(GridFormatError):
            loads("C4T\n")
        with self.assertRaises(GridFormatError):
            load_crossword("/nonexistent/grid.txt")
        with self.assertRaises(WordSetError):
            loads("CAT\n#.#\nCAT\n")


class RenderTests(unittest.TestCase):
    def test_format_grid_single(self) -> None:
        lines = format_grid(sample_crossword("full").grid).splitlines()
        self.assertEqual(lines[0], "    1  2  3  4  5  6 ")
        self.assertEqual(lines[1], "  ┌" + "─" * 18 + "┐")
        self.assertEqual(lines[2], "1 │ G  O  L  D  E  N │")
        self.assertEqual(lines[3], "2 │ A  N  ■  O  ■  A │")
        self.assertEqual(lines[-1], "  └" + "─" * 18 + "┘")

    def test_format_grid_double_and_placeholder(self) -> None:
        text = format_grid(sample_crossword("partial").grid, style="double", empty_placeholder="_")
        self.assertIn("╔", text)
        self.assertIn("6 ║ _  I  _  _  _  W ║", text)
        with self.assertRaises(ValueError):
            format_grid(sample_crossword("simple").grid, style="dotted")

    def test_format_crossword_details(self) -> None:
        text = format_crossword(sample_crossword("full"))
        self.assertIn("Horizontal:\n - 'GOLDEN' at (1, 1)", text)
        self.assertIn("Vertical:\n - 'GATE' at (1, 1)", text)
        self.assertIn(" - at (2, 5) was manually placed (count=inf)", text)
        self.assertIn(" - at (3, 2) was automatically derived (count=3)", text)

    def test_pretty_print_to_stream(self) -> None:
        stream = io.StringIO()
        pretty_print_grid(sample_crossword("simple").grid, label="Simple", stream=stream)
        lines = stream.getvalue().splitlines()
        self.assertEqual(lines[0], "Simple")
        self.assertEqual(lines[4], "2 │ ■  C  A  T  ■  ⋅ │")

        stream = io.StringIO()
        pretty_print_crossword(sample_crossword("simple"), details=True, stream=stream)
        self.assertIn(" - 'SIR' at (4, 4)", stream.getvalue())


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
