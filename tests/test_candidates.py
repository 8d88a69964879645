import unittest

from crossfill.core.constants import Direction
from crossfill.core.models import Slot
from crossfill.data.dictionary import WordDictionary
from crossfill.engine.candidates import CandidateEnumerator
from crossfill.engine.puzzle import CrosswordPuzzle
from crossfill.engine.samples import sample_crossword
from crossfill.engine.slots import find_slots


WORDS = [
    "PILLOW", "WINDOW", "MILDEW", "INLAW", "HI", "AI", "SAW", "JAW",
    "AIDS", "SIR", "PILLOWS", "RAINBOW", "CAT",
]


class CandidateTests(unittest.TestCase):
    def setUp(self) -> None:
        self.enumerator = CandidateEnumerator(WordDictionary.from_words(WORDS))
        self.puzzle = sample_crossword("partial")
        self.row_slot = find_slots(self.puzzle.grid)[1]

    def test_simple_keeps_dictionary_order(self) -> None:
        count, words = self.enumerator.simple(self.row_slot)
        self.assertEqual(count, 3)
        self.assertEqual(words, ["PILLOW", "WINDOW", "MILDEW"])

    def test_split_reports_each_black_cell_position(self) -> None:
        before = self.puzzle.copy()
        report = self.enumerator.split(self.puzzle, self.row_slot)

        self.assertEqual(sorted(report.options), [1, 3, 4, 5])
        self.assertEqual(report.disconnecting, [])

        first = report.options[1]
        self.assertEqual(first.position, (6, 1))
        self.assertEqual((first.left_pattern, first.right_pattern), ("", "I...W"))
        self.assertEqual(first.left_words, [""])
        self.assertEqual(first.right_words, ["INLAW"])
        self.assertEqual(first.count, 1)

        middle = report.options[3]
        self.assertEqual(middle.left_words, ["HI", "AI"])
        self.assertEqual(middle.right_words, ["SAW", "JAW"])
        self.assertEqual(middle.count, 4)

        self.assertEqual(report.options[4].count, 0)
        self.assertEqual(report.options[5].left_words, ["AIDS"])
        self.assertEqual(report.options[5].count, 1)

        self.assertEqual(self.puzzle, before)
        self.assertEqual(set(self.puzzle.black_cells), set(before.black_cells))

    def test_split_skips_disconnecting_positions(self) -> None:
        puzzle = CrosswordPuzzle(1, 3)
        slot = find_slots(puzzle.grid)[0]
        report = self.enumerator.split(puzzle, slot)
        self.assertEqual(report.disconnecting, [2])
        self.assertEqual(sorted(report.options), [1, 3])
        self.assertEqual(report.options[3].left_pattern, "..")
        self.assertTrue(puzzle.cell(1, 2).is_empty())

    def test_flexible_both_ends(self) -> None:
        out = self.enumerator.flexible(self.row_slot, 1)
        self.assertEqual(set(out), {(0, 1), (1, 0)})
        self.assertEqual(out[(0, 1)], (1, ["PILLOWS"]))
        self.assertEqual(out[(1, 0)], (1, ["RAINBOW"]))
        self.assertEqual(set(self.enumerator.flexible(self.row_slot, 2)), {(0, 2), (1, 1), (2, 0)})

    def test_flexible_single_end(self) -> None:
        slot = find_slots(self.puzzle.grid)[0]
        self.assertEqual(set(self.enumerator.flexible(slot, 3)), {(0, 3)})
        column = find_slots(self.puzzle.grid)[3]
        self.assertEqual(set(self.enumerator.flexible(column, 2)), {(2, 0)})

    def test_flexible_closed_slot_and_bad_increment(self) -> None:
        closed = Slot(row=2, col=2, direction=Direction.HORIZONTAL, length=3, pattern="C..")
        self.assertEqual(self.enumerator.flexible(closed, 1), {})
        with self.assertRaises(ValueError):
            self.enumerator.flexible(self.row_slot, 0)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
