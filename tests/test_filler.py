import unittest

from crossfill.core.constants import Direction
from crossfill.data.dictionary import WordDictionary
from crossfill.engine.filler import CrosswordFiller, FillConfig, FillStatus, fill
from crossfill.engine.puzzle import CrosswordPuzzle
from crossfill.engine.samples import sample_crossword


SOLUTION_WORDS = ["PEER", "PILLOW", "PEEL", "DYER"]

TWO_LETTER_WORDS = ["AT", "TO", "AN", "NO", "IT", "IS", "SO", "ON", "IN", "OR", "AS", "OF"]


class FillTests(unittest.TestCase):
    def test_full_puzzle_is_returned_untouched(self) -> None:
        puzzle = sample_crossword("full")
        before = puzzle.copy()
        result = CrosswordFiller(WordDictionary.from_words([])).fill(puzzle, seed=1)
        self.assertEqual(result.status, FillStatus.FILLED)
        self.assertEqual(result.calls, 0)
        self.assertEqual(puzzle, before)

    def test_fills_partial_example(self) -> None:
        puzzle = sample_crossword("partial")
        config = FillConfig(record_trace=True)
        result = CrosswordFiller(WordDictionary.from_words(SOLUTION_WORDS), config).fill(puzzle, seed=80)

        self.assertTrue(result)
        self.assertTrue(puzzle.is_full())
        self.assertEqual(puzzle.cell(2, 4).letter, "Y")
        self.assertEqual(
            "".join(cell.letter or "" for cell in puzzle.grid.row_cells(6)),
            "PILLOW",
        )
        for text in SOLUTION_WORDS:
            self.assertIsNotNone(puzzle.find_word(text))

    def test_trace_follows_minimum_remaining_values(self) -> None:
        puzzle = sample_crossword("partial")
        config = FillConfig(record_trace=True)
        result = CrosswordFiller(WordDictionary.from_words(SOLUTION_WORDS), config).fill(puzzle, seed=3)

        self.assertEqual(len(result.trace), 4)
        for step in result.trace:
            self.assertEqual(step.count, min(step.counts))
        first = result.trace[0]
        self.assertEqual(first.counts, [2, 1, 2, 1])
        self.assertEqual((first.slot.row, first.slot.col, first.slot.direction), (6, 1, Direction.HORIZONTAL))

    def test_dead_end_restores_puzzle(self) -> None:
        puzzle = sample_crossword("partial")
        before = puzzle.copy()
        words_before = list(puzzle.words)
        result = CrosswordFiller(WordDictionary.from_words(["PEER", "PILLOW", "PEEL"])).fill(puzzle, seed=1)
        self.assertEqual(result.status, FillStatus.EXHAUSTED)
        self.assertEqual(puzzle, before)
        self.assertEqual(puzzle.words, words_before)

    def test_call_budget_aborts_and_restores(self) -> None:
        puzzle = sample_crossword("partial")
        before = puzzle.copy()
        config = FillConfig(max_calls=1)
        result = CrosswordFiller(WordDictionary.from_words(SOLUTION_WORDS), config).fill(puzzle, seed=1)
        self.assertEqual(result.status, FillStatus.ABORTED)
        self.assertFalse(result)
        self.assertEqual(puzzle, before)
        self.assertEqual(len(puzzle.words), len(before.words))

    def test_isolated_empty_cell_is_a_dead_end(self) -> None:
        puzzle = CrosswordPuzzle(1, 1)
        result = CrosswordFiller(WordDictionary.from_words(TWO_LETTER_WORDS)).fill(puzzle)
        self.assertEqual(result.status, FillStatus.EXHAUSTED)

    def test_same_seed_same_fill(self) -> None:
        dictionary = WordDictionary.from_words(TWO_LETTER_WORDS)
        first, second = CrosswordPuzzle(2, 2), CrosswordPuzzle(2, 2)
        result_a = CrosswordFiller(dictionary).fill(first, seed=42)
        result_b = CrosswordFiller(dictionary).fill(second, seed=42)
        self.assertEqual(result_a.status, result_b.status)
        self.assertEqual(result_a.calls, result_b.calls)
        self.assertEqual(first, second)

    def test_crossing_validation(self) -> None:
        def corner() -> CrosswordPuzzle:
            puzzle = CrosswordPuzzle(2, 2)
            puzzle.place_word("AB", 1, 1, Direction.HORIZONTAL)
            puzzle.place_word("AC", 1, 1, Direction.VERTICAL)
            return puzzle

        dictionary = WordDictionary.from_words(["AB", "AC", "CD", "BE"])
        loose = corner()
        self.assertTrue(fill(loose, dictionary, seed=1))
        self.assertEqual(loose.cell(2, 2).letter, "D")

        strict = corner()
        self.assertFalse(fill(strict, dictionary, seed=1, config=FillConfig(validate_crossings=True)))
        self.assertTrue(strict.cell(2, 2).is_empty())


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
