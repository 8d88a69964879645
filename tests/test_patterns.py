import unittest

from crossfill.engine.patterns import (
    PatternConfig,
    _place_group,
    patterned_crossword,
    striped_crossword,
)
from crossfill.engine.puzzle import CrosswordPuzzle
from crossfill.engine.validator import is_connected
from crossfill.utils.logger import silenced


class PatternTests(unittest.TestCase):
    def assert_point_symmetric(self, puzzle) -> None:
        for row, col in puzzle.black_cells:
            self.assertIn((puzzle.rows - row + 1, puzzle.cols - col + 1), puzzle.black_cells)

    def test_patterned_grid_is_connected_and_symmetric(self) -> None:
        puzzle = patterned_crossword(8, 10, PatternConfig(seed=7))
        self.assertTrue(is_connected(puzzle))
        self.assertTrue(puzzle.black_cells)
        self.assertTrue(all(black.manual for black in puzzle.black_cells.values()))
        self.assert_point_symmetric(puzzle)
        self.assertEqual(puzzle.words, [])

    def test_double_symmetry_mirrors_both_axes(self) -> None:
        puzzle = patterned_crossword(9, 9, PatternConfig(seed=3, double_symmetry=True))
        self.assertTrue(is_connected(puzzle))
        for row, col in puzzle.black_cells:
            self.assertIn((row, puzzle.cols - col + 1), puzzle.black_cells)
            self.assertIn((puzzle.rows - row + 1, col), puzzle.black_cells)

    def test_density_limit_is_respected(self) -> None:
        puzzle = patterned_crossword(10, 10, PatternConfig(seed=11, max_density=0.1, symmetry=False))
        self.assertLessEqual(len(puzzle.black_cells), 10)

    def test_zero_density_places_nothing(self) -> None:
        puzzle = patterned_crossword(5, 5, PatternConfig(seed=1, max_density=0.0))
        self.assertEqual(puzzle.black_cells, {})

    def test_same_seed_same_layout(self) -> None:
        config = PatternConfig(seed=123)
        self.assertEqual(patterned_crossword(7, 9, config), patterned_crossword(7, 9, config))
        self.assertEqual(striped_crossword(7, 9, config), striped_crossword(7, 9, config))

    def test_invalid_configuration(self) -> None:
        with self.assertRaises(ValueError):
            patterned_crossword(5, 5, PatternConfig(max_density=1.5))
        with self.assertRaises(ValueError):
            striped_crossword(5, 5, PatternConfig(symmetry=False, double_symmetry=True))

    def test_group_that_splits_the_grid_is_undone(self) -> None:
        puzzle = CrosswordPuzzle(3, 3)
        puzzle.place_black_cell(1, 2)
        puzzle.place_black_cell(3, 2)
        grid = puzzle.grid.copy()
        with silenced():
            self.assertEqual(_place_group(puzzle, 2, 2, PatternConfig(symmetry=False)), 0)
        self.assertEqual(puzzle.grid, grid)
        self.assertEqual(set(puzzle.black_cells), {(1, 2), (3, 2)})

    def test_mirror_that_splits_the_grid_undoes_the_whole_group(self) -> None:
        # (2, 1) alone keeps the grid connected, its mirror (2, 4) cuts off (1, 4).
        puzzle = CrosswordPuzzle(3, 4)
        puzzle.place_black_cell(1, 3)
        puzzle.place_black_cell(3, 3)
        grid = puzzle.grid.copy()
        with silenced():
            self.assertEqual(_place_group(puzzle, 2, 1, PatternConfig(symmetry=True)), 0)
        self.assertEqual(puzzle.grid, grid)
        self.assertNotIn((2, 1), puzzle.black_cells)
        self.assertTrue(is_connected(puzzle))

    def test_accepted_group_places_cell_and_mirror(self) -> None:
        puzzle = CrosswordPuzzle(3, 3)
        self.assertEqual(_place_group(puzzle, 1, 1, PatternConfig(symmetry=True)), 2)
        self.assertEqual(set(puzzle.black_cells), {(1, 1), (3, 3)})

    def test_striped_grid_is_connected_and_symmetric(self) -> None:
        puzzle = striped_crossword(12, 20, PatternConfig(seed=456))
        self.assertTrue(is_connected(puzzle))
        self.assertTrue(puzzle.black_cells)
        self.assert_point_symmetric(puzzle)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
