"""Random black-cell layouts for empty puzzles."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import List, Optional, Tuple

from ..utils.logger import get_logger, silenced
from .puzzle import CrosswordPuzzle
from .validator import is_connected

LOGGER = get_logger(__name__)

Position = Tuple[int, int]


@dataclass
class PatternConfig:
    """Settings shared by the pattern and stripe generators."""

    max_density: float = 0.18
    symmetry: bool = True
    double_symmetry: bool = False
    seed: Optional[int] = None
    max_iterations: int = 500
    min_stripe_dist: int = 4
    keep_stripe_prob: float = 0.8

    def validate(self) -> None:
        if not 0 <= self.max_density <= 1:
            raise ValueError("Max density should be between 0 and 1")
        if self.double_symmetry and not self.symmetry:
            raise ValueError("Cannot have double symmetry without single symmetry")


def _mirrors(puzzle: CrosswordPuzzle, row: int, col: int, config: PatternConfig) -> List[List[Position]]:
    """Groups of cells placed together; each group is checked for connectivity."""

    rows, cols = puzzle.rows, puzzle.cols
    groups = [[(row, col)]]
    if config.symmetry:
        groups.append([(rows - row + 1, cols - col + 1)])
        if config.double_symmetry:
            groups.append([(row, cols - col + 1), (rows - row + 1, col)])
    return groups


def _place_group(puzzle: CrosswordPuzzle, row: int, col: int, config: PatternConfig) -> int:
    """Place a cell and its mirrors, rolling back everything if the grid splits.

    Returns the number of black cells added (0 when rolled back).
    """

    placed: List[Position] = []
    for group in _mirrors(puzzle, row, col, config):
        for position in group:
            if puzzle.place_black_cell(*position):
                placed.append(position)
        if not is_connected(puzzle):
            for position in placed:
                puzzle.remove_black_cell(*position)
            return 0
    return len(placed)


def _density(puzzle: CrosswordPuzzle) -> float:
    return len(puzzle.black_cells) / (puzzle.rows * puzzle.cols)


def patterned_crossword(rows: int, cols: int, config: Optional[PatternConfig] = None) -> CrosswordPuzzle:
    """Empty puzzle with randomly scattered black cells.

    Cells are drawn uniformly; with ``symmetry`` each one is mirrored through
    the grid centre, and with ``double_symmetry`` also across both axes.
    Placements that would disconnect the grid are undone. Generation stops
    once ``max_density`` is reached or after ``max_iterations`` draws.
    """

    config = config or PatternConfig()
    config.validate()
    rng = random.Random(config.seed)
    LOGGER.info("Generating %dx%d pattern (seed=%s)", rows, cols, config.seed)
    puzzle = CrosswordPuzzle(rows, cols)

    iterations = 0
    with silenced():
        while _density(puzzle) < config.max_density and iterations < config.max_iterations:
            iterations += 1
            _place_group(puzzle, rng.randint(1, rows), rng.randint(1, cols), config)

    LOGGER.info(
        "Placed %d black cells in %d iterations (density %.2f)",
        len(puzzle.black_cells),
        iterations,
        _density(puzzle),
    )
    return puzzle


def _has_room(puzzle: CrosswordPuzzle, row: int, col: int, distance: int) -> bool:
    """No black cell within ``distance`` of (row, col) along its row and column."""

    grid = puzzle.grid
    for r in range(max(1, row - distance), min(row + distance, grid.rows) + 1):
        if grid.cell(r, col).is_black():
            return False
    for c in range(max(1, col - distance), min(col + distance, grid.cols) + 1):
        if grid.cell(row, c).is_black():
            return False
    return True


def striped_crossword(rows: int, cols: int, config: Optional[PatternConfig] = None) -> CrosswordPuzzle:
    """Empty puzzle whose black cells form diagonal stripes.

    A stripe keeps going diagonally with probability ``keep_stripe_prob``,
    bouncing off the borders; it restarts at a random cell (flipping its
    diagonal) otherwise, when a cell is closer than ``min_stripe_dist`` to
    another black cell on its row or column, or when a placement would
    disconnect the grid.
    """

    config = config or PatternConfig()
    config.validate()
    rng = random.Random(config.seed)
    LOGGER.info("Generating %dx%d stripes (seed=%s)", rows, cols, config.seed)
    puzzle = CrosswordPuzzle(rows, cols)

    anti_diagonal = rng.random() < 0.5
    d_row, d_col = (1, -1) if anti_diagonal else (1, 1)
    row: Optional[int] = None
    col: Optional[int] = None
    iterations = 0

    with silenced():
        while _density(puzzle) < config.max_density and iterations < config.max_iterations:
            iterations += 1
            if row is None or col is None or rng.random() >= config.keep_stripe_prob:
                anti_diagonal = not anti_diagonal
                d_row, d_col = (1, -1) if anti_diagonal else (1, 1)
                row, col = rng.randint(1, rows), rng.randint(1, cols)
            else:
                if (row == 1 and d_row == -1) or (row == rows and d_row == 1):
                    d_row = -d_row
                if (col == 1 and d_col == -1) or (col == cols and d_col == 1):
                    d_col = -d_col
                row = (row - 1 + d_row) % rows + 1
                col = (col - 1 + d_col) % cols + 1

            if not _has_room(puzzle, row, col, config.min_stripe_dist):
                row = col = None
                continue
            if not _place_group(puzzle, row, col, config):
                row = col = None

    LOGGER.info(
        "Placed %d black cells in %d iterations (density %.2f)",
        len(puzzle.black_cells),
        iterations,
        _density(puzzle),
    )
    return puzzle
