"""The crossword puzzle aggregate: grid, placed words and black cells."""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Tuple, Union

from ..core.constants import Direction, Side
from ..core.exceptions import GridInvariantError, ResizeError, WordSetError
from ..core.models import BlackCell, Cell, PlacedWord
from ..utils.logger import get_logger
from .grid import CrosswordGrid
from .validator import PlacementCheck, can_place_word, check_placement


LOGGER = get_logger(__name__)

Position = Tuple[int, int]


class CrosswordPuzzle:
    """Owns the grid, the placed words and the black-cell bookkeeping.

    Every mutating operation ends in :meth:`rebuild`, which recomputes the grid
    and the derived black cells from the words plus the manual black cells.
    Rejected operations return ``False`` and leave the puzzle untouched.
    """

    def __init__(self, rows: int, cols: int) -> None:
        self.grid = CrosswordGrid(rows, cols)
        self.words: List[PlacedWord] = []
        self.black_cells: Dict[Position, BlackCell] = {}

    @classmethod
    def from_words(cls, rows: int, cols: int, words: Iterable[PlacedWord]) -> "CrosswordPuzzle":
        """Build a puzzle by placing ``words`` in order.

        Raises :class:`WordSetError` for the first word whose placement is
        rejected, i.e. when the intersections of the set are incompatible.
        """

        puzzle = cls(rows, cols)
        for word in words:
            check = puzzle.check_placement(word.text, word.row, word.col, word.direction)
            if not check:
                LOGGER.error("Words intersections are not compatible: %s", check.reason)
                raise WordSetError(word.text.upper(), word.row, word.col, check.reason or "")
            puzzle.place_word(word.text, word.row, word.col, word.direction)
        return puzzle

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------
    @property
    def rows(self) -> int:
        return self.grid.rows

    @property
    def cols(self) -> int:
        return self.grid.cols

    @property
    def size(self) -> Tuple[int, int]:
        return self.grid.size

    def cell(self, row: int, col: int) -> Cell:
        return self.grid.cell(row, col)

    def is_full(self) -> bool:
        return self.grid.is_full()

    def find_word(self, text: str) -> Union[PlacedWord, None]:
        text = text.upper()
        for word in self.words:
            if word.text == text:
                return word
        return None

    # ------------------------------------------------------------------
    # Rebuild
    # ------------------------------------------------------------------
    def rebuild(self) -> None:
        """Recompute the grid and derived black cells from scratch."""

        grid = CrosswordGrid(self.grid.rows, self.grid.cols)
        black_cells: Dict[Position, BlackCell] = {}

        for position, black in self.black_cells.items():
            if black.manual:
                black_cells[position] = black
                grid.set(*position, Cell.BLACK)

        for word in self.words:
            for letter, (r, c) in zip(word.text, word.cells):
                grid.set(r, c, Cell.of(letter))

        for word in self.words:
            for position in (word.before, word.after):
                if not grid.contains(*position) or grid.cell(*position).is_letter():
                    continue
                grid.set(*position, Cell.BLACK)
                black = black_cells.setdefault(position, BlackCell(position=position))
                if not black.manual:
                    black.weight += 1

        self.grid = grid
        self.black_cells = black_cells

    # ------------------------------------------------------------------
    # Words
    # ------------------------------------------------------------------
    def check_placement(
        self, word: str, row: int, col: int, direction: Union[Direction, str]
    ) -> PlacementCheck:
        return check_placement(self, word, row, col, direction)

    def can_place_word(
        self, word: str, row: int, col: int, direction: Union[Direction, str]
    ) -> bool:
        return can_place_word(self, word, row, col, direction)

    def place_word(
        self, word: str, row: int, col: int, direction: Union[Direction, str]
    ) -> bool:
        if not self.can_place_word(word, row, col, direction):
            return False
        self.words.append(PlacedWord(word.upper(), row, col, Direction(direction)))
        self.rebuild()
        return True

    def remove_word(self, word: str) -> bool:
        placed = self.find_word(word)
        if placed is None:
            LOGGER.warning(
                "Word '%s' not found in the crossword. No changes on the original grid.",
                word.upper(),
            )
            return False
        self.words.remove(placed)
        self.rebuild()
        return True

    # ------------------------------------------------------------------
    # Black cells
    # ------------------------------------------------------------------
    def place_black_cell(self, row: int, col: int) -> bool:
        position = (row, col)
        if position in self.black_cells:
            if not self.grid.cell(row, col).is_black():
                raise GridInvariantError(
                    f"Black cell recorded at {position} but the grid cell is not black"
                )
            LOGGER.warning(
                "Black cell already present at %s. No changes on the original grid.", position
            )
            return False
        if not self.grid.contains(row, col):
            LOGGER.warning("Position %s is outside the grid. No changes on the original grid.", position)
            return False
        if not self.grid.cell(row, col).is_empty():
            LOGGER.warning(
                "Cannot place black cell at %s since cell is not empty. "
                "No changes on the original grid.",
                position,
            )
            return False
        self.black_cells[position] = BlackCell.manual_at(row, col)
        self.rebuild()
        return True

    def remove_black_cell(self, row: int, col: int) -> bool:
        position = (row, col)
        black = self.black_cells.get(position)
        if black is None:
            LOGGER.warning(
                "Black cell not present at %s. No changes on the original grid.", position
            )
            return False
        if not black.manual:
            LOGGER.warning(
                "Cannot remove automatically placed black cell at %s since it is needed "
                "as a word delimiter. No changes on the original grid.",
                position,
            )
            return False
        del self.black_cells[position]
        self.rebuild()
        return True

    def clear(self, deep: bool = False) -> "CrosswordPuzzle":
        """Remove every word; ``deep`` also removes the manual black cells."""

        self.words.clear()
        if deep:
            self.black_cells.clear()
        self.rebuild()
        return self

    # ------------------------------------------------------------------
    # Resizing
    # ------------------------------------------------------------------
    def enlarge(self, side: Union[Side, str], times: int = 1) -> bool:
        """Insert ``times`` empty rows/columns at ``side`` and rebuild.

        An unknown side is rejected with a warning; ``times < 1`` raises
        :class:`ValueError`.
        """

        try:
            side = Side(side)
        except ValueError:
            LOGGER.warning(
                "Unknown side %r; use top, bottom, left or right. No changes on the original grid.",
                side,
            )
            return False
        grid = self.grid.enlarged(side, times)
        if side == Side.TOP:
            self._shift_contents(times, 0)
        elif side == Side.LEFT:
            self._shift_contents(0, times)
        self.grid = grid
        self.rebuild()
        return True

    def shrink(self) -> bool:
        """Strip border rows/columns holding only empty or black cells."""

        grid = self.grid
        top, bottom = 1, grid.rows
        left, right = 1, grid.cols
        while top <= bottom and grid.is_open_line(grid.row_cells(top)):
            top += 1
        while bottom >= top and grid.is_open_line(grid.row_cells(bottom)):
            bottom -= 1
        while left <= right and grid.is_open_line(grid.col_cells(left)):
            left += 1
        while right >= left and grid.is_open_line(grid.col_cells(right)):
            right -= 1

        if top > bottom or left > right:
            LOGGER.info("Grid holds no letters; collapsing to a 1x1 grid")
            self.words.clear()
            self.black_cells.clear()
            self.grid = CrosswordGrid(1, 1)
            return True

        rows, cols = bottom - top + 1, right - left + 1
        self._shift_contents(1 - top, 1 - left, rows=rows, cols=cols)
        self.grid = CrosswordGrid(rows, cols)
        self.rebuild()
        return True

    def _shift_contents(self, d_row: int, d_col: int, rows: int = 0, cols: int = 0) -> None:
        """Shift words and manual black cells, validating every word first.

        Manual black cells landing outside ``rows`` x ``cols`` (when given) or at
        non-positive coordinates collapse into the border and are dropped.
        """

        shifted_words = [word.shifted(d_row, d_col) for word in self.words]
        for word in shifted_words:
            if word.row <= 0 or word.col <= 0:
                raise ResizeError(
                    f"Cannot shift word '{word.text}' outside the grid ({word.row}, {word.col})"
                )

        black_cells: Dict[Position, BlackCell] = {}
        for (r, c), black in self.black_cells.items():
            if not black.manual:
                continue
            position = (r + d_row, c + d_col)
            inside = position[0] >= 1 and position[1] >= 1
            if rows and cols:
                inside = inside and position[0] <= rows and position[1] <= cols
            if not inside:
                LOGGER.info("Manual black cell at %s collapses into the border", (r, c))
                continue
            black_cells[position] = BlackCell(position=position, manual=True, weight=black.weight)

        self.words = shifted_words
        self.black_cells = black_cells

    # ------------------------------------------------------------------
    # Copy, equality, export
    # ------------------------------------------------------------------
    def copy(self) -> "CrosswordPuzzle":
        """Independent copy keeping only manual black cells; derived ones are rebuilt."""

        clone = CrosswordPuzzle(self.rows, self.cols)
        clone.words = list(self.words)
        clone.black_cells = {
            position: BlackCell(position=position, manual=True, weight=black.weight)
            for position, black in self.black_cells.items()
            if black.manual
        }
        clone.rebuild()
        return clone

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CrosswordPuzzle):
            return NotImplemented
        return self.grid == other.grid

    def __repr__(self) -> str:
        return f"CrosswordPuzzle({self.rows}x{self.cols}, words={len(self.words)})"

    def to_jsonable(self) -> Dict[str, Any]:
        rows = []
        for r in range(1, self.rows + 1):
            line = []
            for cell in self.grid.row_cells(r):
                if cell.is_black():
                    line.append("#")
                elif cell.is_empty():
                    line.append(None)
                else:
                    line.append(cell.letter)
            rows.append(line)
        return {
            "rows": self.rows,
            "cols": self.cols,
            "grid": rows,
            "words": [
                {
                    "text": word.text,
                    "start": [word.row, word.col],
                    "direction": word.direction.value,
                }
                for word in self.words
            ],
            "black_cells": [
                {
                    "position": list(position),
                    "manual": black.manual,
                    "weight": None if black.manual else black.weight,
                }
                for position, black in sorted(self.black_cells.items())
            ],
        }
