"""Grid representation and helper utilities."""

from __future__ import annotations

from typing import Iterable, Iterator, List, Sequence, Tuple

from ..core.constants import Bounds, ORTHOGONAL_STEPS, Side
from ..core.models import Cell


class CrosswordGrid:
    """A rectangular matrix of cells addressed with 1-based coordinates.

    The grid knows nothing about words; it only stores cell values and offers
    the geometric helpers the puzzle model and the slot detector build on.
    """

    def __init__(self, rows: int, cols: int) -> None:
        if rows < 1 or cols < 1:
            raise ValueError(f"Grid dimensions must be positive, got {rows}x{cols}")
        self.bounds = Bounds(rows=rows, cols=cols)
        self.cells: List[List[Cell]] = [[Cell.EMPTY for _ in range(cols)] for _ in range(rows)]

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Cell]]) -> "CrosswordGrid":
        width = max((len(row) for row in rows), default=0)
        grid = cls(len(rows), width)
        for r, row in enumerate(rows, start=1):
            for c, value in enumerate(row, start=1):
                grid.set(r, c, value)
        return grid

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    @property
    def rows(self) -> int:
        return self.bounds.rows

    @property
    def cols(self) -> int:
        return self.bounds.cols

    @property
    def size(self) -> Tuple[int, int]:
        return self.bounds.rows, self.bounds.cols

    def contains(self, row: int, col: int) -> bool:
        return self.bounds.contains(row, col)

    def cell(self, row: int, col: int) -> Cell:
        if not self.bounds.contains(row, col):
            raise IndexError(f"Cell ({row}, {col}) outside {self.rows}x{self.cols} grid")
        return self.cells[row - 1][col - 1]

    def set(self, row: int, col: int, value: Cell) -> None:
        if not self.bounds.contains(row, col):
            raise IndexError(f"Cell ({row}, {col}) outside {self.rows}x{self.cols} grid")
        self.cells[row - 1][col - 1] = value

    def positions(self) -> Iterator[Tuple[int, int]]:
        for r in range(1, self.rows + 1):
            for c in range(1, self.cols + 1):
                yield r, c

    def neighbors(self, row: int, col: int) -> Iterable[Tuple[int, int]]:
        for dr, dc in ORTHOGONAL_STEPS:
            nr, nc = row + dr, col + dc
            if self.bounds.contains(nr, nc):
                yield nr, nc

    def row_cells(self, row: int) -> List[Cell]:
        return list(self.cells[row - 1])

    def col_cells(self, col: int) -> List[Cell]:
        return [line[col - 1] for line in self.cells]

    def is_full(self) -> bool:
        return not any(cell.is_empty() for line in self.cells for cell in line)

    def is_open_line(self, cells: Iterable[Cell]) -> bool:
        """True when a row or column holds no letter at all."""

        return all(not cell.is_letter() for cell in cells)

    # ------------------------------------------------------------------
    # Resizing
    # ------------------------------------------------------------------
    def enlarged(self, side: Side, times: int = 1) -> "CrosswordGrid":
        """Return a copy with ``times`` empty rows/columns inserted at ``side``."""

        if times < 1:
            raise ValueError("Enlarge needs at least one row or column")
        rows, cols = self.rows, self.cols
        d_row = d_col = 0
        if side in (Side.TOP, Side.BOTTOM):
            rows += times
            if side == Side.TOP:
                d_row = times
        else:
            cols += times
            if side == Side.LEFT:
                d_col = times
        grid = CrosswordGrid(rows, cols)
        for r, c in self.positions():
            grid.set(r + d_row, c + d_col, self.cell(r, c))
        return grid

    def copy(self) -> "CrosswordGrid":
        grid = CrosswordGrid(self.rows, self.cols)
        grid.cells = [list(line) for line in self.cells]
        return grid

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CrosswordGrid):
            return NotImplemented
        return self.cells == other.cells

    def __repr__(self) -> str:
        return f"CrosswordGrid({self.rows}x{self.cols})"
