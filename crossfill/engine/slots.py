"""Detection of open runs (slots) in the grid."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Tuple

from ..core.constants import Direction, FILE_EMPTY, MIN_WORD_LENGTH
from ..core.models import Cell, Slot
from .grid import CrosswordGrid


@dataclass
class Run:
    """A maximal sequence of non-black cells in one direction."""

    row: int
    col: int
    direction: Direction
    cells: List[Cell]

    @property
    def length(self) -> int:
        return len(self.cells)

    @property
    def is_complete(self) -> bool:
        return all(cell.is_letter() for cell in self.cells)

    @property
    def text(self) -> str:
        return "".join(cell.letter or "" for cell in self.cells)

    @property
    def pattern(self) -> str:
        return "".join(cell.letter if cell.is_letter() else FILE_EMPTY for cell in self.cells)


def iter_runs(grid: CrosswordGrid) -> Iterator[Run]:
    """Yield every maximal non-black run, horizontal ones first.

    Horizontal runs are scanned row by row, left to right; vertical runs
    column by column, top to bottom.
    """

    for r in range(1, grid.rows + 1):
        yield from _scan_line(grid.row_cells(r), r, 1, Direction.HORIZONTAL)
    for c in range(1, grid.cols + 1):
        yield from _scan_line(grid.col_cells(c), 1, c, Direction.VERTICAL)


def _scan_line(line: List[Cell], row: int, col: int, direction: Direction) -> Iterator[Run]:
    dr, dc = direction.step
    index = 0
    while index < len(line):
        if line[index].is_black():
            index += 1
            continue
        start = index
        while index < len(line) and not line[index].is_black():
            index += 1
        yield Run(
            row=row + dr * start,
            col=col + dc * start,
            direction=direction,
            cells=line[start:index],
        )


def find_slots(grid: CrosswordGrid) -> List[Slot]:
    """Return every run of length >= 2 that still contains an empty cell.

    ``flexible_start``/``flexible_end`` flag runs touching the grid border
    rather than a black cell; such slots could grow if the grid is enlarged.
    """

    slots: List[Slot] = []
    for run in iter_runs(grid):
        if run.length < MIN_WORD_LENGTH or run.is_complete:
            continue
        start, end = _run_extent(run)
        limit = grid.cols if run.direction == Direction.HORIZONTAL else grid.rows
        slots.append(
            Slot(
                row=run.row,
                col=run.col,
                direction=run.direction,
                length=run.length,
                pattern=run.pattern,
                flexible_start=start == 1,
                flexible_end=end == limit,
            )
        )
    return slots


def _run_extent(run: Run) -> Tuple[int, int]:
    start = run.col if run.direction == Direction.HORIZONTAL else run.row
    return start, start + run.length - 1


def completed_runs(grid: CrosswordGrid) -> List[Run]:
    """Fully lettered runs of length >= 2, i.e. every word readable in the grid."""

    return [run for run in iter_runs(grid) if run.length >= MIN_WORD_LENGTH and run.is_complete]
