"""Plain text persistence for puzzles.

One line per grid row: ``#`` is a black cell, ``.`` an empty cell and any
letter a filled cell. Short lines are padded with empty cells.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Union

from ..core.constants import FILE_BLACK, FILE_EMPTY
from ..core.exceptions import GridFormatError
from ..core.models import Cell, PlacedWord
from ..engine.grid import CrosswordGrid
from ..engine.puzzle import CrosswordPuzzle
from ..engine.slots import completed_runs
from ..utils.logger import get_logger

LOGGER = get_logger(__name__)


def _encode(cell: Cell) -> str:
    if cell.is_black():
        return FILE_BLACK
    if cell.is_empty():
        return FILE_EMPTY
    return cell.letter or FILE_EMPTY


def _decode(char: str, row: int, col: int) -> Cell:
    if char == FILE_BLACK:
        return Cell.BLACK
    if char in (FILE_EMPTY, " "):
        return Cell.EMPTY
    if not char.isalpha():
        raise GridFormatError(f"Unexpected character {char!r} at ({row}, {col})")
    return Cell.of(char)


def dumps(puzzle: CrosswordPuzzle) -> str:
    lines = [
        "".join(_encode(cell) for cell in puzzle.grid.row_cells(r))
        for r in range(1, puzzle.rows + 1)
    ]
    return "\n".join(lines) + "\n"


def read_grid(text: str) -> CrosswordGrid:
    lines = text.splitlines()
    while lines and not lines[-1].strip():
        lines.pop()
    if not lines:
        raise GridFormatError("Grid text is empty")

    rows: List[List[Cell]] = []
    for r, line in enumerate(lines, start=1):
        rows.append([_decode(char, r, c) for c, char in enumerate(line, start=1)])
    if not any(rows):
        raise GridFormatError("Grid text has no cells")
    return CrosswordGrid.from_rows(rows)


def loads(text: str) -> CrosswordPuzzle:
    """Rebuild a puzzle from its text form.

    Words are the fully lettered runs of two or more cells; black cells that
    no word accounts for become manual ones. Raises :class:`WordSetError`
    when the runs cannot coexist, e.g. the same word appears twice.
    """

    grid = read_grid(text)
    words = [
        PlacedWord(run.text, run.row, run.col, run.direction) for run in completed_runs(grid)
    ]
    puzzle = CrosswordPuzzle.from_words(grid.rows, grid.cols, words)

    for r, c in grid.positions():
        source = grid.cell(r, c)
        if source.is_black() and not puzzle.cell(r, c).is_black():
            puzzle.place_black_cell(r, c)
        elif source.is_letter() and not puzzle.cell(r, c).is_letter():
            LOGGER.warning("Letter '%s' at (%d, %d) belongs to no word; dropped", source.letter, r, c)
    return puzzle


def save_crossword(puzzle: CrosswordPuzzle, path: Union[Path, str]) -> Path:
    destination = Path(path)
    destination.write_text(dumps(puzzle), encoding="utf-8")
    LOGGER.info("Saved %dx%d puzzle to %s", puzzle.rows, puzzle.cols, destination)
    return destination


def load_crossword(path: Union[Path, str]) -> CrosswordPuzzle:
    source = Path(path)
    if not source.exists():
        raise GridFormatError(f"Missing grid file: {source}")
    return loads(source.read_text(encoding="utf-8"))
