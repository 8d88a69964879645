"""Pretty-print helpers for crossword grids."""

from __future__ import annotations

import math
import sys
from typing import TYPE_CHECKING, List, Optional

from ..core.constants import DISPLAY_BLACK, DISPLAY_EMPTY, Direction

if TYPE_CHECKING:
    from ..core.models import Cell
    from ..engine.grid import CrosswordGrid
    from ..engine.puzzle import CrosswordPuzzle


BORDERS = {
    "single": ("┌", "┐", "─", "│", "└", "┘"),
    "double": ("╔", "╗", "═", "║", "╚", "╝"),
}


def cell_symbol(cell: "Cell", empty_placeholder: str = DISPLAY_EMPTY) -> str:
    if cell.is_letter():
        return cell.letter or "?"
    if cell.is_black():
        return DISPLAY_BLACK
    return empty_placeholder


def cpad(text: object, width: int) -> str:
    """Centre ``text`` in ``width`` columns, extra space going right."""

    text = str(text)
    pad = max(width - len(text), 0)
    left = pad // 2
    return " " * left + text + " " * (pad - left)


def format_grid(
    grid: "CrosswordGrid",
    *,
    style: str = "single",
    empty_placeholder: str = DISPLAY_EMPTY,
) -> str:
    if style not in BORDERS:
        raise ValueError(f"Unknown border style {style!r}; use 'single' or 'double'")
    top_left, top_right, horizontal, vertical, bottom_left, bottom_right = BORDERS[style]
    cell_width = max(3, len(str(grid.cols)) + 1)
    left_pad = len(str(grid.rows)) + 1
    rule = horizontal * (grid.cols * cell_width)

    lines = [" " * (left_pad + 1) + "".join(cpad(c, cell_width) for c in range(1, grid.cols + 1))]
    lines.append(" " * left_pad + top_left + rule + top_right)
    for r in range(1, grid.rows + 1):
        content = "".join(
            cpad(cell_symbol(cell, empty_placeholder), cell_width) for cell in grid.row_cells(r)
        )
        lines.append(f"{r:>{left_pad - 1}} {vertical}{content}{vertical}")
    lines.append(" " * left_pad + bottom_left + rule + bottom_right)
    return "\n".join(lines)


def _format_weight(weight: float) -> str:
    return "inf" if math.isinf(weight) else f"{weight:g}"


def format_crossword(
    puzzle: "CrosswordPuzzle",
    *,
    words_details: bool = True,
    black_cells_details: bool = True,
    style: str = "single",
) -> str:
    """Grid followed by the word list and the black cell bookkeeping."""

    lines: List[str] = [format_grid(puzzle.grid, style=style)]
    if words_details:
        for direction, title in ((Direction.HORIZONTAL, "Horizontal:"), (Direction.VERTICAL, "Vertical:")):
            words = [w for w in puzzle.words if w.direction == direction]
            if not words:
                continue
            lines.append("")
            lines.append(title)
            lines.extend(f" - '{w.text}' at ({w.row}, {w.col})" for w in words)
    if black_cells_details and puzzle.black_cells:
        lines.append("")
        lines.append("Black cells:")
        for (r, c), black in sorted(puzzle.black_cells.items()):
            origin = "manually placed" if black.manual else "automatically derived"
            lines.append(f" - at ({r}, {c}) was {origin} (count={_format_weight(black.weight)})")
    return "\n".join(lines)


def pretty_print_grid(grid: "CrosswordGrid", *, label: Optional[str] = None, stream=None) -> None:
    """Print the crossword grid in a human-friendly format."""

    stream = stream or sys.stdout
    if label:
        print(label, file=stream)
    print(format_grid(grid), file=stream)


def pretty_print_crossword(
    puzzle: "CrosswordPuzzle",
    *,
    details: bool = False,
    style: str = "single",
    label: Optional[str] = None,
    stream=None,
) -> None:
    stream = stream or sys.stdout
    if label:
        print(label, file=stream)
    print(
        format_crossword(puzzle, words_details=details, black_cells_details=details, style=style),
        file=stream,
    )
