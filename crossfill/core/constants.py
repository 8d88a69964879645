"""Shared constants and enumerations for the crossword engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class CellType(str, Enum):
    """All supported cell states in the grid."""

    EMPTY = "EMPTY"
    BLACK = "BLACK"
    LETTER = "LETTER"


class Direction(str, Enum):
    """Word directions supported by the grid."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"

    @property
    def step(self) -> Tuple[int, int]:
        return (0, 1) if self is Direction.HORIZONTAL else (1, 0)


class Side(str, Enum):
    """Grid borders where rows or columns can be inserted."""

    TOP = "top"
    BOTTOM = "bottom"
    LEFT = "left"
    RIGHT = "right"


ORTHOGONAL_STEPS: Tuple[Tuple[int, int], ...] = ((0, 1), (1, 0), (0, -1), (-1, 0))

# Shortest entry a crossword accepts.
MIN_WORD_LENGTH = 2

# Symbols of the flat text grid format.
FILE_BLACK = "#"
FILE_EMPTY = "."

# Symbols used when rendering to the console.
DISPLAY_BLACK = "■"
DISPLAY_EMPTY = "⋅"


@dataclass(frozen=True)
class Bounds:
    """Simple 1-based rectangle bounds helper."""

    rows: int
    cols: int

    def contains(self, row: int, col: int) -> bool:
        return 1 <= row <= self.rows and 1 <= col <= self.cols
