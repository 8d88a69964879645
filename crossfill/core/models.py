"""Data models supporting the crossword engine."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import ClassVar, List, Optional, Tuple

from .constants import CellType, Direction


@dataclass(frozen=True)
class Cell:
    """Represents the content of a single grid cell."""

    type: CellType = CellType.EMPTY
    letter: Optional[str] = None

    EMPTY: ClassVar["Cell"]
    BLACK: ClassVar["Cell"]

    @classmethod
    def of(cls, letter: str) -> "Cell":
        if len(letter) != 1 or not letter.isalpha():
            raise ValueError(f"Not a single letter: {letter!r}")
        return cls(CellType.LETTER, letter.upper())

    def is_empty(self) -> bool:
        return self.type == CellType.EMPTY

    def is_black(self) -> bool:
        return self.type == CellType.BLACK

    def is_letter(self) -> bool:
        return self.type == CellType.LETTER


Cell.EMPTY = Cell(CellType.EMPTY)
Cell.BLACK = Cell(CellType.BLACK)


def span(row: int, col: int, direction: Direction, length: int) -> List[Tuple[int, int]]:
    dr, dc = direction.step
    return [(row + dr * i, col + dc * i) for i in range(length)]


@dataclass(frozen=True)
class PlacedWord:
    """A word written in the grid, anchored at its first letter."""

    text: str
    row: int
    col: int
    direction: Direction

    @property
    def length(self) -> int:
        return len(self.text)

    @property
    def cells(self) -> List[Tuple[int, int]]:
        return span(self.row, self.col, self.direction, self.length)

    @property
    def before(self) -> Tuple[int, int]:
        dr, dc = self.direction.step
        return self.row - dr, self.col - dc

    @property
    def after(self) -> Tuple[int, int]:
        dr, dc = self.direction.step
        return self.row + dr * self.length, self.col + dc * self.length

    def shifted(self, d_row: int, d_col: int) -> "PlacedWord":
        return PlacedWord(self.text, self.row + d_row, self.col + d_col, self.direction)


@dataclass
class BlackCell:
    """Bookkeeping for a black cell.

    Manual cells are placed by the user (or a generator) and carry an infinite
    weight; derived cells delimit words and count how many words rely on them.
    """

    position: Tuple[int, int]
    manual: bool = False
    weight: float = 0.0

    @classmethod
    def manual_at(cls, row: int, col: int) -> "BlackCell":
        return cls(position=(row, col), manual=True, weight=math.inf)


@dataclass
class Slot:
    """A maximal open run of cells where a word may still go."""

    row: int
    col: int
    direction: Direction
    length: int
    pattern: str
    flexible_start: bool = False
    flexible_end: bool = False

    @property
    def cells(self) -> List[Tuple[int, int]]:
        return span(self.row, self.col, self.direction, self.length)

    @property
    def is_flexible(self) -> bool:
        return self.flexible_start or self.flexible_end
