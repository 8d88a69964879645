"""Small hand-made puzzles used by the CLI demos and the test-suite."""

from __future__ import annotations

from typing import List

from ..core.constants import Direction
from ..core.models import PlacedWord
from .puzzle import CrosswordPuzzle


H = Direction.HORIZONTAL
V = Direction.VERTICAL

SIMPLE_WORDS: List[PlacedWord] = [
    PlacedWord("CAT", 2, 2, H),
    PlacedWord("BAT", 1, 3, V),
    PlacedWord("SIR", 4, 4, H),
]

FULL_WORDS: List[PlacedWord] = [
    PlacedWord("GOLDEN", 1, 1, H),
    PlacedWord("AN", 2, 1, H),
    PlacedWord("SOUR", 3, 3, H),
    PlacedWord("EVER", 4, 1, H),
    PlacedWord("IE", 5, 2, H),
    PlacedWord("WINDOW", 6, 1, H),
    PlacedWord("GATE", 1, 1, V),
    PlacedWord("ON", 1, 2, V),
    PlacedWord("VII", 4, 2, V),
    PlacedWord("SEEN", 3, 3, V),
    PlacedWord("DOOR", 1, 4, V),
    PlacedWord("NARROW", 1, 6, V),
]

FULL_MANUAL_BLACKS = [(2, 5), (5, 5)]

# Words dropped from the full sample to obtain the partially filled one.
PARTIAL_REMOVED = ("SOUR", "SEEN", "DOOR", "WINDOW")

SAMPLE_KINDS = ("simple", "full", "partial")


def sample_crossword(kind: str = "simple") -> CrosswordPuzzle:
    """Return one of the built-in sample puzzles.

    ``simple`` is a sparse 5x6 grid with three words, ``full`` a completely
    filled 6x6 grid and ``partial`` the same 6x6 grid with four words removed.
    """

    if kind == "simple":
        return CrosswordPuzzle.from_words(5, 6, SIMPLE_WORDS)
    if kind == "full":
        puzzle = CrosswordPuzzle.from_words(6, 6, FULL_WORDS)
        for row, col in FULL_MANUAL_BLACKS:
            puzzle.place_black_cell(row, col)
        return puzzle
    if kind == "partial":
        puzzle = sample_crossword("full")
        for text in PARTIAL_REMOVED:
            puzzle.remove_word(text)
        return puzzle
    raise ValueError(f"Unknown sample crossword {kind!r}; choose from {', '.join(SAMPLE_KINDS)}")
