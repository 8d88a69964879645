"""Crossword construction engine.

This package exposes the public API surface via:

- ``crossfill.engine.puzzle.CrosswordPuzzle``: grid, words and black cells kept consistent.
- ``crossfill.engine.filler.CrosswordFiller``: backtracking MRV fill.
- ``crossfill.data.dictionary.WordDictionary``: loads word lists and answers pattern queries.
- ``crossfill.io.grid_file`` helpers: text persistence of grids.
"""

from .data.dictionary import DictionaryConfig, WordDictionary
from .engine.filler import CrosswordFiller, FillConfig, FillResult, FillStatus, fill
from .engine.puzzle import CrosswordPuzzle
from .engine.samples import sample_crossword

__all__ = [
    "CrosswordPuzzle",
    "CrosswordFiller",
    "FillConfig",
    "FillResult",
    "FillStatus",
    "fill",
    "WordDictionary",
    "DictionaryConfig",
    "sample_crossword",
]

__version__ = "0.2.0"
