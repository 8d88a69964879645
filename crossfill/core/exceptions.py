"""Custom exception hierarchy for the crossword engine."""


class CrosswordError(Exception):
    """Base exception for engine failures."""


class DictionaryLoadError(CrosswordError):
    """Raised when the word list cannot be read."""


class WordSetError(CrosswordError):
    """Raised when a set of words cannot be placed together in one grid."""

    def __init__(self, word: str, row: int, col: int, reason: str) -> None:
        super().__init__(f"Cannot place '{word}' at ({row}, {col}): {reason}")
        self.word = word
        self.row = row
        self.col = col
        self.reason = reason


class ResizeError(CrosswordError):
    """Raised when a resize would push a word outside the grid."""


class GridFormatError(CrosswordError):
    """Raised when a grid file cannot be parsed."""


class GridInvariantError(CrosswordError):
    """Raised when the grid and its black-cell bookkeeping disagree."""


class ValidationError(CrosswordError):
    """Raised when the crossword integrity checks fail."""
