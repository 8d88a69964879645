"""Placement rules, connectivity and integrity validation for puzzles."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional, Set, Tuple, Union

from ..core.constants import Direction, MIN_WORD_LENGTH
from ..core.exceptions import ValidationError
from ..utils.logger import get_logger
from .grid import CrosswordGrid
from .slots import completed_runs

if TYPE_CHECKING:
    from ..data.dictionary import WordDictionary
    from .puzzle import CrosswordPuzzle


LOGGER = get_logger(__name__)


@dataclass
class PlacementCheck:
    """Outcome of checking a word placement; falsy when rejected."""

    ok: bool
    reason: Optional[str] = None
    conflict: Optional[Tuple[int, int]] = None

    def __bool__(self) -> bool:
        return self.ok


@dataclass
class ValidationResult:
    ok: bool
    messages: List[str] = field(default_factory=list)


def _reject(reason: str, conflict: Optional[Tuple[int, int]] = None) -> PlacementCheck:
    return PlacementCheck(ok=False, reason=reason, conflict=conflict)


def check_placement(
    puzzle: "CrosswordPuzzle",
    word: str,
    row: int,
    col: int,
    direction: Union[Direction, str],
) -> PlacementCheck:
    """Check whether ``word`` may occupy the given position and direction.

    The word is uppercased before any check. Each failed rule yields its own
    reason; interior and border conflicts also carry the offending cell.
    """

    word = word.upper()
    if len(word) < MIN_WORD_LENGTH:
        return _reject(f"Cannot insert words with less than {MIN_WORD_LENGTH} letters")
    if any(placed.text == word for placed in puzzle.words):
        return _reject(f"Word '{word}' is already present; duplicate entries are not allowed")
    if not word.isalpha():
        return _reject(f"Word '{word}' contains characters other than letters")
    try:
        direction = Direction(direction)
    except ValueError:
        return _reject(f"Unknown direction {direction!r}; use 'horizontal' or 'vertical'")

    grid = puzzle.grid
    dr, dc = direction.step
    length = len(word)
    end_row, end_col = row + dr * (length - 1), col + dc * (length - 1)
    if not grid.contains(row, col) or not grid.contains(end_row, end_col):
        return _reject(
            f"Word '{word}' does not fit in the grid {direction.value}ly at ({row}, {col})"
        )

    for index, letter in enumerate(word):
        r, c = row + dr * index, col + dc * index
        existing = grid.cell(r, c)
        if existing.is_empty() or existing.letter == letter:
            continue
        return _reject(
            f"Cannot place '{word}' at ({row}, {col}) {direction.value}ly: "
            f"conflict at cell ({r}, {c})",
            conflict=(r, c),
        )

    for r, c in ((row - dr, col - dc), (end_row + dr, end_col + dc)):
        if grid.contains(r, c) and grid.cell(r, c).is_letter():
            return _reject(
                f"Cannot place '{word}' at ({row}, {col}) {direction.value}ly: "
                f"border cell ({r}, {c}) holds a letter",
                conflict=(r, c),
            )
    return PlacementCheck(ok=True)


def can_place_word(
    puzzle: "CrosswordPuzzle",
    word: str,
    row: int,
    col: int,
    direction: Union[Direction, str],
) -> bool:
    check = check_placement(puzzle, word, row, col, direction)
    if not check:
        LOGGER.warning("%s. No changes on the original grid.", check.reason)
    return check.ok


def is_connected(target: Union["CrosswordPuzzle", CrosswordGrid]) -> bool:
    """Return True when all non-black cells form one 4-connected region."""

    grid: CrosswordGrid = getattr(target, "grid", target)
    open_cells = [pos for pos in grid.positions() if not grid.cell(*pos).is_black()]
    if not open_cells:
        return True

    start = open_cells[0]
    visited: Set[Tuple[int, int]] = {start}
    stack = [start]
    while stack:
        row, col = stack.pop()
        for neighbor in grid.neighbors(row, col):
            if neighbor in visited or grid.cell(*neighbor).is_black():
                continue
            visited.add(neighbor)
            stack.append(neighbor)
    return len(visited) == len(open_cells)


class PuzzleValidator:
    """Runs deterministic integrity validation over a puzzle."""

    def __init__(self, dictionary: Optional["WordDictionary"] = None) -> None:
        self.dictionary = dictionary

    def validate(self, puzzle: "CrosswordPuzzle") -> ValidationResult:
        messages: List[str] = []
        try:
            self._check_words_written(puzzle)
            self._check_word_delimiters(puzzle)
            self._check_black_cells(puzzle)
            self._check_no_duplicate_words(puzzle)
            self._check_letters_valid(puzzle)
            self._check_connected(puzzle)
            if self.dictionary is not None:
                self._check_sequences(puzzle)
        except ValidationError as exc:
            messages.append(str(exc))
            LOGGER.error("Validation failed: %s", exc)
            return ValidationResult(ok=False, messages=messages)
        return ValidationResult(ok=True)

    def _check_words_written(self, puzzle: "CrosswordPuzzle") -> None:
        grid = puzzle.grid
        for word in puzzle.words:
            for letter, (r, c) in zip(word.text, word.cells):
                if not grid.contains(r, c):
                    raise ValidationError(f"Word '{word.text}' runs outside the grid at ({r},{c})")
                if grid.cell(r, c).letter != letter:
                    raise ValidationError(
                        f"Cell ({r},{c}) does not hold letter '{letter}' of '{word.text}'"
                    )

    def _check_word_delimiters(self, puzzle: "CrosswordPuzzle") -> None:
        grid = puzzle.grid
        for word in puzzle.words:
            for r, c in (word.before, word.after):
                if grid.contains(r, c) and not grid.cell(r, c).is_black():
                    raise ValidationError(
                        f"Word '{word.text}' is not delimited by a black cell at ({r},{c})"
                    )

    def _check_black_cells(self, puzzle: "CrosswordPuzzle") -> None:
        grid = puzzle.grid
        required = {
            pos
            for word in puzzle.words
            for pos in (word.before, word.after)
            if grid.contains(*pos)
        }
        manual = {pos for pos, cell in puzzle.black_cells.items() if cell.manual}
        if set(puzzle.black_cells) != required | manual:
            raise ValidationError("Black cell bookkeeping does not match word delimiters")
        for r, c in grid.positions():
            if grid.cell(r, c).is_black() != ((r, c) in puzzle.black_cells):
                raise ValidationError(f"Black cell at ({r},{c}) is not tracked")

    def _check_no_duplicate_words(self, puzzle: "CrosswordPuzzle") -> None:
        seen: Set[str] = set()
        for word in puzzle.words:
            if word.text in seen:
                raise ValidationError(
                    f"Duplicate word '{word.text}' at ({word.row},{word.col})"
                )
            seen.add(word.text)

    def _check_letters_valid(self, puzzle: "CrosswordPuzzle") -> None:
        grid = puzzle.grid
        for r, c in grid.positions():
            cell = grid.cell(r, c)
            if cell.is_letter():
                if not cell.letter or not cell.letter.isalpha() or not cell.letter.isupper():
                    raise ValidationError(f"Invalid letter '{cell.letter}' at ({r},{c})")

    def _check_connected(self, puzzle: "CrosswordPuzzle") -> None:
        if not is_connected(puzzle):
            raise ValidationError("Open cells do not form a single connected region")

    def _check_sequences(self, puzzle: "CrosswordPuzzle") -> None:
        dictionary = self.dictionary
        for run in completed_runs(puzzle.grid):
            if not dictionary.contains(run.text):
                raise ValidationError(
                    f"Invalid word '{run.text}' at ({run.row},{run.col})"
                )
