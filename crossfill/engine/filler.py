"""Backtracking fill engine using the Minimum-Remaining-Values heuristic."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, List, Optional, Tuple

from ..core.constants import Direction
from ..core.exceptions import CrosswordError
from ..core.models import Cell, Slot
from ..utils.logger import get_logger, silenced
from .candidates import CandidateEnumerator
from .slots import find_slots

if TYPE_CHECKING:
    from ..data.dictionary import WordDictionary
    from .puzzle import CrosswordPuzzle


LOGGER = get_logger(__name__)


class FillStatus(str, Enum):
    FILLED = "filled"
    EXHAUSTED = "exhausted"
    ABORTED = "aborted"


@dataclass
class FillConfig:
    """Search limits for :class:`CrosswordFiller`."""

    max_calls: int = 600
    candidate_cap: int = 30
    validate_crossings: bool = False
    record_trace: bool = False


@dataclass
class FillStep:
    """One MRV decision: the chosen slot and the candidate counts it beat."""

    slot: Slot
    count: int
    counts: List[int]


@dataclass
class FillResult:
    status: FillStatus
    calls: int = 0
    trace: List[FillStep] = field(default_factory=list)

    def __bool__(self) -> bool:
        return self.status == FillStatus.FILLED


class FillAborted(CrosswordError):
    """Raised internally when the recursion budget is spent."""


class CrosswordFiller:
    """Fills every open slot of a puzzle with dictionary words.

    At each step the slot with the fewest simple candidates is chosen (the
    first one on ties), its candidates are shuffled with the seeded generator
    and at most ``candidate_cap`` of them are tried in turn, backtracking on
    failure. A slot without candidates ends the branch immediately.
    """

    def __init__(self, dictionary: "WordDictionary", config: Optional[FillConfig] = None) -> None:
        self.dictionary = dictionary
        self.config = config or FillConfig()
        self.enumerator = CandidateEnumerator(dictionary)
        self._calls = 0
        self._trace: List[FillStep] = []

    def fill(self, puzzle: "CrosswordPuzzle", seed: Optional[int] = None) -> FillResult:
        rng = random.Random(seed)
        self._calls = 0
        self._trace = []
        snapshot = puzzle.copy()

        LOGGER.info(
            "Filling %dx%d puzzle (seed=%s, max_calls=%d)",
            puzzle.rows,
            puzzle.cols,
            seed,
            self.config.max_calls,
        )
        try:
            with silenced():
                filled = self._search(puzzle, rng)
            status = FillStatus.FILLED if filled else FillStatus.EXHAUSTED
        except FillAborted:
            status = FillStatus.ABORTED

        if status != FillStatus.FILLED:
            _restore(puzzle, snapshot)
        LOGGER.info("Fill %s after %d calls", status.value, self._calls)
        return FillResult(status=status, calls=self._calls, trace=self._trace)

    def _search(self, puzzle: "CrosswordPuzzle", rng: random.Random) -> bool:
        if puzzle.is_full():
            return True
        self._calls += 1
        if self._calls > self.config.max_calls:
            raise FillAborted(f"Gave up after {self.config.max_calls} calls")

        slots = find_slots(puzzle.grid)
        if not slots:
            LOGGER.debug("Empty cells left outside any slot; dead end")
            return False

        best: Optional[Tuple[Slot, List[str]]] = None
        counts: List[int] = []
        for slot in slots:
            count, words = self.enumerator.simple(slot)
            if count == 0:
                LOGGER.debug("No candidates for slot %s; backtracking", slot)
                return False
            counts.append(count)
            if best is None or count < len(best[1]):
                best = (slot, words)

        assert best is not None
        slot, words = best
        if self.config.record_trace:
            self._trace.append(FillStep(slot=slot, count=len(words), counts=counts))

        candidates = list(words)
        rng.shuffle(candidates)
        for word in candidates[: self.config.candidate_cap]:
            if not puzzle.place_word(word, slot.row, slot.col, slot.direction):
                continue
            if self.config.validate_crossings and not self._crossings_valid(puzzle, slot):
                puzzle.remove_word(word)
                continue
            LOGGER.debug("Trying '%s' at %s", word, slot)
            if self._search(puzzle, rng):
                return True
            puzzle.remove_word(word)
        return False

    def _crossings_valid(self, puzzle: "CrosswordPuzzle", slot: Slot) -> bool:
        across = (
            Direction.VERTICAL if slot.direction == Direction.HORIZONTAL else Direction.HORIZONTAL
        )
        for row, col in slot.cells:
            cells = _run_through(puzzle, row, col, across)
            if len(cells) < 2 or not all(cell.is_letter() for cell in cells):
                continue
            text = "".join(cell.letter or "" for cell in cells)
            if not self.dictionary.contains(text):
                return False
        return True


def _run_through(puzzle: "CrosswordPuzzle", row: int, col: int, direction: Direction) -> List[Cell]:
    dr, dc = direction.step
    grid = puzzle.grid
    while grid.contains(row - dr, col - dc) and not grid.cell(row - dr, col - dc).is_black():
        row, col = row - dr, col - dc
    cells: List[Cell] = []
    while grid.contains(row, col) and not grid.cell(row, col).is_black():
        cells.append(grid.cell(row, col))
        row, col = row + dr, col + dc
    return cells


def _restore(puzzle: "CrosswordPuzzle", snapshot: "CrosswordPuzzle") -> None:
    puzzle.words = list(snapshot.words)
    puzzle.black_cells = snapshot.black_cells
    puzzle.rebuild()


def fill(
    puzzle: "CrosswordPuzzle",
    dictionary: "WordDictionary",
    seed: Optional[int] = None,
    config: Optional[FillConfig] = None,
) -> bool:
    """Fill ``puzzle`` in place; on failure it is left as it was."""

    return bool(CrosswordFiller(dictionary, config).fill(puzzle, seed=seed))
