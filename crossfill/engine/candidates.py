"""Per-slot dictionary candidate enumeration."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Dict, List, Tuple

from ..core.constants import MIN_WORD_LENGTH
from ..core.models import Slot
from ..utils.logger import get_logger, silenced
from .validator import is_connected

if TYPE_CHECKING:
    from ..data.dictionary import WordDictionary
    from .puzzle import CrosswordPuzzle


LOGGER = get_logger(__name__)

Candidates = Tuple[int, List[str]]


@dataclass
class SplitOption:
    """Candidates obtained by closing a slot with a black cell at ``index``.

    ``index`` is the 1-based position inside the slot. A side shorter than two
    cells cannot hold a word; it is reported with the single word ``""`` and
    does not reduce ``count``.
    """

    index: int
    position: Tuple[int, int]
    left_pattern: str
    right_pattern: str
    left_words: List[str]
    right_words: List[str]

    @property
    def count(self) -> int:
        return len(self.left_words) * len(self.right_words)


@dataclass
class SplitReport:
    options: Dict[int, SplitOption] = field(default_factory=dict)
    disconnecting: List[int] = field(default_factory=list)


class CandidateEnumerator:
    """Computes fitting words for slots against a :class:`WordDictionary`."""

    def __init__(self, dictionary: "WordDictionary") -> None:
        self.dictionary = dictionary

    def words_for(self, pattern: str) -> List[str]:
        length = len(pattern)
        return self.dictionary.fitting_words(f"^{pattern}$", length, length)[length]

    def simple(self, slot: Slot) -> Candidates:
        """Words of exactly ``slot.length`` letters matching the slot pattern."""

        words = self.words_for(slot.pattern)
        return len(words), words

    def split(self, puzzle: "CrosswordPuzzle", slot: Slot) -> SplitReport:
        """Simulate a black cell at every empty position of ``slot``.

        Positions whose black cell would disconnect the grid are listed in
        ``disconnecting`` and not enumerated. The puzzle is restored after each
        simulation.
        """

        report = SplitReport()
        for index, (char, position) in enumerate(zip(slot.pattern, slot.cells), start=1):
            if char != ".":
                continue
            with silenced():
                if not puzzle.place_black_cell(*position):
                    continue
                try:
                    if not is_connected(puzzle):
                        LOGGER.debug("Black cell at %s would disconnect the grid", position)
                        report.disconnecting.append(index)
                        continue
                    left, right = slot.pattern[: index - 1], slot.pattern[index:]
                    report.options[index] = SplitOption(
                        index=index,
                        position=position,
                        left_pattern=left,
                        right_pattern=right,
                        left_words=self._side_words(left),
                        right_words=self._side_words(right),
                    )
                finally:
                    puzzle.remove_black_cell(*position)
        return report

    def _side_words(self, pattern: str) -> List[str]:
        if len(pattern) < MIN_WORD_LENGTH:
            return [""]
        return self.words_for(pattern)

    def flexible(self, slot: Slot, increment: int) -> Dict[Tuple[int, int], Candidates]:
        """Candidates if ``slot`` grew by ``increment`` cells past its open ends.

        Keys are ``(added_at_start, added_at_end)``. A slot open at a single end
        grows only there; a slot open at both ends gets every split of the
        increment. A closed slot yields an empty mapping.
        """

        if increment < 1:
            raise ValueError("Increment must be at least 1")
        if slot.flexible_start and slot.flexible_end:
            shapes = [(k, increment - k) for k in range(increment + 1)]
        elif slot.flexible_start:
            shapes = [(increment, 0)]
        elif slot.flexible_end:
            shapes = [(0, increment)]
        else:
            LOGGER.debug("Slot %s is not flexible", slot)
            return {}

        out: Dict[Tuple[int, int], Candidates] = {}
        for start, end in shapes:
            words = self.words_for("." * start + slot.pattern + "." * end)
            out[(start, end)] = (len(words), words)
        return out
