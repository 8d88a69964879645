"""CP-SAT crossword filling solver using OR-Tools."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from itertools import combinations
from typing import TYPE_CHECKING, Dict, List, Optional, Sequence, Tuple, Union

from ortools.sat.python import cp_model

from ..core.models import Slot
from ..utils.logger import get_logger, silenced
from .candidates import CandidateEnumerator
from .slots import find_slots

if TYPE_CHECKING:
    from ..data.dictionary import WordDictionary
    from .puzzle import CrosswordPuzzle

LOGGER = get_logger(__name__)

Solution = List[Tuple[Slot, str]]


@dataclass
class CpSatConfig:
    """Limits for the CP-SAT fill."""

    timeout: float = 30.0
    max_candidates: int = 8000
    workers: int = 4


def solve_crossword(
    puzzle: "CrosswordPuzzle",
    dictionary: "WordDictionary",
    config: Optional[CpSatConfig] = None,
) -> Optional[Solution]:
    """Fill every open slot of ``puzzle`` via CP-SAT.

    Every empty cell lying in a slot becomes an integer variable over the
    letters seen in the candidate words. Each slot gets a table constraint
    listing its simple candidates; slots of equal length must differ and no
    slot may repeat a word already in the grid.

    Returns:
        List of (Slot, word) pairs, or None if unsolvable. The puzzle itself
        is not modified; see :func:`apply_solution`.
    """
    config = config or CpSatConfig()
    slots = find_slots(puzzle.grid)
    if not slots:
        return []

    enumerator = CandidateEnumerator(dictionary)
    model = cp_model.CpModel()

    # ------------------------------------------------------------------
    # Step 1: Per-slot candidates and the letter alphabet
    # ------------------------------------------------------------------
    slot_candidates: List[List[str]] = []
    for slot in slots:
        _, words = enumerator.simple(slot)
        words = words[: config.max_candidates]
        if not words:
            LOGGER.debug("No candidates for slot %s", slot)
            return None  # infeasible
        slot_candidates.append(words)

    alphabet = sorted({ch for words in slot_candidates for word in words for ch in word})
    code = {ch: index for index, ch in enumerate(alphabet)}
    used_words = [word.text for word in puzzle.words]
    for text in used_words:
        for ch in text:
            code.setdefault(ch, len(code))

    # ------------------------------------------------------------------
    # Step 2: Cell letter variables
    # ------------------------------------------------------------------
    cell_vars: Dict[Tuple[int, int], Union[cp_model.IntVar, int]] = {}
    for slot in slots:
        for r, c in slot.cells:
            if (r, c) in cell_vars:
                continue
            existing = puzzle.cell(r, c).letter
            if existing:
                cell_vars[(r, c)] = code.setdefault(existing, len(code))
            else:
                cell_vars[(r, c)] = model.new_int_var(0, max(len(alphabet) - 1, 0), f"L_{r}_{c}")

    # ------------------------------------------------------------------
    # Step 3: Table constraints over the open cells of each slot
    # ------------------------------------------------------------------
    for slot, words in zip(slots, slot_candidates):
        open_positions = [
            index for index, pos in enumerate(slot.cells) if _is_var(cell_vars[pos])
        ]
        if not open_positions:
            continue
        variables = [cell_vars[slot.cells[index]] for index in open_positions]
        tuples = {tuple(code[word[index]] for index in open_positions) for word in words}
        model.add_allowed_assignments(variables, sorted(tuples))

    # ------------------------------------------------------------------
    # Step 4: Uniqueness constraints
    # ------------------------------------------------------------------
    by_length: Dict[int, List[Slot]] = defaultdict(list)
    for slot in slots:
        by_length[slot.length].append(slot)

    for group in by_length.values():
        for s1, s2 in combinations(group, 2):
            _add_differ_constraint(model, cell_vars, s1, s2)

    # Forbid open slots from repeating already-placed words
    for slot in slots:
        for text in used_words:
            if len(text) == slot.length:
                _forbid_word(model, cell_vars, slot, [code[ch] for ch in text])

    # ------------------------------------------------------------------
    # Step 5: Solve
    # ------------------------------------------------------------------
    solver = cp_model.CpSolver()
    solver.parameters.max_time_in_seconds = config.timeout
    solver.parameters.num_workers = config.workers

    LOGGER.info(
        "CP-SAT: %d slots, %d cell vars, solving (timeout=%0.1fs)...",
        len(slots),
        sum(1 for v in cell_vars.values() if _is_var(v)),
        config.timeout,
    )

    status = solver.solve(model)

    if status not in (cp_model.OPTIMAL, cp_model.FEASIBLE):
        LOGGER.warning("CP-SAT: no solution found (status=%s)", solver.status_name(status))
        return None

    LOGGER.info("CP-SAT: solution found in %.2fs", solver.wall_time)

    # ------------------------------------------------------------------
    # Step 6: Extract solution
    # ------------------------------------------------------------------
    letters = {index: ch for ch, index in code.items()}
    result: Solution = []
    for slot in slots:
        word = "".join(letters[_resolve_var(solver, cell_vars[pos])] for pos in slot.cells)
        result.append((slot, word))
    return result


def apply_solution(puzzle: "CrosswordPuzzle", solution: Sequence[Tuple[Slot, str]]) -> bool:
    """Place every word of ``solution``; on any rejection undo them all."""

    placed: List[str] = []
    with silenced():
        for slot, word in solution:
            if not puzzle.place_word(word, slot.row, slot.col, slot.direction):
                LOGGER.warning("CP-SAT word '%s' rejected at %s; rolling back", word, slot)
                for text in reversed(placed):
                    puzzle.remove_word(text)
                return False
            placed.append(word)
    return True


def _is_var(value: object) -> bool:
    return isinstance(value, cp_model.IntVar)


def _resolve_var(solver: cp_model.CpSolver, var_or_const) -> int:
    """Get the value of a variable or constant."""
    if _is_var(var_or_const):
        return solver.value(var_or_const)
    return var_or_const


def _add_differ_constraint(model, cell_vars, s1: Slot, s2: Slot) -> None:
    """Ensure two same-length slots cannot contain identical words."""
    diffs = []
    for pos in range(s1.length):
        v1 = cell_vars[s1.cells[pos]]
        v2 = cell_vars[s2.cells[pos]]
        if not _is_var(v1) and not _is_var(v2):
            if v1 != v2:
                return  # Already guaranteed different
            continue
        b = model.new_bool_var(
            f"d_{s1.row}_{s1.col}_{s1.direction.value}_{s2.row}_{s2.col}_{s2.direction.value}_{pos}"
        )
        if not _is_var(v1):
            v1, v2 = v2, v1
        model.add(v1 != v2).only_enforce_if(b)
        model.add(v1 == v2).only_enforce_if(~b)
        diffs.append(b)
    if diffs:
        model.add_bool_or(diffs)


def _forbid_word(model, cell_vars, slot: Slot, encoded: List[int]) -> None:
    """Forbid a slot from matching a specific placed word."""
    diffs = []
    for pos in range(slot.length):
        v = cell_vars[slot.cells[pos]]
        if not _is_var(v):
            if v != encoded[pos]:
                return  # Already guaranteed different
            continue
        b = model.new_bool_var(f"ne_{slot.row}_{slot.col}_{slot.direction.value}_{pos}")
        model.add(v != encoded[pos]).only_enforce_if(b)
        model.add(v == encoded[pos]).only_enforce_if(~b)
        diffs.append(b)
    if diffs:
        model.add_bool_or(diffs)
