"""Command line interface for building, filling and inspecting crosswords."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from .core.exceptions import CrosswordError
from .data.dictionary import DictionaryConfig, WordDictionary
from .engine.candidates import CandidateEnumerator
from .engine.cpsat import CpSatConfig, apply_solution, solve_crossword
from .engine.filler import CrosswordFiller, FillConfig, FillStatus
from .engine.patterns import PatternConfig, patterned_crossword, striped_crossword
from .engine.puzzle import CrosswordPuzzle
from .engine.slots import find_slots
from .engine.validator import PuzzleValidator
from .io.grid_file import load_crossword, save_crossword
from .utils.logger import configure_logging, get_logger
from .utils.pretty import format_crossword, pretty_print_crossword

LOGGER = get_logger(__name__)


def _add_common(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )


def _add_fill_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducibility")
    parser.add_argument(
        "--solver",
        type=str,
        choices=["backtracking", "cpsat"],
        default="backtracking",
        help="Fill strategy",
    )
    parser.add_argument(
        "--max-calls",
        type=int,
        default=FillConfig.max_calls,
        help="Recursion budget of the backtracking fill",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=CpSatConfig.timeout,
        help="Time limit in seconds of the CP-SAT fill",
    )
    parser.add_argument(
        "--validate-crossings",
        action="store_true",
        help="Reject words completing a crossing run that is not in the dictionary",
    )
    parser.add_argument("--output", type=Path, help="Optional path to JSON output")
    parser.add_argument("--save", type=Path, help="Optional path to save the grid as text")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Build and fill crossword grids")
    commands = parser.add_subparsers(dest="command", required=True)

    generate = commands.add_parser("generate", help="Generate a black cell layout")
    generate.add_argument("--rows", type=int, required=True, help="Grid height in cells")
    generate.add_argument("--cols", type=int, required=True, help="Grid width in cells")
    generate.add_argument(
        "--style",
        type=str,
        choices=["pattern", "stripes"],
        default="pattern",
        help="Black cell layout strategy",
    )
    generate.add_argument(
        "--max-density",
        type=float,
        default=PatternConfig.max_density,
        help="Maximum fraction of black cells",
    )
    generate.add_argument(
        "--symmetry",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Mirror black cells through the grid centre",
    )
    generate.add_argument(
        "--double-symmetry",
        action="store_true",
        help="Also mirror black cells across both axes",
    )
    generate.add_argument("--fill", action="store_true", help="Fill the generated layout")
    generate.add_argument("--dictionary", type=Path, help="Word list used with --fill")
    _add_fill_options(generate)
    _add_common(generate)

    fill = commands.add_parser("fill", help="Fill a saved grid")
    fill.add_argument("grid", type=Path, help="Grid text file")
    fill.add_argument("--dictionary", type=Path, required=True, help="Word list, one word per line")
    _add_fill_options(fill)
    _add_common(fill)

    show = commands.add_parser("show", help="Print a saved grid")
    show.add_argument("grid", type=Path, help="Grid text file")
    show.add_argument("--details", action="store_true", help="List words and black cells")
    show.add_argument(
        "--style", type=str, choices=["single", "double"], default="single", help="Border style"
    )
    _add_common(show)

    slots = commands.add_parser("slots", help="List open slots and their candidates")
    slots.add_argument("grid", type=Path, help="Grid text file")
    slots.add_argument("--dictionary", type=Path, required=True, help="Word list, one word per line")
    slots.add_argument("--split", action="store_true", help="Simulate black cells inside slots")
    slots.add_argument(
        "--flexible",
        type=int,
        default=0,
        metavar="N",
        help="Simulate growing open-ended slots by up to N cells",
    )
    slots.add_argument("--limit", type=int, default=10, help="Candidates shown per slot")
    _add_common(slots)
    return parser


def _load_dictionary(path: Path) -> WordDictionary:
    return WordDictionary(DictionaryConfig(path=path))


def run_fill(puzzle: CrosswordPuzzle, dictionary: WordDictionary, args: argparse.Namespace) -> str:
    if args.solver == "cpsat":
        solution = solve_crossword(puzzle, dictionary, CpSatConfig(timeout=args.timeout))
        if solution is None or not apply_solution(puzzle, solution):
            return FillStatus.EXHAUSTED.value
        return FillStatus.FILLED.value if puzzle.is_full() else FillStatus.EXHAUSTED.value

    config = FillConfig(max_calls=args.max_calls, validate_crossings=args.validate_crossings)
    result = CrosswordFiller(dictionary, config).fill(puzzle, seed=args.seed)
    return result.status.value


def _emit(
    puzzle: CrosswordPuzzle,
    args: argparse.Namespace,
    status: Optional[str],
    dictionary: Optional[WordDictionary] = None,
) -> None:
    print(format_crossword(puzzle, words_details=False, black_cells_details=False))
    if args.save:
        save_crossword(puzzle, args.save)
    if not args.output:
        return
    payload: Dict[str, Any] = {"puzzle": puzzle.to_jsonable(), "seed": args.seed}
    if status is not None:
        payload["status"] = status
        payload["validation"] = PuzzleValidator(dictionary).validate(puzzle).messages
    args.output.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")


def _cmd_generate(args: argparse.Namespace, parser: argparse.ArgumentParser) -> int:
    if args.fill and not args.dictionary:
        parser.error("--fill requires --dictionary")
    config = PatternConfig(
        max_density=args.max_density,
        symmetry=args.symmetry,
        double_symmetry=args.double_symmetry,
        seed=args.seed,
    )
    builder = patterned_crossword if args.style == "pattern" else striped_crossword
    puzzle = builder(args.rows, args.cols, config)

    status = None
    dictionary = None
    if args.fill:
        dictionary = _load_dictionary(args.dictionary)
        status = run_fill(puzzle, dictionary, args)
    _emit(puzzle, args, status, dictionary)
    return 0 if status in (None, FillStatus.FILLED.value) else 1


def _cmd_fill(args: argparse.Namespace) -> int:
    puzzle = load_crossword(args.grid)
    dictionary = _load_dictionary(args.dictionary)
    status = run_fill(puzzle, dictionary, args)
    _emit(puzzle, args, status, dictionary)
    return 0 if status == FillStatus.FILLED.value else 1


def _cmd_show(args: argparse.Namespace) -> int:
    pretty_print_crossword(load_crossword(args.grid), details=args.details, style=args.style)
    return 0


def _preview(words: List[str], limit: int) -> str:
    shown = ", ".join(words[:limit])
    return shown + (", ..." if len(words) > limit else "")


def _cmd_slots(args: argparse.Namespace) -> int:
    puzzle = load_crossword(args.grid)
    enumerator = CandidateEnumerator(_load_dictionary(args.dictionary))
    for slot in find_slots(puzzle.grid):
        count, words = enumerator.simple(slot)
        print(
            f"({slot.row}, {slot.col}) {slot.direction.value} len={slot.length} "
            f"'{slot.pattern}' => {count} options: {_preview(words, args.limit)}"
        )
        if slot.is_flexible:
            for increment in range(1, args.flexible + 1):
                for (start, end), (n, found) in enumerator.flexible(slot, increment).items():
                    print(f"    grow ({start}, {end}) => {n} options: {_preview(found, args.limit)}")
        if args.split:
            report = enumerator.split(puzzle, slot)
            for index in report.disconnecting:
                print(f"    black cell at index {index} would disconnect the grid")
            for index, option in report.options.items():
                print(
                    f"    black cell at {option.position}: "
                    f"'{option.left_pattern}/{option.right_pattern}' => {option.count} options"
                )
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    level = getattr(logging, args.log_level.upper(), logging.INFO)
    configure_logging(level)

    try:
        if args.command == "generate":
            return _cmd_generate(args, parser)
        if args.command == "fill":
            return _cmd_fill(args)
        if args.command == "show":
            return _cmd_show(args)
        return _cmd_slots(args)
    except (CrosswordError, ValueError) as exc:
        LOGGER.error("%s", exc)
        return 2


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
