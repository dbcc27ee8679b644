"""
Tray Solver - Entry Point

Loads an initial tray and a goal, searches for a move sequence and prints
one "r1 c1 r2 c2" line per single-cell move.

Example:
    tray-solver puzzles/easy.txt puzzles/easy.goal
    tray-solver -oTSM puzzles/big.txt puzzles/big.goal   # time, states, moves
    tray-solver --bfs --render debug puzzles/easy.txt puzzles/easy.goal

Debugging flags (-o followed by one or more letters):
    T: print the time taken
    C: check board invariants after every move (slow)
    A: gap-centric move generation only
    O: piece-centric move generation only
    S: print the number of distinct boards visited
    M: print the number of moves in the solution
"""

import argparse
import logging
import re
import sys
import time
from pathlib import Path
from typing import List, Optional

from .debug import save_board_image
from .engine import solve
from .errors import TraySolverError
from .puzzle_io import load_puzzle
from .settings import SearchConfig, load_settings

logger = logging.getLogger(__name__)

FLAG_PATTERN = re.compile(r"^[TCAOSM]+$")

EXIT_SOLVED = 0
EXIT_FAILED = 1


def configure_logging(level: str = "WARNING", log_file: Optional[str] = None) -> None:
    """Configure root logging - console output, plus a file when requested."""
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='w', encoding='utf-8'))
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        handlers=handlers,
        force=True,
    )


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Tray Solver - sliding-block puzzle solver"
    )
    parser.add_argument(
        "-o",
        dest="flags",
        default="",
        metavar="FLAGS",
        help="Debugging flags, any of T C A O S M (e.g. -oTCS)"
    )
    parser.add_argument("initial", help="File with the board extent and initial pieces")
    parser.add_argument("goal", help="File with the goal pieces")
    order = parser.add_mutually_exclusive_group()
    order.add_argument("--bfs", dest="breadth_first", action="store_const", const=True,
                       help="Force breadth-first search")
    order.add_argument("--dfs", dest="breadth_first", action="store_const", const=False,
                       help="Force depth-first search")
    parser.add_argument("--config", "-c", default=None,
                        help="Settings JSON file (default: config.json)")
    parser.add_argument("--render", "-r", default=None, metavar="DIR",
                        help="Save images of the initial and final boards into DIR")
    parser.add_argument("--log-level", default="WARNING",
                        help="Logging level (default: WARNING)")
    parser.add_argument("--log-file", default=None,
                        help="Also write the log to this file")
    return parser.parse_args(argv)


def build_config(flags: str, breadth_first: Optional[bool], settings_path: Optional[str]) -> SearchConfig:
    """
    Combine saved settings with command-line flags.

    Raises:
        ConfigurationError: On malformed or conflicting flags
    """
    base = SearchConfig.from_settings(load_settings(settings_path))
    return SearchConfig.from_flags(
        piece_only="O" in flags,
        gap_only="A" in flags,
        breadth_first=breadth_first,
        check_invariants="C" in flags,
        base=base,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the solver.

    Returns:
        Exit code: 0 when solved, 1 on no solution or any error
    """
    start = time.perf_counter()
    args = parse_args(argv)
    configure_logging(args.log_level, args.log_file)

    flags = args.flags
    if flags and not FLAG_PATTERN.match(flags):
        logger.error(f"Debugging flags must be letters among TCAOSM, got {flags!r}")
        return EXIT_FAILED

    try:
        config = build_config(flags, args.breadth_first, args.config)
        board, goal, context = load_puzzle(args.initial, args.goal,
                                           check_invariants=config.check_invariants)
        solution = solve(board, goal, context, config)
    except TraySolverError as e:
        logger.error(str(e))
        return EXIT_FAILED

    for line in solution.lines():
        print(line)

    if "T" in flags:
        print(f"Finished in: {time.perf_counter() - start:.3f} seconds")
    if solution.is_solved:
        if "S" in flags:
            print(f"Total configurations visited: {solution.metrics.states_visited}")
        if "M" in flags:
            print(f"Total number of moves in this solution: {solution.move_count}")

    if args.render:
        directory = Path(args.render)
        save_board_image(board, directory / "board_initial.png", goal, caption="initial")
        if solution.final_board is not None:
            save_board_image(solution.final_board, directory / "board_final.png", goal,
                             caption=f"{solution.move_count} moves")
        logger.info(f"Board images saved to {directory}")

    return EXIT_SOLVED if solution.is_solved else EXIT_FAILED


if __name__ == "__main__":
    sys.exit(main())
