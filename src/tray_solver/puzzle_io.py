"""
Puzzle I/O Module - Parsing of tray and goal description files.

Initial file: first line "rows cols", then one "r1 c1 r2 c2" line per
piece (inclusive corners). Goal file: piece lines only. Blank lines are
ignored.
"""

import logging
from pathlib import Path
from typing import List, Tuple, Union

from .board import Board
from .context import SolutionContext
from .coordinate import MAX_INDEX
from .errors import CoordinateRangeError, InvalidPieceError, PuzzleFormatError
from .piece import Piece, PiecePool

logger = logging.getLogger(__name__)


def _parse_ints(line: str, count: int, source: str, line_number: int) -> List[int]:
    """Split a line into exactly count integers within 0..MAX_INDEX."""
    tokens = line.split()
    if len(tokens) < count:
        raise PuzzleFormatError(f"too few values (expected {count})", source, line_number)
    if len(tokens) > count:
        raise PuzzleFormatError(f"too many values (expected {count})", source, line_number)
    try:
        values = [int(token) for token in tokens]
    except ValueError:
        raise PuzzleFormatError(f"non-integer value in {line.strip()!r}", source, line_number)
    for value in values:
        if value < 0 or value > MAX_INDEX:
            raise PuzzleFormatError(f"value {value} outside 0..{MAX_INDEX}", source, line_number)
    return values


def parse_extent(line: str, source: str = "", line_number: int = 1) -> Tuple[int, int]:
    """
    Parse a "rows cols" line.

    Raises:
        PuzzleFormatError: If the line is malformed or an extent is zero
    """
    rows, cols = _parse_ints(line, 2, source, line_number)
    if rows == 0 or cols == 0:
        raise PuzzleFormatError(f"board extent must be positive: {rows}x{cols}", source, line_number)
    return rows, cols


def parse_piece_line(line: str, pool: PiecePool, source: str = "", line_number: int = 0) -> Piece:
    """
    Parse a "r1 c1 r2 c2" line into an interned Piece.

    Raises:
        PuzzleFormatError: If the line is malformed, the corners are
            inverted, or the piece does not fit the pool
    """
    r1, c1, r2, c2 = _parse_ints(line, 4, source, line_number)
    try:
        return pool.from_corners(r1, c1, r2, c2)
    except (InvalidPieceError, CoordinateRangeError) as e:
        raise PuzzleFormatError(str(e), source, line_number)


def read_pieces(lines: List[str], pool: PiecePool, source: str = "", first_line: int = 1) -> List[Piece]:
    """
    Parse piece lines, skipping blank ones.

    Args:
        lines: Raw lines
        pool: Piece pool to intern into
        source: Label used in error messages
        first_line: Line number of lines[0]

    Returns:
        Pieces in file order
    """
    pieces = []
    for offset, line in enumerate(lines):
        if not line.strip():
            continue
        pieces.append(parse_piece_line(line, pool, source, first_line + offset))
    return pieces


def _read_lines(path: Union[str, Path]) -> List[str]:
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return f.read().splitlines()
    except OSError as e:
        raise PuzzleFormatError(f"cannot read {path}: {e}")


def load_puzzle(initial_path: Union[str, Path], goal_path: Union[str, Path],
                check_invariants: bool = False, **context_kwargs) -> Tuple[Board, List[Piece], SolutionContext]:
    """
    Load an initial tray and a goal from files.

    The context is sized from the tray's extent, so pieces from both files
    share its pools.

    Args:
        initial_path: File with the extent line and initial pieces
        goal_path: File with goal pieces
        check_invariants: Enable board self-checking
        **context_kwargs: Extra SolutionContext fields

    Returns:
        (initial board, goal pieces, context)

    Raises:
        PuzzleFormatError: On unreadable files or malformed lines
        InvalidBoardError: If initial pieces are out of bounds or overlap
    """
    initial_source = str(initial_path)
    lines = _read_lines(initial_path)
    header = next((i for i, line in enumerate(lines) if line.strip()), None)
    if header is None:
        raise PuzzleFormatError("missing board extent line", initial_source, 1)

    rows, cols = parse_extent(lines[header], initial_source, header + 1)
    context = SolutionContext.for_extent(rows, cols, **context_kwargs)

    pieces = read_pieces(lines[header + 1:], context.pieces, initial_source, header + 2)
    board = Board(rows, cols, pieces, context.pieces, check_invariants=check_invariants)

    goal_source = str(goal_path)
    goal = read_pieces(_read_lines(goal_path), context.pieces, goal_source)
    logger.debug(f"Loaded {rows}x{cols} tray with {len(pieces)} pieces, {len(goal)} goal pieces")
    return board, goal, context
