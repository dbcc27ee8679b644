"""
Tray Solver Package - Sliding-block puzzle search.

Finds a sequence of single-cell piece moves that turns an initial tray into
one containing every goal piece.

Public API:
    - Coordinate, CoordinatePool: Interned board cells
    - Piece, PiecePool: Interned rectangles
    - Board: Occupancy model with the single move_one() mutator
    - Direction, Move, Step: Move definitions
    - SolutionContext: Per-search pools and run control
    - SearchConfig: Strategy choices
    - SearchEngine, SearchState, solve(): The search itself
    - Solution, SolutionMetrics: Search results
    - MoveGenerator, GENERATORS: Pluggable move generation
    - Fringe, FRINGES: Pluggable traversal order

Usage:
    from tray_solver import SolutionContext, Board, solve

    context = SolutionContext.for_extent(2, 2)
    pool = context.pieces
    board = Board(2, 2, [pool.from_corners(0, 0, 0, 0)], pool)
    solution = solve(board, [pool.from_corners(1, 1, 1, 1)], context)

    for line in solution.lines():
        print(line)
"""

# Core data structures
from .coordinate import Coordinate, CoordinatePool
from .piece import Piece, PiecePool
from .board import Board
from .move import Direction, Move, Step, ALL_DIRECTIONS
from .context import SolutionContext
from .settings import SearchConfig
from .solution import Solution, SolutionMetrics
from .errors import (
    TraySolverError,
    ConfigurationError,
    PuzzleFormatError,
    PoolNotInitializedError,
    CoordinateRangeError,
    InvalidPieceError,
    InvalidBoardError,
    IllegalMoveError,
    InvariantViolation,
)

# Generator and fringe framework
from .base import MoveGenerator
from .factory import GENERATORS, Registry
from .fringe import FRINGES, Fringe, StackFringe, QueueFringe
from .engine import SearchEngine, SearchState, solve

# Import strategies to register them
from . import strategies

__all__ = [
    # Data structures
    "Coordinate",
    "CoordinatePool",
    "Piece",
    "PiecePool",
    "Board",
    "Direction",
    "Move",
    "Step",
    "ALL_DIRECTIONS",
    "SolutionContext",
    "SearchConfig",
    "Solution",
    "SolutionMetrics",
    # Errors
    "TraySolverError",
    "ConfigurationError",
    "PuzzleFormatError",
    "PoolNotInitializedError",
    "CoordinateRangeError",
    "InvalidPieceError",
    "InvalidBoardError",
    "IllegalMoveError",
    "InvariantViolation",
    # Search framework
    "MoveGenerator",
    "GENERATORS",
    "Registry",
    "Fringe",
    "StackFringe",
    "QueueFringe",
    "FRINGES",
    "SearchEngine",
    "SearchState",
    "solve",
]
