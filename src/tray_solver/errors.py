"""
Errors Module - Exception hierarchy for the tray solver.

Configuration and format errors are raised before a search starts.
Move-legality rejections are raised by Board.move_one and swallowed by the
move generators, since they are ordinary dead branches of the search tree.
"""


class TraySolverError(Exception):
    """Base class for all solver errors."""


class ConfigurationError(TraySolverError, ValueError):
    """Conflicting or unknown search configuration."""


class PuzzleFormatError(TraySolverError, ValueError):
    """
    Malformed puzzle description.

    Attributes:
        source: File name (or other label) the line came from
        line_number: 1-based line number, or None if unknown
    """

    def __init__(self, message: str, source: str = "", line_number=None):
        self.source = source
        self.line_number = line_number
        if line_number is not None:
            message = f"{source or '<input>'}:{line_number}: {message}"
        super().__init__(message)


class PoolNotInitializedError(TraySolverError, RuntimeError):
    """Coordinate lookup before any bound was reserved."""


class CoordinateRangeError(TraySolverError, IndexError):
    """Coordinate or rectangle outside the configured pool bound."""


class InvalidPieceError(TraySolverError, ValueError):
    """Rectangle with non-positive size or inverted corners."""


class InvalidBoardError(TraySolverError, ValueError):
    """Board with non-positive extent, or out-of-bounds/overlapping pieces."""


class IllegalMoveError(TraySolverError, ValueError):
    """Move that would leave the board or collide with another piece."""


class InvariantViolation(TraySolverError, RuntimeError):
    """Board invariant broken; indicates a defect in move application."""
