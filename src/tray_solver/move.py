"""
Move Module - Directions, logical moves and recorded steps.
"""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Tuple

if TYPE_CHECKING:
    from .coordinate import Coordinate


class Direction(Enum):
    """
    Unit displacement of a piece.

    Each value is the (row delta, col delta) applied to the piece's
    upper-left corner.
    """
    RIGHT = (0, 1)
    DOWN = (1, 0)
    LEFT = (0, -1)
    UP = (-1, 0)

    @property
    def dr(self) -> int:
        return self.value[0]

    @property
    def dc(self) -> int:
        return self.value[1]

    def reverse(self) -> "Direction":
        """Get the opposite direction."""
        return _REVERSE[self]


_REVERSE = {
    Direction.RIGHT: Direction.LEFT,
    Direction.LEFT: Direction.RIGHT,
    Direction.DOWN: Direction.UP,
    Direction.UP: Direction.DOWN,
}

# Expansion order used by both move generators
ALL_DIRECTIONS: Tuple[Direction, ...] = (
    Direction.RIGHT, Direction.DOWN, Direction.LEFT, Direction.UP
)


@dataclass(frozen=True)
class Move:
    """
    A logical single-cell move.

    Attributes:
        piece_index: Index of the piece in the board's piece sequence
        direction: Direction to displace the piece
    """
    piece_index: int
    direction: Direction


@dataclass(frozen=True)
class Step:
    """
    Recorded effect of one applied move.

    Attributes:
        before: Upper-left corner of the moved piece before the move
        after: Upper-left corner after the move
    """
    before: "Coordinate"
    after: "Coordinate"

    @property
    def direction(self) -> Direction:
        """Direction the piece travelled."""
        return Direction((self.after.row - self.before.row,
                          self.after.col - self.before.col))

    def __str__(self) -> str:
        """Format as "r1 c1 r2 c2"."""
        return f"{self.before} {self.after}"
