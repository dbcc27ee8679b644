"""
Piece Module - Interned rectangular pieces.

A Piece is an axis-aligned rectangle given by its upper-left Coordinate,
a width and a height. PiecePool hands out one shared instance per distinct
rectangle, keyed by a perfect hash, so piece equality is an identity check.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterator

from .coordinate import Coordinate, CoordinatePool
from .errors import CoordinateRangeError, InvalidPieceError

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 256


def perfect_hash(row: int, col: int, width: int, height: int, limit: int) -> int:
    """
    Map a rectangle inside a limit x limit square to a unique integer.

    Rectangles are ordered by upper-left row, then upper-left column, then
    width, then height. Only rectangles that fit (row + height <= limit,
    col + width <= limit) are counted, so the range is dense:
    0 .. (limit * (limit + 1) // 2) ** 2 - 1.

    Args:
        row: Upper-left row
        col: Upper-left column
        width: Width in cells (>= 1)
        height: Height in cells (>= 1)
        limit: Side of the bounding square

    Returns:
        Index of the rectangle
    """
    per_row = limit * (limit + 1) // 2
    rows_before = (limit * row - row * (row - 1) // 2) * per_row
    cols_before = (limit - row) * (limit * col - col * (col - 1) // 2)
    return rows_before + cols_before + (width - 1) * (limit - row) + (height - 1)


@dataclass(frozen=True, eq=False)
class Piece:
    """
    Immutable rectangle. Obtain instances from PiecePool.

    Attributes:
        upper_left: Upper-left corner
        width: Number of columns covered
        height: Number of rows covered
    """
    upper_left: Coordinate
    width: int
    height: int
    key: int = field(repr=False)
    _coords: CoordinatePool = field(repr=False)

    def __hash__(self) -> int:
        return self.key

    @property
    def top(self) -> int:
        return self.upper_left.row

    @property
    def left(self) -> int:
        return self.upper_left.col

    @property
    def bottom(self) -> int:
        """Last covered row (inclusive)."""
        return self.upper_left.row + self.height - 1

    @property
    def right(self) -> int:
        """Last covered column (inclusive)."""
        return self.upper_left.col + self.width - 1

    @property
    def upper_right(self) -> Coordinate:
        return self._coords.get(self.top, self.right)

    @property
    def lower_left(self) -> Coordinate:
        return self._coords.get(self.bottom, self.left)

    @property
    def lower_right(self) -> Coordinate:
        return self._coords.get(self.bottom, self.right)

    @property
    def area(self) -> int:
        return self.width * self.height

    def overlaps(self, other: "Piece") -> bool:
        """Check whether the two rectangles share at least one cell."""
        return (min(self.bottom, other.bottom) >= max(self.top, other.top)
                and min(self.right, other.right) >= max(self.left, other.left))

    def covers(self, point: Coordinate) -> bool:
        """Check whether point lies inside this rectangle."""
        dr = point.row - self.upper_left.row
        dc = point.col - self.upper_left.col
        return 0 <= dr < self.height and 0 <= dc < self.width

    def cells(self) -> Iterator[Coordinate]:
        """Iterate every covered coordinate, row by row."""
        get = self._coords.get
        for r in range(self.top, self.bottom + 1):
            for c in range(self.left, self.right + 1):
                yield get(r, c)

    def __str__(self) -> str:
        """Format as "r1 c1 r2 c2" (inclusive corners)."""
        return f"{self.top} {self.left} {self.bottom} {self.right}"


class PiecePool:
    """
    Factory of interned Pieces backed by a perfect hash.

    The pool shares its CoordinatePool, so corners of pool pieces are
    interned coordinates too.
    """

    def __init__(self, coordinates: CoordinatePool, limit: int = DEFAULT_LIMIT):
        """
        Args:
            coordinates: Pool used for corners and covered cells
            limit: Side of the square all pieces must fit in
        """
        if limit <= 0:
            raise CoordinateRangeError(f"piece pool limit must be positive: {limit}")
        self.coordinates = coordinates
        self.limit = limit
        self._pieces: Dict[int, Piece] = {}

    def __len__(self) -> int:
        return len(self._pieces)

    def get(self, upper_left: Coordinate, width: int, height: int) -> Piece:
        """
        Get the shared Piece for a rectangle.

        Raises:
            InvalidPieceError: If width or height is not positive
            CoordinateRangeError: If the rectangle does not fit the pool limit
        """
        if width <= 0 or height <= 0:
            raise InvalidPieceError(f"non-positive piece size {width}x{height}")
        row = upper_left.row
        col = upper_left.col
        if row + height > self.limit or col + width > self.limit:
            raise CoordinateRangeError(
                f"piece at ({row}, {col}) size {width}x{height} exceeds limit {self.limit}"
            )

        key = perfect_hash(row, col, width, height, self.limit)
        piece = self._pieces.get(key)
        if piece is None:
            piece = Piece(upper_left, width, height, key, self.coordinates)
            self._pieces[key] = piece
        return piece

    def at(self, row: int, col: int, width: int, height: int) -> Piece:
        """Get a piece from raw upper-left indices."""
        return self.get(self.coordinates.get(row, col), width, height)

    def from_corners(self, r1: int, c1: int, r2: int, c2: int) -> Piece:
        """
        Get a piece from inclusive upper-left and lower-right corners.

        Raises:
            InvalidPieceError: If (r2, c2) is above or left of (r1, c1)
        """
        if r2 < r1 or c2 < c1:
            raise InvalidPieceError(
                f"lower-right ({r2}, {c2}) is not below/right of upper-left ({r1}, {c1})"
            )
        return self.get(self.coordinates.get(r1, c1), c2 - c1 + 1, r2 - r1 + 1)

    def relocate(self, piece: Piece, upper_left: Coordinate) -> Piece:
        """Get the piece of the same size with a new upper-left corner."""
        return self.get(upper_left, piece.width, piece.height)
