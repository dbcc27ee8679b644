"""
Coordinate Module - Interned (row, col) cells.

A search performs tens of millions of coordinate lookups, so every
Coordinate handed out by a CoordinatePool is shared: two coordinates with
equal indices from the same pool are the same object, equality is an
identity check and the hash is a precomputed integer.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from .errors import CoordinateRangeError, PoolNotInitializedError
from .move import Direction

logger = logging.getLogger(__name__)

# Rows and columns are bounded by 32767, so a column always fits in 16 bits
_ROW_SHIFT = 16
MAX_INDEX = 32767


@dataclass(frozen=True, eq=False)
class Coordinate:
    """
    Immutable board cell. Obtain instances from CoordinatePool.get().

    Attributes:
        row: Row index (0-based)
        col: Column index (0-based)
    """
    row: int
    col: int
    key: int = field(repr=False)

    def __hash__(self) -> int:
        return self.key

    def __str__(self) -> str:
        """Format as "row col"."""
        return f"{self.row} {self.col}"


class CoordinatePool:
    """
    Grow-only factory of interned Coordinates.

    Example:
        pool = CoordinatePool()
        pool.reserve(rows + 1, cols + 1)
        assert pool.get(0, 1) is pool.get(0, 1)
    """

    def __init__(self, max_rows: Optional[int] = None, max_cols: Optional[int] = None):
        """
        Initialize the pool, optionally reserving a bound straight away.

        Args:
            max_rows: Exclusive row bound
            max_cols: Exclusive column bound
        """
        self._grid: Optional[List[List[Optional[Coordinate]]]] = None
        self._max_rows = 0
        self._max_cols = 0
        if max_rows is not None and max_cols is not None:
            self.reserve(max_rows, max_cols)

    @property
    def max_rows(self) -> int:
        return self._max_rows

    @property
    def max_cols(self) -> int:
        return self._max_cols

    @property
    def is_initialized(self) -> bool:
        return self._grid is not None

    def reserve(self, max_rows: int, max_cols: int) -> None:
        """
        Set or grow the exclusive bound of the pool.

        Previously issued coordinates stay valid. A bound smaller than the
        current one leaves the pool as it is.

        Args:
            max_rows: Exclusive row bound (at least one past the last board row)
            max_cols: Exclusive column bound

        Raises:
            CoordinateRangeError: If a bound is not positive or exceeds MAX_INDEX + 1
        """
        if max_rows <= 0 or max_cols <= 0:
            raise CoordinateRangeError(f"pool bound must be positive: {max_rows}x{max_cols}")
        if max_rows > MAX_INDEX + 1 or max_cols > MAX_INDEX + 1:
            raise CoordinateRangeError(f"pool bound too large: {max_rows}x{max_cols}")

        if self._grid is None:
            self._grid = []
        new_rows = max(max_rows, self._max_rows)
        new_cols = max(max_cols, self._max_cols)

        if new_cols > self._max_cols:
            for row in self._grid:
                row.extend([None] * (new_cols - self._max_cols))
        while len(self._grid) < new_rows:
            self._grid.append([None] * new_cols)

        if (new_rows, new_cols) != (self._max_rows, self._max_cols):
            logger.debug(f"Coordinate pool bound: {new_rows}x{new_cols}")
        self._max_rows = new_rows
        self._max_cols = new_cols

    def get(self, row: int, col: int) -> Coordinate:
        """
        Get the shared Coordinate for (row, col).

        Raises:
            PoolNotInitializedError: If no bound has been reserved
            CoordinateRangeError: If the indices are negative or out of bound
        """
        grid = self._grid
        if grid is None:
            raise PoolNotInitializedError("coordinate pool has no bound; call reserve() first")
        if row < 0 or col < 0 or row >= self._max_rows or col >= self._max_cols:
            raise CoordinateRangeError(
                f"coordinate ({row}, {col}) outside pool bound {self._max_rows}x{self._max_cols}"
            )
        point = grid[row][col]
        if point is None:
            point = Coordinate(row, col, (row << _ROW_SHIFT) | col)
            grid[row][col] = point
        return point

    def shift(self, point: Coordinate, direction: Direction) -> Coordinate:
        """Get the coordinate one cell away from point in direction."""
        return self.get(point.row + direction.dr, point.col + direction.dc)
