"""
Board Module - Occupancy model of a sliding-block tray.

A Board is an ordered list of interned Pieces plus the set of free
coordinates. The piece index is a stable handle used by moves. Boards are
mutable through a single operation, move_one(), which shifts one piece by
one cell and only touches the two edge strips that change.

Hashing and equality ignore piece order: two boards with the same extent
and the same pieces are the same search state.
"""

import logging
from typing import Iterable, List, Optional, Set, Tuple, FrozenSet

import numpy as np

from .coordinate import Coordinate
from .errors import IllegalMoveError, InvalidBoardError, InvariantViolation
from .move import Direction, Step
from .piece import Piece, PiecePool

logger = logging.getLogger(__name__)

BoardKey = Tuple[int, int, FrozenSet[Piece]]


class Board:
    """
    Snapshot of piece positions on a fixed-size grid.

    Attributes:
        rows: Number of rows
        cols: Number of columns
        pool: Piece pool the board's pieces come from
        check_invariants: Re-validate every invariant after each mutation
    """

    __slots__ = ("rows", "cols", "pool", "check_invariants", "_pieces", "_free")

    def __init__(self, rows: int, cols: int, pieces: Iterable[Piece],
                 pool: PiecePool, check_invariants: bool = False):
        """
        Build a board and derive its free cells from the piece list.

        Cost is proportional to board area plus piece count. The piece
        list is copied.

        Args:
            rows: Number of rows (> 0)
            cols: Number of columns (> 0)
            pieces: Pieces on the board, in handle order
            pool: Piece pool the pieces come from
            check_invariants: Enable full self-checking after every mutation

        Raises:
            InvalidBoardError: If the extent is not positive, or a piece lies
                outside the board or overlaps another piece
        """
        if rows <= 0 or cols <= 0:
            raise InvalidBoardError(f"board extent must be positive: {rows}x{cols}")
        self.rows = rows
        self.cols = cols
        self.pool = pool
        self.check_invariants = check_invariants
        self._pieces: List[Piece] = list(pieces)

        get = pool.coordinates.get
        free: Set[Coordinate] = {get(r, c) for r in range(rows) for c in range(cols)}

        for index, piece in enumerate(self._pieces):
            if piece.bottom >= rows or piece.right >= cols:
                raise InvalidBoardError(f"piece {index} ({piece}) lies outside the {rows}x{cols} board")
            for point in piece.cells():
                if point not in free:
                    raise InvalidBoardError(f"piece {index} ({piece}) overlaps another piece at {point}")
                free.remove(point)
        self._free = free

        if check_invariants:
            self.check()

    @classmethod
    def _from_parts(cls, source: "Board") -> "Board":
        """Copy containers of source without recomputing occupancy."""
        board = cls.__new__(cls)
        board.rows = source.rows
        board.cols = source.cols
        board.pool = source.pool
        board.check_invariants = source.check_invariants
        board._pieces = list(source._pieces)
        board._free = set(source._free)
        return board

    def clone(self) -> "Board":
        """
        Copy the piece list and free-cell set.

        Pieces and coordinates are shared, so cost is linear in piece
        count plus free-cell count.
        """
        return Board._from_parts(self)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def pieces(self) -> Tuple[Piece, ...]:
        return tuple(self._pieces)

    @property
    def free_cells(self) -> FrozenSet[Coordinate]:
        return frozenset(self._free)

    def iter_free(self) -> Iterable[Coordinate]:
        """Iterate free cells without copying (do not mutate meanwhile)."""
        return iter(self._free)

    @property
    def piece_count(self) -> int:
        return len(self._pieces)

    @property
    def free_count(self) -> int:
        return len(self._free)

    @property
    def area(self) -> int:
        return self.rows * self.cols

    def get_piece(self, index: int) -> Piece:
        return self._pieces[index]

    def is_free(self, point: Coordinate) -> bool:
        return point in self._free

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.rows and 0 <= col < self.cols

    def contains_piece(self, piece: Piece) -> bool:
        """Check whether piece (exact position and size) is on the board."""
        return piece in self._pieces

    def satisfies(self, goal: Iterable[Piece]) -> bool:
        """Check whether every goal piece is on the board."""
        present = set(self._pieces)
        return all(piece in present for piece in goal)

    def find_piece_covering(self, point: Coordinate) -> Optional[int]:
        """
        Find the piece covering a coordinate.

        Returns:
            Index of the covering piece, or None if the cell is free
            or outside the board
        """
        for index, piece in enumerate(self._pieces):
            if piece.covers(point):
                return index
        return None

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def move_one(self, index: int, direction: Direction) -> Step:
        """
        Move one piece one cell.

        The board is left unchanged when the move is rejected.

        Args:
            index: Handle of the piece to move
            direction: Direction of the displacement

        Returns:
            Step recording the piece's upper-left before and after

        Raises:
            IllegalMoveError: If the piece would leave the board or overlap
                another piece
        """
        old = self._pieces[index]
        top = old.top + direction.dr
        left = old.left + direction.dc
        if top < 0 or left < 0 or top + old.height > self.rows or left + old.width > self.cols:
            raise IllegalMoveError(f"piece {index} ({old}) cannot move {direction.name}: out of bounds")

        entering = self._edge(old, direction, leading=True)
        free = self._free
        for point in entering:
            if point not in free:
                raise IllegalMoveError(f"piece {index} ({old}) cannot move {direction.name}: collision at {point}")

        pool = self.pool
        new = pool.get(pool.coordinates.get(top, left), old.width, old.height)
        free.difference_update(entering)
        free.update(self._edge(old, direction, leading=False))
        self._pieces[index] = new

        if self.check_invariants:
            self.check()
        return Step(old.upper_left, new.upper_left)

    def _edge(self, piece: Piece, direction: Direction, leading: bool) -> List[Coordinate]:
        """
        Cells of the strip that changes when piece moves in direction.

        The leading strip is the one the piece moves into (just outside the
        piece); the trailing strip is the one it vacates (its own far edge).
        """
        get = self.pool.coordinates.get
        if direction is Direction.RIGHT or direction is Direction.LEFT:
            if direction is Direction.RIGHT:
                col = piece.right + 1 if leading else piece.left
            else:
                col = piece.left - 1 if leading else piece.right
            return [get(r, col) for r in range(piece.top, piece.bottom + 1)]
        if direction is Direction.DOWN:
            row = piece.bottom + 1 if leading else piece.top
        else:
            row = piece.top - 1 if leading else piece.bottom
        return [get(row, c) for c in range(piece.left, piece.right + 1)]

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def to_grid(self) -> np.ndarray:
        """
        Render occupancy as a rows x cols array.

        Returns:
            Array holding the covering piece index per cell, -1 for free
            cells. Overlapping pieces keep the lowest index.
        """
        grid = np.full((self.rows, self.cols), -1, dtype=np.int32)
        for index in range(len(self._pieces) - 1, -1, -1):
            piece = self._pieces[index]
            grid[piece.top:piece.bottom + 1, piece.left:piece.right + 1] = index
        return grid

    def check(self) -> None:
        """
        Re-derive and validate every board invariant from scratch.

        Raises:
            InvariantViolation: Naming the first invariant that fails
        """
        area = self.rows * self.cols
        if self.rows < 1 or self.cols < 1:
            raise InvariantViolation("board extent must be at least 1x1")

        coverage = np.zeros((self.rows, self.cols), dtype=np.int32)
        for index, piece in enumerate(self._pieces):
            if piece.top < 0 or piece.left < 0 or piece.bottom >= self.rows or piece.right >= self.cols:
                raise InvariantViolation(f"piece {index} ({piece}) must lie within the board")
            coverage[piece.top:piece.bottom + 1, piece.left:piece.right + 1] += 1

        if coverage.max(initial=0) > 1:
            r, c = np.argwhere(coverage > 1)[0]
            raise InvariantViolation(f"pieces must not overlap (cell {r} {c} covered twice)")

        piece_area = sum(piece.area for piece in self._pieces)
        if piece_area + len(self._free) != area:
            raise InvariantViolation(
                f"free cells ({len(self._free)}) + piece area ({piece_area}) must equal board area ({area})"
            )
        if len(self._pieces) > area:
            raise InvariantViolation("piece count must not exceed board area")
        if len(self._free) > area:
            raise InvariantViolation("free-cell count must not exceed board area")

        for point in self._free:
            if not self.in_bounds(point.row, point.col) or coverage[point.row, point.col]:
                raise InvariantViolation(f"free cell {point} must be inside the board and uncovered")

    # ------------------------------------------------------------------
    # Canonical identity
    # ------------------------------------------------------------------

    def key(self) -> BoardKey:
        """Order-independent identity of this state."""
        return (self.rows, self.cols, frozenset(self._pieces))

    def __hash__(self) -> int:
        return hash(self.key())

    def __eq__(self, other) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (self.rows == other.rows and self.cols == other.cols
                and set(self._pieces) == set(other._pieces))

    def __repr__(self) -> str:
        return f"Board({self.rows}x{self.cols}, pieces={len(self._pieces)}, free={len(self._free)})"

    def __str__(self) -> str:
        """Extent line followed by one "r1 c1 r2 c2" line per piece."""
        lines = [f"{self.rows} {self.cols}"]
        lines.extend(str(piece) for piece in self._pieces)
        return "\n".join(lines)
