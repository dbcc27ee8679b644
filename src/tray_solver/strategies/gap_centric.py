"""
Gap-Centric Generator - Pulls neighbouring pieces into free cells.
"""

from typing import List, Set, Tuple

from ..base import MoveGenerator
from ..board import Board
from ..factory import GENERATORS
from ..move import ALL_DIRECTIONS, Direction, Move


@GENERATORS.register
class GapCentricGenerator(MoveGenerator):
    """
    For every free cell and direction, moves the piece sitting one cell
    against that direction into the gap.

    Cost per board is free cells x 4 lookups, so this is the cheaper
    strategy on crowded boards with few free cells. A piece bordering a
    gap along a long edge is seen once per edge cell; each
    (piece, direction) pair is only attempted once.
    """
    name = "gap"
    description = "Gap-centric - pull pieces into free cells"

    def candidate_moves(self, board: Board) -> List[Move]:
        moves: List[Move] = []
        seen: Set[Tuple[int, Direction]] = set()
        get = board.pool.coordinates.get

        for gap in board.iter_free():
            for direction in ALL_DIRECTIONS:
                row = gap.row - direction.dr
                col = gap.col - direction.dc
                if not board.in_bounds(row, col):
                    continue
                index = board.find_piece_covering(get(row, col))
                if index is None or (index, direction) in seen:
                    continue
                seen.add((index, direction))
                moves.append(Move(index, direction))
        return moves
