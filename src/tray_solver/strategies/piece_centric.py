"""
Piece-Centric Generator - Tries every piece in every direction.
"""

from typing import List

from ..base import MoveGenerator
from ..board import Board
from ..factory import GENERATORS
from ..move import ALL_DIRECTIONS, Move


@GENERATORS.register
class PieceCentricGenerator(MoveGenerator):
    """
    Attempts all four moves of every piece.

    Cost per board is pieces x 4 move attempts, so this is the cheaper
    strategy when the board holds fewer pieces than free cells.
    """
    name = "piece"
    description = "Piece-centric - move every piece in every direction"

    def candidate_moves(self, board: Board) -> List[Move]:
        return [
            Move(index, direction)
            for index in range(board.piece_count)
            for direction in ALL_DIRECTIONS
        ]
