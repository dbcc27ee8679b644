"""
Base Generator Module - Abstract base class for move generators.
"""

from abc import ABC, abstractmethod
from typing import Iterator, List, Optional, Tuple

from .board import Board
from .errors import IllegalMoveError
from .move import Direction, Move, Step

Successor = Tuple[Board, Step]


class MoveGenerator(ABC):
    """
    Abstract base class for successor generation strategies.

    Subclasses must implement candidate_moves() and define name and
    description class attributes. Every strategy must yield the same set
    of successor boards for a given board; only order and cost differ.

    Attributes:
        name: Short identifier for the strategy
        description: Human-readable description
    """
    name: str = "base"
    description: str = "Base generator"

    @abstractmethod
    def candidate_moves(self, board: Board) -> List[Move]:
        """
        List the moves this strategy attempts on board, legal or not.

        Args:
            board: Board to inspect

        Returns:
            Moves in attempt order
        """
        pass

    def successors(self, board: Board) -> Iterator[Successor]:
        """
        Yield every board reachable from board by one legal move.

        Illegal candidates (out of bounds, collisions) are skipped.

        Args:
            board: Board to expand (left unchanged)

        Yields:
            (successor board, step) pairs
        """
        for move in self.candidate_moves(board):
            result = self.try_move(board, move.piece_index, move.direction)
            if result is not None:
                yield result

    def try_move(self, board: Board, index: int, direction: Direction) -> Optional[Successor]:
        """
        Apply a move to a clone of board.

        Args:
            board: Parent board (left unchanged)
            index: Handle of the piece to move
            direction: Direction of the move

        Returns:
            (successor, step), or None if the move is illegal
        """
        successor = board.clone()
        try:
            step = successor.move_one(index, direction)
        except IllegalMoveError:
            return None
        return successor, step
