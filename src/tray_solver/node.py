"""
Search Node Module - Index-addressed arena of search tree nodes.

Each node records its parent's index and the step that produced it. The
fringe carries (node id, board) pairs, so boards are released once they
are expanded, while the arena keeps just enough to rebuild the move trace.
"""

from dataclasses import dataclass
from typing import List, Optional

from .board import Board
from .move import Step

ROOT = 0


@dataclass(frozen=True)
class SearchNode:
    """
    Pending fringe entry.

    Attributes:
        node_id: Index of the node in its NodeArena
        board: Board state reached at this node
    """
    node_id: int
    board: Board


class NodeArena:
    """
    Parent-linked tree of search nodes.

    Node 0 is the root, with no parent and no step.
    """

    def __init__(self):
        self._parents: List[int] = [-1]
        self._steps: List[Optional[Step]] = [None]

    def __len__(self) -> int:
        return len(self._parents)

    def add(self, parent: int, step: Step) -> int:
        """
        Record a child node.

        Args:
            parent: Index of the expanded node
            step: Move that turned the parent's board into the child's

        Returns:
            Index of the new node
        """
        self._parents.append(parent)
        self._steps.append(step)
        return len(self._parents) - 1

    def parent(self, node_id: int) -> Optional[int]:
        parent = self._parents[node_id]
        return None if parent < 0 else parent

    def step(self, node_id: int) -> Optional[Step]:
        return self._steps[node_id]

    def trace(self, node_id: int) -> List[Step]:
        """
        Rebuild the steps leading from the root to node_id, oldest first.
        """
        steps: List[Step] = []
        while node_id > ROOT:
            steps.append(self._steps[node_id])
            node_id = self._parents[node_id]
        steps.reverse()
        return steps

    def depth(self, node_id: int) -> int:
        depth = 0
        while node_id > ROOT:
            depth += 1
            node_id = self._parents[node_id]
        return depth
