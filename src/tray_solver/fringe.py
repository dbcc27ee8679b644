"""
Fringe Module - Pending-work collections driving traversal order.

A stack fringe gives depth-first search, a queue fringe breadth-first.
"""

from abc import ABC, abstractmethod
from collections import deque
from typing import Deque, List

from .factory import Registry
from .node import SearchNode

FRINGES: Registry = Registry("fringe")


class Fringe(ABC):
    """
    Abstract pending-node collection.

    Attributes:
        name: Short identifier used in settings and metrics
        description: Human-readable description
    """
    name: str = "base"
    description: str = "Base fringe"

    @abstractmethod
    def put(self, node: SearchNode) -> None:
        """Add a node to the fringe."""

    @abstractmethod
    def take(self) -> SearchNode:
        """
        Remove and return the next node.

        Raises:
            IndexError: If the fringe is empty
        """

    @abstractmethod
    def __len__(self) -> int:
        pass

    def is_empty(self) -> bool:
        return len(self) == 0


@FRINGES.register
class StackFringe(Fringe):
    """LIFO fringe (depth-first)."""
    name = "dfs"
    description = "Depth-first (stack)"

    def __init__(self):
        self._items: List[SearchNode] = []

    def put(self, node: SearchNode) -> None:
        self._items.append(node)

    def take(self) -> SearchNode:
        return self._items.pop()

    def __len__(self) -> int:
        return len(self._items)


@FRINGES.register
class QueueFringe(Fringe):
    """FIFO fringe (breadth-first)."""
    name = "bfs"
    description = "Breadth-first (queue)"

    def __init__(self):
        self._items: Deque[SearchNode] = deque()

    def put(self, node: SearchNode) -> None:
        self._items.append(node)

    def take(self) -> SearchNode:
        return self._items.popleft()

    def __len__(self) -> int:
        return len(self._items)

