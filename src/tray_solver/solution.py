"""
Solution Module - Result of a search run.
"""

from dataclasses import dataclass, field
from typing import List, Optional

import psutil

from .board import Board
from .move import Step


@dataclass
class SolutionMetrics:
    """
    Diagnostics for one search.

    Attributes:
        computation_time_ms: Time taken in milliseconds
        states_visited: Distinct boards expanded (size of the visited set)
        nodes_generated: Search nodes created, root included
        duplicates_skipped: Nodes discarded because their board was visited
        generator_name: Move generator used
        fringe_name: Fringe used ("dfs" or "bfs")
        memory_mb: Resident memory of the process after the search
    """
    computation_time_ms: float = 0.0
    states_visited: int = 0
    nodes_generated: int = 0
    duplicates_skipped: int = 0
    generator_name: str = ""
    fringe_name: str = ""
    memory_mb: float = 0.0


def current_memory_mb() -> float:
    """Resident set size of this process in megabytes."""
    return psutil.Process().memory_info().rss / (1024 * 1024)


@dataclass
class Solution:
    """
    Result of a search.

    Attributes:
        steps: Moves from the initial board to the goal, oldest first
        is_solved: True if a goal board was reached
        was_cancelled: True if stopped by cancellation or a limit
        final_board: Goal board reached, or None
        metrics: Performance statistics
    """
    steps: List[Step] = field(default_factory=list)
    is_solved: bool = False
    was_cancelled: bool = False
    final_board: Optional[Board] = None
    metrics: SolutionMetrics = field(default_factory=SolutionMetrics)

    @property
    def move_count(self) -> int:
        """Number of single-cell moves in the solution."""
        return len(self.steps)

    @property
    def has_moves(self) -> bool:
        return len(self.steps) > 0

    def lines(self) -> List[str]:
        """
        Format the solution as "r1 c1 r2 c2" lines.

        Returns:
            One line per step, or an empty list if unsolved
        """
        if not self.is_solved:
            return []
        return [str(step) for step in self.steps]
