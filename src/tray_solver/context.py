"""
Solution Context Module - Per-search interning pools and run control.
"""

import threading
import time
from dataclasses import dataclass, field
from typing import Callable, Optional

from .coordinate import CoordinatePool
from .piece import DEFAULT_LIMIT, PiecePool


@dataclass
class SolutionContext:
    """
    Shared context for one search: interning pools, cancellation and
    progress reporting.

    Pools live here rather than in module globals so independent searches
    never share coordinates or pieces.

    Attributes:
        pieces: Piece pool (its .coordinates is the coordinate pool)
        cancel_flag: Threading event for cooperative cancellation
        timeout_sec: Maximum search time in seconds, or None for no limit
        max_states: Maximum boards to expand, or None for no limit
        start_time: When the search started
        progress_callback: Optional callback(states_visited, message)
        progress_interval: Expansions between progress callbacks
    """
    pieces: PiecePool
    cancel_flag: threading.Event = field(default_factory=threading.Event)
    timeout_sec: Optional[float] = None
    max_states: Optional[int] = None
    start_time: float = field(default_factory=time.time)
    progress_callback: Optional[Callable[[int, str], None]] = None
    progress_interval: int = 10000

    @classmethod
    def for_extent(cls, rows: int, cols: int, **kwargs) -> "SolutionContext":
        """
        Create a context whose pools fit a rows x cols board.

        Coordinates are reserved one past each edge for boundary probing.

        Args:
            rows: Board rows
            cols: Board columns
            **kwargs: Other SolutionContext fields

        Returns:
            SolutionContext instance
        """
        coordinates = CoordinatePool(rows + 1, cols + 1)
        limit = max(DEFAULT_LIMIT, rows + 1, cols + 1)
        return cls(pieces=PiecePool(coordinates, limit), **kwargs)

    @property
    def coordinates(self) -> CoordinatePool:
        return self.pieces.coordinates

    def is_cancelled(self, states_visited: int = 0) -> bool:
        """
        Check if cancellation requested or a limit exceeded.

        Args:
            states_visited: Boards expanded so far

        Returns:
            True if the search should stop
        """
        if self.cancel_flag.is_set():
            return True
        if self.timeout_sec is not None and time.time() - self.start_time > self.timeout_sec:
            return True
        if self.max_states is not None and states_visited >= self.max_states:
            return True
        return False

    def report_progress(self, states_visited: int, message: str = "") -> None:
        """Forward a progress update to the callback, if any."""
        if self.progress_callback:
            self.progress_callback(states_visited, message)

    def elapsed_time(self) -> float:
        """Seconds elapsed since the search started."""
        return time.time() - self.start_time
