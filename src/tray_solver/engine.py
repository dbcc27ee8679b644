"""
Search Engine Module - Exhaustive traversal of board states.

The engine is a small state machine. Each step() takes one node off the
fringe, tests it against the goal, and, if its board has not been
expanded before, pushes one node per legal successor. The fringe type
decides the order (stack = depth-first, queue = breadth-first); the
visited set keeps each distinct board from being expanded twice.

State Flow:
    RUNNING --goal reached--> SUCCEEDED
       |
       +----fringe empty----> EXHAUSTED
       |
       +----cancel/limit----> CANCELLED
"""

import logging
import time
from enum import Enum, auto
from typing import Iterable, List, Optional, Set

from .base import MoveGenerator
from .board import Board, BoardKey
from .context import SolutionContext
from .factory import GENERATORS
from .fringe import FRINGES, Fringe
from .node import ROOT, NodeArena, SearchNode
from .piece import Piece
from .settings import AUTO, SearchConfig
from .solution import Solution, SolutionMetrics, current_memory_mb

logger = logging.getLogger(__name__)


class SearchState(Enum):
    """
    States of a search run.

    States:
        RUNNING: Fringe still holds work
        SUCCEEDED: A goal board was dequeued
        EXHAUSTED: Fringe emptied without reaching the goal
        CANCELLED: Stopped by the context (cancel flag, timeout, state limit)
    """
    RUNNING = auto()
    SUCCEEDED = auto()
    EXHAUSTED = auto()
    CANCELLED = auto()


def choose_fringe_name(board: Board, config: SearchConfig) -> str:
    """
    Pick the fringe for a board.

    Breadth-first when both dimensions exceed the threshold, since deep
    depth-first runs on large boards grow memory quickly; depth-first
    otherwise.
    """
    if config.fringe != AUTO:
        return config.fringe
    threshold = config.breadth_first_threshold
    if board.rows > threshold and board.cols > threshold:
        return "bfs"
    return "dfs"


def choose_generator_name(board: Board, config: SearchConfig) -> str:
    """
    Pick the move generator for a board.

    Iterates the smaller collection: piece-centric when the piece count is
    below piece_centric_ratio times the free-cell count, gap-centric
    otherwise. Both counts are fixed for the whole search, so the choice is
    made once.
    """
    if config.generator != AUTO:
        return config.generator
    if board.piece_count < config.piece_centric_ratio * board.free_count:
        return "piece"
    return "gap"


class SearchEngine:
    """
    Fringe-driven search from an initial board to a goal.

    Example:
        engine = SearchEngine(context, board, goal, FRINGES.create("bfs"),
                              GENERATORS.create("piece"))
        solution = engine.run()
        for line in solution.lines():
            print(line)
    """

    def __init__(self, context: SolutionContext, board: Board, goal: Iterable[Piece],
                 fringe: Fringe, generator: MoveGenerator):
        """
        Seed the fringe with the initial board.

        Args:
            context: Pools, cancellation and progress reporting
            board: Initial board (not mutated)
            goal: Pieces that must all be present on a goal board
            fringe: Empty fringe deciding traversal order
            generator: Successor generation strategy
        """
        self.context = context
        self.goal: List[Piece] = list(goal)
        self.fringe = fringe
        self.generator = generator

        self._arena = NodeArena()
        self._visited: Set[BoardKey] = set()
        self._state = SearchState.RUNNING
        self._solved_node: Optional[SearchNode] = None
        self._duplicates = 0
        self._start = time.perf_counter()

        self.fringe.put(SearchNode(ROOT, board))

    @property
    def state(self) -> SearchState:
        return self._state

    @property
    def states_visited(self) -> int:
        """Distinct boards expanded so far."""
        return len(self._visited)

    @property
    def nodes_generated(self) -> int:
        return len(self._arena)

    def step(self) -> SearchState:
        """
        Process one fringe node.

        Returns:
            State after the step
        """
        if self._state is not SearchState.RUNNING:
            return self._state

        if self.fringe.is_empty():
            self._state = SearchState.EXHAUSTED
            return self._state

        if self.context.is_cancelled(len(self._visited)):
            self._state = SearchState.CANCELLED
            return self._state

        node = self.fringe.take()
        board = node.board

        if board.satisfies(self.goal):
            self._solved_node = node
            self._state = SearchState.SUCCEEDED
            return self._state

        key = board.key()
        if key in self._visited:
            self._duplicates += 1
            return self._state
        self._visited.add(key)

        for successor, move_step in self.generator.successors(board):
            child = self._arena.add(node.node_id, move_step)
            self.fringe.put(SearchNode(child, successor))

        visited = len(self._visited)
        if visited % self.context.progress_interval == 0:
            message = f"{visited} boards visited, fringe size {len(self.fringe)}"
            logger.debug(message)
            self.context.report_progress(visited, message)

        return self._state

    def run(self) -> Solution:
        """
        Step until the search leaves the RUNNING state.

        Returns:
            Solution with the move trace (empty unless solved) and metrics
        """
        while self.step() is SearchState.RUNNING:
            pass
        return self.build_solution()

    def build_solution(self) -> Solution:
        """Package the current outcome and diagnostics."""
        metrics = SolutionMetrics(
            computation_time_ms=(time.perf_counter() - self._start) * 1000,
            states_visited=len(self._visited),
            nodes_generated=len(self._arena),
            duplicates_skipped=self._duplicates,
            generator_name=self.generator.name,
            fringe_name=self.fringe.name,
            memory_mb=current_memory_mb(),
        )

        if self._state is SearchState.SUCCEEDED:
            node = self._solved_node
            return Solution(
                steps=self._arena.trace(node.node_id),
                is_solved=True,
                final_board=node.board,
                metrics=metrics,
            )
        return Solution(
            is_solved=False,
            was_cancelled=self._state is SearchState.CANCELLED,
            metrics=metrics,
        )


def solve(board: Board, goal: Iterable[Piece], context: SolutionContext,
          config: Optional[SearchConfig] = None) -> Solution:
    """
    Search for a move sequence reaching the goal.

    Picks the fringe and generator from config (or from the board when
    config says "auto"), applies the invariant self-check flag, and runs
    the search to completion.

    Args:
        board: Initial board (not mutated)
        goal: Pieces that must all be present
        context: Pools and run control; its pools must own board's pieces
        config: Strategy choices (default: SearchConfig())

    Returns:
        Solution (is_solved False on exhaustion or cancellation)

    Raises:
        InvariantViolation: If self-checking is enabled and a board breaks
            an invariant
    """
    config = config or SearchConfig()
    if config.timeout_sec is not None:
        context.timeout_sec = config.timeout_sec
    if config.max_states is not None:
        context.max_states = config.max_states
    context.progress_interval = config.progress_interval

    root = board.clone()
    root.check_invariants = config.check_invariants
    if config.check_invariants:
        root.check()

    fringe_name = choose_fringe_name(root, config)
    generator_name = choose_generator_name(root, config)
    logger.info(
        f"Searching {root.rows}x{root.cols} board: {root.piece_count} pieces, "
        f"{root.free_count} free cells, fringe={fringe_name}, generator={generator_name}"
    )

    context.start_time = time.time()
    engine = SearchEngine(context, root, goal, FRINGES.create(fringe_name),
                          GENERATORS.create(generator_name))
    solution = engine.run()

    metrics = solution.metrics
    if solution.is_solved:
        logger.info(
            f"Solved in {solution.move_count} moves, {metrics.states_visited} boards visited, "
            f"{metrics.computation_time_ms:.1f}ms"
        )
    elif solution.was_cancelled:
        logger.info(f"Search cancelled after {metrics.states_visited} boards")
    else:
        logger.info(f"No solution: {metrics.states_visited} boards visited, fringe exhausted")
    return solution
