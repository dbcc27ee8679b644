"""
Tests for the board occupancy model.

Usage:
    pytest tests/test_board.py
"""

import sys
from pathlib import Path

import pytest

# Add source directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from tray_solver import (
    ALL_DIRECTIONS,
    Board,
    Direction,
    IllegalMoveError,
    InvalidBoardError,
    InvariantViolation,
    GENERATORS,
    SolutionContext,
)


def make_board(rows, cols, corners, check_invariants=False):
    """Build a board from (r1, c1, r2, c2) tuples."""
    context = SolutionContext.for_extent(rows, cols)
    pool = context.pieces
    pieces = [pool.from_corners(*c) for c in corners]
    return Board(rows, cols, pieces, pool, check_invariants=check_invariants)


def test_construction_derives_free_cells():
    board = make_board(3, 4, [(0, 0, 1, 1), (2, 3, 2, 3)])
    assert board.piece_count == 2
    assert board.free_count == 12 - 4 - 1
    coords = board.pool.coordinates
    assert not board.is_free(coords.get(1, 1))
    assert board.is_free(coords.get(2, 2))
    board.check()


def test_construction_rejects_bad_extent():
    context = SolutionContext.for_extent(2, 2)
    with pytest.raises(InvalidBoardError):
        Board(0, 2, [], context.pieces)
    with pytest.raises(ValueError):
        Board(2, -1, [], context.pieces)


def test_construction_rejects_overlap_and_out_of_bounds():
    with pytest.raises(InvalidBoardError):
        make_board(3, 3, [(0, 0, 1, 1), (1, 1, 2, 2)])
    with pytest.raises(InvalidBoardError):
        make_board(3, 3, [(2, 2, 3, 3)])


def test_empty_board():
    board = make_board(2, 3, [])
    assert board.piece_count == 0
    assert board.free_count == 6
    board.check()


def test_move_one_updates_edge_strips():
    board = make_board(3, 3, [(0, 0, 1, 0)])
    coords = board.pool.coordinates
    step = board.move_one(0, Direction.RIGHT)

    assert str(step) == "0 0 0 1"
    assert step.direction is Direction.RIGHT
    assert board.get_piece(0) is board.pool.from_corners(0, 1, 1, 1)
    assert board.is_free(coords.get(0, 0))
    assert board.is_free(coords.get(1, 0))
    assert not board.is_free(coords.get(0, 1))
    assert board.free_count == 7
    board.check()


def test_move_off_left_edge_rejected():
    """A piece in column 0 cannot move left; the board stays unchanged."""
    board = make_board(2, 2, [(0, 0, 0, 0)])
    before = board.key()
    free_before = board.free_cells

    with pytest.raises(IllegalMoveError):
        board.move_one(0, Direction.LEFT)

    assert board.key() == before
    assert board.free_cells == free_before


def test_collision_rejected():
    board = make_board(1, 3, [(0, 0, 0, 0), (0, 1, 0, 1)])
    before = board.key()
    with pytest.raises(IllegalMoveError):
        board.move_one(0, Direction.RIGHT)
    assert board.key() == before
    board.move_one(1, Direction.RIGHT)
    board.move_one(0, Direction.RIGHT)
    assert str(board) == "1 3\n0 1 0 1\n0 2 0 2"


def test_clone_is_independent():
    board = make_board(2, 2, [(0, 0, 0, 0)])
    clone = board.clone()
    clone.move_one(0, Direction.DOWN)
    assert board.get_piece(0) is board.pool.from_corners(0, 0, 0, 0)
    assert clone.get_piece(0) is board.pool.from_corners(1, 0, 1, 0)
    assert board != clone
    assert board.free_count == clone.free_count == 3


def test_move_then_reverse_restores_board():
    board = make_board(4, 4, [(0, 0, 1, 1), (0, 3, 2, 3), (3, 0, 3, 1), (2, 2, 2, 2)])
    generator = GENERATORS.create("piece")
    moved = 0
    for move in generator.candidate_moves(board):
        clone = board.clone()
        try:
            clone.move_one(move.piece_index, move.direction)
        except IllegalMoveError:
            continue
        clone.move_one(move.piece_index, move.direction.reverse())
        assert clone == board
        assert hash(clone) == hash(board)
        assert clone.free_cells == board.free_cells
        moved += 1
    assert moved > 0


def test_equality_ignores_piece_order():
    context = SolutionContext.for_extent(3, 3)
    pool = context.pieces
    a = pool.from_corners(0, 0, 0, 1)
    b = pool.from_corners(2, 2, 2, 2)
    first = Board(3, 3, [a, b], pool)
    second = Board(3, 3, [b, a], pool)
    assert first == second
    assert hash(first) == hash(second)
    assert first.key() == second.key()
    assert len({first, second}) == 1
    assert first != Board(4, 3, [a, b], pool)


def test_contains_and_find_piece():
    board = make_board(3, 3, [(0, 0, 1, 1), (2, 2, 2, 2)])
    pool = board.pool
    coords = pool.coordinates
    assert board.contains_piece(pool.from_corners(2, 2, 2, 2))
    assert not board.contains_piece(pool.from_corners(2, 1, 2, 1))
    assert board.find_piece_covering(coords.get(1, 0)) == 0
    assert board.find_piece_covering(coords.get(2, 2)) == 1
    assert board.find_piece_covering(coords.get(0, 2)) is None
    assert board.satisfies([pool.from_corners(2, 2, 2, 2)])
    assert board.satisfies([])
    assert not board.satisfies([pool.from_corners(2, 2, 2, 2), pool.from_corners(0, 2, 0, 2)])


def test_to_grid_marks_pieces():
    board = make_board(2, 3, [(0, 0, 1, 0), (0, 2, 0, 2)])
    grid = board.to_grid()
    assert grid.shape == (2, 3)
    assert grid.tolist() == [[0, -1, 1], [0, -1, -1]]


def test_self_check_runs_after_every_move():
    board = make_board(3, 3, [(0, 0, 0, 0), (1, 1, 2, 2)], check_invariants=True)
    for direction in ALL_DIRECTIONS:
        clone = board.clone()
        try:
            clone.move_one(0, direction)
        except IllegalMoveError:
            continue
        assert clone.check_invariants


def test_check_detects_corrupted_free_set():
    board = make_board(2, 2, [(0, 0, 0, 0)], check_invariants=True)
    board._free.discard(board.pool.coordinates.get(1, 1))
    with pytest.raises(InvariantViolation, match="must equal board area"):
        board.check()
    # The flag makes the next mutation fail loudly
    with pytest.raises(InvariantViolation):
        board.move_one(0, Direction.DOWN)


def test_check_detects_overlap():
    board = make_board(2, 2, [(0, 0, 0, 0), (1, 1, 1, 1)])
    board._pieces[1] = board.pool.from_corners(0, 0, 0, 0)
    with pytest.raises(InvariantViolation, match="overlap"):
        board.check()
