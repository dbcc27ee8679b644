"""
Tests for coordinate and piece interning.

Usage:
    pytest tests/test_interning.py
"""

import sys
from pathlib import Path

import pytest

# Add source directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from tray_solver import (
    CoordinatePool,
    CoordinateRangeError,
    Direction,
    InvalidPieceError,
    PiecePool,
    PoolNotInitializedError,
)
from tray_solver.piece import perfect_hash


def test_coordinates_are_shared():
    """Equal indices give the same object; hashes are stable integers."""
    pool = CoordinatePool(4, 5)
    a = pool.get(2, 3)
    b = pool.get(2, 3)
    assert a is b
    assert a == b
    assert hash(a) == hash(b)
    assert a is not pool.get(3, 2)
    assert str(a) == "2 3"


def test_lookup_before_reserve_fails():
    pool = CoordinatePool()
    assert not pool.is_initialized
    with pytest.raises(PoolNotInitializedError):
        pool.get(0, 0)


def test_lookup_out_of_range_fails():
    pool = CoordinatePool(3, 3)
    with pytest.raises(CoordinateRangeError):
        pool.get(3, 0)
    with pytest.raises(CoordinateRangeError):
        pool.get(0, -1)
    # Range errors are IndexErrors too
    with pytest.raises(IndexError):
        pool.get(-1, 0)


def test_reserve_grows_and_keeps_instances():
    """Growing preserves issued coordinates; a smaller request never shrinks."""
    pool = CoordinatePool(2, 2)
    corner = pool.get(1, 1)

    pool.reserve(10, 6)
    assert pool.max_rows == 10 and pool.max_cols == 6
    assert pool.get(1, 1) is corner
    assert pool.get(9, 5).row == 9

    pool.reserve(3, 3)
    assert pool.max_rows == 10 and pool.max_cols == 6
    assert pool.get(1, 1) is corner


def test_shift_follows_direction():
    pool = CoordinatePool(4, 4)
    center = pool.get(1, 1)
    assert pool.shift(center, Direction.RIGHT) is pool.get(1, 2)
    assert pool.shift(center, Direction.DOWN) is pool.get(2, 1)
    assert pool.shift(center, Direction.LEFT) is pool.get(1, 0)
    assert pool.shift(center, Direction.UP) is pool.get(0, 1)
    with pytest.raises(CoordinateRangeError):
        pool.shift(pool.get(0, 0), Direction.UP)


def test_separate_pools_do_not_share():
    assert CoordinatePool(2, 2).get(0, 0) is not CoordinatePool(2, 2).get(0, 0)


def test_pieces_are_shared():
    pool = PiecePool(CoordinatePool(5, 5))
    a = pool.from_corners(0, 1, 1, 3)
    b = pool.at(0, 1, 3, 2)
    assert a is b
    assert (a.width, a.height) == (3, 2)
    assert len(pool) == 1


def test_piece_corners_are_derived():
    coords = CoordinatePool(5, 5)
    pool = PiecePool(coords)
    piece = pool.from_corners(1, 1, 2, 3)
    assert piece.upper_left is coords.get(1, 1)
    assert piece.upper_right is coords.get(1, 3)
    assert piece.lower_left is coords.get(2, 1)
    assert piece.lower_right is coords.get(2, 3)
    assert piece.area == 6
    assert str(piece) == "1 1 2 3"
    assert len(list(piece.cells())) == 6


def test_invalid_pieces_rejected():
    coords = CoordinatePool(5, 5)
    pool = PiecePool(coords)
    with pytest.raises(InvalidPieceError):
        pool.get(coords.get(0, 0), 0, 1)
    with pytest.raises(InvalidPieceError):
        pool.get(coords.get(0, 0), 2, -1)
    with pytest.raises(InvalidPieceError):
        pool.from_corners(2, 0, 1, 0)
    with pytest.raises(InvalidPieceError):
        pool.from_corners(0, 2, 0, 1)


def test_piece_beyond_limit_rejected():
    coords = CoordinatePool(8, 8)
    pool = PiecePool(coords, limit=4)
    with pytest.raises(CoordinateRangeError):
        pool.at(3, 0, 1, 2)


def test_relocate_keeps_size():
    pool = PiecePool(CoordinatePool(5, 5))
    piece = pool.from_corners(0, 0, 1, 2)
    moved = pool.relocate(piece, pool.coordinates.get(2, 1))
    assert (moved.width, moved.height) == (3, 2)
    assert moved is pool.from_corners(2, 1, 3, 3)


def test_perfect_hash_is_dense_bijection():
    """Every rectangle fitting a limit x limit square gets a distinct index in a dense range."""
    limit = 5
    keys = []
    for r in range(limit):
        for c in range(limit):
            for w in range(1, limit - c + 1):
                for h in range(1, limit - r + 1):
                    keys.append(perfect_hash(r, c, w, h, limit))
    count = (limit * (limit + 1) // 2) ** 2
    assert sorted(keys) == list(range(count))


def test_overlap_and_cover():
    coords = CoordinatePool(6, 6)
    pool = PiecePool(coords)
    big = pool.from_corners(0, 0, 1, 1)
    touching = pool.from_corners(0, 2, 1, 2)
    crossing = pool.from_corners(1, 1, 2, 2)
    assert not big.overlaps(touching)
    assert big.overlaps(crossing)
    assert crossing.overlaps(big)
    assert big.covers(coords.get(1, 1))
    assert not big.covers(coords.get(2, 0))
