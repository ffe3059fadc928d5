"""Tests for bitboard utilities."""

import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from othello.core.bitboard import (
    ROWS, COLS, NUM_SQUARES, RAYS, DIRECTIONS,
    BLACK, WHITE, BLACK_START, WHITE_START,
    sq_to_rowcol, rowcol_to_sq, sq_to_algebraic, algebraic_to_sq,
    bit, popcount, iter_bits, lsb, squares_to_bb, opponent, is_valid_sq
)


class TestSquareConversion:
    def test_sq_to_rowcol(self):
        assert sq_to_rowcol(0) == (0, 0)  # a1
        assert sq_to_rowcol(7) == (0, 7)  # h1
        assert sq_to_rowcol(8) == (1, 0)  # a2
        assert sq_to_rowcol(63) == (7, 7)  # h8

    def test_rowcol_to_sq(self):
        assert rowcol_to_sq(0, 0) == 0
        assert rowcol_to_sq(2, 3) == 19
        assert rowcol_to_sq(7, 7) == 63

    def test_algebraic_conversion(self):
        assert sq_to_algebraic(0) == 'a1'
        assert sq_to_algebraic(19) == 'd3'
        assert sq_to_algebraic(63) == 'h8'

        assert algebraic_to_sq('a1') == 0
        assert algebraic_to_sq('D3') == 19
        assert algebraic_to_sq('h8') == 63

    def test_roundtrip(self):
        for sq in range(NUM_SQUARES):
            row, col = sq_to_rowcol(sq)
            assert rowcol_to_sq(row, col) == sq
            assert algebraic_to_sq(sq_to_algebraic(sq)) == sq

    @pytest.mark.parametrize("text", ["i1", "a9", "a0", "", "d", "d10", "33"])
    def test_invalid_algebraic(self, text):
        with pytest.raises(ValueError):
            algebraic_to_sq(text)

    def test_is_valid_sq(self):
        assert is_valid_sq(0, 0)
        assert is_valid_sq(7, 7)
        assert not is_valid_sq(-1, 0)
        assert not is_valid_sq(0, 8)
        assert not is_valid_sq(8, 0)


class TestBitOperations:
    def test_bit(self):
        assert bit(0) == 1
        assert bit(3) == 8
        assert bit(63) == 1 << 63

    def test_popcount(self):
        assert popcount(0) == 0
        assert popcount(0b1111) == 4
        assert popcount(BLACK_START) == 2
        assert popcount(WHITE_START) == 2

    def test_iter_bits_ascending(self):
        assert list(iter_bits(0b1010101)) == [0, 2, 4, 6]
        assert list(iter_bits(bit(63) | bit(5))) == [5, 63]

    def test_lsb(self):
        assert lsb(0) == -1
        assert lsb(8) == 3

    def test_iter_bits_numpy_int64(self):
        import numpy as np
        assert list(iter_bits(np.int64(0b101))) == [0, 2]

    def test_squares_to_bb(self):
        assert squares_to_bb([0, 2]) == 0b101
        assert squares_to_bb([]) == 0


class TestColors:
    def test_opponent(self):
        assert opponent(BLACK) == WHITE
        assert opponent(WHITE) == BLACK

    def test_start_position(self):
        assert WHITE_START == bit(rowcol_to_sq(3, 3)) | bit(rowcol_to_sq(4, 4))
        assert BLACK_START == bit(rowcol_to_sq(3, 4)) | bit(rowcol_to_sq(4, 3))
        assert BLACK_START & WHITE_START == 0


class TestRays:
    def test_ray_count(self):
        assert len(RAYS) == NUM_SQUARES
        assert all(len(rays) == len(DIRECTIONS) for rays in RAYS)

    def test_corner_rays(self):
        # a1: north and west rays leave the board immediately
        north, east = 0, 2
        assert RAYS[0][north] == ()
        assert RAYS[0][east] == (1, 2, 3, 4, 5, 6, 7)

    def test_diagonal_ray(self):
        northeast = 1
        # d4 (3,3) toward the top-right: e3, f2, g1
        assert RAYS[rowcol_to_sq(3, 3)][northeast] == (20, 13, 6)

    def test_rays_stay_on_board(self):
        for sq in range(NUM_SQUARES):
            row, col = sq_to_rowcol(sq)
            for dir_idx, (dr, dc) in enumerate(DIRECTIONS):
                for step, target in enumerate(RAYS[sq][dir_idx], start=1):
                    assert target == rowcol_to_sq(row + dr * step, col + dc * step)

    def test_ray_lengths_sum(self):
        # Every ordered pair of squares on a common line is walked once:
        # 448 along ranks, 448 along files, 280 per diagonal orientation
        total = sum(len(ray) for rays in RAYS for ray in rays)
        assert total == ROWS * COLS * (COLS - 1) + COLS * ROWS * (ROWS - 1) + 2 * 280
