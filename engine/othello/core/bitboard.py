"""
Bitboard utilities for Othello.

Board layout (8 rows x 8 cols = 64 squares, one bit per square):

    a  b  c  d  e  f  g  h
  1  0  1  2  3  4  5  6  7
  2  8  9 10 11 12 13 14 15
  3 16 17 18 19 20 21 22 23
  4 24 25 26 27 28 29 30 31
  5 32 33 34 35 36 37 38 39
  6 40 41 42 43 44 45 46 47
  7 48 49 50 51 52 53 54 55
  8 56 57 58 59 60 61 62 63

Square index = row * 8 + col (row 0 = rank 1 at the top, col 0 = file a)
"""

from typing import Iterator

# Board dimensions
ROWS = 8
COLS = 8
NUM_SQUARES = ROWS * COLS  # 64

FULL_MASK = (1 << NUM_SQUARES) - 1

# Colors double as player indices
BLACK = 0
WHITE = 1
EMPTY = -1

COLOR_NAMES = {BLACK: "Black", WHITE: "White"}
COLOR_SYMBOLS = {BLACK: "b", WHITE: "w", EMPTY: "."}

# Compass directions as (row_delta, col_delta): N, NE, E, SE, S, SW, W, NW
DIRECTIONS = [
    (-1, 0), (-1, 1), (0, 1), (1, 1),
    (1, 0), (1, -1), (0, -1), (-1, -1),
]
VERTICAL_DIRS = [0, 4]
HORIZONTAL_DIRS = [2, 6]
DIAGONAL_DIRS = [1, 3, 5, 7]

# Precomputed rays (initialized at module load): RAYS[sq][dir] lists the
# squares walked outward from sq, nearest first, stopping at the board edge.
RAYS: list[list[tuple[int, ...]]] = [[()] * len(DIRECTIONS) for _ in range(NUM_SQUARES)]


def opponent(color: int) -> int:
    """Return the other player's color."""
    return 1 - color


def sq_to_rowcol(sq: int) -> tuple[int, int]:
    """Convert square index to (row, col)."""
    return sq // COLS, sq % COLS


def rowcol_to_sq(row: int, col: int) -> int:
    """Convert (row, col) to square index."""
    return row * COLS + col


def is_valid_sq(row: int, col: int) -> bool:
    """Check if (row, col) is on the board."""
    return 0 <= row < ROWS and 0 <= col < COLS


def sq_to_algebraic(sq: int) -> str:
    """Convert square index to algebraic notation (e.g., 'd3')."""
    row, col = sq_to_rowcol(sq)
    return chr(ord('a') + col) + str(row + 1)


def algebraic_to_sq(s: str) -> int:
    """Convert algebraic notation to square index."""
    s = s.strip().lower()
    if len(s) != 2 or not s[1].isdigit():
        raise ValueError(f"Invalid square: {s!r}")
    col = ord(s[0]) - ord('a')
    row = int(s[1]) - 1
    if not is_valid_sq(row, col):
        raise ValueError(f"Square off the board: {s!r}")
    return rowcol_to_sq(row, col)


def bit(sq: int) -> int:
    """Return bitboard with single bit set at square."""
    return 1 << sq


def popcount(bb: int) -> int:
    """Count number of set bits."""
    return bin(bb).count('1')


def lsb(bb: int) -> int:
    """Return index of least significant bit (or -1 if empty)."""
    bb = int(bb)
    if bb == 0:
        return -1
    return (bb & -bb).bit_length() - 1


def iter_bits(bb: int) -> Iterator[int]:
    """Iterate over indices of set bits, lowest first (row-major order)."""
    bb = int(bb)
    while bb:
        sq = lsb(bb)
        yield sq
        bb &= bb - 1


def squares_to_bb(squares) -> int:
    """Combine square indices into a bitboard."""
    bb = 0
    for sq in squares:
        bb |= bit(sq)
    return bb


# Starting position: white on d4/e5, black on e4/d5
WHITE_START = bit(rowcol_to_sq(3, 3)) | bit(rowcol_to_sq(4, 4))
BLACK_START = bit(rowcol_to_sq(3, 4)) | bit(rowcol_to_sq(4, 3))


def _init_rays() -> None:
    """Precompute rays for all squares and directions."""
    for sq in range(NUM_SQUARES):
        row, col = sq_to_rowcol(sq)
        for dir_idx, (dr, dc) in enumerate(DIRECTIONS):
            ray = []
            r, c = row + dr, col + dc
            while is_valid_sq(r, c):
                ray.append(rowcol_to_sq(r, c))
                r += dr
                c += dc
            RAYS[sq][dir_idx] = tuple(ray)


# Initialize lookup tables at module load
_init_rays()
