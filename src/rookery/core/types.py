"""Square type alias and coordinate helpers.

Board layout (row, col):
    row 0 is Black's back rank (rank 8), row 7 is White's back rank (rank 1)
    col 0 is the a-file, col 7 the h-file

    (0, 0)=a8 ... (0, 7)=h8
    ...
    (7, 0)=a1 ... (7, 7)=h1
"""

from __future__ import annotations

from typing import TypeAlias

Square: TypeAlias = tuple[int, int]

_FILES = "abcdefgh"
_RANKS = "12345678"


def is_valid_square(sq: Square) -> bool:
    """Whether *sq* lies on the 8x8 board."""
    row, col = sq
    return 0 <= row < 8 and 0 <= col < 8


def require_square(sq: Square) -> Square:
    """Return *sq* unchanged or raise ``ValueError`` if it is off the board."""
    try:
        row, col = sq
    except (TypeError, ValueError):
        raise ValueError(f"Invalid square: {sq!r}") from None
    if not (isinstance(row, int) and isinstance(col, int)) or not is_valid_square(
        (row, col)
    ):
        raise ValueError(f"Square out of range: {sq!r}")
    return sq


def make_square(row: int, col: int) -> Square:
    """Create a square from row and column, both 0–7."""
    return require_square((row, col))


def square_name(sq: Square) -> str:
    """Human-readable name, e.g. (6, 4) → 'e2'."""
    row, col = require_square(sq)
    return _FILES[col] + str(8 - row)


def parse_square(name: str) -> Square:
    """Parse square name, e.g. 'e2' → (6, 4)."""
    if len(name) != 2 or name[0] not in _FILES or name[1] not in _RANKS:
        raise ValueError(f"Invalid square name: {name!r}")
    return (8 - int(name[1]), _FILES.index(name[0]))


ALL_SQUARES: tuple[Square, ...] = tuple((r, c) for r in range(8) for c in range(8))
