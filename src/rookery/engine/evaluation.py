"""Static evaluation: material, piece-square tables, pawns and king cover."""

from __future__ import annotations

from typing import Final

from rookery.core.board import Board
from rookery.core.enums import Color, PieceType

PIECE_VALUES: Final[dict[PieceType, int]] = {
    PieceType.PAWN: 100,
    PieceType.KNIGHT: 320,
    PieceType.BISHOP: 330,
    PieceType.ROOK: 500,
    PieceType.QUEEN: 900,
    PieceType.KING: 20000,
}

DOUBLED_PAWN_PENALTY: Final = 10
ISOLATED_PAWN_PENALTY: Final = 20
PAWN_SHIELD_BONUS: Final = 30
ENDGAME_MATERIAL_THRESHOLD: Final = 1500

# Keyed by White's pieces then Black's, pawns left out; credited to White.
# The key with the colors exchanged credits Black.
ENDGAME_SIGNATURES: Final[dict[str, int]] = {
    "KQk": 1000,
    "KRk": 800,
    "KBNk": 600,
}

# Tables are written from White's side: row 0 is the eighth rank.
_Table = tuple[tuple[int, ...], ...]

_PAWN_TABLE: _Table = (
    (0, 0, 0, 0, 0, 0, 0, 0),
    (50, 50, 50, 50, 50, 50, 50, 50),
    (10, 10, 20, 30, 30, 20, 10, 10),
    (5, 5, 10, 25, 25, 10, 5, 5),
    (0, 0, 0, 20, 20, 0, 0, 0),
    (5, -5, -10, 0, 0, -10, -5, 5),
    (5, 10, 10, -20, -20, 10, 10, 5),
    (0, 0, 0, 0, 0, 0, 0, 0),
)

_KNIGHT_TABLE: _Table = (
    (-50, -40, -30, -30, -30, -30, -40, -50),
    (-40, -20, 0, 0, 0, 0, -20, -40),
    (-30, 0, 10, 15, 15, 10, 0, -30),
    (-30, 5, 15, 20, 20, 15, 5, -30),
    (-30, 0, 15, 20, 20, 15, 0, -30),
    (-30, 5, 10, 15, 15, 10, 5, -30),
    (-40, -20, 0, 5, 5, 0, -20, -40),
    (-50, -40, -30, -30, -30, -30, -40, -50),
)

_BISHOP_TABLE: _Table = (
    (-20, -10, -10, -10, -10, -10, -10, -20),
    (-10, 0, 0, 0, 0, 0, 0, -10),
    (-10, 0, 5, 10, 10, 5, 0, -10),
    (-10, 5, 5, 10, 10, 5, 5, -10),
    (-10, 0, 10, 10, 10, 10, 0, -10),
    (-10, 10, 10, 10, 10, 10, 10, -10),
    (-10, 5, 0, 0, 0, 0, 5, -10),
    (-20, -10, -10, -10, -10, -10, -10, -20),
)

_ROOK_TABLE: _Table = (
    (0, 0, 0, 0, 0, 0, 0, 0),
    (5, 10, 10, 10, 10, 10, 10, 5),
    (-5, 0, 0, 0, 0, 0, 0, -5),
    (-5, 0, 0, 0, 0, 0, 0, -5),
    (-5, 0, 0, 0, 0, 0, 0, -5),
    (-5, 0, 0, 0, 0, 0, 0, -5),
    (-5, 0, 0, 0, 0, 0, 0, -5),
    (0, 0, 0, 5, 5, 0, 0, 0),
)

_QUEEN_TABLE: _Table = (
    (-20, -10, -10, -5, -5, -10, -10, -20),
    (-10, 0, 0, 0, 0, 0, 0, -10),
    (-10, 0, 5, 5, 5, 5, 0, -10),
    (-5, 0, 5, 5, 5, 5, 0, -5),
    (0, 0, 5, 5, 5, 5, 0, -5),
    (-10, 5, 5, 5, 5, 5, 0, -10),
    (-10, 0, 5, 0, 0, 0, 0, -10),
    (-20, -10, -10, -5, -5, -10, -10, -20),
)

_KING_TABLE: _Table = (
    (-30, -40, -40, -50, -50, -40, -40, -30),
    (-30, -40, -40, -50, -50, -40, -40, -30),
    (-30, -40, -40, -50, -50, -40, -40, -30),
    (-30, -40, -40, -50, -50, -40, -40, -30),
    (-20, -30, -30, -40, -40, -30, -30, -20),
    (-10, -20, -20, -20, -20, -20, -20, -10),
    (20, 20, 0, 0, 0, 0, 20, 20),
    (20, 30, 10, 0, 0, 10, 30, 20),
)

PIECE_SQUARE_TABLES: Final[dict[PieceType, _Table]] = {
    PieceType.PAWN: _PAWN_TABLE,
    PieceType.KNIGHT: _KNIGHT_TABLE,
    PieceType.BISHOP: _BISHOP_TABLE,
    PieceType.ROOK: _ROOK_TABLE,
    PieceType.QUEEN: _QUEEN_TABLE,
    PieceType.KING: _KING_TABLE,
}

_SIGNATURE_ORDER: tuple[PieceType, ...] = (
    PieceType.KING,
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)


def piece_square_bonus(piece_type: PieceType, color: Color, row: int, col: int) -> int:
    """Positional bonus, mirrored vertically for Black."""
    table_row = row if color == Color.WHITE else 7 - row
    return PIECE_SQUARE_TABLES[piece_type][table_row][col]


def evaluate(board: Board, color: Color) -> int:
    """Score *board* from *color*'s point of view (positive = good for *color*).

    ``evaluate(board, WHITE) == -evaluate(board, BLACK)`` for every board.
    """
    white = 0
    material = 0
    # [color][col] -> rows holding a pawn of that color
    pawn_rows: tuple[list[list[int]], list[list[int]]] = (
        [[] for _ in range(8)],
        [[] for _ in range(8)],
    )
    kings: list[tuple[Color, int, int]] = []

    for (row, col), piece in board.occupied():
        ptype = piece.piece_type
        value = PIECE_VALUES[ptype] + piece_square_bonus(ptype, piece.color, row, col)
        white += value if piece.color == Color.WHITE else -value
        if ptype == PieceType.PAWN:
            pawn_rows[piece.color][col].append(row)
        if ptype == PieceType.KING:
            kings.append((piece.color, row, col))
        else:
            material += PIECE_VALUES[ptype]

    for side in Color:
        adjust = pawn_structure(pawn_rows[side])
        for king_color, row, col in kings:
            if king_color == side:
                adjust += king_safety(board, side, row, col)
        white += adjust if side == Color.WHITE else -adjust

    if material < ENDGAME_MATERIAL_THRESHOLD:
        white += endgame_bonus(board)

    return white if color == Color.WHITE else -white


def pawn_structure(pawn_rows: list[list[int]]) -> int:
    """Penalties for one side's doubled and isolated pawns (<= 0)."""
    score = 0
    for col, rows in enumerate(pawn_rows):
        count = len(rows)
        if not count:
            continue
        score -= DOUBLED_PAWN_PENALTY * count * (count - 1)
        left = pawn_rows[col - 1] if col > 0 else []
        right = pawn_rows[col + 1] if col < 7 else []
        if not left and not right:
            score -= ISOLATED_PAWN_PENALTY * count
    return score


def king_safety(board: Board, color: Color, row: int, col: int) -> int:
    """Bonus for a friendly pawn on one of the three squares in front of the king."""
    ahead = row + color.forward
    if not 0 <= ahead < 8:
        return 0
    for c in (col - 1, col, col + 1):
        if 0 <= c < 8:
            p = board.piece_at(ahead, c)
            if p is not None and p.is_(color, PieceType.PAWN):
                return PAWN_SHIELD_BONUS
    return 0


def _signature_parts(board: Board) -> tuple[str, str]:
    parts: list[str] = []
    for side in Color:
        letters = [
            str(piece)
            for ptype in _SIGNATURE_ORDER
            for _sq, piece in board.occupied()
            if piece.color == side and piece.piece_type == ptype
        ]
        parts.append("".join(letters))
    return parts[0], parts[1]


def endgame_signature(board: Board) -> str:
    """White's non-pawn pieces then Black's, strongest first, e.g. ``"KRk"``."""
    white, black = _signature_parts(board)
    return white + black


def endgame_bonus(board: Board) -> int:
    """Signature bonus from White's point of view (0 when unknown)."""
    white, black = _signature_parts(board)
    bonus = ENDGAME_SIGNATURES.get(white + black)
    if bonus is not None:
        return bonus
    # Same table with the colors exchanged.
    bonus = ENDGAME_SIGNATURES.get(black.upper() + white.lower())
    if bonus is not None:
        return -bonus
    return 0
