"""FEN placement parsing/serialisation and board keys."""

from __future__ import annotations

from rookery.core.board import Board
from rookery.core.enums import CastlingRights, Color, PieceType
from rookery.core.piece import Piece

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_CASTLING_CHARS: dict[str, CastlingRights] = {
    "K": CastlingRights.WHITE_KINGSIDE,
    "Q": CastlingRights.WHITE_QUEENSIDE,
    "k": CastlingRights.BLACK_KINGSIDE,
    "q": CastlingRights.BLACK_QUEENSIDE,
}

# (right, king square, rook square, color)
_CASTLING_HOMES: tuple[tuple[CastlingRights, tuple[int, int], tuple[int, int], Color], ...] = (
    (CastlingRights.WHITE_KINGSIDE, (7, 4), (7, 7), Color.WHITE),
    (CastlingRights.WHITE_QUEENSIDE, (7, 4), (7, 0), Color.WHITE),
    (CastlingRights.BLACK_KINGSIDE, (0, 4), (0, 7), Color.BLACK),
    (CastlingRights.BLACK_QUEENSIDE, (0, 4), (0, 0), Color.BLACK),
)


def parse_fen(fen: str) -> tuple[Board, Color]:
    """Parse a FEN string into a :class:`Board` and the side to move.

    Only the placement field is required. Without a castling field the
    rights are inferred from kings and rooks standing on their home squares.
    En passant and clock fields are accepted and ignored: the previous move
    carries en passant information instead.
    """
    parts = fen.split()
    if not (1 <= len(parts) <= 6):
        raise ValueError(f"Invalid FEN (need 1-6 fields): {fen!r}")

    # 1. Piece placement
    ranks = parts[0].split("/")
    if len(ranks) != 8:
        raise ValueError(f"Invalid FEN board (must contain 8 ranks): {fen!r}")
    cells: list[Piece | None] = []
    for rank_text in ranks:
        width = 0
        for ch in rank_text:
            if ch.isdigit():
                step = int(ch)
                if not (1 <= step <= 8):
                    raise ValueError(f"Invalid FEN digit {ch!r}: {fen!r}")
                cells.extend([None] * step)
                width += step
            else:
                cells.append(Piece.from_char(ch))
                width += 1
            if width > 8:
                raise ValueError(f"Invalid FEN rank width: {fen!r}")
        if width != 8:
            raise ValueError(f"Invalid FEN rank width: {fen!r}")
    board = Board(cells)

    # 2. Side to move
    side = Color.WHITE
    if len(parts) > 1:
        if parts[1] == "w":
            side = Color.WHITE
        elif parts[1] == "b":
            side = Color.BLACK
        else:
            raise ValueError(f"Invalid FEN side-to-move field: {parts[1]!r}")

    # 3. Castling
    if len(parts) > 2:
        castling = CastlingRights.NONE
        if parts[2] != "-":
            seen: set[str] = set()
            for ch in parts[2]:
                right = _CASTLING_CHARS.get(ch)
                if right is None or ch in seen:
                    raise ValueError(f"Invalid FEN castling field: {parts[2]!r}")
                seen.add(ch)
                castling |= right
    else:
        castling = infer_castling(board)

    return board.with_castling(castling), side


def board_from_fen(fen: str) -> Board:
    """Parse a FEN string (or bare placement field) into a :class:`Board`."""
    board, _side = parse_fen(fen)
    return board


def infer_castling(board: Board) -> CastlingRights:
    """Castling rights implied by kings and rooks on their home squares."""
    rights = CastlingRights.NONE
    for right, king_sq, rook_sq, color in _CASTLING_HOMES:
        if board[king_sq] == Piece(color, PieceType.KING) and board[rook_sq] == Piece(
            color, PieceType.ROOK
        ):
            rights |= right
    return rights


def board_to_fen(board: Board, side_to_move: Color = Color.WHITE) -> str:
    """Serialise placement, side to move and castling rights as FEN."""
    rows: list[str] = []
    for row in range(8):
        empty = 0
        text = ""
        for col in range(8):
            piece = board.piece_at(row, col)
            if piece is None:
                empty += 1
            else:
                if empty:
                    text += str(empty)
                    empty = 0
                text += str(piece)
        if empty:
            text += str(empty)
        rows.append(text)

    castling_str = "".join(
        ch for ch, right in _CASTLING_CHARS.items() if board.castling & right
    )
    side_str = "w" if side_to_move == Color.WHITE else "b"
    return f"{'/'.join(rows)} {side_str} {castling_str or '-'} - 0 1"


def board_key(board: Board) -> str:
    """64-character row-major placement key, ``-`` for empty squares."""
    return "".join(
        str(board.piece_at(row, col) or "-") for row in range(8) for col in range(8)
    )
