"""Move application: board in, new board out."""

from __future__ import annotations

from rookery.core.board import Board
from rookery.core.enums import CastlingRights, Color, PieceType
from rookery.core.piece import Piece
from rookery.core.types import Square, require_square, square_name

_ROOK_CORNERS: dict[Square, CastlingRights] = {
    (7, 0): CastlingRights.WHITE_QUEENSIDE,
    (7, 7): CastlingRights.WHITE_KINGSIDE,
    (0, 0): CastlingRights.BLACK_QUEENSIDE,
    (0, 7): CastlingRights.BLACK_KINGSIDE,
}


def apply_move(board: Board, from_sq: Square, to_sq: Square) -> Board:
    """Return the board after moving the piece on *from_sq* to *to_sq*.

    Handles the side effects of en passant (captured pawn removed from its
    own square), castling (rook hops next to the king) and promotion (always
    to a queen). Castling rights are updated. *board* is not modified.
    """
    require_square(from_sq)
    require_square(to_sq)
    piece = board[from_sq]
    if piece is None:
        raise ValueError(f"No piece on {square_name(from_sq)}")

    from_row, from_col = from_sq
    to_row, to_col = to_sq
    changes: dict[Square, Piece | None] = {from_sq: None, to_sq: piece}

    if piece.piece_type == PieceType.PAWN:
        # Diagonal step onto an empty square can only be en passant.
        if from_col != to_col and board[to_sq] is None:
            changes[(from_row, to_col)] = None
        if to_row == (0 if piece.color == Color.WHITE else 7):
            changes[to_sq] = Piece(piece.color, PieceType.QUEEN)

    elif piece.piece_type == PieceType.KING and abs(to_col - from_col) == 2:
        rook_from_col = 7 if to_col > from_col else 0
        rook_to_col = to_col - 1 if to_col > from_col else to_col + 1
        changes[(from_row, rook_to_col)] = board[(from_row, rook_from_col)]
        changes[(from_row, rook_from_col)] = None

    return board.replace(changes, castling=_next_castling(board, piece, from_sq, to_sq))


def _next_castling(
    board: Board, piece: Piece, from_sq: Square, to_sq: Square
) -> CastlingRights:
    castling = board.castling
    if piece.piece_type == PieceType.KING:
        castling &= ~CastlingRights.both(piece.color)
    for sq in (from_sq, to_sq):
        right = _ROOK_CORNERS.get(sq)
        if right is not None:
            castling &= ~right
    return castling
