"""Legality oracle: move validation, attack detection, check and mate.

All functions are pure. Squares outside the board raise ``ValueError``;
anything else that is not a legal move is reported as ``False``.
"""

from __future__ import annotations

from collections.abc import Iterator

from rookery.core.apply import apply_move
from rookery.core.board import Board
from rookery.core.enums import CastlingRights, Color, PieceType
from rookery.core.move import Move
from rookery.core.piece import Piece
from rookery.core.types import ALL_SQUARES, Square, require_square

KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS

_SLIDER_DIRS: dict[PieceType, tuple[tuple[int, int], ...]] = {
    PieceType.BISHOP: BISHOP_DIRS,
    PieceType.ROOK: ROOK_DIRS,
    PieceType.QUEEN: QUEEN_DIRS,
}

_KING_HOME_COL = 4


def _pawn_start_row(color: Color) -> int:
    return 6 if color == Color.WHITE else 1


def _promotion_row(color: Color) -> int:
    return 0 if color == Color.WHITE else 7


# -- Geometric legality -------------------------------------------------------


def is_legal_move(
    board: Board,
    from_sq: Square,
    to_sq: Square,
    side: Color,
    last_move: Move | None = None,
) -> bool:
    """Whether *side* may move the piece on *from_sq* to *to_sq*.

    Checks piece geometry, blocking, captures, en passant and castling. It
    does not check whether the move leaves the mover's own king in check;
    :func:`get_possible_moves` adds that filter.
    """
    require_square(from_sq)
    require_square(to_sq)
    if from_sq == to_sq:
        return False

    piece = board[from_sq]
    if piece is None or piece.color != side:
        return False
    target = board[to_sq]
    if target is not None and target.color == side:
        return False

    ptype = piece.piece_type
    if ptype == PieceType.PAWN:
        return _is_valid_pawn_move(board, from_sq, to_sq, side) or is_valid_en_passant(
            board, from_sq, to_sq, last_move
        )
    if ptype == PieceType.KNIGHT:
        return _is_knight_step(from_sq, to_sq)
    if ptype == PieceType.KING:
        return _is_king_step(from_sq, to_sq) or is_valid_castling(
            board, from_sq, to_sq, side
        )
    if ptype == PieceType.ROOK:
        return _is_straight(from_sq, to_sq) and _is_path_clear(board, from_sq, to_sq)
    if ptype == PieceType.BISHOP:
        return _is_diagonal(from_sq, to_sq) and _is_path_clear(board, from_sq, to_sq)
    # Queen
    return (_is_straight(from_sq, to_sq) or _is_diagonal(from_sq, to_sq)) and (
        _is_path_clear(board, from_sq, to_sq)
    )


def _is_valid_pawn_move(
    board: Board, from_sq: Square, to_sq: Square, color: Color
) -> bool:
    from_row, from_col = from_sq
    to_row, to_col = to_sq
    step = color.forward

    if from_col == to_col:
        if to_row == from_row + step:
            return board[to_sq] is None
        if from_row == _pawn_start_row(color) and to_row == from_row + 2 * step:
            return board[(from_row + step, from_col)] is None and board[to_sq] is None
        return False

    if abs(from_col - to_col) == 1 and to_row == from_row + step:
        target = board[to_sq]
        return target is not None and target.color != color
    return False


def _is_knight_step(from_sq: Square, to_sq: Square) -> bool:
    dr = abs(from_sq[0] - to_sq[0])
    dc = abs(from_sq[1] - to_sq[1])
    return (dr, dc) in ((1, 2), (2, 1))


def _is_king_step(from_sq: Square, to_sq: Square) -> bool:
    return max(abs(from_sq[0] - to_sq[0]), abs(from_sq[1] - to_sq[1])) == 1


def _is_straight(from_sq: Square, to_sq: Square) -> bool:
    return from_sq[0] == to_sq[0] or from_sq[1] == to_sq[1]


def _is_diagonal(from_sq: Square, to_sq: Square) -> bool:
    return abs(from_sq[0] - to_sq[0]) == abs(from_sq[1] - to_sq[1])


def _is_path_clear(board: Board, from_sq: Square, to_sq: Square) -> bool:
    """Every square strictly between the two (on a line) is empty."""
    dr = (to_sq[0] > from_sq[0]) - (to_sq[0] < from_sq[0])
    dc = (to_sq[1] > from_sq[1]) - (to_sq[1] < from_sq[1])
    row, col = from_sq[0] + dr, from_sq[1] + dc
    while (row, col) != to_sq:
        if board.piece_at(row, col) is not None:
            return False
        row += dr
        col += dc
    return True


# -- Special moves ------------------------------------------------------------


def is_valid_castling(
    board: Board, from_sq: Square, to_sq: Square, color: Color
) -> bool:
    """King two squares toward an unmoved rook, through empty, unattacked squares."""
    require_square(from_sq)
    require_square(to_sq)
    if board[from_sq] != Piece(color, PieceType.KING):
        return False

    row, from_col = from_sq
    to_row, to_col = to_sq
    if from_sq != (color.back_rank, _KING_HOME_COL) or to_row != row:
        return False
    if abs(to_col - from_col) != 2:
        return False

    kingside = to_col > from_col
    right = CastlingRights.kingside(color) if kingside else CastlingRights.queenside(color)
    if not board.castling & right:
        return False

    rook_col = 7 if kingside else 0
    if board[(row, rook_col)] != Piece(color, PieceType.ROOK):
        return False

    step = 1 if kingside else -1
    for col in range(from_col + step, rook_col, step):
        if board.piece_at(row, col) is not None:
            return False

    if is_check(board, color):
        return False

    opponent = color.opposite
    for col in range(from_col + step, to_col + step, step):
        if is_square_attacked(board, (row, col), opponent):
            return False
    return True


def is_valid_en_passant(
    board: Board, from_sq: Square, to_sq: Square, last_move: Move | None
) -> bool:
    """Capture of a pawn that advanced two squares on the immediately preceding ply."""
    require_square(from_sq)
    require_square(to_sq)
    piece = board[from_sq]
    if piece is None or piece.piece_type != PieceType.PAWN or last_move is None:
        return False

    last_from_row, last_from_col = last_move.from_sq
    last_to_row, last_to_col = last_move.to_sq
    victim = board[last_move.to_sq]
    if victim != Piece(piece.color.opposite, PieceType.PAWN):
        return False
    if abs(last_from_row - last_to_row) != 2 or last_from_col != last_to_col:
        return False

    from_row, from_col = from_sq
    if from_row != last_to_row or abs(from_col - last_to_col) != 1:
        return False
    return to_sq == (last_to_row + piece.color.forward, last_to_col) and (
        board[to_sq] is None
    )


def is_pawn_promotion(board: Board, from_sq: Square, to_sq: Square) -> bool:
    """A pawn move that lands on the opponent's back rank."""
    require_square(to_sq)
    piece = board[from_sq]
    if piece is None or piece.piece_type != PieceType.PAWN:
        return False
    return to_sq[0] == _promotion_row(piece.color)


# -- Attack detection ---------------------------------------------------------


def is_square_attacked(board: Board, sq: Square, by_color: Color) -> bool:
    """Is *sq* attacked by any piece of *by_color*?"""
    row, col = require_square(sq)

    # A pawn attacks one row ahead, so its attackers sit one row behind.
    pawn_row = row - by_color.forward
    if 0 <= pawn_row < 8:
        for dc in (-1, 1):
            c = col + dc
            if 0 <= c < 8:
                p = board.piece_at(pawn_row, c)
                if p is not None and p.is_(by_color, PieceType.PAWN):
                    return True

    for offsets, ptype in ((KNIGHT_OFFSETS, PieceType.KNIGHT), (KING_OFFSETS, PieceType.KING)):
        for dr, dc in offsets:
            r, c = row + dr, col + dc
            if 0 <= r < 8 and 0 <= c < 8:
                p = board.piece_at(r, c)
                if p is not None and p.is_(by_color, ptype):
                    return True

    for dirs, sliders in (
        (BISHOP_DIRS, (PieceType.BISHOP, PieceType.QUEEN)),
        (ROOK_DIRS, (PieceType.ROOK, PieceType.QUEEN)),
    ):
        for dr, dc in dirs:
            r, c = row + dr, col + dc
            while 0 <= r < 8 and 0 <= c < 8:
                p = board.piece_at(r, c)
                if p is not None:
                    if p.color == by_color and p.piece_type in sliders:
                        return True
                    break
                r += dr
                c += dc
    return False


def is_check(board: Board, color: Color) -> bool:
    """Is *color*'s king attacked? A board without that king is never in check."""
    king_sq = board.king_square(color)
    if king_sq is None:
        return False
    return is_square_attacked(board, king_sq, color.opposite)


# -- Full legality ------------------------------------------------------------


def get_possible_moves(
    board: Board,
    from_sq: Square,
    side: Color,
    last_move: Move | None = None,
) -> list[Square]:
    """Destinations from *from_sq* that are legal and keep *side* out of check."""
    require_square(from_sq)
    piece = board[from_sq]
    if piece is None or piece.color != side:
        return []
    return [
        to_sq
        for to_sq in ALL_SQUARES
        if is_legal_move(board, from_sq, to_sq, side, last_move)
        and not is_check(apply_move(board, from_sq, to_sq), side)
    ]


def legal_moves(
    board: Board,
    side: Color,
    last_move: Move | None = None,
    captures_only: bool = False,
) -> list[Move]:
    """Every fully legal move of *side*, origins in row-major order.

    With *captures_only* the result is limited to moves that take a piece,
    en passant included.
    """
    return list(_iter_legal_moves(board, side, last_move, captures_only))


def has_legal_move(board: Board, side: Color, last_move: Move | None = None) -> bool:
    return next(_iter_legal_moves(board, side, last_move), None) is not None


def is_checkmate(board: Board, color: Color, last_move: Move | None = None) -> bool:
    """*color* is in check and no legal move gets it out."""
    return is_check(board, color) and not has_legal_move(board, color, last_move)


def is_stalemate(board: Board, color: Color, last_move: Move | None = None) -> bool:
    """*color* is not in check but has no legal move."""
    return not is_check(board, color) and not has_legal_move(board, color, last_move)


def _iter_legal_moves(
    board: Board, side: Color, last_move: Move | None, captures_only: bool = False
) -> Iterator[Move]:
    for from_sq, piece in board.occupied():
        if piece.color != side:
            continue
        for to_sq in _pseudo_legal_targets(board, from_sq, piece, last_move):
            if captures_only and not _is_capture(board, from_sq, to_sq, piece):
                continue
            if not is_check(apply_move(board, from_sq, to_sq), side):
                yield Move(from_sq, to_sq)


def _pseudo_legal_targets(
    board: Board, from_sq: Square, piece: Piece, last_move: Move | None
) -> Iterator[Square]:
    """Destinations satisfying :func:`is_legal_move`, generated by geometry."""
    row, col = from_sq
    color = piece.color
    ptype = piece.piece_type

    if ptype == PieceType.PAWN:
        step = color.forward
        ahead = row + step
        if not 0 <= ahead < 8:
            return
        if board.piece_at(ahead, col) is None:
            yield (ahead, col)
            two = ahead + step
            if row == _pawn_start_row(color) and board.piece_at(two, col) is None:
                yield (two, col)
        for dc in (-1, 1):
            c = col + dc
            if not 0 <= c < 8:
                continue
            target = board.piece_at(ahead, c)
            if target is not None:
                if target.color != color:
                    yield (ahead, c)
            elif is_valid_en_passant(board, from_sq, (ahead, c), last_move):
                yield (ahead, c)
        return

    if ptype in (PieceType.KNIGHT, PieceType.KING):
        offsets = KNIGHT_OFFSETS if ptype == PieceType.KNIGHT else KING_OFFSETS
        for dr, dc in offsets:
            r, c = row + dr, col + dc
            if 0 <= r < 8 and 0 <= c < 8:
                target = board.piece_at(r, c)
                if target is None or target.color != color:
                    yield (r, c)
        if ptype == PieceType.KING and from_sq == (color.back_rank, _KING_HOME_COL):
            for to_col in (col + 2, col - 2):
                if is_valid_castling(board, from_sq, (row, to_col), color):
                    yield (row, to_col)
        return

    for dr, dc in _SLIDER_DIRS[ptype]:
        r, c = row + dr, col + dc
        while 0 <= r < 8 and 0 <= c < 8:
            target = board.piece_at(r, c)
            if target is None:
                yield (r, c)
            else:
                if target.color != color:
                    yield (r, c)
                break
            r += dr
            c += dc


def _is_capture(board: Board, from_sq: Square, to_sq: Square, piece: Piece) -> bool:
    if board.piece_at(*to_sq) is not None:
        return True
    # Diagonal pawn step onto an empty square is en passant.
    return piece.piece_type == PieceType.PAWN and from_sq[1] != to_sq[1]
