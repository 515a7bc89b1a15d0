"""Core domain layer — pure chess rules with zero external dependencies.

Quick start::

    from rookery.core import Board, Color, get_possible_moves, parse_square

    board = Board.initial()
    get_possible_moves(board, parse_square("e2"), Color.WHITE)
"""

from rookery.core.apply import apply_move
from rookery.core.board import Board
from rookery.core.enums import CastlingRights, Color, PieceType
from rookery.core.move import Move, MoveRecord, record_move
from rookery.core.notation import (
    STARTING_FEN,
    board_from_fen,
    board_key,
    board_to_fen,
    parse_fen,
)
from rookery.core.piece import Piece
from rookery.core.rules import (
    get_possible_moves,
    has_legal_move,
    is_check,
    is_checkmate,
    is_legal_move,
    is_pawn_promotion,
    is_square_attacked,
    is_stalemate,
    is_valid_castling,
    is_valid_en_passant,
    legal_moves,
)
from rookery.core.types import (
    Square,
    is_valid_square,
    make_square,
    parse_square,
    square_name,
)

__all__ = [
    # Enums / flags
    "CastlingRights",
    "Color",
    "PieceType",
    # Types / helpers
    "Square",
    "is_valid_square",
    "make_square",
    "parse_square",
    "square_name",
    # Domain objects
    "Board",
    "Move",
    "MoveRecord",
    "Piece",
    "record_move",
    # Rules
    "apply_move",
    "get_possible_moves",
    "has_legal_move",
    "is_check",
    "is_checkmate",
    "is_legal_move",
    "is_pawn_promotion",
    "is_square_attacked",
    "is_stalemate",
    "is_valid_castling",
    "is_valid_en_passant",
    "legal_moves",
    # Notation
    "STARTING_FEN",
    "board_from_fen",
    "board_key",
    "board_to_fen",
    "parse_fen",
]
