"""Tiny opening book keyed by exact board placement."""

from __future__ import annotations

from rookery.core.apply import apply_move
from rookery.core.board import Board
from rookery.core.enums import Color
from rookery.core.move import Move
from rookery.core.notation import board_key
from rookery.core.rules import get_possible_moves


def _after(*uci_moves: str) -> Board:
    board = Board.initial()
    for text in uci_moves:
        move = Move.from_uci(text)
        board = apply_move(board, move.from_sq, move.to_sq)
    return board


# (placement key, side to move) -> reply
OPENING_BOOK: dict[tuple[str, Color], Move] = {
    (board_key(_after()), Color.WHITE): Move.from_uci("e2e4"),
    (board_key(_after("e2e4", "e7e5")), Color.WHITE): Move.from_uci("g1f3"),
    (board_key(_after("e2e4", "e7e6")), Color.WHITE): Move.from_uci("d2d4"),
}


def book_move(board: Board, color: Color, last_move: Move | None = None) -> Move | None:
    """Canned reply for this exact position, if any and still legal."""
    move = OPENING_BOOK.get((board_key(board), color))
    if move is None:
        return None
    if move.to_sq not in get_possible_moves(board, move.from_sq, color, last_move):
        return None
    return move
