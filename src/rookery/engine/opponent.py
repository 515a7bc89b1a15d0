"""Automated opponent: opening book first, then a timed search."""

from __future__ import annotations

import logging

from rookery.core.board import Board
from rookery.core.enums import Color
from rookery.core.move import Move
from rookery.engine.book import book_move
from rookery.engine.minimax import MinimaxEngine
from rookery.engine.search import CancelCheck, Difficulty, IEngine, SearchLimits

_LOGGER = logging.getLogger(__name__)


def choose_move(
    board: Board,
    color: Color,
    difficulty: Difficulty = Difficulty.MEDIUM,
    last_move: Move | None = None,
    is_cancelled: CancelCheck | None = None,
    engine: IEngine | None = None,
) -> Move:
    """Pick *color*'s move within the time budget of *difficulty*.

    Raises ``ValueError`` if *color* has no legal move; callers detect
    checkmate and stalemate before asking.
    """
    move = book_move(board, color, last_move)
    if move is not None:
        _LOGGER.debug("book move %s", move)
        return move

    engine = engine or MinimaxEngine()
    result = engine.search(
        board,
        color,
        SearchLimits.for_difficulty(difficulty),
        last_move=last_move,
        is_cancelled=is_cancelled,
    )
    if result.best_move is None:
        raise ValueError(f"No legal move for {color}")
    _LOGGER.debug(
        "search picked %s (score=%d depth=%d nodes=%d)",
        result.best_move,
        result.score,
        result.depth,
        result.nodes,
    )
    return result.best_move
