"""Qt bridge to run the opponent's search in a worker thread."""

from __future__ import annotations

import logging
import threading

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from rookery.core.board import Board
from rookery.core.enums import Color
from rookery.core.move import Move
from rookery.core.rules import has_legal_move
from rookery.engine.minimax import MinimaxEngine
from rookery.engine.opponent import choose_move
from rookery.engine.search import Difficulty

_LOGGER = logging.getLogger(__name__)


class EngineWorker(QObject):
    """Thread-affine worker that computes opponent moves on demand."""

    best_move_ready = pyqtSignal(int, object)
    search_cancelled = pyqtSignal(int)
    search_no_move = pyqtSignal(int)
    search_error = pyqtSignal(int, str)

    __slots__ = ("_cancel_event", "_engine", "_difficulty")

    def __init__(self, *, difficulty: Difficulty = Difficulty.MEDIUM) -> None:
        super().__init__()
        self._engine = MinimaxEngine()
        self._difficulty = difficulty
        self._cancel_event = threading.Event()

    @property
    def difficulty(self) -> Difficulty:
        return self._difficulty

    @pyqtSlot(object, int, object, int)
    def request_move(
        self,
        board_obj: object,
        color_value: int,
        last_move_obj: object,
        request_id: int,
    ) -> None:
        """Search for *color*'s move on *board_obj* and emit the result."""
        if not isinstance(board_obj, Board):
            self.search_error.emit(request_id, "Engine received invalid board")
            return
        if last_move_obj is not None and not isinstance(last_move_obj, Move):
            self.search_error.emit(request_id, "Engine received invalid last move")
            return

        color = Color(color_value)
        if not has_legal_move(board_obj, color, last_move_obj):
            self.search_no_move.emit(request_id)
            return

        self._cancel_event.clear()
        try:
            move = choose_move(
                board_obj,
                color,
                self._difficulty,
                last_move=last_move_obj,
                is_cancelled=self._cancel_event.is_set,
                engine=self._engine,
            )
        except Exception as exc:
            _LOGGER.exception("Engine search failed")
            self.search_error.emit(request_id, str(exc))
            return

        if self._cancel_event.is_set():
            self.search_cancelled.emit(request_id)
            return

        self.best_move_ready.emit(request_id, move)

    @pyqtSlot()
    def cancel(self) -> None:
        """Request cancellation of the current search."""
        self._cancel_event.set()

    @pyqtSlot(int)
    def set_difficulty(self, difficulty: int) -> None:
        """Change the strength tier (takes effect on the next search)."""
        self._difficulty = Difficulty(difficulty)
