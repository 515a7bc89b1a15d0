"""Game state — the position plus what the player sees about it."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto

from rookery.core.board import Board
from rookery.core.enums import Color
from rookery.core.move import Move, MoveRecord


class GamePhase(Enum):
    AWAITING_MOVE = auto()
    THINKING = auto()
    GAME_OVER = auto()


class GameMode(Enum):
    """Who controls Black: another human or the engine."""

    PVP = auto()
    AI = auto()


@dataclass
class GameState:
    """Pure data: board, turn, previous move, status line and history."""

    board: Board = field(default_factory=Board.initial)
    side_to_move: Color = Color.WHITE
    last_move: Move | None = None
    status: str = ""
    phase: GamePhase = GamePhase.AWAITING_MOVE
    winner: Color | None = None
    move_history: list[MoveRecord] = field(default_factory=list)

    @property
    def is_game_over(self) -> bool:
        return self.phase == GamePhase.GAME_OVER

    @property
    def ply_count(self) -> int:
        """Number of half-moves played."""
        return len(self.move_history)
