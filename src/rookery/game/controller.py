"""GameController — validates, commits and announces moves.

Headless counterpart of a board widget: the UI forwards clicks here and
re-renders from :attr:`GameController.state`.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from rookery.core.apply import apply_move
from rookery.core.enums import Color
from rookery.core.move import Move, MoveRecord, record_move
from rookery.core.notation import parse_fen
from rookery.core.rules import (
    get_possible_moves,
    is_check,
    is_checkmate,
    is_stalemate,
)
from rookery.core.types import Square, require_square
from rookery.engine.evaluation import evaluate
from rookery.engine.opponent import choose_move
from rookery.engine.search import CancelCheck, Difficulty, IEngine
from rookery.game.state import GameMode, GamePhase, GameState

MoveCallback = Callable[[MoveRecord, GameState], None]
GameOverCallback = Callable[[GameState], None]

# The engine always plays Black in AI mode.
AI_COLOR = Color.BLACK


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)


class GameController:
    """Orchestrates one game between two humans or a human and the engine.

    Thread-safety: call from a single thread. When the search runs in an
    ``EngineWorker`` its result comes back through :meth:`submit_move`.
    """

    __slots__ = ("_state", "_mode", "_difficulty", "_engine", "events")

    def __init__(
        self,
        mode: GameMode = GameMode.PVP,
        difficulty: Difficulty = Difficulty.MEDIUM,
        engine: IEngine | None = None,
    ) -> None:
        self._state = GameState()
        self._mode = mode
        self._difficulty = difficulty
        self._engine = engine
        self.events = GameEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def mode(self) -> GameMode:
        return self._mode

    @property
    def difficulty(self) -> Difficulty:
        return self._difficulty

    @difficulty.setter
    def difficulty(self, value: Difficulty) -> None:
        self._difficulty = value

    @property
    def is_ai_turn(self) -> bool:
        return (
            self._mode == GameMode.AI
            and self._state.side_to_move == AI_COLOR
            and not self._state.is_game_over
        )

    # ── Commands ─────────────────────────────────────────────────────────

    def new_game(
        self,
        mode: GameMode | None = None,
        difficulty: Difficulty | None = None,
        fen: str | None = None,
    ) -> None:
        """Start over from the initial position, or from *fen* when given."""
        if mode is not None:
            self._mode = mode
        if difficulty is not None:
            self._difficulty = difficulty
        self._state = GameState()
        if fen is not None:
            board, side = parse_fen(fen)
            board.validate()
            self._state.board = board
            self._state.side_to_move = side
            self._update_status()
        self._update_phase()

    def set_mode(self, mode: GameMode) -> None:
        """Switch opponents mid-game; the engine takes over Black if it is on move."""
        self._mode = mode
        self._update_phase()

    def select(self, square: Square) -> list[Square]:
        """Destinations to highlight for the piece on *square*."""
        require_square(square)
        if self._state.is_game_over or self.is_ai_turn:
            return []
        state = self._state
        return get_possible_moves(state.board, square, state.side_to_move, state.last_move)

    def submit_move(self, from_sq: Square, to_sq: Square) -> bool:
        """Play *from_sq* → *to_sq* for the side to move if it is fully legal."""
        require_square(from_sq)
        require_square(to_sq)
        state = self._state
        if state.is_game_over:
            return False
        if to_sq not in get_possible_moves(
            state.board, from_sq, state.side_to_move, state.last_move
        ):
            return False
        self._commit(Move(from_sq, to_sq))
        return True

    def request_ai_move(self, is_cancelled: CancelCheck | None = None) -> Move | None:
        """Let the engine play for Black; ``None`` if it is not the engine's turn."""
        if not self.is_ai_turn:
            return None
        state = self._state
        move = choose_move(
            state.board,
            state.side_to_move,
            self._difficulty,
            last_move=state.last_move,
            is_cancelled=is_cancelled,
            engine=self._engine,
        )
        self._commit(move)
        return move

    def winning_rate(self) -> float:
        """White's share of the evaluation bar, 0–100 (50 = equal)."""
        score = evaluate(self._state.board, Color.WHITE)
        return max(0.0, min(100.0, 50 + score / 100))

    def winning_label(self) -> str:
        """Caption for the evaluation bar."""
        rate = self.winning_rate()
        if rate > 52:
            return "White is winning"
        if rate < 48:
            return "Black is winning"
        return "Equal position"

    # ── Internal helpers ─────────────────────────────────────────────────

    def _commit(self, move: Move) -> None:
        state = self._state
        mover = state.side_to_move
        record = record_move(state.board, move)

        state.board = apply_move(state.board, move.from_sq, move.to_sq)
        state.last_move = move
        state.move_history.append(record)
        state.side_to_move = mover.opposite
        self._update_status()
        self._update_phase()

        for cb in self.events.on_move:
            cb(record, state)
        if state.is_game_over:
            for cb in self.events.on_game_over:
                cb(state)

    def _update_status(self) -> None:
        state = self._state
        defender = state.side_to_move
        mover = defender.opposite
        if is_checkmate(state.board, defender, state.last_move):
            state.status = f"Checkmate! {mover} wins!"
            state.winner = mover
            state.phase = GamePhase.GAME_OVER
        elif is_stalemate(state.board, defender, state.last_move):
            state.status = "Stalemate!"
            state.phase = GamePhase.GAME_OVER
        elif is_check(state.board, defender):
            state.status = f"{defender} is in check!"
        else:
            state.status = ""

    def _update_phase(self) -> None:
        state = self._state
        if state.is_game_over:
            return
        state.phase = GamePhase.THINKING if self.is_ai_turn else GamePhase.AWAITING_MOVE
