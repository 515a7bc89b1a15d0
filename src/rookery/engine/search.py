"""Shared engine search models and protocol."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import IntEnum
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from rookery.core.board import Board
    from rookery.core.enums import Color
    from rookery.core.move import Move

CancelCheck = Callable[[], bool]

# Iterative deepening stops here even if time remains.
MAX_SEARCH_DEPTH = 32


class Difficulty(IntEnum):
    """Opponent strength; each tier gets a larger thinking budget."""

    EASY = 0
    MEDIUM = 1
    HARD = 2

    @property
    def time_limit_ms(self) -> int:
        return _TIME_BUDGET_MS[self]


_TIME_BUDGET_MS: dict[Difficulty, int] = {
    Difficulty.EASY: 1000,
    Difficulty.MEDIUM: 3000,
    Difficulty.HARD: 5000,
}


@dataclass(slots=True, frozen=True)
class SearchLimits:
    """Search constraints for a single move computation."""

    max_depth: int = 3
    time_limit_ms: int | None = 700

    @classmethod
    def for_difficulty(cls, difficulty: Difficulty) -> SearchLimits:
        return cls(max_depth=MAX_SEARCH_DEPTH, time_limit_ms=difficulty.time_limit_ms)


@dataclass(slots=True, frozen=True)
class SearchResult:
    """Result produced by the engine search."""

    best_move: Move | None
    score: int
    depth: int
    nodes: int


class IEngine(Protocol):
    """Protocol for engines used by the game layer and the worker bridge."""

    def search(
        self,
        board: Board,
        color: Color,
        limits: SearchLimits,
        last_move: Move | None = None,
        is_cancelled: CancelCheck | None = None,
    ) -> SearchResult: ...
