"""Chess engine package: evaluation, search, opening book and Qt worker bridge."""

from rookery.engine.book import OPENING_BOOK, book_move
from rookery.engine.evaluation import PIECE_VALUES, evaluate
from rookery.engine.minimax import MinimaxEngine
from rookery.engine.opponent import choose_move
from rookery.engine.search import (
    CancelCheck,
    Difficulty,
    IEngine,
    SearchLimits,
    SearchResult,
)

__all__ = [
    "CancelCheck",
    "Difficulty",
    "IEngine",
    "MinimaxEngine",
    "OPENING_BOOK",
    "PIECE_VALUES",
    "SearchLimits",
    "SearchResult",
    "book_move",
    "choose_move",
    "evaluate",
]
