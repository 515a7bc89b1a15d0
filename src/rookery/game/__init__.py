"""Game management layer — controller and state for a single game.

Quick start::

    from rookery.game import GameController, GameMode
    from rookery.core import parse_square

    ctrl = GameController(mode=GameMode.AI)
    ctrl.submit_move(parse_square("e2"), parse_square("e4"))
    ctrl.request_ai_move()
"""

from rookery.game.controller import AI_COLOR, GameController, GameEvents
from rookery.game.state import GameMode, GamePhase, GameState

__all__ = [
    "AI_COLOR",
    "GameController",
    "GameEvents",
    "GameMode",
    "GamePhase",
    "GameState",
]
