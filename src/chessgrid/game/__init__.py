"""Game management layer — players, promotion protocol, turn controller.

Quick start::

    from chessgrid.core import Position
    from chessgrid.game import GameController

    ctrl = GameController()
    ctrl.new_game()
    ctrl.submit_move(Position.from_string("E2"), Position.from_string("E4"))
"""

from chessgrid.game.controller import GameController, GameEvents
from chessgrid.game.interfaces import (
    GamePhase,
    IGameController,
    MoveResult,
    MoveStatus,
    RejectReason,
)
from chessgrid.game.player import Player, parse_promotion_choice

__all__ = [
    # Interfaces / results
    "GamePhase",
    "IGameController",
    "MoveResult",
    "MoveStatus",
    "RejectReason",
    # Concrete
    "GameController",
    "GameEvents",
    "Player",
    "parse_promotion_choice",
]
