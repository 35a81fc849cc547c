"""Game management layer: controller, players and the state machine.

Quick start::

    from rookery.core import Color
    from rookery.game import GameController, HumanPlayer, PlayerSetup

    ctrl = GameController()
    ctrl.new_game(
        white=HumanPlayer(Color.WHITE, "Alice"),
        black=PlayerSetup("random").build(Color.BLACK),
    )
"""

from rookery.game.controller import GameController, GameEvents
from rookery.game.interfaces import GamePhase, IGameController, IPlayer
from rookery.game.player import AIPlayer, HumanPlayer, PlayerSetup
from rookery.game.state import GameState, MoveRecord

__all__ = [
    # Interfaces
    "GamePhase",
    "IGameController",
    "IPlayer",
    # Concrete
    "AIPlayer",
    "GameController",
    "GameEvents",
    "GameState",
    "HumanPlayer",
    "MoveRecord",
    "PlayerSetup",
]
