"""Concrete player implementations."""

from __future__ import annotations

from collections.abc import Collection
from dataclasses import dataclass
from typing import TYPE_CHECKING

from rookery.core.enums import Color
from rookery.engine import DefaultPolicy, MovePolicy, PolicyLimits, policy_by_name
from rookery.game.interfaces import IPlayer

if TYPE_CHECKING:
    from rookery.core.board import Board
    from rookery.core.move import Move

HUMAN = "human"


class HumanPlayer(IPlayer):
    """A human participant whose moves come from the UI.

    ``request_move`` returns ``None`` because humans select moves
    interactively and submit them through the controller.
    """

    __slots__ = ("_color", "_name")

    def __init__(self, color: Color, name: str = "") -> None:
        self._color = color
        self._name = name or f"Player ({color})"

    @property
    def color(self) -> Color:
        return self._color

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_human(self) -> bool:
        return True

    def request_move(self, board: Board, legal_moves: Collection[Move]) -> Move | None:
        return None  # Human moves arrive via controller.submit_move()

    def cancel(self) -> None:
        pass


class AIPlayer(IPlayer):
    """An engine participant that delegates the choice to a :class:`MovePolicy`.

    Args:
        color: Side the engine plays.
        policy: Policy to consult; defaults to a fresh ``DefaultPolicy``.
        name: Display name; defaults to the policy name.
    """

    __slots__ = ("_color", "_name", "_policy")

    def __init__(
        self,
        color: Color,
        policy: MovePolicy | None = None,
        name: str = "",
    ) -> None:
        self._color = color
        self._policy: MovePolicy = policy if policy is not None else DefaultPolicy()
        self._name = name or f"Engine ({self._policy.name})"

    @property
    def color(self) -> Color:
        return self._color

    @property
    def name(self) -> str:
        return self._name

    @property
    def is_human(self) -> bool:
        return False

    @property
    def policy(self) -> MovePolicy:
        return self._policy

    def request_move(self, board: Board, legal_moves: Collection[Move]) -> Move | None:
        return self._policy.choose_move(board, legal_moves)

    def cancel(self) -> None:
        pass  # synchronous policies finish before returning


@dataclass(frozen=True, slots=True)
class PlayerSetup:
    """Per-side player choice: ``"human"`` or a registered policy name."""

    kind: str = HUMAN
    name: str = ""
    limits: PolicyLimits = PolicyLimits()

    def build(self, color: Color) -> IPlayer:
        """Create the player for *color*.

        Raises:
            KeyError: if *kind* is neither ``"human"`` nor a known policy.
        """
        if self.kind == HUMAN:
            return HumanPlayer(color, self.name)
        return AIPlayer(color, policy_by_name(self.kind, self.limits), self.name)
