"""Qt bridge to run a move policy in a worker thread.

Requests carry an immutable :class:`Board` snapshot; responses carry the
chosen :class:`Move`. Nothing is shared between the threads besides those
values.
"""

from __future__ import annotations

import logging
import threading

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from rookery.core.board import Board
from rookery.core.rules import legal_moves
from rookery.engine import DefaultPolicy, MovePolicy

_LOGGER = logging.getLogger(__name__)


class PolicyWorker(QObject):
    """Thread-affine worker that asks a policy for a move on demand."""

    move_ready = pyqtSignal(int, object)
    no_move = pyqtSignal(int)
    cancelled = pyqtSignal(int)
    policy_error = pyqtSignal(int, str)

    def __init__(self, policy: MovePolicy | None = None) -> None:
        super().__init__()
        self._policy: MovePolicy = policy if policy is not None else DefaultPolicy()
        self._cancel_event = threading.Event()

    @property
    def policy(self) -> MovePolicy:
        return self._policy

    @pyqtSlot(object, int)
    def request_move(self, board_obj: object, request_id: int) -> None:
        """Choose a move for *board_obj* and emit the result."""
        if not isinstance(board_obj, Board):
            self.policy_error.emit(request_id, "Policy worker received invalid board")
            return

        self._cancel_event.clear()
        moves = legal_moves(board_obj)
        if not moves:
            self.no_move.emit(request_id)
            return

        try:
            move = self._policy.choose_move(board_obj, moves)
        except Exception as exc:
            _LOGGER.exception("Policy %s failed", self._policy.name)
            self.policy_error.emit(request_id, str(exc))
            return

        if self._cancel_event.is_set():
            self.cancelled.emit(request_id)
            return

        if move not in moves:
            self.policy_error.emit(request_id, f"Policy returned illegal move {move}")
            return

        self.move_ready.emit(request_id, move)

    @pyqtSlot()
    def cancel(self) -> None:
        """Drop the result of the request in flight."""
        self._cancel_event.set()

    def set_policy(self, policy: MovePolicy) -> None:
        """Swap the policy (takes effect on the next request)."""
        self._policy = policy
