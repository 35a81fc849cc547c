"""Tests for the Qt policy bridge worker."""

from __future__ import annotations

from collections.abc import Collection

import pytest

pytest.importorskip("PyQt6.QtCore")
from PyQt6.QtTest import QSignalSpy  # noqa: E402

from rookery.core.board import Board, initial_board  # noqa: E402
from rookery.core.move import Move  # noqa: E402
from rookery.core.notation import position_from_fen  # noqa: E402
from rookery.core.rules import legal_moves  # noqa: E402
from rookery.core.types import E2, parse_square  # noqa: E402
from rookery.engine import FirstMovePolicy, ordered_moves  # noqa: E402
from rookery.engine.qt_bridge import PolicyWorker  # noqa: E402

pytestmark = pytest.mark.usefixtures("qapp")


class _CancellingPolicy:
    name = "cancelling"

    def __init__(self, worker: PolicyWorker) -> None:
        self._worker = worker

    def choose_move(self, board: Board, legal_moves: Collection[Move]) -> Move:
        self._worker.cancel()
        return ordered_moves(legal_moves)[0]


class _FailingPolicy:
    name = "failing"

    def choose_move(self, board: Board, legal_moves: Collection[Move]) -> Move:
        raise RuntimeError("boom")


class _RoguePolicy:
    name = "rogue"

    def choose_move(self, board: Board, legal_moves: Collection[Move]) -> Move:
        return Move(E2, parse_square("e5"))


class TestPolicyWorker:
    def test_emits_move_ready(self) -> None:
        worker = PolicyWorker(FirstMovePolicy())
        received: list[tuple[int, Move]] = []
        worker.move_ready.connect(lambda request_id, move: received.append((request_id, move)))

        board = initial_board()
        worker.request_move(board, 3)

        assert received == [(3, FirstMovePolicy().choose_move(board, legal_moves(board)))]

    def test_emits_cancelled_when_cancelled_mid_request(self) -> None:
        worker = PolicyWorker()
        worker.set_policy(_CancellingPolicy(worker))

        cancelled = QSignalSpy(worker.cancelled)
        ready = QSignalSpy(worker.move_ready)

        worker.request_move(initial_board(), 7)

        assert len(cancelled) == 1
        assert cancelled[0][0] == 7
        assert len(ready) == 0

    def test_cancel_does_not_leak_into_next_request(self) -> None:
        worker = PolicyWorker(FirstMovePolicy())
        worker.cancel()
        ready = QSignalSpy(worker.move_ready)
        worker.request_move(initial_board(), 8)
        assert len(ready) == 1

    def test_emits_no_move_on_finished_position(self) -> None:
        worker = PolicyWorker(FirstMovePolicy())

        no_move = QSignalSpy(worker.no_move)
        ready = QSignalSpy(worker.move_ready)
        errors = QSignalSpy(worker.policy_error)

        worker.request_move(position_from_fen("7k/8/5KQ1/8/8/8/8/8 b - - 0 1"), 11)

        assert len(no_move) == 1
        assert no_move[0][0] == 11
        assert len(ready) == 0
        assert len(errors) == 0

    def test_policy_exception_reported(self) -> None:
        worker = PolicyWorker(_FailingPolicy())
        errors = QSignalSpy(worker.policy_error)
        worker.request_move(initial_board(), 1)
        assert len(errors) == 1
        assert errors[0][1] == "boom"

    def test_illegal_choice_reported(self) -> None:
        worker = PolicyWorker(_RoguePolicy())
        errors = QSignalSpy(worker.policy_error)
        ready = QSignalSpy(worker.move_ready)
        worker.request_move(initial_board(), 2)
        assert len(errors) == 1
        assert "illegal move e2e5" in errors[0][1]
        assert len(ready) == 0

    def test_invalid_board_reported(self) -> None:
        worker = PolicyWorker()
        errors = QSignalSpy(worker.policy_error)
        worker.request_move("not a board", 4)
        assert len(errors) == 1
        assert errors[0][0] == 4

    def test_default_policy(self) -> None:
        assert PolicyWorker().policy.name == "random"

