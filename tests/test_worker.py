"""
Unit Tests for the Background Search Worker

Tests for SearchWorker, focusing on:
    - Result delivery from the search thread
    - Cancellation and superseded searches
    - Error reporting
"""

import threading

import pytest

from pawn_engine.board import Position, Side, initial_position
from pawn_engine.evaluation import PawnStructureEvaluator
from pawn_engine.exceptions import GameOverError
from pawn_engine.search import SearchWorker


TIMEOUT = 10.0


class GatedEvaluator(PawnStructureEvaluator):
    """Blocks every evaluation until the gate is opened."""

    def __init__(self):
        super().__init__()
        self.gate = threading.Event()

    def evaluate(self, position, ply=1):
        self.gate.wait(TIMEOUT)
        return super().evaluate(position, ply)


class FailingEvaluator(GatedEvaluator):
    """Fails once the gate is opened."""

    def evaluate(self, position, ply=1):
        self.gate.wait(TIMEOUT)
        raise RuntimeError("evaluator failure")


@pytest.fixture
def opening():
    """White human, black machine to act."""
    return initial_position(Side.BLACK, Side.WHITE)


class TestSearchWorker:
    """Tests for background searches."""

    def test_result_delivered(self, opening):
        """The callback receives the same result a direct search returns."""

        worker = SearchWorker()
        received = []

        ticket = worker.submit(opening, 1, received.append)

        assert worker.wait(TIMEOUT)
        assert worker.is_current(ticket)
        assert len(received) == 1
        assert received[0].nodes == 17
        assert not worker.is_busy

    def test_busy_while_searching(self, opening):
        evaluator = GatedEvaluator()
        worker = SearchWorker(evaluator)

        worker.submit(opening, 1, lambda result: None)
        assert worker.is_busy

        evaluator.gate.set()
        assert worker.wait(TIMEOUT)

    def test_cancelled_result_discarded(self, opening):
        """A result that arrives after cancel() never reaches the callback."""

        evaluator = GatedEvaluator()
        worker = SearchWorker(evaluator)
        received = []

        ticket = worker.submit(opening, 1, received.append)
        worker.cancel()
        evaluator.gate.set()

        assert worker.wait(TIMEOUT)
        assert not worker.is_current(ticket)
        assert received == []

    def test_newer_search_supersedes(self, opening):
        """Only the most recent submission delivers its result."""

        evaluator = GatedEvaluator()
        worker = SearchWorker(evaluator)
        received = []

        first_ticket = worker.submit(opening, 1, lambda result: received.append(("first", result)))
        first_thread = worker._thread
        second_ticket = worker.submit(opening, 2, lambda result: received.append(("second", result)))
        evaluator.gate.set()

        first_thread.join(TIMEOUT)
        assert worker.wait(TIMEOUT)
        assert second_ticket == first_ticket + 1
        assert [label for label, _ in received] == ["second"]
        assert received[0][1].nodes == 273

    def test_cancel_waits_for_delivery(self, opening):
        """cancel() cannot slip in between the ticket check and the callback."""

        evaluator = GatedEvaluator()
        worker = SearchWorker(evaluator)
        entered, release = threading.Event(), threading.Event()
        current_at_delivery = []

        def on_result(result):
            current_at_delivery.append(worker.is_current(ticket))
            entered.set()
            release.wait(TIMEOUT)

        ticket = worker.submit(opening, 1, on_result)
        evaluator.gate.set()
        assert entered.wait(TIMEOUT)

        canceller = threading.Thread(target=worker.cancel)
        canceller.start()
        canceller.join(0.2)
        assert canceller.is_alive(), "cancel() should wait for the running callback"

        release.set()
        canceller.join(TIMEOUT)
        assert worker.wait(TIMEOUT)
        assert not canceller.is_alive()
        assert current_at_delivery == [True]
        assert not worker.is_current(ticket)

    def test_callback_may_resubmit(self, opening):
        """A callback can start the next search without deadlocking."""

        worker = SearchWorker()
        received = []
        done = threading.Event()

        def second(result):
            received.append(result)
            done.set()

        def first(result):
            received.append(result)
            worker.submit(opening, 1, second)

        worker.submit(opening, 1, first)

        assert done.wait(TIMEOUT)
        assert len(received) == 2

    def test_error_reported(self):
        """Search errors reach on_error and on_result is not called."""

        finished = Position.from_diagram(
            """
            ..W.....
            ........
            ........
            ........
            ...B....
            ........
            ........
            ........
            """,
            to_act=Side.BLACK,
        )
        worker = SearchWorker()
        results, errors = [], []

        worker.submit(finished, 2, results.append, errors.append)

        assert worker.wait(TIMEOUT)
        assert results == []
        assert len(errors) == 1
        assert isinstance(errors[0], GameOverError)

    def test_evaluator_error_reported(self, opening):
        evaluator = FailingEvaluator()
        evaluator.gate.set()
        worker = SearchWorker(evaluator)
        errors = []

        worker.submit(opening, 1, lambda result: None, errors.append)

        assert worker.wait(TIMEOUT)
        assert len(errors) == 1
        assert isinstance(errors[0], RuntimeError)

    def test_superseded_error_dropped(self, opening):
        """An error from a cancelled search is not reported."""

        evaluator = FailingEvaluator()
        worker = SearchWorker(evaluator)
        errors = []

        worker.submit(opening, 1, lambda result: None, errors.append)
        worker.cancel()
        evaluator.gate.set()

        assert worker.wait(TIMEOUT)
        assert errors == []

    def test_wait_without_search(self):
        assert SearchWorker().wait(0.1)
