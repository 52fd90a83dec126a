"""
Background Search

This module runs the machine's search on a worker thread so that the
caller's own thread (a GUI event loop, a shell) stays responsive.

Threading:
    - Caller thread: submit() a position, keep serving the user
    - Search thread: build the tree, then hand the result to a callback
    - Cancellation: cancel() or a newer submit() supersedes the running
      search. Its result is dropped when it arrives and no callback fires.
      Callbacks run while holding the worker lock, so once cancel() returns
      no earlier search can deliver.

The search itself cannot be interrupted. Positions are immutable, so a
superseded search cannot corrupt the caller's game state; the caller only
has to ignore its result, and this class does that.
"""

import logging
import threading
from typing import Callable, Optional

from pawn_engine.board.position import Position
from pawn_engine.config import SearchConfig
from pawn_engine.evaluation.base import Evaluator
from pawn_engine.search.tree import SearchResult, find_best_move

logger = logging.getLogger(__name__)


class SearchWorker:
    """
    Runs find_best_move() on a daemon thread, one search at a time.

    Attributes:
        evaluator: Evaluator handed to every search (default: the search's)
        config: SearchConfig handed to every search
    """

    def __init__(self, evaluator: Optional[Evaluator] = None, config: Optional[SearchConfig] = None):
        self.evaluator = evaluator
        self.config = config

        # Reentrant: callbacks run under the lock and may submit or cancel
        self._lock = threading.RLock()
        self._ticket = 0
        self._thread: Optional[threading.Thread] = None

    @property
    def is_busy(self) -> bool:
        thread = self._thread
        return thread is not None and thread.is_alive()

    def submit(
        self,
        position: Position,
        difficulty: int,
        on_result: Callable[[SearchResult], None],
        on_error: Optional[Callable[[Exception], None]] = None,
    ) -> int:
        """
        Start searching a position in the background.

        Any search still running is superseded.

        Args:
            position: Position with the machine to act
            difficulty: Search depth in plies
            on_result: Called on the search thread with the SearchResult
            on_error: Called on the search thread with the raised exception

        Returns:
            int: Ticket identifying this search
        """
        with self._lock:
            self._ticket += 1
            ticket = self._ticket

        logger.info(f"Search #{ticket} submitted: depth={difficulty}")
        thread = threading.Thread(
            target=self._run,
            args=(ticket, position, difficulty, on_result, on_error),
            name=f"pawn-search-{ticket}",
            daemon=True,
        )
        self._thread = thread
        thread.start()
        return ticket

    def cancel(self) -> None:
        """Supersede the running search; its result will be discarded."""
        with self._lock:
            self._ticket += 1
        logger.info("Search cancelled")

    def is_current(self, ticket: int) -> bool:
        with self._lock:
            return ticket == self._ticket

    def wait(self, timeout: Optional[float] = None) -> bool:
        """
        Wait for the most recent search thread to finish.

        Returns:
            bool: True if no search is running any more
        """
        thread = self._thread
        if thread is not None:
            thread.join(timeout)
        return not self.is_busy

    def _run(self, ticket, position, difficulty, on_result, on_error) -> None:
        """Search thread body."""
        try:
            result = find_best_move(position, difficulty, self.evaluator, self.config)
        except Exception as e:
            with self._lock:
                if ticket != self._ticket:
                    logger.info(f"Search #{ticket} failed after being superseded: {e}")
                    return
                logger.error(f"Search #{ticket} error: {e}", exc_info=True)
                if on_error is not None:
                    on_error(e)
            return

        with self._lock:
            if ticket != self._ticket:
                logger.info(f"Search #{ticket} superseded, discarding {result.move}")
                return
            logger.debug(f"Search #{ticket} delivering {result.move}")
            on_result(result)
