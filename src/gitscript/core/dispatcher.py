"""Concurrent fetch dispatch for gitscript.

Every repository found during a scan gets its own thread running
``git fetch``. There is no pool and no cap: the number of threads in flight
equals the number of repositories discovered so far. A
:class:`CompletionBarrier` keeps the process alive until all of them have
reported.
"""

from __future__ import annotations

import logging
import threading
from typing import List

from .repository import FetchError, FetchOutcome, GitRepository

logger = logging.getLogger(__name__)


class CompletionBarrier:
    """Counts in-flight units of work and lets a caller wait for zero."""

    def __init__(self) -> None:
        self._pending = 0
        self._cond = threading.Condition()

    @property
    def pending(self) -> int:
        with self._cond:
            return self._pending

    def add(self, count: int = 1) -> None:
        """Register ``count`` new units."""
        with self._cond:
            self._pending += count

    def done(self) -> None:
        """Mark one unit as finished."""
        with self._cond:
            if self._pending <= 0:
                raise ValueError("CompletionBarrier.done() called more times than add()")
            self._pending -= 1
            if self._pending == 0:
                self._cond.notify_all()

    def wait(self) -> None:
        """Block until every registered unit is done."""
        with self._cond:
            self._cond.wait_for(lambda: self._pending == 0)


class FetchDispatcher:
    """Runs ``git fetch`` for each dispatched repository on its own thread.

    Attributes:
        git_command (str): Git executable handed to each GitRepository.
        barrier (CompletionBarrier): Tracks fetches still running.
    """

    def __init__(self, git_command: str = "git") -> None:
        """Initialize dispatcher."""
        self.git_command = git_command
        self.barrier = CompletionBarrier()
        self._lock = threading.Lock()
        self._dispatched: List[str] = []
        self._outcomes: List[FetchOutcome] = []

    @property
    def dispatched(self) -> List[str]:
        """Paths dispatched so far, in dispatch order."""
        with self._lock:
            return list(self._dispatched)

    @property
    def outcomes(self) -> List[FetchOutcome]:
        """Outcomes recorded so far, in completion order."""
        with self._lock:
            return list(self._outcomes)

    def dispatch(self, path: str) -> None:
        """Start fetching ``path`` in the background and return immediately."""
        with self._lock:
            self._dispatched.append(path)
            index = len(self._dispatched)
        self.barrier.add()
        thread = threading.Thread(
            target=self._run,
            args=(path,),
            name=f"fetch-{index}",
        )
        try:
            thread.start()
        except BaseException:
            self.barrier.done()
            raise

    def wait(self) -> List[FetchOutcome]:
        """Wait for every dispatched fetch and return their outcomes."""
        self.barrier.wait()
        return self.outcomes

    def _run(self, path: str) -> None:
        try:
            outcome = self._fetch(path)
            with self._lock:
                self._outcomes.append(outcome)
        finally:
            self.barrier.done()

    def _fetch(self, path: str) -> FetchOutcome:
        repo = GitRepository(path, git_command=self.git_command)
        try:
            repo.fetch()
        except FetchError as e:
            logger.error(
                "Error fetching in repository %s: %s\nGit error: %s", path, e.error, e.stderr
            )
            return FetchOutcome.failed(path, e.error, e.stderr)
        except Exception as e:
            logger.exception("Unexpected error fetching in repository %s", path)
            return FetchOutcome.failed(path, str(e))

        logger.info("Successfully fetched in repository: %s", path)
        return FetchOutcome.ok(path)
