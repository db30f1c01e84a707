"""
Background taste profile refresh.

Tracking an interaction enqueues the user; a worker (or an explicit
run_pending() call) rebuilds their profile later, off the request path.
A user id stays in the queue until its update call returns. Failures are
logged and retried with exponential backoff, up to max_attempts times
before the id is dropped.
"""

import logging
import threading
import time
from collections import OrderedDict
from typing import Any, Callable, List, Optional, Set, Tuple

logger = logging.getLogger(__name__)


class ProfileRefreshQueue:
    """De-duplicated queue of user ids awaiting a profile rebuild.

    A failed refresh is re-queued with a not-before time of
    ``retry_delay * 2 ** (attempts - 1)`` seconds from the failure, so a
    single ``run_pending()`` pass never retries an id it just failed.
    ``retry_delay`` defaults to ``poll_interval``.
    """

    def __init__(
        self,
        handler: Callable[[str], Any],
        max_attempts: int = 3,
        poll_interval: float = 0.5,
        retry_delay: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self._handler = handler
        self.max_attempts = max_attempts
        self.poll_interval = poll_interval
        self.retry_delay = poll_interval if retry_delay is None else retry_delay
        self._clock = clock
        # user_id -> (failed attempts so far, not-before time)
        self._pending: "OrderedDict[str, Tuple[int, float]]" = OrderedDict()
        self._in_flight: Set[str] = set()
        self._lock = threading.Lock()
        self._wakeup = threading.Event()
        self._stopping = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def enqueue(self, user_id: str) -> bool:
        """Queue user_id for refresh. Returns False if it was already pending."""
        with self._lock:
            if user_id in self._pending:
                return False
            self._pending[user_id] = (0, 0.0)
        logger.debug("[refresh] ENQUEUED user_id=%s", user_id)
        self._wakeup.set()
        return True

    def pending(self) -> List[str]:
        with self._lock:
            return list(self._pending) + sorted(self._in_flight - set(self._pending))

    def __len__(self) -> int:
        return len(self.pending())

    def _due(self) -> List[str]:
        now = self._clock()
        with self._lock:
            return [
                user_id
                for user_id, (_, not_before) in self._pending.items()
                if not_before <= now
            ]

    def _take(self, user_id: str) -> Optional[int]:
        with self._lock:
            entry = self._pending.pop(user_id, None)
            if entry is None:
                return None
            self._in_flight.add(user_id)
            return entry[0]

    def _process(self, user_id: str, attempts: int) -> bool:
        try:
            self._handler(user_id)
        except Exception:
            attempts += 1
            delay = self.retry_delay * 2 ** (attempts - 1)
            with self._lock:
                self._in_flight.discard(user_id)
                if attempts < self.max_attempts:
                    previous = self._pending.get(user_id, (0, 0.0))[0]
                    self._pending[user_id] = (max(previous, attempts), self._clock() + delay)
            if attempts < self.max_attempts:
                logger.exception(
                    "[refresh] REFRESH_FAILED user_id=%s attempt=%s/%s retry_in=%.2fs",
                    user_id, attempts, self.max_attempts, delay,
                )
            else:
                logger.exception(
                    "[refresh] REFRESH_ABANDONED user_id=%s attempts=%s",
                    user_id, attempts,
                )
            return False
        with self._lock:
            self._in_flight.discard(user_id)
        logger.debug("[refresh] REFRESHED user_id=%s", user_id)
        return True

    def run_pending(self) -> int:
        """Process every id due at the start of the pass. Returns successful refreshes.

        Ids that fail, or are enqueued while the pass runs, wait for a later pass.
        """
        succeeded = 0
        for user_id in self._due():
            attempts = self._take(user_id)
            if attempts is None:
                continue
            if self._process(user_id, attempts):
                succeeded += 1
        return succeeded

    def _worker(self) -> None:
        while not self._stopping.is_set():
            self._wakeup.wait(self.poll_interval)
            self._wakeup.clear()
            self.run_pending()

    def start(self) -> None:
        """Start the daemon worker thread (no-op if already running)."""
        if self._thread is not None and self._thread.is_alive():
            return
        self._stopping.clear()
        self._thread = threading.Thread(target=self._worker, name="profile-refresh", daemon=True)
        self._thread.start()
        logger.info("[refresh] WORKER_STARTED max_attempts=%s", self.max_attempts)

    def stop(self, timeout: Optional[float] = 5.0) -> None:
        """Stop the worker; ids still pending stay queued for run_pending()."""
        if self._thread is None:
            return
        self._stopping.set()
        self._wakeup.set()
        self._thread.join(timeout)
        self._thread = None
        logger.info("[refresh] WORKER_STOPPED pending=%s", len(self))

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()
