"""
Per-key call deduplication.
"""

import threading
from typing import Any, Callable, Dict, Optional


class _Call:
    """A load in flight; followers block on ``done``."""

    def __init__(self):
        self.done = threading.Event()
        self.result: Any = None
        self.error: Optional[BaseException] = None
        self.followers = 0


class SingleFlight:
    """
    Collapses concurrent calls for the same key into one.

    The first caller for a key runs ``func``; callers arriving while it runs
    wait and receive the same result, or the same exception. The table lock is
    held only for bookkeeping, never while ``func`` runs.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._calls: Dict[str, _Call] = {}

    def do(self, key: str, func: Callable[[], Any]) -> Any:
        with self._lock:
            call = self._calls.get(key)
            if call is not None:
                call.followers += 1
                leader = False
            else:
                call = _Call()
                self._calls[key] = call
                leader = True

        if not leader:
            call.done.wait()
            if call.error is not None:
                raise call.error
            return call.result

        try:
            call.result = func()
        except BaseException as e:
            call.error = e
            raise
        finally:
            with self._lock:
                # forget() may already have detached this call
                if self._calls.get(key) is call:
                    del self._calls[key]
            call.done.set()

        return call.result

    def forget(self, key: str) -> None:
        """Detach the call in flight for ``key``; later callers start a new one."""
        with self._lock:
            self._calls.pop(key, None)

    def forget_all(self) -> None:
        with self._lock:
            self._calls.clear()

    def waiting(self, key: str) -> int:
        """Number of callers parked on the flight for ``key``."""
        with self._lock:
            call = self._calls.get(key)
            return call.followers if call is not None else 0

    def in_flight(self) -> int:
        """Number of keys currently loading."""
        with self._lock:
            return len(self._calls)
