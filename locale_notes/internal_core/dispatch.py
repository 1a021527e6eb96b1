from __future__ import annotations

"""
Serial execution context for all session state mutation.

Design intent:
- Funnel collaborator callbacks and UI actions onto one ordered task stream.
- Never block a poster on another poster's work; whoever is draining runs it.
- Let outside readers wait until everything posted so far has run.
"""

import logging
import threading
from collections import deque
from typing import Callable, Deque, Optional

logger = logging.getLogger(__name__)

Task = Callable[[], None]


class SerialQueue:
    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._pending: Deque[Task] = deque()
        self._draining = False
        self._drainer: Optional[int] = None

    def submit(self, task: Task) -> None:
        with self._cond:
            self._pending.append(task)
            if self._draining:
                return
            self._draining = True
            self._drainer = threading.get_ident()
        self._drain()

    def pending(self) -> int:
        with self._cond:
            return len(self._pending)

    def wait_idle(self, timeout: Optional[float] = None) -> bool:
        """Block until no task is queued or running. Returns False on timeout."""
        with self._cond:
            if self._draining and self._drainer == threading.get_ident():
                raise RuntimeError("wait_idle called from inside a serial task")
            return self._cond.wait_for(
                lambda: not self._draining and not self._pending, timeout=timeout
            )

    def _drain(self) -> None:
        while True:
            with self._cond:
                if not self._pending:
                    self._draining = False
                    self._drainer = None
                    self._cond.notify_all()
                    return
                task = self._pending.popleft()
            try:
                task()
            except Exception:
                logger.exception("serial task failed task=%r", task)
