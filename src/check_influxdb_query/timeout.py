"""Wall-clock limit for the blocking HTTP call."""

from __future__ import annotations

import signal
import threading
from types import FrameType
from typing import Any, NoReturn, Optional

from .exceptions import QueryTimeoutError


class Deadline:
    """Raise QueryTimeoutError once ``seconds`` of real time have passed.

    Uses SIGALRM, so it only arms in the main thread of a platform that has
    it; elsewhere the per-socket timeout of the HTTP client is the only limit.
    """

    def __init__(self, seconds: float, *, message: str) -> None:
        self.seconds = seconds
        self.message = message
        self._signaled = False
        self._previous: Any = None
        self._armed = False

    @property
    def signaled(self) -> bool:
        return self._signaled

    def _handler(self, signum: int, frame: Optional[FrameType]) -> NoReturn:
        self._signaled = True
        raise QueryTimeoutError(self.message)

    def __enter__(self) -> "Deadline":
        self._signaled = False
        self._armed = hasattr(signal, "SIGALRM") and threading.current_thread() is threading.main_thread()
        if self._armed:
            self._previous = signal.signal(signal.SIGALRM, self._handler)
            signal.setitimer(signal.ITIMER_REAL, self.seconds)
        return self

    def __exit__(self, *exc_info: object) -> None:
        if self._armed:
            signal.setitimer(signal.ITIMER_REAL, 0)
            signal.signal(signal.SIGALRM, self._previous if self._previous is not None else signal.SIG_DFL)
            self._armed = False
