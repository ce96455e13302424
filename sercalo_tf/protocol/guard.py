# sercalo_tf/protocol/guard.py
from __future__ import annotations

import logging
import math
import threading
from contextlib import contextmanager
from typing import Callable, Iterator, Optional, TypeVar

from sercalo_tf.core.errors import LockTimeout, OutOfRange

T = TypeVar("T")


class ExclusiveAccessGuard:
    """
    Serializes transport access for one device instance.

    Every exchange (including settle delays that belong to it) runs while the
    guard is held. Waiting is bounded by `timeout_s`; when it expires LockTimeout
    is raised and the operation is never started.
    """

    def __init__(self, timeout_s: float = 1.0, *, logger: Optional[logging.Logger] = None):
        self._lock = threading.Lock()
        self._log = logger or logging.getLogger(__name__)
        self.timeout_s = timeout_s

    @property
    def timeout_s(self) -> float:
        return self._timeout_s

    @timeout_s.setter
    def timeout_s(self, value: float) -> None:
        numeric = isinstance(value, (int, float)) and not isinstance(value, bool)
        if not numeric or not math.isfinite(value) or value < 0:
            raise OutOfRange(
                f"Lock timeout must be a non-negative number of seconds, got {value!r}.",
                details={"timeout_s": value},
            )
        self._timeout_s = float(value)

    @property
    def locked(self) -> bool:
        return self._lock.locked()

    @contextmanager
    def hold(self) -> Iterator[None]:
        if not self._lock.acquire(timeout=self.timeout_s):
            self._log.warning("GUARD_TIMEOUT timeout_s=%.3f", self.timeout_s)
            raise LockTimeout(
                "A thread-safe lock request failed to gain access.",
                hint="Another caller is holding the device; raise lock_timeout_s if exchanges are long.",
                details={"timeout_s": self.timeout_s},
            )
        self._log.debug("GUARD_ACQUIRED")
        try:
            yield
        finally:
            self._lock.release()

    def run(self, operation: Callable[..., T], *args, **kwargs) -> T:
        """Run `operation` with exclusive ownership and return its result."""
        with self.hold():
            return operation(*args, **kwargs)
