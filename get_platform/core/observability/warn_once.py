"""
One-time advisory warnings, keyed by category.

Resolution may run several times in one process (CLI subcommands,
tests, an installer probing more than one target). A warning about
a missing signal only needs to reach the user once per key.
"""

from __future__ import annotations

import logging
import threading

logger = logging.getLogger("get_platform.warnings")


class WarnOnce:
    """Callable ``notify(key, message)`` that logs each key only once."""

    def __init__(self, log: logging.Logger | None = None):
        self._log = log or logger
        self._seen: set[str] = set()
        self._lock = threading.Lock()

    def __call__(self, key: str, message: str) -> bool:
        """Emit ``message`` unless ``key`` was already used. Returns True if emitted."""
        with self._lock:
            if key in self._seen:
                return False
            self._seen.add(key)
        self._log.warning(message)
        return True

    @property
    def seen(self) -> frozenset[str]:
        return frozenset(self._seen)

    def reset(self) -> None:
        with self._lock:
            self._seen.clear()


# Process-wide emitter used when callers don't pass their own.
warn_once = WarnOnce()
