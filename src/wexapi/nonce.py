"""Nonce source for signed trade API requests.

WEX rejects any nonce that is not greater than the last one it saw for the
key, and keys are limited to 32-bit nonces. The counter starts at the
current unix time, so a fresh process normally starts above whatever a
previous process issued. Two processes started within the same second with
the same key can still collide; there is no cross-process coordination.
"""

from __future__ import annotations

import logging
import threading
import time

from wexapi.errors import NonceExhaustedError

logger = logging.getLogger(__name__)

MAX_NONCE = 2**32 - 2


class NonceGenerator:
    """Strictly increasing nonces, shared safely between threads."""

    def __init__(self, start: int | None = None, maximum: int = MAX_NONCE) -> None:
        self._value = int(time.time()) if start is None else start
        self._maximum = maximum
        self._lock = threading.Lock()

    @property
    def maximum(self) -> int:
        return self._maximum

    def peek(self) -> int:
        with self._lock:
            return self._value

    def next(self) -> int:
        """Return the current value and advance the counter.

        Raises ``NonceExhaustedError`` once the limit is reached; the counter
        is left where it is, so every later call fails the same way until the
        key is rotated.
        """
        with self._lock:
            nonce = self._value
            exhausted = nonce >= self._maximum
            if not exhausted:
                self._value = nonce + 1
        if exhausted:
            logger.warning("Nonce limit %d reached, key must be rotated", self._maximum)
            raise NonceExhaustedError(self._maximum)
        return nonce
