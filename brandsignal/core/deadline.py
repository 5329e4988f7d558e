"""Per-probe deadline and shared cancellation token."""

from __future__ import annotations

import threading
import time


class CancellationToken:
    """Cooperative cancellation shared by a group of probes."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


class ProbeDeadline:
    """Monotonic deadline for one network call, optionally tied to a token.

    Network code derives its timeout from ``remaining()`` and must not start
    a request once ``expired`` is true.
    """

    def __init__(
        self,
        timeout_seconds: float,
        token: CancellationToken | None = None,
    ) -> None:
        if timeout_seconds <= 0:
            msg = "timeout_seconds must be positive"
            raise ValueError(msg)
        self.timeout_seconds = timeout_seconds
        self.token = token or CancellationToken()
        self._expires_at = time.monotonic() + timeout_seconds

    def remaining(self) -> float:
        """Seconds left before expiry, never negative."""
        return max(0.0, self._expires_at - time.monotonic())

    @property
    def cancelled(self) -> bool:
        return self.token.cancelled

    @property
    def expired(self) -> bool:
        return self.cancelled or self.remaining() <= 0.0
