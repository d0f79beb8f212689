"""Cooperative cancellation for stream consumption.

A ``CancellationToken`` is shared between the code driving a
:class:`~chatwire.base.streaming.StreamAssembler` and whoever may want to
stop it (a UI "stop" button, a request deadline). The assembler polls the
token between units; nothing is interrupted mid-unit.
"""
from __future__ import annotations

from threading import Event, Lock
from typing import Optional


class CancelledError(RuntimeError):
    """Raised by :meth:`CancellationToken.raise_if_cancelled`."""


class CancellationToken:
    """Thread-safe, one-way cancellation flag with an optional reason."""

    def __init__(self) -> None:
        self._event = Event()
        self._lock = Lock()
        self._reason: Optional[str] = None

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    @property
    def reason(self) -> Optional[str]:
        return self._reason

    def cancel(self, reason: Optional[str] = None) -> None:
        """Request cancellation. Only the first call's reason is kept."""
        with self._lock:
            if self._event.is_set():
                return
            self._reason = reason
            self._event.set()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until cancelled or ``timeout`` elapses; return the flag."""
        return self._event.wait(timeout)

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise CancelledError(self._reason or "operation cancelled")

    def __repr__(self) -> str:  # pragma: no cover - introspection aid
        return f"CancellationToken(cancelled={self.cancelled}, reason={self._reason!r})"


__all__ = ["CancellationToken", "CancelledError"]
