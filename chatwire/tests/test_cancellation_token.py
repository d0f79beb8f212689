"""Unit tests for the cooperative cancellation token.

Covers first-reason-wins, wait with timeout, raise_if_cancelled and a
cancel issued from another thread.
"""
from __future__ import annotations

import threading

import pytest

from chatwire.base.cancellation import CancellationToken, CancelledError


def test_cancel_is_idempotent_and_keeps_first_reason():
    token = CancellationToken()
    assert token.cancelled is False and token.reason is None  # nosec B101 - pytest assert in tests

    token.cancel(reason="stop")
    token.cancel(reason="ignored")

    assert token.cancelled is True and token.reason == "stop"  # nosec B101 - pytest assert in tests


def test_raise_if_cancelled():
    token = CancellationToken()
    token.raise_if_cancelled()
    token.cancel("terminate")
    with pytest.raises(CancelledError, match="terminate"):
        token.raise_if_cancelled()


def test_wait_times_out_then_observes_cross_thread_cancel():
    token = CancellationToken()
    assert token.wait(timeout=0.01) is False  # nosec B101 - pytest assert in tests

    timer = threading.Timer(0.01, token.cancel, kwargs={"reason": "ui"})
    timer.start()
    try:
        assert token.wait(timeout=5) is True  # nosec B101 - pytest assert in tests
    finally:
        timer.cancel()
    assert token.reason == "ui"  # nosec B101 - pytest assert in tests
