"""Terminal event construction for a stream.

Builds the :class:`StreamEndEvent` and emits the consolidated ``stream.end``
(or ``stream.cancelled``) lifecycle log line with the normalized key set.
"""
from __future__ import annotations

import logging
from typing import List, Optional

from ..errors import Diagnostic, StreamError
from ..logging import LogContext, normalized_log_event
from ..models import Usage
from .events import StreamEndEvent, StreamOutcome
from .stream_metrics import StreamMetrics


def finalize_stream(
    *,
    logger: logging.Logger,
    ctx: LogContext,
    outcome: StreamOutcome,
    metrics: StreamMetrics,
    usage: Optional[Usage] = None,
    error: Optional[StreamError] = None,
    warnings: Optional[List[str]] = None,
    diagnostics: Optional[List[Diagnostic]] = None,
) -> StreamEndEvent:
    """Create the terminal ``StreamEndEvent`` and log it."""
    error_code = error.code.value if error is not None else None
    normalized_log_event(
        logger,
        "stream.cancelled" if outcome is StreamOutcome.CANCELLED else "stream.end",
        ctx,
        phase="finalize",
        error_code=error_code,
        emitted=metrics.emitted > 0,
        tokens=metrics.tokens,
        level=logging.INFO if outcome is StreamOutcome.COMPLETED else logging.WARNING,
        outcome=outcome.value,
        received=metrics.received,
        dropped=metrics.dropped,
        emitted_count=metrics.emitted,
        time_to_first_token_ms=metrics.time_to_first_token_ms,
        total_duration_ms=metrics.total_duration_ms,
        diagnostics=len(diagnostics or ()),
        error=error.message if error is not None else None,
    )
    return StreamEndEvent(
        outcome=outcome,
        usage=usage,
        error=error,
        warnings=list(warnings or ()),
        diagnostics=list(diagnostics or ()),
        metrics=metrics,
        response_id=ctx.response_id,
        model=ctx.model,
    )


__all__ = ["finalize_stream"]
