"""
Stream assembly across all choices of one response.

``StreamAssembler`` owns one :class:`ChunkDeltaAccumulator` per choice index
and the request-level side channels (usage, vendor warnings, vendor error).
It is fed one decoded unit at a time and returns the events each unit
produced; ``run``/``arun`` drive it from a transport iterator.

Termination triggers:

- the ``"[DONE]"`` sentinel, when the transport forwards it;
- a chunk with empty ``choices`` that carries ``usage``;
- a chunk carrying an ``error`` payload (outcome ``vendor_error``; the
  chunk's own choices are applied first);
- ``finish()`` (transport exhausted), ``fail(exc)`` (transport raised) or
  ``cancel(reason)``.

Malformed units never raise: they are dropped, counted and recorded as
``SCHEMA_VIOLATION`` diagnostics. Calling ``feed``/``finish``/``fail`` after
termination raises ``WireError(INVALID_STATE)``.

Thread-safety: one lock per assembler, taken for each call and never held
while the transport is being read.
"""
from __future__ import annotations

import logging
import threading
import time
from contextlib import suppress
from typing import Any, AsyncIterable, AsyncIterator, Callable, Dict, Iterable, Iterator, List, Mapping, Optional

from ...config.defaults import DONE_SENTINEL
from ...wire.chunk import ChunkResponse
from ...wire.validation import SchemaViolation, validate_chunk
from ..cancellation import CancellationToken
from ..errors import Diagnostic, ErrorCode, StreamError, WireError
from ..finish_reason import DEFAULT_MAPPER, FinishReasonMapper
from ..logging import LogContext, get_logger, log_event
from ..models import ChatCompletion, ChoiceResult, FinishReason, Usage
from .accumulator import ChunkDeltaAccumulator
from .accumulated_choice import AccumulatorState
from .events import ChoiceFinalEvent, DeltaEvent, StreamEndEvent, StreamEvent, StreamOutcome
from .stream_finalize import finalize_stream
from .stream_metrics import StreamMetrics

_PARTIAL_OUTCOMES = (StreamOutcome.VENDOR_ERROR, StreamOutcome.TRANSPORT_FAILURE)


def _is_done_sentinel(unit: Any) -> bool:
    if isinstance(unit, bytes):
        unit = unit.decode("utf-8", errors="replace")
    return isinstance(unit, str) and unit.strip() == DONE_SENTINEL


def _unit_id(unit: Any) -> Optional[str]:
    if isinstance(unit, Mapping):
        value = unit.get("id")
        return value if isinstance(value, str) else None
    return None


class StreamAssembler:
    """Folds one response stream into per-choice messages.

    Args:
        mapper: Finish-reason table; the default vocabulary when omitted.
        dialect: Vendor dialect, for log context only.
        model: Requested model, for log context until the stream reports one.
        request_id: Caller correlation id, for log context.
        logger: Defaults to the ``chatwire.stream`` logger.
        clock: Monotonic seconds source (tests inject a fake).
    """

    def __init__(
        self,
        *,
        mapper: Optional[FinishReasonMapper] = None,
        dialect: Optional[str] = None,
        model: Optional[str] = None,
        request_id: Optional[str] = None,
        logger: Optional[logging.Logger] = None,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        self._mapper = mapper or DEFAULT_MAPPER
        self._logger = logger or get_logger("chatwire.stream")
        self._clock = clock
        self._lock = threading.Lock()
        self.ctx = LogContext(dialect=dialect, model=model, request_id=request_id)
        self.metrics = StreamMetrics()
        self._choices: Dict[int, ChunkDeltaAccumulator] = {}
        self._usage: Optional[Usage] = None
        self._warnings: List[str] = []
        self._diagnostics: List[Diagnostic] = []
        self._error: Optional[StreamError] = None
        self._outcome: Optional[StreamOutcome] = None
        self._t0: Optional[float] = None

    @classmethod
    def from_config(cls, cfg: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> "StreamAssembler":
        """Build an assembler from :func:`chatwire.config.get_wire_config` output."""
        cfg = cfg or {}
        kwargs.setdefault("mapper", FinishReasonMapper.from_config(cfg))
        kwargs.setdefault("dialect", cfg.get("dialect"))
        return cls(**kwargs)

    # -- inspection --------------------------------------------------------
    @property
    def terminated(self) -> bool:
        return self._outcome is not None

    @property
    def outcome(self) -> Optional[StreamOutcome]:
        return self._outcome

    @property
    def usage(self) -> Optional[Usage]:
        return self._usage

    @property
    def warnings(self) -> List[str]:
        return list(self._warnings)

    @property
    def diagnostics(self) -> List[Diagnostic]:
        return list(self._diagnostics)

    def choice_indices(self) -> List[int]:
        return sorted(self._choices)

    # -- feeding -----------------------------------------------------------
    def feed(self, unit: Any) -> List[StreamEvent]:
        """Process one decoded unit (a chunk mapping or the done sentinel).

        Units arriving after the stream ended are ignored: a trailing done
        sentinel silently, anything else with a ``PROTOCOL_INCONSISTENCY``
        diagnostic (visible through :attr:`diagnostics`).
        """
        with self._lock:
            if self._outcome is not None:
                if not _is_done_sentinel(unit):
                    self._record(
                        Diagnostic(
                            code=ErrorCode.PROTOCOL_INCONSISTENCY,
                            message=f"unit after stream ended ({self._outcome.value}) ignored",
                            chunk_id=_unit_id(unit),
                        )
                    )
                return []
            self._start_clock()
            self.metrics.received += 1
            if _is_done_sentinel(unit):
                return self._terminate(StreamOutcome.COMPLETED)
            result = validate_chunk(unit)
            if not result.ok:
                self._drop(unit, result.violation)
                return []
            chunk: ChunkResponse = result.value  # type: ignore[assignment]
            events: List[StreamEvent] = list(self._apply_chunk(chunk))
            if chunk.error is not None:
                self._error = StreamError.from_vendor_payload(chunk.error)
                log_event(
                    self._logger,
                    "stream.vendor.error",
                    self.ctx,
                    level=logging.WARNING,
                    chunk_id=chunk.id,
                    error=self._error.to_dict(),
                )
                events.extend(self._terminate(StreamOutcome.VENDOR_ERROR))
            elif chunk.is_usage_only():
                events.extend(self._terminate(StreamOutcome.COMPLETED))
            return events

    def finish(self) -> List[StreamEvent]:
        """Transport reached end of stream."""
        with self._lock:
            self._ensure_open("finish")
            self._start_clock()
            return self._terminate(StreamOutcome.COMPLETED)

    def fail(self, exc: BaseException) -> List[StreamEvent]:
        """Transport raised ``exc``; accumulated choices are emitted as partial."""
        with self._lock:
            self._ensure_open("fail")
            self._start_clock()
            self._error = StreamError.from_exception(exc)
            log_event(
                self._logger,
                "stream.transport.failure",
                self.ctx,
                level=logging.WARNING,
                failure_class=exc.__class__.__name__,
                error=self._error.message,
            )
            return self._terminate(StreamOutcome.TRANSPORT_FAILURE)

    def cancel(self, reason: Optional[str] = None) -> List[StreamEvent]:
        """Abort the stream; accumulated choices are discarded.

        Returns only the terminal ``StreamEndEvent`` (``outcome=cancelled``).
        Cancelling an already terminated stream is a no-op returning ``[]``.
        """
        with self._lock:
            if self.terminated:
                return []
            self._start_clock()
            self._error = StreamError(code=ErrorCode.CANCELLED, message=reason or "stream cancelled")
            return self._terminate(StreamOutcome.CANCELLED)

    # -- driving -----------------------------------------------------------
    def run(
        self,
        units: Iterable[Any],
        cancellation_token: Optional[CancellationToken] = None,
    ) -> Iterator[StreamEvent]:
        """Drive the assembler from a synchronous transport iterator.

        Exceptions raised by the iterator become a ``transport_failure``
        outcome. The token is polled before every unit and once more before
        finishing. The iterator is closed when iteration stops early.
        """
        iterator = iter(units)
        try:
            while True:
                if cancellation_token is not None and cancellation_token.cancelled:
                    yield from self.cancel(cancellation_token.reason)
                    return
                try:
                    unit = next(iterator)
                except StopIteration:
                    break
                except Exception as exc:
                    yield from self.fail(exc)
                    return
                yield from self.feed(unit)
                if self.terminated:
                    return
            if cancellation_token is not None and cancellation_token.cancelled:
                yield from self.cancel(cancellation_token.reason)
                return
            yield from self.finish()
        finally:
            close = getattr(iterator, "close", None)
            if callable(close):
                with suppress(Exception):
                    close()

    async def arun(
        self,
        units: AsyncIterable[Any],
        cancellation_token: Optional[CancellationToken] = None,
    ) -> AsyncIterator[StreamEvent]:
        """Asynchronous counterpart of :meth:`run`."""
        iterator = units.__aiter__()
        try:
            while True:
                if cancellation_token is not None and cancellation_token.cancelled:
                    for event in self.cancel(cancellation_token.reason):
                        yield event
                    return
                try:
                    unit = await iterator.__anext__()
                except StopAsyncIteration:
                    break
                except Exception as exc:
                    for event in self.fail(exc):
                        yield event
                    return
                for event in self.feed(unit):
                    yield event
                if self.terminated:
                    return
            if cancellation_token is not None and cancellation_token.cancelled:
                for event in self.cancel(cancellation_token.reason):
                    yield event
                return
            for event in self.finish():
                yield event
        finally:
            aclose = getattr(iterator, "aclose", None)
            if callable(aclose):
                with suppress(Exception):
                    await aclose()

    # -- internals (lock held) ---------------------------------------------
    def _apply_chunk(self, chunk: ChunkResponse) -> Iterator[DeltaEvent]:
        if self.ctx.response_id is None:
            self.ctx.response_id = chunk.id
        if chunk.model:
            self.ctx.model = chunk.model
        if chunk.usage is not None:
            self._usage = chunk.usage.to_usage()
            self.metrics.apply_usage(self._usage)
        if chunk.warning:
            self._warnings.append(chunk.warning)
            log_event(self._logger, "stream.vendor.warning", self.ctx, level=logging.WARNING, warning=chunk.warning)

        for position, choice in enumerate(chunk.choices):
            index = choice.index if choice.index is not None else position
            acc = self._choices.get(index)
            if acc is None:
                acc = ChunkDeltaAccumulator(index, self._mapper)
                self._choices[index] = acc
            events = acc.apply(choice.delta, choice.finish_reason, chunk_id=chunk.id)
            self._collect(acc)
            if events:
                self._record_emitted(len(events))
            yield from events

    def _terminate(self, outcome: StreamOutcome) -> List[StreamEvent]:
        self._outcome = outcome
        events: List[StreamEvent] = []
        if outcome is not StreamOutcome.CANCELLED:
            partial = outcome in _PARTIAL_OUTCOMES
            fallback = FinishReason.ERROR if partial else FinishReason.UNKNOWN
            for index in sorted(self._choices):
                acc = self._choices[index]
                if acc.state is AccumulatorState.EMPTY:
                    continue
                message, reason = acc.finalize(fallback)
                self._collect(acc)
                events.append(ChoiceFinalEvent(index, message, reason, partial))
        self._choices.clear()
        if self._t0 is not None:
            self.metrics.total_duration_ms = (self._clock() - self._t0) * 1000.0
        end: StreamEndEvent = finalize_stream(
            logger=self._logger,
            ctx=self.ctx,
            outcome=outcome,
            metrics=self.metrics,
            usage=self._usage,
            error=self._error,
            warnings=self._warnings,
            diagnostics=self._diagnostics,
        )
        events.append(end)
        return events

    def _drop(self, unit: Any, violation: Optional[SchemaViolation]) -> None:
        self.metrics.dropped += 1
        path = violation.path if violation else None
        message = violation.message if violation else "invalid unit"
        self._record(Diagnostic(code=ErrorCode.SCHEMA_VIOLATION, message=message, path=path, chunk_id=_unit_id(unit)))

    def _collect(self, acc: ChunkDeltaAccumulator) -> None:
        for diagnostic in acc.drain_diagnostics():
            self._record(diagnostic)

    def _record(self, diagnostic: Diagnostic) -> None:
        self._diagnostics.append(diagnostic)
        event = (
            "stream.chunk.dropped"
            if diagnostic.code is ErrorCode.SCHEMA_VIOLATION
            else "stream.protocol.inconsistency"
        )
        log_event(self._logger, event, self.ctx, level=logging.WARNING, **diagnostic.to_dict())

    def _record_emitted(self, count: int) -> None:
        if self.metrics.emitted == 0 and self._t0 is not None:
            self.metrics.time_to_first_token_ms = (self._clock() - self._t0) * 1000.0
        self.metrics.emitted += count

    def _start_clock(self) -> None:
        if self._t0 is None:
            self._t0 = self._clock()

    def _ensure_open(self, operation: str) -> None:
        if self._outcome is not None:
            raise WireError(
                code=ErrorCode.INVALID_STATE,
                message=f"{operation}() after stream ended ({self._outcome.value})",
                dialect=self.ctx.dialect,
            )


def accumulate_events(events: Iterable[StreamEvent]) -> ChatCompletion:
    """Fold an event sequence into a :class:`ChatCompletion`.

    Delta events are skipped (final events already carry the full messages).

    Raises:
        WireError: ``INVALID_STATE`` when the sequence has no ``StreamEndEvent``.
    """
    finals: List[ChoiceFinalEvent] = []
    end: Optional[StreamEndEvent] = None
    for event in events:
        if isinstance(event, ChoiceFinalEvent):
            finals.append(event)
        elif isinstance(event, StreamEndEvent):
            end = event
    if end is None:
        raise WireError(code=ErrorCode.INVALID_STATE, message="event sequence has no StreamEndEvent")
    choices = [
        ChoiceResult(index=f.choice_index, message=f.message, finish_reason=f.finish_reason, partial=f.partial)
        for f in sorted(finals, key=lambda f: f.choice_index)
    ]
    return ChatCompletion(
        id=end.response_id,
        model=end.model,
        choices=choices,
        usage=end.usage,
        error=end.error,
        warnings=list(end.warnings),
    )


def assemble_stream(
    units: Iterable[Any],
    cancellation_token: Optional[CancellationToken] = None,
    **kwargs: Any,
) -> ChatCompletion:
    """Run ``units`` through a fresh assembler and return the completion."""
    return accumulate_events(StreamAssembler(**kwargs).run(units, cancellation_token))


__all__ = [
    "StreamAssembler",
    "accumulate_events",
    "assemble_stream",
]
