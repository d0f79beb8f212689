"""
Per-choice delta folding.

``ChunkDeltaAccumulator`` turns the deltas addressed to one choice index into
a single assistant :class:`~chatwire.base.models.Message`. It never raises on
vendor input: anything inconsistent is merged best-effort and recorded as a
``PROTOCOL_INCONSISTENCY`` diagnostic. The only exception it raises is
``WireError(INVALID_STATE)`` when the caller reuses a consumed instance.

Tool-call index policy
----------------------
- An explicit ``index`` is used as-is.
- A fragment without ``index`` continues the tool call last touched on this
  choice (index 0 when none), which is how split argument fragments arrive
  from vendors that drop the field.
- Exception: a fragment without ``index`` whose ``id`` differs from the id
  of that last call opens a new call at ``max(index) + 1``. Mistral sends
  each complete call as one index-less fragment.

Scalar fields (``id``, ``name``)
--------------------------------
Null means "no update". A later value replaces an earlier one until argument
text has been appended to the call; after that the first value is kept.
"""
from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Tuple

from ...wire.chunk import ChunkDelta, ChunkToolCallDelta
from ..errors import Diagnostic, ErrorCode, WireError
from ..finish_reason import DEFAULT_MAPPER, FinishReasonMapper, merge_finish_reason
from ..logging import get_logger, log_event
from ..models import FinishReason, Message, ToolCall
from .accumulated_choice import AccumulatedChoice, AccumulatorState, ToolCallBuffer
from .events import DeltaEvent, ToolCallFragment

logger = get_logger("chatwire.stream")


def synthesize_tool_call_id(choice_index: int, tool_index: int) -> str:
    return f"call_{choice_index}_{tool_index}"


class ChunkDeltaAccumulator:
    """Folds the deltas of one choice into one assistant message.

    States move ``EMPTY -> ACCUMULATING -> FINALIZED``; a non-null finish
    reason finalizes the choice, and later deltas carrying content or tool
    calls are ignored (with a diagnostic). Trailing finish reasons still
    update the reason, except that a known reason is never replaced by
    ``UNKNOWN``.
    """

    def __init__(self, choice_index: int, mapper: Optional[FinishReasonMapper] = None) -> None:
        self._choice = AccumulatedChoice(index=choice_index)
        self._mapper = mapper or DEFAULT_MAPPER
        self._state = AccumulatorState.EMPTY
        self._consumed = False
        self._diagnostics: List[Diagnostic] = []
        self._chunk_id: Optional[str] = None

    # -- inspection --------------------------------------------------------
    @property
    def choice_index(self) -> int:
        return self._choice.index

    @property
    def state(self) -> AccumulatorState:
        return self._state

    @property
    def consumed(self) -> bool:
        return self._consumed

    @property
    def finish_reason(self) -> Optional[FinishReason]:
        return self._choice.finish_reason

    @property
    def text(self) -> str:
        return "".join(self._choice.text)

    def tool_call_buffers(self) -> List[ToolCallBuffer]:
        return sorted(self._choice.tool_calls.values(), key=lambda b: b.index)

    def drain_diagnostics(self) -> List[Diagnostic]:
        """Return diagnostics recorded since the last drain and forget them."""
        out, self._diagnostics = self._diagnostics, []
        return out

    # -- folding -----------------------------------------------------------
    def apply(
        self,
        delta: Optional[ChunkDelta] = None,
        finish_reason: Optional[str] = None,
        *,
        chunk_id: Optional[str] = None,
    ) -> List[DeltaEvent]:
        """Fold one choice delta (and its finish reason) into the state.

        Content and tool-call fragments are applied before the finish reason
        so a chunk that carries both is handled in one call. Returns the
        delta events produced, in application order.
        """
        self._ensure_not_consumed("apply")
        self._chunk_id = chunk_id
        events: List[DeltaEvent] = []
        if delta is not None:
            self._check_role(delta.role)
            if delta.content:
                events.extend(self._apply_text(delta.content))
            for fragment in delta.tool_calls or ():
                event = self._apply_tool_fragment(fragment)
                if event is not None:
                    events.append(event)
        if finish_reason is not None:
            self._apply_finish_reason(finish_reason)
        return events

    def _apply_text(self, text: str) -> List[DeltaEvent]:
        if self._state is AccumulatorState.FINALIZED:
            self._inconsistent("content delta after finish_reason ignored", "delta.content")
            return []
        self._choice.text.append(text)
        self._choice.text_written = True
        self._state = AccumulatorState.ACCUMULATING
        return [DeltaEvent(choice_index=self._choice.index, text=text)]

    def _apply_tool_fragment(self, fragment: ChunkToolCallDelta) -> Optional[DeltaEvent]:
        if self._state is AccumulatorState.FINALIZED:
            self._inconsistent("tool call delta after finish_reason ignored", "delta.tool_calls")
            return None
        fn = fragment.function
        name = fn.name if fn is not None else None
        arguments = fn.arguments if fn is not None else None
        if fragment.id is None and name is None and not arguments:
            return None

        index = self._resolve_index(fragment)
        choice = self._choice
        buf = choice.tool_calls.get(index)
        if buf is None:
            buf = ToolCallBuffer(index=index)
            choice.tool_calls[index] = buf
        if fragment.id is not None:
            self._set_scalar(buf, "id", fragment.id)
        if name is not None:
            self._set_scalar(buf, "name", name)
        if arguments:
            buf.append(arguments)
        choice.last_tool_index = index
        self._state = AccumulatorState.ACCUMULATING
        return DeltaEvent(
            choice_index=choice.index,
            tool_call=ToolCallFragment(index=index, id=fragment.id, name=name, arguments=arguments or ""),
        )

    def _resolve_index(self, fragment: ChunkToolCallDelta) -> int:
        if fragment.index is not None:
            return fragment.index
        choice = self._choice
        carried = choice.last_tool_index
        if carried is None:
            return choice.next_tool_index()
        current = choice.tool_calls.get(carried)
        if fragment.id is not None and current is not None and current.id is not None and fragment.id != current.id:
            return choice.next_tool_index()
        return carried

    def _set_scalar(self, buf: ToolCallBuffer, field_name: str, value: str) -> None:
        current = getattr(buf, field_name)
        if current is None or current == value:
            setattr(buf, field_name, value)
            return
        path = f"delta.tool_calls.{buf.index}." + ("id" if field_name == "id" else "function.name")
        if buf.has_arguments:
            self._inconsistent(
                f"tool call {field_name} changed from {current!r} to {value!r} after arguments started; keeping first",
                path,
            )
            return
        if field_name == "id":
            self._inconsistent(f"tool call id changed from {current!r} to {value!r}", path)
        setattr(buf, field_name, value)

    def _apply_finish_reason(self, token: str) -> None:
        mapped = self._mapper.map(token)
        if token and not self._mapper.is_known(token):
            log_event(
                logger,
                "stream.finish_reason.unmapped",
                level=logging.DEBUG,
                choice_index=self._choice.index,
                token=token,
            )
        self._choice.finish_reason = merge_finish_reason(self._choice.finish_reason, mapped)
        self._state = AccumulatorState.FINALIZED

    def _check_role(self, role: Optional[str]) -> None:
        if role is not None and role != "assistant":
            self._inconsistent(f"unexpected delta role {role!r}", "delta.role")

    # -- output ------------------------------------------------------------
    def finalize(self, fallback: FinishReason = FinishReason.UNKNOWN) -> Tuple[Message, FinishReason]:
        """Consume the state into ``(Message, FinishReason)``.

        ``fallback`` is used when no finish reason (or only ``UNKNOWN``) was
        received. Tool calls are ordered by index; a missing id is
        synthesized as ``call_<choice>_<index>`` and a missing name becomes
        ``""`` (both recorded as diagnostics).

        Raises:
            WireError: ``INVALID_STATE`` on a second call.
        """
        self._ensure_not_consumed("finalize")
        self._consumed = True
        choice = self._choice
        calls: List[ToolCall] = []
        for buf in sorted(choice.tool_calls.values(), key=lambda b: b.index):
            call_id = buf.id
            if call_id is None:
                call_id = synthesize_tool_call_id(choice.index, buf.index)
                self._inconsistent(f"tool call {buf.index} never received an id", f"delta.tool_calls.{buf.index}.id")
            if buf.name is None:
                self._inconsistent(f"tool call {buf.index} never received a name", f"delta.tool_calls.{buf.index}.function.name")
            calls.append(ToolCall(id=call_id, name=buf.name or "", arguments=buf.arguments_text()))
        content = choice.content()
        if content is None and not calls:
            content = ""
        reason = choice.finish_reason
        if reason is None or reason is FinishReason.UNKNOWN:
            reason = fallback
        return Message.assistant(content=content, tool_calls=calls), reason

    # -- helpers -----------------------------------------------------------
    def _ensure_not_consumed(self, operation: str) -> None:
        if self._consumed:
            raise WireError(
                code=ErrorCode.INVALID_STATE,
                message=f"{operation}() on a finalized accumulator for choice {self._choice.index}",
            )

    def _inconsistent(self, message: str, path: str) -> None:
        self._diagnostics.append(
            Diagnostic(
                code=ErrorCode.PROTOCOL_INCONSISTENCY,
                message=message,
                path=path,
                choice_index=self._choice.index,
                chunk_id=self._chunk_id,
            )
        )


def fold_deltas(
    choice_index: int,
    deltas: Iterable[Tuple[Optional[ChunkDelta], Optional[str]]],
    mapper: Optional[FinishReasonMapper] = None,
) -> Tuple[Message, FinishReason]:
    """Run ``(delta, finish_reason)`` pairs through a fresh accumulator."""
    acc = ChunkDeltaAccumulator(choice_index, mapper)
    for delta, finish_reason in deltas:
        acc.apply(delta, finish_reason)
    return acc.finalize()


__all__ = [
    "ChunkDeltaAccumulator",
    "fold_deltas",
    "synthesize_tool_call_id",
]
