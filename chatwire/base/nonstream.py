"""
Non-streaming response body -> :class:`ChatCompletion`.

The body is validated strictly (a schema violation raises, since there is no
stream to keep going), then each choice's assistant message and finish
reason are converted. Undocumented ``error``/``warning`` fields are surfaced
on the result instead of being dropped.
"""
from __future__ import annotations

import logging
from typing import Any, List, Optional

from ..wire.chat_response import ChatCompletionResponse, ResponseChoice
from ..wire.validation import validate_response
from .errors import StreamError
from .finish_reason import DEFAULT_MAPPER, FinishReasonMapper
from .logging import LogContext, get_logger, log_event
from .models import ChatCompletion, ChoiceResult, FinishReason, Message, ToolCall

logger = get_logger("chatwire.response")


def _convert_choice(choice: ResponseChoice, mapper: FinishReasonMapper, partial: bool) -> ChoiceResult:
    calls = [
        ToolCall(id=tc.id, name=tc.function.name, arguments=tc.function.arguments)
        for tc in choice.message.tool_calls or ()
    ]
    content = choice.message.content
    if content is None and not calls:
        content = ""
    reason = mapper.map(choice.finish_reason)
    if partial and reason is FinishReason.UNKNOWN:
        reason = FinishReason.ERROR
    return ChoiceResult(
        index=choice.index,
        message=Message.assistant(content=content, tool_calls=calls),
        finish_reason=reason,
        partial=partial,
    )


def _warnings(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [str(v) for v in value]
    return [str(value)]


def assemble_completion(
    raw: Any,
    mapper: Optional[FinishReasonMapper] = None,
    *,
    dialect: Optional[str] = None,
) -> ChatCompletion:
    """Validate ``raw`` and convert it to a :class:`ChatCompletion`.

    Raises:
        WireError: ``SCHEMA_VIOLATION`` when ``raw`` is not a chat completion
            body.
    """
    mapper = mapper or DEFAULT_MAPPER
    body: ChatCompletionResponse = validate_response(raw).unwrap()
    ctx = LogContext(dialect=dialect, model=body.model, response_id=body.id)

    error: Optional[StreamError] = None
    if body.error is not None:
        error = StreamError.from_vendor_payload(body.error)
        log_event(logger, "response.vendor.error", ctx, level=logging.WARNING, error=error.to_dict())
    warnings = _warnings(body.warning)
    for warning in warnings:
        log_event(logger, "response.vendor.warning", ctx, level=logging.WARNING, warning=warning)

    choices = sorted(
        (_convert_choice(c, mapper, partial=error is not None) for c in body.choices),
        key=lambda c: c.index,
    )
    return ChatCompletion(
        id=body.id,
        model=body.model,
        choices=choices,
        usage=body.usage.to_usage() if body.usage is not None else None,
        error=error,
        warnings=warnings,
    )


class CompletionAssembler:
    """Reusable wrapper binding a mapper and dialect to ``assemble_completion``."""

    def __init__(self, mapper: Optional[FinishReasonMapper] = None, *, dialect: Optional[str] = None) -> None:
        self._mapper = mapper or DEFAULT_MAPPER
        self._dialect = dialect

    def assemble(self, raw: Any) -> ChatCompletion:
        return assemble_completion(raw, self._mapper, dialect=self._dialect)


__all__ = ["assemble_completion", "CompletionAssembler"]
