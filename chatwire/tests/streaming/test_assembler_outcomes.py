"""StreamAssembler termination paths and side channels.

Each test feeds decoded chunk mappings (what a transport yields after SSE
framing and JSON decoding) and checks the emitted events.
"""
from __future__ import annotations

import pytest

from chatwire.base.errors import ErrorCode, WireError
from chatwire.base.models import FinishReason, Usage
from chatwire.base.streaming import (
    ChoiceFinalEvent,
    DeltaEvent,
    StreamAssembler,
    StreamEndEvent,
    StreamOutcome,
    accumulate_events,
)


def _finals(events):
    return [e for e in events if isinstance(e, ChoiceFinalEvent)]


def _end(events) -> StreamEndEvent:
    ends = [e for e in events if isinstance(e, StreamEndEvent)]
    assert len(ends) == 1  # nosec B101 - pytest assert in tests
    assert events[-1] is ends[0]  # nosec B101 - pytest assert in tests
    return ends[0]


def test_usage_trailer_after_finish_terminates_without_touching_choices(chunk, choice):
    asm = StreamAssembler(dialect="openai")
    events = []
    events += asm.feed(chunk([choice({"role": "assistant", "content": "Hi"})]))
    events += asm.feed(chunk([choice({}, finish_reason="stop")]))
    trailer = asm.feed(chunk([], usage={"prompt_tokens": 9, "completion_tokens": 2, "total_tokens": 11}))
    events += trailer

    finals = _finals(trailer)
    end = _end(events)

    assert [e.text for e in events if isinstance(e, DeltaEvent)] == ["Hi"]  # nosec B101
    assert len(finals) == 1  # nosec B101
    assert finals[0].message.content == "Hi"  # nosec B101
    assert finals[0].finish_reason is FinishReason.STOP  # nosec B101
    assert finals[0].partial is False  # nosec B101
    assert end.outcome is StreamOutcome.COMPLETED  # nosec B101
    assert end.usage == Usage(prompt_tokens=9, completion_tokens=2, total_tokens=11)  # nosec B101
    assert end.metrics.tokens == {"prompt": 9, "completion": 2, "total": 11}  # nosec B101
    assert asm.terminated  # nosec B101


def test_multi_choice_interleaved_and_ordered_by_index(chunk, choice):
    asm = StreamAssembler()
    asm.feed(chunk([choice({"content": "B1"}, index=1), choice({"content": "A1"}, index=0)]))
    asm.feed(chunk([choice({"content": "A2"}, index=0, finish_reason="stop")]))
    asm.feed(chunk([choice({"content": "B2"}, index=1, finish_reason="length")]))
    events = asm.finish()

    finals = _finals(events)
    assert [f.choice_index for f in finals] == [0, 1]  # nosec B101
    assert [f.message.content for f in finals] == ["A1A2", "B1B2"]  # nosec B101
    assert [f.finish_reason for f in finals] == [FinishReason.STOP, FinishReason.LENGTH]  # nosec B101


def test_missing_choice_index_uses_array_position(chunk, choice):
    asm = StreamAssembler(dialect="openrouter")
    asm.feed(chunk([choice({"content": "x"}, index=None)]))
    events = asm.finish()
    assert _finals(events)[0].choice_index == 0  # nosec B101


def test_unfinished_choice_gets_unknown_reason(chunk, choice):
    asm = StreamAssembler()
    asm.feed(chunk([choice({"content": "cut"})]))
    finals = _finals(asm.finish())
    assert finals[0].finish_reason is FinishReason.UNKNOWN  # nosec B101
    assert finals[0].message.content == "cut"  # nosec B101


def test_done_sentinel_completes(chunk, choice):
    asm = StreamAssembler()
    asm.feed(chunk([choice({"content": "ok"}, finish_reason="stop")]))
    events = asm.feed("[DONE]")
    assert _end(events).outcome is StreamOutcome.COMPLETED  # nosec B101
    assert len(_finals(events)) == 1  # nosec B101


def test_done_sentinel_as_bytes():
    asm = StreamAssembler()
    events = asm.feed(b"[DONE]\n")
    assert _end(events).ok  # nosec B101
    assert _finals(events) == []  # nosec B101


def test_malformed_chunk_is_dropped_and_stream_continues(chunk, choice, log_events):
    asm = StreamAssembler(dialect="togetherai")
    asm.feed(chunk([choice({"content": "keep "})]))
    assert asm.feed({"choices": [], "object": "chat.completion.chunk"}) == []  # nosec B101
    assert asm.feed(["not", "a", "chunk"]) == []  # nosec B101
    asm.feed(chunk([choice({"content": "going"}, finish_reason="stop")]))
    events = asm.finish()

    end = _end(events)
    diagnostics = end.diagnostics
    assert _finals(events)[0].message.content == "keep going"  # nosec B101
    assert end.metrics.received == 4  # nosec B101
    assert end.metrics.dropped == 2  # nosec B101
    assert [d.code for d in diagnostics] == [ErrorCode.SCHEMA_VIOLATION] * 2  # nosec B101
    assert diagnostics[0].path == "id"  # nosec B101
    dropped = [e for e in log_events if e.get("event") == "stream.chunk.dropped"]
    assert len(dropped) == 2  # nosec B101
    assert dropped[0]["dialect"] == "togetherai"  # nosec B101


def test_unknown_object_tag_is_a_schema_violation(chunk, choice):
    asm = StreamAssembler()
    asm.feed(chunk([choice({"content": "x"})], object="text_completion"))
    events = asm.finish()
    end = _end(events)
    assert end.diagnostics[0].path == "object"  # nosec B101
    assert _finals(events) == []  # nosec B101


def test_vendor_error_keeps_partial_content(chunk, choice, log_events):
    asm = StreamAssembler(dialect="openrouter")
    asm.feed(chunk([choice({"content": "Par"})]))
    events = asm.feed(
        chunk(
            [choice({"content": "tial"})],
            error={"message": "upstream overloaded", "type": "server_error", "code": 502},
        )
    )

    finals = _finals(events)
    end = _end(events)
    assert [e.text for e in events if isinstance(e, DeltaEvent)] == ["tial"]  # nosec B101
    assert finals[0].message.content == "Partial"  # nosec B101
    assert finals[0].partial is True  # nosec B101
    assert finals[0].finish_reason is FinishReason.ERROR  # nosec B101
    assert end.outcome is StreamOutcome.VENDOR_ERROR  # nosec B101
    assert end.error.code is ErrorCode.VENDOR_ERROR  # nosec B101
    assert end.error.message == "upstream overloaded"  # nosec B101
    assert end.error.vendor_code == "502"  # nosec B101
    assert not end.ok  # nosec B101
    names = [e.get("event") for e in log_events]
    assert "stream.vendor.error" in names  # nosec B101
    assert names[-1] == "stream.end"  # nosec B101


def test_vendor_error_as_bare_string(chunk):
    asm = StreamAssembler()
    events = asm.feed(chunk([], error="rate limited"))
    assert _end(events).error.message == "rate limited"  # nosec B101


def test_known_reason_survives_vendor_error(chunk, choice):
    asm = StreamAssembler()
    asm.feed(chunk([choice({"content": "done"}, finish_reason="stop")]))
    events = asm.feed(chunk([], error={"message": "late failure"}))
    final = _finals(events)[0]
    assert final.finish_reason is FinishReason.STOP  # nosec B101
    assert final.partial is True  # nosec B101


def test_warnings_are_collected(chunk, choice, log_events):
    asm = StreamAssembler()
    asm.feed(chunk([choice({"content": "a"})], warning="model deprecated"))
    end = _end(asm.finish())
    assert end.warnings == ["model deprecated"]  # nosec B101
    assert any(e.get("event") == "stream.vendor.warning" for e in log_events)  # nosec B101


def test_last_non_null_usage_wins(chunk, choice):
    asm = StreamAssembler()
    asm.feed(chunk([choice({"content": "a"})], usage={"prompt_tokens": 1, "completion_tokens": 1}))
    asm.feed(chunk([choice({"content": "b"}, finish_reason="stop")], usage=None))
    asm.feed(chunk([choice({}, finish_reason="stop")], usage={"prompt_tokens": 5, "completion_tokens": 7}))
    end = _end(asm.finish())
    assert end.usage == Usage(prompt_tokens=5, completion_tokens=7, total_tokens=12)  # nosec B101


def test_response_id_and_model_come_from_first_chunk(chunk, choice):
    asm = StreamAssembler(model="requested")
    asm.feed(chunk([choice({"content": "a"})], chunk_id="chatcmpl-A", model="served-1"))
    asm.feed(chunk([choice({"content": "b"})], chunk_id="chatcmpl-B", model=None))
    end = _end(asm.finish())
    assert end.response_id == "chatcmpl-A"  # nosec B101
    assert end.model == "served-1"  # nosec B101


def test_cancel_discards_choices(chunk, choice, log_events):
    asm = StreamAssembler()
    asm.feed(chunk([choice({"content": "half"})]))
    events = asm.cancel("user pressed stop")

    assert len(events) == 1  # nosec B101
    end = events[0]
    assert end.outcome is StreamOutcome.CANCELLED  # nosec B101
    assert end.error.code is ErrorCode.CANCELLED  # nosec B101
    assert end.error.message == "user pressed stop"  # nosec B101
    assert asm.cancel() == []  # nosec B101
    cancelled = [e for e in log_events if e.get("event") == "stream.cancelled"]
    assert cancelled and cancelled[0]["outcome"] == "cancelled"  # nosec B101


def test_done_after_usage_trailer_is_ignored(chunk, choice):
    asm = StreamAssembler(dialect="openai")
    asm.feed(chunk([choice({"content": "Hi"}, finish_reason="stop")]))
    ended = asm.feed(chunk([], usage={"prompt_tokens": 4, "completion_tokens": 1, "total_tokens": 5}))

    assert _end(ended).outcome is StreamOutcome.COMPLETED  # nosec B101
    assert asm.feed("[DONE]") == []  # nosec B101
    assert asm.feed(b"[DONE]") == []  # nosec B101
    assert asm.diagnostics == []  # nosec B101
    assert asm.metrics.received == 2  # nosec B101


def test_done_after_vendor_error_is_ignored(chunk):
    asm = StreamAssembler(dialect="openrouter")
    asm.feed(chunk([], error={"message": "provider returned error"}))
    assert asm.feed("[DONE]") == []  # nosec B101
    assert asm.outcome is StreamOutcome.VENDOR_ERROR  # nosec B101


def test_late_chunk_is_ignored_with_diagnostic(chunk, choice, log_events):
    asm = StreamAssembler()
    asm.finish()
    assert asm.feed(chunk([choice({"content": "late"})], chunk_id="chatcmpl-late")) == []  # nosec B101

    diagnostics = asm.diagnostics
    assert [d.code for d in diagnostics] == [ErrorCode.PROTOCOL_INCONSISTENCY]  # nosec B101
    assert diagnostics[0].chunk_id == "chatcmpl-late"  # nosec B101
    assert any(e.get("event") == "stream.protocol.inconsistency" for e in log_events)  # nosec B101


def test_finish_after_end_raises():
    asm = StreamAssembler()
    asm.finish()
    with pytest.raises(WireError) as info:
        asm.finish()
    assert info.value.code is ErrorCode.INVALID_STATE  # nosec B101
    with pytest.raises(WireError):
        asm.fail(ConnectionError("late"))


def test_end_log_carries_normalized_keys(chunk, choice, log_events):
    asm = StreamAssembler(dialect="openai", request_id="req-1")
    asm.feed(chunk([choice({"content": "a"}, finish_reason="stop")], usage={"prompt_tokens": 2, "completion_tokens": 1}))
    asm.finish()
    end_logs = [e for e in log_events if e.get("event") == "stream.end"]
    assert len(end_logs) == 1  # nosec B101
    payload = end_logs[0]
    for key in ("structured", "phase", "emitted", "tokens"):
        assert key in payload  # nosec B101
    assert payload["phase"] == "finalize"  # nosec B101
    assert payload["emitted"] is True  # nosec B101
    assert payload["tokens"] == {"prompt": 2, "completion": 1, "total": 3}  # nosec B101
    assert payload["request_id"] == "req-1"  # nosec B101
    assert payload["level"] == "INFO"  # nosec B101


def test_accumulate_events_builds_completion(chunk, choice):
    asm = StreamAssembler()
    events = list(asm.feed(chunk([choice({"content": "x"}, finish_reason="stop")], chunk_id="resp-1")))
    events += asm.finish()
    completion = accumulate_events(events)
    assert completion.ok  # nosec B101
    assert completion.id == "resp-1"  # nosec B101
    assert completion.first_message().content == "x"  # nosec B101


def test_accumulate_events_requires_end_event():
    with pytest.raises(WireError) as info:
        accumulate_events([DeltaEvent(choice_index=0, text="x")])
    assert info.value.code is ErrorCode.INVALID_STATE  # nosec B101
