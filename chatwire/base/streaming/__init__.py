"""Streaming package.

Exposes the per-choice accumulator, the stream assembler, its events and
metrics under a single namespace.
"""

from .accumulated_choice import AccumulatedChoice, AccumulatorState, ToolCallBuffer
from .stream_metrics import StreamMetrics
from .events import (
    ChoiceFinalEvent,
    DeltaEvent,
    StreamEndEvent,
    StreamEvent,
    StreamOutcome,
    ToolCallFragment,
)
from .accumulator import ChunkDeltaAccumulator, fold_deltas, synthesize_tool_call_id
from .stream_finalize import finalize_stream
from .assembler import StreamAssembler, accumulate_events, assemble_stream

__all__ = [
    "AccumulatedChoice",
    "AccumulatorState",
    "ToolCallBuffer",
    "StreamMetrics",
    "ChoiceFinalEvent",
    "DeltaEvent",
    "StreamEndEvent",
    "StreamEvent",
    "StreamOutcome",
    "ToolCallFragment",
    "ChunkDeltaAccumulator",
    "fold_deltas",
    "synthesize_tool_call_id",
    "finalize_stream",
    "StreamAssembler",
    "accumulate_events",
    "assemble_stream",
]
