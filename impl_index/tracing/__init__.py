from impl_index.tracing.interface import (
    PageEvent,
    PageEventType,
    PageSummary,
    TraceCollector,
    summarize,
)
from impl_index.tracing.jsonl_tracer import JSONLTraceCollector

__all__ = [
    "JSONLTraceCollector",
    "PageEvent",
    "PageEventType",
    "PageSummary",
    "TraceCollector",
    "summarize",
]
