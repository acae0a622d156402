# Trace correlation: stamp records with the active OpenTelemetry span.

from __future__ import annotations
from typing import Any, Dict, Optional

from opentelemetry import trace

from .logger import Logger, Option
from .values import Value

TRACE_KEY = "trace"


def current_trace() -> Optional[Dict[str, Any]]:
    """Ids of the span active right now, or None outside any recording span."""
    ctx = trace.get_current_span().get_span_context()
    if not ctx.is_valid:
        return None
    return {
        "trace_id": trace.format_trace_id(ctx.trace_id),
        "span_id": trace.format_span_id(ctx.span_id),
        "sampled": ctx.trace_flags.sampled,
    }


def trace_context() -> Value:
    """A lazy value resolving to current_trace() each time a record is written."""
    return Value(current_trace)


def with_trace(logger: Logger, *options: Option, key: str = TRACE_KEY) -> Logger:
    return logger.new({key: trace_context()}, *options)
