"""
Instrumentation API used by the client and the MCP layer.

Every call is a no-op unless a TraceContext is active, so library code can
instrument freely. Records are also forwarded to the configured sink.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator, Protocol

from ..trace.context import TraceContext
from ..trace.envelope import TOOL_SPAN_PREFIX, SpanRecord, TraceEnvelope


class ObsSink(Protocol):
    def on_event(self, record: dict[str, Any]) -> None: ...

    def on_metric(self, record: dict[str, Any]) -> None: ...

    def on_span_end(self, record: dict[str, Any]) -> None: ...

    def on_trace_end(self, envelope: TraceEnvelope) -> None: ...


_SINK: ObsSink | None = None


def set_sink(sink: ObsSink | None) -> None:
    global _SINK
    _SINK = sink


def get_sink() -> ObsSink | None:
    return _SINK


def _located(ctx: TraceContext, **fields: Any) -> dict[str, Any]:
    cur = ctx.current_span()
    return {"trace_id": ctx.trace_id, "span_id": cur.span_id if cur else None, **fields}


@contextmanager
def span(name: str, attrs: dict[str, Any] | None = None) -> Iterator[SpanRecord | None]:
    ctx = TraceContext.current()
    if ctx is None:
        yield None
        return

    with ctx.start_span(name, attrs) as s:
        try:
            yield s
        finally:
            if _SINK is not None:
                _SINK.on_span_end({"trace_id": ctx.trace_id, **s.summary()})


def event(kind: str, attrs: dict[str, Any] | None = None) -> None:
    ctx = TraceContext.current()
    if ctx is None:
        return
    ev = ctx.add_event(kind, attrs)
    if _SINK is not None:
        _SINK.on_event(_located(ctx, ts=ev.ts, kind=ev.kind, attrs=ev.attrs))


def metric(name: str, value: float | int, attrs: dict[str, Any] | None = None) -> None:
    """Record a numeric measurement; it is also kept in the trace as a `metric` event."""
    ctx = TraceContext.current()
    if ctx is None:
        return
    ev = ctx.add_event("metric", {"name": name, "value": value, **(attrs or {})})
    if _SINK is not None:
        _SINK.on_metric(_located(ctx, ts=ev.ts, name=name, value=value, attrs=dict(attrs or {})))


@contextmanager
def tool_trace(trace_id: str | None, tool_name: str) -> Iterator[TraceContext]:
    """
    Run one tool call inside its own trace: a `tool.<name>` span with
    tool.start/end/error events. The finished envelope goes to the sink.
    """
    ctx = TraceContext.new(trace_id, tool_name=tool_name)
    try:
        with TraceContext.activate(ctx), span(TOOL_SPAN_PREFIX + tool_name, {"tool": tool_name}):
            event("tool.start", {"tool": tool_name})
            try:
                yield ctx
            except Exception as e:
                event("tool.error", {"tool": tool_name, "exc_type": type(e).__name__, "message": str(e)})
                raise
            finally:
                event("tool.end", {"tool": tool_name})
    finally:
        envelope = ctx.finish()
        if _SINK is not None:
            _SINK.on_trace_end(envelope)
