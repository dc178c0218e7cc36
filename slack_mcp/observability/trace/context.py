from __future__ import annotations

import contextvars
import time
import traceback
import uuid
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Iterator

from .envelope import EventRecord, SpanRecord, TraceEnvelope, compute_aggregates


_ACTIVE: contextvars.ContextVar["TraceContext | None"] = contextvars.ContextVar("active_trace", default=None)


def _new_id(prefix: str) -> str:
    return f"{prefix}_{uuid.uuid4().hex}"


def _error_attrs(exc: BaseException) -> dict[str, Any]:
    return {
        "exc_type": type(exc).__name__,
        "message": str(exc),
        "traceback": "".join(traceback.format_exception(type(exc), exc, exc.__traceback__, limit=5)),
    }


@dataclass
class TraceContext:
    """Recorder for one tool call.

    Spans nest through a stack of open span ids; events attach to the
    innermost open span, or to the trace itself when none is open.
    `finish()` freezes everything into a TraceEnvelope.
    """

    trace_id: str
    start_ts: float
    trace_type: str = "tool_call"
    tool_name: str | None = None
    _spans: dict[str, SpanRecord] = field(default_factory=dict)  # in start order
    _open: list[str] = field(default_factory=list)
    _events: list[EventRecord] = field(default_factory=list)

    @classmethod
    def new(
        cls,
        trace_id: str | None = None,
        *,
        trace_type: str = "tool_call",
        tool_name: str | None = None,
    ) -> "TraceContext":
        return cls(
            trace_id=trace_id or _new_id("trace"),
            start_ts=time.time(),
            trace_type=trace_type,
            tool_name=tool_name,
        )

    @classmethod
    def current(cls) -> "TraceContext | None":
        return _ACTIVE.get()

    @classmethod
    @contextmanager
    def activate(cls, ctx: "TraceContext") -> Iterator["TraceContext"]:
        token = _ACTIVE.set(ctx)
        try:
            yield ctx
        finally:
            _ACTIVE.reset(token)

    def current_span(self) -> SpanRecord | None:
        return self._spans[self._open[-1]] if self._open else None

    @contextmanager
    def start_span(self, name: str, attrs: dict[str, Any] | None = None) -> Iterator[SpanRecord]:
        parent = self.current_span()
        s = SpanRecord(
            span_id=_new_id("span"),
            name=name,
            parent_span_id=parent.span_id if parent else None,
            start_ts=time.time(),
            attrs=dict(attrs or {}),
        )
        self._spans[s.span_id] = s
        self._open.append(s.span_id)
        try:
            yield s
        except Exception as e:
            s.status = "error"
            self.add_event("error", _error_attrs(e))
            raise
        finally:
            if self._open and self._open[-1] == s.span_id:
                self._open.pop()
            s.end_ts = time.time()

    def add_event(self, kind: str, attrs: dict[str, Any] | None = None) -> EventRecord:
        ev = EventRecord(ts=time.time(), kind=kind, attrs=dict(attrs or {}))
        cur = self.current_span()
        (cur.events if cur is not None else self._events).append(ev)
        return ev

    def _close_leaked_spans(self) -> None:
        if not self._open:
            return
        now = time.time()
        self._events.append(EventRecord(ts=now, kind="warn.span_leak", attrs={"open_span_count": len(self._open)}))
        for span_id in reversed(self._open):
            s = self._spans[span_id]
            if s.end_ts is None:
                s.status = "error"
                s.end_ts = now
        self._open.clear()

    def finish(self) -> TraceEnvelope:
        self._close_leaked_spans()
        spans = list(self._spans.values())
        envelope = TraceEnvelope(
            trace_id=self.trace_id,
            start_ts=self.start_ts,
            end_ts=time.time(),
            trace_type=self.trace_type,
            status="error" if any(s.status == "error" for s in spans) else "ok",
            tool_name=self.tool_name,
            spans=spans,
            events=list(self._events),
        )
        envelope.aggregates = compute_aggregates(envelope)
        return envelope
