from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Iterator


JsonDict = dict[str, Any]

TRACE_SCHEMA_VERSION = "trace.v1"
TOOL_SPAN_PREFIX = "tool."

# Event kinds a tool-call trace may contain (checked by strict validation).
ALLOWED_EVENT_KINDS: frozenset[str] = frozenset(
    {
        "tool.start",
        "tool.end",
        "tool.error",
        "slack.request",
        "slack.response",
        "blocks.compiled",
        "metric",
        "error",
        "warn.span_leak",
    }
)


def check_event_kind(kind: str) -> None:
    if kind not in ALLOWED_EVENT_KINDS:
        raise ValueError(f"invalid event.kind: {kind!r}")


def check_span_name(name: str) -> None:
    if not name.startswith(TOOL_SPAN_PREFIX):
        raise ValueError(f"invalid span.name (must start with {TOOL_SPAN_PREFIX!r}): {name!r}")


@dataclass(frozen=True)
class EventRecord:
    ts: float
    kind: str
    attrs: JsonDict = field(default_factory=dict)


@dataclass
class SpanRecord:
    span_id: str
    name: str
    parent_span_id: str | None
    start_ts: float
    end_ts: float | None = None
    status: str = "ok"  # ok|error
    attrs: JsonDict = field(default_factory=dict)
    events: list[EventRecord] = field(default_factory=list)

    def summary(self) -> JsonDict:
        """The span without its events (what sinks get on span end)."""
        return {
            "span_id": self.span_id,
            "parent_span_id": self.parent_span_id,
            "name": self.name,
            "status": self.status,
            "start_ts": self.start_ts,
            "end_ts": self.end_ts,
            "attrs": self.attrs,
        }


@dataclass
class TraceEnvelope:
    """Finished record of one tool call, written as one JSONL line."""

    trace_id: str
    start_ts: float
    end_ts: float
    trace_type: str = "tool_call"
    status: str = "ok"  # ok|error
    tool_name: str | None = None
    spans: list[SpanRecord] = field(default_factory=list)
    events: list[EventRecord] = field(default_factory=list)  # not bound to a span
    aggregates: JsonDict = field(default_factory=dict)
    schema_version: str = TRACE_SCHEMA_VERSION

    def to_dict(self) -> JsonDict:
        return asdict(self)

    def iter_events(self) -> Iterator[EventRecord]:
        for s in self.spans:
            yield from s.events
        yield from self.events

    def validate(self, *, strict: bool = True) -> None:
        if not self.trace_id:
            raise ValueError("trace_id missing")
        if not strict:
            return
        for s in self.spans:
            check_span_name(s.name)
        for ev in self.iter_events():
            check_event_kind(ev.kind)


def compute_aggregates(envelope: TraceEnvelope) -> JsonDict:
    kinds = [ev.kind for ev in envelope.iter_events()]
    return {
        "duration_ms": round((envelope.end_ts - envelope.start_ts) * 1000.0, 3),
        "span_count": len(envelope.spans),
        "error_span_count": sum(1 for s in envelope.spans if s.status == "error"),
        "slack_request_count": kinds.count("slack.request"),
    }
