"""User-facing observability API (span/event/metric)."""

from .api import event, get_sink, metric, set_sink, span, tool_trace

__all__ = ["span", "event", "metric", "set_sink", "get_sink", "tool_trace"]
