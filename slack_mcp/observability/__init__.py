"""Tracing and observability for tool calls."""
