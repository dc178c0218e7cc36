"""MCP semantic layer: protocol handlers, sessions, envelopes, tools."""
from .protocol import McpProtocol
from .session import McpSession

__all__ = ["McpProtocol", "McpSession"]
