"""Slack tools exposed over MCP."""
from __future__ import annotations

from ....slack import SlackClient
from . import channels, messages, notify, users
from .base import FunctionTool, Tool, ToolSpec
from .registry import ToolRegistry


def build_slack_tools(client: SlackClient) -> list[FunctionTool]:
    return [
        *channels.make_tools(client),
        *messages.make_tools(client),
        *users.make_tools(client),
        *notify.make_tools(client),
    ]


def build_registry(client: SlackClient) -> ToolRegistry:
    registry = ToolRegistry()
    registry.register_all(build_slack_tools(client))
    return registry


__all__ = ["FunctionTool", "Tool", "ToolSpec", "ToolRegistry", "build_slack_tools", "build_registry"]
