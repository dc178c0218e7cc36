"""Slack MCP server: Slack Web API tools and the text-to-Block Kit compiler."""

__version__ = "1.0.0"
