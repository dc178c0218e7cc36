"""MCP (JSON-RPC over stdio) server exposing Slack tools."""
