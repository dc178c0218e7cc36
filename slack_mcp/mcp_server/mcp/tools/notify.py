from __future__ import annotations

from typing import Any

from ....slack import SlackClient
from ..session import McpSession
from .base import FunctionTool, ToolSpec, json_result, optional_str, require_args, string_prop


_STATUS_DESCRIPTIONS = {
    "info": "Send an informational message (header, body, divider)",
    "success": "Send a success message (header with a check mark, body, divider)",
    "warning": "Send a warning message (header with a warning sign, body, divider)",
    "error": "Send an error message (header with a cross, body, divider)",
}


def make_status_tool(client: SlackClient, kind: str) -> FunctionTool:
    def _handler(session: McpSession, args: dict[str, Any]) -> dict[str, Any]:
        _ = session
        require_args(args, "channel_id", "title", "text")
        body = client.send_status_message(
            kind,
            args["channel_id"],
            args["title"],
            args["text"],
            optional_str(args, "thread_ts"),
        )
        return json_result(body)

    return FunctionTool(
        spec=ToolSpec(
            name=f"slack_send_{kind}_message",
            description=_STATUS_DESCRIPTIONS[kind],
            input_schema={
                "type": "object",
                "properties": {
                    "channel_id": string_prop("Destination channel ID"),
                    "title": string_prop("Message title"),
                    "text": string_prop("Message body (Slack mrkdwn)"),
                    "thread_ts": string_prop("Thread timestamp to reply to (optional)"),
                },
                "required": ["channel_id", "title", "text"],
            },
        ),
        fn=_handler,
    )


def make_code_snippet_tool(client: SlackClient) -> FunctionTool:
    def _handler(session: McpSession, args: dict[str, Any]) -> dict[str, Any]:
        _ = session
        require_args(args, "channel_id", "code")
        body = client.send_code_snippet(
            args["channel_id"],
            optional_str(args, "title") or "",
            args["code"],
            optional_str(args, "language") or "",
            optional_str(args, "thread_ts"),
        )
        return json_result(body)

    return FunctionTool(
        spec=ToolSpec(
            name="slack_send_code_snippet",
            description="Send a code snippet",
            input_schema={
                "type": "object",
                "properties": {
                    "channel_id": string_prop("Destination channel ID"),
                    "title": string_prop("Snippet title"),
                    "code": string_prop("Snippet source code"),
                    "language": string_prop("Code language (optional)"),
                    "thread_ts": string_prop("Thread timestamp to reply to (optional)"),
                },
                "required": ["channel_id", "code"],
            },
        ),
        fn=_handler,
    )


def make_tools(client: SlackClient) -> list[FunctionTool]:
    tools = [make_status_tool(client, kind) for kind in ("info", "success", "warning", "error")]
    tools.append(make_code_snippet_tool(client))
    return tools
