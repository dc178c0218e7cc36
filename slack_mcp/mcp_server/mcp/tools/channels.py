from __future__ import annotations

from typing import Any

from ....slack import SlackClient
from ..session import McpSession
from .base import FunctionTool, ToolSpec, integer_prop, json_result, optional_str, require_args, string_prop


def make_list_channels_tool(client: SlackClient) -> FunctionTool:
    def _handler(session: McpSession, args: dict[str, Any]) -> dict[str, Any]:
        _ = session
        body = client.get_channels(args["limit"], optional_str(args, "cursor"))
        return json_result(body)

    return FunctionTool(
        spec=ToolSpec(
            name="slack_list_channels",
            description="List public channels in the workspace with pagination",
            input_schema={
                "type": "object",
                "properties": {
                    "limit": integer_prop("Maximum number of channels to return (default 100, max 200)", 100),
                    "cursor": string_prop("Pagination cursor for next page of results"),
                },
            },
        ),
        fn=_handler,
    )


def make_channel_history_tool(client: SlackClient) -> FunctionTool:
    def _handler(session: McpSession, args: dict[str, Any]) -> dict[str, Any]:
        _ = session
        require_args(args, "channel_id")
        return json_result(client.get_channel_history(args["channel_id"], args["limit"]))

    return FunctionTool(
        spec=ToolSpec(
            name="slack_get_channel_history",
            description="Get recent messages from a channel",
            input_schema={
                "type": "object",
                "properties": {
                    "channel_id": string_prop("The ID of the channel"),
                    "limit": integer_prop("Number of messages to retrieve (default 10)", 10),
                },
                "required": ["channel_id"],
            },
        ),
        fn=_handler,
    )


def make_tools(client: SlackClient) -> list[FunctionTool]:
    return [make_list_channels_tool(client), make_channel_history_tool(client)]
