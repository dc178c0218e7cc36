from __future__ import annotations

from typing import Any

from ....slack import SlackClient
from ..session import McpSession
from .base import FunctionTool, ToolSpec, integer_prop, json_result, optional_str, require_args, string_prop


def make_get_users_tool(client: SlackClient) -> FunctionTool:
    def _handler(session: McpSession, args: dict[str, Any]) -> dict[str, Any]:
        _ = session
        return json_result(client.get_users(args["limit"], optional_str(args, "cursor")))

    return FunctionTool(
        spec=ToolSpec(
            name="slack_get_users",
            description="Get a list of all users in the workspace with their basic profile information",
            input_schema={
                "type": "object",
                "properties": {
                    "cursor": string_prop("Pagination cursor for next page of results"),
                    "limit": integer_prop("Maximum number of users to return (default 100, max 200)", 100),
                },
            },
        ),
        fn=_handler,
    )


def make_get_user_profile_tool(client: SlackClient) -> FunctionTool:
    def _handler(session: McpSession, args: dict[str, Any]) -> dict[str, Any]:
        _ = session
        require_args(args, "user_id")
        return json_result(client.get_user_profile(args["user_id"]))

    return FunctionTool(
        spec=ToolSpec(
            name="slack_get_user_profile",
            description="Get detailed profile information for a specific user",
            input_schema={
                "type": "object",
                "properties": {"user_id": string_prop("The ID of the user")},
                "required": ["user_id"],
            },
        ),
        fn=_handler,
    )


def make_tools(client: SlackClient) -> list[FunctionTool]:
    return [make_get_users_tool(client), make_get_user_profile_tool(client)]
