from __future__ import annotations

from typing import Any

from ....slack import SlackClient
from ...jsonrpc.codec import INVALID_PARAMS
from ...jsonrpc.dispatcher import JsonRpcAppError
from ..session import McpSession
from .base import (
    THREAD_TS_DESCRIPTION,
    FunctionTool,
    ToolSpec,
    integer_prop,
    json_result,
    optional_str,
    require_args,
    string_prop,
)


_BLOCKS_PROP = {
    "type": "array",
    "description": "Block Kit blocks to send as-is instead of compiling them from text",
}
_MRKDWN_PROP = {
    "type": "boolean",
    "description": "Compile text into Block Kit blocks (default true); false sends plain text",
}


def _blocks_arg(args: dict[str, Any]) -> list[dict[str, Any]] | None:
    blocks = args.get("blocks")
    if blocks is None:
        return None
    if not all(isinstance(b, dict) for b in blocks):
        raise JsonRpcAppError(INVALID_PARAMS, "invalid param: blocks must be an array of objects")
    return blocks


def make_post_message_tool(client: SlackClient) -> FunctionTool:
    def _handler(session: McpSession, args: dict[str, Any]) -> dict[str, Any]:
        _ = session
        require_args(args, "channel_id", "text")
        body = client.post_message(
            args["channel_id"],
            args["text"],
            blocks=_blocks_arg(args),
            mrkdwn=args.get("mrkdwn"),
        )
        return json_result(body)

    return FunctionTool(
        spec=ToolSpec(
            name="slack_post_message",
            description="Post a new message to a Slack channel",
            input_schema={
                "type": "object",
                "properties": {
                    "channel_id": string_prop("The ID of the channel to post to"),
                    "text": string_prop("The message text to post (markdown is converted to Block Kit)"),
                    "blocks": _BLOCKS_PROP,
                    "mrkdwn": _MRKDWN_PROP,
                },
                "required": ["channel_id", "text"],
            },
        ),
        fn=_handler,
    )


def make_reply_to_thread_tool(client: SlackClient) -> FunctionTool:
    def _handler(session: McpSession, args: dict[str, Any]) -> dict[str, Any]:
        _ = session
        require_args(args, "channel_id", "thread_ts", "text")
        body = client.post_reply(
            args["channel_id"],
            args["thread_ts"],
            args["text"],
            blocks=_blocks_arg(args),
            mrkdwn=args.get("mrkdwn"),
        )
        return json_result(body)

    return FunctionTool(
        spec=ToolSpec(
            name="slack_reply_to_thread",
            description="Reply to a specific message thread in Slack",
            input_schema={
                "type": "object",
                "properties": {
                    "channel_id": string_prop("The ID of the channel containing the thread"),
                    "thread_ts": string_prop(THREAD_TS_DESCRIPTION),
                    "text": string_prop("The reply text"),
                    "blocks": _BLOCKS_PROP,
                    "mrkdwn": _MRKDWN_PROP,
                },
                "required": ["channel_id", "thread_ts", "text"],
            },
        ),
        fn=_handler,
    )


def make_add_reaction_tool(client: SlackClient) -> FunctionTool:
    def _handler(session: McpSession, args: dict[str, Any]) -> dict[str, Any]:
        _ = session
        require_args(args, "channel_id", "timestamp", "reaction")
        return json_result(client.add_reaction(args["channel_id"], args["timestamp"], args["reaction"]))

    return FunctionTool(
        spec=ToolSpec(
            name="slack_add_reaction",
            description="Add a reaction emoji to a message",
            input_schema={
                "type": "object",
                "properties": {
                    "channel_id": string_prop("The ID of the channel containing the message"),
                    "timestamp": string_prop("The timestamp of the message to react to"),
                    "reaction": string_prop("The name of the emoji reaction (without ::)"),
                },
                "required": ["channel_id", "timestamp", "reaction"],
            },
        ),
        fn=_handler,
    )


def make_thread_replies_tool(client: SlackClient) -> FunctionTool:
    def _handler(session: McpSession, args: dict[str, Any]) -> dict[str, Any]:
        _ = session
        require_args(args, "channel_id", "thread_ts")
        return json_result(client.get_thread_replies(args["channel_id"], args["thread_ts"]))

    return FunctionTool(
        spec=ToolSpec(
            name="slack_get_thread_replies",
            description="Get all replies in a message thread",
            input_schema={
                "type": "object",
                "properties": {
                    "channel_id": string_prop("The ID of the channel containing the thread"),
                    "thread_ts": string_prop(THREAD_TS_DESCRIPTION),
                },
                "required": ["channel_id", "thread_ts"],
            },
        ),
        fn=_handler,
    )


def make_search_messages_tool(client: SlackClient) -> FunctionTool:
    def _handler(session: McpSession, args: dict[str, Any]) -> dict[str, Any]:
        _ = session
        require_args(args, "query")

        channel_id = optional_str(args, "channel_id")
        channel_name = optional_str(args, "channel_name")
        if channel_id is None and channel_name is not None:
            channel_id = client.get_channel_id_by_name(channel_name)
            if channel_id is None:
                raise JsonRpcAppError(
                    INVALID_PARAMS,
                    f"Channel not found with name: {channel_name}",
                    {"channel_name": channel_name},
                )

        body = client.search_messages(
            args["query"],
            channel_id,
            args["count"],
            args["sort"],
            args["sort_dir"],
        )
        return json_result(body)

    return FunctionTool(
        spec=ToolSpec(
            name="slack_search_messages",
            description="Search messages in the Slack workspace",
            input_schema={
                "type": "object",
                "properties": {
                    "query": string_prop("Search query"),
                    "channel_id": string_prop("Restrict the search to this channel ID (optional)"),
                    "channel_name": string_prop(
                        "Restrict the search to this channel name (optional; channel_id takes precedence)"
                    ),
                    "count": integer_prop("Number of results to return (default 20, max 100)", 20),
                    "sort": string_prop("Sort by timestamp or score", enum=["timestamp", "score"], default="timestamp"),
                    "sort_dir": string_prop("Sort direction", enum=["asc", "desc"], default="desc"),
                },
                "required": ["query"],
            },
        ),
        fn=_handler,
    )


def make_tools(client: SlackClient) -> list[FunctionTool]:
    return [
        make_post_message_tool(client),
        make_reply_to_thread_tool(client),
        make_add_reaction_tool(client),
        make_thread_replies_tool(client),
        make_search_messages_tool(client),
    ]
