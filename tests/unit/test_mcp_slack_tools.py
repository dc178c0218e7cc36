from __future__ import annotations

import json

import httpx
import pytest

from slack_mcp.mcp_server.errors import UPSTREAM_ERROR
from slack_mcp.mcp_server.jsonrpc.codec import INVALID_PARAMS
from slack_mcp.mcp_server.jsonrpc.dispatcher import JsonRpcAppError
from slack_mcp.mcp_server.mcp.protocol import McpProtocol
from slack_mcp.mcp_server.mcp.session import McpSession
from slack_mcp.mcp_server.mcp.tools import build_registry
from slack_mcp.mcp_server.mcp.tools.base import FunctionTool, ToolSpec, require_args
from slack_mcp.mcp_server.mcp.tools.registry import ToolRegistry


EXPECTED_TOOLS = [
    "slack_add_reaction",
    "slack_get_channel_history",
    "slack_get_thread_replies",
    "slack_get_user_profile",
    "slack_get_users",
    "slack_list_channels",
    "slack_post_message",
    "slack_reply_to_thread",
    "slack_search_messages",
    "slack_send_code_snippet",
    "slack_send_error_message",
    "slack_send_info_message",
    "slack_send_success_message",
    "slack_send_warning_message",
]


@pytest.fixture
def proto(slack_client) -> McpProtocol:
    return McpProtocol(tools=build_registry(slack_client))


@pytest.fixture
def session() -> McpSession:
    return McpSession.new("L1")


def _call(proto: McpProtocol, session: McpSession, name: str, **args):
    return proto.handle_tools_call(session, name=name, args=args)


def test_tools_list_exposes_every_slack_tool(proto: McpProtocol, session: McpSession) -> None:
    tools = proto.handle_tools_list(session)["tools"]
    assert [t["name"] for t in tools] == EXPECTED_TOOLS
    for t in tools:
        assert t["description"]
        assert t["inputSchema"]["type"] == "object"


def test_initialize_echoes_protocol_version(proto: McpProtocol) -> None:
    out = proto.handle_initialize({"protocolVersion": "2025-03-26"})
    assert out["protocolVersion"] == "2025-03-26"
    assert out["serverInfo"] == {"name": "slack-mcp-server", "version": "1.0.0"}
    assert proto.handle_initialize(None)["protocolVersion"] == "2024-11-05"


def test_post_message_returns_slack_body(proto, session, slack_api) -> None:
    slack_api.responses["chat.postMessage"] = {"ok": True, "channel": "C1", "ts": "1.1"}
    out = _call(proto, session, "slack_post_message", channel_id="C1", text="# Hi\nthere")

    assert json.loads(out["content"][0]["text"]) == {"ok": True, "channel": "C1", "ts": "1.1"}
    sc = out["structuredContent"]
    assert sc["ts"] == "1.1"
    assert sc["tool"] == "slack_post_message"
    assert sc["trace_id"].startswith("trace_")
    assert slack_api.last_json()["blocks"][0]["type"] == "header"


def test_post_message_passes_explicit_blocks(proto, session, slack_api) -> None:
    blocks = [{"type": "divider"}]
    _call(proto, session, "slack_post_message", channel_id="C1", text="fallback", blocks=blocks, mrkdwn=True)
    assert slack_api.last_json()["blocks"] == blocks


def test_post_message_rejects_non_object_blocks(proto, session) -> None:
    with pytest.raises(JsonRpcAppError) as ei:
        _call(proto, session, "slack_post_message", channel_id="C1", text="x", blocks=["nope"])
    assert ei.value.code == INVALID_PARAMS


def test_reply_to_thread(proto, session, slack_api) -> None:
    _call(proto, session, "slack_reply_to_thread", channel_id="C1", thread_ts="1.5", text="ack", mrkdwn=False)
    body = slack_api.last_json()
    assert body["thread_ts"] == "1.5"
    assert "blocks" not in body


def test_list_channels_uses_schema_defaults(proto, session, slack_api) -> None:
    _call(proto, session, "slack_list_channels")
    assert slack_api.last_params()["limit"] == "100"
    assert "cursor" not in slack_api.last_params()


def test_channel_history_and_thread_replies(proto, session, slack_api) -> None:
    _call(proto, session, "slack_get_channel_history", channel_id="C1")
    assert slack_api.last_params() == {"channel": "C1", "limit": "10"}

    _call(proto, session, "slack_get_thread_replies", channel_id="C1", thread_ts="1.5")
    assert slack_api.method_of(slack_api.last) == "conversations.replies"


def test_users_tools(proto, session, slack_api) -> None:
    _call(proto, session, "slack_get_users", limit=5, cursor="next")
    assert slack_api.last_params() == {"limit": "5", "team_id": "T123", "cursor": "next"}

    _call(proto, session, "slack_get_user_profile", user_id="U1")
    assert slack_api.last_params()["user"] == "U1"


def test_add_reaction(proto, session, slack_api) -> None:
    _call(proto, session, "slack_add_reaction", channel_id="C1", timestamp="1.1", reaction="eyes")
    assert slack_api.last_json()["name"] == "eyes"


def test_search_messages_resolves_channel_name(proto, session, slack_api) -> None:
    slack_api.responses["conversations.list"] = {"ok": True, "channels": [{"id": "C7", "name": "ops"}]}
    _call(proto, session, "slack_search_messages", query="outage", channel_name="#ops")

    assert slack_api.methods() == ["conversations.list", "search.messages"]
    assert slack_api.last_params() == {
        "query": "outage",
        "count": "20",
        "sort": "timestamp",
        "sort_dir": "desc",
        "channel": "C7",
    }


def test_search_messages_channel_id_wins_over_name(proto, session, slack_api) -> None:
    _call(proto, session, "slack_search_messages", query="q", channel_id="C1", channel_name="ops")
    assert slack_api.methods() == ["search.messages"]


def test_search_messages_unknown_channel_name(proto, session, slack_api) -> None:
    slack_api.responses["conversations.list"] = {"ok": True, "channels": []}
    with pytest.raises(JsonRpcAppError) as ei:
        _call(proto, session, "slack_search_messages", query="q", channel_name="nope")
    assert ei.value.code == INVALID_PARAMS
    assert ei.value.message == "Channel not found with name: nope"


def test_search_messages_rejects_bad_sort(proto, session) -> None:
    with pytest.raises(JsonRpcAppError) as ei:
        _call(proto, session, "slack_search_messages", query="q", sort="newest")
    assert ei.value.code == INVALID_PARAMS


@pytest.mark.parametrize("kind", ["info", "success", "warning", "error"])
def test_status_message_tools(proto, session, slack_api, kind: str) -> None:
    _call(proto, session, f"slack_send_{kind}_message", channel_id="C1", title="Build", text="done")
    body = slack_api.last_json()
    assert body["text"] == "Build"
    assert [b["type"] for b in body["blocks"]] == ["header", "section", "divider"]


def test_code_snippet_tool(proto, session, slack_api) -> None:
    _call(proto, session, "slack_send_code_snippet", channel_id="C1", code="ls -la", language="sh", thread_ts="2.2")
    body = slack_api.last_json()
    assert body["thread_ts"] == "2.2"
    assert body["blocks"][1]["text"]["text"] == "```sh\nls -la```"


def test_unknown_tool_is_invalid_params(proto, session) -> None:
    with pytest.raises(JsonRpcAppError) as ei:
        _call(proto, session, "slack_delete_everything")
    assert ei.value.code == INVALID_PARAMS
    assert "trace_id" in ei.value.data


def test_missing_field_reports_schema_message(proto, session) -> None:
    with pytest.raises(JsonRpcAppError) as ei:
        _call(proto, session, "slack_post_message", channel_id="C1")
    assert ei.value.code == INVALID_PARAMS
    assert ei.value.data["message"] == "missing required field(s): text"


def test_empty_required_strings_are_rejected(proto, session, slack_api) -> None:
    with pytest.raises(JsonRpcAppError) as ei:
        _call(proto, session, "slack_add_reaction", channel_id="", timestamp="1.1", reaction="")
    assert ei.value.code == INVALID_PARAMS
    assert ei.value.message == "Missing required arguments: channel_id and reaction"
    assert ei.value.data["missing"] == ["channel_id", "reaction"]
    assert "trace_id" in ei.value.data
    assert slack_api.requests == []


def test_upstream_failure_maps_to_upstream_error(proto, session, slack_api) -> None:
    slack_api.responses["users.profile.get"] = httpx.Response(500, text="oops")
    with pytest.raises(JsonRpcAppError) as ei:
        _call(proto, session, "slack_get_user_profile", user_id="U1")
    assert ei.value.code == UPSTREAM_ERROR
    assert ei.value.data["status_code"] == 500
    assert ei.value.data["method"] == "users.profile.get"
    assert ei.value.data["trace_id"].startswith("trace_")


def test_tool_call_writes_one_trace(proto, session, recording_sink) -> None:
    _call(proto, session, "slack_get_users")
    (envelope,) = recording_sink.traces
    assert envelope.tool_name == "slack_get_users"
    assert envelope.status == "ok"
    assert [s.name for s in envelope.spans] == ["tool.slack_get_users"]
    envelope.validate(strict=True)


def test_registry_rejects_duplicate_names() -> None:
    tool = FunctionTool(spec=ToolSpec("t", "d", {"type": "object"}), fn=lambda s, a: {"text": ""})
    reg = ToolRegistry()
    reg.register(tool)
    with pytest.raises(ValueError):
        reg.register(tool)
    assert reg.names() == ["t"]


def test_require_args_single_missing() -> None:
    with pytest.raises(JsonRpcAppError) as ei:
        require_args({"a": "x"}, "a", "b")
    assert ei.value.message == "Missing required argument: b"
