from __future__ import annotations

import pytest

from slack_mcp.core.settings import ConfigError, Settings
from slack_mcp.mcp_server.entry import build_client, build_dispatcher
from slack_mcp.mcp_server.errors import DEADLINE_EXCEEDED
from slack_mcp.mcp_server.jsonrpc import INVALID_PARAMS, JsonRpcRequest


def _req(method: str, params=None, req_id=1) -> JsonRpcRequest:
    return JsonRpcRequest(jsonrpc="2.0", method=method, params=params, id=req_id)


@pytest.fixture
def disp(slack_client):
    return build_dispatcher(slack_client, Settings())


def test_registers_mcp_methods(disp) -> None:
    assert disp.methods() == ["initialize", "notifications/initialized", "ping", "tools/call", "tools/list"]


def test_ping_and_initialize(disp) -> None:
    assert disp.handle(_req("ping")).result == {}
    init = disp.handle(_req("initialize", {"protocolVersion": "2024-11-05"})).result
    assert init["capabilities"] == {"tools": {"listChanged": False}}


def test_tools_call_round_trip(disp, slack_api) -> None:
    args = {"channel_id": "C1", "timestamp": "1.1", "reaction": "eyes"}
    resp = disp.handle(_req("tools/call", {"name": "slack_add_reaction", "arguments": args}))
    assert resp.error is None
    assert resp.result["structuredContent"]["client_level"] == "L1"
    assert slack_api.method_of(slack_api.last) == "reactions.add"


def test_tools_call_zero_timeout_is_deadline_exceeded(disp, slack_api) -> None:
    resp = disp.handle(_req("tools/call", {"name": "slack_get_users", "arguments": {}, "timeout_ms": 0}))
    assert resp.error.code == DEADLINE_EXCEEDED
    assert slack_api.requests == []


def test_tools_call_without_name_is_invalid_params(disp) -> None:
    resp = disp.handle(_req("tools/call", {"arguments": {}}))
    assert resp.error.code == INVALID_PARAMS


def test_build_client_needs_credentials(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("SLACK_TOKEN", "SLACK_BOT_TOKEN", "SLACK_TEAM_ID"):
        monkeypatch.delenv(name, raising=False)
    with pytest.raises(ConfigError):
        build_client(Settings())
