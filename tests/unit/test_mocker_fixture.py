from __future__ import annotations

from slack_mcp.slack import SlackClient


def test_mocker_can_stub_slack_client_methods(mocker) -> None:
    client = SlackClient("xoxb-test", team_id="T1")
    patched = mocker.patch.object(client, "_get", return_value={"ok": True, "members": []})
    try:
        assert client.get_users() == {"ok": True, "members": []}
    finally:
        client.close()
    patched.assert_called_once_with("users.list", {"limit": "100", "team_id": "T1"})
