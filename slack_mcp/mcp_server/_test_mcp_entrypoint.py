"""Stdio server wired to a canned Slack API (used by the integration tests)."""

from __future__ import annotations

import json
import os

import httpx

from .entry import serve_stdio


def _handler(request: httpx.Request) -> httpx.Response:
    method = request.url.path.rsplit("/", 1)[-1]
    if method == "chat.postMessage":
        body = json.loads(request.content or b"{}")
        return httpx.Response(
            200,
            json={"ok": True, "channel": body.get("channel"), "ts": "1700000000.000100", "message": body},
        )
    if method == "conversations.list":
        return httpx.Response(200, json={"ok": True, "channels": [{"id": "C1", "name": "general"}]})
    if method == "users.profile.get":
        return httpx.Response(500, text="upstream down")
    return httpx.Response(200, json={"ok": False, "error": "unknown_method"})


def main() -> None:
    os.environ.setdefault("SLACK_TOKEN", "xoxb-test")
    os.environ.setdefault("SLACK_TEAM_ID", "T1")
    serve_stdio(transport=httpx.MockTransport(_handler))


if __name__ == "__main__":  # pragma: no cover
    main()
