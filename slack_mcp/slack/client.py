"""
Slack Web API client.

Thin and stateless: every operation builds a query or JSON body, calls one
endpoint and returns the decoded JSON body. A body with `ok: false` is
returned as-is; only transport failures and non-2xx statuses raise.
"""

from __future__ import annotations

import logging
import time
from typing import Any

import httpx

from ..core.blocks import blocks_to_dicts, code_snippet_blocks, status_blocks, text_to_blocks
from ..core.blocks.templates import DEFAULT_SNIPPET_TITLE
from ..observability.obs import api as obs
from .errors import SlackApiError, SlackTransportError


logger = logging.getLogger(__name__)

SLACK_API_BASE = "https://slack.com/api"

MAX_CHANNELS_LIMIT = 200
MAX_USERS_LIMIT = 200
MAX_SEARCH_COUNT = 100

JsonDict = dict[str, Any]


class SlackClient:
    def __init__(
        self,
        token: str,
        *,
        team_id: str = "",
        base_url: str = SLACK_API_BASE,
        timeout_s: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.team_id = team_id
        self.is_user_token = token.startswith("xoxp-")
        self._http = httpx.Client(
            base_url=base_url.rstrip("/") + "/",
            headers={
                "Authorization": f"Bearer {token}",
                "Content-Type": "application/json; charset=utf-8",
            },
            timeout=timeout_s,
            transport=transport,
        )

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "SlackClient":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    # --- transport ---

    def _call(self, http_method: str, method: str, *, params: JsonDict | None = None, body: JsonDict | None = None) -> JsonDict:
        obs.event("slack.request", {"method": method, "http_method": http_method})
        logger.debug("slack %s %s", http_method, method)
        started = time.perf_counter()
        try:
            resp = self._http.request(http_method, method, params=params, json=body)
        except httpx.HTTPError as e:
            raise SlackTransportError(f"{method}: {e}", method=method) from e

        obs.event("slack.response", {"method": method, "status_code": resp.status_code})
        obs.metric("slack.latency_ms", round((time.perf_counter() - started) * 1000.0, 3), {"method": method})
        if not resp.is_success:
            raise SlackApiError(
                f"{method}: HTTP {resp.status_code}",
                method=method,
                status_code=resp.status_code,
                data={"body": resp.text[:500]},
            )
        try:
            data = resp.json()
        except ValueError as e:
            raise SlackTransportError(f"{method}: response is not JSON", method=method) from e
        if not isinstance(data, dict):
            raise SlackTransportError(f"{method}: response root must be an object", method=method)
        return data

    def _get(self, method: str, params: JsonDict) -> JsonDict:
        return self._call("GET", method, params=params)

    def _post(self, method: str, body: JsonDict) -> JsonDict:
        return self._call("POST", method, body=body)

    # --- channels ---

    def get_channels(self, limit: int = 100, cursor: str | None = None) -> JsonDict:
        params: JsonDict = {
            "types": "public_channel",
            "exclude_archived": "true",
            "limit": str(min(limit, MAX_CHANNELS_LIMIT)),
            "team_id": self.team_id,
        }
        if cursor:
            params["cursor"] = cursor
        return self._get("conversations.list", params)

    def get_channel_history(self, channel_id: str, limit: int = 10) -> JsonDict:
        return self._get("conversations.history", {"channel": channel_id, "limit": str(limit)})

    def get_thread_replies(self, channel_id: str, thread_ts: str) -> JsonDict:
        return self._get("conversations.replies", {"channel": channel_id, "ts": thread_ts})

    def get_channel_id_by_name(self, channel_name: str) -> str | None:
        listing = self.get_channels(MAX_CHANNELS_LIMIT)
        if not listing.get("ok"):
            raise SlackApiError(
                f"Failed to get channels: {listing.get('error')}",
                method="conversations.list",
                data={"error": listing.get("error")},
            )
        bare = channel_name.replace("#", "")
        for channel in listing.get("channels") or []:
            if channel.get("name") in (channel_name, bare):
                return channel.get("id")
        return None

    # --- messages ---

    def _message_blocks(self, text: str, blocks: list[JsonDict] | None, mrkdwn: bool | None) -> list[JsonDict] | None:
        if blocks is not None:
            return blocks
        if mrkdwn is False:
            return None
        compiled = text_to_blocks(text)
        obs.event("blocks.compiled", {"block_count": len(compiled)})
        return compiled

    def _post_message(
        self,
        channel_id: str,
        text: str,
        *,
        thread_ts: str | None,
        blocks: list[JsonDict] | None,
        mrkdwn: bool | None,
    ) -> JsonDict:
        body: JsonDict = {"channel": channel_id, "text": text}
        if thread_ts:
            body["thread_ts"] = thread_ts
        out_blocks = self._message_blocks(text, blocks, mrkdwn)
        if out_blocks is not None:
            body["blocks"] = out_blocks
        body["as_user"] = self.is_user_token
        body["mrkdwn"] = mrkdwn is not False
        return self._post("chat.postMessage", body)

    def post_message(
        self,
        channel_id: str,
        text: str,
        *,
        blocks: list[JsonDict] | None = None,
        mrkdwn: bool | None = None,
    ) -> JsonDict:
        """Post `text` to a channel; blocks are compiled from `text` unless given or mrkdwn is off."""
        return self._post_message(channel_id, text, thread_ts=None, blocks=blocks, mrkdwn=mrkdwn)

    def post_reply(
        self,
        channel_id: str,
        thread_ts: str,
        text: str,
        *,
        blocks: list[JsonDict] | None = None,
        mrkdwn: bool | None = None,
    ) -> JsonDict:
        return self._post_message(channel_id, text, thread_ts=thread_ts, blocks=blocks, mrkdwn=mrkdwn)

    def add_reaction(self, channel_id: str, timestamp: str, reaction: str) -> JsonDict:
        return self._post("reactions.add", {"channel": channel_id, "timestamp": timestamp, "name": reaction})

    def search_messages(
        self,
        query: str,
        channel_id: str | None = None,
        count: int = 20,
        sort: str = "timestamp",
        sort_dir: str = "desc",
    ) -> JsonDict:
        params: JsonDict = {
            "query": query,
            "count": str(min(count, MAX_SEARCH_COUNT)),
            "sort": sort,
            "sort_dir": sort_dir,
        }
        if channel_id:
            params["channel"] = channel_id
        return self._get("search.messages", params)

    # --- users ---

    def get_users(self, limit: int = 100, cursor: str | None = None) -> JsonDict:
        params: JsonDict = {"limit": str(min(limit, MAX_USERS_LIMIT)), "team_id": self.team_id}
        if cursor:
            params["cursor"] = cursor
        return self._get("users.list", params)

    def get_user_profile(self, user_id: str) -> JsonDict:
        return self._get("users.profile.get", {"user": user_id, "include_labels": "true"})

    # --- templated messages ---

    def _send_blocks(self, channel_id: str, fallback: str, blocks: list[JsonDict], thread_ts: str | None) -> JsonDict:
        if thread_ts:
            return self.post_reply(channel_id, thread_ts, fallback, blocks=blocks)
        return self.post_message(channel_id, fallback, blocks=blocks)

    def send_status_message(
        self,
        kind: str,
        channel_id: str,
        title: str,
        text: str,
        thread_ts: str | None = None,
    ) -> JsonDict:
        """Send an info/success/warning/error layout; the title is the fallback text."""
        blocks = blocks_to_dicts(status_blocks(kind, title, text))
        return self._send_blocks(channel_id, title, blocks, thread_ts)

    def send_code_snippet(
        self,
        channel_id: str,
        title: str,
        code: str,
        language: str = "",
        thread_ts: str | None = None,
    ) -> JsonDict:
        blocks = blocks_to_dicts(code_snippet_blocks(title, code, language))
        return self._send_blocks(channel_id, title or DEFAULT_SNIPPET_TITLE, blocks, thread_ts)
