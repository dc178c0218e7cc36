from __future__ import annotations

import json
from collections.abc import Generator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Union

import httpx
import pytest

from slack_mcp.observability.obs import api as obs
from slack_mcp.observability.trace.envelope import TraceEnvelope
from slack_mcp.slack import SlackClient


@pytest.fixture
def tmp_workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """
    Provide an isolated working directory for tests that write to disk using
    relative paths.
    """
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def mock_clock(monkeypatch: pytest.MonkeyPatch) -> float:
    """Freeze time.time() to a deterministic value."""
    import time

    fixed = 1_700_000_000.0
    monkeypatch.setattr(time, "time", lambda: fixed)
    return fixed


Canned = Union[dict[str, Any], httpx.Response, Callable[[httpx.Request], httpx.Response]]


@dataclass
class FakeSlackApi:
    """
    Canned Slack Web API behind httpx.MockTransport.

    `responses` maps an API method (e.g. "chat.postMessage") to a JSON body,
    a ready httpx.Response, or a callable; unknown methods answer {"ok": true}.
    """

    responses: dict[str, Canned] = field(default_factory=dict)
    requests: list[httpx.Request] = field(default_factory=list)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        canned = self.responses.get(self.method_of(request), {"ok": True})
        if isinstance(canned, httpx.Response):
            return canned
        if callable(canned):
            return canned(request)
        return httpx.Response(200, json=canned)

    @staticmethod
    def method_of(request: httpx.Request) -> str:
        return request.url.path.rsplit("/", 1)[-1]

    @property
    def last(self) -> httpx.Request:
        assert self.requests, "no request was sent"
        return self.requests[-1]

    def last_params(self) -> dict[str, str]:
        return dict(self.last.url.params)

    def last_json(self) -> dict[str, Any]:
        return json.loads(self.last.content)

    def methods(self) -> list[str]:
        return [self.method_of(r) for r in self.requests]


@pytest.fixture
def slack_api() -> FakeSlackApi:
    return FakeSlackApi()


@pytest.fixture
def slack_client(slack_api: FakeSlackApi) -> Generator[SlackClient, None, None]:
    client = SlackClient("xoxb-test", team_id="T123", transport=httpx.MockTransport(slack_api.handler))
    try:
        yield client
    finally:
        client.close()


@dataclass
class RecordingSink:
    events: list[dict[str, Any]] = field(default_factory=list)
    metrics: list[dict[str, Any]] = field(default_factory=list)
    spans: list[dict[str, Any]] = field(default_factory=list)
    traces: list[TraceEnvelope] = field(default_factory=list)

    def on_event(self, record: dict[str, Any]) -> None:
        self.events.append(record)

    def on_metric(self, record: dict[str, Any]) -> None:
        self.metrics.append(record)

    def on_span_end(self, record: dict[str, Any]) -> None:
        self.spans.append(record)

    def on_trace_end(self, envelope: TraceEnvelope) -> None:
        self.traces.append(envelope)


@pytest.fixture
def recording_sink() -> Generator[RecordingSink, None, None]:
    sink = RecordingSink()
    prev = obs.get_sink()
    obs.set_sink(sink)
    try:
        yield sink
    finally:
        obs.set_sink(prev)


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """
    Default behavior: only run unit tests.

    If the user explicitly provides `-m ...`, we respect it and do not apply
    any extra deselection logic.
    """
    if config.option.markexpr:
        return

    deselect: list[pytest.Item] = []
    keep: list[pytest.Item] = []

    for item in items:
        if item.get_closest_marker("integration") or item.get_closest_marker("e2e"):
            deselect.append(item)
        else:
            keep.append(item)

    if deselect:
        config.hook.pytest_deselected(items=deselect)
        items[:] = keep
