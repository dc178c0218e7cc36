from __future__ import annotations

import logging
import sys
from pathlib import Path

import httpx
from dotenv import load_dotenv

from ..core.settings import ConfigError, Settings, load_credentials, load_settings
from ..observability.obs import api as obs
from ..observability.sinks.jsonl import JsonlSink
from ..slack import SlackClient
from .errors import map_exception_to_jsonrpc
from .jsonrpc import Dispatcher, JsonRpcRequest, StdioTransport
from .mcp import McpProtocol, McpSession
from .mcp.tools import build_registry


logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    # stdout carries JSON-RPC frames; everything else goes to stderr.
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_observability(settings: Settings) -> JsonlSink:
    sink = JsonlSink(settings.paths.logs_dir)
    obs.set_sink(sink)
    return sink


def build_client(settings: Settings, *, transport: httpx.BaseTransport | None = None) -> SlackClient:
    creds = load_credentials(settings)
    return SlackClient(
        creds.token,
        team_id=creds.team_id,
        base_url=settings.slack.api_base_url,
        timeout_s=settings.slack.timeout_s,
        transport=transport,
    )


def build_dispatcher(client: SlackClient, settings: Settings) -> Dispatcher:
    """Wire MCP methods to a Dispatcher for one stdio session."""
    session = McpSession.new(client_level=settings.server.client_level)
    proto = McpProtocol(
        tools=build_registry(client),
        server_name=settings.server.name,
        server_version=settings.server.version,
    )

    disp = Dispatcher()
    disp.error_mapper = map_exception_to_jsonrpc

    def initialize(req: JsonRpcRequest):
        return proto.handle_initialize(req.params_dict())

    def initialized(req: JsonRpcRequest):
        return None

    def ping(req: JsonRpcRequest):
        return {}

    def tools_list(req: JsonRpcRequest):
        return proto.handle_tools_list(session)

    def tools_call(req: JsonRpcRequest):
        params = req.params_dict()
        name = params.get("name")
        args = params.get("arguments")
        timeout_ms = params.get("timeout_ms")
        if not isinstance(name, str) or not name:
            raise ValueError("missing tool name")
        sess = session
        if isinstance(timeout_ms, int) and not isinstance(timeout_ms, bool):
            sess = sess.with_deadline(timeout_ms)
        return proto.handle_tools_call(sess, name=name, args=args)

    disp.register("initialize", initialize)
    disp.register("notifications/initialized", initialized)
    disp.register("ping", ping)
    disp.register("tools/list", tools_list)
    disp.register("tools/call", tools_call)
    return disp


def serve_stdio(settings_path: str | Path | None = None, *, transport: httpx.BaseTransport | None = None) -> None:
    settings = load_settings(settings_path)
    configure_logging(settings.server.log_level)
    build_observability(settings)

    with build_client(settings, transport=transport) as client:
        disp = build_dispatcher(client, settings)
        logger.info("%s %s running on stdio", settings.server.name, settings.server.version)
        StdioTransport().serve_requests(disp.handle)


def main() -> None:
    load_dotenv()
    try:
        serve_stdio()
    except ConfigError as e:
        logger.error("configuration error: %s", e)
        sys.exit(1)


if __name__ == "__main__":  # pragma: no cover
    main()
