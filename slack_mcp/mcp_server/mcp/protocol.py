from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ...observability.obs import api as obs
from ..errors import DEADLINE_EXCEEDED, attach_trace_id, map_exception_to_jsonrpc
from ..jsonrpc.codec import INVALID_PARAMS
from ..jsonrpc.dispatcher import JsonRpcAppError
from .envelope import build_response_envelope
from .schema import SchemaValidationError, validate_tool_args
from .session import McpSession
from .tools.registry import ToolRegistry


DEFAULT_PROTOCOL_VERSION = "2024-11-05"


@dataclass
class McpProtocol:
    """MCP semantic layer.

    Transport-agnostic: exposes handlers for MCP methods and delegates tool
    execution to the ToolRegistry. Every tools/call runs inside its own trace.
    """

    tools: ToolRegistry
    server_name: str = "slack-mcp-server"
    server_version: str = "1.0.0"
    protocol_version: str = DEFAULT_PROTOCOL_VERSION

    def handle_initialize(self, params: dict[str, Any] | None) -> dict[str, Any]:
        requested = (params or {}).get("protocolVersion")
        return {
            "protocolVersion": requested if isinstance(requested, str) and requested else self.protocol_version,
            "serverInfo": {"name": self.server_name, "version": self.server_version},
            "capabilities": {"tools": {"listChanged": False}},
        }

    def handle_tools_list(self, session: McpSession) -> dict[str, Any]:
        _ = session
        return {"tools": self.tools.list_specs()}

    def handle_tools_call(self, session: McpSession, name: str, args: dict[str, Any] | None) -> dict[str, Any]:
        call_session = session.new_call()
        if call_session.deadline_passed():
            raise JsonRpcAppError(
                DEADLINE_EXCEEDED,
                "deadline exceeded",
                {"trace_id": call_session.trace_id},
            )

        tool = self.tools.get(name)
        if tool is None:
            raise JsonRpcAppError(INVALID_PARAMS, f"unknown tool: {name}", {"trace_id": call_session.trace_id})

        try:
            args = validate_tool_args(tool.spec.input_schema, args)
        except SchemaValidationError as e:
            raise JsonRpcAppError(
                INVALID_PARAMS,
                "invalid params",
                {"message": str(e), "trace_id": call_session.trace_id},
            ) from e

        try:
            with obs.tool_trace(call_session.trace_id, name):
                out = tool.call(call_session, args)
            return build_response_envelope(session=call_session, tool_name=name, output=out)
        except Exception as e:
            err = map_exception_to_jsonrpc(e)
            raise JsonRpcAppError(err.code, err.message, attach_trace_id(err.data, call_session.trace_id)) from e
