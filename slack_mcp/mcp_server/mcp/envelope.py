from __future__ import annotations

from typing import Any

from ..jsonrpc.codec import INTERNAL_ERROR
from ..jsonrpc.dispatcher import JsonRpcAppError
from .session import McpSession


STRUCTURED_LEVELS = frozenset({"L1", "L2"})


def build_response_envelope(
    *,
    session: McpSession,
    tool_name: str,
    output: Any,
) -> dict[str, Any]:
    """Turn a tool's return value into an MCP tools/call result.

    Accepted outputs:
    - `{"text": str, "structured": dict}` (what the Slack tools return)
    - a plain string
    - an MCP-shaped `{"content": [...], "structuredContent"?: {...}, "isError"?: bool}`

    `content[0]` is always a text item so L0 clients can read it.
    `structuredContent` (tool name, client level and trace id included) is
    only kept for L1/L2 clients.
    """
    content, structured, is_error = _coerce_output(output)

    sc = dict(structured)
    sc.setdefault("tool", tool_name)
    sc.setdefault("client_level", session.client_level)
    if session.trace_id:
        sc.setdefault("trace_id", session.trace_id)

    result: dict[str, Any] = {"content": content, "structuredContent": sc}
    if is_error:
        result["isError"] = True
    return degrade(session.client_level, result)


def _coerce_output(output: Any) -> tuple[list[Any], dict[str, Any], bool]:
    if isinstance(output, str):
        return [{"type": "text", "text": output}], {}, False

    if isinstance(output, dict):
        if "content" in output:
            sc = output.get("structuredContent")
            return output["content"], sc if isinstance(sc, dict) else {}, output.get("isError") is True
        if isinstance(output.get("text"), str):
            sc = output.get("structured")
            return [{"type": "text", "text": output["text"]}], sc if isinstance(sc, dict) else {}, False

    raise JsonRpcAppError(INTERNAL_ERROR, f"tool returned unsupported output type: {type(output).__name__}")


def degrade(client_level: str, result: dict[str, Any]) -> dict[str, Any]:
    """Drop `structuredContent` for L0 (and unknown) client levels, then check the shape."""
    out = dict(result)
    if client_level not in STRUCTURED_LEVELS:
        out.pop("structuredContent", None)
    _check_result_shape(out)
    return out


def _check_result_shape(result: dict[str, Any]) -> None:
    content = result.get("content")
    if not isinstance(content, list) or not content:
        raise JsonRpcAppError(INTERNAL_ERROR, "tools/call result.content must be a non-empty array")
    first = content[0]
    if not isinstance(first, dict) or first.get("type") != "text" or not isinstance(first.get("text"), str):
        raise JsonRpcAppError(INTERNAL_ERROR, "tools/call result.content[0] must be a text item")
    if not isinstance(result.get("structuredContent", {}), dict):
        raise JsonRpcAppError(INTERNAL_ERROR, "tools/call result.structuredContent must be an object")
