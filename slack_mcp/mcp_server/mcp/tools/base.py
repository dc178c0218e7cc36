from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Callable, Protocol

from ...jsonrpc.codec import INVALID_PARAMS
from ...jsonrpc.dispatcher import JsonRpcAppError
from ..session import McpSession


ToolHandler = Callable[[McpSession, dict[str, Any]], dict[str, Any]]


@dataclass(frozen=True)
class ToolSpec:
    name: str
    description: str
    input_schema: dict[str, Any]


class Tool(Protocol):
    spec: ToolSpec

    def call(self, session: McpSession, args: dict[str, Any]) -> dict[str, Any]:
        ...


@dataclass
class FunctionTool:
    spec: ToolSpec
    fn: ToolHandler

    def call(self, session: McpSession, args: dict[str, Any]) -> dict[str, Any]:
        return self.fn(session, args)


def _join_names(names: list[str]) -> str:
    if len(names) == 1:
        return names[0]
    return ", ".join(names[:-1]) + " and " + names[-1]


def require_args(args: dict[str, Any], *names: str) -> None:
    """Reject missing or empty string arguments (schema `required` allows "")."""
    missing = [n for n in names if not args.get(n)]
    if missing:
        label = "argument" if len(missing) == 1 else "arguments"
        raise JsonRpcAppError(
            INVALID_PARAMS,
            f"Missing required {label}: {_join_names(missing)}",
            {"missing": missing},
        )


def optional_str(args: dict[str, Any], name: str) -> str | None:
    v = args.get(name)
    return v if isinstance(v, str) and v else None


def json_result(body: dict[str, Any]) -> dict[str, Any]:
    """Tool output for a Slack API body: JSON text for every client, the mapping for L1+."""
    return {"text": json.dumps(body, ensure_ascii=False), "structured": body}


def string_prop(description: str, **extra: Any) -> dict[str, Any]:
    return {"type": "string", "description": description, **extra}


def integer_prop(description: str, default: int) -> dict[str, Any]:
    return {"type": "integer", "description": description, "default": default}


THREAD_TS_DESCRIPTION = (
    "The timestamp of the parent message in the format '1234567890.123456'. "
    "Timestamps without the period can be converted by adding the period "
    "such that 6 numbers come after it."
)
