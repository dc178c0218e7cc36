from __future__ import annotations

from typing import Any

from ..core.settings import ConfigError
from ..slack.errors import SlackApiError, SlackError
from .jsonrpc.codec import INTERNAL_ERROR, INVALID_PARAMS
from .jsonrpc.dispatcher import JsonRpcAppError
from .jsonrpc.models import JsonRpcError


# App-specific JSON-RPC error codes (reserved server error range: -32000..-32099).
DEADLINE_EXCEEDED = -32001
UPSTREAM_ERROR = -32002
CONFIG_ERROR = -32003


def map_exception_to_jsonrpc(exc: Exception) -> JsonRpcError:
    """Map internal exceptions to a JSON-RPC error object.

    - JsonRpcAppError (raised on purpose by handlers/tools) keeps its code.
    - Slack failures become UPSTREAM_ERROR with the API method and status.
    - Bad args (TypeError/ValueError) are invalid params; timeouts are
      DEADLINE_EXCEEDED; anything else is an internal error.
    """
    if isinstance(exc, JsonRpcAppError):
        return JsonRpcError(code=exc.code, message=exc.message, data=exc.data)

    if isinstance(exc, SlackError):
        data: dict[str, Any] = {"exc_type": type(exc).__name__, "detail": exc.message}
        if exc.method:
            data["method"] = exc.method
        if isinstance(exc, SlackApiError) and exc.status_code is not None:
            data["status_code"] = exc.status_code
        return JsonRpcError(code=UPSTREAM_ERROR, message="slack api error", data=data)

    if isinstance(exc, ConfigError):
        return JsonRpcError(code=CONFIG_ERROR, message="configuration error", data={"detail": str(exc)})

    if isinstance(exc, (TypeError, ValueError)):
        return JsonRpcError(code=INVALID_PARAMS, message="invalid params", data={"exc_type": type(exc).__name__})

    if isinstance(exc, TimeoutError):
        return JsonRpcError(code=DEADLINE_EXCEEDED, message="deadline exceeded", data={"exc_type": type(exc).__name__})

    return JsonRpcError(code=INTERNAL_ERROR, message="internal error", data={"exc_type": type(exc).__name__})


def attach_trace_id(data: Any | None, trace_id: str | None) -> Any | None:
    """Best-effort inject `trace_id` into JSON-RPC error data."""
    if not trace_id:
        return data
    if data is None:
        return {"trace_id": trace_id}
    if isinstance(data, dict) and "trace_id" not in data:
        out = dict(data)
        out["trace_id"] = trace_id
        return out
    return data
