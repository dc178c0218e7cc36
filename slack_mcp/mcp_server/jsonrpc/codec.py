from __future__ import annotations

import json
from typing import Any

from .models import JsonRpcError, JsonRpcRequest, JsonRpcResponse


PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603


class JsonRpcCodecError(ValueError):
    """A frame that could not be turned into a request.

    `req_id` is filled in whenever the frame was at least a JSON object, so
    the error response can still be correlated by the client.
    """

    def __init__(self, code: int, message: str, *, req_id: Any | None = None, data: Any | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.req_id = req_id
        self.data = data

    def to_error(self) -> JsonRpcError:
        return JsonRpcError(code=self.code, message=self.message, data=self.data)


def _invalid(reason: str, req_id: Any | None = None) -> JsonRpcCodecError:
    return JsonRpcCodecError(INVALID_REQUEST, f"invalid request: {reason}", req_id=req_id)


def decode_request(line: str) -> JsonRpcRequest:
    try:
        frame = json.loads(line)
    except ValueError as e:
        raise JsonRpcCodecError(PARSE_ERROR, "parse error", data=str(e)) from e

    if not isinstance(frame, dict):
        raise _invalid("frame must be a JSON object")

    req_id = frame.get("id")
    method = frame.get("method")
    params = frame.get("params")

    if frame.get("jsonrpc") != "2.0":
        raise _invalid("jsonrpc must be '2.0'", req_id)
    if not (isinstance(method, str) and method):
        raise _invalid("method must be a non-empty string", req_id)
    if params is not None and not isinstance(params, (dict, list)):
        raise _invalid("params must be an object or an array", req_id)

    return JsonRpcRequest(jsonrpc="2.0", method=method, params=params, id=req_id)


def encode_response(resp: JsonRpcResponse) -> str:
    # Compact frames: one response per stdout line.
    return json.dumps(resp.to_dict(), ensure_ascii=False, separators=(",", ":"))


def encode_error(req_id: Any | None, code: int, message: str, data: Any | None = None) -> str:
    return encode_response(JsonRpcResponse(id=req_id, error=JsonRpcError(code, message, data)))
