"""JSON-RPC 2.0 framing, routing and the stdio transport used by the MCP server."""

from .codec import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
    JsonRpcCodecError,
    decode_request,
    encode_error,
    encode_response,
)
from .dispatcher import Dispatcher, JsonRpcAppError, default_error_mapper
from .models import JsonRpcError, JsonRpcRequest, JsonRpcResponse
from .stdio_transport import StdioTransport

__all__ = [
    "Dispatcher",
    "JsonRpcAppError",
    "JsonRpcCodecError",
    "JsonRpcError",
    "JsonRpcRequest",
    "JsonRpcResponse",
    "StdioTransport",
    "decode_request",
    "default_error_mapper",
    "encode_error",
    "encode_response",
    "INTERNAL_ERROR",
    "INVALID_PARAMS",
    "INVALID_REQUEST",
    "METHOD_NOT_FOUND",
    "PARSE_ERROR",
]
