from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable

from .codec import INTERNAL_ERROR, INVALID_REQUEST, METHOD_NOT_FOUND
from .models import JsonRpcError, JsonRpcRequest, JsonRpcResponse


logger = logging.getLogger(__name__)

Handler = Callable[[JsonRpcRequest], Any]
ErrorMapper = Callable[[Exception], JsonRpcError]


class JsonRpcAppError(Exception):
    """Carries an explicit JSON-RPC error (code, message, data) out of a handler."""

    def __init__(self, code: int, message: str, data: Any | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.data = data


def default_error_mapper(exc: Exception) -> JsonRpcError:
    if isinstance(exc, JsonRpcAppError):
        return JsonRpcError(exc.code, exc.message, exc.data)
    return JsonRpcError(INTERNAL_ERROR, "internal error", {"exc_type": type(exc).__name__})


@dataclass
class Dispatcher:
    """Routes decoded requests to the handler registered for their method."""

    _handlers: dict[str, Handler] = field(default_factory=dict)
    error_mapper: ErrorMapper | None = None

    def register(self, method: str, handler: Handler) -> None:
        if not isinstance(method, str) or not method:
            raise ValueError("method must be non-empty string")
        if not callable(handler):
            raise TypeError(f"handler for {method!r} is not callable")
        self._handlers[method] = handler

    def methods(self) -> list[str]:
        return sorted(self._handlers)

    def handle(self, req: JsonRpcRequest) -> JsonRpcResponse:
        error = self._precheck(req)
        if error is not None:
            return JsonRpcResponse(id=req.id, error=error)

        try:
            return JsonRpcResponse(id=req.id, result=self._handlers[req.method](req))
        except JsonRpcAppError as e:
            return JsonRpcResponse(id=req.id, error=self._map(e))
        except Exception as e:
            logger.exception("handler for %s failed", req.method)
            return JsonRpcResponse(id=req.id, error=self._map(e))

    def _precheck(self, req: JsonRpcRequest) -> JsonRpcError | None:
        if req.jsonrpc != "2.0" or not req.method:
            return JsonRpcError(INVALID_REQUEST, "invalid request")
        if req.method not in self._handlers:
            return JsonRpcError(METHOD_NOT_FOUND, "method not found", {"method": req.method})
        return None

    def _map(self, exc: Exception) -> JsonRpcError:
        return (self.error_mapper or default_error_mapper)(exc)
