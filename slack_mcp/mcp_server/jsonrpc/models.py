from __future__ import annotations

from dataclasses import dataclass
from typing import Any


JsonDict = dict[str, Any]


@dataclass(frozen=True)
class JsonRpcRequest:
    """One decoded request frame. `id is None` marks a notification."""

    jsonrpc: str
    method: str
    params: Any | None
    id: Any | None

    @property
    def is_notification(self) -> bool:
        return self.id is None

    def params_dict(self) -> JsonDict:
        # MCP methods only take named params; positional ones read as empty.
        return self.params if isinstance(self.params, dict) else {}


@dataclass(frozen=True)
class JsonRpcError:
    code: int
    message: str
    data: Any | None = None

    def to_dict(self) -> JsonDict:
        if self.data is None:
            return {"code": self.code, "message": self.message}
        return {"code": self.code, "message": self.message, "data": self.data}


@dataclass(frozen=True)
class JsonRpcResponse:
    """Exactly one of `result` / `error` is serialized."""

    jsonrpc: str = "2.0"
    id: Any | None = None
    result: Any | None = None
    error: JsonRpcError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> JsonDict:
        payload = {"result": self.result} if self.ok else {"error": self.error.to_dict()}
        return {"jsonrpc": self.jsonrpc, "id": self.id, **payload}
