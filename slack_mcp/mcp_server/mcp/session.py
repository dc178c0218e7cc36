from __future__ import annotations

import time
import uuid
from dataclasses import dataclass, replace


@dataclass(frozen=True)
class McpSession:
    session_id: str
    client_level: str = "L0"  # L0|L1|L2
    trace_id: str | None = None
    deadline_ts: float | None = None  # unix timestamp; checked before the tool runs

    @classmethod
    def new(cls, client_level: str = "L0", trace_id: str | None = None) -> "McpSession":
        return cls(session_id=f"sess_{uuid.uuid4().hex}", client_level=client_level, trace_id=trace_id)

    def new_call(self, *, trace_id: str | None = None) -> "McpSession":
        """Per-tool-call view with a fresh trace_id (also the id of the call's trace)."""
        return replace(self, trace_id=trace_id or f"trace_{uuid.uuid4().hex}")

    def with_deadline(self, timeout_ms: int) -> "McpSession":
        if timeout_ms <= 0:
            deadline = time.time()
        else:
            deadline = time.time() + (timeout_ms / 1000.0)
        return replace(self, deadline_ts=deadline)

    def deadline_passed(self) -> bool:
        return self.deadline_ts is not None and time.time() >= self.deadline_ts
