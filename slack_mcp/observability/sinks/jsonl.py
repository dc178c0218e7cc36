from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from ..trace.envelope import TraceEnvelope


DEFAULT_FILE_NAME = "traces.jsonl"


class JsonlSink:
    """
    Append one JSON line per finished tool-call trace.

    `path_or_dir` is used as-is when it ends in `.jsonl`; otherwise it is a
    directory and `traces.jsonl` is written inside it.
    """

    def __init__(self, path_or_dir: str | Path) -> None:
        p = Path(path_or_dir)
        self.path = p if p.suffix == ".jsonl" else p / DEFAULT_FILE_NAME
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def write(self, envelope: TraceEnvelope) -> None:
        # attrs may carry non-JSON values (paths, exceptions); stringify them
        line = json.dumps(envelope.to_dict(), ensure_ascii=False, default=str)
        with self.path.open("a", encoding="utf-8") as f:
            f.write(line + "\n")

    def on_trace_end(self, envelope: TraceEnvelope) -> None:
        self.write(envelope)

    # Events, metrics and spans are already part of the envelope.
    def on_event(self, record: dict[str, Any]) -> None:
        pass

    def on_metric(self, record: dict[str, Any]) -> None:
        pass

    def on_span_end(self, record: dict[str, Any]) -> None:
        pass
