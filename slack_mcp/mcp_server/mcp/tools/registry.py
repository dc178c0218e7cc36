from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable

from .base import Tool


@dataclass
class ToolRegistry:
    _tools: dict[str, Tool] = field(default_factory=dict)

    def register(self, tool: Tool) -> None:
        name = tool.spec.name
        if not isinstance(name, str) or not name:
            raise ValueError("tool name must be non-empty string")
        if name in self._tools:
            raise ValueError(f"duplicate tool name: {name}")
        self._tools[name] = tool

    def register_all(self, tools: Iterable[Tool]) -> None:
        for tool in tools:
            self.register(tool)

    def get(self, name: str) -> Tool | None:
        return self._tools.get(name)

    def names(self) -> list[str]:
        return sorted(self._tools)

    def list_specs(self) -> list[dict[str, Any]]:
        out = [
            {
                "name": tool.spec.name,
                "description": tool.spec.description,
                "inputSchema": tool.spec.input_schema,
            }
            for tool in self._tools.values()
        ]
        out.sort(key=lambda x: x["name"])
        return out
