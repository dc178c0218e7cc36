from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Union


JsonDict = dict[str, Any]


@dataclass(frozen=True)
class Header:
    """Single prominent line (Block Kit `header`, plain text only)."""

    text: str

    def to_dict(self) -> JsonDict:
        return {
            "type": "header",
            "text": {"type": "plain_text", "text": self.text, "emoji": True},
        }


@dataclass(frozen=True)
class Section:
    """Contiguous mrkdwn text region."""

    text: str

    def to_dict(self) -> JsonDict:
        return {"type": "section", "text": {"type": "mrkdwn", "text": self.text}}


@dataclass(frozen=True)
class Divider:
    def to_dict(self) -> JsonDict:
        return {"type": "divider"}


Block = Union[Header, Section, Divider]


@dataclass(frozen=True)
class RawText:
    """Caller-supplied text that still needs compiling."""

    text: str


@dataclass(frozen=True)
class Precompiled:
    """Block descriptors the caller already built; passed through as-is."""

    blocks: list[JsonDict] = field(default_factory=list)


BlockSource = Union[RawText, Precompiled]


def blocks_to_dicts(blocks: Iterable[Block]) -> list[JsonDict]:
    return [b.to_dict() for b in blocks]


def looks_precompiled(value: Any) -> bool:
    """True for a non-empty list whose first item is a mapping with a `type`."""
    if not isinstance(value, list) or not value:
        return False
    first = value[0]
    return isinstance(first, dict) and bool(first.get("type"))
