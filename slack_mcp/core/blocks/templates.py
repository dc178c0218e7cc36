from __future__ import annotations

from .fences import FENCE
from .models import Block, Divider, Header, Section


DEFAULT_SNIPPET_TITLE = "Code snippet"

# kind -> emoji prefix for the header line
STATUS_PREFIXES: dict[str, str] = {
    "info": "",
    "success": ":white_check_mark: ",
    "warning": ":warning: ",
    "error": ":x: ",
}


def status_blocks(kind: str, title: str, text: str) -> list[Block]:
    """Header + body + divider layout used by the info/success/warning/error tools."""
    if kind not in STATUS_PREFIXES:
        raise ValueError(f"unknown status kind: {kind!r}")
    return [
        Header(STATUS_PREFIXES[kind] + title),
        Section(text),
        Divider(),
    ]


def code_snippet_blocks(title: str, code: str, language: str = "") -> list[Block]:
    head = f"*{title}*" if title else DEFAULT_SNIPPET_TITLE
    lang_line = f"{language}\n" if language else ""
    return [
        Section(head),
        Section(f"{FENCE}{lang_line}{code}{FENCE}"),
    ]
