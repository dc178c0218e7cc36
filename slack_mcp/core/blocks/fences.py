from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Union


FENCE = "```"

# Non-greedy: each opening fence closes at the first fence after it.
_FENCE_RE = re.compile(r"```([\s\S]*?)```")


@dataclass(frozen=True)
class TextChunk:
    text: str


@dataclass(frozen=True)
class CodeFence:
    language: str
    body: str

    def render(self) -> str:
        return f"{FENCE}{self.language}\n{self.body}{FENCE}"


Chunk = Union[TextChunk, CodeFence]


def parse_fence(inner: str) -> CodeFence:
    """Split raw fence content into an optional language tag and the code body.

    The language tag is the first line when it is a single whitespace-free
    token and a newline follows it. An empty first line (fence opened with a
    bare newline) is dropped. Trailing blank lines before the closing fence
    collapse to a single newline.
    """
    language = ""
    body = inner

    nl = inner.find("\n")
    if nl >= 0:
        first = inner[:nl].strip()
        if first == "":
            body = inner[nl + 1 :]
        elif not any(ch.isspace() for ch in first):
            language = first
            body = inner[nl + 1 :]

    if body.endswith("\n"):
        body = body.rstrip("\n") + "\n"
    return CodeFence(language=language, body=body)


def split_fences(text: str) -> list[Chunk]:
    """Scan `text` left to right and interleave plain-text chunks with fences.

    Text chunks are returned untrimmed; an unclosed fence marker is left in
    the surrounding text.
    """
    chunks: list[Chunk] = []
    last = 0
    for m in _FENCE_RE.finditer(text):
        if m.start() > last:
            chunks.append(TextChunk(text[last : m.start()]))
        chunks.append(parse_fence(m.group(1)))
        last = m.end()
    if last < len(text):
        chunks.append(TextChunk(text[last:]))
    return chunks
