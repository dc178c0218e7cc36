from __future__ import annotations

import json
from typing import Any

from .fences import CodeFence, split_fences
from .models import (
    Block,
    BlockSource,
    JsonDict,
    Precompiled,
    RawText,
    Section,
    blocks_to_dicts,
    looks_precompiled,
)
from .rules import classify_segment


def compile_text(text: str) -> list[Block]:
    """Compile raw (markdown-flavored) text into an ordered Block sequence.

    Pure and total: any string is accepted. Empty text gives no blocks; any
    other input that yields nothing after classification (e.g. whitespace
    only) falls back to one Section echoing the input unchanged.
    """
    if text == "":
        return []

    blocks: list[Block] = []
    for chunk in split_fences(text):
        if isinstance(chunk, CodeFence):
            blocks.append(Section(chunk.render()))
        elif chunk.text.strip():
            blocks.extend(classify_segment(chunk.text))

    if not blocks:
        return [Section(text)]
    return blocks


def compile_input(source: BlockSource) -> list[JsonDict]:
    """Resolve an explicit input variant to wire-shaped block descriptors."""
    if isinstance(source, Precompiled):
        return source.blocks
    if isinstance(source, RawText):
        return blocks_to_dicts(compile_text(source.text))
    raise TypeError(f"unsupported block source: {type(source).__name__}")


def probe_source(text: str) -> BlockSource:
    """Classify untyped input: a JSON array of block descriptors is Precompiled."""
    try:
        parsed: Any = json.loads(text)
    except (ValueError, RecursionError):
        return RawText(text)
    if looks_precompiled(parsed):
        return Precompiled(parsed)
    return RawText(text)


def text_to_blocks(text: str) -> list[JsonDict]:
    """Untyped entry point: compile `text`, passing already-compiled JSON through.

    `text_to_blocks(json.dumps(text_to_blocks(x))) == text_to_blocks(x)` for
    every `x` that compiles to at least one block.
    """
    return compile_input(probe_source(text))
