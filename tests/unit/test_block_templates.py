from __future__ import annotations

import pytest

from slack_mcp.core.blocks import Divider, Header, Section, code_snippet_blocks, status_blocks
from slack_mcp.core.blocks.fences import CodeFence, TextChunk, parse_fence, split_fences


@pytest.mark.parametrize(
    ("kind", "header"),
    [
        ("info", "Heads up"),
        ("success", ":white_check_mark: Heads up"),
        ("warning", ":warning: Heads up"),
        ("error", ":x: Heads up"),
    ],
)
def test_status_blocks_layout(kind: str, header: str) -> None:
    assert status_blocks(kind, "Heads up", "body *text*") == [
        Header(header),
        Section("body *text*"),
        Divider(),
    ]


def test_status_blocks_rejects_unknown_kind() -> None:
    with pytest.raises(ValueError):
        status_blocks("debug", "t", "x")


def test_code_snippet_blocks_with_title_and_language() -> None:
    assert code_snippet_blocks("Fix", "x = 1", "python") == [
        Section("*Fix*"),
        Section("```python\nx = 1```"),
    ]


def test_code_snippet_blocks_defaults() -> None:
    assert code_snippet_blocks("", "ls") == [Section("Code snippet"), Section("```ls```")]


def test_parse_fence_language_rules() -> None:
    assert parse_fence("python\nx\n") == CodeFence("python", "x\n")
    assert parse_fence("\nx\n") == CodeFence("", "x\n")
    # not a single token: kept as code
    assert parse_fence("a b\nc") == CodeFence("", "a b\nc")
    # no newline: never a language tag
    assert parse_fence("inline") == CodeFence("", "inline")


def test_split_fences_keeps_text_untrimmed() -> None:
    chunks = split_fences("a \n```\nx\n```\n b")
    assert chunks == [TextChunk("a \n"), CodeFence("", "x\n"), TextChunk("\n b")]
