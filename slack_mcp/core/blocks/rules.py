from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable

from .models import Block, Divider, Header, Section


BULLET = "•"

# A whitespace-only line is not a paragraph break.
PARAGRAPH_BREAK = "\n\n"
_BULLET_RE = re.compile(r"^([ \t]*)[*-](?=[ \t])", re.MULTILINE)
_LIST_LINE_RE = re.compile(r"^[ \t]*(?:[*-]|\d+\.)[ \t]", re.MULTILINE)
_SUBHEADING_RE = re.compile(r"^#+\s+")


@dataclass(frozen=True)
class ParagraphRule:
    """One case of the single-paragraph rule: a predicate and the blocks it builds."""

    name: str
    matches: Callable[[str], bool]
    build: Callable[[str], list[Block]]


def normalize_bullets(text: str) -> str:
    """Replace `*`/`-` bullet markers with the bullet glyph, keeping indentation."""
    return _BULLET_RE.sub(lambda m: m.group(1) + BULLET, text)


def has_list_lines(text: str) -> bool:
    return _LIST_LINE_RE.search(text) is not None


def _split_first_line(paragraph: str) -> tuple[str, str]:
    first, _, rest = paragraph.partition("\n")
    return first, rest


def _heading_title(line: str) -> str | None:
    if not line.startswith("# "):
        return None
    return line[2:].strip() or None


def _is_heading(paragraph: str) -> bool:
    first, _ = _split_first_line(paragraph)
    return _heading_title(first) is not None


def _build_heading(paragraph: str) -> list[Block]:
    """Consecutive `# ` lines each become a Header; what follows is classified once."""
    lines = paragraph.split("\n")
    out: list[Block] = []
    i = 0
    while i < len(lines):
        line = lines[i].lstrip()
        if not line:
            i += 1
            continue
        title = _heading_title(line)
        if title is None:
            break
        out.append(Header(title))
        i += 1

    rest = "\n".join(lines[i:]).strip()
    if rest:
        out.extend(classify_paragraph(rest))
    return out


def _subheading_title(line: str) -> str:
    return _SUBHEADING_RE.sub("", line).strip()


def _is_subheading(paragraph: str) -> bool:
    if not (paragraph.startswith("## ") or paragraph.startswith("### ")):
        return False
    first, _ = _split_first_line(paragraph)
    return _subheading_title(first) != ""


def _build_subheading(paragraph: str) -> list[Block]:
    first, rest = _split_first_line(paragraph)
    text = f"*{_subheading_title(first)}*"
    if rest.strip():
        text += "\n" + rest
    return [Section(text)]


def _build_list(paragraph: str) -> list[Block]:
    return [Section(normalize_bullets(paragraph))]


def _is_quote(paragraph: str) -> bool:
    return paragraph.startswith("> ")


def _verbatim(paragraph: str) -> list[Block]:
    return [Section(paragraph)]


# Order is priority: a `#` heading line must never be read as a list or quote.
PARAGRAPH_RULES: tuple[ParagraphRule, ...] = (
    ParagraphRule("heading", _is_heading, _build_heading),
    ParagraphRule("subheading", _is_subheading, _build_subheading),
    ParagraphRule("list", has_list_lines, _build_list),
    ParagraphRule("quote", _is_quote, _verbatim),
    ParagraphRule("text", lambda _: True, _verbatim),
)


def match_rule(paragraph: str) -> ParagraphRule:
    for rule in PARAGRAPH_RULES:
        if rule.matches(paragraph):
            return rule
    # unreachable: the last rule matches everything
    raise AssertionError("no paragraph rule matched")


def classify_paragraph(paragraph: str) -> list[Block]:
    """Apply the first matching paragraph rule. Never returns an empty list."""
    return match_rule(paragraph).build(paragraph)


def split_paragraphs(segment: str) -> list[str]:
    """Split on paragraph breaks; paragraphs are trimmed and empty ones dropped."""
    parts = (p.strip() for p in segment.split(PARAGRAPH_BREAK))
    return [p for p in parts if p]


def classify_segment(segment: str) -> list[Block]:
    """Classify a fence-free text segment.

    Without a paragraph break the whole segment is one paragraph. Otherwise
    each paragraph is classified on its own and a Divider goes between
    consecutive paragraphs (never before the first or after the last).
    """
    if PARAGRAPH_BREAK not in segment:
        paragraph = segment.strip()
        return classify_paragraph(paragraph) if paragraph else []

    out: list[Block] = []
    for i, paragraph in enumerate(split_paragraphs(segment)):
        if i:
            out.append(Divider())
        out.extend(classify_paragraph(paragraph))
    return out
