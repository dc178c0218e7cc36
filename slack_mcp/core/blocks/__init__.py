"""Text-to-Block Kit compiler."""

from .compiler import compile_input, compile_text, probe_source, text_to_blocks
from .models import Block, Divider, Header, Precompiled, RawText, Section, blocks_to_dicts
from .rules import BULLET, PARAGRAPH_RULES, classify_paragraph, classify_segment
from .templates import code_snippet_blocks, status_blocks

__all__ = [
    "Block",
    "Header",
    "Section",
    "Divider",
    "RawText",
    "Precompiled",
    "blocks_to_dicts",
    "compile_text",
    "compile_input",
    "probe_source",
    "text_to_blocks",
    "classify_paragraph",
    "classify_segment",
    "PARAGRAPH_RULES",
    "BULLET",
    "status_blocks",
    "code_snippet_blocks",
]
