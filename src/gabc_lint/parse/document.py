from __future__ import annotations

from gabc_lint.common.ir import Body, Document
from gabc_lint.common.source import LineIndex
from gabc_lint.parse.splitter import split_document
from gabc_lint.parse.syllables import tokenize_syllables


def parse_document(text: str, index: LineIndex | None = None) -> Document:
    """Headers + tokenized body. Never fails: malformed input yields fewer elements."""
    index = index or LineIndex(text)
    split = split_document(text)
    tokens = tokenize_syllables(text, split.body_offset, index)
    body = Body(
        start_line=split.body_start_line,
        offset=split.body_offset,
        syllables=tokens.syllables,
        trailing_text=tokens.trailing_text,
    )
    return Document(text=text, headers=split.headers, body=body)
