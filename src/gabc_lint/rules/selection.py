from __future__ import annotations

from collections.abc import Iterator

from gabc_lint.common.context import ValidationContext
from gabc_lint.common.ir import Document, Syllable
from gabc_lint.parse.snippets import Snippet, SnippetKind, expected_kind, split_snippets


def iter_groups(document: Document) -> Iterator[tuple[Syllable, list[Snippet]]]:
    for syllable in document.body.syllables:
        if syllable.music is not None:
            yield syllable, split_snippets(syllable.music.content, syllable.music.offset)


def gabc_snippets(snippets: list[Snippet], context: ValidationContext) -> list[Snippet]:
    """Snippets read as GABC: expected GABC and not NABC by the heuristic."""
    period = context.alternation.period
    return [
        s
        for s in snippets
        if expected_kind(s.index, period) is SnippetKind.GABC and s.kind is SnippetKind.GABC
    ]


def nabc_snippets(snippets: list[Snippet], context: ValidationContext) -> list[Snippet]:
    period = context.alternation.period
    if period <= 0:
        return []
    return [
        s
        for s in snippets
        if s.content.strip() and expected_kind(s.index, period) is SnippetKind.NABC
    ]
