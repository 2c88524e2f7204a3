from __future__ import annotations

from gabc_lint.common.context import ValidationContext
from gabc_lint.common.diagnostics import Diagnostic
from gabc_lint.common.ir import Document
from gabc_lint.common.source import LineIndex
from gabc_lint.nabc.grammar import NabcGrammarValidator
from gabc_lint.rules.selection import iter_groups, nabc_snippets


def check_nabc_grammar(
    document: Document, context: ValidationContext, index: LineIndex | None = None
) -> list[Diagnostic]:
    """Glyph descriptors of every NABC position, against the context font."""
    index = index or LineIndex(document.text)
    validator = NabcGrammarValidator(context.font, index)
    out: list[Diagnostic] = []
    for _, snippets in iter_groups(document):
        for s in nabc_snippets(snippets, context):
            out.extend(validator.validate_snippet(s.content, s.offset))
    return out
