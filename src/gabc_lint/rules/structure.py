from __future__ import annotations

from gabc_lint.common import diagnostics as msg
from gabc_lint.common.context import ValidationContext
from gabc_lint.common.diagnostics import Diagnostic, DiagnosticCode
from gabc_lint.common.ir import Document
from gabc_lint.common.source import LineIndex


def check_structure(
    document: Document, context: ValidationContext | None = None, index: LineIndex | None = None
) -> list[Diagnostic]:
    out: list[Diagnostic] = []
    for syllable in document.body.syllables:
        if syllable.is_empty:
            out.append(msg.warning(syllable.range, DiagnosticCode.EMPTY_SYLLABLE, "Empty syllable"))

    trailing = document.body.trailing_text
    if trailing is not None:
        out.append(
            msg.warning(trailing.range, DiagnosticCode.MISSING_MUSIC, "Syllable has text but no music notation")
        )
    return out
