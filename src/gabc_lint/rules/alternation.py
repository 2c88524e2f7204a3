from __future__ import annotations

from gabc_lint.common import diagnostics as msg
from gabc_lint.common.context import ValidationContext
from gabc_lint.common.diagnostics import Diagnostic, DiagnosticCode, Severity
from gabc_lint.common.ir import Document
from gabc_lint.common.source import LineIndex
from gabc_lint.parse.snippets import Snippet, SnippetKind, expected_kind
from gabc_lint.rules.selection import iter_groups


def _gabc_only(snippets: list[Snippet], music_range, index: LineIndex) -> list[Diagnostic]:
    out: list[Diagnostic] = []
    if len(snippets) > 1:
        out.append(msg.error(music_range, DiagnosticCode.INVALID_PIPE_WITHOUT_NABC, msg.PIPE_WITHOUT_NABC_LINES))
    for s in snippets:
        if s.kind is SnippetKind.NABC:
            out.append(
                msg.error(
                    index.range(s.offset, s.end),
                    DiagnosticCode.NABC_IN_GABC_ONLY_MODE,
                    msg.NABC_WITHOUT_ALTERNATION,
                )
            )
    return out


def check_alternation(
    document: Document, context: ValidationContext, index: LineIndex | None = None
) -> list[Diagnostic]:
    """
    GABC/NABC alternation inside every group.

    nabc-lines: 0 (or absent) means plain GABC: any `|` is an error, and so is
    anything that looks like NABC. Otherwise snippet i >= 1 must be NABC when
    (i - 1) // period is even and GABC when it is odd; snippet 0 is GABC.
    """
    index = index or LineIndex(document.text)
    period = context.alternation.period
    severity = Severity.ERROR if context.strict_alternation else Severity.WARNING
    out: list[Diagnostic] = []

    for syllable, snippets in iter_groups(document):
        if period <= 0:
            out.extend(_gabc_only(snippets, syllable.music.range, index))
            continue
        for s in snippets:
            found = s.kind
            if found is SnippetKind.NEUTRAL:
                continue
            expected = expected_kind(s.index, period)
            if found is expected:
                continue
            out.append(
                Diagnostic(
                    range=index.range(s.offset, s.end),
                    severity=severity,
                    message=f"Expected {expected.name} notation but found {found.name} in snippet {s.index + 1}",
                    code=DiagnosticCode.ALTERNATION_VIOLATION,
                )
            )
    return out
