from __future__ import annotations

from gabc_lint.common import diagnostics as msg
from gabc_lint.common.context import ValidationContext
from gabc_lint.common.diagnostics import Diagnostic, DiagnosticCode
from gabc_lint.common.ir import Document
from gabc_lint.common.source import LineIndex
from gabc_lint.parse.notes import (
    BRACKETED_RE,
    CLEF_RE,
    GABC_ALPHABET,
    blank_out,
    highest_pitch,
    note_text,
    pitch_value,
)
from gabc_lint.parse.snippets import Snippet
from gabc_lint.rules.selection import gabc_snippets, iter_groups


def _check_snippet(snippet: Snippet, staff_lines: int, index: LineIndex) -> list[Diagnostic]:
    out: list[Diagnostic] = []
    base = snippet.offset

    for clef in CLEF_RE.finditer(blank_out(snippet.content, BRACKETED_RE)):
        line = int(clef.group(3))
        if line == 0 or line > staff_lines:
            out.append(
                msg.error(
                    index.range(base + clef.start(), base + clef.end()),
                    DiagnosticCode.INVALID_CLEF_LINE,
                    msg.INVALID_CLEF_LINE % (staff_lines, line),
                )
            )

    top = highest_pitch(staff_lines)
    unrecognized_reported = False
    for pos, ch in enumerate(note_text(snippet.content)):
        if not ch.isalpha():
            continue
        rng = index.range(base + pos, base + pos + 1)
        value = pitch_value(ch)
        if value is not None and value > top:
            out.append(msg.error(rng, DiagnosticCode.INVALID_PITCH, msg.INVALID_PITCH % (staff_lines, ch)))
        elif ch not in GABC_ALPHABET and not unrecognized_reported:
            unrecognized_reported = True
            out.append(msg.error(rng, DiagnosticCode.UNRECOGNIZED_CHARACTER, msg.UNRECOGNIZED_CHARACTER))
    return out


def check_notation(
    document: Document, context: ValidationContext, index: LineIndex | None = None
) -> list[Diagnostic]:
    """Clefs and notes of GABC snippets against the staff size (`staff-lines`, default 4)."""
    index = index or LineIndex(document.text)
    out: list[Diagnostic] = []
    for _, snippets in iter_groups(document):
        for s in gabc_snippets(snippets, context):
            out.extend(_check_snippet(s, context.staff_lines, index))
    return out
