"""
Patterns that compile but render badly (or not at all) in gregorio.

Each check is independent. Quilisma checks work per GABC snippet, ambitus per
group, first-syllable checks on the first syllable that carries text, and
style checks on every syllable text.
"""

from __future__ import annotations

import re

from gabc_lint.common import diagnostics as msg
from gabc_lint.common.context import ValidationContext
from gabc_lint.common.diagnostics import Diagnostic, DiagnosticCode
from gabc_lint.common.ir import Document, Syllable, TextElement
from gabc_lint.common.source import LineIndex
from gabc_lint.parse.notes import BRACKETED_RE, CLEF_RE, PITCH_VALUES, blank_out, pitches
from gabc_lint.parse.snippets import Snippet
from gabc_lint.rules.selection import gabc_snippets, iter_groups

QUILISMA_RE = re.compile(r"([a-np])([wW])")
NEXT_PITCH_RE = re.compile(r"[a-npA-NP]")
LINE_BREAK_RE = re.compile(r"[zZ](?!0)|/")
MAX_AMBITUS = 7

CENTER_TAG = "<c>"
PROTRUSION_TAG = "<pr"


def check_quilisma(snippet: Snippet, index: LineIndex) -> list[Diagnostic]:
    out: list[Diagnostic] = []
    content = snippet.content
    for m in QUILISMA_RE.finditer(content):
        note, marker = m.group(1), m.group(2)
        quilisma = f"{note}{marker}"
        start = snippet.offset + m.start()
        rng = index.range(start, start + len(quilisma))

        if m.start() == 0 or content[m.start() - 1] != "!":
            out.append(
                msg.information(
                    rng,
                    DiagnosticCode.QUILISMA_GLYPH_BREAK,
                    "Consider adding glyph break (!) before quilisma note for better rendering. "
                    f"Suggestion: add ! before '{quilisma}'",
                )
            )

        following = NEXT_PITCH_RE.search(content, m.end())
        if following is None:
            out.append(
                msg.warning(
                    rng,
                    DiagnosticCode.QUILISMA_NO_FOLLOWING_NOTE,
                    f"Quilisma '{quilisma}' should be followed by a higher note",
                )
            )
        elif PITCH_VALUES[following.group(0)] <= PITCH_VALUES[note]:
            after = following.group(0)
            out.append(
                msg.warning(
                    rng,
                    DiagnosticCode.QUILISMA_ASCENDING_MOTION,
                    f"Quilisma should be followed by a higher note. Currently '{quilisma}' "
                    f"is followed by '{after}' (same or lower pitch)",
                )
            )
    return out


def check_ambitus(syllable: Syllable, snippets: list[Snippet]) -> list[Diagnostic]:
    values = [PITCH_VALUES[ch] for s in snippets for _, ch in pitches(s.content)]
    if values and max(values) - min(values) > MAX_AMBITUS:
        return [msg.warning(syllable.music.range, DiagnosticCode.LARGE_AMBITUS, msg.LARGE_AMBITUS)]
    return []


def check_first_syllable(syllable: Syllable, snippets: list[Snippet], index: LineIndex) -> list[Diagnostic]:
    out: list[Diagnostic] = []
    text = syllable.text
    if text is not None and text.content.startswith("<e>"):
        out.append(msg.error(text.range, DiagnosticCode.ELISION_AT_SCORE_START, msg.ELISION_AT_SCORE_INITIAL))

    for s in snippets:
        content = blank_out(s.content, BRACKETED_RE)
        if LINE_BREAK_RE.search(content):
            out.append(
                msg.error(
                    index.range(s.offset, s.end),
                    DiagnosticCode.LINEBREAK_FIRST_SYLLABLE,
                    msg.LINE_BREAK_NOT_SUPPORTED_FIRST_SYLLABLE,
                )
            )
        lead = len(content) - len(content.lstrip())
        for clef in CLEF_RE.finditer(content):
            if s.index == 0 and clef.start() == lead:
                continue
            out.append(
                msg.error(
                    index.range(s.offset + clef.start(), s.offset + clef.end()),
                    DiagnosticCode.CLEF_CHANGE_FIRST_SYLLABLE,
                    msg.CLEF_CHANGE_NOT_SUPPORTED_FIRST_SYLLABLE,
                )
            )
    return out


def check_style(element: TextElement) -> list[Diagnostic]:
    out: list[Diagnostic] = []
    content = element.content
    if content.count(CENTER_TAG) >= 2:
        out.append(msg.warning(element.range, DiagnosticCode.DUPLICATE_CENTER, msg.SYLLABLE_ALREADY_HAS_CENTER))
    if content.count(PROTRUSION_TAG) >= 2:
        out.append(
            msg.warning(element.range, DiagnosticCode.DUPLICATE_PROTRUSION, msg.SYLLABLE_ALREADY_HAS_PROTRUSION)
        )
    protrusion = content.find(PROTRUSION_TAG)
    if protrusion != -1 and content.find(CENTER_TAG, protrusion) != -1:
        out.append(
            msg.warning(
                element.range, DiagnosticCode.CENTER_AFTER_PROTRUSION, msg.CENTER_NOT_ALLOWED_AFTER_PROTRUSION
            )
        )
    return out


def check_rendering(
    document: Document, context: ValidationContext, index: LineIndex | None = None
) -> list[Diagnostic]:
    index = index or LineIndex(document.text)
    out: list[Diagnostic] = []
    first_seen = False

    for syllable, snippets in iter_groups(document):
        gabc = gabc_snippets(snippets, context)
        for s in gabc:
            out.extend(check_quilisma(s, index))
        out.extend(check_ambitus(syllable, gabc))
        if not first_seen and syllable.text is not None:
            first_seen = True
            out.extend(check_first_syllable(syllable, gabc, index))

    for element in document.text_elements():
        out.extend(check_style(element))
    return out
