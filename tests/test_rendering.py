import sys
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[1] / "src"))
from gabc_lint.common import diagnostics as msg
from gabc_lint.common.context import ValidationContext
from gabc_lint.common.diagnostics import DiagnosticCode, Severity
from gabc_lint.parse.document import parse_document
from gabc_lint.rules.rendering import check_rendering
from gabc_lint.services.analyzer import analyze

QUILISMA_CODES = {
    DiagnosticCode.QUILISMA_GLYPH_BREAK,
    DiagnosticCode.QUILISMA_ASCENDING_MOTION,
    DiagnosticCode.QUILISMA_NO_FOLLOWING_NOTE,
}


def _rendering(text: str):
    doc = parse_document(text)
    return check_rendering(doc, ValidationContext.for_document(doc))


def _count(diags, code: DiagnosticCode) -> int:
    return sum(1 for d in diags if d.code == code)


def test_broken_quilismas_are_left_alone() -> None:
    result = analyze("name: Q;\n%%\nGood(g!wh)example(f!wi)")
    assert [d for d in result.diagnostics if d.code in QUILISMA_CODES] == []


def test_unbroken_quilismas_with_descent() -> None:
    result = analyze("name: Q;\n%%\nBad(gwf)worse(fwe)")
    assert _count(result.diagnostics, DiagnosticCode.QUILISMA_GLYPH_BREAK) == 2
    assert _count(result.diagnostics, DiagnosticCode.QUILISMA_ASCENDING_MOTION) == 2


def test_glyph_break_suggestion_text() -> None:
    diags = _rendering("name: Q;\n%%\nA(fgwh)")
    (suggestion,) = [d for d in diags if d.code == DiagnosticCode.QUILISMA_GLYPH_BREAK]
    assert suggestion.severity == Severity.INFORMATION
    assert "add ! before 'gw'" in suggestion.message
    assert _count(diags, DiagnosticCode.QUILISMA_ASCENDING_MOTION) == 0


def test_quilisma_without_following_note() -> None:
    diags = _rendering("name: Q;\n%%\nA(gw)")
    assert _count(diags, DiagnosticCode.QUILISMA_NO_FOLLOWING_NOTE) == 1
    assert _count(diags, DiagnosticCode.QUILISMA_GLYPH_BREAK) == 1


def test_inclinatum_counts_as_following_note() -> None:
    diags = _rendering("name: Q;\n%%\nA(gwH)")
    assert [d.code for d in diags if d.code in QUILISMA_CODES] == [DiagnosticCode.QUILISMA_GLYPH_BREAK]

    diags = _rendering("name: Q;\n%%\nA(hwG)")
    assert _count(diags, DiagnosticCode.QUILISMA_ASCENDING_MOTION) == 1
    assert _count(diags, DiagnosticCode.QUILISMA_NO_FOLLOWING_NOTE) == 0


def test_nabc_positions_are_not_checked_for_quilisma() -> None:
    diags = _rendering("name: Q;\nnabc-lines: 1;\n%%\nA(f|gwf)")
    assert [d for d in diags if d.code in QUILISMA_CODES] == []


def test_large_ambitus_once_per_syllable() -> None:
    diags = _rendering("name: Q;\n%%\nA(ak) B(dk) C(c4 ak)")
    assert _count(diags, DiagnosticCode.LARGE_AMBITUS) == 2
    assert all(d.message == msg.LARGE_AMBITUS for d in diags if d.code == DiagnosticCode.LARGE_AMBITUS)


def test_line_break_on_first_syllable() -> None:
    diags = _rendering("name: Q;\n%%\n(c4) A(f z) B(g z)")
    assert _count(diags, DiagnosticCode.LINEBREAK_FIRST_SYLLABLE) == 1
    (d,) = [d for d in diags if d.code == DiagnosticCode.LINEBREAK_FIRST_SYLLABLE]
    assert d.message == "line break is not supported on the first syllable"
    assert d.severity == Severity.ERROR


def test_custos_is_not_a_line_break() -> None:
    diags = _rendering("name: Q;\n%%\nA(fz0)")
    assert _count(diags, DiagnosticCode.LINEBREAK_FIRST_SYLLABLE) == 0


def test_clef_change_on_first_syllable() -> None:
    diags = _rendering("name: Q;\n%%\nA(f c3 g)")
    assert [d.message for d in diags if d.code == DiagnosticCode.CLEF_CHANGE_FIRST_SYLLABLE] == [
        "clef change is not supported on the first syllable"
    ]
    assert _count(_rendering("name: Q;\n%%\nA(c4 f)"), DiagnosticCode.CLEF_CHANGE_FIRST_SYLLABLE) == 0


def test_elision_at_score_start() -> None:
    diags = _rendering("name: Q;\n%%\n<e>A</e>(f) B(g)")
    assert [d.message for d in diags] == ["score initial may not be in an elision"]


def test_style_conflicts() -> None:
    centers = _rendering("name: Q;\n%%\nx(f) <c>A</c><c>B</c>(g)")
    assert [d.code for d in centers] == [DiagnosticCode.DUPLICATE_CENTER]
    assert centers[0].message == "syllable already has center; ignoring additional center"

    protrusions = _rendering("name: Q;\n%%\nx(f) <pr>A</pr><pr>B</pr>(g)")
    assert [d.code for d in protrusions] == [DiagnosticCode.DUPLICATE_PROTRUSION]

    mixed = _rendering("name: Q;\n%%\nx(f) <pr>A</pr><c>B</c>(g)")
    assert [d.code for d in mixed] == [DiagnosticCode.CENTER_AFTER_PROTRUSION]
