import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1] / "src"))
from gabc_lint.common.config import AnalyzerSettings
from gabc_lint.common.context import NabcFont, ValidationContext
from gabc_lint.common.diagnostics import SOURCE, DiagnosticCode, Severity
from gabc_lint.common.exceptions import InvariantViolation
from gabc_lint.nabc.glyphs import BASIC_GLYPHS, get_glyph, is_glyph_in_font
from gabc_lint.nabc.letters import SIGNIFICANT_LETTERS, TIRONIAN_NOTES, get_letter
from gabc_lint.parse.document import parse_document
from gabc_lint.services.analyzer import analyze, syllable_statistics, validate

CLEAN = "name: Kyrie;\nmode: 1;\n%%\n(c4) Ky(f)ri(g)e(h)\n"


def test_clean_score_has_no_diagnostics() -> None:
    result = analyze(CLEAN)
    assert result.diagnostics == []
    assert not result.has_errors


def test_diagnostics_follow_pass_order() -> None:
    result = analyze("%%\nA(f|g)")
    codes = [d.code for d in result.diagnostics]
    assert codes == [DiagnosticCode.MISSING_NAME, DiagnosticCode.INVALID_PIPE_WITHOUT_NABC]
    assert all(d.source == SOURCE for d in result.diagnostics)
    assert result.has_errors


def test_severity_uses_lsp_numbers() -> None:
    assert int(Severity.ERROR) == 1
    assert int(Severity.WARNING) == 2
    assert int(Severity.INFORMATION) == 3


def test_settings_switch_passes_off() -> None:
    text = "name: A;\nnabc-lines: 1;\n%%\nBad(gwf|g)"
    full = {d.code for d in analyze(text).diagnostics}
    assert DiagnosticCode.ALTERNATION_VIOLATION in full
    assert DiagnosticCode.QUILISMA_GLYPH_BREAK in full

    no_lines = analyze(text, settings=AnalyzerSettings(enable_nabc_lines_validation=False))
    assert DiagnosticCode.ALTERNATION_VIOLATION not in {d.code for d in no_lines.diagnostics}

    no_semantic = analyze(text, settings=AnalyzerSettings(enable_semantic_validation=False))
    codes = {d.code for d in no_semantic.diagnostics}
    assert DiagnosticCode.QUILISMA_GLYPH_BREAK not in codes
    assert DiagnosticCode.ALTERNATION_VIOLATION in codes


def test_lenient_settings_downgrade_violations() -> None:
    text = "name: A;\nnabc-lines: 1;\n%%\nA(f|g)"
    result = analyze(text, settings=AnalyzerSettings(strict_alternation_checking=False))
    (violation,) = [d for d in result.diagnostics if d.code == DiagnosticCode.ALTERNATION_VIOLATION]
    assert violation.severity == Severity.WARNING


def test_font_argument_overrides_settings() -> None:
    text = "name: A;\nnabc-lines: 1;\n%%\nA(f|un)"
    assert DiagnosticCode.FONT_INCOMPATIBILITY in {d.code for d in analyze(text).diagnostics}
    assert analyze(text, font="grelaon").diagnostics == []


def test_unknown_pass_is_a_programming_error() -> None:
    doc = parse_document(CLEAN)
    with pytest.raises(InvariantViolation):
        validate(doc, ValidationContext.for_document(doc), passes=["headers", "nope"])


def test_context_reads_staff_lines() -> None:
    doc = parse_document("name: A;\nstaff-lines: 5;\nnabc-lines: 2;\n%%\n")
    ctx = ValidationContext.for_document(doc, font=NabcFont.LAON)
    assert ctx.staff_lines == 5
    assert ctx.alternation.period == 2
    assert ctx.font is NabcFont.LAON


def test_syllable_statistics() -> None:
    stats = syllable_statistics(parse_document("name: A;\n%%\n(c4) A(f) B(g|vi) () tail"))
    assert stats.total == 4
    assert stats.with_text == 2
    assert stats.with_music == 3
    assert stats.with_both == 2
    assert stats.empty == 1
    assert stats.nabc_bearing == 1
    assert stats.gabc_only == 2


def test_glyph_catalog() -> None:
    assert get_glyph("vi").name == "virga"
    assert get_glyph("xx") is None
    assert all(len(code) == 2 for code in BASIC_GLYPHS)
    assert is_glyph_in_font("un", NabcFont.LAON)
    assert not is_glyph_in_font("un", NabcFont.ST_GALL)
    assert not is_glyph_in_font("gr", NabcFont.LAON)


def test_letter_catalog() -> None:
    note = get_letter("ltdo")
    assert note is not None and note.is_tironian
    assert 5 not in note.positions
    assert all(5 not in t.positions for t in TIRONIAN_NOTES.values())
    assert not any(letter.is_tironian for letter in SIGNIFICANT_LETTERS.values())
    assert get_letter("lsc").fonts == frozenset({NabcFont.ST_GALL, NabcFont.ST_GALL_MODERN})


def test_unterminated_header_keeps_following_headers() -> None:
    result = analyze("nabc-lines: 1\nname: A;\n%%\n(c4) A(f|vi)")
    assert result.document.header("nabc-lines").value == "1"
    codes = {d.code for d in result.diagnostics}
    assert DiagnosticCode.MISSING_NAME not in codes
    assert DiagnosticCode.INVALID_NABC_LINES not in codes
