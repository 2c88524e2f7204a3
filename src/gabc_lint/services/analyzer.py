from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from gabc_lint.common.config import AnalyzerSettings
from gabc_lint.common.context import NabcFont, ValidationContext
from gabc_lint.common.diagnostics import Diagnostic, Severity
from gabc_lint.common.exceptions import InvariantViolation
from gabc_lint.common.ir import Document
from gabc_lint.common.logging import log
from gabc_lint.common.source import LineIndex
from gabc_lint.parse.document import parse_document
from gabc_lint.services.registry import enabled_passes, get_registry


@dataclass
class AnalysisResult:
    document: Document
    diagnostics: list[Diagnostic]

    def count(self, severity: Severity) -> int:
        return sum(1 for d in self.diagnostics if d.severity == severity)

    @property
    def has_errors(self) -> bool:
        return self.count(Severity.ERROR) > 0


@dataclass
class SyllableStats:
    total: int
    with_text: int
    with_music: int
    with_both: int
    empty: int
    nabc_bearing: int
    gabc_only: int


def validate(
    document: Document,
    context: ValidationContext,
    passes: Iterable[str] | None = None,
    index: LineIndex | None = None,
) -> list[Diagnostic]:
    """Run the passes over one parsed document; diagnostics come in pass order, then source order."""
    registry = get_registry()
    index = index or LineIndex(document.text)
    out: list[Diagnostic] = []
    for name in passes if passes is not None else registry:
        fn = registry.get(name)
        if fn is None:
            raise InvariantViolation(f"unknown validation pass: {name}")
        out.extend(fn(document, context, index))
    return out


def analyze(
    text: str,
    font: NabcFont | str | None = None,
    settings: AnalyzerSettings | None = None,
) -> AnalysisResult:
    settings = settings or AnalyzerSettings()
    font = NabcFont(font) if font is not None else settings.font

    index = LineIndex(text)
    document = parse_document(text, index)
    context = ValidationContext.for_document(
        document, font=font, strict_alternation=settings.strict_alternation_checking
    )
    diagnostics = validate(document, context, enabled_passes(settings), index)

    result = AnalysisResult(document=document, diagnostics=diagnostics)
    log.debug(
        "analyze_done",
        font=font.value,
        period=context.alternation.period,
        syllables=len(document.body.syllables),
        errors=result.count(Severity.ERROR),
        warnings=result.count(Severity.WARNING),
        information=result.count(Severity.INFORMATION),
    )
    return result


def syllable_statistics(document: Document) -> SyllableStats:
    syllables = document.body.syllables
    with_text = sum(1 for s in syllables if s.text is not None)
    with_music = sum(1 for s in syllables if s.music is not None)
    with_both = sum(1 for s in syllables if s.text is not None and s.music is not None)
    nabc = sum(1 for s in syllables if s.music is not None and s.music.is_nabc_bearing)
    return SyllableStats(
        total=len(syllables),
        with_text=with_text,
        with_music=with_music,
        with_both=with_both,
        empty=sum(1 for s in syllables if s.is_empty),
        nabc_bearing=nabc,
        gabc_only=with_music - nabc,
    )
