"""
NABC complex-glyph grammar.

    snippet    := (spacing | neume | whitespace)*
    spacing    := '//' | '/' | '``' | '`'
    neume      := component ('!' component)* modifier* pitch? subpunctis* letter*
    component  := [a-z]{2}
    modifier   := [SGM-~>] digits?
    pitch      := 'h' [a-np]
    subpunctis := ('su' | 'pp') modifier-letter? digits
    letter     := ('ls' | 'lt') [a-z]+ '-'? digit

Neumes follow each other directly (`peGlsa6tohl` is `peG lsa6` + `to hl`).
Text that fits no production is skipped up to the next whitespace.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from gabc_lint.common import diagnostics as msg
from gabc_lint.common.context import NabcFont
from gabc_lint.common.diagnostics import Diagnostic, DiagnosticCode
from gabc_lint.common.source import LineIndex
from gabc_lint.nabc.glyphs import DIMINUTIVE_GLYPHS, get_glyph, is_glyph_in_font
from gabc_lint.nabc.letters import get_letter

MODIFIER_EPISEMA = "-"
MODIFIER_AUGMENTIVE = ">"
MODIFIER_DIMINUTIVE = "~"

PITCH_RE = re.compile(r"h[a-np]")
SUBPUNCTIS_MODIFIERS = frozenset("tuvwxy")
LAON_SUBPUNCTIS_MODIFIERS = frozenset("nqzx")

MAX_MODIFIERS = 3
MAX_MODIFIER_VARIANT = 5
MAX_SUBPUNCTIS_COUNT = 10
EXCESSIVE_SPACING_RUN = 5

NEUME_RE = re.compile(
    r"""
    (?P<components> [a-z]{2} (?: ! [a-z]{2} )* )
    (?P<modifiers>  (?: [SGM\-~>] \d* )* )
    (?P<pitch>      h [a-z]? )?
    (?P<subpunctis> (?: (?:su|pp) [a-z]? \d+ )* )
    (?P<letters>    (?: l[st] [a-z]+ -? \d )* )
    """,
    flags=re.VERBOSE,
)
MODIFIER_RE = re.compile(r"([SGM\-~>])(\d*)")
SUBPUNCTIS_RE = re.compile(r"(su|pp)([a-z]?)(\d+)")
LETTER_RE = re.compile(r"(l[st][a-z]+-?)(\d)")


@dataclass(frozen=True)
class NabcModifier:
    modifier: str
    variant: int | None = None


@dataclass(frozen=True)
class Subpunctis:
    type: str  # "su" | "pp"
    modifier: str | None
    count: int
    offset: int
    text: str


@dataclass(frozen=True)
class LetterRef:
    code: str
    position: int
    offset: int
    text: str


@dataclass
class NabcNeume:
    components: list[str]
    offset: int
    text: str
    modifiers: list[NabcModifier] = field(default_factory=list)
    pitch: str | None = None
    pitch_offset: int = 0
    subpunctis: list[Subpunctis] = field(default_factory=list)
    letters: list[LetterRef] = field(default_factory=list)

    @property
    def base(self) -> str:
        return self.components[0]

    @property
    def is_compound(self) -> bool:
        return len(self.components) > 1

    @property
    def end(self) -> int:
        return self.offset + len(self.text)


@dataclass
class SpacingRun:
    text: str
    offset: int

    @property
    def adjustments(self) -> list[str]:
        out: list[str] = []
        i = 0
        while i < len(self.text):
            pair = self.text[i : i + 2]
            if pair in ("//", "``"):
                out.append(pair)
                i += 2
            else:
                out.append(self.text[i])
                i += 1
        return out


@dataclass
class ParsedSnippet:
    spacings: list[SpacingRun] = field(default_factory=list)
    neumes: list[NabcNeume] = field(default_factory=list)
    # (offset, text) of fragments no production accepted
    skipped: list[tuple[int, str]] = field(default_factory=list)


def _parse_neume(m: re.Match[str], base_offset: int) -> NabcNeume:
    neume = NabcNeume(
        components=m.group("components").split("!"),
        offset=base_offset + m.start(),
        text=m.group(0),
    )
    for mod in MODIFIER_RE.finditer(m.group("modifiers")):
        neume.modifiers.append(
            NabcModifier(modifier=mod.group(1), variant=int(mod.group(2)) if mod.group(2) else None)
        )
    if m.group("pitch") is not None:
        neume.pitch = m.group("pitch")
        neume.pitch_offset = base_offset + m.start("pitch")
    sub_start = base_offset + m.start("subpunctis")
    for sp in SUBPUNCTIS_RE.finditer(m.group("subpunctis")):
        neume.subpunctis.append(
            Subpunctis(
                type=sp.group(1),
                modifier=sp.group(2) or None,
                count=int(sp.group(3)),
                offset=sub_start + sp.start(),
                text=sp.group(0),
            )
        )
    letters_start = base_offset + m.start("letters")
    for lt in LETTER_RE.finditer(m.group("letters")):
        neume.letters.append(
            LetterRef(
                code=lt.group(1),
                position=int(lt.group(2)),
                offset=letters_start + lt.start(),
                text=lt.group(0),
            )
        )
    return neume


def parse_snippet(snippet: str, offset: int = 0) -> ParsedSnippet:
    result = ParsedSnippet()
    pos = 0
    n = len(snippet)
    while pos < n:
        ch = snippet[pos]
        if ch.isspace():
            pos += 1
            continue
        if ch in "/`":
            start = pos
            while pos < n and snippet[pos] in "/`":
                pos += 1
            result.spacings.append(SpacingRun(text=snippet[start:pos], offset=offset + start))
            continue
        m = NEUME_RE.match(snippet, pos)
        if m is not None:
            result.neumes.append(_parse_neume(m, offset))
            pos = m.end()
            continue
        start = pos
        while pos < n and not snippet[pos].isspace():
            pos += 1
        result.skipped.append((offset + start, snippet[start:pos]))
    return result


class NabcGrammarValidator:
    """Validates NABC snippets for one font. Holds no state between calls."""

    def __init__(self, font: NabcFont, index: LineIndex):
        self.font = font
        self.index = index

    def validate_snippet(self, snippet: str, offset: int) -> list[Diagnostic]:
        parsed = parse_snippet(snippet, offset)
        out: list[Diagnostic] = []
        for run in parsed.spacings:
            if len(run.text) >= EXCESSIVE_SPACING_RUN:
                out.append(
                    msg.warning(
                        self.index.range(run.offset, run.offset + len(run.text)),
                        DiagnosticCode.EXCESSIVE_SPACING,
                        "Excessive spacing adjustments may cause layout issues",
                    )
                )
        for neume in parsed.neumes:
            out.extend(self.validate_neume(neume))
        return out

    def validate_neume(self, neume: NabcNeume) -> list[Diagnostic]:
        out: list[Diagnostic] = []
        out.extend(self._check_components(neume))
        out.extend(self._check_modifiers(neume))
        out.extend(self._check_pitch(neume))
        out.extend(self._check_subpunctis(neume))
        out.extend(self._check_letters(neume))
        out.extend(self._check_semantics(neume))
        return out

    def _neume_range(self, neume: NabcNeume):
        return self.index.range(neume.offset, neume.end)

    def _check_components(self, neume: NabcNeume) -> list[Diagnostic]:
        out: list[Diagnostic] = []
        pos = neume.offset
        for code in neume.components:
            rng = self.index.range(pos, pos + len(code))
            pos += len(code) + 1
            if get_glyph(code) is None:
                out.append(msg.error(rng, DiagnosticCode.UNKNOWN_GLYPH, f"Unknown glyph code: {code}"))
            elif not is_glyph_in_font(code, self.font):
                out.append(
                    msg.error(
                        rng,
                        DiagnosticCode.FONT_INCOMPATIBILITY,
                        f"Glyph '{code}' not available in {self.font.value} font",
                    )
                )
        return out

    def _check_modifiers(self, neume: NabcNeume) -> list[Diagnostic]:
        out: list[Diagnostic] = []
        rng = self._neume_range(neume)
        for mod in neume.modifiers:
            if mod.modifier == MODIFIER_DIMINUTIVE and neume.base not in DIMINUTIVE_GLYPHS:
                out.append(
                    msg.warning(
                        rng,
                        DiagnosticCode.UNUSUAL_MODIFIER,
                        f"Diminutive liquescence (~) rarely used with {neume.base}",
                    )
                )
            if mod.variant is not None and mod.variant > MAX_MODIFIER_VARIANT:
                out.append(
                    msg.warning(
                        rng,
                        DiagnosticCode.HIGH_MODIFIER_VARIANT,
                        f"Unusual modifier variant number: {mod.variant}",
                    )
                )
        if len(neume.modifiers) > MAX_MODIFIERS:
            out.append(
                msg.warning(
                    rng,
                    DiagnosticCode.EXCESSIVE_MODIFIERS,
                    "Unusual number of modifiers - verify intended notation",
                )
            )
        return out

    def _check_pitch(self, neume: NabcNeume) -> list[Diagnostic]:
        if neume.pitch is None or PITCH_RE.fullmatch(neume.pitch):
            return []
        rng = self.index.range(neume.pitch_offset, neume.pitch_offset + len(neume.pitch))
        return [msg.error(rng, DiagnosticCode.INVALID_PITCH, f"Invalid pitch descriptor: {neume.pitch}")]

    def _check_subpunctis(self, neume: NabcNeume) -> list[Diagnostic]:
        out: list[Diagnostic] = []
        laon = self.font == NabcFont.LAON
        for sp in neume.subpunctis:
            rng = self.index.range(sp.offset, sp.offset + len(sp.text))
            if sp.count > MAX_SUBPUNCTIS_COUNT:
                out.append(
                    msg.warning(
                        rng,
                        DiagnosticCode.HIGH_SUBPUNCTIS_COUNT,
                        f"Unusually high count for {sp.type}: {sp.count}",
                    )
                )
            if sp.modifier is None:
                continue
            if laon and sp.modifier not in LAON_SUBPUNCTIS_MODIFIERS:
                out.append(
                    msg.error(
                        rng,
                        DiagnosticCode.LAON_MODIFIER_ERROR,
                        f"Modifier '{sp.modifier}' not available in Laon font",
                    )
                )
            elif not laon and sp.modifier not in SUBPUNCTIS_MODIFIERS:
                out.append(
                    msg.error(
                        rng,
                        DiagnosticCode.INVALID_SUBPUNCTIS_MODIFIER,
                        f"Modifier '{sp.modifier}' not available for {sp.type} in {self.font.value} font",
                    )
                )
        return out

    def _check_letters(self, neume: NabcNeume) -> list[Diagnostic]:
        out: list[Diagnostic] = []
        seen: dict[int, int] = {}
        for letter in neume.letters:
            rng = self.index.range(letter.offset, letter.offset + len(letter.text))
            seen[letter.position] = seen.get(letter.position, 0) + 1
            if seen[letter.position] == 2:
                out.append(
                    msg.warning(
                        rng,
                        DiagnosticCode.DUPLICATE_LETTER_POSITION,
                        f"Multiple significant letters at position {letter.position}",
                    )
                )

            definition = get_letter(letter.code)
            if definition is None:
                out.append(
                    msg.error(rng, DiagnosticCode.UNKNOWN_LETTER, f"Unknown significant letter: {letter.code}")
                )
                continue

            if definition.is_tironian and self.font != NabcFont.LAON:
                out.append(
                    msg.error(
                        rng,
                        DiagnosticCode.TIRONIAN_FONT_ERROR,
                        f"Tironian note '{letter.code}' only available in Laon font",
                    )
                )
            elif self.font not in definition.fonts:
                out.append(
                    msg.error(
                        rng,
                        DiagnosticCode.LETTER_FONT_INCOMPATIBILITY,
                        f"Letter '{letter.code}' not available in {self.font.value} font",
                    )
                )

            if letter.position not in definition.positions:
                kind = "Tironian note" if definition.is_tironian else "letter"
                out.append(
                    msg.error(
                        rng,
                        DiagnosticCode.INVALID_LETTER_POSITION,
                        f"Position {letter.position} not valid for {kind} '{letter.code}'",
                    )
                )
        return out

    def _check_semantics(self, neume: NabcNeume) -> list[Diagnostic]:
        out: list[Diagnostic] = []
        rng = self._neume_range(neume)
        if neume.is_compound and neume.pitch is None:
            out.append(
                msg.warning(
                    rng,
                    DiagnosticCode.MISSING_COMPOUND_PITCH,
                    "Compound glyph should specify pitch descriptor for all components",
                )
            )
        kinds = {m.modifier for m in neume.modifiers}
        if kinds & {MODIFIER_AUGMENTIVE, MODIFIER_DIMINUTIVE} and MODIFIER_EPISEMA in kinds:
            out.append(
                msg.information(
                    rng,
                    DiagnosticCode.UNUSUAL_MODIFIER_COMBINATION,
                    "Liquescence and episema modifiers rarely used together",
                )
            )
        return out
