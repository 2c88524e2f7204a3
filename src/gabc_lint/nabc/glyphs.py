"""NABC basic glyph catalog (GregorioNabcRef), keyed by the two-letter code."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from gabc_lint.common.context import NabcFont

GlyphCategory = Literal["simple", "compound", "special"]

_ALL = frozenset(NabcFont)
_ST_GALL = frozenset({NabcFont.ST_GALL, NabcFont.ST_GALL_MODERN})
_LAON = frozenset({NabcFont.LAON})


@dataclass(frozen=True)
class NabcGlyph:
    code: str
    name: str
    fonts: frozenset[NabcFont]
    category: GlyphCategory


def _g(code: str, name: str, fonts: frozenset[NabcFont], category: GlyphCategory) -> NabcGlyph:
    return NabcGlyph(code=code, name=name, fonts=fonts, category=category)


BASIC_GLYPHS: dict[str, NabcGlyph] = {
    g.code: g
    for g in (
        _g("vi", "virga", _ALL, "simple"),
        _g("pu", "punctum", _ALL, "simple"),
        _g("ta", "tractulus", _ALL, "simple"),
        _g("gr", "gravis", _ST_GALL, "simple"),
        _g("cl", "clivis", _ALL, "compound"),
        _g("pe", "pes", _ALL, "compound"),
        _g("po", "porrectus", _ALL, "compound"),
        _g("to", "torculus", _ALL, "compound"),
        _g("ci", "climacus", _ALL, "compound"),
        _g("sc", "scandicus", _ALL, "compound"),
        _g("pf", "porrectus flexus", _ALL, "compound"),
        _g("sf", "scandicus flexus", _ALL, "compound"),
        _g("tr", "torculus resupinus", _ALL, "compound"),
        _g("st", "stropha", _ST_GALL, "simple"),
        _g("ds", "distropha", _ALL, "compound"),
        _g("ts", "tristropha", _ALL, "compound"),
        _g("tg", "trigonus", _ALL, "special"),
        _g("bv", "bivirga", _ALL, "compound"),
        _g("tv", "trivirga", _ALL, "compound"),
        _g("pr", "pressus maior", _ALL, "special"),
        _g("pi", "pressus minor", _ALL, "special"),
        _g("vs", "virga strata", _ALL, "simple"),
        _g("or", "oriscus", _ALL, "special"),
        _g("sa", "salicus", _ALL, "compound"),
        _g("pq", "pes quassus", _ALL, "compound"),
        _g("ql", "quilisma (3 loops)", _ALL, "special"),
        _g("qi", "quilisma (2 loops)", _ST_GALL, "special"),
        _g("pt", "pes stratus", _ALL, "compound"),
        _g("ni", "nihil", _ALL, "special"),
        _g("un", "uncinus", _LAON, "simple"),
        _g("oc", "oriscus-clivis", _LAON, "compound"),
    )
}

# glyphs on which diminutive liquescence (~) is idiomatic
DIMINUTIVE_GLYPHS = frozenset({"cl", "po", "tr"})


def get_glyph(code: str) -> NabcGlyph | None:
    return BASIC_GLYPHS.get(code)


def is_glyph_in_font(code: str, font: NabcFont) -> bool:
    glyph = BASIC_GLYPHS.get(code)
    return glyph is not None and font in glyph.fonts
