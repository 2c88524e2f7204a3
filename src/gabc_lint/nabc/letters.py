"""
Significant letters (`ls...`) and Tironian notes (`lt...`).

Codes are stored with their prefix and without the position digit: `lsal`, `ltdo`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from gabc_lint.common.context import NabcFont

LetterCategory = Literal["performance", "pitch", "rhythm", "expression", "tironian"]

_ST_GALL = frozenset({NabcFont.ST_GALL, NabcFont.ST_GALL_MODERN})
_LAON = frozenset({NabcFont.LAON})

ST_GALL_POSITIONS = frozenset({1, 2, 3, 4, 6, 7, 8, 9})
LAON_POSITIONS = frozenset(range(1, 10))
# position 5 (centered on the neume) is not available to Tironian notes
TIRONIAN_POSITIONS = frozenset({1, 2, 3, 4, 6, 7, 8, 9})


@dataclass(frozen=True)
class SignificantLetter:
    code: str
    meaning: str
    fonts: frozenset[NabcFont]
    positions: frozenset[int]
    category: LetterCategory

    @property
    def is_tironian(self) -> bool:
        return self.category == "tironian"


def _st_gall(code: str, meaning: str, category: LetterCategory) -> SignificantLetter:
    return SignificantLetter("ls" + code, meaning, _ST_GALL, ST_GALL_POSITIONS, category)


def _laon(code: str, meaning: str, category: LetterCategory) -> SignificantLetter:
    return SignificantLetter("ls" + code, meaning, _LAON, LAON_POSITIONS, category)


def _tironian(code: str, meaning: str) -> SignificantLetter:
    return SignificantLetter("lt" + code, meaning, _LAON, TIRONIAN_POSITIONS, "tironian")


SIGNIFICANT_LETTERS: dict[str, SignificantLetter] = {
    letter.code: letter
    for letter in (
        _st_gall("al", "altius", "pitch"),
        _st_gall("am", "altius mediocriter", "pitch"),
        _st_gall("b", "bene", "expression"),
        _st_gall("c", "celeriter", "rhythm"),
        _st_gall("cm", "celeriter mediocriter", "rhythm"),
        _st_gall("co", "coniunguntur", "performance"),
        _st_gall("cw", "celeriter (wide form)", "rhythm"),
        _st_gall("d", "deprimatur", "pitch"),
        _st_gall("e", "equaliter", "performance"),
        _st_gall("eq", "equaliter", "performance"),
        _st_gall("ew", "equaliter (wide form)", "performance"),
        _st_gall("f", "fastigium", "pitch"),
        _st_gall("fr", "fragor", "expression"),
        _st_gall("i", "inferius", "pitch"),
        _st_gall("im", "inferius mediocriter", "pitch"),
        _st_gall("l", "levare", "pitch"),
        _st_gall("lt", "levare tenete", "performance"),
        _st_gall("m", "mediocriter", "performance"),
        _st_gall("moll", "molliter", "expression"),
        _st_gall("p", "parvum", "expression"),
        _st_gall("par", "paratim", "performance"),
        _st_gall("r", "resupinum", "performance"),
        _st_gall("sc", "sursum celeriter", "performance"),
        _st_gall("simil", "similiter", "performance"),
        _st_gall("simul", "simul", "performance"),
        _st_gall("sm", "sursum mediocriter", "pitch"),
        _st_gall("st", "sursum tenere", "performance"),
        _st_gall("sta", "statim", "rhythm"),
        _st_gall("t", "tenere", "rhythm"),
        _st_gall("tw", "tenere (wide form)", "rhythm"),
        _st_gall("tb", "tenere bene", "performance"),
        _st_gall("tm", "tenere mediocriter", "performance"),
        _st_gall("v", "valde", "expression"),
        _st_gall("vol", "volubiliter", "performance"),
        _st_gall("x", "expectare", "rhythm"),
        _laon("a", "augete", "expression"),
        _laon("eq-", "equaliter", "performance"),
        _laon("equ", "equaliter", "performance"),
        _laon("h", "humiliter", "expression"),
        _laon("hn", "humiliter nectum", "performance"),
        _laon("hp", "humiliter parum", "expression"),
        _laon("n", "non (tenere), negare, nectum, naturaliter", "performance"),
        _laon("nl", "non levare", "pitch"),
        _laon("nt", "non tenere", "rhythm"),
        _laon("md", "mediocriter", "performance"),
        _laon("s", "sursum", "pitch"),
        _laon("simp", "simpliciter", "expression"),
        _laon("simpl", "simpliciter", "expression"),
        _laon("sp", "sursum parum", "pitch"),
        _laon("th", "tenere humiliter", "performance"),
    )
}

TIRONIAN_NOTES: dict[str, SignificantLetter] = {
    letter.code: letter
    for letter in (
        _tironian("i", "iusum"),
        _tironian("do", "deorsum"),
        _tironian("dr", "devertit"),
        _tironian("dx", "devexum"),
        _tironian("ps", "prode sub eam (trade subtus)"),
        _tironian("qm", "quam mox"),
        _tironian("sb", "sub"),
        _tironian("se", "seorsum"),
        _tironian("sj", "subjice"),
        _tironian("sl", "saltim"),
        _tironian("sn", "sonare"),
        _tironian("sp", "supra"),
        _tironian("sr", "sursum"),
        _tironian("st", "saltate (salte)"),
        _tironian("us", "ut supra"),
    )
}

ALL_LETTERS: dict[str, SignificantLetter] = {**SIGNIFICANT_LETTERS, **TIRONIAN_NOTES}


def get_letter(code: str) -> SignificantLetter | None:
    return ALL_LETTERS.get(code)
