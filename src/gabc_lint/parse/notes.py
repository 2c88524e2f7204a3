"""GABC note-level helpers shared by the rendering and notation rules."""

from __future__ import annotations

import re

from gabc_lint.parse.snippets import BRACKETED_RE, GABC_LOWER_ALPHABET, blank_out

PITCH_LETTERS = "abcdefghijklmn"
# a=0 ... n=13, p=14 (upper case = punctum inclinatum, same pitch)
PITCH_VALUES: dict[str, int] = {ch: i for i, ch in enumerate(PITCH_LETTERS)}
PITCH_VALUES["p"] = 14
PITCH_VALUES.update({ch.upper(): v for ch, v in list(PITCH_VALUES.items())})

GABC_ALPHABET = frozenset(GABC_LOWER_ALPHABET | {ch.upper() for ch in GABC_LOWER_ALPHABET})

CLEF_RE = re.compile(r"(?<![A-Za-z])([cf])(b?)(\d)")


def pitch_value(ch: str) -> int | None:
    return PITCH_VALUES.get(ch)


def highest_pitch(staff_lines: int) -> int:
    return 2 * staff_lines + 4


def note_text(content: str) -> str:
    """Snippet content with brackets and clef tokens blanked out."""
    return blank_out(blank_out(content, BRACKETED_RE), CLEF_RE)


def pitches(content: str) -> list[tuple[int, str]]:
    """(position, letter) of every pitch letter outside brackets and clefs."""
    return [(i, ch) for i, ch in enumerate(note_text(content)) if ch in PITCH_VALUES]
