from __future__ import annotations

import re
from dataclasses import dataclass

from gabc_lint.common.ir import MusicElement, Syllable, TextElement
from gabc_lint.common.source import LineIndex

SYLLABLE_RE = re.compile(r"([^()]*)\(([^)]*)\)")


@dataclass
class TokenizeResult:
    syllables: list[Syllable]
    trailing_text: TextElement | None


def _text_element(raw: str, raw_offset: int, index: LineIndex) -> TextElement | None:
    content = raw.strip()
    if not content:
        return None
    start = raw_offset + (len(raw) - len(raw.lstrip()))
    return TextElement(content=content, offset=start, range=index.range(start, start + len(content)))


def tokenize_syllables(source: str, body_offset: int, index: LineIndex | None = None) -> TokenizeResult:
    """
    Scan the body for `text(music)` units.

    `source` is the whole document and `body_offset` the position where the body
    starts, so every element carries absolute offsets and document positions.
    """
    index = index or LineIndex(source)
    syllables: list[Syllable] = []
    pos = body_offset

    for m in SYLLABLE_RE.finditer(source, body_offset):
        text = _text_element(m.group(1), m.start(1), index)
        interior = m.group(2)

        music: MusicElement | None = None
        # "()" without text carries nothing at all
        if text is not None or interior.strip():
            music = MusicElement(
                content=interior,
                offset=m.start(2),
                range=index.range(m.start(2), m.end(2)),
            )

        start = text.offset if text is not None else m.start(0) + len(m.group(1))
        syllables.append(Syllable(text=text, music=music, range=index.range(start, m.end(0))))
        pos = m.end(0)

    trailing = _text_element(source[pos:], pos, index)
    return TokenizeResult(syllables=syllables, trailing_text=trailing)
