from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class Position(_Frozen):
    line: int
    character: int


class Range(_Frozen):
    start: Position
    end: Position


class HeaderField(_Frozen):
    name: str
    value: str
    range: Range

    @property
    def key(self) -> str:
        return self.name.lower()


class TextElement(_Frozen):
    content: str
    offset: int
    range: Range


class MusicElement(_Frozen):
    content: str
    # absolute offset of the first character inside the parentheses
    offset: int
    range: Range

    @property
    def is_nabc_bearing(self) -> bool:
        return "|" in self.content


class Syllable(_Frozen):
    text: TextElement | None = None
    music: MusicElement | None = None
    range: Range

    @property
    def is_empty(self) -> bool:
        return self.text is None and self.music is None


class Body(_Frozen):
    start_line: int
    offset: int
    syllables: list[Syllable] = []
    trailing_text: TextElement | None = None


class Document(_Frozen):
    text: str
    headers: list[HeaderField]
    body: Body

    def headers_named(self, name: str) -> list[HeaderField]:
        key = name.lower()
        return [h for h in self.headers if h.key == key]

    def header(self, name: str) -> HeaderField | None:
        # gregorio keeps the last definition of a repeated header
        found = self.headers_named(name)
        return found[-1] if found else None

    def text_elements(self) -> list[TextElement]:
        elements = [s.text for s in self.body.syllables if s.text is not None]
        if self.body.trailing_text is not None:
            elements.append(self.body.trailing_text)
        return elements
