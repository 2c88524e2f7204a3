from __future__ import annotations

from bisect import bisect_right

from gabc_lint.common.ir import Position, Range


class LineIndex:
    """Maps absolute character offsets of a document to zero-based line/column positions."""

    def __init__(self, text: str):
        self._text = text
        starts = [0]
        for i, ch in enumerate(text):
            if ch == "\n":
                starts.append(i + 1)
        self._line_starts = starts

    def position(self, offset: int) -> Position:
        offset = max(0, min(offset, len(self._text)))
        line = bisect_right(self._line_starts, offset) - 1
        return Position(line=line, character=offset - self._line_starts[line])

    def range(self, start: int, end: int) -> Range:
        return Range(start=self.position(start), end=self.position(end))
