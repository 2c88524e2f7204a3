from __future__ import annotations

import re
from collections import Counter
from dataclasses import dataclass

from gabc_lint.common import diagnostics as msg
from gabc_lint.common.context import ValidationContext
from gabc_lint.common.diagnostics import Diagnostic, DiagnosticCode
from gabc_lint.common.ir import Document, Range
from gabc_lint.common.source import LineIndex

# bold, italic, small caps, underline, verbatim, colored, elision,
# no line break area, protrusion, above-lines text
STYLE_TAGS = frozenset({"b", "i", "sc", "ul", "v", "c", "e", "nlba", "pr", "alt"})

# <pr>, <pr:0.5>, </pr>
TAG_RE = re.compile(r"<(/?)([A-Za-z]+)(?::[^<>]*)?>")


@dataclass
class _Open:
    name: str
    range: Range


def check_tags(
    document: Document, context: ValidationContext | None = None, index: LineIndex | None = None
) -> list[Diagnostic]:
    """
    Opening/closing of style tags across all syllable texts, in source order.

    One stack spans the whole score, so `<i>` may open in one syllable and close
    in another. On a crossed closer the entries above the match are reported
    unclosed and dropped; the later closers of those same tags are then
    accepted without a second report, until that tag is opened again.
    """
    index = index or LineIndex(document.text)
    out: list[Diagnostic] = []
    stack: list[_Open] = []
    repaired: Counter[str] = Counter()

    for element in document.text_elements():
        for m in TAG_RE.finditer(element.content):
            name = m.group(2).lower()
            if name not in STYLE_TAGS:
                continue
            start = element.offset + m.start()
            rng = index.range(start, start + len(m.group(0)))

            if not m.group(1):
                # repairs only absorb closers written before the next opener
                repaired.pop(name, None)
                stack.append(_Open(name, rng))
                continue

            if stack and stack[-1].name == name:
                stack.pop()
                continue

            depth = next((i for i in range(len(stack) - 1, -1, -1) if stack[i].name == name), None)
            if depth is None:
                if repaired[name]:
                    repaired[name] -= 1
                    continue
                out.append(msg.error(rng, DiagnosticCode.UNMATCHED_CLOSING_TAG, msg.UNMATCHED_CLOSING_TAG % name))
                continue

            while len(stack) > depth + 1:
                dropped = stack.pop()
                repaired[dropped.name] += 1
                out.append(
                    msg.error(dropped.range, DiagnosticCode.UNCLOSED_TAG, msg.UNCLOSED_TAG % dropped.name)
                )
            stack.pop()

    while stack:
        left = stack.pop()
        out.append(msg.error(left.range, DiagnosticCode.UNCLOSED_TAG, msg.UNCLOSED_TAG % left.name))
    return out
