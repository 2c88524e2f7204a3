from __future__ import annotations

import re
from dataclasses import dataclass

from gabc_lint.common.ir import HeaderField
from gabc_lint.common.source import LineIndex

HEADER_DELIMITER = "%%"
# a `name:` line always starts a new header, even inside an unterminated value
HEADER_START_RE = re.compile(r"^[A-Za-z][\w-]*:")


@dataclass
class SplitResult:
    headers: list[HeaderField]
    body: str
    body_start_line: int
    # absolute offset of the body in the source text
    body_offset: int


def _strip_terminator(value: str) -> tuple[str, bool]:
    """Strip `;;` or `;`; the flag tells whether the value is complete on this line."""
    if value.endswith(";;"):
        return value[:-2].rstrip(), True
    if value.endswith(";"):
        return value[:-1].rstrip(), True
    return value, False


def split_document(text: str) -> SplitResult:
    """
    Split GABC source into header fields and the body after the `%%` line.

    Header lines are `name: value;`. A value not terminated on its first line
    continues on the following lines until one ends with `;;`, a new `name:`
    line starts, or `%%` is reached.
    Without a `%%` line the body is empty.
    """
    index = LineIndex(text)
    lines = text.splitlines(keepends=True)

    headers: list[HeaderField] = []
    pending: tuple[str, list[str], int] | None = None  # name, value parts, start offset

    def _flush(end_offset: int) -> None:
        nonlocal pending
        if pending is None:
            return
        name, parts, start = pending
        headers.append(
            HeaderField(name=name, value="\n".join(parts).strip(), range=index.range(start, end_offset))
        )
        pending = None

    offset = 0
    pending_end = 0
    for line_no, raw in enumerate(lines):
        line = raw.rstrip("\r\n")
        stripped = line.strip()
        line_start = offset
        line_end = offset + len(line)
        offset += len(raw)

        if pending is not None and HEADER_START_RE.match(stripped):
            _flush(pending_end)

        if stripped == HEADER_DELIMITER:
            _flush(line_start)
            return SplitResult(
                headers=headers,
                body=text[offset:],
                body_start_line=line_no + 1,
                body_offset=offset,
            )

        if pending is not None:
            if stripped.endswith(";;"):
                pending[1].append(stripped[:-2].rstrip())
                _flush(line_end)
            else:
                pending[1].append(stripped)
                if stripped:
                    pending_end = line_end
            continue

        if not stripped or stripped.startswith("%"):
            continue

        colon = stripped.find(":")
        if colon <= 0:
            continue

        name = stripped[:colon].strip()
        value, complete = _strip_terminator(stripped[colon + 1 :].strip())
        lead = len(line) - len(line.lstrip())
        if complete:
            headers.append(
                HeaderField(name=name, value=value, range=index.range(line_start + lead, line_end))
            )
        else:
            pending = (name, [value], line_start + lead)
            pending_end = line_end

    _flush(len(text))
    return SplitResult(headers=headers, body="", body_start_line=len(lines), body_offset=len(text))
