from __future__ import annotations

from collections import Counter

from gabc_lint.common import diagnostics as msg
from gabc_lint.common.context import ValidationContext, parse_nabc_lines
from gabc_lint.common.diagnostics import Diagnostic, DiagnosticCode
from gabc_lint.common.ir import Document, HeaderField
from gabc_lint.common.source import LineIndex

MAX_ANNOTATIONS = 2
VALID_MODES = ("1", "2", "3", "4", "5", "6", "7", "8", "I", "II", "III", "IV", "V", "VI", "VII", "VIII")
VALID_INITIAL_STYLES = ("0", "1", "2")
VALID_STAFF_LINES = ("2", "3", "4", "5")


def _check_value(header: HeaderField) -> Diagnostic | None:
    key, value = header.key, header.value
    if key == "nabc-lines" and parse_nabc_lines(value) is None:
        return msg.error(
            header.range,
            DiagnosticCode.INVALID_NABC_LINES,
            f"Invalid nabc-lines value: {value}. Expected non-negative integer (0, 1, 2, ...)",
        )
    if key == "mode" and value not in VALID_MODES:
        return msg.warning(
            header.range,
            DiagnosticCode.INVALID_HEADER,
            f"Unusual mode value: {value}. Expected one of: {', '.join(VALID_MODES)}",
        )
    if key == "initial-style" and value not in VALID_INITIAL_STYLES:
        return msg.warning(
            header.range,
            DiagnosticCode.INVALID_HEADER,
            f"Invalid initial-style: {value}. Expected one of: {', '.join(VALID_INITIAL_STYLES)}",
        )
    if key == "staff-lines" and value not in VALID_STAFF_LINES:
        return msg.error(
            header.range,
            DiagnosticCode.INVALID_HEADER,
            f"Invalid staff-lines value: {value}. Expected one of: {', '.join(VALID_STAFF_LINES)}",
        )
    return None


def check_headers(
    document: Document, context: ValidationContext | None = None, index: LineIndex | None = None
) -> list[Diagnostic]:
    index = index or LineIndex(document.text)
    out: list[Diagnostic] = []

    names = document.headers_named("name")
    if not names:
        out.append(msg.warning(index.range(0, 0), DiagnosticCode.MISSING_NAME, msg.NO_NAME_SPECIFIED))
    for header in names:
        if not header.value:
            out.append(msg.error(header.range, DiagnosticCode.EMPTY_NAME, msg.NAME_CANNOT_BE_EMPTY))

    counts = Counter(h.key for h in document.headers)
    reported: set[str] = set()
    annotations = 0
    for header in document.headers:
        if header.key == "annotation":
            annotations += 1
            if annotations == MAX_ANNOTATIONS + 1:
                out.append(
                    msg.warning(
                        header.range,
                        DiagnosticCode.TOO_MANY_ANNOTATIONS,
                        msg.TOO_MANY_ANNOTATIONS % MAX_ANNOTATIONS,
                    )
                )
        elif counts[header.key] > 1 and header.key not in reported:
            # reported once, on the last definition
            last = document.headers_named(header.key)[-1]
            reported.add(header.key)
            out.append(
                msg.warning(
                    last.range,
                    DiagnosticCode.MULTIPLE_HEADERS,
                    msg.MULTIPLE_HEADER_DEFINITIONS % header.name,
                )
            )

        problem = _check_value(header)
        if problem is not None:
            out.append(problem)
    return out
