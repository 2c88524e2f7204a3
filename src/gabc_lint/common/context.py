from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from gabc_lint.common.ir import Document

DEFAULT_STAFF_LINES = 4


class NabcFont(str, Enum):
    ST_GALL = "gregall"
    ST_GALL_MODERN = "gresgmodern"
    LAON = "grelaon"


@dataclass(frozen=True)
class AlternationConfig:
    """
    GABC/NABC alternation derived from the `nabc-lines` header.

    period == 0 means alternation is disabled: every snippet is GABC and a `|`
    inside a group is an error.
    """

    enabled: bool
    period: int

    @staticmethod
    def disabled() -> AlternationConfig:
        return AlternationConfig(enabled=False, period=0)

    @staticmethod
    def from_header_value(value: str | None) -> AlternationConfig:
        period = parse_nabc_lines(value)
        if period is None or period == 0:
            return AlternationConfig.disabled()
        return AlternationConfig(enabled=True, period=period)

    @staticmethod
    def from_document(document: Document) -> AlternationConfig:
        header = document.header("nabc-lines")
        return AlternationConfig.from_header_value(header.value if header else None)


def parse_nabc_lines(value: str | None) -> int | None:
    """Return the non-negative integer of a `nabc-lines` value, or None when malformed."""
    if value is None:
        return None
    m = re.fullmatch(r"\s*(\d+)\s*;?\s*", value)
    if m is None:
        return None
    return int(m.group(1))


def parse_staff_lines(value: str | None) -> int:
    if value is None:
        return DEFAULT_STAFF_LINES
    m = re.fullmatch(r"\s*([2-5])\s*", value)
    return int(m.group(1)) if m else DEFAULT_STAFF_LINES


@dataclass(frozen=True)
class ValidationContext:
    """Everything a validation pass needs besides the document itself."""

    font: NabcFont = NabcFont.ST_GALL
    alternation: AlternationConfig = AlternationConfig(enabled=False, period=0)
    staff_lines: int = DEFAULT_STAFF_LINES
    strict_alternation: bool = True

    @staticmethod
    def for_document(
        document: Document,
        font: NabcFont = NabcFont.ST_GALL,
        strict_alternation: bool = True,
    ) -> ValidationContext:
        staff = document.header("staff-lines")
        return ValidationContext(
            font=font,
            alternation=AlternationConfig.from_document(document),
            staff_lines=parse_staff_lines(staff.value if staff else None),
            strict_alternation=strict_alternation,
        )
