"""
Snippet splitting and the NABC classification heuristic.

A parenthesized group may multiplex GABC and NABC, separated by `|`:

    (ce/fgf|peGlsa6tohl|toppt2lss2lsim2)
     ^gabc   ^nabc       ^nabc

There is no formal grammar telling the two apart, so a snippet is typed by an
ordered table of patterns (NABC_PATTERNS). Each row is a named, independently
testable rule; any row matching makes the snippet NABC. Every row must leave
ordinary GABC alone: pitches a-n/p, shapes o q r s v w x y z, their upper-case
forms, clefs (c4, cb3), episemata/ictus with digits (_0, '1), spacing (/ // /0) and
bars (, ; : ::). Bracketed segments ([...], {...}, <...>) are ignored.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

PIPE = "|"

# lower-case letters a GABC group may legitimately contain
GABC_LOWER_ALPHABET = frozenset("abcdefghijklmnp" + "oqrsvwxyz")

# [alt text], {ledger / centering} and <tags> inside music are not notes
BRACKETED_RE = re.compile(r"\[[^\]]*\]|\{[^}]*\}|<[^>]*>")


class SnippetKind(str, Enum):
    GABC = "gabc"
    NABC = "nabc"
    NEUTRAL = "neutral"


@dataclass(frozen=True)
class NabcPattern:
    name: str
    regex: re.Pattern[str]
    description: str

    def matches(self, snippet: str) -> bool:
        return self.regex.search(snippet) is not None


def _g_run_outside_gabc(snippet: str) -> bool:
    for m in re.finditer(r"(?<![a-z])g[a-z]{2,}", snippet):
        if any(ch not in GABC_LOWER_ALPHABET for ch in m.group(0)):
            return True
    return False


NABC_PATTERNS: tuple[NabcPattern, ...] = (
    NabcPattern(
        "letters_then_digit",
        re.compile(r"[A-Za-z]{3,}\d"),
        "alphabetic run of 3+ letters immediately followed by a digit (peGlsa6)",
    ),
    NabcPattern(
        "prepunctis_count",
        re.compile(r"[A-Za-z]{2,}pt\d"),
        "2+ letters followed by `pt` and a digit (toppt2)",
    ),
    NabcPattern(
        "significant_letter",
        re.compile(r"l[st][a-z]+-?\d"),
        "`ls`/`lt` letter group with a position digit (lsa6, ltdo2)",
    ),
    NabcPattern(
        "digit_then_letter",
        re.compile(r"(?<![_'./\d])\d[A-Za-z]"),
        "digit immediately followed by a letter (S1h), except after _ ' . / markers",
    ),
    NabcPattern(
        "g_glyph_run",
        # needs the alphabet test below; the regex only preselects candidates
        re.compile(r"(?<![a-z])g[a-z]{2,}"),
        "3+ lower-case letters starting with `g` using letters GABC never has",
    ),
    NabcPattern(
        "double_backtick",
        re.compile(r"``"),
        "doubled backtick (larger leftward NABC spacing)",
    ),
    NabcPattern(
        "standalone_neume",
        re.compile(r"(?<![A-Za-z])(?:un|ta|vi)(?![A-Za-z])"),
        "standalone `un`, `ta` or `vi` token",
    ),
)


def blank_out(content: str, pattern: re.Pattern[str]) -> str:
    """Replace every match with spaces so offsets stay valid."""
    return pattern.sub(lambda m: " " * len(m.group(0)), content)


def matching_patterns(snippet: str) -> list[str]:
    """Names of the table rows that fire for a snippet (for tests and debugging)."""
    snippet = blank_out(snippet, BRACKETED_RE)
    names: list[str] = []
    for pattern in NABC_PATTERNS:
        if pattern.name == "g_glyph_run":
            if _g_run_outside_gabc(snippet):
                names.append(pattern.name)
        elif pattern.matches(snippet):
            names.append(pattern.name)
    return names


def is_nabc_snippet(snippet: str) -> bool:
    if not snippet.strip():
        return False
    return bool(matching_patterns(snippet))


def classify_snippet(snippet: str) -> SnippetKind:
    if not snippet.strip():
        return SnippetKind.NEUTRAL
    return SnippetKind.NABC if is_nabc_snippet(snippet) else SnippetKind.GABC


@dataclass(frozen=True)
class Snippet:
    content: str
    index: int
    # absolute offset of the snippet's first character
    offset: int

    @property
    def kind(self) -> SnippetKind:
        return classify_snippet(self.content)

    @property
    def end(self) -> int:
        return self.offset + len(self.content)


def split_snippets(content: str, offset: int = 0) -> list[Snippet]:
    """Split group content on every `|`; empty pieces are kept."""
    snippets: list[Snippet] = []
    pos = offset
    for i, piece in enumerate(content.split(PIPE)):
        snippets.append(Snippet(content=piece, index=i, offset=pos))
        pos += len(piece) + 1
    return snippets


def join_snippets(snippets: list[Snippet]) -> str:
    return PIPE.join(s.content for s in snippets)


def expected_kind(index: int, period: int) -> SnippetKind:
    """
    Kind a snippet must have at `index` within its group.

    Snippet 0 is always GABC. After it, runs of `period` NABC snippets and
    `period` GABC snippets alternate: block (index - 1) // period, even => NABC.
    With period 0 everything is GABC.
    """
    if index == 0 or period <= 0:
        return SnippetKind.GABC
    block = (index - 1) // period
    return SnippetKind.NABC if block % 2 == 0 else SnippetKind.GABC
