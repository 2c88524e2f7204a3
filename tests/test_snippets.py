import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1] / "src"))
from gabc_lint.parse.snippets import (
    SnippetKind,
    classify_snippet,
    expected_kind,
    join_snippets,
    matching_patterns,
    split_snippets,
)


def test_split_keeps_empty_pieces_and_offsets() -> None:
    snippets = split_snippets("f||g", offset=10)
    assert [s.content for s in snippets] == ["f", "", "g"]
    assert [s.offset for s in snippets] == [10, 12, 13]
    assert [s.index for s in snippets] == [0, 1, 2]


def test_no_pipe_is_single_snippet() -> None:
    snippets = split_snippets("fgf")
    assert len(snippets) == 1
    assert snippets[0].index == 0


@pytest.mark.parametrize(
    "content",
    ["f||g", "ce/fgf|peGlsa6tohl|toppt2lss2lsim2", "", "|", "a|b|c|", " x | y "],
)
def test_join_reconstructs_content(content: str) -> None:
    assert join_snippets(split_snippets(content)) == content


@pytest.mark.parametrize("snippet", ["ce", "gf", "gwh", "fgf", "c4", "g_0h", "ce/fgf", "h'1g", "f.0e", "g/0h", "f/0g", "fg[ob:1;6mm]h"])
def test_ordinary_gabc_is_not_nabc(snippet: str) -> None:
    assert classify_snippet(snippet) is SnippetKind.GABC
    assert matching_patterns(snippet) == []


@pytest.mark.parametrize("snippet", ["peGlsa6tohl", "toppt2lss2lsim2", "vi", "un", "ta", "pu``pu", "gtr"])
def test_nabc_snippets(snippet: str) -> None:
    assert classify_snippet(snippet) is SnippetKind.NABC


def test_blank_snippet_is_neutral() -> None:
    assert classify_snippet("") is SnippetKind.NEUTRAL
    assert classify_snippet("   ") is SnippetKind.NEUTRAL


def test_pattern_rows_fire_independently() -> None:
    assert matching_patterns("pu1h") == ["digit_then_letter"]
    assert matching_patterns("gtr") == ["g_glyph_run"]
    assert matching_patterns("pu``pu") == ["double_backtick"]
    assert "significant_letter" in matching_patterns("ltdo2")
    assert "prepunctis_count" in matching_patterns("toppt2")


def test_expected_kind_alternates_in_blocks() -> None:
    assert [expected_kind(i, 1) for i in range(4)] == [
        SnippetKind.GABC,
        SnippetKind.NABC,
        SnippetKind.GABC,
        SnippetKind.NABC,
    ]
    assert [expected_kind(i, 2) for i in range(6)] == [
        SnippetKind.GABC,
        SnippetKind.NABC,
        SnippetKind.NABC,
        SnippetKind.GABC,
        SnippetKind.GABC,
        SnippetKind.NABC,
    ]


@pytest.mark.parametrize("period", [0, 1, 2, 3, 7])
def test_first_snippet_is_always_gabc(period: int) -> None:
    assert expected_kind(0, period) is SnippetKind.GABC


def test_period_zero_expects_gabc_everywhere() -> None:
    assert all(expected_kind(i, 0) is SnippetKind.GABC for i in range(5))


def test_bracketed_attributes_do_not_trigger_patterns() -> None:
    assert matching_patterns("fg[ob:1;6mm]h") == []
    # the same text outside brackets is still NABC
    assert matching_patterns("fg6mh") == ["digit_then_letter"]
