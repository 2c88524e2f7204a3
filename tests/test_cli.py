import sys
from pathlib import Path

import pytest
from typer.testing import CliRunner

sys.path.append(str(Path(__file__).resolve().parents[1] / "src"))
from gabc_lint.common.config import AnalyzerSettings, load_yaml
from gabc_lint.common.context import NabcFont
from gabc_lint.common.exceptions import ConfigError
from gabc_lint.services.batch import check_paths, iter_gabc_files, write_csv
from gabc_lint.services.cli import app

CLEAN = "name: Kyrie;\n%%\n(c4) Ky(f)ri(g)e(h)\n"
BROKEN = "name: Bad;\n%%\n(c4) A(f|g)\n"

runner = CliRunner()


def _scores(root: Path) -> Path:
    (root / "sub").mkdir(parents=True)
    (root / "clean.gabc").write_text(CLEAN, encoding="utf-8")
    (root / "sub" / "broken.gabc").write_text(BROKEN, encoding="utf-8")
    (root / "notes.txt").write_text("not a score", encoding="utf-8")
    return root


def test_load_yaml_settings(tmp_path: Path) -> None:
    cfg = tmp_path / "gabc-lint.yaml"
    cfg.write_text("font: grelaon\nmax_number_of_problems: 5\nstrict_alternation_checking: false\n", encoding="utf-8")
    settings = load_yaml(cfg)
    assert settings.font is NabcFont.LAON
    assert settings.max_number_of_problems == 5
    assert settings.strict_alternation_checking is False
    assert settings.enable_semantic_validation is True


def test_empty_yaml_gives_defaults(tmp_path: Path) -> None:
    cfg = tmp_path / "empty.yaml"
    cfg.write_text("", encoding="utf-8")
    assert load_yaml(cfg) == AnalyzerSettings()


@pytest.mark.parametrize("content", ["font: [", "- a\n- b\n", "font: nope\n"])
def test_bad_yaml_raises_config_error(tmp_path: Path, content: str) -> None:
    cfg = tmp_path / "bad.yaml"
    cfg.write_text(content, encoding="utf-8")
    with pytest.raises(ConfigError):
        load_yaml(cfg)


def test_check_paths_summary_and_csv(tmp_path: Path) -> None:
    root = _scores(tmp_path / "scores")
    assert [p.name for p in iter_gabc_files([root])] == ["clean.gabc", "broken.gabc"]

    summary, results, rows = check_paths([root])
    assert summary.files_total == 2
    assert summary.files_clean == 1
    assert summary.files_failed == 0
    assert summary.errors == 1
    assert summary.code_counts == {"invalid_pipe_without_nabc": 1}
    assert len(results) == 2

    out_csv = tmp_path / "reports" / "summary.csv"
    write_csv(out_csv, rows)
    lines = out_csv.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "file,syllables,nabc_syllables,errors,warnings,information"
    assert len(lines) == 3


def test_cli_check_reports_and_fails(tmp_path: Path) -> None:
    root = _scores(tmp_path / "scores")
    result = runner.invoke(app, ["check", str(root)])
    assert result.exit_code == 1
    assert "broken.gabc:3:8: error invalid_pipe_without_nabc" in result.output
    assert "files=2 clean=1" in result.output


def test_cli_check_clean_file(tmp_path: Path) -> None:
    score = tmp_path / "clean.gabc"
    score.write_text(CLEAN, encoding="utf-8")
    out_csv = tmp_path / "out.csv"
    result = runner.invoke(app, ["check", str(score), "--out", str(out_csv)])
    assert result.exit_code == 0
    assert "errors=0" in result.output
    assert out_csv.exists()


def test_cli_max_problems(tmp_path: Path) -> None:
    score = tmp_path / "many.gabc"
    score.write_text("%%\nA(f|g)B(f|g)C(f|g)\n", encoding="utf-8")
    result = runner.invoke(app, ["check", str(score), "--max-problems", "1"])
    assert result.exit_code == 1
    assert "3 more problems not shown" in result.output


def test_cli_rejects_unknown_font(tmp_path: Path) -> None:
    score = tmp_path / "clean.gabc"
    score.write_text(CLEAN, encoding="utf-8")
    result = runner.invoke(app, ["check", str(score), "--font", "nope"])
    assert result.exit_code != 0


def test_cli_stats(tmp_path: Path) -> None:
    score = tmp_path / "s.gabc"
    score.write_text("name: A;\n%%\n(c4) A(f) B(g|vi) ()\n", encoding="utf-8")
    result = runner.invoke(app, ["stats", str(score)])
    assert result.exit_code == 0
    assert "total=4 with_text=2 with_music=3 with_both=2 empty=1 nabc_bearing=1 gabc_only=2" in result.output
