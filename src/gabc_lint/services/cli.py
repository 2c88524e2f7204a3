from __future__ import annotations

import logging
from dataclasses import asdict
from pathlib import Path

import typer

from gabc_lint.common.config import AnalyzerSettings, load_yaml
from gabc_lint.common.context import NabcFont
from gabc_lint.common.diagnostics import Diagnostic
from gabc_lint.common.exceptions import ConfigError
from gabc_lint.common.logging import log, setup_logging
from gabc_lint.parse.document import parse_document
from gabc_lint.services.analyzer import syllable_statistics
from gabc_lint.services.batch import check_paths, write_csv

app = typer.Typer(help="gabc-lint: diagnostics for GABC chant scores with embedded NABC.")

OPT_VERBOSE = typer.Option(False, "--verbose", "-v", help="Verbose JSON logs.")

ARG_PATHS = typer.Argument(..., help="GABC files or folders (searched recursively).")
OPT_FONT = typer.Option(None, "--font", help="NABC font: gregall|gresgmodern|grelaon.")
OPT_CONFIG = typer.Option(None, "--config", help="YAML settings file.")
OPT_MAX_PROBLEMS = typer.Option(
    None, "--max-problems", help="Diagnostics shown per file (default from settings: 1000)."
)
OPT_OUT = typer.Option(None, "--out", help="Optional CSV path for per-file counts.")
OPT_LOG_FILE = typer.Option(None, "--log-file", help="Also write JSON logs to this file.")

ARG_STATS_PATH = typer.Argument(..., help="One GABC file.")

SEVERITY_NAMES = {1: "error", 2: "warning", 3: "information"}


def format_diagnostic(path: Path, d: Diagnostic) -> str:
    start = d.range.start
    return (
        f"{path.as_posix()}:{start.line + 1}:{start.character + 1}: "
        f"{SEVERITY_NAMES[int(d.severity)]} {d.code.value} {d.message}"
    )


def _settings(config: Path | None, font: str | None) -> AnalyzerSettings:
    try:
        settings = load_yaml(config) if config else AnalyzerSettings()
    except ConfigError as e:
        raise typer.BadParameter(str(e)) from e
    if font is None:
        return settings
    try:
        return settings.model_copy(update={"font": NabcFont(font)})
    except ValueError as e:
        raise typer.BadParameter(
            f"Unknown font: {font}. Available: {', '.join(f.value for f in NabcFont)}"
        ) from e


@app.callback()
def main(verbose: bool = OPT_VERBOSE) -> None:
    setup_logging(logging.DEBUG if verbose else logging.INFO)
    if verbose:
        log.info("verbose_enabled")


@app.command("check")
def check(
    paths: list[Path] = ARG_PATHS,
    font: str | None = OPT_FONT,
    config: Path | None = OPT_CONFIG,
    max_problems: int | None = OPT_MAX_PROBLEMS,
    out: Path | None = OPT_OUT,
    log_file: Path | None = OPT_LOG_FILE,
) -> None:
    """Validate GABC files; exit code 1 when any error is found."""
    from gabc_lint.common.logging import add_file_logging

    if log_file:
        add_file_logging(log_file)
    settings = _settings(config, font)
    limit = max_problems if max_problems is not None else settings.max_number_of_problems

    summary, results, rows = check_paths(paths, settings)
    for path, result in results:
        for d in result.diagnostics[:limit]:
            typer.echo(format_diagnostic(path, d))
        hidden = len(result.diagnostics) - limit
        if hidden > 0:
            typer.echo(f"{path.as_posix()}: {hidden} more problems not shown")

    typer.echo(
        f"files={summary.files_total} clean={summary.files_clean} failed={summary.files_failed} "
        f"errors={summary.errors} warnings={summary.warnings} information={summary.information}"
    )

    if out:
        write_csv(out, rows)
        typer.echo(f"Wrote per-file CSV → {out}")

    if summary.errors or summary.files_failed:
        raise typer.Exit(code=1)


@app.command("stats")
def stats(path: Path = ARG_STATS_PATH) -> None:
    """Syllable statistics of one score."""
    document = parse_document(path.read_text(encoding="utf-8"))
    counts = asdict(syllable_statistics(document))
    typer.echo(" ".join(f"{k}={v}" for k, v in counts.items()))


if __name__ == "__main__":
    app()
