from __future__ import annotations

import csv
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import structlog

from gabc_lint.common.config import AnalyzerSettings
from gabc_lint.common.diagnostics import Severity
from gabc_lint.common.logging import log
from gabc_lint.services.analyzer import AnalysisResult, analyze, syllable_statistics

GABC_SUFFIXES = {".gabc"}


@dataclass
class CheckSummary:
    files_total: int = 0
    files_clean: int = 0
    files_failed: int = 0
    errors: int = 0
    warnings: int = 0
    information: int = 0
    code_counts: dict[str, int] = field(default_factory=dict)


def iter_gabc_files(paths: Iterable[Path]) -> list[Path]:
    result: list[Path] = []
    for p in paths:
        if p.is_dir():
            for q in p.rglob("*"):
                if q.suffix.lower() in GABC_SUFFIXES:
                    result.append(q)
        elif p.suffix.lower() in GABC_SUFFIXES:
            result.append(p)
    return sorted(result)


def check_paths(
    paths: Iterable[Path], settings: AnalyzerSettings | None = None
) -> tuple[CheckSummary, list[tuple[Path, AnalysisResult]], list[dict[str, Any]]]:
    """Analyze every .gabc file under `paths`; unreadable files are counted, not fatal."""
    settings = settings or AnalyzerSettings()
    files = iter_gabc_files(paths)
    log.info("check_start", files=len(files), font=settings.font.value)

    summary = CheckSummary()
    results: list[tuple[Path, AnalysisResult]] = []
    rows: list[dict[str, Any]] = []

    for path in files:
        with structlog.contextvars.bound_contextvars(file=path.as_posix()):
            try:
                text = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                summary.files_failed += 1
                log.warning("check_failed", error=str(e))
                continue
            result = analyze(text, settings=settings)
        results.append((path, result))

        errors = result.count(Severity.ERROR)
        warnings = result.count(Severity.WARNING)
        information = result.count(Severity.INFORMATION)
        summary.files_total += 1
        if not result.diagnostics:
            summary.files_clean += 1
        summary.errors += errors
        summary.warnings += warnings
        summary.information += information
        for d in result.diagnostics:
            summary.code_counts[d.code.value] = summary.code_counts.get(d.code.value, 0) + 1

        stats = syllable_statistics(result.document)
        rows.append(
            {
                "file": path.as_posix(),
                "syllables": stats.total,
                "nabc_syllables": stats.nabc_bearing,
                "errors": errors,
                "warnings": warnings,
                "information": information,
            }
        )

    log.info(
        "check_done",
        files=summary.files_total,
        failed=summary.files_failed,
        errors=summary.errors,
        warnings=summary.warnings,
    )
    return summary, results, rows


def write_csv(out_csv: Path, rows: list[dict[str, Any]]) -> None:
    out_csv.parent.mkdir(parents=True, exist_ok=True)
    if not rows:
        out_csv.write_text("", encoding="utf-8")
        return
    with out_csv.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=list(rows[0].keys()))
        w.writeheader()
        w.writerows(rows)
