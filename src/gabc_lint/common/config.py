from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, ValidationError

from gabc_lint.common.context import NabcFont
from gabc_lint.common.exceptions import ConfigError


class AnalyzerSettings(BaseModel):
    font: NabcFont = NabcFont.ST_GALL
    max_number_of_problems: int = 1000
    enable_semantic_validation: bool = True
    enable_nabc_lines_validation: bool = True
    strict_alternation_checking: bool = True


def load_yaml(path: str | Path) -> AnalyzerSettings:
    p = Path(path)
    try:
        data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(str(p), str(e)) from e
    if not isinstance(data, dict):
        raise ConfigError(str(p), "top level must be a mapping")
    try:
        return AnalyzerSettings(**data)
    except ValidationError as e:
        raise ConfigError(str(p), str(e)) from e
