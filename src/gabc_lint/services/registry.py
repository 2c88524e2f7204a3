from collections.abc import Callable

from gabc_lint.common.config import AnalyzerSettings
from gabc_lint.common.context import ValidationContext
from gabc_lint.common.diagnostics import Diagnostic
from gabc_lint.common.ir import Document
from gabc_lint.common.source import LineIndex
from gabc_lint.rules.alternation import check_alternation
from gabc_lint.rules.headers import check_headers
from gabc_lint.rules.nabc import check_nabc_grammar
from gabc_lint.rules.notation import check_notation
from gabc_lint.rules.rendering import check_rendering
from gabc_lint.rules.structure import check_structure
from gabc_lint.rules.tags import check_tags

PassFn = Callable[[Document, ValidationContext, LineIndex | None], list[Diagnostic]]

# passes switched off by `enable_semantic_validation: false`
SEMANTIC_PASSES = frozenset({"nabc", "rendering", "notation"})
# passes switched off by `enable_nabc_lines_validation: false`
NABC_LINES_PASSES = frozenset({"alternation"})


def get_registry() -> dict[str, PassFn]:
    """Validation passes in reporting order."""
    return {
        "headers": check_headers,
        "alternation": check_alternation,
        "tags": check_tags,
        "nabc": check_nabc_grammar,
        "rendering": check_rendering,
        "notation": check_notation,
        "structure": check_structure,
    }


def enabled_passes(settings: AnalyzerSettings) -> list[str]:
    names: list[str] = []
    for name in get_registry():
        if name in SEMANTIC_PASSES and not settings.enable_semantic_validation:
            continue
        if name in NABC_LINES_PASSES and not settings.enable_nabc_lines_validation:
            continue
        names.append(name)
    return names
