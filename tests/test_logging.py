import json
import sys
from pathlib import Path

import structlog

sys.path.append(str(Path(__file__).resolve().parents[1] / "src"))
from gabc_lint.common.logging import COMPONENT, _get_json_processors, add_component


def _render(event: str, **kw) -> dict:
    event_dict = {"event": event, **kw}
    for processor in _get_json_processors():
        event_dict = processor(None, "info", event_dict)
    return json.loads(event_dict)


def test_component_is_added_but_not_overridden() -> None:
    assert add_component(None, "info", {"event": "x"})["component"] == COMPONENT
    assert add_component(None, "info", {"event": "x", "component": "other"})["component"] == "other"


def test_events_carry_bound_file_and_component() -> None:
    with structlog.contextvars.bound_contextvars(file="scores/kyrie.gabc"):
        line = _render("analyze_done", errors=2)

    assert line["event"] == "analyze_done"
    assert line["file"] == "scores/kyrie.gabc"
    assert line["component"] == "gabc-lint"
    assert line["level"] == "info"
    assert line["errors"] == 2
    assert "timestamp" in line


def test_file_context_does_not_leak_after_the_block() -> None:
    with structlog.contextvars.bound_contextvars(file="a.gabc"):
        pass
    assert "file" not in _render("check_done")
