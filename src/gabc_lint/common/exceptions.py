from __future__ import annotations


class InvariantViolation(Exception):
    """
    A programming error inside the analyzer (an unreachable branch was reached).

    Never raised for malformed GABC: user-input problems are reported as diagnostics.
    Callers must treat it as fatal and keep it apart from user-facing results.
    """


class ConfigError(Exception):
    def __init__(self, path: str, reason: str):
        super().__init__(f"invalid settings file {path}: {reason}")
        self.path = path
        self.reason = reason
