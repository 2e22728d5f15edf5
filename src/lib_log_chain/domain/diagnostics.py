"""Advisory diagnostic events raised instead of hard failures."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

UNKNOWN_OPTION = "unknown_option"
INVALID_CONTEXT_EXCEPTION = "invalid_context_exception"
MISPLACED_CONTEXT_EXCEPTION = "misplaced_context_exception"


@dataclass(slots=True, frozen=True)
class DiagnosticEvent:
    """Non-fatal condition reported to a diagnostics sink.

    Attributes
    ----------
    code:
        Stable identifier such as ``"unknown_option"``.
    message:
        Human readable description.
    details:
        Structured payload (option name, context key, offending type …).
    """

    code: str
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.code:
            raise ValueError("code must not be empty")
        object.__setattr__(self, "details", dict(self.details))


__all__ = [
    "DiagnosticEvent",
    "INVALID_CONTEXT_EXCEPTION",
    "MISPLACED_CONTEXT_EXCEPTION",
    "UNKNOWN_OPTION",
]
