"""Record passed from a handler's dispatch step to its formatter."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from .levels import Level


@dataclass(slots=True, frozen=True)
class LogRecord:
    """One log entry after level filtering and message preparation.

    Attributes
    ----------
    time:
        Timestamp already rendered with the handler's ``time_format``.
    level:
        Severity of the entry.
    channel:
        Channel name, empty when the logger has none.
    message:
        Trimmed (and possibly transformed) message.
    context:
        Sanitized context mapping supplied by the caller.
    """

    time: str
    level: Level
    channel: str
    message: str
    context: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "level", Level(self.level))
        object.__setattr__(self, "context", dict(self.context))


__all__ = ["LogRecord"]
