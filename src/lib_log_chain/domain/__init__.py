"""Domain entities and value objects used by the logging facade."""

from __future__ import annotations

from .diagnostics import DiagnosticEvent
from .levels import ALL_LEVELS, Level, coerce_level
from .options import ConsoleHandlerOptions, HandlerOptions, StreamHandlerOptions
from .records import LogRecord

__all__ = [
    "ALL_LEVELS",
    "ConsoleHandlerOptions",
    "DiagnosticEvent",
    "HandlerOptions",
    "Level",
    "LogRecord",
    "StreamHandlerOptions",
    "coerce_level",
]
