"""Public package surface of the channel logger.

Exports the :class:`Logger`, the severity enum, the handler base class and
its concrete implementations, plus the error types callers may catch.
"""

from __future__ import annotations

from .adapters import (
    CallbackDiagnostics,
    CollectingDiagnostics,
    LocalFilesystem,
    LogChainWarning,
    RichConsoleHandler,
    STDERR,
    STDOUT,
    StreamHandler,
    WarningDiagnostics,
)
from .application import Handler, Logger
from .domain import DiagnosticEvent, Level, LogRecord, coerce_level
from .domain.errors import (
    ArgumentCountError,
    IOException,
    InvalidArgumentError,
    InvalidArgumentTypeError,
    InvalidLevelNameError,
    LevelRangeError,
    UnderflowError,
)

__all__ = [
    "ArgumentCountError",
    "CallbackDiagnostics",
    "CollectingDiagnostics",
    "DiagnosticEvent",
    "Handler",
    "IOException",
    "InvalidArgumentError",
    "InvalidArgumentTypeError",
    "InvalidLevelNameError",
    "Level",
    "LevelRangeError",
    "LocalFilesystem",
    "LogChainWarning",
    "LogRecord",
    "Logger",
    "RichConsoleHandler",
    "STDERR",
    "STDOUT",
    "StreamHandler",
    "UnderflowError",
    "WarningDiagnostics",
    "coerce_level",
]
