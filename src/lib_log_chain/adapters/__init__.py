"""Adapters implementing handlers and the application ports."""

from __future__ import annotations

from .clock import SystemClock
from .console import RichConsoleHandler
from .diagnostics import CallbackDiagnostics, CollectingDiagnostics, LogChainWarning, WarningDiagnostics
from .filesystem import LocalFilesystem
from .stream import STDERR, STDOUT, StreamHandler

__all__ = [
    "CallbackDiagnostics",
    "CollectingDiagnostics",
    "LocalFilesystem",
    "LogChainWarning",
    "RichConsoleHandler",
    "STDERR",
    "STDOUT",
    "StreamHandler",
    "SystemClock",
    "WarningDiagnostics",
]
