"""Protocols the application layer depends on."""

from __future__ import annotations

from .diagnostics import DiagnosticsPort
from .filesystem import FilesystemPort
from .time import ClockPort

__all__ = ["ClockPort", "DiagnosticsPort", "FilesystemPort"]
