"""Port for advisory diagnostics reported instead of raising."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from lib_log_chain.domain.diagnostics import DiagnosticEvent


@runtime_checkable
class DiagnosticsPort(Protocol):
    """Receive non-fatal conditions such as unknown options."""

    def report(self, event: DiagnosticEvent) -> None:
        """Record or surface ``event``."""


__all__ = ["DiagnosticsPort"]
