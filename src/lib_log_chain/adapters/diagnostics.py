"""Diagnostics sinks implementing :class:`DiagnosticsPort`.

Contents
--------
* :class:`LogChainWarning` – warning category for advisory conditions.
* :class:`WarningDiagnostics` – default sink surfacing events through
  :mod:`warnings`.
* :class:`CollectingDiagnostics` – keeps events in memory for inspection.
* :class:`CallbackDiagnostics` – forwards ``(code, details)`` to a hook.
"""

from __future__ import annotations

import logging
import warnings
from typing import Any, Callable

from lib_log_chain.application.ports.diagnostics import DiagnosticsPort
from lib_log_chain.domain.diagnostics import DiagnosticEvent

logger = logging.getLogger(__name__)

DiagnosticHook = Callable[[str, dict[str, Any]], None]


class LogChainWarning(UserWarning):
    """Category used for advisory diagnostics."""


class WarningDiagnostics(DiagnosticsPort):
    """Emit each event as a :class:`LogChainWarning`."""

    def __init__(self, *, stacklevel: int = 4) -> None:
        self._stacklevel = stacklevel

    def report(self, event: DiagnosticEvent) -> None:
        logger.debug("diagnostic %s: %s", event.code, event.message)
        warnings.warn(event.message, LogChainWarning, stacklevel=self._stacklevel)


class CollectingDiagnostics(DiagnosticsPort):
    """Retain reported events in order of arrival."""

    def __init__(self) -> None:
        self.events: list[DiagnosticEvent] = []

    def report(self, event: DiagnosticEvent) -> None:
        self.events.append(event)

    @property
    def codes(self) -> list[str]:
        return [event.code for event in self.events]

    @property
    def last(self) -> DiagnosticEvent | None:
        return self.events[-1] if self.events else None

    def clear(self) -> None:
        self.events.clear()


class CallbackDiagnostics(DiagnosticsPort):
    """Adapt a ``hook(code, details)`` callable to the diagnostics port."""

    def __init__(self, hook: DiagnosticHook) -> None:
        self._hook = hook

    def report(self, event: DiagnosticEvent) -> None:
        payload = dict(event.details)
        payload.setdefault("message", event.message)
        self._hook(event.code, payload)


__all__ = [
    "CallbackDiagnostics",
    "CollectingDiagnostics",
    "DiagnosticHook",
    "LogChainWarning",
    "WarningDiagnostics",
]
