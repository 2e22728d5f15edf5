"""Rich-powered console handler.

Purpose
-------
Render entries with the same ``%placeholder%`` templates as the stream handler
but print them through a :class:`rich.console.Console`, styled per severity.

Contents
--------
* :data:`_STYLE_MAP` - default level-to-style mapping.
* :class:`RichConsoleHandler` - concrete :class:`Handler`.

System Role
-----------
Human-facing alternative to ``StreamHandler("sys://stderr")`` for interactive
terminals; the CLI uses it for ``log --rich``.
"""

from __future__ import annotations

from typing import Any, Iterable, Mapping

from rich.console import Console

from lib_log_chain.application.handler import Handler
from lib_log_chain.application.ports import ClockPort, DiagnosticsPort
from lib_log_chain.domain.formatting import format_entry
from lib_log_chain.domain.levels import ALL_LEVELS, Level
from lib_log_chain.domain.options import ConsoleHandlerOptions, HandlerOptions
from lib_log_chain.domain.records import LogRecord


#: Default Rich styles keyed by :class:`Level`.
_STYLE_MAP: Mapping[Level, str] = {
    Level.EMERGENCY: "bold white on red",
    Level.ALERT: "bold red",
    Level.CRITICAL: "bold red",
    Level.ERROR: "red",
    Level.WARNING: "yellow",
    Level.NOTICE: "bold cyan",
    Level.INFO: "cyan",
    Level.DEBUG: "dim",
}



class RichConsoleHandler(Handler):
    """Print entries to a Rich console with per-level styles."""

    options_class = ConsoleHandlerOptions

    def __init__(
        self,
        console: Console | None = None,
        levels: Iterable[Level | int] = ALL_LEVELS,
        options: Mapping[str, Any] | HandlerOptions | None = None,
        *,
        force_color: bool = False,
        no_color: bool = False,
        stderr: bool = False,
        styles: Mapping[Level | str, str] | None = None,
        clock: ClockPort | None = None,
        diagnostics: DiagnosticsPort | None = None,
    ) -> None:
        """Configure the console handler with colour and style overrides."""
        if console is not None:
            self._console = console
        else:
            self._console = Console(force_terminal=force_color or None, no_color=no_color, stderr=stderr)
        self._no_color = no_color
        merged = dict(_STYLE_MAP)
        for key, value in (styles or {}).items():
            level = Level.from_name(key) if isinstance(key, str) else Level.from_numeric(int(key))
            merged[level] = value
        self._style_map = merged
        super().__init__(levels, options, clock=clock, diagnostics=diagnostics)

    @property
    def console(self) -> Console:
        return self._console

    def style_for(self, level: Level) -> str:
        """Return the Rich style applied to ``level`` (empty when colour is off)."""

        if self._no_color or not getattr(self._options, "colorize", True):
            return ""
        return self._style_map.get(level, "")

    def format(self, record: LogRecord) -> str:
        """Render ``record`` without a trailing newline; Rich adds its own.

        Examples
        --------
        >>> from io import StringIO
        >>> handler = RichConsoleHandler(Console(file=StringIO()), options={"entry_format": "%level_name% %message%"})
        >>> handler.format(LogRecord("Jan 01 00:00:00", Level.INFO, "", "msg"))
        'INFO msg'
        """
        options = self._options
        return format_entry(
            record,
            entry_format=getattr(options, "entry_format", ""),
            entry_transform=getattr(options, "entry_transform", None),
        )

    def emit(self, record: LogRecord) -> None:
        """Print ``record`` styled for its level; dispatch goes through here."""

        self._print(self.format(record), self.style_for(record.level))

    def write(self, line: str) -> None:
        """Print an already formatted ``line`` without a level style.

        :meth:`emit` bypasses this method so it can pick the style. ``write``
        is the unstyled path for text that has no record behind it.
        """

        self._print(line, "")

    def _print(self, line: str, style: str) -> None:
        self._console.print(line, style=style or None, highlight=False, markup=False, soft_wrap=True)


__all__ = ["RichConsoleHandler"]
