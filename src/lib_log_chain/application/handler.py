"""Abstract handler defining the dispatch contract shared by all handlers.

Purpose
-------
Filter records by severity, prepare the timestamp and message, and hand a
:class:`~lib_log_chain.domain.records.LogRecord` to the concrete handler's
``format``/``write`` capabilities.

Contents
--------
* :class:`Handler` – abstract base with level and option management.
* :func:`verify_levels` – validation shared by construction and
  :meth:`Handler.set_levels`.

System Role
-----------
:class:`~lib_log_chain.application.logger.Logger` depends only on this
interface; adapters such as the stream and Rich console handlers implement
``format`` and ``write``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from typing import Any, ClassVar

from lib_log_chain.application.ports import ClockPort, DiagnosticsPort
from lib_log_chain.domain.diagnostics import UNKNOWN_OPTION, DiagnosticEvent
from lib_log_chain.domain.errors import InvalidArgumentError, InvalidArgumentTypeError, LevelRangeError, type_name
from lib_log_chain.domain.levels import ALL_LEVELS, Level, coerce_level
from lib_log_chain.domain.options import HandlerOptions
from lib_log_chain.domain.records import LogRecord


def verify_levels(levels: Iterable[Level | int]) -> tuple[Level, ...]:
    """Validate ``levels`` and return them deduplicated in ascending order.

    Raises
    ------
    InvalidArgumentError
        When ``levels`` is empty.
    InvalidArgumentTypeError
        When ``levels`` is not an iterable, or an item is neither
        :class:`Level` nor ``int``.
    LevelRangeError
        When an item lies outside 0 - 7.
    """

    if isinstance(levels, (str, bytes)) or not isinstance(levels, Iterable):
        raise InvalidArgumentTypeError(f'Argument "levels" must be an iterable of int|Level, {type_name(levels)} given')
    items = list(levels)
    if not items:
        raise InvalidArgumentError('Argument "levels" must not be empty')

    accepted: set[Level] = set()
    for position, value in enumerate(items, start=1):
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidArgumentTypeError(f'Value #{position} of argument "levels" must be of type int|Level, {type_name(value)} given')
        if not 0 <= value <= 7:
            raise LevelRangeError(f'Value #{position} of argument "levels" cannot be {value}; it is not in the range 0 - 7')
        accepted.add(Level(value))
    return tuple(sorted(accepted))


class Handler(ABC):
    """Base class for handlers invoked by :class:`Logger`.

    Parameters
    ----------
    levels:
        Severities this handler accepts; defaults to all eight.
    options:
        Mapping of option names to values, or a ready options instance of
        :attr:`options_class`. Unknown names are reported to ``diagnostics``
        and ignored.
    clock:
        Source of timestamps; defaults to the local system clock.
    diagnostics:
        Sink for advisory conditions; defaults to :mod:`warnings`.
    """

    options_class: ClassVar[type[HandlerOptions]] = HandlerOptions

    def __init__(
        self,
        levels: Iterable[Level | int] = ALL_LEVELS,
        options: Mapping[str, Any] | HandlerOptions | None = None,
        *,
        clock: ClockPort | None = None,
        diagnostics: DiagnosticsPort | None = None,
    ) -> None:
        from lib_log_chain.adapters.clock import SystemClock
        from lib_log_chain.adapters.diagnostics import WarningDiagnostics

        self._clock: ClockPort = clock if clock is not None else SystemClock()
        self._diagnostics: DiagnosticsPort = diagnostics if diagnostics is not None else WarningDiagnostics()
        self._levels = verify_levels(levels)

        if isinstance(options, HandlerOptions):
            if not isinstance(options, self.options_class):
                raise InvalidArgumentTypeError(
                    f'Argument "options" must be of type {self.options_class.__name__}|Mapping, {type_name(options)} given'
                )
            self._options = options
        else:
            self._options = self.options_class()
            for name, value in (options or {}).items():
                self.set_option(name, value)

    @property
    def levels(self) -> tuple[Level, ...]:
        return self._levels

    def get_levels(self) -> tuple[Level, ...]:
        return self._levels

    def set_levels(self, *levels: Level | int) -> None:
        """Replace the accepted severities; validated like construction."""

        self._levels = verify_levels(levels)

    @property
    def options(self) -> HandlerOptions:
        return self._options

    @property
    def bubbles(self) -> bool:
        """Return ``False`` when this handler stops the chain after running."""

        return self._options.bubbles

    @property
    def diagnostics(self) -> DiagnosticsPort:
        return self._diagnostics

    def get_option(self, name: str) -> Any:
        """Return option ``name`` or ``None`` (with a diagnostic) when unknown."""

        if not self._options.has(name):
            self._report_unknown_option(name)
            return None
        return self._options.get(name)

    def set_option(self, name: str, value: Any) -> None:
        """Assign option ``name``; unknown names are reported and ignored."""

        if not self._options.has(name):
            self._report_unknown_option(name)
            return
        self._options.set(name, value)

    def invoke(self, level: Level | int | str, channel: str | None, message: str, context: Mapping[str, Any] | None = None) -> None:
        """Filter, prepare, format, and write one entry.

        ``level`` is normalised with :func:`coerce_level`, so PSR-3 names are
        accepted and invalid values raise instead of being dropped.
        """

        level = coerce_level(level)
        if level not in self._levels:
            return

        context = context if context is not None else {}
        time = self._clock.now().strftime(self._options.time_format)

        message = message.strip()
        transform = self._options.message_transform
        if transform is not None:
            message = transform(message, context)
            if not isinstance(message, str):
                raise TypeError(f"Return value of message_transform option callable must be a str, {type_name(message)} given")

        record = LogRecord(time=time, level=level, channel=channel or "", message=message, context=context)
        self.emit(record)

    __call__ = invoke

    def emit(self, record: LogRecord) -> None:
        """Format ``record`` and write the result."""

        self.write(self.format(record))

    @abstractmethod
    def format(self, record: LogRecord) -> str:
        """Render ``record`` into the text handed to :meth:`write`."""

    @abstractmethod
    def write(self, line: str) -> None:
        """Deliver an already formatted ``line`` to the destination."""

    def close(self) -> None:
        """Release resources owned by the handler."""

    def __enter__(self) -> "Handler":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _report_unknown_option(self, name: str) -> None:
        owner = type(self).__name__
        self._diagnostics.report(
            DiagnosticEvent(
                code=UNKNOWN_OPTION,
                message=f"Undefined option in {owner}: {name}",
                details={"handler": owner, "option": name},
            )
        )


__all__ = ["Handler", "verify_levels"]
