"""Channel logger dispatching records through an ordered handler stack.

Purpose
-------
Provide the PSR-3 style entry points (``emergency`` … ``debug`` and ``log``),
sanitize caller context, and broadcast each record to the registered handlers
until one of them stops the chain.

Contents
--------
* :class:`Logger` – channel name, handler stack, and dispatch.
* :func:`sanitize_context` – enforce that exceptions travel only under the
  reserved ``"exception"`` key.
* :func:`default_handlers` – stderr/stdout pair installed when no handler is
  given.

System Role
-----------
Application-layer orchestrator: depends on the :class:`Handler` interface and
the diagnostics port only. Not internally synchronized; callers sharing an
instance across threads serialize access themselves.
"""

from __future__ import annotations

from typing import Any, Mapping

from lib_log_chain.application.handler import Handler
from lib_log_chain.application.ports import DiagnosticsPort
from lib_log_chain.domain.diagnostics import INVALID_CONTEXT_EXCEPTION, MISPLACED_CONTEXT_EXCEPTION, DiagnosticEvent
from lib_log_chain.domain.errors import ArgumentCountError, InvalidArgumentTypeError, UnderflowError, type_name
from lib_log_chain.domain.levels import Level, coerce_level

CHANNEL_MAX_LENGTH = 29
EXCEPTION_KEY = "exception"


def sanitize_context(
    context: Mapping[str, Any] | None,
    *,
    diagnostics: DiagnosticsPort | None = None,
) -> dict[str, Any]:
    """Return a copy of ``context`` without misplaced exception values.

    An ``"exception"`` entry that does not hold an exception is dropped, as is
    an exception stored under any other key. Each drop is reported to
    ``diagnostics`` when one is given; nothing is ever raised.

    Examples
    --------
    >>> sanitize_context({"exception": "nope", "user": "ook"})
    {'user': 'ook'}
    >>> sorted(sanitize_context({"exception": ValueError("x"), "err": KeyError("y")}))
    ['exception']
    """

    cleaned: dict[str, Any] = {}
    for key, value in (context or {}).items():
        is_exception = isinstance(value, BaseException)
        if key == EXCEPTION_KEY and not is_exception:
            if diagnostics is not None:
                diagnostics.report(
                    DiagnosticEvent(
                        code=INVALID_CONTEXT_EXCEPTION,
                        message=(
                            f"The 'exception' key in argument \"context\" can only contain values of type "
                            f"BaseException, {type_name(value)} given"
                        ),
                        details={"key": key, "type": type_name(value)},
                    )
                )
            continue
        if key != EXCEPTION_KEY and is_exception:
            if diagnostics is not None:
                diagnostics.report(
                    DiagnosticEvent(
                        code=MISPLACED_CONTEXT_EXCEPTION,
                        message=f"Values of type {type_name(value)} can only be contained in the 'exception' key in argument \"context\"",
                        details={"key": key, "type": type_name(value)},
                    )
                )
            continue
        cleaned[key] = value
    return cleaned


def default_handlers(*, memory_limit: str | None = None, diagnostics: DiagnosticsPort | None = None) -> list[Handler]:
    """Return the handlers installed when a logger is created without any.

    Severities 0 - 3 go to standard error, 4 - 7 to standard output.
    """

    from lib_log_chain.adapters.stream import STDERR, STDOUT, StreamHandler

    return [
        StreamHandler(STDERR, levels=(0, 1, 2, 3), memory_limit=memory_limit, diagnostics=diagnostics),
        StreamHandler(STDOUT, levels=(4, 5, 6, 7), memory_limit=memory_limit, diagnostics=diagnostics),
    ]


class Logger:
    """Dispatch leveled records to an ordered stack of handlers.

    Parameters
    ----------
    channel:
        Short label identifying the source; truncated to 29 characters.
    *handlers:
        Handlers in dispatch order. When none are given the stderr/stdout
        pair from :func:`default_handlers` is installed.
    diagnostics:
        Sink for advisory conditions; defaults to :mod:`warnings`.

    Attributes
    ----------
    warn_on_invalid_context_exceptions:
        When ``True`` (default) misplaced exception values in the context are
        reported to the diagnostics sink before being dropped.

    Examples
    --------
    >>> from io import StringIO
    >>> from lib_log_chain.adapters.stream import StreamHandler
    >>> buffer = StringIO()
    >>> log = Logger("ook", StreamHandler(buffer, options={"entry_format": "%channel% %level_name%  %message%"}))
    >>> log.error("Ook!")
    >>> buffer.getvalue()
    'ook ERROR  Ook!\\n'
    """

    def __init__(self, channel: str | None = None, *handlers: Handler, diagnostics: DiagnosticsPort | None = None) -> None:
        from lib_log_chain import config
        from lib_log_chain.adapters.diagnostics import WarningDiagnostics

        self._diagnostics: DiagnosticsPort = diagnostics if diagnostics is not None else WarningDiagnostics()
        self.warn_on_invalid_context_exceptions = True
        self._channel: str | None = None
        self._handlers: list[Handler] = []
        self.channel = channel

        if not handlers:
            handlers = tuple(default_handlers(memory_limit=config.memory_limit(), diagnostics=self._diagnostics))
        self.push_handler(*handlers)

    @property
    def channel(self) -> str | None:
        return self._channel

    @channel.setter
    def channel(self, value: str | None) -> None:
        if value is not None and not isinstance(value, str):
            raise InvalidArgumentTypeError(f'Argument "channel" must be of type str|None, {type_name(value)} given')
        self._channel = value[:CHANNEL_MAX_LENGTH] if value is not None else None

    def get_channel(self) -> str | None:
        return self._channel

    def set_channel(self, value: str | None) -> None:
        self.channel = value

    @property
    def diagnostics(self) -> DiagnosticsPort:
        return self._diagnostics

    def get_handlers(self) -> list[Handler]:
        """Return a copy of the handler stack in dispatch order."""

        return list(self._handlers)

    @property
    def handlers(self) -> list[Handler]:
        return self.get_handlers()

    def push_handler(self, *handlers: Handler) -> None:
        """Append ``handlers`` to the end of the stack."""

        self._handlers = [*self._handlers, *self._validate_handlers("push_handler", handlers)]

    def unshift_handler(self, *handlers: Handler) -> None:
        """Prepend ``handlers`` to the start of the stack."""

        self._handlers = [*self._validate_handlers("unshift_handler", handlers), *self._handlers]

    def set_handlers(self, *handlers: Handler) -> None:
        """Replace the whole stack; the current one is kept when validation fails."""

        self._handlers = list(self._validate_handlers("set_handlers", handlers))

    def pop_handler(self) -> Handler:
        """Remove and return the last handler."""

        if len(self._handlers) <= 1:
            raise UnderflowError("Popping the last handler will cause the Logger to have zero handlers; there must be at least one")
        return self._handlers.pop()

    def shift_handler(self) -> Handler:
        """Remove and return the first handler."""

        if len(self._handlers) <= 1:
            raise UnderflowError("Shifting the last handler will cause the Logger to have zero handlers; there must be at least one")
        return self._handlers.pop(0)

    def emergency(self, message: object, context: Mapping[str, Any] | None = None) -> None:
        """System is unusable."""
        self.log(Level.EMERGENCY, message, context)

    def alert(self, message: object, context: Mapping[str, Any] | None = None) -> None:
        """Action must be taken immediately."""
        self.log(Level.ALERT, message, context)

    def critical(self, message: object, context: Mapping[str, Any] | None = None) -> None:
        """Critical conditions, e.g. an application component is unavailable."""
        self.log(Level.CRITICAL, message, context)

    def error(self, message: object, context: Mapping[str, Any] | None = None) -> None:
        """Runtime errors that do not require immediate action but should be monitored."""
        self.log(Level.ERROR, message, context)

    def warning(self, message: object, context: Mapping[str, Any] | None = None) -> None:
        """Exceptional occurrences that are not errors."""
        self.log(Level.WARNING, message, context)

    def notice(self, message: object, context: Mapping[str, Any] | None = None) -> None:
        """Normal but significant events."""
        self.log(Level.NOTICE, message, context)

    def info(self, message: object, context: Mapping[str, Any] | None = None) -> None:
        """Interesting events, e.g. user logins or SQL logs."""
        self.log(Level.INFO, message, context)

    def debug(self, message: object, context: Mapping[str, Any] | None = None) -> None:
        """Detailed debug information."""
        self.log(Level.DEBUG, message, context)

    def log(self, level: Level | int | str, message: object, context: Mapping[str, Any] | None = None) -> None:
        """Log ``message`` with an arbitrary level.

        Parameters
        ----------
        level:
            :class:`Level`, integer 0 - 7, or PSR-3 level name.
        message:
            Text to log; non-string objects are rendered with :func:`str`.
        context:
            Extra values; exceptions belong under the ``"exception"`` key.

        Raises
        ------
        InvalidArgumentTypeError
            When ``level`` is not a :class:`Level`, ``int`` or ``str``.
        LevelRangeError
            When an integer level lies outside 0 - 7.
        InvalidLevelNameError
            When a string level is not a PSR-3 name.
        """

        resolved = coerce_level(level)
        text = message if isinstance(message, str) else str(message)
        diagnostics = self._diagnostics if self.warn_on_invalid_context_exceptions else None
        cleaned = sanitize_context(context, diagnostics=diagnostics)

        for handler in self._handlers:
            handler.invoke(resolved, self._channel, text, cleaned)
            if not handler.bubbles:
                break

    def close(self) -> None:
        """Close every handler in the stack."""

        for handler in self._handlers:
            handler.close()

    def __enter__(self) -> "Logger":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @staticmethod
    def _validate_handlers(method: str, handlers: tuple[Handler, ...]) -> tuple[Handler, ...]:
        if not handlers:
            raise ArgumentCountError(f"{method}() expects at least 1 argument, 0 given")
        for position, handler in enumerate(handlers, start=1):
            if not isinstance(handler, Handler):
                raise InvalidArgumentTypeError(f"Argument #{position} of {method}() must be of type Handler, {type_name(handler)} given")
        return handlers


__all__ = ["CHANNEL_MAX_LENGTH", "EXCEPTION_KEY", "Logger", "default_handlers", "sanitize_context"]
