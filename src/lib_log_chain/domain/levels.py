"""Severity enumeration following RFC 5424 ordering and PSR-3 names.

Purpose
-------
Offer a closed, totally ordered severity type with conversions to and from
the PSR-3 string names handlers and callers exchange.

Contents
--------
* :class:`Level` enum (``EMERGENCY`` = 0 … ``DEBUG`` = 7).
* :func:`coerce_level` boundary conversion for raw integers and names.
* :func:`from_name` / :func:`to_name` functional aliases.

System Role
-----------
Used by :class:`~lib_log_chain.application.logger.Logger` to resolve caller
input and by handlers to filter and label records.
"""

from __future__ import annotations

from enum import IntEnum

from .errors import InvalidArgumentTypeError, InvalidLevelNameError, LevelRangeError, type_name


class Level(IntEnum):
    """Enumerated severities; lower values are more severe."""

    EMERGENCY = 0
    """System is unusable."""
    ALERT = 1
    """Action must be taken immediately."""
    CRITICAL = 2
    """Critical conditions, e.g. an application component is unavailable."""
    ERROR = 3
    """Runtime errors that should be logged and monitored."""
    WARNING = 4
    """Exceptional occurrences that are not errors."""
    NOTICE = 5
    """Normal but significant events."""
    INFO = 6
    """Interesting events, e.g. user logins or SQL logs."""
    DEBUG = 7
    """Detailed debug information."""

    @property
    def psr3(self) -> str:
        """Return the lowercase PSR-3 level name."""

        return self.name.lower()

    @property
    def label(self) -> str:
        """Return the uppercase name rendered by formatters."""

        return self.name

    def to_name(self) -> str:
        return self.psr3

    @classmethod
    def from_name(cls, name: str) -> "Level":
        """Translate an exact lowercase PSR-3 level name into :class:`Level`."""

        for level in cls:
            if level.psr3 == name:
                return level
        raise InvalidLevelNameError(f"Unknown log level name: {name!r}")

    @classmethod
    def from_numeric(cls, value: int) -> "Level":
        """Return the :class:`Level` corresponding to ``value``."""

        try:
            return cls(value)
        except ValueError as exc:
            raise LevelRangeError(f"Invalid log level {value}; it is not in the range 0 - 7") from exc


ALL_LEVELS: tuple[Level, ...] = tuple(Level)


def coerce_level(value: Level | int | str) -> Level:
    """Normalise level inputs (enum, integer, or PSR-3 name) into :class:`Level`.

    Examples
    --------
    >>> coerce_level("error") is Level.ERROR
    True
    >>> coerce_level(7) is Level.DEBUG
    True
    """

    if isinstance(value, Level):
        return value
    if isinstance(value, str):
        return Level.from_name(value)
    if isinstance(value, int) and not isinstance(value, bool):
        return Level.from_numeric(value)
    raise InvalidArgumentTypeError(f'Argument "level" must be of type int|Level|str, {type_name(value)} given')


def from_name(name: str) -> Level:
    return Level.from_name(name)


def to_name(level: Level | int) -> str:
    """Return the PSR-3 name for ``level``; total for 0 - 7."""

    return Level.from_numeric(int(level)).psr3


__all__ = ["ALL_LEVELS", "Level", "coerce_level", "from_name", "to_name"]
