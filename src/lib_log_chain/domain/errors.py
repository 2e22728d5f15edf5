"""Error hierarchy raised by the logging facade.

Purpose
-------
Give every structural failure a dedicated type so callers can react to bad
arguments, handler-stack underflow, and destination I/O separately.

Contents
--------
* :class:`InvalidArgumentError` and its refinements for types, ranges, and
  level names.
* :class:`ArgumentCountError` / :class:`UnderflowError` guarding the handler
  stack.
* :class:`IOException` carrying the failing destination path.

System Role
-----------
Shared by the domain, application, and adapter layers; re-exported from the
package root.
"""

from __future__ import annotations


class InvalidArgumentError(ValueError):
    """Malformed construction or call argument."""


class InvalidArgumentTypeError(InvalidArgumentError, TypeError):
    """Argument of the wrong type (also catchable as :class:`TypeError`)."""


class LevelRangeError(InvalidArgumentError):
    """Numeric level outside the range 0 - 7."""


class InvalidLevelNameError(InvalidArgumentError):
    """Level name that is not one of the eight PSR-3 names."""


class ArgumentCountError(TypeError):
    """A variadic operation received no arguments."""


class UnderflowError(IndexError):
    """Removing a handler would leave the logger without any."""


class IOException(OSError):
    """Opening or writing a log destination failed.

    Attributes
    ----------
    path:
        Destination path or URI that failed, when known.
    """

    def __init__(self, message: str, *, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


def type_name(value: object) -> str:
    """Return the name used in error messages for ``value``'s type."""

    if value is None:
        return "None"
    return type(value).__name__


__all__ = [
    "ArgumentCountError",
    "IOException",
    "InvalidArgumentError",
    "InvalidArgumentTypeError",
    "InvalidLevelNameError",
    "LevelRangeError",
    "UnderflowError",
    "type_name",
]
