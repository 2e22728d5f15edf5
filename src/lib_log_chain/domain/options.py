"""Statically declared option structures for handlers.

Purpose
-------
Each handler type lists exactly the options it recognises, together with the
shape each value must have. Unknown names are detected by looking the name up
in the structure's declared fields rather than by runtime introspection of the
handler object.

Contents
--------
* :class:`HandlerOptions` – options shared by every handler.
* :class:`StreamHandlerOptions` – adds the entry template and transform.
* :class:`ConsoleHandlerOptions` – adds colour control for Rich output.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import Any, Callable, Mapping

from .errors import type_name
from .formatting import DEFAULT_ENTRY_FORMAT, DEFAULT_TIME_FORMAT

MessageTransform = Callable[[str, Mapping[str, Any]], str]
EntryTransform = Callable[[str, int, str, str, str, Mapping[str, Any]], str]


def _is_bool(value: Any) -> bool:
    return isinstance(value, bool)


def _is_str(value: Any) -> bool:
    return isinstance(value, str)


def _is_callable_or_none(value: Any) -> bool:
    return value is None or callable(value)


def _option(default: Any, *, expects: str, check: Callable[[Any], bool]) -> Any:
    return field(default=default, metadata={"expects": expects, "check": check})


@dataclass(slots=True)
class HandlerOptions:
    """Options recognised by every handler."""

    bubbles: bool = _option(True, expects="bool", check=_is_bool)
    time_format: str = _option(DEFAULT_TIME_FORMAT, expects="str", check=_is_str)
    message_transform: MessageTransform | None = _option(None, expects="callable", check=_is_callable_or_none)

    def __post_init__(self) -> None:
        for item in fields(self):
            _validate(item.name, item.metadata, getattr(self, item.name))

    @classmethod
    def names(cls) -> tuple[str, ...]:
        """Return the declared option names."""

        return tuple(item.name for item in fields(cls))

    def has(self, name: str) -> bool:
        return name in self.names()

    def get(self, name: str) -> Any:
        return getattr(self, name)

    def set(self, name: str, value: Any) -> None:
        """Validate and assign ``value``; raises :class:`TypeError` on bad shapes."""

        for item in fields(self):
            if item.name == name:
                _validate(name, item.metadata, value)
                setattr(self, name, value)
                return
        raise KeyError(name)

    def to_dict(self) -> dict[str, Any]:
        return {name: getattr(self, name) for name in self.names()}


@dataclass(slots=True)
class StreamHandlerOptions(HandlerOptions):
    """Options for :class:`~lib_log_chain.adapters.stream.StreamHandler`."""

    entry_format: str = _option(DEFAULT_ENTRY_FORMAT, expects="str", check=_is_str)
    entry_transform: EntryTransform | None = _option(None, expects="callable", check=_is_callable_or_none)


@dataclass(slots=True)
class ConsoleHandlerOptions(StreamHandlerOptions):
    """Options for the Rich console handler."""

    colorize: bool = _option(True, expects="bool", check=_is_bool)


def _validate(name: str, metadata: Mapping[str, Any], value: Any) -> None:
    check = metadata.get("check")
    if check is not None and not check(value):
        raise TypeError(f"Value of {name} option must be {metadata['expects']}, {type_name(value)} given")


__all__ = [
    "ConsoleHandlerOptions",
    "EntryTransform",
    "HandlerOptions",
    "MessageTransform",
    "StreamHandlerOptions",
]
