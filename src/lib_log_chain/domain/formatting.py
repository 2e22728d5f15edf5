"""Entry template language shared by the line-oriented handlers.

Why
---
Stream and console handlers accept the same ``%placeholder%`` templates. By
producing the placeholder payload in one place both handlers render records
identically.

Contents
--------
* :data:`DEFAULT_ENTRY_FORMAT` – template used when none (or an empty one) is
  configured.
* :func:`build_entry_payload` – placeholder values for a record.
* :func:`render_entry` – substitute placeholders; unknown ones become empty.
* :func:`format_entry` – choose between a transform callable and a template.
* :func:`finish_line` – newline policy applied after rendering.
"""

from __future__ import annotations

import re
from typing import Any, Callable

from .errors import type_name
from .records import LogRecord

DEFAULT_ENTRY_FORMAT = "%time%  %channel% %level_name%  %message%"
DEFAULT_TIME_FORMAT = "%b %d %H:%M:%S"

_PLACEHOLDER = re.compile(r"%([A-Za-z0-9_]+)%")


def build_entry_payload(record: LogRecord) -> dict[str, str]:
    """Return the mapping of placeholders exposed to entry templates."""

    return {
        "time": record.time,
        "datetime": record.time,
        "channel": record.channel,
        "level": str(int(record.level)),
        "level_name": record.level.label,
        "message": record.message,
    }


def render_entry(template: str, record: LogRecord) -> str:
    """Render ``record`` through ``template``.

    Examples
    --------
    >>> from lib_log_chain.domain.levels import Level
    >>> record = LogRecord("Jan 01 00:00:00", Level.ERROR, "ook", "ook")
    >>> render_entry("%channel% %channel% %level% %level_name%", record)
    'ook ook 3 ERROR'
    >>> render_entry("%ook%", record)
    ''
    """

    if not template:
        template = DEFAULT_ENTRY_FORMAT
    payload = build_entry_payload(record)
    return _PLACEHOLDER.sub(lambda match: payload.get(match.group(1), ""), template)


def format_entry(record: LogRecord, *, entry_format: str, entry_transform: Callable[..., Any] | None = None) -> str:
    """Render ``record`` through ``entry_transform`` when set, else ``entry_format``.

    The transform receives ``(time, level, level_name, channel, message,
    context)`` and must return a string.
    """

    if entry_transform is None:
        return render_entry(entry_format, record)
    output = entry_transform(record.time, int(record.level), record.level.label, record.channel, record.message, record.context)
    if not isinstance(output, str):
        raise TypeError(f"Return value of entry_transform option callable must be a str, {type_name(output)} given")
    return output


def finish_line(output: str) -> str:
    """Terminate ``output``; multi-line entries get a blank separator line.

    Examples
    --------
    >>> finish_line("one")
    'one\\n'
    >>> finish_line("one\\ntwo")
    'one\\ntwo\\n\\n'
    """

    if "\n" in output:
        output += "\n"
    return output + "\n"


__all__ = [
    "DEFAULT_ENTRY_FORMAT",
    "DEFAULT_TIME_FORMAT",
    "build_entry_payload",
    "finish_line",
    "format_entry",
    "render_entry",
]
