"""Static package metadata surfaced by the CLI banner."""

from __future__ import annotations

from typing import Callable

name = "lib_log_chain"
title = "PSR-3 style channel logger with a bubbling handler chain"
version = "0.1.0"
homepage = "https://pypi.org/project/lib_log_chain/"
author = "lib_log_chain contributors"
shell_command = "lib_log_chain"

_FIELDS = (
    ("name", name),
    ("title", title),
    ("version", version),
    ("homepage", homepage),
    ("author", author),
    ("shell_command", shell_command),
)


def print_info(writer: Callable[[str], None] = print) -> None:
    """Write the metadata banner line by line through ``writer``."""

    pad = max(len(label) for label, _ in _FIELDS)
    writer(f"Info for {name}:\n\n")
    for label, value in _FIELDS:
        writer(f"    {label:<{pad}} = {value}\n")


def summary_info() -> str:
    """Return the banner printed by :func:`print_info` as one string.

    Examples
    --------
    >>> "version" in summary_info()
    True
    """

    lines: list[str] = []
    print_info(writer=lines.append)
    return "".join(lines)
