"""Filesystem port consumed by the stream handler.

Purpose
-------
Keep path normalisation, directory creation, and file opening behind a narrow
protocol so tests can substitute fakes and the handler stays free of
platform-specific code.

Contents
--------
* :class:`FilesystemPort` – ``canonicalize``, ``ensure_directory_exists`` and
  ``open_append``.
"""

from __future__ import annotations

from typing import Protocol, TextIO, runtime_checkable


@runtime_checkable
class FilesystemPort(Protocol):
    """Resolve and open log destinations."""

    def canonicalize(self, path: str) -> str:
        """Collapse ``.``/``..`` segments and duplicate separators in ``path``."""

    def ensure_directory_exists(self, path: str) -> None:
        """Create ``path`` and its parents when missing."""

    def open_append(self, path: str, *, buffering: int) -> TextIO:
        """Open ``path`` for appending text with ``buffering`` bytes."""


__all__ = ["FilesystemPort"]
