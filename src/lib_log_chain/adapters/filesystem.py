"""Local filesystem adapter implementing :class:`FilesystemPort`."""

from __future__ import annotations

import re
from pathlib import Path
from typing import TextIO

from lib_log_chain.application.ports.filesystem import FilesystemPort

_PREFIX = re.compile(r"^(?:[^:\s/]+:)?(?P<slashes>/*)")


class LocalFilesystem(FilesystemPort):
    """Resolve and open destinations on the local filesystem via :mod:`pathlib`."""

    def canonicalize(self, path: str) -> str:
        """Collapse ``.``/``..`` segments and repeated separators.

        Any ``scheme:`` prefix and the leading slashes are preserved verbatim
        because their count decides whether the path is relative.

        Examples
        --------
        >>> LocalFilesystem().canonicalize("logs/./app/../app.log")
        'logs/app.log'
        >>> LocalFilesystem().canonicalize("file:///var//log/../tmp/app.log")
        'file:///var/tmp/app.log'
        >>> LocalFilesystem().canonicalize("../app.log")
        '../app.log'
        """

        path = path.replace("\\", "/")
        match = _PREFIX.match(path)
        prefix = match.group(0) if match else ""
        rooted = bool(match and match.group("slashes"))
        parts: list[str] = []
        for segment in path[len(prefix) :].split("/"):
            if segment in ("", "."):
                continue
            if segment == "..":
                if parts and parts[-1] != "..":
                    parts.pop()
                elif not rooted:
                    parts.append("..")
                continue
            parts.append(segment)
        return prefix + "/".join(parts)

    def ensure_directory_exists(self, path: str) -> None:
        Path(path).mkdir(parents=True, exist_ok=True)

    def open_append(self, path: str, *, buffering: int) -> TextIO:
        return Path(path).open("a", encoding="utf-8", errors="backslashreplace", buffering=buffering)


__all__ = ["LocalFilesystem"]
