"""Stream handler writing formatted entries to handles, files, and std streams.

Purpose
-------
Resolve a destination designator (open handle, bare path, ``file://`` URI, or
one of the built-in ``sys://stdout``/``sys://stderr`` streams), render each
record through the entry template or transform, and append the line.

Contents
--------
* :class:`StreamHandler` – concrete :class:`Handler`.
* :data:`STDOUT` / :data:`STDERR` – built-in destination designators.

System Role
-----------
Default sink installed by :class:`~lib_log_chain.application.logger.Logger`.
Files opened by the handler are opened lazily on the first accepted record
and kept open until :meth:`StreamHandler.close`; handles supplied by the
caller are borrowed and never closed.
"""

from __future__ import annotations

import logging
import os
import re
import sys
from typing import Any, Iterable, Mapping, TextIO

from lib_log_chain.application.handler import Handler
from lib_log_chain.application.ports import ClockPort, DiagnosticsPort, FilesystemPort
from lib_log_chain.domain.errors import IOException, InvalidArgumentTypeError, type_name
from lib_log_chain.domain.formatting import finish_line, format_entry
from lib_log_chain.domain.levels import ALL_LEVELS, Level
from lib_log_chain.domain.options import HandlerOptions, StreamHandlerOptions
from lib_log_chain.domain.records import LogRecord
from lib_log_chain.domain.sizes import compute_chunk_size

from .filesystem import LocalFilesystem

logger = logging.getLogger(__name__)

STDOUT = "sys://stdout"
STDERR = "sys://stderr"

_SYS_STREAMS = {STDOUT: "stdout", STDERR: "stderr"}
# Not a validator for URI schemes; it only needs to split off the scheme and
# count the slashes that follow it.
_SCHEME = re.compile(r"^(?:(?P<scheme>[^:\s/]+):)?(?P<slashes>/*)", re.IGNORECASE)


def _is_handle(value: Any) -> bool:
    return not isinstance(value, (str, bytes)) and callable(getattr(value, "write", None))


class StreamHandler(Handler):
    """Append formatted entries to a stream.

    Parameters
    ----------
    stream:
        Open writable text handle, or a string naming the destination.
    levels, options, clock, diagnostics:
        See :class:`~lib_log_chain.application.handler.Handler`. Recognised
        options are listed by :class:`StreamHandlerOptions`.
    memory_limit:
        Shorthand memory ceiling (``"128M"``) used to size the write buffer.
    filesystem:
        Path and file service; defaults to :class:`LocalFilesystem`.

    Examples
    --------
    >>> from io import StringIO
    >>> buffer = StringIO()
    >>> handler = StreamHandler(buffer, options={"entry_format": "%channel% %level_name%  %message%"})
    >>> handler(Level.ERROR, "ook", "Ook!")
    >>> buffer.getvalue()
    'ook ERROR  Ook!\\n'
    """

    options_class = StreamHandlerOptions

    def __init__(
        self,
        stream: TextIO | str = STDOUT,
        levels: Iterable[Level | int] = ALL_LEVELS,
        options: Mapping[str, Any] | HandlerOptions | None = None,
        *,
        memory_limit: str | None = None,
        filesystem: FilesystemPort | None = None,
        clock: ClockPort | None = None,
        diagnostics: DiagnosticsPort | None = None,
    ) -> None:
        self._filesystem: FilesystemPort = filesystem if filesystem is not None else LocalFilesystem()
        self._chunk_size = compute_chunk_size(memory_limit)
        self._stream: TextIO | None = None
        self._owns_stream = False
        self._uri: str | None = None
        self._uri_scheme: str | None = None
        self.set_stream(stream)
        super().__init__(levels, options, clock=clock, diagnostics=diagnostics)

    @property
    def stream(self) -> TextIO | None:
        """Return the live handle, or ``None`` before a path is first opened."""

        return self._stream

    def get_stream(self) -> TextIO | None:
        return self._stream

    @property
    def uri(self) -> str | None:
        """Return the resolved path or URI, when the destination has one."""

        return self._uri

    def get_uri(self) -> str | None:
        return self._uri

    @property
    def uri_scheme(self) -> str | None:
        return self._uri_scheme

    @property
    def chunk_size(self) -> int:
        return self._chunk_size

    @property
    def owns_stream(self) -> bool:
        return self._owns_stream

    def set_stream(self, value: TextIO | str) -> None:
        """Point the handler at a new destination.

        Raises
        ------
        InvalidArgumentTypeError
            When ``value`` is neither a writable handle nor a string.
        """

        is_handle = _is_handle(value)
        if not is_handle and not isinstance(value, str):
            raise InvalidArgumentTypeError(f'Argument "stream" must be of type TextIO|str, {type_name(value)} given')

        self.close()
        uri: str | None
        if is_handle:
            self._stream = value  # type: ignore[assignment]
            name = getattr(value, "name", None)
            uri = name if isinstance(name, str) and name and not name.startswith("<") else None
        else:
            self._stream = None
            uri = value  # type: ignore[assignment]

        if uri is None:
            self._uri = None
            self._uri_scheme = None
            return
        self._uri, self._uri_scheme = self._resolve(uri)

    def format(self, record: LogRecord) -> str:
        """Render ``record`` via ``entry_transform`` or the ``entry_format`` template."""

        options = self._options
        output = format_entry(
            record,
            entry_format=getattr(options, "entry_format", ""),
            entry_transform=getattr(options, "entry_transform", None),
        )
        return finish_line(output)

    def write(self, line: str) -> None:
        """Append ``line`` to the destination, opening owned files lazily."""

        stream = self._acquire()
        try:
            stream.write(line)
            stream.flush()
        except (OSError, ValueError) as exc:
            # ValueError covers handles the caller closed behind our back.
            raise IOException(f"Unable to write to {self._describe()}: {exc}", path=self._uri) from exc

    def close(self) -> None:
        """Close the handle when this handler opened it; borrowed handles stay open."""

        stream, owned = getattr(self, "_stream", None), getattr(self, "_owns_stream", False)
        if stream is None or not owned:
            return
        self._stream = None
        self._owns_stream = False
        if not stream.closed:
            stream.close()
            logger.debug("closed log destination %s", self._uri)

    def __del__(self) -> None:
        try:
            self.close()
        except OSError:  # pragma: no cover - interpreter teardown
            pass

    def _resolve(self, value: str) -> tuple[str, str]:
        value = self._filesystem.canonicalize(value)
        match = _SCHEME.match(value)
        scheme = (match.group("scheme") or "") if match else ""
        if scheme.lower() in ("file", ""):
            slashes = len(match.group("slashes")) if match else 0
            relative = slashes in (0, 2) if scheme else slashes == 0
            rest = value[len(match.group(0)) :] if match else value
            prefix = os.getcwd().rstrip("/") if relative else ""
            value = f"{prefix}/{rest}"
        return value, scheme.lower() or "file"

    def _acquire(self) -> TextIO:
        if self._stream is not None:
            return self._stream

        if self._uri in _SYS_STREAMS:
            return getattr(sys, _SYS_STREAMS[self._uri])

        if self._uri is None or self._uri_scheme != "file":
            raise IOException(f"Unable to open {self._describe()}: unsupported stream scheme {self._uri_scheme!r}", path=self._uri)

        try:
            self._filesystem.ensure_directory_exists(os.path.dirname(self._uri) or "/")
            self._stream = self._filesystem.open_append(self._uri, buffering=self._chunk_size)
        except OSError as exc:
            raise IOException(f"Unable to open {self._uri} for appending: {exc}", path=self._uri) from exc
        self._owns_stream = True
        logger.debug("opened log destination %s (chunk size %d)", self._uri, self._chunk_size)
        return self._stream

    def _describe(self) -> str:
        return self._uri if self._uri is not None else "stream"


__all__ = ["STDERR", "STDOUT", "StreamHandler"]
