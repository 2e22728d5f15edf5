"""Write-buffer sizing derived from a shorthand memory ceiling.

The ceiling uses the familiar shorthand notation (``128M``, ``1g``, ``512k``
or plain bytes). A stream handler buffers at most 10 % of it, never less than
100 KiB and never more than 10 MiB.
"""

from __future__ import annotations

import re

DEFAULT_CHUNK_SIZE = 10 * 1024 * 1024
MIN_CHUNK_SIZE = 100 * 1024

_SHORTHAND = re.compile(r"^\s*(?P<num>\d+)(?:\.\d+)?\s*(?P<unit>[gkm])?\s*$", re.IGNORECASE)
_MULTIPLIERS = {"": 1, "k": 1024, "m": 1024**2, "g": 1024**3}


def parse_shorthand_size(value: str | None) -> int | None:
    """Return ``value`` in bytes, or ``None`` when it is absent or unparseable.

    Examples
    --------
    >>> parse_shorthand_size("128M")
    134217728
    >>> parse_shorthand_size("-1") is None
    True
    """

    if value is None:
        return None
    match = _SHORTHAND.match(value)
    if match is None:
        return None
    unit = (match.group("unit") or "").lower()
    return int(match.group("num")) * _MULTIPLIERS[unit]


def compute_chunk_size(memory_limit: str | None) -> int:
    """Return the write chunk size for ``memory_limit``.

    Examples
    --------
    >>> compute_chunk_size(None) == DEFAULT_CHUNK_SIZE
    True
    >>> compute_chunk_size("512K") == MIN_CHUNK_SIZE
    True
    >>> compute_chunk_size("50M")
    5242880
    """

    limit = parse_shorthand_size(memory_limit)
    if limit is None:
        return DEFAULT_CHUNK_SIZE
    return min(DEFAULT_CHUNK_SIZE, max(limit // 10, MIN_CHUNK_SIZE))


__all__ = ["DEFAULT_CHUNK_SIZE", "MIN_CHUNK_SIZE", "compute_chunk_size", "parse_shorthand_size"]
