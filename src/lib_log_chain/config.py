"""Environment-driven configuration with optional ``.env`` loading.

Purpose
-------
Collect the few knobs a host may want to set without code changes (default
channel, memory ceiling for buffer sizing, time and entry formats) from
environment variables, optionally seeded from the nearest ``.env`` file.

Contents
--------
* :data:`DOTENV_ENV_VAR` – toggle read by the CLI to decide on ``.env``
  loading.
* :func:`enable_dotenv` – load the nearest ``.env`` once per process.
* :class:`LoggerSettings` / :func:`load_settings` – typed view over the
  environment.
* :func:`memory_limit` – shortcut used when building default handlers.

System Role
-----------
Outer layer only: the domain and application layers receive these values as
explicit constructor arguments.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from dotenv import find_dotenv, load_dotenv

from .domain.formatting import DEFAULT_ENTRY_FORMAT, DEFAULT_TIME_FORMAT

logger = logging.getLogger(__name__)

DOTENV_ENV_VAR = "LOG_USE_DOTENV"
CHANNEL_ENV_VAR = "LOG_CHANNEL"
MEMORY_LIMIT_ENV_VAR = "LOG_MEMORY_LIMIT"
TIME_FORMAT_ENV_VAR = "LOG_TIME_FORMAT"
ENTRY_FORMAT_ENV_VAR = "LOG_ENTRY_FORMAT"
WARN_INVALID_CONTEXT_ENV_VAR = "LOG_WARN_INVALID_CONTEXT"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}

_DOTENV_LOADED: Path | None = None
_DOTENV_ATTEMPTED = False


def is_truthy(value: str | None) -> bool:
    return value is not None and value.strip().lower() in _TRUTHY


def enable_dotenv(search_from: Path | None = None) -> Path | None:
    """Load the nearest ``.env`` without overriding existing variables.

    The search walks upwards from ``search_from`` (default: the current
    working directory). Only the first call per process touches the
    filesystem; later calls return the cached result.

    Returns
    -------
    Path | None
        Resolved path of the loaded file, or ``None`` when none was found.
    """

    global _DOTENV_LOADED, _DOTENV_ATTEMPTED
    if _DOTENV_ATTEMPTED:
        return _DOTENV_LOADED
    _DOTENV_ATTEMPTED = True

    if search_from is not None:
        found = _find_upwards(search_from)
    else:
        found_str = find_dotenv(usecwd=True)
        found = Path(found_str) if found_str else None
    if found is None:
        logger.debug("no .env file found")
        return None

    resolved = found.resolve()
    load_dotenv(resolved, override=False)
    logger.debug("loaded environment from %s", resolved)
    _DOTENV_LOADED = resolved
    return resolved


def _find_upwards(start: Path) -> Path | None:
    start = start.resolve()
    for directory in (start, *start.parents):
        candidate = directory / ".env"
        if candidate.is_file():
            return candidate
    return None


def _reset_dotenv_state_for_testing() -> None:
    global _DOTENV_LOADED, _DOTENV_ATTEMPTED
    _DOTENV_LOADED = None
    _DOTENV_ATTEMPTED = False


@dataclass(slots=True, frozen=True)
class LoggerSettings:
    """Settings resolved from the environment.

    Attributes
    ----------
    channel:
        Default channel for loggers created by the CLI.
    memory_limit:
        Shorthand ceiling (``"128M"``) that sizes stream write buffers.
    time_format:
        ``strftime`` pattern applied to timestamps.
    entry_format:
        ``%placeholder%`` template for stream entries.
    warn_on_invalid_context:
        Whether misplaced exceptions in context produce diagnostics.
    """

    channel: str | None = None
    memory_limit: str | None = None
    time_format: str = DEFAULT_TIME_FORMAT
    entry_format: str = DEFAULT_ENTRY_FORMAT
    warn_on_invalid_context: bool = True

    def handler_options(self) -> dict[str, object]:
        """Return the options mapping passed to stream handlers."""

        return {"time_format": self.time_format, "entry_format": self.entry_format}


def load_settings(environ: Mapping[str, str] | None = None) -> LoggerSettings:
    """Build :class:`LoggerSettings` from ``environ`` (default: ``os.environ``)."""

    env = os.environ if environ is None else environ
    warn_raw = env.get(WARN_INVALID_CONTEXT_ENV_VAR)
    warn = True if warn_raw is None or not warn_raw.strip() else warn_raw.strip().lower() not in _FALSY
    return LoggerSettings(
        channel=env.get(CHANNEL_ENV_VAR) or None,
        memory_limit=env.get(MEMORY_LIMIT_ENV_VAR) or None,
        time_format=env.get(TIME_FORMAT_ENV_VAR) or DEFAULT_TIME_FORMAT,
        entry_format=env.get(ENTRY_FORMAT_ENV_VAR) or DEFAULT_ENTRY_FORMAT,
        warn_on_invalid_context=warn,
    )


def memory_limit(environ: Mapping[str, str] | None = None) -> str | None:
    env = os.environ if environ is None else environ
    return env.get(MEMORY_LIMIT_ENV_VAR) or None


__all__ = [
    "CHANNEL_ENV_VAR",
    "DOTENV_ENV_VAR",
    "ENTRY_FORMAT_ENV_VAR",
    "LoggerSettings",
    "MEMORY_LIMIT_ENV_VAR",
    "TIME_FORMAT_ENV_VAR",
    "WARN_INVALID_CONTEXT_ENV_VAR",
    "enable_dotenv",
    "is_truthy",
    "load_settings",
    "memory_limit",
]
