"""Clock adapter returning the local wall-clock time."""

from __future__ import annotations

from datetime import datetime

from lib_log_chain.application.ports.time import ClockPort


class SystemClock(ClockPort):
    """Concrete clock port returning timezone-aware local timestamps."""

    def now(self) -> datetime:
        return datetime.now().astimezone()


__all__ = ["SystemClock"]
