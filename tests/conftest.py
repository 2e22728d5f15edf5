from __future__ import annotations

from datetime import datetime, timezone
from io import StringIO
from typing import Iterator

import pytest
from rich.console import Console

from lib_log_chain import config as log_config
from lib_log_chain.adapters.diagnostics import CollectingDiagnostics

FIXED_TIME = datetime(2025, 9, 23, 12, 0, 5, tzinfo=timezone.utc)


class FixedClock:
    def __init__(self, moment: datetime = FIXED_TIME) -> None:
        self.moment = moment

    def now(self) -> datetime:
        return self.moment


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def diagnostics() -> CollectingDiagnostics:
    return CollectingDiagnostics()


@pytest.fixture
def memory_stream() -> Iterator[StringIO]:
    stream = StringIO()
    yield stream
    stream.close()


@pytest.fixture
def record_console() -> Console:
    return Console(file=StringIO(), record=True, color_system=None, width=200)


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for name in (
        log_config.CHANNEL_ENV_VAR,
        log_config.MEMORY_LIMIT_ENV_VAR,
        log_config.TIME_FORMAT_ENV_VAR,
        log_config.ENTRY_FORMAT_ENV_VAR,
        log_config.WARN_INVALID_CONTEXT_ENV_VAR,
        log_config.DOTENV_ENV_VAR,
    ):
        monkeypatch.delenv(name, raising=False)
    log_config._reset_dotenv_state_for_testing()
    yield
    log_config._reset_dotenv_state_for_testing()
