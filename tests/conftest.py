"""Test configuration helpers and shared fixtures."""

from __future__ import annotations

import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Iterator

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

os.environ.setdefault("SETTINGS_SKIP_DOTENV", "1")


class FakeClock:
    """Callable clock whose current time tests move by hand."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2024, 3, 5, 9, 30, 0))


@pytest.fixture
def writer(tmp_path: Path, clock: FakeClock) -> Iterator["DailyFileLogWriter"]:
    """Writer logging into ``tmp_path`` on the fake clock's day."""

    from logs import DailyFileLogWriter

    instance = DailyFileLogWriter(tmp_path, clock=clock)
    yield instance
    instance.close()
