# tests/conftest.py

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

from cleannest.cli.bootstrap import create_initial_state
from cleannest.config import Delays, Settings
from cleannest.core.state import AppState

from .fakes import FakeClock, RecordingSleeper


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    """
    Settings with zero simulated latency.

    Built directly rather than from the environment, to keep unit tests
    isolated and deterministic.
    """
    return Settings(
        app_name="cleannest-test",
        log_level="DEBUG",
        data_dir=tmp_path,
        delays=Delays.zero(),
        strict_ids=False,
        demo_user_id="mock-user-123",
        demo_user_email="demo@cleannest.com",
    )


@pytest.fixture()
def sleeper() -> RecordingSleeper:
    return RecordingSleeper()


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def state(settings: Settings, sleeper: RecordingSleeper, clock: FakeClock) -> Iterator[AppState]:
    """AppState wired with the real managers, a fake clock and a non-waiting sleeper."""
    app_state = create_initial_state(settings=settings, sleep=sleeper, clock=clock)
    yield app_state
    app_state.close()
