"""Shared test fixtures and configuration for all tests.

This conftest.py provides common fixtures used across unit and integration tests.
"""

import json
from pathlib import Path
from typing import Any, Dict

import pytest

from remote_reconciler.config import Settings
from remote_reconciler.retry.controller import RetryController


class FakeClock:
    """Deterministic clock/sleep pair for driving retry loops.

    `sleep` records the requested delay and advances the clock instead of
    blocking; `advance` simulates time spent inside a remote call.
    """

    def __init__(self, start: float = 0.0):
        self.now = start
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def test_settings() -> Settings:
    """Test settings with safe defaults for local testing.

    Retry windows and delays keep their production values; tests drive
    time through the fake clock, so nothing actually sleeps.
    """
    return Settings(
        # === Application ===
        APP_NAME="Remote State Reconciler (Test)",
        LOG_LEVEL="DEBUG",
        ENVIRONMENT="development",

        # === Remote API ===
        API_BASE_URL="https://api.pagerduty.test",
        API_TOKEN="test-token",
        HTTP_TIMEOUT=5.0,

        # === Retry ===
        READ_RETRY_WINDOW_SECONDS=120.0,
        CREATE_RETRY_WINDOW_SECONDS=60.0,
        LOOKUP_RETRY_WINDOW_SECONDS=120.0,
        RETRY_DELAY_SECONDS=2.0,
        RATE_LIMIT_DELAY_SECONDS=30.0,
    )


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def controller(fake_clock: FakeClock) -> RetryController:
    """RetryController driven by the fake clock (never really sleeps)."""
    return RetryController(clock=fake_clock, sleep=fake_clock.sleep)


@pytest.fixture
def fixtures_dir() -> Path:
    """Path to test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def sample_integration_data(fixtures_dir: Path) -> Dict[str, Any]:
    """Load sample service integration payload (as returned by the API)."""
    with open(fixtures_dir / "sample_integration.json") as f:
        return json.load(f)


@pytest.fixture
def sample_schedules_data(fixtures_dir: Path) -> Dict[str, Any]:
    """Load sample schedules listing (substring search results)."""
    with open(fixtures_dir / "sample_schedules.json") as f:
        return json.load(f)
