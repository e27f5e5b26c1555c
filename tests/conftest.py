"""Shared pytest fixtures for tcalc tests."""

from datetime import UTC, datetime

import pytest

from tcalc.core.clock import FixedClock

# Saturday 2025-09-27, mid-morning UTC
FIXED_INSTANT = datetime(2025, 9, 27, 10, 15, tzinfo=UTC)


@pytest.fixture
def fixed_clock() -> FixedClock:
    """Return a clock pinned to FIXED_INSTANT."""
    return FixedClock(FIXED_INSTANT)


@pytest.fixture(autouse=True)
def _clear_tcalc_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer environment settings out of the tests."""
    monkeypatch.delenv("TCALC_NOW", raising=False)
    monkeypatch.delenv("TCALC_LOG_LEVEL", raising=False)
