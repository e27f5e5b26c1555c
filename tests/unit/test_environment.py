"""Tests for environment-driven configuration."""

from __future__ import annotations

import logging
from datetime import UTC, datetime

import pytest

from tcalc.core.clock import FixedClock, SystemClock
from tcalc.core.environment import get_clock, get_log_level


class TestGetClock:
    def test_unset_uses_system_clock(self) -> None:
        assert isinstance(get_clock(), SystemClock)

    def test_blank_uses_system_clock(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TCALC_NOW", "   ")
        assert isinstance(get_clock(), SystemClock)

    def test_naive_value_is_utc(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TCALC_NOW", "2025-09-27T12:00:00")
        clock = get_clock()
        assert isinstance(clock, FixedClock)
        assert clock.now() == datetime(2025, 9, 27, 12, 0, tzinfo=UTC)
        assert repr(clock) == "FixedClock(2025-09-27T12:00:00+00:00)"

    def test_offset_value_is_converted(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("TCALC_NOW", "2025-09-27T12:00:00+02:00")
        now = get_clock().now()
        assert now == datetime(2025, 9, 27, 10, 0, tzinfo=UTC)
        assert now.utcoffset() is not None
        assert now.utcoffset().total_seconds() == 0

    def test_invalid_value_warns(
        self, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
    ) -> None:
        monkeypatch.setenv("TCALC_NOW", "yesterday-ish")
        with caplog.at_level(logging.WARNING, logger="tcalc.core.environment"):
            clock = get_clock()
        assert isinstance(clock, SystemClock)
        assert "Invalid TCALC_NOW value 'yesterday-ish'" in caplog.text


class TestGetLogLevel:
    def test_default(self) -> None:
        assert get_log_level() == logging.WARNING

    @pytest.mark.parametrize(
        ("raw", "level"),
        [
            ("debug", logging.DEBUG),
            ("INFO", logging.INFO),
            (" Error ", logging.ERROR),
            ("warn", logging.WARNING),
            ("critical", logging.CRITICAL),
        ],
    )
    def test_named_levels(self, monkeypatch: pytest.MonkeyPatch, raw: str, level: int) -> None:
        monkeypatch.setenv("TCALC_LOG_LEVEL", raw)
        assert get_log_level() == level

    def test_unknown_level_warns(
        self, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
    ) -> None:
        monkeypatch.setenv("TCALC_LOG_LEVEL", "loud")
        with caplog.at_level(logging.WARNING, logger="tcalc.core.environment"):
            assert get_log_level() == logging.WARNING
        assert "Unknown TCALC_LOG_LEVEL value 'loud'" in caplog.text
