from __future__ import annotations

from datetime import UTC, datetime, timedelta, timezone

import pytest

from dashboard_aggregator.core.time_window import lookback_window, normalize_ts, parse_iso_dt


def test_parse_iso_dt_assumes_utc() -> None:
    dt = parse_iso_dt("2024-01-10T10:00:00")
    assert dt == datetime(2024, 1, 10, 10, 0, 0, tzinfo=UTC)


def test_parse_iso_dt_z_suffix() -> None:
    assert parse_iso_dt("2024-01-10T10:00:00Z") == datetime(2024, 1, 10, 10, 0, 0, tzinfo=UTC)


def test_normalize_ts_converts_offset() -> None:
    ts = datetime(2024, 1, 10, 12, 0, 0, tzinfo=timezone(timedelta(hours=2)))
    assert normalize_ts(ts) == datetime(2024, 1, 10, 10, 0, 0, tzinfo=UTC)


def test_lookback_window() -> None:
    now = datetime(2024, 1, 10, 12, 0, 0, tzinfo=UTC)
    since, until = lookback_window(5, now=now)
    assert since == now - timedelta(days=5)
    assert until == now


def test_lookback_window_zero_days() -> None:
    now = datetime(2024, 1, 10, 12, 0, 0, tzinfo=UTC)
    assert lookback_window(0, now=now) == (datetime(2024, 1, 10, 0, 0, 0, tzinfo=UTC), now)


def test_lookback_window_zero_days_normalizes_to_utc_day() -> None:
    now = datetime(2024, 1, 10, 1, 30, 0, tzinfo=timezone(timedelta(hours=3)))
    since, until = lookback_window(0, now=now)
    assert since == datetime(2024, 1, 9, 0, 0, 0, tzinfo=UTC)
    assert until == datetime(2024, 1, 9, 22, 30, 0, tzinfo=UTC)


def test_lookback_window_negative() -> None:
    with pytest.raises(ValueError):
        lookback_window(-1)
