"""Time-window helpers.

Converts a days-back lookback into a UTC [since, until] range.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta, tzinfo


def parse_iso_dt(s: str) -> datetime:
    """Parse ISO8601 datetime. If tz is missing, assume UTC."""
    dt = datetime.fromisoformat(s.replace("Z", "+00:00"))
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def normalize_ts(ts: datetime, *, default_tz: tzinfo = UTC) -> datetime:
    """Normalize timestamps to timezone-aware UTC."""
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=default_tz)
    return ts.astimezone(UTC)


def lookback_window(days_back: int, *, now: datetime | None = None) -> tuple[datetime, datetime]:
    """Return the inclusive window [now - days_back days, now].

    days_back == 0 means "today": the window opens at UTC midnight of `now`.
    """
    if days_back < 0:
        raise ValueError("days_back must be >= 0")
    until = normalize_ts(now) if now is not None else datetime.now(UTC)
    if days_back == 0:
        since = until.replace(hour=0, minute=0, second=0, microsecond=0)
    else:
        since = until - timedelta(days=days_back)
    return since, until
