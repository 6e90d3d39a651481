"""Incremental counting over parsed records."""

from __future__ import annotations

from .models import AggregateState, LogRecord, SkipReason


def aware_period(record: LogRecord) -> str | None:
    """Half-day bucket for an AWARE record, e.g. '2024-01-10 PM'."""
    if record.timestamp is None:
        return None
    half = "AM" if record.timestamp.hour < 12 else "PM"
    return f"{record.timestamp.date().isoformat()} {half}"


class Aggregator:
    """Sole owner of an AggregateState.

    Updates commute, so the final state does not depend on record order.
    """

    def __init__(self, state: AggregateState | None = None) -> None:
        self._state = state if state is not None else AggregateState()

    def update(self, record: LogRecord) -> None:
        s = self._state
        s.priority_counts[record.priority] += 1
        s.source_counts[record.threat_source] += 1
        s.destination_counts[record.threat_destination] += 1
        if record.is_aware:
            s.aware_count += 1
            period = aware_period(record)
            if period is not None:
                s.aware_by_period[period] += 1
        s.total_records_seen += 1

    def note_skipped(self, reason: SkipReason = SkipReason.MALFORMED_LINE) -> None:
        """Tally a rejected line. NOT_DATA lines never count as skipped records."""
        s = self._state
        if not reason.is_malformed:
            s.not_data_lines += 1
            return
        s.skip_reasons[reason] += 1
        s.total_records_skipped += 1

    def merge(self, other: AggregateState) -> None:
        """Fold another (finished) state into this one by summing every counter."""
        s = self._state
        s.priority_counts.update(other.priority_counts)
        s.source_counts.update(other.source_counts)
        s.destination_counts.update(other.destination_counts)
        s.aware_by_period.update(other.aware_by_period)
        s.skip_reasons.update(other.skip_reasons)
        s.aware_count += other.aware_count
        s.total_records_seen += other.total_records_seen
        s.total_records_skipped += other.total_records_skipped
        s.not_data_lines += other.not_data_lines

    def snapshot(self) -> AggregateState:
        """Current state by reference; read it only once the scan is done."""
        return self._state
