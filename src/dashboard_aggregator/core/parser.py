"""Position-based parser for forward-log lines."""

from __future__ import annotations

import csv
from dataclasses import dataclass, field
from datetime import datetime

from .models import LogRecord, ParseOutcome, ParseSkipped, SkipReason
from .schema import FwdLogSchema, default_schema


def _split_fields(line: str, delimiter: str) -> list[str] | None:
    """Split one line with CSV quoting rules; None if the quoting is broken."""
    try:
        return next(csv.reader((line,), delimiter=delimiter, strict=True), [])
    except csv.Error:
        return None


def _parse_priority(value: str, levels: range | None) -> int | None:
    try:
        priority = int(value.strip())
    except ValueError:
        return None
    if levels is not None and priority not in levels:
        return None
    return priority


def _parse_timestamp(value: str, fmt: str) -> datetime | None:
    try:
        return datetime.strptime(value.strip(), fmt)
    except ValueError:
        return None


@dataclass(frozen=True, slots=True)
class FwdLogParser:
    """Turn one raw line into a LogRecord or a ParseSkipped.

    Pure function of the line: no I/O, no counters.
    """

    schema: FwdLogSchema = field(default_factory=default_schema)

    def parse(self, line_no: int, line: str) -> ParseOutcome:
        """Parse a single line; the trailing newline may be present or not."""
        schema = self.schema
        text = line.rstrip("\r\n")

        if not text.strip():
            return ParseSkipped(line_no, SkipReason.NOT_DATA)
        if schema.comment_prefix and text.lstrip().startswith(schema.comment_prefix):
            return ParseSkipped(line_no, SkipReason.NOT_DATA)

        fields = _split_fields(text, schema.delimiter)
        if fields is None:
            return ParseSkipped(line_no, SkipReason.MALFORMED_LINE)
        if len(fields) < schema.min_fields:
            return ParseSkipped(line_no, SkipReason.TOO_FEW_FIELDS)

        raw_priority = fields[schema.priority_col]
        if raw_priority.strip().lower() == schema.header_priority:
            return ParseSkipped(line_no, SkipReason.NOT_DATA)

        priority = _parse_priority(raw_priority, schema.priority_levels)
        if priority is None:
            return ParseSkipped(line_no, SkipReason.MALFORMED_PRIORITY)

        return LogRecord(
            priority=priority,
            threat_source=fields[schema.source_col].strip(),
            threat_destination=fields[schema.destination_col].strip(),
            is_aware=schema.aware_marker in fields[schema.event_type_col],
            timestamp=_parse_timestamp(fields[schema.timestamp_col], schema.timestamp_format),
        )
