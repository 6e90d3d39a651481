"""Core data models for threat aggregation."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import TypeAlias


class SkipReason(str, Enum):
    """Why a raw line produced no record."""

    NOT_DATA = "not_data"
    TOO_FEW_FIELDS = "too_few_fields"
    MALFORMED_PRIORITY = "malformed_priority"
    MALFORMED_LINE = "malformed_line"

    @property
    def is_malformed(self) -> bool:
        return self is not SkipReason.NOT_DATA


@dataclass(frozen=True, slots=True)
class LogRecord:
    """One accepted forward-log row, reduced to the columns we count."""

    priority: int
    threat_source: str
    threat_destination: str
    is_aware: bool
    timestamp: datetime | None = None  # informational only, never used for filtering


@dataclass(frozen=True, slots=True)
class ParseSkipped:
    """A line the parser declined, with the reason."""

    line_no: int
    reason: SkipReason


ParseOutcome: TypeAlias = LogRecord | ParseSkipped


@dataclass(slots=True)
class AggregateState:
    """Run-level counters. Only ever grows; entries are never removed."""

    priority_counts: Counter[int] = field(default_factory=Counter)
    source_counts: Counter[str] = field(default_factory=Counter)
    destination_counts: Counter[str] = field(default_factory=Counter)
    aware_count: int = 0
    aware_by_period: Counter[str] = field(default_factory=Counter)
    skip_reasons: Counter[SkipReason] = field(default_factory=Counter)
    total_records_seen: int = 0
    total_records_skipped: int = 0
    not_data_lines: int = 0


@dataclass(frozen=True, slots=True)
class FileSelectionCriteria:
    """Which files in a directory are eligible for one run."""

    directory: Path
    pattern: str
    since: datetime
    until: datetime
