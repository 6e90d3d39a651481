"""Detail and summary report documents.

Both documents are pydantic models so field order in the emitted JSON is the
model's declaration order. Breakdown lists are sorted by descending count, then
ascending key.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Sequence
from pathlib import Path
from typing import TypeVar

import aiofiles
from pydantic import BaseModel, Field

from .errors import ReportWriteError
from .models import AggregateState

logger = logging.getLogger(__name__)

K = TypeVar("K", int, str)


class PriorityCount(BaseModel):
    priority: int
    count: int


class SourceCount(BaseModel):
    source: str
    count: int


class DestinationCount(BaseModel):
    destination: str
    count: int


class PeriodCount(BaseModel):
    period: str = Field(description="Half-day bucket, e.g. '2024-01-10 AM'.")
    count: int


class SkipCount(BaseModel):
    reason: str
    count: int


class ReportWindow(BaseModel):
    days_back: int = Field(ge=0)
    files: list[str] = Field(default_factory=list, description="Scanned file names.")
    failed_files: list[str] = Field(default_factory=list)


class DetailReport(BaseModel):
    window: ReportWindow
    priorities: list[PriorityCount] = Field(default_factory=list)
    threat_sources: list[SourceCount] = Field(default_factory=list)
    threat_destinations: list[DestinationCount] = Field(default_factory=list)
    aware_count: int = 0
    aware_threats: list[PeriodCount] = Field(default_factory=list)
    skipped: list[SkipCount] = Field(default_factory=list)


class SummaryReport(BaseModel):
    total_records_seen: int = 0
    total_records_skipped: int = 0
    aware_count: int = 0
    distinct_sources: int = 0
    distinct_destinations: int = 0
    files_scanned: int = 0
    files_failed: int = 0


def ranked(counts: Counter[K]) -> list[tuple[K, int]]:
    """Items by descending count, then ascending key."""
    return sorted(counts.items(), key=lambda kv: (-kv[1], kv[0]))


def _window(days_back: int, files: Sequence[Path], failed: Sequence[Path]) -> ReportWindow:
    return ReportWindow(
        days_back=days_back,
        files=[p.name for p in files],
        failed_files=[p.name for p in failed],
    )


def build_detail(
    state: AggregateState,
    *,
    days_back: int,
    files: Sequence[Path] = (),
    failed_files: Sequence[Path] = (),
) -> DetailReport:
    return DetailReport(
        window=_window(days_back, files, failed_files),
        priorities=[PriorityCount(priority=k, count=v) for k, v in ranked(state.priority_counts)],
        threat_sources=[SourceCount(source=k, count=v) for k, v in ranked(state.source_counts)],
        threat_destinations=[
            DestinationCount(destination=k, count=v) for k, v in ranked(state.destination_counts)
        ],
        aware_count=state.aware_count,
        # Chronological, not ranked.
        aware_threats=[PeriodCount(period=k, count=v) for k, v in sorted(state.aware_by_period.items())],
        skipped=[
            SkipCount(reason=k, count=v)
            for k, v in ranked(Counter({r.value: n for r, n in state.skip_reasons.items()}))
        ],
    )


def build_summary(
    state: AggregateState,
    *,
    files: Sequence[Path] = (),
    failed_files: Sequence[Path] = (),
) -> SummaryReport:
    return SummaryReport(
        total_records_seen=state.total_records_seen,
        total_records_skipped=state.total_records_skipped,
        aware_count=state.aware_count,
        distinct_sources=len(state.source_counts),
        distinct_destinations=len(state.destination_counts),
        files_scanned=len(files),
        files_failed=len(failed_files),
    )


def summarize_detail(detail: DetailReport) -> SummaryReport:
    """Recompute summary totals from a detail document alone."""
    return SummaryReport(
        total_records_seen=sum(p.count for p in detail.priorities),
        total_records_skipped=sum(s.count for s in detail.skipped),
        aware_count=detail.aware_count,
        distinct_sources=len(detail.threat_sources),
        distinct_destinations=len(detail.threat_destinations),
        files_scanned=len(detail.window.files),
        files_failed=len(detail.window.failed_files),
    )


def render(report: BaseModel) -> str:
    """Serialize a report to its on-disk text form."""
    return report.model_dump_json(indent=2) + "\n"


async def write_report(report: BaseModel, path: Path) -> None:
    """Serialize then write one document; I/O failures surface as ReportWriteError."""
    payload = render(report)
    try:
        async with aiofiles.open(path, "w", encoding="utf-8") as f:
            await f.write(payload)
    except OSError as exc:
        raise ReportWriteError(path) from exc
    logger.debug("Wrote %s (%d bytes)", path, len(payload))


async def write_reports(
    detail: DetailReport,
    summary: SummaryReport,
    *,
    detail_path: Path,
    summary_path: Path,
) -> None:
    await write_report(detail, detail_path)
    await write_report(summary, summary_path)
