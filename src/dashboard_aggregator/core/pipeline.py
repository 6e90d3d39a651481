"""File selection -> parsing -> aggregation -> reports.

This module is the main integration point: it streams every selected file
line by line, folds the records into one AggregateState and emits the two
report documents.
"""

from __future__ import annotations

import asyncio
import gzip
import logging
import zlib
from collections.abc import Sequence
from contextlib import asynccontextmanager
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

import aiofiles
from aiofiles.threadpool import wrap

from .aggregator import Aggregator
from .config import PipelineConfig, resolve_max_workers, resolve_pipeline_config
from .errors import FileOpenError, ReportWriteError
from .models import AggregateState, ParseSkipped
from .parser import FwdLogParser
from .report import DetailReport, SummaryReport, build_detail, build_summary, write_reports
from .selection import criteria_for, select_files

logger = logging.getLogger(__name__)


@asynccontextmanager
async def _open_text(path: Path, *, encoding: str, decode_errors: str):
    """Open a log file for async text reading (plain or gzip)."""
    if path.suffix.lower() == ".gz":
        f = gzip.open(path, mode="rt", encoding=encoding, errors=decode_errors)
        af = wrap(f)
        try:
            yield af
        finally:
            await af.close()
    else:
        async with aiofiles.open(path, encoding=encoding, errors=decode_errors) as f:
            yield f


async def _enumerate_async(iterable, start: int = 0):
    """Async enumerate helper for async iterators."""
    index = start
    async for item in iterable:
        yield index, item
        index += 1


@dataclass(frozen=True, slots=True)
class PipelineResult:
    """Everything one run produced."""

    state: AggregateState
    files: list[Path]
    failed_files: list[Path]
    detail: DetailReport
    summary: SummaryReport
    detail_path: Path
    summary_path: Path


async def scan_file(
    path: Path,
    *,
    parser: FwdLogParser,
    encoding: str = "utf-8",
    decode_errors: str = "replace",
) -> AggregateState:
    """Stream one file into a fresh state.

    Any I/O or decompression failure, at open or mid-stream, raises FileOpenError and the
    partial state is dropped.
    """
    aggregator = Aggregator()
    try:
        async with _open_text(path, encoding=encoding, decode_errors=decode_errors) as f:
            async for line_no, line in _enumerate_async(f, start=1):
                outcome = parser.parse(line_no, line)
                if isinstance(outcome, ParseSkipped):
                    if outcome.reason.is_malformed:
                        logger.debug("%s:%d skipped (%s)", path.name, line_no, outcome.reason.value)
                    aggregator.note_skipped(outcome.reason)
                    continue
                aggregator.update(outcome)
    except (OSError, EOFError, zlib.error) as exc:
        raise FileOpenError(path) from exc
    return aggregator.snapshot()


async def aggregate_files(
    files: Sequence[Path],
    *,
    parser: FwdLogParser | None = None,
    max_workers: int | None = None,
    encoding: str = "utf-8",
    decode_errors: str = "replace",
) -> tuple[AggregateState, list[Path]]:
    """Scan files concurrently (one task per file) and merge in name order.

    Returns the merged state and the files that could not be read.
    """
    parser = parser or FwdLogParser()
    semaphore = asyncio.Semaphore(resolve_max_workers(max_workers))

    async def scan_one(path: Path) -> AggregateState | None:
        async with semaphore:
            logger.info("Processing file: %s", path)
            try:
                return await scan_file(
                    path, parser=parser, encoding=encoding, decode_errors=decode_errors
                )
            except FileOpenError as exc:
                logger.warning("Skipping file: %s (%s)", exc, exc.__cause__)
                return None

    states = await asyncio.gather(*(scan_one(p) for p in files))

    aggregator = Aggregator()
    failed: list[Path] = []
    for path, state in zip(files, states, strict=True):
        if state is None:
            failed.append(path)
            continue
        aggregator.merge(state)
    return aggregator.snapshot(), failed


async def run_pipeline(
    log_dir: str | Path,
    days_back: int,
    *,
    config: PipelineConfig | None = None,
    now: datetime | None = None,
) -> PipelineResult:
    """One batch pass: select, scan, aggregate, then write both reports.

    DirectoryAccessError and ReportWriteError propagate; unreadable files are
    recorded in `failed_files` and the run continues. A ReportWriteError from
    here carries the finished PipelineResult in `result`.
    """
    cfg = resolve_pipeline_config(config)
    criteria = criteria_for(log_dir, days_back, pattern=cfg.file_pattern, now=now)
    logger.info(
        "Selecting %s in %s modified between %s and %s",
        criteria.pattern,
        criteria.directory,
        criteria.since.isoformat(),
        criteria.until.isoformat(),
    )
    files = select_files(criteria)
    if not files:
        logger.info("No matching log files; writing empty reports")

    state, failed = await aggregate_files(
        files,
        parser=FwdLogParser(schema=cfg.schema),
        max_workers=cfg.max_workers,
        encoding=cfg.encoding,
        decode_errors=cfg.decode_errors,
    )
    scanned = [p for p in files if p not in failed]

    detail = build_detail(state, days_back=days_back, files=scanned, failed_files=failed)
    summary = build_summary(state, files=scanned, failed_files=failed)
    logger.info(
        "Aggregated %d record(s), skipped %d, AWARE %d",
        state.total_records_seen,
        state.total_records_skipped,
        state.aware_count,
    )

    result = PipelineResult(
        state=state,
        files=scanned,
        failed_files=failed,
        detail=detail,
        summary=summary,
        detail_path=cfg.detail_path,
        summary_path=cfg.summary_path,
    )
    try:
        await write_reports(
            detail,
            summary,
            detail_path=cfg.detail_path,
            summary_path=cfg.summary_path,
        )
    except ReportWriteError as exc:
        raise ReportWriteError(exc.path, result=result) from exc.__cause__
    return result
