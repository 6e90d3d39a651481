from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from collections.abc import Sequence
from dataclasses import replace
from datetime import datetime
from pathlib import Path

from dashboard_aggregator.core.config import (
    PipelineConfig,
    resolve_max_workers,
    resolve_pipeline_config,
)
from dashboard_aggregator.core.errors import DirectoryAccessError, ReportWriteError
from dashboard_aggregator.core.pipeline import run_pipeline
from dashboard_aggregator.core.time_window import parse_iso_dt

LOGGER = logging.getLogger(__name__)


def _configure_logging() -> None:
    level_name = os.getenv("DASHBOARD_AGG_LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _days_back(s: str) -> int:
    try:
        value = int(s)
    except ValueError as e:
        raise argparse.ArgumentTypeError("days_back must be an integer") from e
    if value < 0:
        raise argparse.ArgumentTypeError("days_back must be a non-negative number")
    return value


def _positive_int(s: str) -> int:
    try:
        value = int(s)
    except ValueError as e:
        raise argparse.ArgumentTypeError("must be an integer") from e
    if value < 1:
        raise argparse.ArgumentTypeError("must be >= 1")
    return value


def _now(s: str) -> datetime:
    try:
        return parse_iso_dt(s)
    except ValueError as e:
        raise argparse.ArgumentTypeError("now must be ISO8601 (e.g., 2024-01-10T12:00:00Z)") from e


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="dashboard-aggregator",
        description="Aggregate CC/B1 forward-log threat counts into dashboard JSON.",
    )
    p.add_argument("log_dir", help="Directory holding the forward-log dumps")
    p.add_argument("days_back", type=_days_back, help="Only files modified within the last N days")
    p.add_argument("--output-dir", type=Path, default=None, help="Where to write the JSON reports")
    p.add_argument("--pattern", default=None, help="Log file name glob (default: fwddmp.log.tmp*)")
    p.add_argument("--detail-name", default=None, help="Detail report file name (default: events.json)")
    p.add_argument("--summary-name", default=None, help="Summary report file name (default: summary.json)")
    p.add_argument("--max-workers", type=_positive_int, default=None, help="Files scanned concurrently")
    p.add_argument("--now", type=_now, default=None, help="Pin the reference time (ISO8601, UTC if tz missing)")
    return p


def _config_from_args(args: argparse.Namespace) -> PipelineConfig:
    cfg = resolve_pipeline_config(PipelineConfig())
    overrides = {
        "output_dir": args.output_dir,
        "file_pattern": args.pattern,
        "detail_filename": args.detail_name,
        "summary_filename": args.summary_name,
        "max_workers": args.max_workers,
    }
    return replace(cfg, **{k: v for k, v in overrides.items() if v is not None})


def main(argv: Sequence[str] | None = None) -> None:
    p = build_parser()
    args = p.parse_args(argv)
    _configure_logging()

    try:
        cfg = _config_from_args(args)
        cfg = replace(cfg, max_workers=resolve_max_workers(cfg.max_workers))
    except ValueError as e:
        p.error(str(e))

    try:
        result = asyncio.run(run_pipeline(args.log_dir, args.days_back, config=cfg, now=args.now))
    except (DirectoryAccessError, ReportWriteError) as e:
        print(f"Error: {e}", file=sys.stderr)
        raise SystemExit(1)

    print(
        "Finished processing files. "
        f"Output saved to {result.detail_path} and {result.summary_path}"
    )


if __name__ == "__main__":
    main()
