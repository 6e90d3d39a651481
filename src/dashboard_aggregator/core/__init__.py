"""Core aggregation pipeline.

Parsing, selection, counting and report building live here; the CLI is a thin
layer on top.
"""

from __future__ import annotations

from .aggregator import Aggregator
from .config import PipelineConfig
from .errors import AggregatorError, DirectoryAccessError, FileOpenError, ReportWriteError
from .models import AggregateState, FileSelectionCriteria, LogRecord, ParseSkipped, SkipReason
from .parser import FwdLogParser
from .pipeline import PipelineResult, aggregate_files, run_pipeline, scan_file
from .report import DetailReport, SummaryReport, build_detail, build_summary, summarize_detail
from .schema import FwdLogSchema, default_schema
from .selection import criteria_for, select_files

__all__ = [
    "AggregateState",
    "Aggregator",
    "AggregatorError",
    "DetailReport",
    "DirectoryAccessError",
    "FileOpenError",
    "FileSelectionCriteria",
    "FwdLogParser",
    "FwdLogSchema",
    "LogRecord",
    "ParseSkipped",
    "PipelineConfig",
    "PipelineResult",
    "ReportWriteError",
    "SkipReason",
    "SummaryReport",
    "aggregate_files",
    "build_detail",
    "build_summary",
    "criteria_for",
    "default_schema",
    "run_pipeline",
    "scan_file",
    "select_files",
    "summarize_detail",
]
