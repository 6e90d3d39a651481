"""Pipeline configuration and environment overrides."""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from pathlib import Path

from .schema import FwdLogSchema, default_schema

DEFAULT_FILE_PATTERN = "fwddmp.log.tmp*"
DEFAULT_DETAIL_FILENAME = "events.json"
DEFAULT_SUMMARY_FILENAME = "summary.json"


@dataclass(frozen=True, slots=True)
class PipelineConfig:
    file_pattern: str = DEFAULT_FILE_PATTERN
    output_dir: Path = Path(".")
    detail_filename: str = DEFAULT_DETAIL_FILENAME
    summary_filename: str = DEFAULT_SUMMARY_FILENAME
    max_workers: int | None = None
    encoding: str = "utf-8"
    decode_errors: str = "replace"
    schema: FwdLogSchema = field(default_factory=default_schema)

    @property
    def detail_path(self) -> Path:
        return self.output_dir / self.detail_filename

    @property
    def summary_path(self) -> Path:
        return self.output_dir / self.summary_filename


def resolve_pipeline_config(cfg: PipelineConfig | None = None) -> PipelineConfig:
    """Return config with env overrides applied to fields left at their defaults."""
    if cfg is None:
        cfg = PipelineConfig()

    output_dir = os.getenv("DASHBOARD_AGG_OUTPUT_DIR")
    if output_dir and cfg.output_dir == Path("."):
        cfg = replace(cfg, output_dir=Path(output_dir))

    pattern = os.getenv("DASHBOARD_AGG_FILE_PATTERN")
    if pattern and cfg.file_pattern == DEFAULT_FILE_PATTERN:
        cfg = replace(cfg, file_pattern=pattern)

    return cfg


def resolve_max_workers(max_workers: int | None) -> int:
    """Worker count: explicit value, else DASHBOARD_AGG_MAX_WORKERS, else CPU-based."""
    if max_workers is not None:
        if max_workers < 1:
            raise ValueError("max_workers must be >= 1")
        return max_workers

    env = os.getenv("DASHBOARD_AGG_MAX_WORKERS")
    if env:
        try:
            value = int(env)
        except ValueError as exc:
            raise ValueError("DASHBOARD_AGG_MAX_WORKERS must be an integer") from exc
        if value < 1:
            raise ValueError("DASHBOARD_AGG_MAX_WORKERS must be >= 1")
        return value

    cpu_count = os.cpu_count() or 1
    return min(32, cpu_count)
