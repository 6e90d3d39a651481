"""Exception types raised by the aggregation pipeline."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .pipeline import PipelineResult


class AggregatorError(Exception):
    """Base class for pipeline failures."""

    def __init__(self, path: Path, message: str) -> None:
        super().__init__(f"{message}: {path}")
        self.path = path


class DirectoryAccessError(AggregatorError):
    """The log directory is missing or cannot be listed. Fatal."""

    def __init__(self, path: Path, message: str = "Cannot read log directory") -> None:
        super().__init__(path, message)


class FileOpenError(AggregatorError):
    """A single log file could not be opened or read. Recovered per file."""

    def __init__(self, path: Path, message: str = "Cannot read log file") -> None:
        super().__init__(path, message)


class ReportWriteError(AggregatorError):
    """A report document could not be written. Fatal.

    When raised by run_pipeline, `result` holds the aggregates that were
    computed before the write failed.
    """

    def __init__(
        self,
        path: Path,
        message: str = "Cannot write report",
        *,
        result: PipelineResult | None = None,
    ) -> None:
        super().__init__(path, message)
        self.result = result
