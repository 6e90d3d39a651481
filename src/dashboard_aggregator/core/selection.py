"""Candidate file selection by name pattern and modification time."""

from __future__ import annotations

import logging
import os
from datetime import UTC, datetime
from fnmatch import fnmatchcase
from pathlib import Path

from .errors import DirectoryAccessError
from .models import FileSelectionCriteria
from .time_window import lookback_window

logger = logging.getLogger(__name__)


def criteria_for(
    directory: str | Path,
    days_back: int,
    *,
    pattern: str,
    now: datetime | None = None,
) -> FileSelectionCriteria:
    """Build selection criteria for a days-back lookback ending at `now`."""
    since, until = lookback_window(days_back, now=now)
    return FileSelectionCriteria(directory=Path(directory), pattern=pattern, since=since, until=until)


def _modified_at(entry: os.DirEntry[str]) -> datetime | None:
    try:
        return datetime.fromtimestamp(entry.stat().st_mtime, tz=UTC)
    except OSError as exc:
        logger.warning("Cannot stat %s: %s", entry.path, exc)
        return None


def select_files(criteria: FileSelectionCriteria) -> list[Path]:
    """Return matching files (non-recursive), sorted by name.

    A file qualifies when its name matches the pattern and its mtime lies in
    [since, until]. An empty result is not an error.
    """
    directory = criteria.directory
    if not directory.is_dir():
        raise DirectoryAccessError(directory, "Log directory not found")

    selected: list[Path] = []
    try:
        with os.scandir(directory) as it:
            for entry in it:
                if not fnmatchcase(entry.name, criteria.pattern):
                    continue
                if not entry.is_file():
                    continue
                mtime = _modified_at(entry)
                if mtime is None:
                    continue
                if criteria.since <= mtime <= criteria.until:
                    selected.append(Path(entry.path))
    except OSError as exc:
        raise DirectoryAccessError(directory) from exc

    selected.sort(key=lambda p: p.name)
    logger.debug("Selected %d file(s) in %s", len(selected), directory)
    return selected
