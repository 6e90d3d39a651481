"""Fixed-column schema for CC/B1 forward logs.

The column layout is a contract owned by the log producer. It is versioned here
as a frozen value so a different producer layout can be passed in without
touching the parser.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class FwdLogSchema:
    """Column positions and markers for one forward-log layout."""

    version: str
    delimiter: str
    priority_col: int
    event_type_col: int
    timestamp_col: int
    source_col: int
    destination_col: int
    aware_marker: str = "AWARE"
    timestamp_format: str = "%Y/%m/%d %H:%M:%S"
    comment_prefix: str | None = "#"
    header_priority: str = "priority"
    priority_levels: range | None = range(0, 6)

    @property
    def min_fields(self) -> int:
        return 1 + max(
            self.priority_col,
            self.event_type_col,
            self.timestamp_col,
            self.source_col,
            self.destination_col,
        )


def default_schema() -> FwdLogSchema:
    """Layout of the fwddmp CSV dumps (version cc-b1-fwd/1)."""
    return FwdLogSchema(
        version="cc-b1-fwd/1",
        delimiter=",",
        priority_col=1,
        event_type_col=3,
        timestamp_col=4,
        source_col=6,
        destination_col=12,
    )
