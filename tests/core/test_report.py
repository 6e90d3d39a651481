from __future__ import annotations

import json
from collections import Counter
from pathlib import Path

import pytest

from dashboard_aggregator.core.errors import ReportWriteError
from dashboard_aggregator.core.models import AggregateState, SkipReason
from dashboard_aggregator.core.report import (
    DetailReport,
    build_detail,
    build_summary,
    ranked,
    render,
    summarize_detail,
    write_report,
    write_reports,
)


def _state() -> AggregateState:
    return AggregateState(
        priority_counts=Counter({3: 2, 5: 2, 1: 4}),
        source_counts=Counter({"10.0.0.9": 3, "10.0.0.1": 3, "10.0.0.5": 2}),
        destination_counts=Counter({"192.168.1.1": 8}),
        aware_count=3,
        aware_by_period=Counter({"2024-01-10 PM": 1, "2024-01-09 AM": 2}),
        skip_reasons=Counter({SkipReason.TOO_FEW_FIELDS: 1, SkipReason.MALFORMED_PRIORITY: 2}),
        total_records_seen=8,
        total_records_skipped=3,
        not_data_lines=4,
    )


def test_ranked_orders_by_count_then_key() -> None:
    assert ranked(Counter({"b": 2, "a": 2, "c": 5})) == [("c", 5), ("a", 2), ("b", 2)]
    assert ranked(Counter({10: 1, 2: 1})) == [(2, 1), (10, 1)]


def test_build_detail_ordering() -> None:
    files = [Path("/logs/fwddmp.log.tmp.1")]
    detail = build_detail(_state(), days_back=5, files=files)

    assert detail.window.days_back == 5
    assert detail.window.files == ["fwddmp.log.tmp.1"]
    assert [(p.priority, p.count) for p in detail.priorities] == [(1, 4), (3, 2), (5, 2)]
    assert [s.source for s in detail.threat_sources] == ["10.0.0.1", "10.0.0.9", "10.0.0.5"]
    assert [p.period for p in detail.aware_threats] == ["2024-01-09 AM", "2024-01-10 PM"]
    assert [(s.reason, s.count) for s in detail.skipped] == [
        ("malformed_priority", 2),
        ("too_few_fields", 1),
    ]


def test_build_summary_totals() -> None:
    summary = build_summary(_state(), files=[Path("a"), Path("b")], failed_files=[Path("c")])
    assert summary.model_dump() == {
        "total_records_seen": 8,
        "total_records_skipped": 3,
        "aware_count": 3,
        "distinct_sources": 3,
        "distinct_destinations": 1,
        "files_scanned": 2,
        "files_failed": 1,
    }


def test_detail_json_recomputes_summary() -> None:
    state = _state()
    files = [Path("fwddmp.log.tmp.1")]
    text = render(build_detail(state, days_back=2, files=files))

    decoded = DetailReport.model_validate_json(text)

    assert summarize_detail(decoded) == build_summary(state, files=files)


def test_detail_field_order_is_stable() -> None:
    text = render(build_detail(_state(), days_back=1))
    assert list(json.loads(text)) == [
        "window",
        "priorities",
        "threat_sources",
        "threat_destinations",
        "aware_count",
        "aware_threats",
        "skipped",
    ]


def test_empty_state_renders_empty_lists() -> None:
    detail = json.loads(render(build_detail(AggregateState(), days_back=0)))
    assert detail["priorities"] == []
    assert detail["threat_sources"] == []
    assert detail["threat_destinations"] == []
    assert detail["aware_count"] == 0


@pytest.mark.asyncio
async def test_write_reports(tmp_path: Path) -> None:
    state = _state()
    detail_path = tmp_path / "events.json"
    summary_path = tmp_path / "summary.json"

    await write_reports(
        build_detail(state, days_back=1),
        build_summary(state),
        detail_path=detail_path,
        summary_path=summary_path,
    )

    assert json.loads(summary_path.read_text(encoding="utf-8"))["total_records_seen"] == 8
    assert json.loads(detail_path.read_text(encoding="utf-8"))["aware_count"] == 3


@pytest.mark.asyncio
async def test_write_report_failure_names_path(tmp_path: Path) -> None:
    target = tmp_path / "missing-dir" / "summary.json"
    with pytest.raises(ReportWriteError) as info:
        await write_report(build_summary(AggregateState()), target)
    assert info.value.path == target
    assert str(target) in str(info.value)
