from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

HEADER = (
    "No.,Priority,Action,Threat Type,Date/Time,Protocol,Source IP,Source Port,"
    "Source Zone,Source Host,Direction,Service,Destination IP,Destination Port"
)


def _fwd_line(
    priority: str | int = 3,
    source: str = "10.0.0.1",
    destination: str = "192.168.1.10",
    *,
    threat_type: str = "SIGNATURE",
    timestamp: str = "2024/01/10 09:15:00",
) -> str:
    fields = [
        "1",
        str(priority),
        "BLOCK",
        threat_type,
        timestamp,
        "TCP",
        source,
        "51515",
        "WAN",
        "host-a",
        "IN",
        "http",
        destination,
        "80",
    ]
    return ",".join(fields)


@pytest.fixture
def fwd_line() -> Callable[..., str]:
    return _fwd_line


@pytest.fixture
def write_fwd_log() -> Callable[[Path, list[str]], Path]:
    def _write(path: Path, lines: list[str]) -> Path:
        path.write_text(HEADER + "\n" + "".join(line + "\n" for line in lines), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def fwd_header() -> str:
    return HEADER
