"""Threat dashboard aggregation for CC/B1 forward logs."""

from __future__ import annotations

__version__ = "0.1.0"
