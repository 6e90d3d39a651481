"""Module entrypoint.

Allows:
    python -m dashboard_aggregator
"""

from __future__ import annotations

from dashboard_aggregator.cli import main

if __name__ == "__main__":
    main()
