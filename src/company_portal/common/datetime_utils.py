from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Optional


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def window_start(now: datetime, days: int) -> date:
    """First calendar day of a window reaching ``days`` days back from ``now``."""
    return now.date() - timedelta(days=int(days))


def isoformat_or_none(value: Optional[datetime | date]) -> Optional[str]:
    return value.isoformat() if value is not None else None
