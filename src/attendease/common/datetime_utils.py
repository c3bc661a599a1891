from __future__ import annotations

from datetime import date, datetime, time


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_clock_time(value: str) -> time:
    """Parse a 24h HH:mm string into time."""
    return datetime.strptime(value, "%H:%M").time()


def combine_date_time(day: str, clock: str) -> datetime:
    """Start instant of a session stored as separate date and time strings."""
    return datetime.combine(parse_iso_date(day), parse_clock_time(clock))


def to_epoch_millis(value: datetime) -> int:
    return int(value.timestamp() * 1000)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
