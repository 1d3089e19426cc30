"""UTC datetime utilities."""

from datetime import date, datetime, timezone


def utc_now() -> datetime:
    """Return timezone-aware UTC now."""
    return datetime.now(timezone.utc)


def month_start(now: datetime) -> datetime:
    """First instant of now's calendar month, same tzinfo."""
    return now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


def iso_or_none(value: datetime | date | None) -> str | None:
    return value.isoformat() if value is not None else None
