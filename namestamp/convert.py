from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

from .types import Candidate


def calendar_date(candidate: Candidate) -> date | None:
    """Return the calendar date of a day-level reading, or None when it does not exist (31 April)."""
    if not candidate.has_date:
        return None
    try:
        return date(candidate.year, candidate.month, candidate.day)
    except ValueError:
        return None


def is_calendar_valid(candidate: Candidate) -> bool:
    """Readings without a full date pass; full dates must exist on the calendar."""
    if not candidate.has_date:
        return True
    return calendar_date(candidate) is not None


def _tzinfo(candidate: Candidate) -> timezone | None:
    if candidate.utc_offset_minutes is None:
        return None
    if candidate.utc_offset_minutes == 0:
        return timezone.utc
    return timezone(timedelta(minutes=candidate.utc_offset_minutes))


def to_datetime(
    candidate: Candidate | None,
    *,
    allow_time_only: bool = False,
    today: date | None = None,
) -> datetime | None:
    """Build a datetime from a reading.

    Missing month/day default to 1, missing time fields to 0. Time-only readings are
    placed on ``today`` (default: the current local date) when ``allow_time_only`` is set.
    Returns None for calendar-invalid assemblies. Aware when the reading carries an offset.
    """
    if candidate is None:
        return None

    if candidate.year is None:
        if not (allow_time_only and candidate.has_time):
            return None
        d = today or date.today()
        year, month, day = d.year, d.month, d.day
    else:
        year, month, day = candidate.year, candidate.month or 1, candidate.day or 1

    try:
        return datetime(
            year,
            month,
            day,
            candidate.hour or 0,
            candidate.minute or 0,
            candidate.second or 0,
            (candidate.millisecond or 0) * 1000,
            tzinfo=_tzinfo(candidate),
        )
    except ValueError:
        return None
