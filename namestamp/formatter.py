from __future__ import annotations

from .types import Candidate


def _offset_text(minutes: int) -> str:
    if minutes == 0:
        return "Z"
    sign = "-" if minutes < 0 else "+"
    hours, mins = divmod(abs(minutes), 60)
    return f"{sign}{hours:02d}:{mins:02d}"


def format_timestamp(candidate: Candidate | None) -> str | None:
    """ISO-8601 text at the reading's precision.

    ``2024``, ``2024-03``, ``2024-03-15``, ``2024-03-15T12:30``, ``2024-03-15T12:30:45``,
    ``2024-03-15T12:30:45.123``; an offset is appended when known. Time-only readings
    give ``T12:30:45``.
    """
    if candidate is None:
        return None

    parts = ""
    if candidate.year is not None:
        parts = f"{candidate.year:04d}"
        if candidate.month is not None:
            parts += f"-{candidate.month:02d}"
            if candidate.day is not None:
                parts += f"-{candidate.day:02d}"

    if candidate.hour is not None:
        parts += f"T{candidate.hour:02d}:{(candidate.minute or 0):02d}"
        if candidate.second is not None:
            parts += f":{candidate.second:02d}"
            if candidate.millisecond is not None:
                parts += f".{candidate.millisecond:03d}"
        if candidate.utc_offset_minutes is not None:
            parts += _offset_text(candidate.utc_offset_minutes)
    return parts or None
