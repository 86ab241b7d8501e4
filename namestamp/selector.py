from __future__ import annotations

from typing import Sequence

from .combine import with_fields
from .logger import get_logger
from .scoring import with_confidence
from .types import Candidate

logger = get_logger(__name__)


def _merge_trailing_time(candidates: Sequence[Candidate], text: str) -> Candidate | None:
    """``2025-10-08 00.00.00 - 10.03.23``: the date comes from the first stamp, the time from the later one."""
    full = next((c for c in candidates if c.has_date and c.has_time and c.precision == "second"), None)
    if full is None:
        return None
    time = next((c for c in candidates if c.is_time_only and c.precision == "second"), None)
    if time is None or time.start <= full.end:
        return None
    logger.debug("Replacing time of %s with later time %s", full.type, time.type)
    merged = with_fields(
        full,
        type="MERGED_DATETIME",
        hour=time.hour,
        minute=time.minute,
        second=time.second,
        end=time.end,
        timezone=time.timezone,
        utc_offset_minutes=time.utc_offset_minutes,
    )
    return with_confidence(merged, text)


def select_best(candidates: Sequence[Candidate], text: str = "") -> Candidate | None:
    """Pick one reading: highest precision, then time-bearing, then the later one in the name."""
    if not candidates:
        return None
    merged = _merge_trailing_time(candidates, text)
    if merged is not None:
        return merged
    return max(candidates, key=lambda c: (c.rank, c.has_time, c.start))
