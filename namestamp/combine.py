"""Merging of neighbouring readings into one timestamp."""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Sequence

from .logger import get_logger
from .matchers.tokens import TimezoneMark
from .types import Candidate, DigitSequence
from .validators import is_valid_second

logger = get_logger(__name__)


def with_fields(candidate: Candidate, **changes) -> Candidate:
    """``dataclasses.replace`` that keeps the alternatives of an ambiguous reading in step."""
    alternatives = tuple(replace(alt, **changes) for alt in candidate.alternatives)
    return replace(candidate, alternatives=alternatives, **changes)


def with_time(date: Candidate, time: Candidate) -> Candidate:
    return with_fields(
        date,
        hour=time.hour,
        minute=time.minute,
        second=time.second,
        millisecond=time.millisecond,
        precision=time.precision,
        end=time.end,
        timezone=time.timezone,
        utc_offset_minutes=time.utc_offset_minutes,
    )


def _is_date_only(c: Candidate) -> bool:
    return c.precision == "day" and c.has_date and not c.has_time


def combine_adjacent(candidates: Sequence[Candidate], max_gap: int) -> list[Candidate]:
    """Merge each date-only reading with a time-only reading starting at most ``max_gap`` chars later.

    ``candidates`` must be sorted by start.
    """
    out: list[Candidate] = []
    i = 0
    while i < len(candidates):
        c = candidates[i]
        if _is_date_only(c) and i + 1 < len(candidates):
            nxt = candidates[i + 1]
            if nxt.is_time_only and 0 <= nxt.start - c.end <= max_gap:
                logger.debug("Merged %s with %s", c.type, nxt.type)
                out.append(with_time(c, nxt))
                i += 2
                continue
        out.append(c)
        i += 1
    return out


def attach_timezones(candidates: Sequence[Candidate], marks: Iterable[TimezoneMark]) -> list[Candidate]:
    """Give a time-bearing reading the UTC offset written right after it."""
    out = list(candidates)
    for mark in marks:
        for idx, c in enumerate(out):
            if c.has_time and c.timezone is None and 0 <= mark.start - c.end <= 1:
                out[idx] = with_fields(c, end=mark.end, timezone=mark.text, utc_offset_minutes=mark.offset_minutes)
                break
    return out


def _needs_seconds(c: Candidate) -> bool:
    if not (c.has_date and c.has_time):
        return False
    return c.precision == "minute" or (c.precision == "second" and c.second == 0)


def complete_seconds(candidates: Sequence[Candidate], seqs: Sequence[DigitSequence]) -> list[Candidate]:
    """Fill seconds from a raw HHMMSS run elsewhere in the name that repeats a known HH:MM.

    The run is a second copy of the time, so readings taken from it are dropped.
    """
    out = list(candidates)
    for idx, c in enumerate(out):
        if not _needs_seconds(c):
            continue
        hhmm = f"{c.hour:02d}{c.minute:02d}"
        for seq in seqs:
            if seq.digits != 6 or (seq.start < c.end and c.start < seq.end):
                continue
            if seq.value[:4] != hhmm:
                continue
            second = int(seq.value[4:])
            if not is_valid_second(second):
                continue
            logger.debug("Seconds for %s taken from embedded run %s", c.type, seq.value)
            out[idx] = with_fields(c, second=second, precision="second")
            out = [o for o in out if not (seq.start <= o.start and o.end <= seq.end)]
            return out
    return out
