"""Interpreters for a single run of digits (``20241103``, ``143045``, ``1700000000``)."""

from __future__ import annotations

import re
from datetime import datetime, timezone

from ..logger import get_logger
from ..sequences import split_digits
from ..types import Ambiguous, Candidate, DigitSequence, MatchResult, Resolved
from ..validators import (
    is_short_year,
    is_valid_day,
    is_valid_hour,
    is_valid_minute,
    is_valid_month,
    is_valid_time,
    is_valid_year,
)
from .base import MatchContext, span_candidate

logger = get_logger(__name__)

_REPEATING_PAIR_RE = re.compile(r"^(\d{2})\1{2}$")
_ALL_SAME_RE = re.compile(r"^(\d)\1+$")
DECOY_SEQUENCES = frozenset({"123456", "654321", "012345"})


def _valid_date(year: int, month: int, day: int) -> bool:
    return is_valid_year(year) and is_valid_month(month) and is_valid_day(day)


def match_datetime14(seq: DigitSequence, ctx: MatchContext) -> MatchResult | None:
    y, mo, d, h, mi, s = split_digits(seq.value, 4, 2, 2, 2, 2, 2)
    if not (_valid_date(y, mo, d) and is_valid_time(h, mi, s)):
        return None
    return Resolved(
        span_candidate(
            "COMPACT_DATETIME", "second", seq.start, seq.end,
            year=y, month=mo, day=d, hour=h, minute=mi, second=s,
        )
    )


def match_datetime17(seq: DigitSequence, ctx: MatchContext) -> MatchResult | None:
    y, mo, d, h, mi, s, ms = split_digits(seq.value, 4, 2, 2, 2, 2, 2, 3)
    if not (_valid_date(y, mo, d) and is_valid_time(h, mi, s)):
        return None
    return Resolved(
        span_candidate(
            "COMPACT_DATETIME_MS", "millisecond", seq.start, seq.end,
            year=y, month=mo, day=d, hour=h, minute=mi, second=s, millisecond=ms,
        )
    )


def _epoch_candidate(type_: str, seq: DigitSequence, seconds: int, millisecond: int | None) -> Candidate:
    dt = datetime.fromtimestamp(seconds, tz=timezone.utc)
    fields = dict(
        year=dt.year, month=dt.month, day=dt.day, hour=dt.hour, minute=dt.minute, second=dt.second,
    )
    if millisecond is not None:
        fields["millisecond"] = millisecond
    return Candidate(
        type=type_,
        precision="millisecond" if millisecond is not None else "second",
        start=seq.start,
        end=seq.end,
        timezone="Z",
        utc_offset_minutes=0,
        **fields,
    )


def match_unix_seconds(seq: DigitSequence, ctx: MatchContext) -> MatchResult | None:
    p = ctx.policy
    if not p.epoch_min_seconds <= seq.number <= p.epoch_max_seconds:
        logger.debug("Epoch-shaped run %s outside plausibility window", seq.value)
        return None
    return Resolved(_epoch_candidate("UNIX_TIMESTAMP", seq, seq.number, None))


def match_unix_milliseconds(seq: DigitSequence, ctx: MatchContext) -> MatchResult | None:
    p = ctx.policy
    if not p.epoch_min_seconds * 1000 <= seq.number <= p.epoch_max_seconds * 1000:
        logger.debug("Epoch-shaped run %s outside plausibility window", seq.value)
        return None
    seconds, ms = divmod(seq.number, 1000)
    return Resolved(_epoch_candidate("UNIX_MILLISECONDS", seq, seconds, ms))


def match_datetime12(seq: DigitSequence, ctx: MatchContext) -> MatchResult | None:
    yy, mo, d, h, mi, s = split_digits(seq.value, 2, 2, 2, 2, 2, 2)
    if is_short_year(yy) and is_valid_month(mo) and is_valid_day(d) and is_valid_time(h, mi, s):
        return Resolved(
            span_candidate(
                "COMPACT_YY_DATETIME", "second", seq.start, seq.end,
                year=2000 + yy, month=mo, day=d, hour=h, minute=mi, second=s,
            )
        )
    # YYYYMMDDHHMM
    y, mo, d, h, mi = split_digits(seq.value, 4, 2, 2, 2, 2)
    if _valid_date(y, mo, d) and is_valid_time(h, mi):
        return Resolved(
            span_candidate(
                "COMPACT_DATETIME_MINUTE", "minute", seq.start, seq.end,
                year=y, month=mo, day=d, hour=h, minute=mi,
            )
        )
    return None


def match_date8(seq: DigitSequence, ctx: MatchContext) -> MatchResult | None:
    y, mo, d = split_digits(seq.value, 4, 2, 2)
    if _valid_date(y, mo, d):
        return Resolved(span_candidate("COMPACT_DATE", "day", seq.start, seq.end, year=y, month=mo, day=d))

    first, second, year = split_digits(seq.value, 2, 2, 4)
    eu_ok = _valid_date(year, second, first)
    us_ok = _valid_date(year, first, second)

    if eu_ok and us_ok:
        eu = span_candidate("COMPACT_EUROPEAN", "day", seq.start, seq.end, year=year, month=second, day=first)
        us = span_candidate("COMPACT_US", "day", seq.start, seq.end, year=year, month=first, day=second)
        primary = eu if ctx.policy.date_format == "dmy" else us
        primary = span_candidate(
            "COMPACT_AMBIGUOUS", "day", seq.start, seq.end,
            year=primary.year, month=primary.month, day=primary.day,
        )
        return Ambiguous(primary, (eu, us))
    if eu_ok:
        return Resolved(
            span_candidate("COMPACT_EUROPEAN", "day", seq.start, seq.end, year=year, month=second, day=first)
        )
    if us_ok:
        return Resolved(span_candidate("COMPACT_US", "day", seq.start, seq.end, year=year, month=first, day=second))
    return None


def is_decoy_run(value: str) -> bool:
    """Repeating pairs (121212), one repeated digit (111111) and counting runs (123456)."""
    return bool(_REPEATING_PAIR_RE.match(value) or _ALL_SAME_RE.match(value) or value in DECOY_SEQUENCES)


def _time6(seq: DigitSequence) -> Candidate | None:
    h, mi, s = split_digits(seq.value, 2, 2, 2)
    if not is_valid_time(h, mi, s):
        return None
    return span_candidate("COMPACT_TIME_HMS", "second", seq.start, seq.end, hour=h, minute=mi, second=s)


def _date6(seq: DigitSequence) -> Candidate | None:
    y, mo = split_digits(seq.value, 4, 2)
    if is_valid_year(y) and is_valid_month(mo):
        return span_candidate("YEAR_MONTH", "month", seq.start, seq.end, year=y, month=mo)

    a, b, c = split_digits(seq.value, 2, 2, 2)
    # A trailing 20..30 reads as the year of a DDMMYY date; this is a tuned approximation.
    if is_short_year(c) and is_valid_month(b) and is_valid_day(a):
        return span_candidate("EUROPEAN_COMPACT", "day", seq.start, seq.end, year=2000 + c, month=b, day=a)
    if is_valid_month(b) and is_valid_day(c):
        return span_candidate("COMPACT_YY", "day", seq.start, seq.end, year=2000 + a, month=b, day=c)
    return None


def match_six(seq: DigitSequence, ctx: MatchContext) -> MatchResult | None:
    if is_decoy_run(seq.value):
        logger.debug("Rejected decoy run %s", seq.value)
        return None
    if ctx.looks_like_index(seq):
        logger.debug("Rejected %s: labelled as an index", seq.value)
        return None

    time = _time6(seq)
    if time is not None and ctx.follows_date(seq):
        return Resolved(time)
    date = _date6(seq)
    if date is not None:
        return Resolved(date)
    if time is not None:
        return Resolved(time)
    return None


def match_four(seq: DigitSequence, ctx: MatchContext) -> MatchResult | None:
    if ctx.looks_like_index(seq):
        logger.debug("Rejected %s: labelled as an index", seq.value)
        return None

    if is_valid_year(seq.number):
        return Resolved(span_candidate("YEAR_ONLY", "year", seq.start, seq.end, year=seq.number))

    a, b = split_digits(seq.value, 2, 2)
    if is_valid_hour(a) and is_valid_minute(b):
        return Resolved(span_candidate("COMPACT_TIME_HM", "minute", seq.start, seq.end, hour=a, minute=b))
    if is_short_year(a) and is_valid_month(b):
        return Resolved(span_candidate("YEAR_MONTH_COMPACT", "month", seq.start, seq.end, year=2000 + a, month=b))
    return None
