"""Interpreters for groups of digit runs joined by one repeated separator.

``2024-03-15``, ``15.03.2024``, ``12:30:45``, ``2024_03``, ``14-05``.
"""

from __future__ import annotations

import re
from typing import Sequence

from ..config import DetectionPolicy
from ..sequences import PAIR_SEPARATORS, TRIPLE_SEPARATORS, separator_between
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
from .base import span_candidate

_MILLIS_RE = re.compile(r"[.,]([0-9]{3})(?![0-9])")


def _shape(*seqs: DigitSequence) -> tuple[int, ...]:
    return tuple(s.digits for s in seqs)


def _time_with_millis(text: str, a: DigitSequence, b: DigitSequence, c: DigitSequence) -> Candidate | None:
    if not is_valid_time(a.number, b.number, c.number):
        return None
    m = _MILLIS_RE.match(text, c.end)
    if m:
        return span_candidate(
            "TIME", "millisecond", a.start, m.end(),
            hour=a.number, minute=b.number, second=c.number, millisecond=int(m.group(1)),
        )
    return span_candidate("TIME", "second", a.start, c.end, hour=a.number, minute=b.number, second=c.number)


def _day_first_or_month_first(
    a: DigitSequence, b: DigitSequence, year: DigitSequence, policy: DetectionPolicy
) -> MatchResult | None:
    if not is_valid_year(year.number):
        return None
    eu_ok = is_valid_day(a.number) and is_valid_month(b.number)
    us_ok = is_valid_month(a.number) and is_valid_day(b.number)
    eu = span_candidate("EUROPEAN_DATE", "day", a.start, year.end, year=year.number, month=b.number, day=a.number)
    us = span_candidate("US_DATE", "day", a.start, year.end, year=year.number, month=a.number, day=b.number)
    if eu_ok and us_ok:
        return Ambiguous(eu if policy.date_format == "dmy" else us, (eu, us))
    if eu_ok:
        return Resolved(eu)
    if us_ok:
        return Resolved(us)
    return None


def _match_triple(
    text: str, a: DigitSequence, b: DigitSequence, c: DigitSequence, sep: str, policy: DetectionPolicy
) -> MatchResult | None:
    shape = _shape(a, b, c)
    if sep == ":":
        if shape == (2, 2, 2):
            time = _time_with_millis(text, a, b, c)
            return Resolved(time) if time else None
        return None

    if shape == (4, 2, 2):
        if is_valid_year(a.number) and is_valid_month(b.number) and is_valid_day(c.number):
            return Resolved(
                span_candidate("ISO_DATE", "day", a.start, c.end, year=a.number, month=b.number, day=c.number)
            )
        return None

    if shape == (2, 2, 4):
        return _day_first_or_month_first(a, b, c, policy)

    if shape == (2, 2, 2):
        # Time constraints are the stricter ones, so they go first.
        time = _time_with_millis(text, a, b, c)
        if time is not None:
            return Resolved(time)
        if is_short_year(c.number) and is_valid_day(a.number) and is_valid_month(b.number):
            return Resolved(
                span_candidate(
                    "EUROPEAN_YY_DATE", "day", a.start, c.end, year=2000 + c.number, month=b.number, day=a.number
                )
            )
        if is_short_year(a.number) and is_valid_month(b.number) and is_valid_day(c.number):
            return Resolved(
                span_candidate(
                    "ISO_YY_DATE", "day", a.start, c.end, year=2000 + a.number, month=b.number, day=c.number
                )
            )
    return None


def _match_pair(
    a: DigitSequence, b: DigitSequence, sep: str, previous: Candidate | None
) -> MatchResult | None:
    shape = _shape(a, b)
    if shape == (4, 2) and sep != ":":
        if is_valid_year(a.number) and is_valid_month(b.number):
            return Resolved(span_candidate("YEAR_MONTH", "month", a.start, b.end, year=a.number, month=b.number))
        return None

    if shape != (2, 2):
        return None

    v1, v2 = a.number, b.number
    if is_valid_hour(v1) and is_valid_minute(v2):
        after_date = (
            previous is not None and previous.precision == "day" and 1 <= a.start - previous.end <= 2
        )
        if sep == ":" or v1 > 12 or v2 > 12 or after_date:
            return Resolved(span_candidate("TIME_HM", "minute", a.start, b.end, hour=v1, minute=v2))

    if sep != ":" and is_short_year(v1) and is_valid_month(v2):
        return Resolved(span_candidate("YEAR_MONTH_YY", "month", a.start, b.end, year=2000 + v1, month=v2))
    return None


def analyze_separated(text: str, seqs: Sequence[DigitSequence], policy: DetectionPolicy) -> list[MatchResult]:
    """Read separated groups left to right; a matched group is never re-read."""
    results: list[MatchResult] = []
    i = 0
    n = len(seqs)
    while i < n:
        result: MatchResult | None = None

        if i + 2 < n:
            a, b, c = seqs[i], seqs[i + 1], seqs[i + 2]
            sep1 = separator_between(text, a.end, b.start)
            sep2 = separator_between(text, b.end, c.start)
            if sep1 is not None and sep1 == sep2 and sep1 in TRIPLE_SEPARATORS:
                result = _match_triple(text, a, b, c, sep1, policy)

        if result is None and i + 1 < n:
            a, b = seqs[i], seqs[i + 1]
            sep = separator_between(text, a.end, b.start)
            if sep is not None and sep in PAIR_SEPARATORS:
                previous = results[-1].candidate if results else None
                result = _match_pair(a, b, sep, previous)

        if result is None:
            i += 1
            continue

        results.append(result)
        end = result.candidate.end
        while i < n and seqs[i].start < end:
            i += 1
    return results
