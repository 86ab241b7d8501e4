from __future__ import annotations

from typing import Iterable

from ..types import DigitSequence, MatchResult
from .base import CompactRule, MatchContext, length_is
from .compact import (
    match_date8,
    match_datetime12,
    match_datetime14,
    match_datetime17,
    match_four,
    match_six,
    match_unix_milliseconds,
    match_unix_seconds,
)

# Evaluated top to bottom; the first rule that accepts a run and returns a reading wins.
COMPACT_RULES: tuple[CompactRule, ...] = (
    CompactRule("datetime-ms", length_is(17), match_datetime17),
    CompactRule("datetime", length_is(14), match_datetime14),
    CompactRule("unix-ms", length_is(13), match_unix_milliseconds),
    CompactRule("unix", length_is(10), match_unix_seconds),
    CompactRule("datetime-12", length_is(12), match_datetime12),
    CompactRule("date", length_is(8), match_date8),
    CompactRule("six-digits", length_is(6), match_six),
    CompactRule("four-digits", length_is(4), match_four),
)


def match_compact(
    seq: DigitSequence,
    ctx: MatchContext,
    rules: Iterable[CompactRule] = COMPACT_RULES,
) -> MatchResult | None:
    """Read a single digit run with the first applicable rule.

    Extend by adding rules to a copy of COMPACT_RULES and passing it here.
    """
    for rule in rules:
        if not rule.accepts(seq):
            continue
        result = rule.extract(seq, ctx)
        if result is not None:
            return result
    return None
