from __future__ import annotations

from datetime import datetime

from .combine import attach_timezones, combine_adjacent, complete_seconds
from .config import DetectionPolicy
from .convert import is_calendar_valid, to_datetime
from .guards import is_masked, masked_spans
from .logger import get_logger
from .matchers import MatchContext, analyze_separated, match_compact
from .matchers.tokens import scan_letter_times, scan_month_names, scan_timezones
from .patterns import TimestampPatternMatcher
from .scoring import with_confidence
from .selector import select_best
from .sequences import extract_digit_sequences
from .types import Candidate, DateFormat

logger = get_logger(__name__)


def resolve_policy(policy: DetectionPolicy | None, date_format: DateFormat | None = None) -> DetectionPolicy:
    p = policy or DetectionPolicy()
    if date_format is not None and date_format != p.date_format:
        p = p.with_date_format(date_format)
    return p


def _overlaps(start: int, end: int, spans: list[tuple[int, int]]) -> bool:
    return any(start < e and s < end for s, e in spans)


def detect_all_candidates(
    filename: str,
    policy: DetectionPolicy | None = None,
    *,
    date_format: DateFormat | None = None,
) -> list[Candidate]:
    """Every timestamp reading of ``filename``, ordered by position then precision.

    Non-string or empty input gives an empty list.
    """
    if not isinstance(filename, str) or not filename:
        return []
    p = resolve_policy(policy, date_format)

    masks = masked_spans(filename, p.mask_rules)
    found: list[Candidate] = []
    processed: list[tuple[int, int]] = []

    # Letter-bearing tokens first; their digits are off limits afterwards.
    for cand in [*scan_letter_times(filename), *scan_month_names(filename)]:
        if is_masked(cand.start, cand.end, masks) or _overlaps(cand.start, cand.end, processed):
            continue
        found.append(cand)
        processed.append((cand.start, cand.end))

    marks = [m for m in scan_timezones(filename) if not is_masked(m.start, m.end, masks)]
    processed.extend((m.start, m.end) for m in marks)

    seqs = [
        s
        for s in extract_digit_sequences(filename)
        if not is_masked(s.start, s.end, masks) and not _overlaps(s.start, s.end, processed)
    ]

    for result in analyze_separated(filename, seqs, p):
        cand = result.to_candidate()
        found.append(cand)
        processed.append((cand.start, cand.end))

    ctx = MatchContext(filename, p, found)
    for seq in seqs:
        if _overlaps(seq.start, seq.end, processed):
            continue
        result = match_compact(seq, ctx)
        if result is None:
            continue
        found.append(result.to_candidate())
        processed.append((seq.start, seq.end))

    found.sort(key=lambda c: c.start)
    out = combine_adjacent(found, p.combine_max_gap)
    out = attach_timezones(out, marks)
    out = complete_seconds(out, seqs)

    valid = []
    for c in out:
        if is_calendar_valid(c):
            valid.append(with_confidence(c, filename))
        else:
            logger.debug("Dropped %s: %s-%s-%s is not a calendar date", c.type, c.year, c.month, c.day)
    valid.sort(key=lambda c: (c.start, -c.rank))
    return valid


def detect(
    filename: str,
    policy: DetectionPolicy | None = None,
    *,
    date_format: DateFormat | None = None,
    patterns: TimestampPatternMatcher | None = None,
) -> Candidate | None:
    """Best timestamp reading of ``filename``, or None.

    A custom pattern match, when ``patterns`` is given, wins over the heuristics.

    Names without a run of four or more digits usually give None, but short
    separated groups can still form a time (``meeting 14-30.txt``) or a
    two-digit-year date (``25-12-24``). Time-only readings are returned as such;
    check ``Candidate.is_time_only`` before treating the result as a date.
    """
    if not isinstance(filename, str) or not filename:
        return None
    if patterns is not None:
        custom = patterns.match(filename)
        if custom is not None:
            return custom
    return select_best(detect_all_candidates(filename, policy, date_format=date_format), filename)


def parse_timestamp(
    filename: str,
    policy: DetectionPolicy | None = None,
    *,
    date_format: DateFormat | None = None,
    allow_time_only: bool = False,
    patterns: TimestampPatternMatcher | None = None,
) -> datetime | None:
    """:func:`detect` followed by :func:`namestamp.convert.to_datetime`."""
    best = detect(filename, policy, date_format=date_format, patterns=patterns)
    return to_datetime(best, allow_time_only=allow_time_only)
