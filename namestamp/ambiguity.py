"""Flags filenames whose date can be read two ways.

This runs independently of the default convention the matchers applied, so that a
caller can warn about ``05-06-2024`` even after it was silently read as 5 June.
"""

from __future__ import annotations

import re

from .config import DetectionPolicy
from .detector import detect
from .types import AmbiguityRecord, ResolutionOption

SEPARATED_DAY_MONTH_RE = re.compile(r"(?<![0-9])([0-9]{2})([-_/.])([0-9]{2})\2([0-9]{4})(?![0-9])")
# The date part of an ambiguous reading, which may since have absorbed a following time.
AMBIGUOUS_DATE_RE = re.compile(r"[0-9]{2}\s*[-._/]?\s*[0-9]{2}\s*[-._/]?\s*[0-9]{4}")

DAY_MONTH_OPTIONS = (
    ResolutionOption("DD-MM-YYYY (European)", "dmy"),
    ResolutionOption("MM-DD-YYYY (US)", "mdy"),
)
COMPACT_DAY_MONTH_OPTIONS = (
    ResolutionOption("DDMMYYYY (European)", "dmy"),
    ResolutionOption("MMDDYYYY (US)", "mdy"),
)
CENTURY_OPTIONS = (
    ResolutionOption("20YY (2000s)", "2000s"),
    ResolutionOption("19YY (1900s)", "1900s"),
)

TWO_DIGIT_YEAR_TYPES = frozenset(
    {"COMPACT_YY", "EUROPEAN_COMPACT", "EUROPEAN_YY_DATE", "ISO_YY_DATE", "COMPACT_YY_DATETIME", "YEAR_MONTH_YY",
     "YEAR_MONTH_COMPACT"}
)


def detect_ambiguity(filename: str, policy: DetectionPolicy | None = None) -> AmbiguityRecord | None:
    if not isinstance(filename, str) or not filename:
        return None

    best = detect(filename, policy)
    if best is not None and best.ambiguous:
        dmy, _mdy = best.alternatives
        compact = best.type == "COMPACT_AMBIGUOUS"
        date_text = AMBIGUOUS_DATE_RE.match(filename, best.start, best.end)
        return AmbiguityRecord(
            type="day-month-order",
            pattern=date_text.group(0) if date_text else filename[best.start : best.end],
            first=dmy.day,
            second=dmy.month,
            options=COMPACT_DAY_MONTH_OPTIONS if compact else DAY_MONTH_OPTIONS,
            filename=filename,
        )

    m = SEPARATED_DAY_MONTH_RE.search(filename)
    if m:
        first, second = int(m.group(1)), int(m.group(3))
        if 1 <= first <= 12 and 1 <= second <= 12:
            return AmbiguityRecord(
                type="day-month-order",
                pattern=m.group(0),
                first=first,
                second=second,
                options=DAY_MONTH_OPTIONS,
                filename=filename,
                note="Resolved by the date format default, flagged for awareness",
            )

    if best is not None and best.type in TWO_DIGIT_YEAR_TYPES and best.year is not None:
        return AmbiguityRecord(
            type="two-digit-year",
            pattern=filename[best.start : best.end],
            first=best.year % 100,
            second=None,
            options=CENTURY_OPTIONS,
            filename=filename,
            note=f"Read as {best.year}",
        )
    return None
