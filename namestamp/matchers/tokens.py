"""Scanners for tokens that carry letters: ``14h30m45s``, ``15-Mar-2024``, ``+02:00``.

They run before any digit-run matcher and their spans are excluded from digit matching.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from ..types import Candidate
from ..validators import is_valid_day, is_valid_month, is_valid_time, is_valid_year

LETTER_TIME_RE = re.compile(
    r"(?<![0-9])([0-9]{2})h([0-9]{2})(?:m([0-9]{2})s([0-9]{3})?)?(?![0-9])",
    re.IGNORECASE,
)

MONTH_NAMES: dict[str, int] = {
    # English
    "january": 1, "jan": 1,
    "february": 2, "feb": 2,
    "march": 3, "mar": 3,
    "april": 4, "apr": 4,
    "may": 5,
    "june": 6, "jun": 6,
    "july": 7, "jul": 7,
    "august": 8, "aug": 8,
    "september": 9, "sept": 9, "sep": 9,
    "october": 10, "oct": 10,
    "november": 11, "nov": 11,
    "december": 12, "dec": 12,
    # French
    "janvier": 1, "janv": 1,
    "février": 2, "fevrier": 2, "févr": 2, "fevr": 2, "fév": 2, "fev": 2,
    "mars": 3,
    "avril": 4, "avr": 4,
    "mai": 5,
    "juin": 6,
    "juillet": 7, "juil": 7,
    "août": 8, "aout": 8,
    "septembre": 9,
    "octobre": 10,
    "novembre": 11,
    "décembre": 12, "déc": 12,
}

_MONTH_ALT = "|".join(re.escape(name) for name in sorted(MONTH_NAMES, key=len, reverse=True))
# Month names must not touch other letters ("Email" is not "mai").
_MONTH = rf"(?<![^\W\d_])(?P<month>{_MONTH_ALT})(?![^\W\d_])\.?"
_DAY = r"(?<![0-9])(?P<day>[0-9]{1,2})(?:st|nd|rd|th|er)?"
_YEAR = r"(?P<year>[0-9]{4})(?![0-9])"
_SEP = r"[\s._,-]*"

MONTH_NAME_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("day-month-year", re.compile(_DAY + _SEP + _MONTH + _SEP + _YEAR, re.IGNORECASE)),
    ("month-day-year", re.compile(_MONTH + _SEP + _DAY + _SEP + _YEAR, re.IGNORECASE)),
    ("month-year", re.compile(_MONTH + _SEP + _YEAR, re.IGNORECASE)),
)

TIMEZONE_RE = re.compile(
    r"[0-9]{2}[:.]?[0-9]{2}[:.]?[0-9]{2}(?:[.,][0-9]{1,3})?"
    r"\s?(?P<tz>Z|\+(?:0[0-9]|1[0-4])(?::?[0-5][0-9])?|-(?:0[0-9]|1[0-4]):[0-5][0-9])"
    r"(?![0-9A-Za-z])"
)


@dataclass(frozen=True)
class TimezoneMark:
    """A UTC offset written right after a time, e.g. the ``+0200`` of ``12:30:45+0200``."""

    text: str
    start: int
    end: int
    offset_minutes: int


def _overlaps(start: int, end: int, spans: list[tuple[int, int]]) -> bool:
    return any(start < e and s < end for s, e in spans)


def scan_letter_times(text: str) -> list[Candidate]:
    out: list[Candidate] = []
    for m in LETTER_TIME_RE.finditer(text):
        hour, minute = int(m.group(1)), int(m.group(2))
        second = int(m.group(3)) if m.group(3) else None
        if not is_valid_time(hour, minute, second):
            continue
        if m.group(4):
            precision, ms = "millisecond", int(m.group(4))
        else:
            precision, ms = ("second" if second is not None else "minute"), None
        out.append(
            Candidate(
                type="LETTER_TIME",
                precision=precision,
                start=m.start(),
                end=m.end(),
                hour=hour,
                minute=minute,
                second=second,
                millisecond=ms,
            )
        )
    return out


def scan_month_names(text: str) -> list[Candidate]:
    out: list[Candidate] = []
    taken: list[tuple[int, int]] = []
    for shape, pattern in MONTH_NAME_PATTERNS:
        for m in pattern.finditer(text):
            if _overlaps(m.start(), m.end(), taken):
                continue
            month = MONTH_NAMES[m.group("month").lower()]
            year = int(m.group("year"))
            if not (is_valid_year(year) and is_valid_month(month)):
                continue
            if shape == "month-year":
                cand = Candidate(
                    type="MONTH_NAME_YEAR_MONTH",
                    precision="month",
                    start=m.start(),
                    end=m.end(),
                    year=year,
                    month=month,
                )
            else:
                day = int(m.group("day"))
                if not is_valid_day(day):
                    continue
                cand = Candidate(
                    type="MONTH_NAME_DATE",
                    precision="day",
                    start=m.start(),
                    end=m.end(),
                    year=year,
                    month=month,
                    day=day,
                )
            out.append(cand)
            taken.append((cand.start, cand.end))
    out.sort(key=lambda c: c.start)
    return out


def parse_utc_offset(tz: str) -> int:
    """``Z`` -> 0, ``+0530`` / ``+05:30`` -> 330, ``-05:00`` -> -300."""
    if tz.upper() == "Z":
        return 0
    sign = -1 if tz[0] == "-" else 1
    digits = tz[1:].replace(":", "")
    hours = int(digits[:2])
    minutes = int(digits[2:4]) if len(digits) > 2 else 0
    return sign * (hours * 60 + minutes)


def scan_timezones(text: str) -> list[TimezoneMark]:
    out: list[TimezoneMark] = []
    for m in TIMEZONE_RE.finditer(text):
        tz = m.group("tz")
        out.append(TimezoneMark(text=tz, start=m.start("tz"), end=m.end("tz"), offset_minutes=parse_utc_offset(tz)))
    return out
