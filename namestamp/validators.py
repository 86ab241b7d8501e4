"""Range checks for individual timestamp components.

These only check ranges. Calendar consistency (31 April, 30 February) is enforced when
a complete date is built, see :mod:`namestamp.convert`.
"""

from __future__ import annotations

MIN_YEAR = 1970
MAX_YEAR = 2100

# Two-digit years accepted by the YY readings of compact and separated matchers.
MIN_SHORT_YEAR = 20
MAX_SHORT_YEAR = 30


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def is_valid_year(value: object, *, allow_two_digit: bool = False) -> bool:
    if not _is_int(value):
        return False
    if allow_two_digit:
        return 0 <= value <= 99
    return MIN_YEAR <= value <= MAX_YEAR


def is_valid_month(value: object) -> bool:
    return _is_int(value) and 1 <= value <= 12


def is_valid_day(value: object) -> bool:
    return _is_int(value) and 1 <= value <= 31


def is_valid_hour(value: object) -> bool:
    return _is_int(value) and 0 <= value <= 23


def is_valid_minute(value: object) -> bool:
    return _is_int(value) and 0 <= value <= 59


def is_valid_second(value: object) -> bool:
    return _is_int(value) and 0 <= value <= 59


def is_valid_millisecond(value: object) -> bool:
    return _is_int(value) and 0 <= value <= 999


def is_short_year(value: int) -> bool:
    """True for the 20..30 window used to read two-digit years as 2020..2030."""
    return MIN_SHORT_YEAR <= value <= MAX_SHORT_YEAR


def is_valid_time(hour: int, minute: int, second: int | None = None) -> bool:
    if not (is_valid_hour(hour) and is_valid_minute(minute)):
        return False
    return second is None or is_valid_second(second)
