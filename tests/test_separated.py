from __future__ import annotations

from namestamp.config import DetectionPolicy
from namestamp.matchers import analyze_separated
from namestamp.sequences import extract_digit_sequences
from namestamp.types import Ambiguous, Candidate


def _read(text: str, policy: DetectionPolicy | None = None) -> list[Candidate]:
    results = analyze_separated(text, extract_digit_sequences(text), policy or DetectionPolicy())
    return [r.to_candidate() for r in results]


def test_iso_date() -> None:
    (c,) = _read("2024-03-15")
    assert c.type == "ISO_DATE"
    assert (c.year, c.month, c.day) == (2024, 3, 15)
    assert (c.start, c.end) == (0, 10)


def test_mixed_separators_are_not_a_date() -> None:
    assert [c.type for c in _read("2024-03_15")] == ["YEAR_MONTH"]


def test_day_first_when_only_reading() -> None:
    (c,) = _read("15.03.2024")
    assert c.type == "EUROPEAN_DATE"
    assert (c.day, c.month) == (15, 3)
    assert not c.ambiguous


def test_month_first_when_only_reading() -> None:
    (c,) = _read("03/15/2024")
    assert c.type == "US_DATE"
    assert (c.month, c.day) == (3, 15)


def test_ambiguous_pair_uses_default() -> None:
    text = "05-06-2024"
    results = analyze_separated(text, extract_digit_sequences(text), DetectionPolicy())
    assert isinstance(results[0], Ambiguous)

    (dmy,) = _read(text)
    assert (dmy.day, dmy.month) == (5, 6)
    assert dmy.ambiguous

    (mdy,) = _read(text, DetectionPolicy(date_format="mdy"))
    assert (mdy.month, mdy.day) == (5, 6)
    assert [a.type for a in mdy.alternatives] == ["EUROPEAN_DATE", "US_DATE"]


def test_time_is_tried_before_short_dates() -> None:
    (c,) = _read("12.30.45")
    assert c.type == "TIME"
    assert (c.hour, c.minute, c.second) == (12, 30, 45)


def test_time_with_milliseconds() -> None:
    (c,) = _read("12:30:45.123")
    assert c.precision == "millisecond"
    assert c.millisecond == 123
    assert c.end == 12


def test_day_month_short_year() -> None:
    (c,) = _read("25-12-24")
    assert c.type == "EUROPEAN_YY_DATE"
    assert (c.year, c.month, c.day) == (2024, 12, 25)


def test_short_year_month_day() -> None:
    (c,) = _read("24-03-15")
    assert c.type == "ISO_YY_DATE"
    assert (c.year, c.month, c.day) == (2024, 3, 15)


def test_pairs() -> None:
    (ym,) = _read("2024_03")
    assert ym.type == "YEAR_MONTH"

    (hm,) = _read("14-05")
    assert hm.type == "TIME_HM"
    assert (hm.hour, hm.minute) == (14, 5)

    (colon,) = _read("09:05")
    assert colon.type == "TIME_HM"

    (yy,) = _read("24-05")
    assert yy.type == "YEAR_MONTH_YY"
    assert (yy.year, yy.month) == (2024, 5)

    assert _read("10-05") == []


def test_pair_after_date_reads_as_time() -> None:
    found = _read("2024-03-15_10-05")
    assert [c.type for c in found] == ["ISO_DATE", "TIME_HM"]
    assert (found[1].hour, found[1].minute) == (10, 5)


def test_consumed_runs_are_not_reread() -> None:
    found = _read("2024-03-15-12")
    assert [c.type for c in found] == ["ISO_DATE"]
