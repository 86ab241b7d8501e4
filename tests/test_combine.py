from __future__ import annotations

import pytest

from namestamp import detect, detect_all_candidates
from namestamp.combine import combine_adjacent, complete_seconds, with_time
from namestamp.sequences import extract_digit_sequences
from namestamp.types import Candidate


@pytest.mark.parametrize(
    "name,expected",
    [
        ("2022-05-17-11:02 - USER_110214.jpg", (2022, 5, 17, 11, 2, 14)),
        ("2023-12-25-14:30 - USER_143045.jpg", (2023, 12, 25, 14, 30, 45)),
        ("2024-01-15-09:45 - DATA_094523.txt", (2024, 1, 15, 9, 45, 23)),
    ],
)
def test_embedded_run_completes_seconds(name: str, expected: tuple[int, ...]) -> None:
    c = detect(name)
    assert (c.year, c.month, c.day, c.hour, c.minute, c.second) == expected
    assert c.precision == "second"
    # the HHMMSS run is a second copy of the time, not a date of its own
    assert len(detect_all_candidates(name)) == 1


def test_later_time_replaces_placeholder_time() -> None:
    c = detect("2025-10-08 00.00.00 - 10.03.23")
    assert c.type == "MERGED_DATETIME"
    assert (c.year, c.month, c.day, c.hour, c.minute, c.second) == (2025, 10, 8, 10, 3, 23)


def test_date_and_time_too_far_apart_stay_separate() -> None:
    found = detect_all_candidates("2024-03-15 at the 12:30")
    assert [c.type for c in found] == ["ISO_DATE", "TIME_HM"]
    assert found[0].hour is None


def test_merge_keeps_alternatives_in_step() -> None:
    c = detect("05-06-2024 12.30.45.jpg")
    assert c.ambiguous
    assert c.hour == 12
    assert all(alt.hour == 12 and alt.second == 45 for alt in c.alternatives)
    assert all(alt.end == c.end for alt in c.alternatives)


def test_combine_adjacent_gap_limit() -> None:
    date = Candidate(type="ISO_DATE", precision="day", start=0, end=10, year=2024, month=3, day=15)
    time = Candidate(type="TIME_HM", precision="minute", start=13, end=18, hour=9, minute=5)
    (merged,) = combine_adjacent([date, time], max_gap=5)
    assert (merged.start, merged.end, merged.precision) == (0, 18, "minute")
    assert combine_adjacent([date, time], max_gap=2) == [date, time]


def test_with_time_takes_time_precision() -> None:
    date = Candidate(type="COMPACT_DATE", precision="day", start=0, end=8, year=2024, month=3, day=15)
    time = Candidate(
        type="TIME", precision="millisecond", start=9, end=21, hour=1, minute=2, second=3, millisecond=4
    )
    c = with_time(date, time)
    assert c.precision == "millisecond"
    assert c.millisecond == 4
    assert c.type == "COMPACT_DATE"


def test_complete_seconds_ignores_non_matching_runs() -> None:
    text = "2024-03-15 10:02 ref_999999"
    c = Candidate(type="ISO_DATE", precision="minute", start=0, end=16, year=2024, month=3, day=15, hour=10, minute=2)
    assert complete_seconds([c], extract_digit_sequences(text)) == [c]
