from __future__ import annotations

import pytest

from namestamp import (
    analyze_batch_format,
    contextual_policy,
    detect,
    format_summary,
    has_ambiguous_dates,
    resolve_by_context,
)

DAY_FIRST = ["15-03-2024.jpg", "20-04-2024.jpg", "25-12-2023.jpg", "05-06-2024.jpg"]
MONTH_FIRST = ["03-15-2024.jpg", "04-20-2024.jpg", "05-25-2024.jpg", "05-06-2024.jpg"]
ALL_AMBIGUOUS = ["05-06-2024.jpg", "03-04-2024.jpg"]


def test_proven_day_first() -> None:
    analysis = analyze_batch_format(DAY_FIRST)
    assert analysis.recommendation == "dmy"
    assert analysis.confidence == pytest.approx(0.95)
    assert analysis.stats.dmy_proof == 3
    assert analysis.stats.mdy_proof == 0
    assert analysis.stats.ambiguous == 1
    assert analysis.stats.consistent_pattern
    assert "Found 3 dates with day > 12 (DD-MM format proven)" in analysis.evidence


def test_proven_month_first() -> None:
    analysis = analyze_batch_format(MONTH_FIRST)
    assert analysis.recommendation == "mdy"
    assert analysis.confidence == pytest.approx(0.95)


def test_all_ambiguous_defaults_to_day_first() -> None:
    analysis = analyze_batch_format(ALL_AMBIGUOUS)
    assert analysis.recommendation == "dmy"
    assert analysis.confidence == pytest.approx(0.6)
    assert "Defaulting to DD-MM (European standard)" in analysis.evidence


def test_mixed_evidence_warns() -> None:
    analysis = analyze_batch_format(["15-03-2024.jpg", "20-04-2024.jpg", "03-15-2024.jpg"])
    assert analysis.recommendation == "dmy"
    assert analysis.confidence == pytest.approx(0.8)
    assert not analysis.stats.consistent_pattern
    assert any(e.startswith("Warning: 1 dates suggest MM-DD") for e in analysis.evidence)


def test_no_dates() -> None:
    analysis = analyze_batch_format(["readme.txt", "notes.md"])
    assert analysis.recommendation is None
    assert analysis.confidence == 0.0
    assert analysis.stats.total == 2
    assert analyze_batch_format([]).recommendation is None


def test_current_directory_is_prioritized() -> None:
    files = [
        "/photos/a/15-03-2024.jpg",
        "/photos/a/20-04-2024.jpg",
        "/photos/b/03-15-2024.jpg",
        "/photos/b/04-20-2024.jpg",
        "/photos/b/05-25-2024.jpg",
    ]
    local = analyze_batch_format(files, current_directory="/photos/a")
    assert local.recommendation == "dmy"
    assert local.confidence == pytest.approx(0.8)
    assert local.stats.same_directory_files == 2
    assert local.evidence[0] == "Prioritizing 2 files from current directory"

    everything = analyze_batch_format(files)
    assert everything.recommendation == "mdy"
    assert everything.confidence == pytest.approx(0.85)


def test_single_local_file_is_not_prioritized() -> None:
    files = ["/a/15-03-2024.jpg", "/b/03-15-2024.jpg", "/b/04-20-2024.jpg"]
    analysis = analyze_batch_format(files, current_directory="/a")
    assert analysis.stats.same_directory_files == 0
    assert analysis.recommendation == "mdy"


def test_resolve_by_context() -> None:
    confident = resolve_by_context(DAY_FIRST, default_format="mdy")
    assert confident.format == "dmy"
    assert confident.auto_resolved
    assert not confident.should_prompt_user

    weak = resolve_by_context(ALL_AMBIGUOUS, default_format="mdy")
    assert weak.format == "mdy"
    assert not weak.auto_resolved
    assert weak.should_prompt_user
    assert weak.confidence == pytest.approx(0.6)


def test_resolve_accepts_an_analysis_and_threshold() -> None:
    analysis = analyze_batch_format(ALL_AMBIGUOUS)
    resolution = resolve_by_context(analysis, default_format="mdy", threshold=0.5)
    assert resolution.format == "dmy"
    assert resolution.auto_resolved
    assert resolution.analysis is analysis


def test_contextual_policy_reads_ambiguous_names_like_the_batch() -> None:
    policy = contextual_policy(MONTH_FIRST)
    assert policy.date_format == "mdy"
    c = detect("05-06-2024.jpg", policy)
    assert (c.month, c.day) == (5, 6)


def test_has_ambiguous_dates() -> None:
    assert has_ambiguous_dates(["a/15-03-2024.jpg", "b/05-06-2024.jpg"])
    assert not has_ambiguous_dates(["15-03-2024.jpg", "readme.txt", None])


def test_format_summary() -> None:
    weak = format_summary(ALL_AMBIGUOUS)
    assert weak.needs_user_input
    assert weak.ambiguous_files == 2
    assert weak.total_files == 2

    strong = format_summary(analyze_batch_format(DAY_FIRST))
    assert not strong.needs_user_input
    assert strong.unambiguous_files == 3
    assert strong.recommendation == "dmy"


def test_ambiguous_reading_that_is_not_the_best_is_not_proof() -> None:
    names = ["trip 05 - 06 - 2024 copy 20240101120000.zip"] * 3
    analysis = analyze_batch_format(names)
    assert analysis.stats.dmy_proof == 0
    assert analysis.stats.mdy_proof == 0
    assert analysis.stats.ambiguous == 3
    assert analysis.confidence == pytest.approx(0.6)
    assert not any("day > 12" in e for e in analysis.evidence)


def test_day_first_fixture_set() -> None:
    analysis = analyze_batch_format(["photo_15-03-2024.jpg", "video_20-06-2024.mp4", "doc_25-12-2024.pdf"])
    assert analysis.recommendation == "dmy"
    assert analysis.confidence >= 0.80


def test_all_ambiguous_fixture_set() -> None:
    analysis = analyze_batch_format(["file_01-02-2024.txt", "file_03-04-2024.txt", "file_05-06-2024.txt"])
    assert analysis.recommendation == "dmy"
    assert analysis.confidence <= 0.60


@pytest.mark.parametrize("current_directory", [None, "/a"])
def test_batch_result_does_not_depend_on_order(current_directory: str | None) -> None:
    names = [
        "/a/15-03-2024.jpg",
        "/a/05-06-2024.jpg",
        "/b/03-15-2024.jpg",
        "/b/IMG_05062024.jpg",
        "/a/readme.txt",
        "/b/trip_2019.jpg",
        "/a/20-04-2024.jpg",
    ]
    forward = analyze_batch_format(names, current_directory=current_directory)
    assert forward == analyze_batch_format(list(reversed(names)), current_directory=current_directory)
    assert forward == analyze_batch_format(sorted(names), current_directory=current_directory)
