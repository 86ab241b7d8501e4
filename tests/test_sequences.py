from __future__ import annotations

from namestamp.sequences import extract_digit_sequences, separator_between, split_digits


def test_extract_digit_sequences_positions() -> None:
    seqs = extract_digit_sequences("IMG_20241103_143045.jpg")
    assert [s.value for s in seqs] == ["20241103", "143045"]
    assert (seqs[0].start, seqs[0].end, seqs[0].digits) == (4, 12, 8)
    assert (seqs[1].start, seqs[1].end, seqs[1].digits) == (13, 19, 6)
    assert seqs[1].number == 143045


def test_extract_digit_sequences_leading_zero() -> None:
    (seq,) = extract_digit_sequences("take007b")
    assert seq.number == 7
    assert seq.has_leading_zero
    assert not extract_digit_sequences("x5")[0].has_leading_zero


def test_extract_digit_sequences_no_digits() -> None:
    assert extract_digit_sequences("") == []
    assert extract_digit_sequences("holiday.jpg") == []


def test_runs_never_overlap() -> None:
    seqs = extract_digit_sequences("1a22b333-4444_55555")
    for a, b in zip(seqs, seqs[1:]):
        assert a.end < b.start


def test_separator_between_ignores_spaces() -> None:
    assert separator_between("05 - 06", 2, 5) == "-"
    assert separator_between("05-06", 2, 3) == "-"
    assert separator_between("05--06", 2, 4) is None
    assert separator_between("0506", 2, 2) is None


def test_split_digits() -> None:
    assert split_digits("20241103", 4, 2, 2) == [2024, 11, 3]
