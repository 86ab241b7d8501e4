from __future__ import annotations

import pytest

from namestamp.paths import filename_part, parent_directory, same_directory


@pytest.mark.parametrize(
    "path,expected",
    [
        ("photo.jpg", "."),
        ("/photos/2024/photo.jpg", "/photos/2024"),
        ("photos/photo.jpg", "photos"),
        ("C:\\Users\\me\\photo.jpg", "C:\\Users\\me"),
    ],
)
def test_parent_directory(path: str, expected: str) -> None:
    assert parent_directory(path) == expected


def test_filename_part() -> None:
    assert filename_part("/photos/2024/IMG_20240315.jpg") == "IMG_20240315.jpg"
    assert filename_part("C:\\scans\\05-06-2024.pdf") == "05-06-2024.pdf"
    assert filename_part("bare.txt") == "bare.txt"


def test_same_directory() -> None:
    assert same_directory("/photos/a/x.jpg", "/photos/a")
    assert same_directory("/photos/a/x.jpg", "/photos/a/")
    assert not same_directory("/photos/a/b/x.jpg", "/photos/a")
    assert not same_directory("/photos/ab/x.jpg", "/photos/a")
    assert same_directory("x.jpg", ".")
