from __future__ import annotations

import re

import pytest

from namestamp import detect
from namestamp.config import DetectionPolicy
from namestamp.guards import MASK_RULES, MaskRule, looks_like_index, masked_spans


@pytest.mark.parametrize(
    "text,start,end,expected",
    [
        ("frame_2048.png", 6, 10, True),
        ("IMG-2048.jpg", 4, 8, True),
        ("2048_idx.png", 0, 4, True),
        ("2048-index.png", 0, 4, True),
        ("outline_257_idx2048", 15, 19, True),
        ("trip_2048.png", 5, 9, False),
        ("2048_notes.png", 0, 4, False),
    ],
)
def test_looks_like_index(text: str, start: int, end: int, expected: bool) -> None:
    assert looks_like_index(text, start, end) is expected


def test_index_context_is_windowed() -> None:
    text = "frame_" + "x" * 20 + "2048"
    assert not looks_like_index(text, 26, 30)


def test_resolution_and_video_mode_masks() -> None:
    assert (5, 14) in masked_spans("clip_1920x1080.mp4")
    assert (6, 11) in masked_spans("movie_1080p_2023.mkv")


def test_long_token_mask() -> None:
    assert masked_spans("id_k3j9x8w2q7z5m4n6p1r0t2y8.txt") == [(3, 27)]


def test_resolution_tag_is_not_read_as_time() -> None:
    c = detect("scan_1920x1080_20240315.png")
    assert c.type == "COMPACT_DATE"
    assert (c.year, c.month, c.day) == (2024, 3, 15)


def test_uuid_digits_are_never_read() -> None:
    assert detect("123e4567-e89b-12d3-a456-202403151230.jpg") is None


def test_hex_digest_digits_are_never_read() -> None:
    assert detect("upload_20240315ab4f9c2e1d7a6b3c.bin") is None


def test_mask_rules_are_pluggable() -> None:
    policy = DetectionPolicy(mask_rules=MASK_RULES + (MaskRule("ticket", re.compile(r"TCK-[0-9]+")),))
    assert detect("TCK-20240315.txt") is not None
    assert detect("TCK-20240315.txt", policy) is None
