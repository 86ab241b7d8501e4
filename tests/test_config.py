from __future__ import annotations

import pytest

from namestamp.config import DetectionPolicy


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("NAMESTAMP_DATE_FORMAT", raising=False)
    monkeypatch.delenv("NAMESTAMP_AUTO_RESOLVE_THRESHOLD", raising=False)


def test_defaults() -> None:
    p = DetectionPolicy()
    assert p.date_format == "dmy"
    assert p.combine_max_gap == 5
    assert p.context_window == 10
    assert p.auto_resolve_threshold == pytest.approx(0.70)
    assert DetectionPolicy.from_env() == p


@pytest.mark.parametrize(
    "kwargs",
    [
        {"date_format": "ymd"},
        {"epoch_min_seconds": 10, "epoch_max_seconds": 5},
        {"combine_max_gap": -1},
        {"auto_resolve_threshold": 1.5},
    ],
)
def test_invalid_policy(kwargs: dict) -> None:
    with pytest.raises(ValueError):
        DetectionPolicy(**kwargs)


def test_with_date_format() -> None:
    p = DetectionPolicy(combine_max_gap=2)
    q = p.with_date_format("mdy")
    assert q.date_format == "mdy"
    assert q.combine_max_gap == 2
    assert p.date_format == "dmy"


def test_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("NAMESTAMP_DATE_FORMAT", " MDY ")
    monkeypatch.setenv("NAMESTAMP_AUTO_RESOLVE_THRESHOLD", "0.9")
    p = DetectionPolicy.from_env()
    assert p.date_format == "mdy"
    assert p.auto_resolve_threshold == pytest.approx(0.9)


@pytest.mark.parametrize(
    "name,value",
    [
        ("NAMESTAMP_DATE_FORMAT", "ymd"),
        ("NAMESTAMP_AUTO_RESOLVE_THRESHOLD", "high"),
        ("NAMESTAMP_AUTO_RESOLVE_THRESHOLD", "2"),
    ],
)
def test_from_env_rejects_bad_values(monkeypatch: pytest.MonkeyPatch, name: str, value: str) -> None:
    monkeypatch.setenv(name, value)
    with pytest.raises(ValueError):
        DetectionPolicy.from_env()
