"""Rejection heuristics: spans that must never be read as timestamps.

Two kinds of rule live here:

- mask rules mark whole regions of a filename (UUIDs, hex digests, long random tokens,
  screen resolutions) whose digits are excluded from every matcher;
- index rules look at the text around a single digit run and reject it when it is
  labelled as a counter (``frame_0001``, ``0042_idx``).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable


@dataclass(frozen=True)
class ContextRule:
    """Regex checks on the text just before and/or just after a digit run."""

    name: str
    before: re.Pattern[str] | None = None
    after: re.Pattern[str] | None = None

    def matches(self, text: str, start: int, end: int, window: int) -> bool:
        if self.before is None and self.after is None:
            return False
        if self.before is not None:
            prefix = text[max(0, start - window) : start]
            if not self.before.search(prefix):
                return False
        if self.after is not None:
            suffix = text[end : end + window]
            if not self.after.search(suffix):
                return False
        return True


INDEX_CONTEXT_RULES: tuple[ContextRule, ...] = (
    ContextRule(
        "labelled-prefix",
        before=re.compile(r"(?:frame|outline|doc|img|image|file|item)[-_]$", re.IGNORECASE),
    ),
    ContextRule(
        "index-suffix",
        after=re.compile(r"^[-_](?:idx|index|id|num|no|n)(?![a-z])", re.IGNORECASE),
    ),
    ContextRule("idx-prefix", before=re.compile(r"_idx$", re.IGNORECASE)),
)


def looks_like_index(
    text: str,
    start: int,
    end: int,
    *,
    window: int = 10,
    rules: Iterable[ContextRule] = INDEX_CONTEXT_RULES,
) -> bool:
    """True when the digit run at ``[start, end)`` is labelled as a counter."""
    return any(rule.matches(text, start, end, window) for rule in rules)


@dataclass(frozen=True)
class MaskRule:
    name: str
    pattern: re.Pattern[str]


MASK_RULES: tuple[MaskRule, ...] = (
    MaskRule(
        "uuid",
        re.compile(
            r"(?<![0-9a-f])[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}(?![0-9a-f])",
            re.IGNORECASE,
        ),
    ),
    MaskRule(
        "hex-digest",
        re.compile(
            r"(?<![0-9a-z])(?=[0-9a-f]*[a-f])(?=[0-9a-f]*[0-9])[0-9a-f]{16,}(?![0-9a-z])",
            re.IGNORECASE,
        ),
    ),
    MaskRule(
        "long-token",
        re.compile(
            r"(?<![0-9a-z])(?=(?:[0-9]*[a-z]){6})(?=(?:[a-z]*[0-9]){6})[0-9a-z]{24,}(?![0-9a-z])",
            re.IGNORECASE,
        ),
    ),
    MaskRule("resolution", re.compile(r"(?<![0-9])[0-9]{3,5}\s?[x×]\s?[0-9]{3,5}(?![0-9])", re.IGNORECASE)),
    MaskRule("video-mode", re.compile(r"(?<![0-9])[0-9]{3,4}[pi](?![a-z0-9])", re.IGNORECASE)),
)


def masked_spans(text: str, rules: Iterable[MaskRule] = MASK_RULES) -> list[tuple[int, int]]:
    """Return the sorted ``[start, end)`` regions covered by any mask rule."""
    spans: list[tuple[int, int]] = []
    for rule in rules:
        for m in rule.pattern.finditer(text):
            spans.append((m.start(), m.end()))
    spans.sort()
    return spans


def is_masked(start: int, end: int, spans: Iterable[tuple[int, int]]) -> bool:
    return any(start < m_end and m_start < end for m_start, m_end in spans)
