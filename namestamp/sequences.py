from __future__ import annotations

import re

from .types import DigitSequence

DIGIT_RUN_RE = re.compile(r"[0-9]+")

# Separators that may join the components of a date or time.
DATE_SEPARATORS = frozenset("-._/")
TRIPLE_SEPARATORS = frozenset("-._/:")
PAIR_SEPARATORS = frozenset("-._:")


def extract_digit_sequences(text: str) -> list[DigitSequence]:
    """Return the maximal digit runs of ``text`` in order of appearance."""
    out: list[DigitSequence] = []
    for m in DIGIT_RUN_RE.finditer(text):
        value = m.group(0)
        out.append(
            DigitSequence(
                value=value,
                number=int(value),
                start=m.start(),
                end=m.end(),
                digits=len(value),
                has_leading_zero=len(value) > 1 and value[0] == "0",
            )
        )
    return out


def separator_between(text: str, start: int, end: int) -> str | None:
    """Return the single separator character between two runs, if there is exactly one.

    Surrounding whitespace is ignored, so ``"05 - 06"`` is joined by ``"-"``.
    """
    if end - start < 1:
        return None
    between = text[start:end].strip()
    if len(between) == 1:
        return between
    return None


def split_digits(value: str, *widths: int) -> list[int]:
    """Split a digit string into consecutive integer fields of the given widths."""
    out: list[int] = []
    pos = 0
    for w in widths:
        out.append(int(value[pos : pos + w]))
        pos += w
    return out
