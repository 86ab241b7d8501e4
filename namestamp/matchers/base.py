from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

from ..config import DetectionPolicy
from ..guards import looks_like_index
from ..types import Candidate, DigitSequence, MatchResult, Precision


@dataclass
class MatchContext:
    """What a compact matcher may look at besides its own digit run."""

    text: str
    policy: DetectionPolicy
    # Candidates accepted so far in this scan, in acceptance order.
    found: list[Candidate] = field(default_factory=list)

    def looks_like_index(self, seq: DigitSequence) -> bool:
        return looks_like_index(
            self.text,
            seq.start,
            seq.end,
            window=self.policy.context_window,
            rules=self.policy.index_rules,
        )

    def follows_date(self, seq: DigitSequence) -> bool:
        """True when a date-only candidate ends shortly before ``seq``."""
        gap = self.policy.combine_max_gap
        return any(
            c.precision == "day" and c.end < seq.start and seq.start - c.end <= gap for c in self.found
        )


Extractor = Callable[[DigitSequence, MatchContext], "MatchResult | None"]


@dataclass(frozen=True)
class CompactRule:
    """A (predicate, extractor) pair for one digit-run shape."""

    name: str
    accepts: Callable[[DigitSequence], bool]
    extract: Extractor


def length_is(n: int) -> Callable[[DigitSequence], bool]:
    def accepts(seq: DigitSequence) -> bool:
        return seq.digits == n

    return accepts


def span_candidate(type_: str, precision: Precision, start: int, end: int, **fields: int) -> Candidate:
    return Candidate(type=type_, precision=precision, start=start, end=end, **fields)
