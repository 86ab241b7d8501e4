from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Literal, Union

Precision = Literal["year", "month", "day", "minute", "second", "millisecond"]
DateFormat = Literal["dmy", "mdy"]
AmbiguityType = Literal["day-month-order", "two-digit-year"]

DATE_FORMATS: tuple[str, ...] = ("dmy", "mdy")

# millisecond > second > minute > day > month > year
PRECISION_RANK: dict[str, int] = {
    "year": 1,
    "month": 2,
    "day": 3,
    "minute": 4,
    "second": 5,
    "millisecond": 6,
}

COMPONENTS: tuple[str, ...] = ("year", "month", "day", "hour", "minute", "second", "millisecond")

# Index into COMPONENTS of the finest field a precision may carry.
_FINEST_COMPONENT: dict[str, int] = {
    "year": 0,
    "month": 1,
    "day": 2,
    "minute": 4,
    "second": 5,
    "millisecond": 6,
}


@dataclass(frozen=True)
class DigitSequence:
    """A maximal run of ASCII digits inside a filename."""

    value: str
    number: int
    start: int
    end: int
    digits: int
    has_leading_zero: bool


@dataclass(frozen=True)
class Candidate:
    """A provisional timestamp read from the span ``[start, end)`` of a filename.

    Only the fields up to ``precision`` are populated. An ambiguous candidate carries
    exactly two alternatives: the DMY reading first, then the MDY reading.
    """

    type: str
    precision: Precision
    start: int
    end: int
    year: int | None = None
    month: int | None = None
    day: int | None = None
    hour: int | None = None
    minute: int | None = None
    second: int | None = None
    millisecond: int | None = None
    confidence: float = 0.0
    alternatives: tuple[Candidate, ...] = ()
    timezone: str | None = None
    utc_offset_minutes: int | None = None

    def __post_init__(self) -> None:
        if self.precision not in PRECISION_RANK:
            raise ValueError(f"Unknown precision: {self.precision!r}")
        if self.start < 0 or self.end <= self.start:
            raise ValueError(f"Invalid span [{self.start}, {self.end}) for {self.type}")
        finest = _FINEST_COMPONENT[self.precision]
        for name in COMPONENTS[finest + 1 :]:
            if getattr(self, name) is not None:
                raise ValueError(f"{self.type}: field {name!r} is finer than precision {self.precision!r}")
        if len(self.alternatives) not in (0, 2):
            raise ValueError(f"{self.type}: ambiguous candidates carry exactly two alternatives")
        if any(alt.alternatives for alt in self.alternatives):
            raise ValueError(f"{self.type}: alternatives cannot be ambiguous themselves")
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(f"{self.type}: confidence {self.confidence} outside [0, 1]")

    @property
    def ambiguous(self) -> bool:
        return bool(self.alternatives)

    @property
    def rank(self) -> int:
        return PRECISION_RANK[self.precision]

    @property
    def has_date(self) -> bool:
        return self.year is not None and self.month is not None and self.day is not None

    @property
    def has_time(self) -> bool:
        return self.hour is not None

    @property
    def is_time_only(self) -> bool:
        return self.year is None and self.hour is not None

    def components(self) -> dict[str, int]:
        return {name: getattr(self, name) for name in COMPONENTS if getattr(self, name) is not None}


@dataclass(frozen=True)
class Resolved:
    """A matcher reading with a single interpretation."""

    candidate: Candidate

    def to_candidate(self) -> Candidate:
        return self.candidate


@dataclass(frozen=True)
class Ambiguous:
    """A matcher reading valid both as DMY and MDY.

    ``candidate`` is the reading under the active default convention.
    """

    candidate: Candidate
    alternatives: tuple[Candidate, Candidate]

    def to_candidate(self) -> Candidate:
        return replace(self.candidate, alternatives=self.alternatives)


MatchResult = Union[Resolved, Ambiguous]


@dataclass(frozen=True)
class ResolutionOption:
    label: str
    value: str


@dataclass(frozen=True)
class AmbiguityRecord:
    """A filename whose date could be read two ways."""

    type: AmbiguityType
    pattern: str
    first: int
    second: int | None
    options: tuple[ResolutionOption, ResolutionOption]
    filename: str
    note: str | None = None


@dataclass(frozen=True)
class BatchStats:
    total: int = 0
    ambiguous: int = 0
    dmy_proof: int = 0
    mdy_proof: int = 0
    year_proof: int = 0
    same_directory_files: int = 0
    consistent_pattern: bool = False


@dataclass(frozen=True)
class ContextAnalysis:
    """Batch-level day/month convention inferred from a set of filenames."""

    recommendation: DateFormat | None
    confidence: float
    evidence: tuple[str, ...] = ()
    stats: BatchStats = field(default_factory=BatchStats)
