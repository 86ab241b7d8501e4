from __future__ import annotations

import re
from dataclasses import replace

from .types import PRECISION_RANK, Candidate

BASE_CONFIDENCE = 0.5

FORMAT_BONUS: dict[str, float] = {
    "ISO_DATE": 0.30,
    "COMPACT_DATETIME": 0.25,
    "COMPACT_DATETIME_MS": 0.25,
    "COMPACT_DATE": 0.20,
    "EUROPEAN_DATE": 0.20,
    "US_DATE": 0.20,
    "MONTH_NAME_DATE": 0.20,
    "COMPACT_DATETIME_MINUTE": 0.20,
    "MERGED_DATETIME": 0.20,
    "UNIX_TIMESTAMP": 0.15,
    "UNIX_MILLISECONDS": 0.15,
    "COMPACT_YY_DATETIME": 0.15,
    "COMPACT_EUROPEAN": 0.10,
    "COMPACT_US": 0.10,
    "COMPACT_AMBIGUOUS": 0.10,
    "EUROPEAN_YY_DATE": 0.05,
    "ISO_YY_DATE": 0.05,
    "EUROPEAN_COMPACT": 0.05,
    "COMPACT_YY": 0.05,
    "YEAR_MONTH": 0.05,
    "MONTH_NAME_YEAR_MONTH": 0.05,
    "YEAR_ONLY": -0.10,
}

AMBIGUITY_PENALTY = 0.20
# Separated dates are settled by the default convention; only a bare 8-digit run is penalised.
PENALISED_AMBIGUOUS_TYPES = frozenset({"COMPACT_AMBIGUOUS"})
TIME_BONUS = 0.10
CONTEXT_BONUS = 0.05

# Camera and messaging-app prefixes that usually sit right before a capture time.
CONTEXT_MARKER_RE = re.compile(
    r"(?<![a-z])(?:img|vid|pxl|photo|video|screenshot|scan|rec|dsc|pano|whatsapp|signal)[^a-z]*$",
    re.IGNORECASE,
)


def score(candidate: Candidate, text: str) -> float:
    conf = BASE_CONFIDENCE + FORMAT_BONUS.get(candidate.type, 0.0)

    if text:
        where = candidate.start / len(text)
        if where < 1 / 3:
            conf += 0.10
        elif where < 2 / 3:
            conf += 0.05

    if CONTEXT_MARKER_RE.search(text[: candidate.start]):
        conf += CONTEXT_BONUS
    if candidate.rank >= PRECISION_RANK["minute"]:
        conf += TIME_BONUS
    if candidate.ambiguous and candidate.type in PENALISED_AMBIGUOUS_TYPES:
        conf -= AMBIGUITY_PENALTY

    return round(min(1.0, max(0.0, conf)), 2)


def with_confidence(candidate: Candidate, text: str) -> Candidate:
    """Return ``candidate`` (and its alternatives) with a computed confidence."""
    conf = score(candidate, text)
    alternatives = tuple(replace(alt, confidence=conf) for alt in candidate.alternatives)
    return replace(candidate, confidence=conf, alternatives=alternatives)
