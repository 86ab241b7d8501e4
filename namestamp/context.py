"""Batch-level inference of the day/month convention.

Filenames from one source usually share a convention, so dates that can only be read
one way (``15-03-2024``) are evidence for how to read the ones that cannot
(``05-03-2024``).
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, Sequence, Union

from .ambiguity import detect_ambiguity
from .config import DetectionPolicy
from .detector import detect_all_candidates
from .logger import get_logger
from .paths import filename_part, same_directory
from .types import BatchStats, ContextAnalysis, DateFormat

logger = get_logger(__name__)

DMY_TYPES = frozenset({"EUROPEAN_DATE", "COMPACT_EUROPEAN", "EUROPEAN_COMPACT"})
MDY_TYPES = frozenset({"US_DATE", "COMPACT_US"})
# Readings whose year was written with four digits.
FOUR_DIGIT_YEAR_TYPES = frozenset(
    {
        "ISO_DATE",
        "EUROPEAN_DATE",
        "US_DATE",
        "COMPACT_DATE",
        "COMPACT_EUROPEAN",
        "COMPACT_US",
        "COMPACT_AMBIGUOUS",
        "COMPACT_DATETIME",
        "COMPACT_DATETIME_MS",
        "COMPACT_DATETIME_MINUTE",
        "MONTH_NAME_DATE",
        "MERGED_DATETIME",
    }
)

MIN_DIRECTORY_FILES = 2
STRONG_PROOF_COUNT = 3
YEAR_CONSISTENCY_RATIO = 0.7
DEFAULT_THRESHOLD = 0.70


def _proof_confidence(base: float, proofs: int) -> float:
    return min(0.95, base + 0.05 * proofs)


def analyze_batch_format(
    filenames: Iterable[str],
    *,
    current_directory: str | None = None,
    policy: DetectionPolicy | None = None,
) -> ContextAnalysis:
    """Infer the dominant day/month convention of a set of filenames (or paths)."""
    names = [f for f in filenames if isinstance(f, str) and f]
    evidence: list[str] = []
    same_dir = 0

    subset = names
    if current_directory:
        local = [f for f in names if same_directory(f, current_directory)]
        if len(local) >= MIN_DIRECTORY_FILES:
            subset = local
            same_dir = len(local)
            evidence.append(f"Prioritizing {len(local)} files from current directory")

    # Readings are taken under the DMY default, so a type says which order was proven.
    heuristic_policy = (policy or DetectionPolicy()).with_date_format("dmy")

    ambiguous = dmy = mdy = year_proof = 0
    for path in subset:
        name = filename_part(path)
        record = detect_ambiguity(name, heuristic_policy)
        day_month = record is not None and record.type == "day-month-order"
        if day_month:
            ambiguous += 1
            if record.first > 12 and record.second <= 12:
                dmy += 1
            elif record.second > 12 and record.first <= 12:
                mdy += 1

        for cand in detect_all_candidates(name, heuristic_policy):
            if not cand.has_date:
                continue
            if cand.type in FOUR_DIGIT_YEAR_TYPES:
                year_proof += 1
            if not day_month:
                # Both orders valid: never proof, whatever type the default gave it.
                if cand.ambiguous:
                    ambiguous += 1
                elif cand.type in MDY_TYPES:
                    mdy += 1
                elif cand.type in DMY_TYPES:
                    dmy += 1
            break

    recommendation: DateFormat | None = None
    confidence = 0.0
    consistent = False

    if dmy >= STRONG_PROOF_COUNT and mdy == 0:
        recommendation, confidence, consistent = "dmy", _proof_confidence(0.70, dmy), True
        evidence.append(f"Found {dmy} dates with day > 12 (DD-MM format proven)")
        evidence.append("No conflicting evidence for MM-DD format")
    elif mdy >= STRONG_PROOF_COUNT and dmy == 0:
        recommendation, confidence, consistent = "mdy", _proof_confidence(0.70, mdy), True
        evidence.append(f"Found {mdy} dates with month > 12 (MM-DD format proven)")
        evidence.append("No conflicting evidence for DD-MM format")
    elif dmy > mdy and dmy >= 1:
        recommendation, confidence = "dmy", _proof_confidence(0.60, dmy)
        evidence.append(f"Found {dmy} dates suggesting DD-MM format")
        if mdy > 0:
            evidence.append(f"Warning: {mdy} dates suggest MM-DD (mixed formats?)")
    elif mdy > dmy and mdy >= 1:
        recommendation, confidence = "mdy", _proof_confidence(0.60, mdy)
        evidence.append(f"Found {mdy} dates suggesting MM-DD format")
        if dmy > 0:
            evidence.append(f"Warning: {dmy} dates suggest DD-MM (mixed formats?)")
    elif ambiguous > 0 and dmy == 0 and mdy == 0:
        recommendation, confidence = "dmy", 0.50
        evidence.append(f"Found {ambiguous} ambiguous dates")
        evidence.append("No unambiguous dates to determine format")
        evidence.append("Defaulting to DD-MM (European standard)")

    if recommendation is not None and subset and year_proof >= YEAR_CONSISTENCY_RATIO * len(subset):
        confidence = min(1.0, confidence + 0.10)
        evidence.append("High consistency: most dates have 4-digit years")

    confidence = round(confidence, 2)
    logger.debug(
        "Batch of %d (%d evaluated): dmy=%d mdy=%d ambiguous=%d -> %s @ %.2f",
        len(names), len(subset), dmy, mdy, ambiguous, recommendation, confidence,
    )
    return ContextAnalysis(
        recommendation=recommendation,
        confidence=confidence,
        evidence=tuple(evidence),
        stats=BatchStats(
            total=len(names),
            ambiguous=ambiguous,
            dmy_proof=dmy,
            mdy_proof=mdy,
            year_proof=year_proof,
            same_directory_files=same_dir,
            consistent_pattern=consistent,
        ),
    )


@dataclass(frozen=True)
class ContextResolution:
    format: DateFormat
    auto_resolved: bool
    confidence: float
    analysis: ContextAnalysis
    should_prompt_user: bool


def resolve_by_context(
    analysis_or_filenames: Union[ContextAnalysis, Sequence[str]],
    *,
    default_format: DateFormat = "dmy",
    threshold: float | None = None,
    current_directory: str | None = None,
    policy: DetectionPolicy | None = None,
) -> ContextResolution:
    """Apply the recommendation when it is confident enough, else fall back to ``default_format``."""
    if isinstance(analysis_or_filenames, ContextAnalysis):
        analysis = analysis_or_filenames
    else:
        analysis = analyze_batch_format(analysis_or_filenames, current_directory=current_directory, policy=policy)

    if threshold is None:
        threshold = policy.auto_resolve_threshold if policy else DEFAULT_THRESHOLD

    fmt = default_format
    auto = False
    if analysis.recommendation is not None and analysis.confidence >= threshold:
        fmt = analysis.recommendation
        auto = True

    return ContextResolution(
        format=fmt,
        auto_resolved=auto,
        confidence=analysis.confidence,
        analysis=analysis,
        should_prompt_user=not auto and analysis.stats.ambiguous > 0,
    )


def contextual_policy(
    filenames: Sequence[str],
    policy: DetectionPolicy | None = None,
    **kwargs,
) -> DetectionPolicy:
    """A policy whose default day/month convention follows the batch."""
    p = policy or DetectionPolicy()
    resolution = resolve_by_context(filenames, default_format=p.date_format, policy=p, **kwargs)
    return replace(p, date_format=resolution.format)


def has_ambiguous_dates(filenames: Iterable[str]) -> bool:
    for f in filenames:
        if not isinstance(f, str):
            continue
        record = detect_ambiguity(filename_part(f))
        if record is not None and record.type == "day-month-order":
            return True
    return False


@dataclass(frozen=True)
class FormatSummary:
    total_files: int
    files_with_dates: int
    ambiguous_files: int
    unambiguous_files: int
    recommendation: DateFormat | None
    confidence: float
    evidence: tuple[str, ...]
    needs_user_input: bool


def format_summary(
    analysis_or_filenames: Union[ContextAnalysis, Sequence[str]],
    *,
    threshold: float = DEFAULT_THRESHOLD,
) -> FormatSummary:
    if isinstance(analysis_or_filenames, ContextAnalysis):
        analysis = analysis_or_filenames
    else:
        analysis = analyze_batch_format(analysis_or_filenames)
    return FormatSummary(
        total_files=analysis.stats.total,
        files_with_dates=analysis.stats.year_proof + analysis.stats.ambiguous,
        ambiguous_files=analysis.stats.ambiguous,
        unambiguous_files=analysis.stats.dmy_proof + analysis.stats.mdy_proof,
        recommendation=analysis.recommendation,
        confidence=analysis.confidence,
        evidence=analysis.evidence,
        needs_user_input=analysis.confidence < threshold and analysis.stats.ambiguous > 0,
    )
