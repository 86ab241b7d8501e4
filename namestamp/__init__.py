"""Timestamp detection for arbitrary filenames.

Readings are heuristic: a filename may encode a date in many conventions, some of
which cannot be told apart from the name alone (``05-06-2024``). Single names go
through :func:`detect`; sets of names through :func:`analyze_batch_format`, which
infers the day/month convention the set most likely uses.
"""

from .ambiguity import detect_ambiguity
from .config import DetectionPolicy
from .context import (
    ContextResolution,
    FormatSummary,
    analyze_batch_format,
    contextual_policy,
    format_summary,
    has_ambiguous_dates,
    resolve_by_context,
)
from .convert import to_datetime
from .detector import detect, detect_all_candidates, parse_timestamp
from .formatter import format_timestamp
from .patterns import PatternRegistry, PatternValidationError, TimestampPatternMatcher
from .sequences import extract_digit_sequences
from .types import (
    AmbiguityRecord,
    Ambiguous,
    BatchStats,
    Candidate,
    ContextAnalysis,
    DigitSequence,
    Resolved,
    ResolutionOption,
)
from .validators import (
    is_valid_day,
    is_valid_hour,
    is_valid_millisecond,
    is_valid_minute,
    is_valid_month,
    is_valid_second,
    is_valid_year,
)
