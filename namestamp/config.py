from __future__ import annotations

import os
from dataclasses import dataclass, replace

from dotenv import load_dotenv

from .guards import INDEX_CONTEXT_RULES, MASK_RULES, ContextRule, MaskRule
from .logger import get_logger
from .types import DATE_FORMATS, DateFormat

logger = get_logger(__name__)

# 2020-01-01T00:00:00Z .. 2030-01-01T00:00:00Z
EPOCH_MIN_SECONDS = 1577836800
EPOCH_MAX_SECONDS = 1893456000


@dataclass(frozen=True)
class DetectionPolicy:
    """Controls the detection heuristics.

    - ``date_format`` picks the primary reading of a date valid both as DD-MM and MM-DD.
    - the epoch window bounds which 10/13-digit runs are read as Unix timestamps.
    - ``combine_max_gap`` is how many characters may separate a date from the time it absorbs.
    - ``context_window`` is how far the index guards look around a digit run.
    """

    date_format: DateFormat = "dmy"

    epoch_min_seconds: int = EPOCH_MIN_SECONDS
    epoch_max_seconds: int = EPOCH_MAX_SECONDS

    combine_max_gap: int = 5
    context_window: int = 10

    # Batch resolution: below this confidence the caller should ask the user.
    auto_resolve_threshold: float = 0.70

    mask_rules: tuple[MaskRule, ...] = MASK_RULES
    index_rules: tuple[ContextRule, ...] = INDEX_CONTEXT_RULES

    def __post_init__(self) -> None:
        if self.date_format not in DATE_FORMATS:
            raise ValueError(f"Unsupported date format: {self.date_format!r} (expected one of {DATE_FORMATS})")
        if self.epoch_min_seconds >= self.epoch_max_seconds:
            raise ValueError("epoch_min_seconds must be below epoch_max_seconds")
        if self.combine_max_gap < 0 or self.context_window < 0:
            raise ValueError("combine_max_gap and context_window must be non-negative")
        if not 0.0 <= self.auto_resolve_threshold <= 1.0:
            raise ValueError(f"auto_resolve_threshold must be within [0, 1], got {self.auto_resolve_threshold}")

    def with_date_format(self, date_format: DateFormat) -> "DetectionPolicy":
        return replace(self, date_format=date_format)

    @classmethod
    def from_env(cls) -> "DetectionPolicy":
        """Read overrides from the environment (and a local .env, if present).

        Recognised variables: NAMESTAMP_DATE_FORMAT, NAMESTAMP_AUTO_RESOLVE_THRESHOLD.
        """
        load_dotenv()
        kwargs: dict[str, object] = {}

        fmt = os.environ.get("NAMESTAMP_DATE_FORMAT", "").strip().lower()
        if fmt:
            if fmt not in DATE_FORMATS:
                raise ValueError(f"NAMESTAMP_DATE_FORMAT must be one of {DATE_FORMATS}, got {fmt!r}")
            kwargs["date_format"] = fmt

        threshold = os.environ.get("NAMESTAMP_AUTO_RESOLVE_THRESHOLD", "").strip()
        if threshold:
            try:
                kwargs["auto_resolve_threshold"] = float(threshold)
            except ValueError as e:
                raise ValueError(f"NAMESTAMP_AUTO_RESOLVE_THRESHOLD is not a number: {threshold!r}") from e

        if kwargs:
            logger.debug("Policy overrides from environment: %s", kwargs)
        return cls(**kwargs)
