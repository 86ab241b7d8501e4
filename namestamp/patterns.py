"""User-defined filename patterns, checked before heuristic detection.

A registry is an explicit object handed to :func:`namestamp.detect`; there is no
process-wide registry.
"""

from __future__ import annotations

import json
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Mapping, Union

from .logger import get_logger
from .types import Candidate, Precision

logger = get_logger(__name__)

CUSTOM_CONFIDENCE = 0.85
CUSTOM_FIELDS: tuple[str, ...] = ("year", "month", "day", "hour", "minute", "second")
_LIMITS: dict[str, tuple[int, int]] = {
    "year": (1900, 2100),
    "month": (1, 12),
    "day": (1, 31),
    "hour": (0, 23),
    "minute": (0, 59),
    "second": (0, 59),
}

# "named", {"year": 1, "month": "m"}, or a callable taking the re.Match.
Extractor = Union[str, Mapping[str, Union[int, str]], Callable[[re.Match], Mapping[str, Any]]]


class PatternValidationError(ValueError):
    pass


class TimestampPatternMatcher(ABC):
    @abstractmethod
    def match(self, filename: str) -> Candidate | None:
        """Return a reading for ``filename`` or None when no pattern applies."""
        raise NotImplementedError


@dataclass(frozen=True)
class CustomPattern:
    name: str
    regex: re.Pattern[str]
    extractor: Extractor
    priority: int = 100
    description: str | None = None

    def to_json(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "regex": self.regex.pattern,
            "flags": "i" if self.regex.flags & re.IGNORECASE else "",
            "extractor": None if callable(self.extractor) else _jsonable_extractor(self.extractor),
            "priority": self.priority,
            "description": self.description,
        }


def _jsonable_extractor(extractor: Extractor) -> Any:
    if isinstance(extractor, str):
        return extractor
    return dict(extractor)


def _validate_extractor(extractor: Any) -> Extractor:
    if callable(extractor):
        return extractor
    if extractor == "named":
        return extractor
    if isinstance(extractor, Mapping):
        if not extractor:
            raise PatternValidationError("Extractor mapping is empty")
        for key, group in extractor.items():
            if key not in CUSTOM_FIELDS:
                raise PatternValidationError(f"Unknown component in extractor: {key!r}")
            if isinstance(group, bool) or not isinstance(group, (int, str)):
                raise PatternValidationError(f"Group for {key!r} must be an index or a group name")
        return dict(extractor)
    raise PatternValidationError(f"Unsupported extractor: {extractor!r}")


def _precision_for(fields: Mapping[str, int]) -> Precision:
    if "second" in fields:
        return "second"
    if "hour" in fields or "minute" in fields:
        return "minute"
    if "day" in fields:
        return "day"
    if "month" in fields:
        return "month"
    return "year"


def _normalize(raw: Mapping[str, Any]) -> dict[str, int] | None:
    fields: dict[str, int] = {}
    for key in CUSTOM_FIELDS:
        value = raw.get(key)
        if value is None or value == "":
            continue
        try:
            fields[key] = int(value)
        except (TypeError, ValueError):
            return None

    year = fields.get("year")
    if year is None:
        return None
    if year < 100:
        fields["year"] = year + (2000 if year < 50 else 1900)
    if "hour" in fields:
        fields.setdefault("minute", 0)

    for key, value in fields.items():
        lo, hi = _LIMITS[key]
        if not lo <= value <= hi:
            return None
    return fields


def _extract(m: re.Match, extractor: Extractor) -> Mapping[str, Any]:
    if callable(extractor):
        return extractor(m) or {}
    if extractor == "named":
        return m.groupdict()
    out: dict[str, Any] = {}
    for key, group in extractor.items():
        try:
            out[key] = m.group(group)
        except IndexError:
            raise PatternValidationError(f"Extractor refers to a missing group: {group!r}") from None
    return out


class PatternRegistry(TimestampPatternMatcher):
    """Ordered set of custom patterns; lower ``priority`` is tried first."""

    def __init__(self) -> None:
        self._patterns: list[CustomPattern] = []

    def __len__(self) -> int:
        return len(self._patterns)

    def __contains__(self, name: object) -> bool:
        return any(p.name == name for p in self._patterns)

    def names(self) -> list[str]:
        return [p.name for p in self._patterns]

    def get(self, name: str) -> CustomPattern | None:
        return next((p for p in self._patterns if p.name == name), None)

    def register(
        self,
        name: str,
        regex: str | re.Pattern[str],
        extractor: Extractor = "named",
        priority: int = 100,
        *,
        description: str | None = None,
    ) -> CustomPattern:
        if not isinstance(name, str) or not name.strip():
            raise PatternValidationError("Pattern must have a name")
        if name in self:
            raise PatternValidationError(f"Pattern {name!r} already registered")
        if isinstance(regex, str):
            if not regex:
                raise PatternValidationError("Pattern must have a regex")
            try:
                compiled = re.compile(regex)
            except re.error as e:
                raise PatternValidationError(f"Invalid regex: {e}") from e
        elif isinstance(regex, re.Pattern):
            compiled = regex
        else:
            raise PatternValidationError("Regex must be a string or a compiled pattern")
        ext = _validate_extractor(extractor)
        if ext == "named" and not compiled.groupindex:
            raise PatternValidationError(f"Pattern {name!r} uses named extraction but has no named groups")
        if isinstance(priority, bool) or not isinstance(priority, int):
            raise PatternValidationError("Priority must be an integer")

        pattern = CustomPattern(name=name, regex=compiled, extractor=ext, priority=priority, description=description)
        # Stable: equal priorities keep registration order.
        idx = next((i for i, p in enumerate(self._patterns) if p.priority > priority), len(self._patterns))
        self._patterns.insert(idx, pattern)
        logger.debug("Registered pattern %s (priority %d)", name, priority)
        return pattern

    def unregister(self, name: str) -> bool:
        before = len(self._patterns)
        self._patterns = [p for p in self._patterns if p.name != name]
        return len(self._patterns) != before

    def clear(self) -> None:
        self._patterns.clear()

    def find(self, filename: str) -> tuple[CustomPattern, Candidate] | None:
        for pattern in self._patterns:
            m = pattern.regex.search(filename)
            if not m or m.end() <= m.start():
                continue
            fields = _normalize(_extract(m, pattern.extractor))
            if fields is None:
                logger.debug("Pattern %s matched %r but produced no valid timestamp", pattern.name, m.group(0))
                continue
            return pattern, Candidate(
                type="CUSTOM",
                precision=_precision_for(fields),
                start=m.start(),
                end=m.end(),
                confidence=CUSTOM_CONFIDENCE,
                **fields,
            )
        return None

    def match(self, filename: str) -> Candidate | None:
        found = self.find(filename)
        return found[1] if found else None

    def export_json(self) -> str:
        return json.dumps([p.to_json() for p in self._patterns], indent=2, ensure_ascii=False)

    def import_json(self, text: str, *, replace: bool = False) -> list[str]:
        """Register the patterns of an :meth:`export_json` document; returns the imported names.

        Entries without a serializable extractor or with an invalid definition are skipped.
        """
        obj = json.loads(text)
        if not isinstance(obj, list):
            raise PatternValidationError("Pattern file must contain a JSON list")
        if replace:
            self.clear()

        imported: list[str] = []
        for item in obj:
            if not isinstance(item, dict) or item.get("extractor") is None:
                continue
            flags = re.IGNORECASE if "i" in str(item.get("flags") or "") else 0
            try:
                regex = re.compile(str(item.get("regex", "")), flags)
                self.register(
                    str(item.get("name", "")),
                    regex,
                    item["extractor"],
                    item.get("priority", 100),
                    description=item.get("description"),
                )
            except (re.error, PatternValidationError) as e:
                logger.warning("Skipping pattern %r: %s", item.get("name"), e)
                continue
            imported.append(str(item["name"]))
        return imported

    def load(self, path: Path | None, *, replace: bool = False) -> list[str]:
        """Import patterns from a JSON file. A missing file is not an error."""
        if not path:
            return []
        if not path.exists():
            return []
        return self.import_json(path.read_text(encoding="utf-8"), replace=replace)
