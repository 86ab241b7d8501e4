#!/usr/bin/env python3
"""Print the timestamp detected in each filename.

Names come from the command line and/or every file directly inside --dir.
With --auto, the day/month convention is first inferred from the whole set.

Usage:
  PYTHONPATH=. python3 scripts/detect_timestamps.py IMG_20241103_143045.jpg 05-06-2024.pdf
  PYTHONPATH=. python3 scripts/detect_timestamps.py --dir ~/Pictures/import --auto --json
"""

from __future__ import annotations

import argparse
import json
from pathlib import Path

from namestamp import (
    DetectionPolicy,
    PatternRegistry,
    contextual_policy,
    detect,
    detect_ambiguity,
    format_timestamp,
    to_datetime,
)
from namestamp.logger import configure_logging, get_logger
from namestamp.paths import filename_part

logger = get_logger("detect_timestamps")


def collect_names(names: list[str], directory: Path | None) -> list[str]:
    out = list(names)
    if directory:
        out.extend(str(p) for p in sorted(directory.iterdir()) if p.is_file())
    return out


def main() -> None:
    ap = argparse.ArgumentParser()
    ap.add_argument("names", nargs="*", help="Filenames (or paths) to inspect")
    ap.add_argument("--dir", type=Path, default=None, help="Also inspect every file in this directory")
    ap.add_argument("--date-format", choices=["dmy", "mdy"], default=None)
    ap.add_argument("--auto", action="store_true", help="Infer the day/month convention from the whole set")
    ap.add_argument("--allow-time-only", action="store_true", help="Place time-only readings on today's date")
    ap.add_argument("--patterns", type=Path, default=None, help="JSON file of custom patterns")
    ap.add_argument("--json", action="store_true", help="Emit one JSON object per line")
    ap.add_argument("--log-level", default=None)
    args = ap.parse_args()

    configure_logging(args.log_level)

    names = collect_names(args.names, args.dir)
    if not names:
        ap.error("no filenames given (pass names or --dir)")

    policy = DetectionPolicy.from_env()
    if args.date_format:
        policy = policy.with_date_format(args.date_format)
    if args.auto:
        policy = contextual_policy(names, policy)
        logger.info("Using %s for ambiguous dates", policy.date_format)

    registry = PatternRegistry()
    if args.patterns:
        loaded = registry.load(args.patterns)
        logger.info("Loaded %d custom patterns from %s", len(loaded), args.patterns)

    found = 0
    for name in names:
        base = filename_part(name)
        best = detect(base, policy, patterns=registry)
        when = to_datetime(best, allow_time_only=args.allow_time_only)
        ambiguity = detect_ambiguity(base, policy)
        if best is not None:
            found += 1

        if args.json:
            row = {
                "name": name,
                "timestamp": format_timestamp(best),
                "datetime": when.isoformat() if when else None,
                "type": best.type if best else None,
                "precision": best.precision if best else None,
                "confidence": best.confidence if best else None,
                "ambiguity": ambiguity.type if ambiguity else None,
            }
            print(json.dumps(row, ensure_ascii=False))
            continue

        if best is None:
            print(f"{name}\t-")
            continue
        flag = f"\t[{ambiguity.type}]" if ambiguity else ""
        print(f"{name}\t{format_timestamp(best)}\t{best.type}\t{best.confidence:.2f}{flag}")

    logger.info("Detected timestamps in %d of %d names", found, len(names))


if __name__ == "__main__":
    main()
