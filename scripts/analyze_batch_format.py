#!/usr/bin/env python3
"""Infer whether a set of filenames writes dates day-first or month-first.

Usage:
  PYTHONPATH=. python3 scripts/analyze_batch_format.py --dir ~/Scans/2024
  PYTHONPATH=. python3 scripts/analyze_batch_format.py photo_15-03-2024.jpg doc_05-06-2024.pdf --json
"""

from __future__ import annotations

import argparse
import json
from dataclasses import asdict
from pathlib import Path

from namestamp import DetectionPolicy, analyze_batch_format, format_summary, resolve_by_context
from namestamp.logger import configure_logging


def main() -> None:
    ap = argparse.ArgumentParser()
    ap.add_argument("names", nargs="*")
    ap.add_argument("--dir", type=Path, default=None, help="Analyze every file in this directory")
    ap.add_argument("--current-dir", default=None, help="Prefer files from this directory when deciding")
    ap.add_argument("--threshold", type=float, default=None, help="Confidence needed to auto-resolve")
    ap.add_argument("--json", action="store_true")
    ap.add_argument("--log-level", default=None)
    args = ap.parse_args()

    configure_logging(args.log_level)

    names = list(args.names)
    if args.dir:
        names.extend(str(p) for p in sorted(args.dir.iterdir()) if p.is_file())
    if not names:
        ap.error("no filenames given (pass names or --dir)")

    policy = DetectionPolicy.from_env()
    analysis = analyze_batch_format(names, current_directory=args.current_dir, policy=policy)
    threshold = policy.auto_resolve_threshold if args.threshold is None else args.threshold
    resolution = resolve_by_context(analysis, default_format=policy.date_format, threshold=threshold)
    summary = format_summary(analysis, threshold=threshold)

    if args.json:
        out = {
            "recommendation": analysis.recommendation,
            "confidence": analysis.confidence,
            "format": resolution.format,
            "auto_resolved": resolution.auto_resolved,
            "should_prompt_user": resolution.should_prompt_user,
            "evidence": list(analysis.evidence),
            "stats": asdict(analysis.stats),
        }
        print(json.dumps(out, indent=2))
        return

    print(f"files={summary.total_files} with_dates={summary.files_with_dates} ambiguous={summary.ambiguous_files}")
    print(f"recommendation={analysis.recommendation or '-'} confidence={analysis.confidence:.2f}")
    for line in analysis.evidence:
        print(f"  - {line}")
    if resolution.auto_resolved:
        print(f"OK: using {resolution.format}")
    elif resolution.should_prompt_user:
        print(f"Needs review: confidence below threshold, defaulting to {resolution.format}")
    else:
        print(f"No ambiguous dates; default {resolution.format}")


if __name__ == "__main__":
    main()
