"""Parse a code-review report into sections and line-level suggestions.

Local/offline helper. The report is read from a file (or stdin with "-"),
split into Bad Code / Issues / Correct Code / Improvements / Suggestions, and
the two code blocks are compared line by line.

Modes:
- default: analyze REVIEW_FILE
- --before/--after: diff two code files directly, no segmentation
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional


def _build_parser(default_format: str, default_log_level: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Parse a code-review report")
    parser.add_argument(
        "review_file",
        nargs="?",
        help="Path to the review report text (use '-' for stdin)",
    )
    parser.add_argument("--before", help="Original code file (diff mode)")
    parser.add_argument("--after", help="Recommended code file (diff mode)")
    parser.add_argument(
        "--format",
        choices=["json", "text"],
        default=default_format,
        help=f"Output format (default: {default_format})",
    )
    parser.add_argument(
        "--log-level",
        default=default_log_level,
        help=f"Log level for stderr output (default: {default_log_level})",
    )
    parser.add_argument(
        "--max-bytes",
        type=int,
        default=None,
        help="Reject input (files or stdin) larger than this many bytes (0 disables the limit)",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    # Allow running this script directly without requiring installation.
    repo_root = Path(__file__).resolve().parents[1]
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))

    from loguru import logger

    from src.config import REVIEW_CLI
    from src.review import analyze_review, coerce_review_text, diff_lines, summarize_line_diffs
    from src.tracing import init_tracing, safe_set_current_span_attributes
    from src.utils.validation import read_review_file, read_review_stream

    parser = _build_parser(REVIEW_CLI.OUTPUT_FORMAT, REVIEW_CLI.LOG_LEVEL)
    args = parser.parse_args(argv)

    diff_mode = bool(args.before or args.after)
    if diff_mode and not (args.before and args.after):
        parser.error("--before and --after must be given together")
    if not diff_mode and not args.review_file:
        parser.error("review_file is required unless --before/--after are given")

    logger.remove()
    logger.add(sys.stderr, level=str(args.log_level).upper())

    tracer = init_tracing()

    try:
        if diff_mode:
            with tracer.start_as_current_span("review.diff_lines"):
                before = read_review_file(args.before, max_bytes=args.max_bytes)
                after = read_review_file(args.after, max_bytes=args.max_bytes)
                entries = diff_lines(before, after)
                summary = summarize_line_diffs(entries)
                safe_set_current_span_attributes({"review.line_diffs": summary})

            if args.format == "text":
                for entry in entries:
                    print(entry.describe())
                if not entries:
                    print("No line differences.")
            else:
                payload = {"lineDiffs": [e.to_dict() for e in entries], "summary": summary}
                print(json.dumps(payload, indent=2, ensure_ascii=False))
            return 0

        with tracer.start_as_current_span("review.analyze"):
            if args.review_file == "-":
                raw = read_review_stream(sys.stdin.buffer, max_bytes=args.max_bytes)
            else:
                raw = read_review_file(args.review_file, max_bytes=args.max_bytes)
            analysis = analyze_review(coerce_review_text(raw))
            safe_set_current_span_attributes({"review.summary": analysis.summary()})
    except (ValueError, FileNotFoundError) as e:
        print(str(e))
        return 2

    logger.info(f"Analyzed review: {analysis.summary()}")

    if args.format == "text":
        print(analysis.render_text(), end="")
    else:
        print(json.dumps(analysis.to_dict(), indent=2, ensure_ascii=False))

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
