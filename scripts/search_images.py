from __future__ import annotations

import argparse
import logging
import statistics
import sys
import time
from pathlib import Path
from typing import Sequence

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

from imgsearch.datasets import load_search_dataset
from imgsearch.geometry import Rectangle
from imgsearch.io import load_rgba, load_searchable_png
from imgsearch.matching import Searchable


def parse_arguments(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Locate a needle image inside one or more haystack images.")
    parser.add_argument(
        "--needle",
        type=Path,
        default=None,
        help="Needle image to search for. Defaults to the dataset needle when --data-root is given.",
    )
    parser.add_argument(
        "--haystack",
        type=Path,
        action="append",
        default=[],
        help="Haystack image to search in. May be repeated.",
    )
    parser.add_argument(
        "--tolerance",
        type=int,
        default=0,
        help="Per-channel tolerance in [0, 255]. 0 requires an exact RGB match.",
    )
    parser.add_argument(
        "--data-root",
        type=Path,
        default=None,
        help="Root directory containing needle/, haystacks/, and csv/ folders.",
    )
    parser.add_argument(
        "--csv-name",
        type=str,
        default="expected.csv",
        help="CSV filename that stores expected needle locations.",
    )
    parser.add_argument(
        "--needle-name",
        type=str,
        default=None,
        help="Needle filename located inside the needle/ directory. "
        "If omitted, the loader will auto-detect when a single file is present.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    args = parser.parse_args(argv)
    if args.data_root is None and (args.needle is None or not args.haystack):
        parser.error("either --data-root or both --needle and --haystack are required")
    if not 0 <= args.tolerance <= 255:
        parser.error("--tolerance must be between 0 and 255")
    return args


def format_result(name: str, result: Rectangle, duration_ms: float) -> str:
    if result.is_empty():
        outcome = "NOT_FOUND"
    else:
        outcome = f"FOUND {result.min_x} {result.min_y} {result.width} {result.height}"
    return f"{name:35s} | {outcome:28s} | time={duration_ms:8.2f}ms"


def timed_search(matcher: Searchable, haystack_path: Path) -> tuple[Rectangle, float]:
    haystack = load_rgba(haystack_path)
    start = time.perf_counter()
    result = matcher.search_in(haystack)
    end = time.perf_counter()
    return result, (end - start) * 1000.0


def search_files(needle: Path, haystacks: Sequence[Path], tolerance: int) -> int:
    matcher = load_searchable_png(needle, tolerance)
    for haystack_path in haystacks:
        result, duration_ms = timed_search(matcher, haystack_path)
        print(format_result(haystack_path.name, result, duration_ms))
    return 0


def evaluate_dataset(args: argparse.Namespace) -> int:
    dataset = load_search_dataset(
        root=args.data_root,
        csv_name=args.csv_name,
        needle_name=args.needle_name,
    )
    needle_path = args.needle if args.needle is not None else dataset.needle_path
    matcher = load_searchable_png(needle_path, args.tolerance)

    durations_ms: list[float] = []
    mismatches = 0
    for case in dataset.cases:
        result, duration_ms = timed_search(matcher, case.image_path)
        expected = case.expected_rect(matcher.width, matcher.height)
        correct = result == expected
        if not correct:
            mismatches += 1
        durations_ms.append(duration_ms)
        print(f"{format_result(case.name, result, duration_ms)} | {'ok' if correct else 'MISMATCH'}")

    print("\nSummary")
    print("-" * 72)
    print(f"Cases evaluated  : {len(dataset.cases)}")
    print(f"Correct          : {len(dataset.cases) - mismatches}")
    print(f"Tolerance        : {args.tolerance}")
    print(f"Latency (ms)     : mean={statistics.fmean(durations_ms):.2f}, median={statistics.median(durations_ms):.2f}, min={min(durations_ms):.2f}, max={max(durations_ms):.2f}")
    return 1 if mismatches else 0


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_arguments(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if args.data_root is not None:
        return evaluate_dataset(args)
    return search_files(args.needle, args.haystack, args.tolerance)


if __name__ == "__main__":
    sys.exit(main())
