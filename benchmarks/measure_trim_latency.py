"""Benchmark helper for multi-cursor trim latency."""
from __future__ import annotations

import argparse
import asyncio
import json
import random
import statistics
from dataclasses import dataclass
from time import perf_counter

from cursortrim.core.direction import Direction
from cursortrim.core.merge import merge_overlapping
from cursortrim.core.ranges import Position
from cursortrim.editor.buffer import InMemoryBuffer, Selection
from cursortrim.editor.trim import collect_delete_spans, trim_cursors


@dataclass(slots=True)
class TrimBenchmarkResult:
    cursors: int
    direction: str
    spans: int
    merge_ms: float
    trim_ms: float


def _build_case(cursors: int, *, seed: int) -> tuple[InMemoryBuffer, list[Selection]]:
    rng = random.Random(seed)
    lines = []
    for _ in range(max(1, cursors // 4)):
        words = [rng.choice(("alpha", "beta", "gamma", "delta")) for _ in range(12)]
        lines.append("".join(word + " " * rng.randint(0, 4) + "\t" * rng.randint(0, 1) for word in words))
    buffer = InMemoryBuffer.from_text("\n".join(lines))
    selections = []
    for _ in range(cursors):
        line = rng.randrange(buffer.line_count)
        column = rng.randint(0, len(buffer.line_text(line)))
        caret = Position(line, column)
        selections.append(Selection(caret, caret))
    return buffer, selections


def run_benchmarks(cursor_counts: list[int], *, direction: Direction, seed: int) -> list[TrimBenchmarkResult]:
    results: list[TrimBenchmarkResult] = []
    for count in cursor_counts:
        buffer, selections = _build_case(count, seed=seed)
        raw_spans = collect_delete_spans(buffer, selections, direction)

        start = perf_counter()
        merge_overlapping(raw_spans)
        merge_ms = (perf_counter() - start) * 1000

        start = perf_counter()
        deleted = asyncio.run(trim_cursors(buffer, selections, direction))
        trim_ms = (perf_counter() - start) * 1000

        results.append(
            TrimBenchmarkResult(
                cursors=count,
                direction=direction.name.lower(),
                spans=len(deleted),
                merge_ms=merge_ms,
                trim_ms=trim_ms,
            )
        )
    return results


def main() -> None:
    parser = argparse.ArgumentParser(description="Measure merge and trim latency for many cursors.")
    parser.add_argument(
        "--cursors",
        type=int,
        action="append",
        metavar="COUNT",
        help="Cursor count to benchmark; can be supplied multiple times.",
    )
    parser.add_argument("--direction", choices=("both", "left", "right"), default="both")
    parser.add_argument("--seed", type=int, default=1234, help="Seed for the generated document.")
    parser.add_argument("--json", action="store_true", help="Emit machine-readable JSON results.")
    args = parser.parse_args()

    counts = [max(1, value) for value in (args.cursors or [10, 100, 500, 1000])]
    results = run_benchmarks(counts, direction=Direction.from_name(args.direction), seed=args.seed)

    if args.json:
        payload = [
            {
                "cursors": result.cursors,
                "direction": result.direction,
                "spans": result.spans,
                "merge_ms": result.merge_ms,
                "trim_ms": result.trim_ms,
            }
            for result in results
        ]
        print(json.dumps(payload, indent=2))
        return

    header = f"{'Cursors':>8}  {'Direction':>9}  {'Spans':>6}  {'Merge (ms)':>10}  {'Trim (ms)':>10}"
    print(header)
    print("-" * len(header))
    for result in results:
        print(
            f"{result.cursors:>8}  "
            f"{result.direction:>9}  "
            f"{result.spans:>6}  "
            f"{result.merge_ms:>10.2f}  "
            f"{result.trim_ms:>10.2f}"
        )

    print()
    runtimes = [result.trim_ms for result in results]
    print(
        "Trim runtime stats → min: "
        f"{min(runtimes):.2f} ms · median: {statistics.median(runtimes):.2f} ms · max: {max(runtimes):.2f} ms"
    )


if __name__ == "__main__":
    main()
