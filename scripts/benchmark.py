#!/usr/bin/env python3
"""Benchmark script for policyspec performance testing.

Outputs results in JSON format compatible with github-action-benchmark.
"""

from __future__ import annotations

import argparse
import json
import time
from pathlib import Path


def build_document(blocks: int) -> str:
    """Synthetic document with one practice block per section."""
    parts = []
    for i in range(blocks):
        parts.append(
            f"[practices.group_{i}]\n"
            f"DEFINE_PRACTICE(practice_{i}) {{\n"
            '    [manifest] { scope = ["function", "class"], enforcement = "recommended" }\n'
            f'    rule = "practice number {i}"\n'
            '    violation_patterns = ["long method", "deep nesting"]\n'
            "    examples = { good = \"def f(): ...\", bad = \"def F(): ...\" }\n"
            "}\n"
        )
    return "".join(parts)


def benchmark_import_time() -> float:
    """Measure import time of policyspec package."""
    start = time.perf_counter()
    import policyspec  # noqa: F401

    return time.perf_counter() - start


def benchmark_tokenize(text: str) -> float:
    from policyspec.infrastructure.lexer import tokenize

    start = time.perf_counter()
    tokenize(text)
    return time.perf_counter() - start


def benchmark_parse(text: str) -> float:
    from policyspec.application.services import parse_text

    start = time.perf_counter()
    parse_text(text)
    return time.perf_counter() - start


def benchmark_load(text: str) -> float:
    """Parse plus every registered validator."""
    from policyspec.application.services import load_text

    start = time.perf_counter()
    load_text(text)
    return time.perf_counter() - start


def main() -> None:
    """Run benchmarks and output results."""
    parser = argparse.ArgumentParser(description="Run policyspec benchmarks")
    parser.add_argument(
        "--output",
        type=Path,
        default=Path("benchmark-results.json"),
        help="Output file for benchmark results",
    )
    parser.add_argument("--blocks", type=int, default=2000, help="Blocks in the synthetic document")
    args = parser.parse_args()

    text = build_document(args.blocks)
    results = [
        {"name": "Import Time", "unit": "seconds", "value": benchmark_import_time()},
        {"name": f"Tokenize ({args.blocks} blocks)", "unit": "seconds", "value": benchmark_tokenize(text)},
        {"name": f"Parse ({args.blocks} blocks)", "unit": "seconds", "value": benchmark_parse(text)},
        {"name": f"Load and validate ({args.blocks} blocks)", "unit": "seconds", "value": benchmark_load(text)},
    ]

    # Write results
    args.output.write_text(json.dumps(results, indent=2))
    print(f"Benchmark results written to {args.output}")
    for r in results:
        print(f"  {r['name']}: {r['value']:.4f} {r['unit']}")


if __name__ == "__main__":
    main()
