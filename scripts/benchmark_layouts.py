#!/usr/bin/env python3
"""
Benchmark layout algorithms on the built-in example graphs.

Usage:
    uv run python scripts/benchmark_layouts.py [--presets PATTERN] [--algorithms KIND,...]

Examples:
    uv run python scripts/benchmark_layouts.py
    uv run python scripts/benchmark_layouts.py --presets "random_*"
    uv run python scripts/benchmark_layouts.py --algorithms hierarchical,tree
    uv run python scripts/benchmark_layouts.py --direction left-to-right --output results.json
"""

from __future__ import annotations

import argparse
import json
import warnings
from fnmatch import fnmatch
from typing import Any

from canvas_layout import (
    AlgorithmKind,
    GraphStructureWarning,
    LayoutAlgorithm,
    create_algorithm,
    layout_quality_summary,
)
from canvas_layout.presets import PRESET_FACTORIES, GraphPreset


def benchmark_layout(
    algorithm: LayoutAlgorithm,
    preset: GraphPreset,
    size: tuple[int, int],
    direction: str,
) -> dict[str, Any]:
    """
    Run one algorithm on one preset.

    Returns:
        Dict with timing and quality info
    """
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always", GraphStructureWarning)
        result = algorithm.layout(preset.nodes, preset.edges, size, direction)

    summary = layout_quality_summary(result, preset.edges)
    summary["warnings"] = [str(w.message) for w in caught]
    return summary


def run_benchmarks(
    preset_pattern: str = "*",
    algorithms: list[str] | None = None,
    size: tuple[int, int] = (1200, 800),
    direction: str = "top-to-bottom",
) -> list[dict]:
    """Run every selected algorithm on every matching preset."""

    kinds = [kind.value for kind in AlgorithmKind]
    if algorithms:
        selected = []
        for name in algorithms:
            if name in kinds:
                selected.append(name)
            else:
                print(f"Warning: Unknown algorithm '{name}', skipping")
        kinds = selected

    presets = {
        key: factory() for key, factory in PRESET_FACTORIES.items() if fnmatch(key, preset_pattern)
    }
    if not presets:
        print(f"No presets matching pattern '{preset_pattern}'")
        return []

    results = []

    print(f"\nBenchmarking {len(kinds)} algorithms on {len(presets)} presets")
    print(f"Direction: {direction}, Canvas: {size[0]}x{size[1]}")
    print("=" * 80)

    for key, preset in presets.items():
        print(f"\n{preset.name}: {len(preset.nodes)} nodes, {len(preset.edges)} edges")
        print("-" * 60)

        for kind in kinds:
            algorithm = create_algorithm(kind)
            result = benchmark_layout(algorithm, preset, size, direction)
            print(
                f"  {algorithm.name:16s}: {result['compute_time'] * 1000:8.2f}ms  "
                f"crossings={result['edge_crossings']:<4d} "
                f"edge_length={result['total_edge_length']:10.1f}  "
                f"iterations={result['iterations']}"
            )
            for message in result["warnings"]:
                print(f"    warning: {message}")

            results.append({"preset": key, "algorithm": kind, **result})

    # Summary
    print("\n" + "=" * 80)
    print("SUMMARY (times in milliseconds)")
    print("=" * 80)

    print(f"{'Preset':<20s}", end="")
    for kind in kinds:
        print(f"{kind:>14s}", end="")
    print()
    print("-" * (20 + 14 * len(kinds)))

    for key in presets:
        print(f"{key:<20s}", end="")
        for kind in kinds:
            matching = [r for r in results if r["preset"] == key and r["algorithm"] == kind]
            if matching:
                print(f"{matching[0]['compute_time'] * 1000:>14.2f}", end="")
            else:
                print(f"{'--':>14s}", end="")
        print()

    return results


def main():
    parser = argparse.ArgumentParser(description="Benchmark layout algorithms")
    parser.add_argument("--presets", default="*", help="Preset name pattern (e.g., 'random_*')")
    parser.add_argument(
        "--algorithms", help="Comma-separated algorithm kinds (e.g., 'hierarchical,force')"
    )
    parser.add_argument("--direction", default="top-to-bottom", help="Flow direction")
    parser.add_argument("--width", type=int, default=1200, help="Canvas width")
    parser.add_argument("--height", type=int, default=800, help="Canvas height")
    parser.add_argument("--output", help="Output JSON file for results")

    args = parser.parse_args()

    algorithms = args.algorithms.split(",") if args.algorithms else None
    results = run_benchmarks(
        preset_pattern=args.presets,
        algorithms=algorithms,
        size=(args.width, args.height),
        direction=args.direction,
    )

    if args.output and results:
        with open(args.output, "w") as f:
            json.dump(results, f, indent=2)
        print(f"\nResults saved to {args.output}")


if __name__ == "__main__":
    main()
