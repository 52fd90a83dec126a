#!/usr/bin/env python3
"""
Tactical Suite Benchmark Runner

Runs the tactical suite at several difficulties and measures the cost of
the full-width search from the opening position.

Usage:
    python tools/run_benchmark.py [--depths 1,2,3] [--verbose]
"""

import sys
import argparse
import time

from tqdm import tqdm

from pawn_engine.board.position import Side, initial_position
from pawn_engine.evaluation import PawnStructureEvaluator
from pawn_engine.search import find_best_move
from pawn_engine.utils.testing import TACTICAL_POSITIONS, run_suite


def format_time(seconds: float) -> str:
    """Format time"""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        minutes = int(seconds // 60)
        secs = seconds % 60
        return f"{minutes}m {secs:.0f}s"


def run_benchmark(depths: list[int], verbose: bool = False):
    """
    Run the tactical suite and an opening search at multiple depths.

    Args:
        depths: List of depths to test
        verbose: If True, print detailed results for each position
    """
    evaluator = PawnStructureEvaluator()
    opening = initial_position(Side.BLACK, Side.WHITE)

    print("=" * 80)
    print("TACTICAL BENCHMARK - pawn_engine")
    print("=" * 80)
    print("Evaluator: Pawn structure (material, danger, isolation, advancement)")
    print("Search: Full-width minimax, accumulating backup")
    print(f"Depths: {depths}")
    print("=" * 80)

    all_results = []

    for depth in tqdm(depths, desc="Depths", unit="depth"):
        suite = run_suite(TACTICAL_POSITIONS, difficulty=depth, evaluator=evaluator, verbose=verbose)

        start_time = time.time()
        opening_result = find_best_move(opening, depth, evaluator)
        opening_time = time.time() - start_time

        nodes_per_sec = opening_result.nodes / opening_time if opening_time > 0 else 0
        all_results.append({
            'depth': depth,
            'score': suite['score'],
            'total': suite['total'],
            'percentage': suite['percentage'],
            'avg_time': suite['avg_time'],
            'opening_nodes': opening_result.nodes,
            'opening_time': opening_time,
            'nodes_per_sec': nodes_per_sec,
            'opening_move': str(opening_result.move),
        })

        failed = [r for r in suite['results'] if not r.correct]
        if failed and verbose:
            tqdm.write(f"  Failed positions at depth {depth}:")
            for r in failed:
                tqdm.write(f"    {r.position.id}: Expected {r.position.best_moves}, got {r.found_move}")

    print("\n" + "=" * 80)
    print("SUMMARY TABLE")
    print("=" * 80)
    print(f"{'Depth':<8} {'Correct':<12} {'%':<8} {'Avg Time':<12} {'Opening nodes':<16} {'Nodes/sec':<12} {'Move':<8}")
    print("-" * 80)

    for r in all_results:
        print(
            f"{r['depth']:<8} {r['score']}/{r['total']:<10} {r['percentage']:<7.1f}% "
            f"{format_time(r['avg_time']):<12} {r['opening_nodes']:<16,} "
            f"{r['nodes_per_sec']:<12,.0f} {r['opening_move']:<8}"
        )

    print("=" * 80)
    return all_results


def main():
    parser = argparse.ArgumentParser(
        description="Run the tactical suite and opening search at multiple depths"
    )
    parser.add_argument(
        "--depths",
        type=str,
        default="1,2,3",
        help="Comma-separated list of depths to test (default: 1,2,3)"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Print detailed results for each position"
    )

    args = parser.parse_args()

    try:
        depths = [int(d.strip()) for d in args.depths.split(",")]
    except ValueError:
        print("Error: depths must be comma-separated integers")
        sys.exit(1)

    try:
        run_benchmark(depths, verbose=args.verbose)
    except KeyboardInterrupt:
        print("\n\nBenchmark interrupted by user")
        sys.exit(1)


if __name__ == "__main__":
    main()
