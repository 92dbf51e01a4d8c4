#!/usr/bin/env python3
"""
Standalone back-test script.
Runs progressive learning over the stored history, compares it with random
tickets and saves every case to CSV.
"""
import argparse
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from marksix.aggregator import ACCURACY_BUCKETS, summarize_cases
from marksix.backtester import compare_with_random, run_progressive_learning, save_results
from marksix.config import BACKTEST_CSV_PATH, configure_logging
from marksix.store import DrawStore
from marksix.strategies import make_rng


def main():
    parser = argparse.ArgumentParser(description="Back-test the Mark Six strategies")
    parser.add_argument("--seed", type=int, default=None, help="seed for reproducible runs")
    parser.add_argument("--output", default=BACKTEST_CSV_PATH, help="CSV path for case results")
    args = parser.parse_args()

    configure_logging()
    store = DrawStore()
    history = store.load()
    print(f"Loaded {len(history)} draws")
    if not history:
        print("No historical data. Run scripts/update_data.py first.")
        return 1

    rng = make_rng(args.seed)
    cases = run_progressive_learning(history, rng)
    summary = summarize_cases(cases)
    sig = compare_with_random(cases, rng)

    print(f"\n{'='*60}")
    print("BACKTEST RESULTS SUMMARY")
    print(f"{'='*60}")
    print(f"  Cases: {summary['total_cases']}")
    print(f"  Average accuracy: {summary['overall_accuracy']:.2f}%")
    print(f"  Average correct numbers: {summary['average_correct_numbers']:.3f} / 6")
    print(f"  Perfect matches: {summary['perfect_matches']} | Zero matches: {summary['zero_matches']}")

    print("\n  Accuracy distribution:")
    for label, _ in ACCURACY_BUCKETS:
        print(f"    {label:>8}: {summary['accuracy_distribution'][label]}")

    print("\n  Per-method breakdown:")
    for method, perf in summary["method_performance"].items():
        print(f"    {method}: {perf['cases']} cases, avg {perf['avg_accuracy']:.2f}%, "
              f"{perf['avg_correct_numbers']:.3f} correct")

    if sig:
        print(f"\nRANDOM BASELINE:")
        print(f"  Average matches: {sig['random_avg_matches']:.3f} / 6")
        print(f"  Mean difference: {sig['mean_diff']}  95% CI: {sig['ci_95']}")
        if sig["p_value"] is not None:
            print(f"  t-statistic: {sig['t_statistic']}  p-value: {sig['p_value']}")
            if sig["significant_at_005"]:
                print("  ✓ Significant at p < 0.05")
            elif sig["significant_at_010"]:
                print("  ~ Marginally significant at p < 0.10")
            else:
                print("  ✗ Not statistically significant")

    path = save_results(cases, args.output)
    if path:
        print(f"\nBacktest results saved to {path}")
    print(f"\n{'='*60}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
