#!/usr/bin/env python3
"""
Standalone prediction script.
Predicts the next Mark Six draw from the stored history.
"""
import argparse
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from marksix.config import configure_logging
from marksix.errors import DataUnavailable
from marksix.service import PredictionService
from marksix.store import DrawStore
from marksix.strategies import make_rng


def main():
    parser = argparse.ArgumentParser(description="Predict the next Mark Six draw")
    parser.add_argument("--fetch", action="store_true", help="refresh history from HKJC first")
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args()

    configure_logging()
    store = DrawStore()
    store.load()
    service = PredictionService(store, rng=make_rng(args.seed))

    try:
        result = service.enhanced_predict(skip_fetch=not args.fetch)
    except DataUnavailable as e:
        print(f"Error: {e}. Run scripts/update_data.py first.")
        return 1

    print(f"\n{'='*60}")
    print("NEXT DRAW PREDICTION")
    print(f"{'='*60}")
    print(f"  Numbers: {result['formatted_prediction']}")
    print(f"  Method: {result['method']} ({result['status']})")
    print(f"  Algorithm: {result['algorithm']}")
    print(f"  Confidence: {result['confidence']}")
    print(f"  Draws used: {result['data_used']['total_draws']} "
          f"({result['data_used']['date_range']['from']} -> {result['data_used']['date_range']['to']})")
    print(f"  Back-test: {result['explanation']['accuracy']}")

    perf = result["analysis"]["method_performance"]
    if perf:
        print("\n  Method performance:")
        for method, p in perf.items():
            print(f"    {method}: {p['cases']} cases, avg {p['avg_accuracy']:.2f}%")

    print(f"\n{'='*60}")
    print("DISCLAIMER: Mark Six is a random lottery. No model guarantees wins.")
    print("Odds of the first prize: 1 in 13,983,816. Play responsibly.")
    print(f"{'='*60}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
