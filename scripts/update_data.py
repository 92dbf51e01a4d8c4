#!/usr/bin/env python3
"""
Data Update Script for Mark Six Predictor

1. Fetches the full draw history from HKJC and replaces the snapshot
2. Or, with --manual, appends one manually entered draw
3. Checks the new prediction against the updated history
"""
import argparse
import logging
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from marksix.config import MAX_NUMBER, MIN_NUMBER, configure_logging
from marksix.service import PredictionService
from marksix.store import DrawStore, is_complete, normalize_record


def manual_add_result():
    """Prompt for one draw. Returns a draw record, or None if cancelled/invalid."""
    print("\n--- Manual Draw Entry ---")
    try:
        draw_no = input("Draw number (e.g. 2024/001): ").strip()
        date_str = input("Date (YYYY-MM-DD): ").strip()
        nums = [int(n.strip()) for n in input("6 winning numbers (comma-separated): ").split(",")]
        extra = int(input("Extra number: "))
    except (ValueError, EOFError, KeyboardInterrupt):
        print("Entry cancelled.")
        return None

    try:
        record = normalize_record({
            "draw_date": date_str,
            "numbers": nums,
            "extra_number": extra,
            "draw_no": draw_no or None,
        })
    except ValueError as e:
        print(f"Error: {e}")
        return None

    if not is_complete(record):
        print(f"Error: need 6 distinct numbers and an extra number, all {MIN_NUMBER}-{MAX_NUMBER}")
        return None
    return record


def update_pipeline(manual=False):
    print("=" * 60)
    print("MARK SIX PREDICTOR - DATA UPDATE")
    print("=" * 60)

    store = DrawStore()
    store.load()
    print(f"Current dataset: {len(store)} draws")

    service = PredictionService(store)
    if manual:
        record = manual_add_result()
        if record is None:
            print("\nNo new data added.")
        else:
            store.append(record)
            print(f"\n✓ Added draw {record['draw_no']} ({record['draw_date']}) to dataset")
    elif service.refresh():
        print(f"\n✓ Snapshot replaced with {len(store)} draws from HKJC")
    else:
        print("\nHKJC fetch failed. Keeping existing data.")

    if not len(store):
        print("No data available; nothing to predict.")
        return

    result = service.enhanced_predict(skip_fetch=True)
    print(f"\n{'='*60}")
    print(f"NEXT DRAW PREDICTION: {result['formatted_prediction']}")
    print(f"  Method: {result['method']} | Confidence: {result['confidence']}")
    print(f"  Back-test: {result['explanation']['accuracy']}")
    print(f"{'='*60}")


def main():
    parser = argparse.ArgumentParser(description="Update the Mark Six draw history")
    parser.add_argument("--manual", action="store_true", help="enter one draw by hand")
    parser.add_argument("--verbose", action="store_true", help="debug logging")
    args = parser.parse_args()

    configure_logging(logging.DEBUG if args.verbose else logging.INFO)
    update_pipeline(manual=args.manual)


if __name__ == "__main__":
    main()
