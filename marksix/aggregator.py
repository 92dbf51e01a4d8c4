"""
Aggregate statistics over back-test case results.
"""
import numpy as np

# (label, inclusive lower bound), highest first
ACCURACY_BUCKETS = [
    ("90-100%", 90),
    ("70-89%", 70),
    ("50-69%", 50),
    ("30-49%", 30),
    ("10-29%", 10),
    ("0-9%", 0),
]


def bucket_for(percentage):
    for label, lower in ACCURACY_BUCKETS:
        if percentage >= lower:
            return label
    return ACCURACY_BUCKETS[-1][0]


def overall_accuracy(cases):
    """Mean accuracy percentage, 0.0 when there are no cases."""
    if not cases:
        return 0.0
    return float(np.mean([c["accuracy"] for c in cases]))


def _method_performance(cases):
    performance = {}
    for case in cases:
        method = case.get("method") or "unknown"
        perf = performance.setdefault(method, {
            "cases": 0, "total_accuracy": 0.0, "total_correct_numbers": 0,
        })
        perf["cases"] += 1
        perf["total_accuracy"] += case["accuracy"]
        perf["total_correct_numbers"] += case["correct_numbers"]

    for perf in performance.values():
        perf["avg_accuracy"] = perf["total_accuracy"] / perf["cases"]
        perf["avg_correct_numbers"] = perf["total_correct_numbers"] / perf["cases"]
    return performance


def summarize_cases(cases) -> dict:
    """
    Reduce a list of case results to run-level statistics.

    Best and worst cases are the first ones found with the highest and
    lowest accuracy. An empty list gives zeroed means, ``None`` best/worst
    and empty buckets.
    """
    distribution = {label: 0 for label, _ in ACCURACY_BUCKETS}
    for case in cases:
        distribution[bucket_for(case["accuracy"])] += 1

    if cases:
        best_case = max(cases, key=lambda c: c["accuracy"])
        worst_case = min(cases, key=lambda c: c["accuracy"])
        average_correct = float(np.mean([c["correct_numbers"] for c in cases]))
    else:
        best_case = worst_case = None
        average_correct = 0.0

    return {
        "total_cases": len(cases),
        "overall_accuracy": overall_accuracy(cases),
        "average_correct_numbers": average_correct,
        "best_case": best_case,
        "worst_case": worst_case,
        "perfect_matches": sum(1 for c in cases if c["correct_numbers"] == 6),
        "zero_matches": sum(1 for c in cases if c["correct_numbers"] == 0),
        "accuracy_distribution": distribution,
        "method_performance": _method_performance(cases),
    }
