"""
Progressive Learning Back-test Engine for Mark Six

Walks through the history oldest first: draw 1 predicts draw 2, draws 1-2
predict draw 3, and so on. Each prediction only sees earlier draws. Every
step is scored and recorded as a case result.
"""
import logging
import os

import numpy as np
import pandas as pd
from scipy import stats

from marksix.aggregator import summarize_cases
from marksix.config import BACKTEST_CSV_PATH, DEFAULT_CASE_LIMIT, MAX_NUMBER, MIN_NUMBER
from marksix.scoring import accuracy_grade, calculate_accuracy
from marksix.store import complete_records
from marksix.strategies import generate_prediction, make_rng

logger = logging.getLogger(__name__)


def run_progressive_learning(history, rng=None):
    """
    Back-test every draw after the first.

    Parameters
    ----------
    history : list of draw dicts, in any order
    rng : numpy Generator, optional

    Returns
    -------
    list of case result dicts, one per step 1..N-1. Fewer than two
    complete draws give an empty list.
    """
    rng = rng if rng is not None else make_rng()
    draws = complete_records(history)
    if len(draws) < 2:
        logger.info("[Backtest] Need at least 2 complete draws, got %d", len(draws))
        return []

    logger.info("[Backtest] Starting progressive learning over %d draws...", len(draws))
    results = []
    for i in range(1, len(draws)):
        training_data = draws[:i]
        target = draws[i]
        prediction = generate_prediction(training_data, rng)
        accuracy = calculate_accuracy(
            prediction["numbers"], target["numbers"],
            prediction["extra_number"], target["extra_number"],
        )
        results.append({
            "step": i,
            "training_draws": len(training_data),
            "target_date": target["draw_date"],
            "target_draw_no": target.get("draw_no"),
            "target_numbers": [int(n) for n in target["numbers"]],
            "target_extra": int(target["extra_number"]),
            "predicted_numbers": prediction["numbers"],
            "predicted_extra": prediction["extra_number"],
            "matched_numbers": accuracy["matched_numbers"],
            "correct_numbers": accuracy["correct_numbers"],
            "correct_extra": accuracy["correct_extra"],
            "accuracy": accuracy["percentage"],
            "method": prediction["method"],
        })
        if i % 100 == 0 or i < 10:
            logger.info("   Step %d: %d/6 numbers correct (%.1f%%) - %s",
                        i, accuracy["correct_numbers"], accuracy["percentage"],
                        target["draw_date"])

    logger.info("[Backtest] Progressive learning completed: %d predictions made", len(results))
    return results


def compare_with_random(cases, rng=None):
    """
    Compare correct-number counts against one uniformly random ticket per case.

    Returns a dict with the random baseline mean, a two-sample
    t-test (scipy) and a 95% CI for the mean difference; empty when there
    are fewer than two cases.
    """
    if len(cases) < 2:
        return {}
    rng = rng if rng is not None else make_rng()

    model_matches = np.array([c["correct_numbers"] for c in cases], dtype=float)
    random_matches = []
    for case in cases:
        ticket = rng.choice(np.arange(MIN_NUMBER, MAX_NUMBER + 1), size=6, replace=False)
        random_matches.append(len(set(int(n) for n in ticket) & set(case["target_numbers"])))
    random_matches = np.array(random_matches, dtype=float)

    result = {
        "random_avg_matches": round(float(random_matches.mean()), 4),
        "model_avg_matches": round(float(model_matches.mean()), 4),
    }
    diff = model_matches.mean() - random_matches.mean()
    se = np.sqrt(model_matches.var(ddof=1) / len(model_matches)
                 + random_matches.var(ddof=1) / len(random_matches))
    result["mean_diff"] = round(float(diff), 4)
    result["ci_95"] = (round(float(diff - 1.96 * se), 4), round(float(diff + 1.96 * se), 4))

    if model_matches.var() == 0 and random_matches.var() == 0:
        # t-test is undefined for two constant samples
        result.update({"t_statistic": None, "p_value": None,
                       "significant_at_005": False, "significant_at_010": False})
        return result

    t_stat, p_value = stats.ttest_ind(model_matches, random_matches)
    result.update({
        "t_statistic": round(float(t_stat), 4),
        "p_value": round(float(p_value), 6),
        "significant_at_005": bool(p_value < 0.05),
        "significant_at_010": bool(p_value < 0.10),
    })
    return result


def run_backtest(history, rng=None, baseline=False):
    """
    Back-test the history and return the run summary.

    With ``baseline=True`` the summary also carries ``significance``, a
    comparison against random tickets.
    """
    rng = rng if rng is not None else make_rng()
    cases = run_progressive_learning(history, rng)
    summary = summarize_cases(cases)
    if baseline:
        summary["significance"] = compare_with_random(cases, rng)
    _log_summary(summary)
    return summary


def select_cases(cases, limit=DEFAULT_CASE_LIMIT, show_all=False):
    """The most recent ``limit`` cases, or every case when ``show_all``."""
    if show_all or limit is None or limit >= len(cases):
        return list(cases)
    if limit <= 0:
        return []
    return list(cases[-limit:])


def format_case(case, case_number):
    """Display form of a case result."""
    return {
        "case_number": case_number,
        "step": case["step"],
        "training_data": {
            "draws_used": case["training_draws"],
            "method": case["method"],
        },
        "target": {
            "date": case["target_date"],
            "draw_no": case.get("target_draw_no"),
            "numbers": case["target_numbers"],
            "extra_number": case["target_extra"],
            "formatted": _format_draw(case["target_numbers"], case["target_extra"]),
        },
        "predicted": {
            "numbers": case["predicted_numbers"],
            "extra_number": case["predicted_extra"],
            "formatted": _format_draw(case["predicted_numbers"], case["predicted_extra"]),
        },
        "accuracy": {
            "correct_numbers": case["correct_numbers"],
            "correct_extra": case["correct_extra"],
            "total_correct": case["correct_numbers"] + case["correct_extra"],
            "percentage": f"{case['accuracy']:.2f}%",
            "grade": accuracy_grade(case["accuracy"]),
        },
        "matches": {
            "main_numbers": case["matched_numbers"],
            "extra_match": case["target_extra"] == case["predicted_extra"],
        },
    }


def run_detailed_backtest(history, limit=DEFAULT_CASE_LIMIT, show_all=False, rng=None):
    """
    Back-test the history and return the summary plus formatted cases.

    Statistics always cover every case; ``limit``/``show_all`` only decide
    which cases are listed.
    """
    logger.info("[Backtest] Running detailed case-by-case analysis...")
    cases = run_progressive_learning(history, rng)
    selected = select_cases(cases, limit, show_all)
    first_number = len(cases) - len(selected) + 1
    formatted = [format_case(c, first_number + i) for i, c in enumerate(selected)]

    summary = summarize_cases(cases)
    _log_summary(summary)
    return {"cases": formatted, **summary}


def save_results(cases, path=BACKTEST_CSV_PATH):
    """Write raw case results to CSV. Returns the path, or None if nothing to save."""
    if not cases:
        return None
    rows = []
    for c in cases:
        rows.append({
            "step": c["step"],
            "training_draws": c["training_draws"],
            "target_date": c["target_date"],
            "target_draw_no": c.get("target_draw_no"),
            "target": str(c["target_numbers"]),
            "target_extra": c["target_extra"],
            "predicted": str(c["predicted_numbers"]),
            "predicted_extra": c["predicted_extra"],
            "correct_numbers": c["correct_numbers"],
            "correct_extra": c["correct_extra"],
            "accuracy": round(c["accuracy"], 4),
            "method": c["method"],
        })
    os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
    pd.DataFrame(rows).to_csv(path, index=False)
    logger.info("[Backtest] Results saved to %s", path)
    return path


def _format_draw(numbers, extra):
    return f"{', '.join(str(n) for n in numbers)} + {extra}"


def _log_summary(summary):
    logger.info("=" * 60)
    logger.info("BACKTEST RESULTS SUMMARY")
    logger.info("  Cases: %d", summary["total_cases"])
    logger.info("  Average accuracy: %.2f%%", summary["overall_accuracy"])
    logger.info("  Average correct numbers: %.2f / 6", summary["average_correct_numbers"])
    logger.info("  Perfect matches: %d | Zero matches: %d",
                summary["perfect_matches"], summary["zero_matches"])
    for method, perf in summary["method_performance"].items():
        logger.info("  %s: %d cases, avg %.2f%%", method, perf["cases"], perf["avg_accuracy"])
    sig = summary.get("significance")
    if sig and sig.get("p_value") is not None:
        logger.info("  vs random: diff %s, p-value %s", sig["mean_diff"], sig["p_value"])
    logger.info("=" * 60)
