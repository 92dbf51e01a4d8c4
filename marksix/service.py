"""
Prediction Service

Request-level operations used by the dashboard and scripts: optionally
refresh the history from HKJC, then run the prediction or the case-by-case
analysis and shape the response payload.
"""
import logging
from datetime import datetime

import requests

from marksix.backtester import run_detailed_backtest
from marksix.config import DEFAULT_CASE_LIMIT, MAX_CASE_LIMIT
from marksix.errors import DataUnavailable, FetchError
from marksix.fetcher import fetch_hkjc_data
from marksix.predictor import analyze
from marksix.strategies import make_rng

logger = logging.getLogger(__name__)

DISCLAIMER = (
    "Progressive learning analyzes historical patterns. Accuracy shown is based on "
    "historical back-testing. Past performance does not guarantee future results. "
    "For entertainment purposes only."
)

METHOD_DESCRIPTIONS = [
    "Single Draw Variation (1 training draw)",
    "Trend Analysis (2-4 training draws)",
    "Frequency Analysis (5-19 training draws)",
    "Advanced Pattern Ensemble (20+ training draws)",
]


def _timestamp():
    return datetime.now().strftime("%Y-%m-%d %H:%M:%S")


def _clamp_limit(limit):
    if limit is None:
        return DEFAULT_CASE_LIMIT
    return max(1, min(MAX_CASE_LIMIT, int(limit)))


class PredictionService:
    """
    Parameters
    ----------
    store : DrawStore
    fetcher : callable returning a list of draw records, optional
        Defaults to the HKJC GraphQL client.
    rng : numpy Generator, optional
    """

    def __init__(self, store, fetcher=fetch_hkjc_data, rng=None):
        self.store = store
        self.fetcher = fetcher
        self.rng = rng if rng is not None else make_rng()

    def refresh(self):
        """
        Replace the stored history with a fresh fetch.

        Returns True if the store was updated. A failed fetch keeps the
        existing data.
        """
        if self.fetcher is None:
            return False
        try:
            fetched = self.fetcher()
        except (FetchError, requests.RequestException) as e:
            logger.warning("[Service] HKJC fetch failed, using existing data: %s", e)
            return False
        if not fetched:
            logger.info("[Service] No new data from HKJC, using existing data")
            return False

        unique, seen_dates = [], set()
        for draw in fetched:
            if draw["draw_date"] in seen_dates:
                continue
            seen_dates.add(draw["draw_date"])
            unique.append(draw)
        unique.sort(key=lambda r: r["draw_date"], reverse=True)

        self.store.replace(unique)
        logger.info("[Service] Updated snapshot with %d records", len(unique))
        return True

    def history(self):
        """Current history, loading the snapshot if memory is empty."""
        records = self.store.records
        if not records:
            records = self.store.load()
        if not records:
            raise DataUnavailable("No historical data available")
        return records

    def history_key(self):
        """(draw count, latest draw date) of the current history; changes whenever the data does."""
        records = self.store.records
        if not records:
            return (0, None)
        return (len(records), max(r["draw_date"] for r in records))

    def enhanced_predict(self, skip_fetch=False):
        fetched = False if skip_fetch else self.refresh()
        history = self.history()
        result = analyze(history, self.rng)

        dates = sorted(r["draw_date"] for r in history)
        formatted = f"{', '.join(str(n) for n in result['predicted'])} + {result['extra_number']}"
        logger.info("[Service] Final prediction: %s", formatted)
        return {
            "success": True,
            "status": result["status"],
            "predicted": result["predicted"],
            "extra_number": result["extra_number"],
            "formatted_prediction": formatted,
            "confidence": result["confidence"],
            "algorithm": result["algorithm"],
            "method": result["method"],
            "analysis": result["analysis"],
            "data_process": {
                "hkjc_fetch": not skip_fetch,
                "new_data_fetched": fetched,
                "snapshot_updated": fetched,
                "data_source": "Fresh HKJC data" if fetched else "Existing JSON data",
            },
            "data_used": {
                "total_draws": len(history),
                "learning_steps": result["analysis"]["total_learning_steps"],
                "date_range": {"from": dates[0], "to": dates[-1]},
            },
            "explanation": {
                "concept": "Progressive learning: draw 1 predicts 2, draws 1-2 predict 3, "
                           "and so on through the whole history",
                "accuracy": (f"{result['analysis']['overall_accuracy']:.2f}% average accuracy "
                             f"across {result['analysis']['total_learning_steps']} learning steps"),
                "methods": METHOD_DESCRIPTIONS,
            },
            "timestamp": _timestamp(),
            "disclaimer": DISCLAIMER,
        }

    def case_analysis(self, limit=DEFAULT_CASE_LIMIT, show_all=False, skip_fetch=True):
        fetched = False if skip_fetch else self.refresh()
        history = self.history()
        limit = _clamp_limit(limit)
        logger.info("[Service] Running case-by-case analysis on %d draws...", len(history))
        detailed = run_detailed_backtest(history, limit=limit, show_all=show_all, rng=self.rng)

        return {
            "success": True,
            "analysis_config": {
                "total_historical_draws": len(history),
                "cases_analyzed": detailed["total_cases"],
                "cases_shown": len(detailed["cases"]),
                "limit": limit,
                "show_all_cases": bool(show_all),
                "data_source": "Fresh HKJC data" if fetched else "Existing JSON data",
            },
            "overall_stats": {
                "total_cases": detailed["total_cases"],
                "average_accuracy": f"{detailed['overall_accuracy']:.2f}%",
                "average_correct_numbers": f"{detailed['average_correct_numbers']:.1f}/6",
                "best_case": detailed["best_case"],
                "worst_case": detailed["worst_case"],
                "perfect_matches": detailed["perfect_matches"],
                "zero_matches": detailed["zero_matches"],
            },
            "accuracy_distribution": detailed["accuracy_distribution"],
            "method_performance": detailed["method_performance"],
            "cases": detailed["cases"],
            "timestamp": _timestamp(),
            "disclaimer": DISCLAIMER,
        }
