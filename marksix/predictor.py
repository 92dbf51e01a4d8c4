"""
Next-draw prediction for Mark Six

``analyze`` runs the progressive-learning back-test over the full history,
then predicts the next draw with the strategy matching the history size.
If a strategy breaks, the fallback frequency prediction is returned
instead; the result's ``status`` says which path produced it.
"""
import logging

from marksix.aggregator import summarize_cases
from marksix.backtester import run_progressive_learning
from marksix.errors import DataUnavailable, StrategyFailure
from marksix.store import complete_records
from marksix.strategies import fallback, generate_prediction, make_rng

logger = logging.getLogger(__name__)

ALGORITHM = "Progressive Learning Statistical Predictor"
CONFIDENCE = 75
RECENT_VALIDATION_CASES = 5


def predict_next(history, rng=None):
    """Predict the draw after the most recent complete draw in ``history``."""
    draws = complete_records(history)
    if not draws:
        raise DataUnavailable("No complete historical draws available")
    return generate_prediction(draws, rng)


def generate_fallback_prediction(history, rng=None):
    """Fallback result in the same shape as ``analyze`` returns."""
    prediction = fallback.predict(history, rng)
    return {
        "status": "fallback",
        "predicted": prediction["numbers"],
        "extra_number": prediction["extra_number"],
        "confidence": prediction["confidence"],
        "algorithm": prediction["algorithm"],
        "method": prediction["method"],
        "analysis": {
            "total_learning_steps": 0,
            "overall_accuracy": 0.0,
            "average_correct_numbers": 0.0,
            "best_learning_case": None,
            "validation_results": [],
            "method_performance": {},
            "message": "Fallback method due to error in main algorithm",
        },
    }


def _primary_analysis(draws, rng):
    cases = run_progressive_learning(draws, rng)
    summary = summarize_cases(cases)
    prediction = predict_next(draws, rng)
    logger.info("[Predictor] Prediction: %s + %s (%s)",
                prediction["numbers"], prediction["extra_number"], prediction["method"])
    return {
        "status": "ok",
        "predicted": prediction["numbers"],
        "extra_number": prediction["extra_number"],
        "confidence": CONFIDENCE,
        "algorithm": ALGORITHM,
        "method": prediction["method"],
        "analysis": {
            "total_learning_steps": summary["total_cases"],
            "overall_accuracy": summary["overall_accuracy"],
            "average_correct_numbers": summary["average_correct_numbers"],
            "best_learning_case": summary["best_case"],
            "validation_results": cases[-RECENT_VALIDATION_CASES:],
            "method_performance": summary["method_performance"],
        },
    }


def analyze(history, rng=None):
    """
    Predict the next draw from ``history`` (any order).

    Raises
    ------
    DataUnavailable
        If the history holds no complete draws.
    """
    draws = complete_records(history or [])
    if not draws:
        raise DataUnavailable("No historical data available")

    rng = rng if rng is not None else make_rng()
    logger.info("[Predictor] Processing %d historical draws...", len(draws))
    try:
        return _primary_analysis(draws, rng)
    except StrategyFailure as e:
        logger.warning("[Predictor] Analysis failed (%s); using fallback prediction", e)
        return generate_fallback_prediction(draws, rng)
