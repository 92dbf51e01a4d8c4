"""
Mark Six Prediction Strategies

The strategy is chosen by how many training draws are available:
- single_draw: 1 draw, random variation around it
- trend: 2-4 draws, per-position linear extrapolation
- frequency: 5-19 draws, most frequent numbers
- pattern_ensemble: 20+ draws, window frequency + pairs/triplets + overdue
- fallback: frequency top-6 used when the primary analysis fails
"""

from marksix.errors import StrategyFailure
from marksix.strategies.base import make_rng

from . import single_draw
from . import trend
from . import frequency
from . import pattern_ensemble
from . import fallback

__all__ = [
    "single_draw",
    "trend",
    "frequency",
    "pattern_ensemble",
    "fallback",
    "select_strategy",
    "generate_prediction",
    "make_rng",
]

TREND_MIN_DRAWS = 2
FREQUENCY_MIN_DRAWS = 5
PATTERN_MIN_DRAWS = 20


def select_strategy(n_training):
    """Return the strategy module for a training window of ``n_training`` draws."""
    if n_training < 1:
        raise ValueError("At least one training draw is required")
    if n_training == 1:
        return single_draw
    if n_training < FREQUENCY_MIN_DRAWS:
        return trend
    if n_training < PATTERN_MIN_DRAWS:
        return frequency
    return pattern_ensemble


def generate_prediction(training_data, rng=None):
    """
    Predict the draw following ``training_data`` (chronological, oldest first).

    Raises
    ------
    ValueError
        If ``training_data`` is empty.
    StrategyFailure
        If the selected strategy breaks while computing.
    """
    strategy = select_strategy(len(training_data))
    rng = rng if rng is not None else make_rng()
    try:
        return strategy.predict(training_data, rng)
    except (ArithmeticError, LookupError, TypeError, ValueError) as e:
        raise StrategyFailure(f"{strategy.METHOD} failed: {e}") from e
