"""
Trend Analysis (2-4 training draws)

Treats each sorted rank position (smallest number, 2nd smallest, ...) as a
short series and extrapolates its last step linearly. The extra number is
the rounded mean of past extras with a little jitter.
"""
import numpy as np

from marksix.config import NUMBERS_PER_DRAW
from marksix.strategies.base import clamp, finalize_prediction, random_number, round_half_up

METHOD = "trend_analysis"


def _position_series(training_data):
    """One list per rank position, oldest value first."""
    positions = [[] for _ in range(NUMBERS_PER_DRAW)]
    for draw in training_data:
        for pos, num in enumerate(sorted(draw["numbers"])[:NUMBERS_PER_DRAW]):
            positions[pos].append(num)
    return positions


def _extrapolate(series, rng):
    if not series:
        return random_number(rng)
    if len(series) == 1:
        return clamp(series[0] + int(rng.integers(-3, 4)))
    previous, latest = series[-2], series[-1]
    return clamp(latest + (latest - previous))


def predict(training_data, rng):
    numbers = [_extrapolate(s, rng) for s in _position_series(training_data)]

    extras = [d["extra_number"] for d in training_data]
    jitter = int(rng.integers(-2, 3))
    extra = clamp(round_half_up(np.mean(extras) + jitter))
    return finalize_prediction(numbers, extra, METHOD, rng)
