"""
Frequency Analysis (5-19 training draws)

Picks the six numbers seen most often in the training window. Ties go to
the smaller number, so the result is deterministic whenever at least six
distinct numbers have been drawn.
"""
from marksix.config import NUMBERS_PER_DRAW
from marksix.strategies.base import (
    finalize_prediction,
    most_frequent_extra,
    number_frequency,
    rank_by_count,
)

METHOD = "frequency_analysis"


def top_numbers(training_data, count=NUMBERS_PER_DRAW):
    """Most frequent numbers with a nonzero count, best first."""
    freq = number_frequency(training_data)
    seen = {n: c for n, c in freq.items() if c > 0}
    return rank_by_count(seen)[:count]


def predict(training_data, rng):
    numbers = top_numbers(training_data)
    extra = most_frequent_extra(training_data, rng)
    return finalize_prediction(numbers, extra, METHOD, rng)
