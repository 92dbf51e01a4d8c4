"""
Fallback Prediction

Plain frequency top-6 with random padding, used when the primary analysis
fails. It only counts and draws random numbers, skipping anything in the
history that is not a usable number, so it cannot fail on bad data.
"""
import logging
from collections import Counter

from marksix.config import NUMBERS_PER_DRAW
from marksix.store import is_draw_number
from marksix.strategies.base import ALL_NUMBERS, make_rng, pad_with_random, random_number, rank_by_count

logger = logging.getLogger(__name__)

METHOD = "fallback_frequency"
ALGORITHM = "Fallback Frequency Analysis"
CONFIDENCE = 25


def _usable_numbers(history):
    for draw in history or []:
        numbers = draw.get("numbers") if isinstance(draw, dict) else None
        if not isinstance(numbers, (list, tuple)):
            continue
        for n in numbers:
            if is_draw_number(n):
                yield int(n)


def predict(history, rng=None):
    """
    Returns the same prediction dict as the other strategies plus
    ``confidence`` and ``algorithm``.
    """
    logger.info("[Fallback] Using fallback prediction method")
    rng = rng if rng is not None else make_rng()

    counts = Counter(_usable_numbers(history))
    freq = {n: counts.get(n, 0) for n in ALL_NUMBERS}
    selected = pad_with_random(rank_by_count(freq)[:NUMBERS_PER_DRAW], rng)

    return {
        "numbers": sorted(selected),
        "extra_number": random_number(rng),
        "method": METHOD,
        "algorithm": ALGORITHM,
        "confidence": CONFIDENCE,
    }
