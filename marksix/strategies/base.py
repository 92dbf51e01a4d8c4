"""
Shared helpers for the prediction strategies.

Every strategy takes a training window (chronological list of draw dicts)
and a ``numpy.random.Generator``, and returns a prediction dict:
    {"numbers": [6 ints ascending], "extra_number": int, "method": str}
"""
import math
from collections import Counter

import numpy as np

from marksix.config import MAX_NUMBER, MIN_NUMBER, NUMBERS_PER_DRAW

ALL_NUMBERS = list(range(MIN_NUMBER, MAX_NUMBER + 1))


def make_rng(seed=None):
    """Random source for strategies. ``seed=None`` draws entropy from the OS."""
    return np.random.default_rng(seed)


def clamp(value, low=MIN_NUMBER, high=MAX_NUMBER):
    return max(low, min(high, int(value)))


def round_half_up(value):
    return int(math.floor(value + 0.5))


def random_number(rng):
    return int(rng.integers(MIN_NUMBER, MAX_NUMBER + 1))


def pad_with_random(selected, rng, count=NUMBERS_PER_DRAW):
    """Top ``selected`` up to ``count`` numbers with uniform random unused ones."""
    selected = list(selected)
    missing = count - len(selected)
    if missing <= 0:
        return selected
    pool = [n for n in ALL_NUMBERS if n not in selected]
    picks = rng.choice(pool, size=missing, replace=False)
    return selected + [int(n) for n in picks]


def finalize_prediction(numbers, extra_number, method, rng):
    """
    Clamp, deduplicate, pad and sort a raw prediction.

    Applied to every strategy's output so each prediction has exactly 6
    distinct numbers in 1-49, ascending, plus an extra number in 1-49.
    """
    unique = []
    for n in numbers:
        n = clamp(n)
        if n not in unique:
            unique.append(n)
    unique = pad_with_random(unique[:NUMBERS_PER_DRAW], rng)
    return {
        "numbers": sorted(unique),
        "extra_number": clamp(extra_number),
        "method": method,
    }


def number_frequency(draws):
    """Main-number counts for 1-49 (zero included), keyed in ascending order."""
    counts = Counter()
    for draw in draws:
        counts.update(draw["numbers"])
    return {n: counts.get(n, 0) for n in ALL_NUMBERS}


def rank_by_count(counts):
    """Keys sorted by count descending; ties keep the mapping's order."""
    return [k for k, _ in sorted(counts.items(), key=lambda kv: kv[1], reverse=True)]


def most_frequent_extra(draws, rng):
    """
    Most common extra number; ties go to the smallest value.
    Falls back to a uniform random number when there are no extras.
    """
    extras = Counter(d["extra_number"] for d in draws if d.get("extra_number") is not None)
    if not extras:
        return random_number(rng)
    ranked = sorted(extras.items(), key=lambda kv: (-kv[1], kv[0]))
    return int(ranked[0][0])
