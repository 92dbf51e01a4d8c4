"""
Advanced Pattern Ensemble (20+ training draws)

Combines three signals, in priority order:
    1. Sliding-window frequency: top 10 numbers over the last 50 draws
    2. Co-occurrence: most common pairs (top 10) and triplets (top 5)
    3. Overdue numbers: the 10 numbers least recently seen

Selection takes up to 3 window-frequency numbers, fills to 5 from the top
pairs, to 6 from the top triplets, then from the overdue list, and finally
with random numbers if anything is still missing.
"""
from collections import Counter
from itertools import combinations

from marksix.config import NUMBERS_PER_DRAW
from marksix.strategies.base import (
    ALL_NUMBERS,
    finalize_prediction,
    most_frequent_extra,
    number_frequency,
    pad_with_random,
    rank_by_count,
)

METHOD = "advanced_pattern_ensemble"

WINDOW_SIZE = 50
TOP_WINDOW = 10
TOP_PAIRS = 10
TOP_TRIPLETS = 5
TOP_OVERDUE = 10


def window_frequency(training_data, window=WINDOW_SIZE, top=TOP_WINDOW):
    """Most frequent numbers within the last ``window`` draws."""
    return rank_by_count(number_frequency(training_data[-window:]))[:top]


def combination_counts(training_data, size):
    """
    Count every ``size``-number combination co-occurring within a draw.
    Counter keeps first-seen order, which settles ties in ``most_common``.
    """
    counts = Counter()
    for draw in training_data:
        counts.update(combinations(sorted(draw["numbers"]), size))
    return counts


def overdue_numbers(training_data, top=TOP_OVERDUE):
    """Numbers ordered by index of last appearance, oldest (or never) first."""
    last_seen = {n: -1 for n in ALL_NUMBERS}
    for idx, draw in enumerate(training_data):
        for n in draw["numbers"]:
            last_seen[n] = idx
    return sorted(ALL_NUMBERS, key=lambda n: last_seen[n])[:top]


def _fill_from_groups(selected, groups, limit):
    for group in groups:
        for num in group:
            if num not in selected and len(selected) < limit:
                selected.append(num)
        if len(selected) >= limit:
            break


def predict(training_data, rng):
    top_window = window_frequency(training_data)
    top_pairs = [pair for pair, _ in combination_counts(training_data, 2).most_common(TOP_PAIRS)]
    top_triplets = [t for t, _ in combination_counts(training_data, 3).most_common(TOP_TRIPLETS)]
    overdue = overdue_numbers(training_data)

    selected = []
    for num in top_window:
        if len(selected) >= 3:
            break
        if num not in selected:
            selected.append(num)

    _fill_from_groups(selected, top_pairs, 5)
    _fill_from_groups(selected, top_triplets, NUMBERS_PER_DRAW)

    for num in overdue:
        if num not in selected and len(selected) < NUMBERS_PER_DRAW:
            selected.append(num)

    selected = pad_with_random(selected, rng)
    extra = most_frequent_extra(training_data, rng)
    return finalize_prediction(selected, extra, METHOD, rng)
