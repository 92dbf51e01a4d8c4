from datetime import date, timedelta

import numpy as np


def make_draw(numbers, extra, day=0, draw_no=None):
    """Draw record dated ``day`` days after 2020-01-01."""
    return {
        "draw_date": (date(2020, 1, 1) + timedelta(days=day)).isoformat(),
        "numbers": sorted(numbers),
        "extra_number": extra,
        "draw_no": draw_no or f"20/{day + 1:03d}",
    }


def random_history(n, seed=0):
    rng = np.random.default_rng(seed)
    history = []
    for day in range(n):
        picks = rng.choice(np.arange(1, 50), size=7, replace=False)
        history.append(make_draw([int(x) for x in picks[:6]], int(picks[6]), day))
    return history


class ZeroRng:
    """Stand-in random source: every offset is 0 and choices come in order."""

    def integers(self, low, high=None, size=None):
        if size is None:
            return 0
        return np.zeros(size, dtype=int)

    def choice(self, pool, size=None, replace=True):
        return list(pool)[:size]
