"""
Single-Draw Variation

Used when only one previous draw is known: each of its numbers is nudged
by a random offset in [-3, +3] and the extra number by [-2, +2].
"""
from marksix.strategies.base import finalize_prediction

METHOD = "single_draw_variation"


def predict(training_data, rng):
    draw = training_data[-1]
    offsets = rng.integers(-3, 4, size=len(draw["numbers"]))
    numbers = [n + int(off) for n, off in zip(draw["numbers"], offsets)]
    extra = draw["extra_number"] + int(rng.integers(-2, 3))
    return finalize_prediction(numbers, extra, METHOD, rng)
