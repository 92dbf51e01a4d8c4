import numpy as np
import pytest

from marksix.scoring import accuracy_grade, calculate_accuracy


def test_perfect_match():
    result = calculate_accuracy([1, 2, 3, 4, 5, 6], [6, 5, 4, 3, 2, 1], 7, 7)
    assert result["correct_numbers"] == 6
    assert result["correct_extra"] == 1
    assert result["percentage"] == 100.0
    assert result["matched_numbers"] == [1, 2, 3, 4, 5, 6]


def test_membership_not_position():
    result = calculate_accuracy([1, 2, 3, 40, 41, 42], [3, 10, 11, 12, 41, 49], 5, 6)
    assert result["correct_numbers"] == 2
    assert result["correct_extra"] == 0
    assert result["matched_numbers"] == [3, 41]
    assert result["percentage"] == 2 / 7 * 100


def test_extra_matching_a_main_number_does_not_count_twice():
    # predicted extra equals an actual main number but not the actual extra
    result = calculate_accuracy([10, 11, 12, 13, 14, 15], [1, 2, 3, 4, 5, 6], 6, 9)
    assert result["total_correct"] == 0
    assert result["percentage"] == 0.0


def test_percentage_formula_holds_for_random_pairs():
    rng = np.random.default_rng(7)
    pool = np.arange(1, 50)
    for _ in range(300):
        predicted = [int(n) for n in rng.choice(pool, 6, replace=False)]
        actual = [int(n) for n in rng.choice(pool, 6, replace=False)]
        p_extra, a_extra = int(rng.integers(1, 50)), int(rng.integers(1, 50))
        result = calculate_accuracy(predicted, actual, p_extra, a_extra)
        assert 0 <= result["correct_numbers"] <= 6
        assert result["percentage"] == (result["correct_numbers"] + result["correct_extra"]) / 7 * 100


@pytest.mark.parametrize("pct, grade", [
    (100, "Perfect"),
    (85.71, "Excellent"),
    (71.43, "Very Good"),
    (57.14, "Good"),
    (42.86, "Fair"),
    (28.57, "Poor"),
    (14.29, "Very Poor"),
    (0, "Very Poor"),
])
def test_accuracy_grade(pct, grade):
    assert accuracy_grade(pct) == grade
