"""
Accuracy scoring for predicted vs actual draws.

A prediction scores one point per main number found anywhere in the
actual draw plus one for the extra number, out of a fixed 7.
"""

TOTAL_POSSIBLE = 7

# (minimum percentage, grade), checked top-down
GRADES = [
    (100, "Perfect"),
    (85, "Excellent"),
    (70, "Very Good"),
    (55, "Good"),
    (40, "Fair"),
    (25, "Poor"),
]


def calculate_accuracy(predicted, actual, predicted_extra, actual_extra) -> dict:
    """
    Compare a predicted draw with the actual result.

    Returns
    -------
    dict with keys:
        correct_numbers : predicted main numbers present in the actual draw
        correct_extra   : 1 if the extra numbers are equal, else 0
        total_correct   : correct_numbers + correct_extra
        percentage      : total_correct / 7 * 100
        matched_numbers : the matching main numbers, ascending
    """
    actual_set = set(actual)
    matched = sorted(n for n in set(predicted) if n in actual_set)
    correct_numbers = len(matched)
    correct_extra = 1 if predicted_extra == actual_extra else 0
    total_correct = correct_numbers + correct_extra
    return {
        "correct_numbers": correct_numbers,
        "correct_extra": correct_extra,
        "total_correct": total_correct,
        "percentage": total_correct / TOTAL_POSSIBLE * 100,
        "matched_numbers": matched,
    }


def accuracy_grade(percentage: float) -> str:
    for threshold, grade in GRADES:
        if percentage >= threshold:
            return grade
    return "Very Poor"
