import pytest

from marksix.aggregator import ACCURACY_BUCKETS, bucket_for, summarize_cases


def case(step, correct_numbers, correct_extra=0, method="frequency_analysis"):
    return {
        "step": step,
        "correct_numbers": correct_numbers,
        "correct_extra": correct_extra,
        "accuracy": (correct_numbers + correct_extra) / 7 * 100,
        "method": method,
    }


def test_empty_cases_give_zeroed_summary():
    summary = summarize_cases([])
    assert summary["total_cases"] == 0
    assert summary["overall_accuracy"] == 0.0
    assert summary["average_correct_numbers"] == 0.0
    assert summary["best_case"] is None
    assert summary["worst_case"] is None
    assert summary["perfect_matches"] == 0
    assert summary["zero_matches"] == 0
    assert set(summary["accuracy_distribution"]) == {label for label, _ in ACCURACY_BUCKETS}
    assert all(count == 0 for count in summary["accuracy_distribution"].values())
    assert summary["method_performance"] == {}


def test_summary_statistics():
    cases = [
        case(1, 0, method="single_draw_variation"),
        case(2, 6, 1, method="trend_analysis"),
        case(3, 2, method="trend_analysis"),
        case(4, 6, 1, method="frequency_analysis"),
        case(5, 0, method="frequency_analysis"),
    ]
    summary = summarize_cases(cases)

    assert summary["total_cases"] == 5
    assert summary["overall_accuracy"] == pytest.approx((0 + 100 + 200 / 7 + 100 + 0) / 5)
    assert summary["average_correct_numbers"] == pytest.approx(14 / 5)
    assert summary["perfect_matches"] == 2
    assert summary["zero_matches"] == 2
    # ties resolve to the first case found
    assert summary["best_case"]["step"] == 2
    assert summary["worst_case"]["step"] == 1

    trend = summary["method_performance"]["trend_analysis"]
    assert trend["cases"] == 2
    assert trend["avg_accuracy"] == pytest.approx((100 + 200 / 7) / 2)
    assert trend["avg_correct_numbers"] == 4
    assert summary["method_performance"]["single_draw_variation"]["cases"] == 1


def test_distribution_buckets():
    cases = [case(i, n, e) for i, (n, e) in enumerate([(0, 0), (1, 0), (2, 0), (3, 0),
                                                         (4, 0), (5, 0), (6, 0), (6, 1)])]
    dist = summarize_cases(cases)["accuracy_distribution"]
    # 0, 14.3, 28.6, 42.9, 57.1, 71.4, 85.7, 100
    assert dist == {
        "90-100%": 1,
        "70-89%": 2,
        "50-69%": 1,
        "30-49%": 1,
        "10-29%": 2,
        "0-9%": 1,
    }
    assert sum(dist.values()) == len(cases)


@pytest.mark.parametrize("pct, label", [
    (0, "0-9%"), (9.99, "0-9%"), (10, "10-29%"), (29.9, "10-29%"), (30, "30-49%"),
    (50, "50-69%"), (70, "70-89%"), (89.99, "70-89%"), (90, "90-100%"), (100, "90-100%"),
])
def test_bucket_bounds(pct, label):
    assert bucket_for(pct) == label


def test_missing_method_grouped_as_unknown():
    c = case(1, 3)
    c["method"] = None
    assert summarize_cases([c])["method_performance"]["unknown"]["cases"] == 1
