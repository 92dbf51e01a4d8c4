import pytest

from marksix import predictor, strategies
from marksix.errors import DataUnavailable
from marksix.predictor import analyze, generate_fallback_prediction, predict_next
from tests.helpers import make_draw, random_history


def test_analyze_primary_path(rng):
    result = analyze(random_history(30), rng)
    assert result["status"] == "ok"
    assert result["method"] == "advanced_pattern_ensemble"
    assert result["confidence"] == 75
    assert len(result["predicted"]) == 6
    assert 1 <= result["extra_number"] <= 49

    analysis = result["analysis"]
    assert analysis["total_learning_steps"] == 29
    assert len(analysis["validation_results"]) == 5
    assert analysis["validation_results"][-1]["step"] == 29
    assert analysis["best_learning_case"]["accuracy"] >= analysis["overall_accuracy"]


def test_analyze_single_draw_has_no_learning_steps(rng):
    result = analyze([make_draw([1, 2, 3, 4, 5, 6], 7)], rng)
    assert result["status"] == "ok"
    assert result["method"] == "single_draw_variation"
    assert result["analysis"]["total_learning_steps"] == 0
    assert result["analysis"]["best_learning_case"] is None


@pytest.mark.parametrize("history", [[], None, [make_draw([1, 2, 3], 4)]])
def test_analyze_without_usable_history(history, rng):
    with pytest.raises(DataUnavailable):
        analyze(history, rng)


def test_analyze_falls_back_when_a_strategy_breaks(monkeypatch, rng):
    def explode(training_data, rng):
        raise IndexError("no such draw")

    monkeypatch.setattr(strategies.pattern_ensemble, "predict", explode)
    history = [make_draw([3, 9, 18, 27, 36, 45], 5, day=d) for d in range(25)]
    result = analyze(history, rng)

    assert result["status"] == "fallback"
    assert result["method"] == "fallback_frequency"
    assert result["confidence"] == 25
    assert result["predicted"] == [3, 9, 18, 27, 36, 45]
    assert result["analysis"]["total_learning_steps"] == 0
    assert "Fallback" in result["analysis"]["message"]


def test_fallback_prediction_shape(rng):
    result = generate_fallback_prediction([], rng)
    assert result["status"] == "fallback"
    assert len(set(result["predicted"])) == 6
    assert set(result["analysis"]) >= {"total_learning_steps", "overall_accuracy",
                                       "validation_results", "method_performance"}


def test_predict_next_uses_most_recent_history(rng):
    history = [make_draw([1, 7, 15, 21, 35, 42], 24, day=d) for d in range(6)]
    assert predict_next(list(reversed(history)), rng)["numbers"] == [1, 7, 15, 21, 35, 42]


def test_predict_next_without_history(rng):
    with pytest.raises(DataUnavailable):
        predict_next([], rng)


def test_analyze_predicts_through_predict_next(monkeypatch, rng):
    calls = []

    def recording_predict_next(history, rng=None):
        calls.append(len(history))
        return predict_next(history, rng)

    monkeypatch.setattr(predictor, "predict_next", recording_predict_next)
    result = analyze(random_history(8), rng)
    assert calls == [8]
    assert result["method"] == "frequency_analysis"
