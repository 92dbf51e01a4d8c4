import pytest

from marksix.errors import DataUnavailable, FetchError
from marksix.service import PredictionService
from tests.helpers import make_draw, random_history


def failing_fetcher():
    raise FetchError("HKJC unreachable")


def test_refresh_replaces_store_newest_first(store, rng):
    fetched = random_history(6)
    fetched.append(dict(fetched[0]))  # same date twice
    service = PredictionService(store, fetcher=lambda: fetched, rng=rng)

    assert service.refresh() is True
    dates = [r["draw_date"] for r in store.records]
    assert len(dates) == 6
    assert dates == sorted(dates, reverse=True)


def test_refresh_failure_keeps_existing_data(store, rng):
    store.replace(random_history(4))
    service = PredictionService(store, fetcher=failing_fetcher, rng=rng)
    assert service.refresh() is False
    assert len(store) == 4


def test_refresh_with_empty_fetch(store, rng):
    service = PredictionService(store, fetcher=lambda: [], rng=rng)
    assert service.refresh() is False


def test_history_loads_snapshot(store, rng):
    store.replace(random_history(3))
    service = PredictionService(type(store)(store.path), fetcher=None, rng=rng)
    assert len(service.history()) == 3


def test_enhanced_predict_without_data(store, rng):
    service = PredictionService(store, fetcher=failing_fetcher, rng=rng)
    with pytest.raises(DataUnavailable):
        service.enhanced_predict()


def test_enhanced_predict_payload(store, rng):
    history = random_history(25)
    service = PredictionService(store, fetcher=lambda: history, rng=rng)
    result = service.enhanced_predict()

    assert result["success"] is True
    assert result["status"] == "ok"
    assert result["data_process"]["new_data_fetched"] is True
    assert result["data_process"]["data_source"] == "Fresh HKJC data"
    assert result["data_used"]["total_draws"] == 25
    assert result["data_used"]["learning_steps"] == 24
    assert result["data_used"]["date_range"] == {"from": "2020-01-01", "to": "2020-01-25"}
    assert result["formatted_prediction"].endswith(f"+ {result['extra_number']}")
    assert "24 learning steps" in result["explanation"]["accuracy"]
    assert len(result["explanation"]["methods"]) == 4
    assert result["disclaimer"]


def test_enhanced_predict_skip_fetch(store, rng):
    store.replace([make_draw([1, 2, 3, 4, 5, 6], 7)])

    def must_not_fetch():
        raise AssertionError("fetch should be skipped")

    service = PredictionService(store, fetcher=must_not_fetch, rng=rng)
    result = service.enhanced_predict(skip_fetch=True)
    assert result["data_process"]["hkjc_fetch"] is False
    assert result["data_process"]["data_source"] == "Existing JSON data"
    assert result["method"] == "single_draw_variation"


@pytest.mark.parametrize("limit, shown", [(5, 5), (0, 1), (None, 29), (10000, 29)])
def test_case_analysis_limit(store, rng, limit, shown):
    store.replace(random_history(30))
    service = PredictionService(store, fetcher=None, rng=rng)
    result = service.case_analysis(limit=limit)
    assert result["analysis_config"]["cases_analyzed"] == 29
    assert result["analysis_config"]["cases_shown"] == shown
    assert len(result["cases"]) == shown


def test_case_analysis_show_all_and_stats(store, rng):
    store.replace(random_history(60))
    service = PredictionService(store, fetcher=None, rng=rng)
    result = service.case_analysis(limit=10, show_all=True)

    assert len(result["cases"]) == 59
    assert result["analysis_config"]["show_all_cases"] is True
    stats = result["overall_stats"]
    assert stats["total_cases"] == 59
    assert stats["average_accuracy"].endswith("%")
    assert stats["average_correct_numbers"].endswith("/6")
    assert sum(result["accuracy_distribution"].values()) == 59
    assert sum(p["cases"] for p in result["method_performance"].values()) == 59


def test_history_key_tracks_the_data(store, rng):
    service = PredictionService(store, fetcher=lambda: random_history(8), rng=rng)
    assert service.history_key() == (0, None)

    store.replace(random_history(5))
    assert service.history_key() == (5, "2020-01-05")

    service.refresh()
    assert service.history_key() == (8, "2020-01-08")
