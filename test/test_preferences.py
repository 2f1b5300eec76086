from datetime import date, timedelta

import pytest

from agents.search_preferences_agent import SearchPreferencesAgent
from models.preferences import SearchPreferences


def test_all_fields_provided():
    agent = SearchPreferencesAgent()
    start = date.today() + timedelta(days=7)
    prefs = agent.normalize({
        "monthly_income": "1200",
        "countries": ["mexico", "Vietnam"],
        "check_in": start.isoformat(),
        "check_out": (start + timedelta(days=3)).isoformat(),
    })
    assert prefs.monthly_income == 1200.0
    assert prefs.countries == ["Mexico", "Vietnam"]
    assert prefs.check_in == start
    assert prefs.check_out == start + timedelta(days=3)


def test_dates_default_to_tomorrow_for_one_night():
    prefs = SearchPreferencesAgent().normalize({"monthly_income": 900, "countries": ["Brazil"]})
    assert prefs.check_in == date.today() + timedelta(days=1)
    assert prefs.check_out == prefs.check_in + timedelta(days=1)


def test_check_out_before_check_in_is_reset():
    start = date.today() + timedelta(days=5)
    prefs = SearchPreferencesAgent().normalize(SearchPreferences(
        monthly_income=900,
        countries=["Brazil"],
        check_in=start,
        check_out=start - timedelta(days=2),
    ))
    assert prefs.check_out == start + timedelta(days=1)


def test_duplicate_countries_are_dropped_in_order():
    prefs = SearchPreferencesAgent().normalize({
        "monthly_income": 900,
        "countries": ["Thailand", "colombia", "THAILAND"],
    })
    assert prefs.countries == ["Thailand", "Colombia"]


def test_empty_selection_is_rejected():
    with pytest.raises(ValueError):
        SearchPreferencesAgent().normalize({"monthly_income": 900, "countries": []})


def test_unknown_country_is_rejected():
    with pytest.raises(ValueError):
        SearchPreferencesAgent().normalize({"monthly_income": 900, "countries": ["Peru"]})


def test_invalid_income_is_rejected():
    with pytest.raises(ValueError):
        SearchPreferencesAgent().normalize({"monthly_income": "-10", "countries": ["Mexico"]})


def test_wrong_type_is_rejected():
    with pytest.raises(TypeError):
        SearchPreferencesAgent().normalize(["Mexico"])
