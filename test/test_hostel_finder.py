import threading
import time
from datetime import date

import pytest
import requests

from agents.budget_calculator_agent import BudgetCalculatorAgent
from agents.hostel_finder_agent import (
    DEFAULT_RATING,
    MAX_PER_COUNTRY,
    MAX_RESULTS,
    PLACEHOLDER_IMAGE,
    HostelFinderAgent,
)
from models.budget import StayBudget


def prop(name, price, rating=None, **extra):
    p = {"name": name, "rate_per_night": {"extracted_lowest": price, "lowest": f"${price}"}}
    if rating is not None:
        p["overall_rating"] = rating
    p.update(extra)
    return p


class FakeSource:
    def __init__(self, properties, failing=(), delays=None):
        self.properties = properties
        self.failing = set(failing)
        self.delays = delays or {}
        self.calls = []
        self._lock = threading.Lock()

    def fetch_properties(self, country, max_price, check_in, check_out):
        with self._lock:
            self.calls.append((country, max_price, check_in, check_out))
        time.sleep(self.delays.get(country, 0))
        if country in self.failing:
            raise requests.ConnectionError(f"boom in {country}")
        return list(self.properties.get(country, []))


@pytest.fixture
def budget_1000():
    return BudgetCalculatorAgent().run(1000)


def test_ceiling_boundary_21_included_22_excluded(budget_1000):
    source = FakeSource({"Mexico": [prop("Cheap", 21, 8.0), prop("Pricey", 22, 9.9)]})
    hostels = HostelFinderAgent(source).run(budget_1000, ["Mexico"])
    assert [h.name for h in hostels] == ["Cheap"]


def test_request_carries_country_and_daily_ceiling(budget_1000):
    source = FakeSource({})
    start = date(2030, 1, 1)
    HostelFinderAgent(source).run(budget_1000, ["Vietnam"], check_in=start, check_out=date(2030, 1, 2))
    assert source.calls == [("Vietnam", 21, start, date(2030, 1, 2))]


def test_global_filter_excludes_listings_over_thirty_night_budget():
    # a looser per-night ceiling lets 21.9 through; 21.9 * 30 = 657 > 650
    budget = StayBudget(income=1000, total=650.0, daily_ceiling=22)
    source = FakeSource({"Mexico": [prop("Fractional", 21.9, 9.0), prop("Ok", 20, 7.0)]})
    hostels = HostelFinderAgent(source).run(budget, ["Mexico"])
    assert [h.name for h in hostels] == ["Ok"]
    assert all(h.price * 30 <= budget.total for h in hostels)


def test_sorted_by_rating_desc_with_stable_ties(budget_1000):
    source = FakeSource({
        "Mexico": [prop("A", 10, 8.0), prop("B", 10, 9.5)],
        "Brazil": [prop("C", 10, 8.0), prop("D", 10, 9.5)],
    })
    hostels = HostelFinderAgent(source).run(budget_1000, ["Mexico", "Brazil"])
    assert [h.name for h in hostels] == ["B", "D", "A", "C"]


def test_merge_order_does_not_depend_on_completion_order(budget_1000):
    properties = {
        "Mexico": [prop("Mx", 10, 8.0)],
        "Colombia": [prop("Co", 10, 8.0)],
        "Brazil": [prop("Br", 10, 8.0)],
    }
    source = FakeSource(properties, delays={"Mexico": 0.05, "Colombia": 0.02})
    hostels = HostelFinderAgent(source).run(budget_1000, ["Mexico", "Colombia", "Brazil"])
    assert [h.name for h in hostels] == ["Mx", "Co", "Br"]


def test_at_most_twenty_per_country_and_fifty_overall():
    budget = BudgetCalculatorAgent().run(100_000)
    countries = ["Mexico", "Colombia", "Brazil", "Vietnam", "Thailand"]
    source = FakeSource({
        c: [prop(f"{c}-{i}", 10 + i, (i % 10) / 1.0 + 0.5) for i in range(30)]
        for c in countries
    })
    hostels = HostelFinderAgent(source).run(budget, countries)

    assert len(hostels) == MAX_RESULTS
    ratings = [h.rating for h in hostels]
    assert ratings == sorted(ratings, reverse=True)
    for c in countries:
        names = [h.name for h in hostels if h.country == c]
        assert len(names) <= MAX_PER_COUNTRY
        assert all(int(n.split("-")[1]) < MAX_PER_COUNTRY for n in names)


def test_records_without_usable_price_are_dropped_before_cap(budget_1000):
    unpriced = [{"name": f"NoPrice{i}"} for i in range(25)]
    bad = [{"name": "Weird", "rate_per_night": "n/a"}, {"name": "Zero", "rate_per_night": {"lowest": "$0"}}]
    source = FakeSource({"Thailand": unpriced + bad + [prop("Priced", 12, 8.1)]})
    hostels = HostelFinderAgent(source).run(budget_1000, ["Thailand"])
    assert [h.name for h in hostels] == ["Priced"]


def test_price_falls_back_to_lowest_string(budget_1000):
    source = FakeSource({"Brazil": [{"name": "Str", "rate_per_night": {"lowest": "$15"}}]})
    hostels = HostelFinderAgent(source).run(budget_1000, ["Brazil"])
    assert hostels[0].price == 15.0


def test_defaults_for_missing_fields(budget_1000):
    source = FakeSource({"Colombia": [{"rate_per_night": {"extracted_lowest": 12}, "overall_rating": 0}]})
    hostel = HostelFinderAgent(source).run(budget_1000, ["Colombia"])[0]
    assert hostel.id == "hostel-0"
    assert hostel.name == "Unknown Hostel"
    assert hostel.location == "Colombia"
    assert hostel.country == "Colombia"
    assert hostel.rating == DEFAULT_RATING
    assert hostel.image == PLACEHOLDER_IMAGE
    assert hostel.booking_url == "https://www.hostelworld.com/search?search=Unknown%20Hostel"


def test_fields_mapped_from_record(budget_1000):
    record = prop(
        "Casa Hostel", 18, 8.5,
        property_token="tok-1",
        location="Mexico City",
        images=[{"thumbnail": "https://img/1.jpg"}],
        link="https://book/1",
    )
    hostel = HostelFinderAgent(FakeSource({"Mexico": [record]})).run(budget_1000, ["Mexico"])[0]
    assert hostel.id == "tok-1"
    assert hostel.location == "Mexico City"
    assert hostel.image == "https://img/1.jpg"
    assert hostel.booking_url == "https://book/1"
    assert hostel.stay_total == 540.0


def test_one_failing_country_does_not_drop_others(budget_1000):
    source = FakeSource(
        {"Mexico": [prop("Mx", 10, 8.0)], "Vietnam": [prop("Vn", 9, 9.0)]},
        failing={"Brazil"},
    )
    hostels = HostelFinderAgent(source).run(budget_1000, ["Mexico", "Brazil", "Vietnam"])
    assert [h.name for h in hostels] == ["Vn", "Mx"]


def test_all_countries_failing_returns_empty(budget_1000):
    source = FakeSource({}, failing={"Mexico", "Brazil"})
    assert HostelFinderAgent(source).run(budget_1000, ["Mexico", "Brazil"]) == []


def test_zero_income_finds_nothing():
    budget = BudgetCalculatorAgent().run(0)
    source = FakeSource({"Mexico": [prop("Any", 1, 9.0)]})
    assert HostelFinderAgent(source).run(budget, ["Mexico"]) == []


def test_empty_selection_raises(budget_1000):
    source = FakeSource({})
    with pytest.raises(ValueError):
        HostelFinderAgent(source).run(budget_1000, [])
    assert source.calls == []


def test_merge_failure_logs_and_returns_empty(budget_1000, monkeypatch, caplog):
    import agents.hostel_finder_agent as finder_module

    def broken_sort(*args, **kwargs):
        raise TypeError("'<' not supported between instances of 'str' and 'float'")

    monkeypatch.setattr(finder_module, "sorted", broken_sort, raising=False)
    source = FakeSource({"Mexico": [prop("Mx", 10, 8.0)], "Vietnam": [prop("Vn", 9, 9.0)]})

    with caplog.at_level("ERROR", logger="agents.hostel_finder_agent"):
        hostels = HostelFinderAgent(source).run(budget_1000, ["Mexico", "Vietnam"])

    assert hostels == []
    assert len(source.calls) == 2
    assert "Failed to merge hostel results" in caplog.text
