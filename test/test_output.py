from agents.budget_calculator_agent import BudgetCalculatorAgent
from agents.final_output_agent import FinalOutputAgent
from models.hostel import HostelListing
from models.search import SearchResult


def test_render_lists_hostels_with_booking_links():
    budget = BudgetCalculatorAgent().run(1000)
    hostel = HostelListing("1", "Casa Hostel", "Mexico City", "Mexico", 18, 8.5, "img", "https://book/1")
    text = FinalOutputAgent().render(SearchResult(budget=budget, countries=["Mexico"], listings=[hostel]))

    assert "**Budget for 30-day stay:** $650.00" in text
    assert "**Max per night:** $21" in text
    assert "1) **Casa Hostel** | Mexico City, Mexico | $18/night" in text
    assert "30-day total: $540" in text
    assert "[Book on HostelWorld](https://book/1)" in text


def test_render_empty_result():
    budget = BudgetCalculatorAgent().run(100)
    text = FinalOutputAgent().render(SearchResult(budget=budget, countries=["Brazil"]))
    assert "No hostels found within your budget" in text
