# agents/hostel_agent.py
from __future__ import annotations

from typing import Any, Optional

from agents.budget_calculator_agent import BudgetCalculatorAgent
from agents.hostel_finder_agent import HostelFinderAgent
from agents.search_preferences_agent import SearchPreferencesAgent
from models.search import SearchResult


class HostelAgent:
    """
    Orchestrator: preferences -> budget -> per-country hostel search.
    """

    def __init__(self, finder: Optional[HostelFinderAgent] = None):
        self.pref_agent = SearchPreferencesAgent()
        self.budget_agent = BudgetCalculatorAgent()
        self.finder_agent = finder or HostelFinderAgent()

    def run(self, prefs: Any) -> SearchResult:
        prefs = self.pref_agent.normalize(prefs)
        budget = self.budget_agent.run(prefs.monthly_income)

        listings = self.finder_agent.run(
            budget,
            prefs.countries,
            check_in=prefs.check_in,
            check_out=prefs.check_out,
        )
        return SearchResult(budget=budget, countries=prefs.countries, listings=listings)
