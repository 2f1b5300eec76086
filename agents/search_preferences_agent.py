# agents/search_preferences_agent.py
from __future__ import annotations
from datetime import date, timedelta
from typing import Any, Dict

from models.preferences import SearchPreferences
from utils.countries import normalize_countries
from utils.date_parser import parse_date
from utils.money import parse_income

class SearchPreferencesAgent:
    """
    Validates/normalizes search input into SearchPreferences.
    Works with either a raw dict OR an already built SearchPreferences.
    """

    def normalize(self, raw: Any) -> SearchPreferences:
        if isinstance(raw, SearchPreferences):
            prefs = raw
        elif isinstance(raw, dict):
            prefs = self._from_dict(raw)
        else:
            raise TypeError("SearchPreferencesAgent.normalize expects SearchPreferences or dict")

        income = parse_income(prefs.monthly_income)
        if income is None:
            raise ValueError(f"Monthly income must be a non-negative number, got {prefs.monthly_income!r}.")
        prefs.monthly_income = income

        prefs.countries = normalize_countries(prefs.countries)
        if not prefs.countries:
            raise ValueError("Select at least one country to search.")

        today = date.today()
        if prefs.check_in is None or prefs.check_in < today:
            prefs.check_in = today + timedelta(days=1)
        if prefs.check_out is None or prefs.check_out <= prefs.check_in:
            prefs.check_out = prefs.check_in + timedelta(days=1)

        return prefs

    def _from_dict(self, d: Dict[str, Any]) -> SearchPreferences:
        return SearchPreferences(
            monthly_income=d.get("monthly_income"),
            countries=list(d.get("countries") or []),
            check_in=parse_date(d.get("check_in")),
            check_out=parse_date(d.get("check_out")),
        )
