# agents/budget_calculator_agent.py
from __future__ import annotations

import math
from typing import Any

from models.budget import StayBudget
from models.hostel import STAY_NIGHTS
from utils.money import parse_income, safe_div

# Share of monthly income available for a month-long stay; the rest is kept as savings.
STAY_SHARE = 0.65


class BudgetCalculatorAgent:
    """
    Turns a monthly income into the full-stay budget and a per-night ceiling.
    """

    def run(self, income: Any) -> StayBudget:
        value = parse_income(income)
        if value is None:
            raise ValueError(f"Monthly income must be a non-negative number, got {income!r}.")

        total = value * STAY_SHARE
        return StayBudget(
            income=value,
            total=total,
            daily_ceiling=int(math.floor(safe_div(total, STAY_NIGHTS))),
        )
