# models/budget.py
from __future__ import annotations
from dataclasses import dataclass

from models.hostel import STAY_NIGHTS, HostelListing

@dataclass(frozen=True)
class StayBudget:
    income: float
    total: float
    daily_ceiling: int

    def affords(self, listing: HostelListing) -> bool:
        return listing.price * STAY_NIGHTS <= self.total

    def remaining(self, listing: HostelListing) -> float:
        return float(self.total - listing.stay_total)
