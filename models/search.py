# models/search.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import List

from models.budget import StayBudget
from models.hostel import HostelListing

@dataclass
class SearchResult:
    budget: StayBudget
    countries: List[str]
    listings: List[HostelListing] = field(default_factory=list)
