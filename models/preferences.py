# models/preferences.py
from __future__ import annotations
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional

@dataclass
class SearchPreferences:
    monthly_income: float
    countries: List[str] = field(default_factory=list)
    check_in: Optional[date] = None
    check_out: Optional[date] = None
