# utils/countries.py
from __future__ import annotations
from typing import Iterable, List

COUNTRIES = ["Mexico", "Colombia", "Brazil", "Vietnam", "Thailand"]

_LOOKUP = {c.lower(): c for c in COUNTRIES}


def to_country(value: str) -> str:
    """Returns the catalog spelling for a country name (case-insensitive)."""
    key = (value or "").strip().lower()
    if key not in _LOOKUP:
        raise ValueError(f"Unsupported country: {value!r}. Choose from {', '.join(COUNTRIES)}.")
    return _LOOKUP[key]


def normalize_countries(values: Iterable[str]) -> List[str]:
    # keeps first-seen order, drops duplicates
    seen = set()
    out: List[str] = []
    for value in values or []:
        country = to_country(value)
        if country not in seen:
            seen.add(country)
            out.append(country)
    return out
