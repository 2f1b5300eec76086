# utils/money.py
from __future__ import annotations
import math
import re
from typing import Any, Optional

_PRICE_RE = re.compile(r"\d+(?:[.,]\d+)*")

def safe_div(a: float, b: float) -> float:
    if b == 0:
        return 0.0
    return a / b

def parse_income(value: Any) -> Optional[float]:
    """
    Parses a user-entered monthly income.
    Returns None for empty, non-numeric, negative, NaN or infinite input.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip().replace(",", "")
        if not value:
            return None
    try:
        income = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(income) or math.isinf(income) or income < 0:
        return None
    return income

def parse_price(value: Any) -> Optional[float]:
    """
    Extracts a nightly price from SerpApi values such as 42, "42" or "$1,042".
    Returns None when no positive figure is present.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        price = float(value)
    else:
        match = _PRICE_RE.search(str(value))
        if not match:
            return None
        try:
            price = float(_normalize_number(match.group(0)))
        except ValueError:
            return None
    if math.isnan(price) or math.isinf(price) or price <= 0:
        return None
    return price

def _normalize_number(text: str) -> str:
    """
    Resolves thousands vs decimal separators: the last of "," and "." wins as the
    decimal mark when both appear; a lone "," is decimal only when followed by
    one or two digits ("42,50"), otherwise a thousands separator ("1,042").
    """
    if "," in text and "." in text:
        if text.rfind(",") > text.rfind("."):
            return text.replace(".", "").replace(",", ".")
        return text.replace(",", "")
    if "," in text:
        head, _, tail = text.rpartition(",")
        if text.count(",") == 1 and len(tail) <= 2:
            return f"{head}.{tail}"
        return text.replace(",", "")
    if text.count(".") > 1:
        return text.replace(".", "")
    return text

def format_usd(amount: float) -> str:
    return f"${amount:,.2f}"
