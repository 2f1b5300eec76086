# utils/date_parser.py
from __future__ import annotations
from datetime import date, datetime
from typing import Any, Optional

import dateparser

# Stay dates are often typed in the traveller's language (English, Spanish, Portuguese).
PREFERRED_LANGS = ["en", "es", "pt"]
_FORMATS = ["%Y-%m-%d", "%Y/%m/%d", "%d.%m.%Y", "%d/%m/%Y"]


def parse_date(value: Any) -> Optional[date]:
    """
    Parses common date inputs. Supports:
    - date / datetime objects
    - YYYY-MM-DD, YYYY/MM/DD, DD.MM.YYYY, DD/MM/YYYY
    - Natural language dates (e.g., "next friday", "5 de marzo") via dateparser
    If parsing fails, returns None.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    v = str(value).strip()
    if not v:
        return None

    for fmt in _FORMATS:
        try:
            return datetime.strptime(v, fmt).date()
        except ValueError:
            pass

    try:
        return datetime.fromisoformat(v).date()
    except ValueError:
        pass

    parsed = dateparser.parse(
        v,
        languages=PREFERRED_LANGS,
        settings={"PREFER_DATES_FROM": "future"},
    )
    if parsed:
        return parsed.date()
    return None
