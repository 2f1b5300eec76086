# clients/hostel_search_client.py
from __future__ import annotations
from datetime import date
from typing import Any, Dict, List, Optional

from clients.serpapi_client import SerpApiClient


class SerpApiHostelClient:
    """
    Reads hostel properties for one country from SerpApi's Google Hotels engine.
    Returns the raw `properties` records; mapping and filtering happen in the finder.
    """

    engine = "google_hotels"

    def __init__(self, serpapi: Optional[SerpApiClient] = None):
        self.serpapi = serpapi or SerpApiClient()

    def fetch_properties(
        self,
        country: str,
        max_price: int,
        check_in: date,
        check_out: date,
    ) -> List[Dict[str, Any]]:
        data = self.serpapi.get(
            engine=self.engine,
            params={
                "q": f"hostels in {country}",
                "check_in_date": check_in.strftime("%Y-%m-%d"),
                "check_out_date": check_out.strftime("%Y-%m-%d"),
                "currency": "USD",
                "hl": "en",
                # SerpApi's own price filter (per night)
                "max_price": int(max_price),
            },
        )
        return list(data.get("properties") or [])
