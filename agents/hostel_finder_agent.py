import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import date, timedelta
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import config
from clients.hostel_search_client import SerpApiHostelClient
from clients.sample_hostel_client import SampleHostelClient
from models.budget import StayBudget
from models.hostel import STAY_NIGHTS, HostelListing
from utils.money import parse_price

logger = logging.getLogger(__name__)

MAX_PER_COUNTRY = 20
MAX_RESULTS = 50
DEFAULT_RATING = 8.0
PLACEHOLDER_IMAGE = "https://images.unsplash.com/photo-1555854877-bab0e564b8d5?w=300&h=200&fit=crop"
HOSTELWORLD_SEARCH_URL = "https://www.hostelworld.com/search?search={query}"


class HostelFinderAgent:
    """
    Searches hostels per country and returns the ones a stay budget can cover.
    One request per country (run concurrently), merged, filtered on the 30-night
    total, ranked by rating and capped at MAX_RESULTS.
    """
    def __init__(self, source=None):
        if source is None:
            source = SampleHostelClient() if config.HOSTELLIST_DEMO else SerpApiHostelClient()
        self.source = source

    def run(
        self,
        budget: StayBudget,
        countries: List[str],
        check_in: Optional[date] = None,
        check_out: Optional[date] = None,
    ) -> List[HostelListing]:
        if not countries:
            raise ValueError("At least one country is required for a hostel search")

        check_in = check_in or (date.today() + timedelta(days=1))
        check_out = check_out or (check_in + timedelta(days=1))

        with ThreadPoolExecutor(max_workers=len(countries)) as pool:
            # map() yields in submission order, so the merge is deterministic
            per_country = list(pool.map(
                lambda country: self._search_country(country, budget.daily_ceiling, check_in, check_out),
                countries,
            ))

        try:
            merged = [h for hostels in per_country for h in hostels]
            affordable = [h for h in merged if h.price * STAY_NIGHTS <= budget.total]
            # sorted() is stable: equal ratings keep merge order
            ranked = sorted(affordable, key=lambda h: h.rating, reverse=True)
        except Exception:
            logger.exception("Failed to merge hostel results")
            return []

        logger.info("🏨 %d hostels fit a %.2f budget across %s", min(len(ranked), MAX_RESULTS),
                    budget.total, ", ".join(countries))
        return ranked[:MAX_RESULTS]

    def _search_country(self, country: str, max_price: int, check_in: date, check_out: date) -> List[HostelListing]:
        logger.info("🏨 Searching hostels in %s under $%s/night", country, max_price)
        try:
            properties = self.source.fetch_properties(
                country=country,
                max_price=max_price,
                check_in=check_in,
                check_out=check_out,
            )
            hostels = self._to_listings(properties, country, max_price)
        except Exception as e:
            logger.warning("❌ Hostel search failed for %s: %s", country, e)
            return []
        logger.info("✅ Found %d hostels in %s", len(hostels), country)
        return hostels

    def _to_listings(self, properties: List[Dict[str, Any]], country: str, max_price: float) -> List[HostelListing]:
        priced = []
        for p in properties:
            price = self._nightly_price(p)
            if price is None or price > max_price:
                continue
            priced.append((p, price))

        hostels = []
        for index, (p, price) in enumerate(priced[:MAX_PER_COUNTRY]):
            name = p.get("name") or "Unknown Hostel"
            hostels.append(HostelListing(
                id=str(p.get("property_token") or f"hostel-{index}"),
                name=name,
                location=p.get("location") or country,
                country=country,
                price=price,
                rating=float(p.get("overall_rating") or DEFAULT_RATING),
                image=self._thumbnail(p) or PLACEHOLDER_IMAGE,
                booking_url=p.get("link") or HOSTELWORLD_SEARCH_URL.format(query=quote(name)),
            ))
        return hostels

    def _nightly_price(self, p: Dict[str, Any]) -> Optional[float]:
        rate = p.get("rate_per_night") or {}
        if not isinstance(rate, dict):
            return None
        price = parse_price(rate.get("extracted_lowest"))
        if price is None:
            price = parse_price(rate.get("lowest"))
        return price

    def _thumbnail(self, p: Dict[str, Any]) -> Optional[str]:
        images = p.get("images") or []
        if images and isinstance(images[0], dict):
            return images[0].get("thumbnail") or images[0].get("original_image")
        return None
