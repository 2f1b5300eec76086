# clients/sample_hostel_client.py
from __future__ import annotations
from datetime import date
from typing import Any, Dict, List, Optional

# Offline listings in SerpApi's `properties` shape, used in demo mode.
SAMPLE_PROPERTIES: Dict[str, List[Dict[str, Any]]] = {
    "Mexico": [
        {
            "property_token": "mx-casa",
            "name": "Casa Hostel",
            "location": "Mexico City",
            "rate_per_night": {"lowest": "$18", "extracted_lowest": 18},
            "overall_rating": 8.5,
            "images": [{"thumbnail": "https://images.unsplash.com/photo-1555854877-bab0e564b8d5?w=300&h=200&fit=crop"}],
            "link": "https://www.hostelworld.com/hostel/123456",
        },
        {
            "property_token": "mx-oaxaca",
            "name": "Oaxaca Rooftop Hostel",
            "location": "Oaxaca",
            "rate_per_night": {"lowest": "$14", "extracted_lowest": 14},
            "overall_rating": 9.0,
        },
    ],
    "Colombia": [
        {
            "property_token": "co-medellin",
            "name": "Poblado Social Hostel",
            "location": "Medellín",
            "rate_per_night": {"lowest": "$16", "extracted_lowest": 16},
            "overall_rating": 8.8,
        },
    ],
    "Brazil": [
        {
            "property_token": "br-copa",
            "name": "Copacabana Backpackers",
            "location": "Rio de Janeiro",
            "rate_per_night": {"lowest": "$20", "extracted_lowest": 20},
            "overall_rating": 8.2,
            "images": [{"thumbnail": "https://images.unsplash.com/photo-1483729558449-99ef09a8c325?w=300&h=200&fit=crop"}],
            "link": "https://www.hostelworld.com/hostel/345678",
        },
    ],
    "Vietnam": [
        {
            "property_token": "vn-dragonfly",
            "name": "Dragonfly Hostel",
            "location": "Ho Chi Minh City",
            "rate_per_night": {"lowest": "$9", "extracted_lowest": 9},
            "overall_rating": 9.1,
            "images": [{"thumbnail": "https://images.unsplash.com/photo-1566073771259-6a8506099945?w=300&h=200&fit=crop"}],
            "link": "https://www.hostelworld.com/hostel/234567",
        },
    ],
    "Thailand": [
        {
            "property_token": "th-lub-d",
            "name": "Old Town Bangkok Hostel",
            "location": "Bangkok",
            "rate_per_night": {"lowest": "$11", "extracted_lowest": 11},
        },
    ],
}


class SampleHostelClient:
    """Serves SAMPLE_PROPERTIES through the same interface as SerpApiHostelClient."""

    def __init__(self, properties: Optional[Dict[str, List[Dict[str, Any]]]] = None):
        self.properties = properties if properties is not None else SAMPLE_PROPERTIES

    def fetch_properties(
        self,
        country: str,
        max_price: int,
        check_in: date,
        check_out: date,
    ) -> List[Dict[str, Any]]:
        return [dict(p) for p in self.properties.get(country, [])]
