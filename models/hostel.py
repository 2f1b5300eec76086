# models/hostel.py
from __future__ import annotations
from dataclasses import dataclass

STAY_NIGHTS = 30

@dataclass
class HostelListing:
    id: str
    name: str
    location: str
    country: str
    # nightly rate in USD
    price: float
    rating: float
    image: str
    booking_url: str

    @property
    def stay_total(self) -> float:
        return float(self.price * STAY_NIGHTS)
