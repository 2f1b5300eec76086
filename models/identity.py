# models/identity.py
from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

@dataclass(frozen=True)
class Identity:
    id: str
    name: str
    email: str
    picture: Optional[str] = None

@dataclass(frozen=True)
class TokenRecord:
    email: str
    # aware UTC timestamp
    expires_at: datetime

    def expired(self, now: datetime) -> bool:
        return now > self.expires_at

@dataclass(frozen=True)
class MagicLink:
    token: str
    email: str
    url: str
    expires_at: datetime
