# clients/identity_providers.py
from __future__ import annotations

import base64
import binascii
import json
import logging
import re
import secrets
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Callable, Dict, Mapping, Optional, Sequence
from urllib.parse import urlencode

import config
from clients.token_store import MemoryTokenStore, TokenStore
from models.identity import Identity, MagicLink, TokenRecord

logger = logging.getLogger(__name__)

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class IdentityProvider:
    """A sign-in strategy that ends in an Identity (id, name, email)."""

    key: str = ""
    label: str = ""
    kind: str = ""


class OAuthIdentityProvider(IdentityProvider):
    """
    Maps claims handed over by an OAuth/OIDC provider onto an Identity.
    The sign-in ceremony and token verification belong to the provider
    (Streamlit's st.login); only the resulting claims are consumed here.
    """

    kind = "oauth"

    def __init__(self, key: str, label: str, claim_map: Mapping[str, Sequence[str]]):
        self.key = key
        self.label = label
        self.claim_map = dict(claim_map)

    def _claim(self, claims: Mapping[str, Any], field: str) -> Optional[str]:
        for name in self.claim_map.get(field, ()):
            value = claims.get(name)
            if value not in (None, ""):
                return str(value)
        return None

    def identity_from_claims(self, claims: Mapping[str, Any]) -> Identity:
        user_id = self._claim(claims, "id")
        if not user_id:
            raise ValueError(f"{self.label} sign-in returned no user id.")
        email = self._claim(claims, "email") or ""
        name = self._claim(claims, "name") or (email.split("@")[0] if email else user_id)
        return Identity(
            id=user_id,
            name=name,
            email=email,
            picture=self._claim(claims, "picture"),
        )

    def identity_from_id_token(self, id_token: str) -> Identity:
        """Reads the payload of an ID token. The signature is NOT checked here."""
        parts = (id_token or "").split(".")
        if len(parts) != 3:
            raise ValueError("Malformed ID token.")
        payload = parts[1] + "=" * (-len(parts[1]) % 4)
        try:
            claims = json.loads(base64.urlsafe_b64decode(payload))
        except (binascii.Error, ValueError) as exc:
            raise ValueError("Malformed ID token.") from exc
        if not isinstance(claims, dict):
            raise ValueError("Malformed ID token.")
        return self.identity_from_claims(claims)


GOOGLE = OAuthIdentityProvider(
    key="google",
    label="Google",
    claim_map={
        "id": ["sub"],
        "name": ["name", "given_name"],
        "email": ["email"],
        "picture": ["picture"],
    },
)

# Microsoft identity platform ID token: `email` is only present when the
# optional claim is enabled, `preferred_username` is the sign-in address.
MICROSOFT = OAuthIdentityProvider(
    key="microsoft",
    label="Microsoft",
    claim_map={
        "id": ["sub", "oid"],
        "name": ["name", "preferred_username"],
        "email": ["email", "preferred_username"],
        "picture": ["picture"],
    },
)


class MagicLinkOutcome(str, Enum):
    NOT_FOUND = "not_found"
    EXPIRED = "expired"
    EMAIL_MISMATCH = "email_mismatch"


class MagicLinkError(ValueError):
    MESSAGES = {
        MagicLinkOutcome.NOT_FOUND: "This sign-in link is invalid or was already used.",
        MagicLinkOutcome.EXPIRED: "This sign-in link has expired. Request a new one.",
        MagicLinkOutcome.EMAIL_MISMATCH: "This sign-in link does not match the email address.",
    }

    def __init__(self, outcome: MagicLinkOutcome):
        super().__init__(self.MESSAGES[outcome])
        self.outcome = outcome


class MagicLinkIdentityProvider(IdentityProvider):
    """
    Email sign-in link: issue() stores {email, expiry} under a random token,
    verify() checks the token exists, is unexpired and belongs to the email.
    Tokens are single use.
    """

    key = "magic_link"
    label = "Email link"
    kind = "magic_link"

    def __init__(
        self,
        store: Optional[TokenStore] = None,
        base_url: Optional[str] = None,
        ttl: Optional[timedelta] = None,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.store = store if store is not None else MemoryTokenStore()
        self.base_url = base_url or config.MAGIC_LINK_BASE_URL
        self.ttl = ttl if ttl is not None else timedelta(minutes=config.MAGIC_LINK_TTL_MINUTES)
        self.clock = clock

    @staticmethod
    def normalize_email(email: str) -> str:
        value = (email or "").strip().lower()
        if not _EMAIL_RE.match(value):
            raise ValueError(f"Invalid email address: {email!r}")
        return value

    def issue(self, email: str) -> MagicLink:
        address = self.normalize_email(email)
        now = self.clock()
        self.store.purge_expired(now)

        token = secrets.token_urlsafe(24)
        expires_at = now + self.ttl
        self.store.put(token, TokenRecord(email=address, expires_at=expires_at))

        query = urlencode({"token": token, "email": address})
        separator = "&" if "?" in self.base_url else "?"
        logger.info("Issued sign-in link for %s (expires %s)", address, expires_at.isoformat())
        return MagicLink(
            token=token,
            email=address,
            url=f"{self.base_url}{separator}{query}",
            expires_at=expires_at,
        )

    def verify(self, token: str, email: str) -> Identity:
        record = self.store.get(token) if token else None
        if record is None:
            logger.warning("Sign-in link rejected: unknown token")
            raise MagicLinkError(MagicLinkOutcome.NOT_FOUND)

        if record.expired(self.clock()):
            self.store.delete(token)
            logger.warning("Sign-in link rejected: expired for %s", record.email)
            raise MagicLinkError(MagicLinkOutcome.EXPIRED)

        if record.email != (email or "").strip().lower():
            logger.warning("Sign-in link rejected: email mismatch")
            raise MagicLinkError(MagicLinkOutcome.EMAIL_MISMATCH)

        self.store.delete(token)
        logger.info("Sign-in link verified for %s", record.email)
        return Identity(id=record.email, name=record.email.split("@")[0], email=record.email)


def get_identity_provider(name: Optional[str] = None, store: Optional[TokenStore] = None) -> IdentityProvider:
    """Selects the configured sign-in strategy."""
    key = (name or config.HOSTELLIST_IDENTITY_PROVIDER or "").strip().lower().replace("-", "_")
    providers: Dict[str, Callable[[], IdentityProvider]] = {
        GOOGLE.key: lambda: GOOGLE,
        MICROSOFT.key: lambda: MICROSOFT,
        MagicLinkIdentityProvider.key: lambda: MagicLinkIdentityProvider(store=store),
    }
    if key not in providers:
        raise ValueError(f"Unknown identity provider {key!r}. Choose from {', '.join(providers)}.")
    return providers[key]()
