# clients/token_store.py
from __future__ import annotations
import json
import logging
import threading
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional, Union

from models.identity import TokenRecord

logger = logging.getLogger(__name__)


class TokenStore:
    """
    Key/value store for sign-in tokens with expiry.
    Values are returned as stored; callers decide what an expired record means.
    """

    def put(self, token: str, record: TokenRecord) -> None:
        raise NotImplementedError

    def get(self, token: str) -> Optional[TokenRecord]:
        raise NotImplementedError

    def delete(self, token: str) -> None:
        raise NotImplementedError

    def purge_expired(self, now: datetime) -> int:
        raise NotImplementedError


class MemoryTokenStore(TokenStore):
    def __init__(self):
        self._records: Dict[str, TokenRecord] = {}
        self._lock = threading.Lock()

    def put(self, token: str, record: TokenRecord) -> None:
        with self._lock:
            self._records[token] = record

    def get(self, token: str) -> Optional[TokenRecord]:
        with self._lock:
            return self._records.get(token)

    def delete(self, token: str) -> None:
        with self._lock:
            self._records.pop(token, None)

    def purge_expired(self, now: datetime) -> int:
        with self._lock:
            stale = [t for t, r in self._records.items() if r.expired(now)]
            for t in stale:
                del self._records[t]
        return len(stale)

    def __len__(self) -> int:
        return len(self._records)


class JsonFileTokenStore(TokenStore):
    """
    Keeps tokens in a JSON file so a link opened in a fresh browser session
    (a new Streamlit session) can still be verified.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._lock = threading.Lock()

    def _load(self) -> Dict[str, TokenRecord]:
        if not self.path.exists():
            return {}
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        except json.JSONDecodeError:
            logger.warning("Token store %s is not valid JSON; starting empty", self.path)
            return {}
        if not isinstance(raw, dict):
            logger.warning("Token store %s does not hold a JSON object; starting empty", self.path)
            return {}
        records = {}
        for token, item in raw.items():
            try:
                records[token] = TokenRecord(
                    email=item["email"],
                    expires_at=datetime.fromisoformat(item["expires_at"]),
                )
            except (KeyError, TypeError, ValueError):
                logger.warning("Skipping malformed token entry in %s", self.path)
        return records

    def _save(self, records: Dict[str, TokenRecord]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = {
            token: {"email": r.email, "expires_at": r.expires_at.isoformat()}
            for token, r in records.items()
        }
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        tmp.replace(self.path)

    def put(self, token: str, record: TokenRecord) -> None:
        with self._lock:
            records = self._load()
            records[token] = record
            self._save(records)

    def get(self, token: str) -> Optional[TokenRecord]:
        with self._lock:
            return self._load().get(token)

    def delete(self, token: str) -> None:
        with self._lock:
            records = self._load()
            if records.pop(token, None) is not None:
                self._save(records)

    def purge_expired(self, now: datetime) -> int:
        with self._lock:
            records = self._load()
            fresh = {t: r for t, r in records.items() if not r.expired(now)}
            removed = len(records) - len(fresh)
            if removed:
                self._save(fresh)
        return removed
