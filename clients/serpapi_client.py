# clients/serpapi_client.py
from __future__ import annotations
import logging
from typing import Any, Dict, Optional

import requests

import config

logger = logging.getLogger(__name__)

class SerpApiClient:
    BASE_URL = "https://serpapi.com/search"

    def __init__(self, api_key: Optional[str] = None, timeout: Optional[int] = None,
                 session: Optional[requests.Session] = None):
        self.api_key = api_key if api_key is not None else config.SERPAPI_KEY
        self.timeout = timeout or config.SERPAPI_TIMEOUT
        self.session = session or requests.Session()

    def enabled(self) -> bool:
        return bool(self.api_key)

    def get(self, engine: str, params: Dict[str, Any]) -> Dict[str, Any]:
        if not self.api_key:
            raise ValueError("SERPAPI_KEY is missing.")
        full = dict(params)
        full["engine"] = engine
        full["api_key"] = self.api_key
        logger.debug("SerpApi %s request q=%s", engine, full.get("q"))
        res = self.session.get(self.BASE_URL, params=full, timeout=self.timeout)
        res.raise_for_status()
        data = res.json()
        if isinstance(data, dict) and data.get("error"):
            # SerpApi reports quota/parameter problems in the body with a 200
            raise requests.HTTPError(f"SerpApi error: {data['error']}", response=res)
        return data
