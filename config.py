"""Configuration constants and environment variable reads."""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

PROJECT_ROOT = Path(__file__).resolve().parent

load_dotenv(PROJECT_ROOT / ".env")

_BOOL_TRUE = {"1", "true", "yes", "y", "on"}
_BOOL_FALSE = {"0", "false", "no", "off"}


def _env_flag(name: str, default: Optional[bool] = None) -> Optional[bool]:
    raw = os.getenv(name)
    if raw is None:
        return default
    val = raw.strip().lower()
    if val in _BOOL_TRUE:
        return True
    if val in _BOOL_FALSE:
        return False
    return default


# ---------------------------------------------------------------------------
# Search provider
# ---------------------------------------------------------------------------
SERPAPI_KEY = os.getenv("SERPAPI_KEY", "").strip()
SERPAPI_TIMEOUT = int(os.getenv("SERPAPI_TIMEOUT", "15"))
# Sample listings instead of live SerpApi calls; implied when no key is set.
HOSTELLIST_DEMO = _env_flag("HOSTELLIST_DEMO", not SERPAPI_KEY) or False

# ---------------------------------------------------------------------------
# Sign-in
# ---------------------------------------------------------------------------
HOSTELLIST_IDENTITY_PROVIDER = os.getenv("HOSTELLIST_IDENTITY_PROVIDER", "google").strip().lower()
MAGIC_LINK_BASE_URL = os.getenv("MAGIC_LINK_BASE_URL", "http://localhost:8501").strip()
MAGIC_LINK_TTL_MINUTES = int(os.getenv("MAGIC_LINK_TTL_MINUTES", "15"))
_store_path = os.getenv("MAGIC_LINK_STORE_PATH", "").strip()
MAGIC_LINK_STORE_PATH = Path(_store_path).expanduser() if _store_path else None

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").strip().upper()
