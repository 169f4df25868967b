from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional


DEFAULT_SOURCE_URL = "https://www.kaptargsm.hu/scale/J0102466.php"
DEFAULT_APP_ID = "beehive-dashboard"

_SERVICE_ACCOUNT_ENV = "FIREBASE_SERVICE_ACCOUNT_KEY"
_APP_ID_ENV = "APP_ID"
_SOURCE_URL_ENV = "SOURCE_URL"
_SOURCE_TIMEZONE_ENV = "SOURCE_TIMEZONE"
_FETCH_TIMEOUT_ENV = "FETCH_TIMEOUT"
_STORE_BACKEND_ENV = "STORE_BACKEND"
_MEMORY_STORE_PATH_ENV = "MEMORY_STORE_PATH"
_LOG_LEVEL_ENV = "LOG_LEVEL"


@dataclass(frozen=True)
class Settings:
    service_account_key: Optional[str]
    app_id: str
    source_url: str
    source_timezone: Optional[str]
    fetch_timeout: float
    store_backend: str
    memory_store_path: Optional[str]
    log_level: str


def _read_str_env(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or default


def _read_optional_env(name: str, default: Optional[str]) -> Optional[str]:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or None


def _read_timeout(default: float) -> float:
    value = os.getenv(_FETCH_TIMEOUT_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = float(candidate)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _read_log_level(default: str) -> str:
    value = os.getenv(_LOG_LEVEL_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    return candidate.upper()


@lru_cache
def get_settings() -> Settings:
    return Settings(
        service_account_key=_read_optional_env(_SERVICE_ACCOUNT_ENV, None),
        app_id=_read_str_env(_APP_ID_ENV, DEFAULT_APP_ID),
        source_url=_read_str_env(_SOURCE_URL_ENV, DEFAULT_SOURCE_URL),
        source_timezone=_read_optional_env(_SOURCE_TIMEZONE_ENV, None),
        fetch_timeout=_read_timeout(30.0),
        store_backend=_read_str_env(_STORE_BACKEND_ENV, "firestore").lower(),
        memory_store_path=_read_optional_env(_MEMORY_STORE_PATH_ENV, None),
        log_level=_read_log_level("INFO"),
    )
