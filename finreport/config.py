from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv


#
# Shared theme tokens
# - Centralized here so components/styles.py and the plotly theme stay in sync.
#
THEME = {
    # Backgrounds
    "bg_primary": "#F4F3EE",     # page background
    "bg_secondary": "#FFFFFF",   # sidebar / top surfaces
    "bg_card": "#FFFFFF",       # card surface
    # Accents
    "accent_primary": "#1677FF",
    "accent_secondary": "#4096FF",  # hover
    "navy_900": "#0B1220",
    "navy_800": "#111C33",
    # Text + borders
    "text_primary": "#111827",
    "text_secondary": "rgba(17, 24, 39, 0.72)",
    "border_color": "#E6E4E0",
    "grid": "rgba(17, 24, 39, 0.10)",
    "shadow": "0 1px 3px rgba(16,24,40,0.08)",
    "radius_px": 10,
    # Status colors
    "success": "#067647",
    "warning": "#F59E0B",
    "danger": "#B42318",
}


@dataclass(frozen=True)
class AppConfig:
    # Remote API
    api_url: str
    api_timeout_ms: int
    health_timeout_ms: int

    # Organizations cache TTL
    cache_duration_ms: int

    # Static credentials (no real auth; unset means nobody can log in with that role)
    admin_login: Optional[str]
    admin_password: Optional[str]
    user_login: Optional[str]
    user_password: Optional[str]

    # Mock reports are random unless a seed is given
    mock_seed: Optional[int]

    log_level: str = "INFO"

    @property
    def api_timeout_s(self) -> float:
        # requests takes seconds
        return self.api_timeout_ms / 1000.0


def _getenv(name: str, default: Optional[str] = None) -> Optional[str]:
    v = os.getenv(name, default)
    if v is None:
        return None
    v = v.strip()
    return v if v else None


def _getenv_int(name: str, default: Optional[int]) -> Optional[int]:
    v = _getenv(name)
    if v is None:
        return default
    try:
        return int(v)
    except ValueError:
        return default


def get_config() -> AppConfig:
    """
    Centralized config: this is the ONLY place env vars are read.
    - Loads `.env` if present (local dev)
    - Unparseable numbers fall back to their defaults
    """
    load_dotenv(override=False)

    return AppConfig(
        api_url=(_getenv("API_URL", "http://localhost:8080") or "").rstrip("/"),
        api_timeout_ms=_getenv_int("API_TIMEOUT", 5000),
        health_timeout_ms=_getenv_int("HEALTH_TIMEOUT", 2000),
        cache_duration_ms=_getenv_int("CACHE_DURATION", 30000),
        admin_login=_getenv("ADMIN_LOGIN"),
        admin_password=_getenv("ADMIN_PASSWORD"),
        user_login=_getenv("USER_LOGIN"),
        user_password=_getenv("USER_PASSWORD"),
        mock_seed=_getenv_int("MOCK_SEED", None),
        log_level=(_getenv("LOG_LEVEL", "INFO") or "INFO").upper(),
    )
