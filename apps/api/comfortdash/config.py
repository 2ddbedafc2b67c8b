from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import List, Optional

from comfortdash.clock import DISPLAY_TZ
from comfortdash.providers import ONECALL_URL

DEFAULT_LAT = 30.5773
DEFAULT_LON = -97.8803

def _float_env(name: str, default: float) -> float:
    raw = os.environ.get(name)
    return float(raw) if raw not in (None, "") else default

@dataclass(frozen=True)
class Settings:
    api_key: Optional[str] = None
    lat: float = DEFAULT_LAT
    lon: float = DEFAULT_LON
    onecall_url: str = ONECALL_URL
    # seconds; None disables the client timeout
    upstream_timeout: Optional[float] = 20.0
    display_tz: str = DISPLAY_TZ
    chart_hours: int = 3
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        timeout = _float_env("COMFORTDASH_UPSTREAM_TIMEOUT_SECONDS", 20.0)
        cors = os.environ.get("COMFORTDASH_CORS_ORIGINS")
        return cls(
            api_key=os.environ.get("OPEN_WEATHER_MAP_API_KEY") or None,
            lat=_float_env("COMFORTDASH_LAT", DEFAULT_LAT),
            lon=_float_env("COMFORTDASH_LON", DEFAULT_LON),
            onecall_url=os.environ.get("COMFORTDASH_ONECALL_URL", ONECALL_URL),
            upstream_timeout=timeout if timeout > 0 else None,
            display_tz=os.environ.get("COMFORTDASH_DISPLAY_TZ", DISPLAY_TZ),
            chart_hours=int(os.environ.get("COMFORTDASH_CHART_HOURS", "3")),
            cors_origins=[o.strip() for o in cors.split(",")] if cors else ["*"],
            log_level=os.environ.get("COMFORTDASH_LOG_LEVEL", "INFO"),
        )

@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()
