from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List

import httpx
import pandas as pd
from pydantic import BaseModel, ConfigDict, ValidationError

from comfortdash.errors import UpstreamFailure

logger = logging.getLogger(__name__)

ONECALL_URL = "https://api.openweathermap.org/data/3.0/onecall"
ONECALL_EXCLUDE = "minutely,daily,alerts"
HOURLY_COLUMNS = ["dt", "feels_like", "wind_speed"]

# ---------- Upstream document ----------
class UpstreamHour(BaseModel):
    model_config = ConfigDict(extra="ignore")
    dt: int
    feels_like: float
    wind_speed: float

class OneCallDocument(BaseModel):
    model_config = ConfigDict(extra="ignore")
    current: UpstreamHour
    hourly: List[UpstreamHour]
    timezone_offset: int

@dataclass
class WeatherSnapshot:
    current: UpstreamHour
    df_hourly: pd.DataFrame   # columns: dt, feels_like, wind_speed; upstream (ascending dt) order
    timezone_offset: int      # seconds east of UTC

    @classmethod
    def from_document(cls, doc: Any) -> "WeatherSnapshot":
        parsed = OneCallDocument.model_validate(doc)
        df = pd.DataFrame([h.model_dump() for h in parsed.hourly], columns=HOURLY_COLUMNS)
        return cls(
            current=parsed.current,
            df_hourly=df.reset_index(drop=True),
            timezone_offset=parsed.timezone_offset,
        )

# Provider interface
class WeatherProvider:
    name: str
    async def fetch(self) -> WeatherSnapshot:
        raise NotImplementedError

class OneCallProvider(WeatherProvider):
    """OpenWeatherMap One Call 3.0: current + hourly, imperial units, single GET, no retry."""

    name = "OpenWeatherMap One Call 3.0"

    def __init__(
        self,
        api_key: str,
        lat: float,
        lon: float,
        url: str = ONECALL_URL,
        timeout: float | None = 20.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key
        self.lat = lat
        self.lon = lon
        self.url = url
        self.timeout = timeout
        self.transport = transport

    def params(self) -> Dict[str, str]:
        return {
            "lat": f"{self.lat}",
            "lon": f"{self.lon}",
            "exclude": ONECALL_EXCLUDE,
            "units": "imperial",
            "appid": self.api_key,
        }

    def _scrub(self, text: str) -> str:
        # httpx error text can carry the full request URL, appid included
        return text.replace(self.api_key, "***") if self.api_key else text

    async def fetch(self) -> WeatherSnapshot:
        logger.debug("fetching %s for lat=%s lon=%s", self.name, self.lat, self.lon)
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                r = await client.get(self.url, params=self.params())
                r.raise_for_status()
                doc = r.json()
            except httpx.HTTPStatusError as e:
                # from None: the chained cause would print the URL with the key
                raise UpstreamFailure(
                    f"One Call returned HTTP {e.response.status_code} for GET {self.url}"
                ) from None
            except httpx.HTTPError as e:
                raise UpstreamFailure(
                    f"One Call request to {self.url} failed: {type(e).__name__}: {self._scrub(str(e))}"
                ) from None
            except ValueError as e:
                raise UpstreamFailure(f"One Call returned a non-JSON body: {r.text[:200]}") from e

        try:
            snap = WeatherSnapshot.from_document(doc)
        except ValidationError as e:
            raise UpstreamFailure(f"One Call document malformed: {e}") from e
        logger.debug(
            "%s: %d hourly records, timezone_offset=%ss",
            self.name, snap.df_hourly.shape[0], snap.timezone_offset,
        )
        return snap
