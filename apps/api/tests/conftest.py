from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

import httpx
import pytest
from fastapi.testclient import TestClient

from comfortdash.config import Settings, get_settings
from comfortdash.main import app, get_clock, get_transport
from comfortdash.providers import WeatherSnapshot

# 2025-06-01 00:00 local in Austin (CDT, UTC-5)
CDT_OFFSET = -5 * 3600
LOCAL_MIDNIGHT_UTC = int(datetime(2025, 6, 1, 5, 0, tzinfo=timezone.utc).timestamp())
FIXED_NOW = datetime(2025, 6, 1, 17, 5, 0, tzinfo=timezone.utc)  # 12:05pm in Chicago

CALM_MPH = 2.0    # class 1
WINDY_MPH = 20.0  # class 5


def make_doc(
    winds: List[float],
    feels: Optional[List[float]] = None,
    base: int = LOCAL_MIDNIGHT_UTC,
    offset: int = CDT_OFFSET,
    current_dt: Optional[int] = None,
    current_feels: Optional[float] = None,
    current_wind: Optional[float] = None,
) -> Dict[str, Any]:
    """One Call style document with one hourly record per entry in winds."""
    feels = feels if feels is not None else [78.0] * len(winds)
    hourly = [
        {"dt": base + i * 3600, "feels_like": f, "wind_speed": w, "temp": f, "humidity": 40}
        for i, (w, f) in enumerate(zip(winds, feels))
    ]
    return {
        "lat": 30.5773,
        "lon": -97.8803,
        "timezone": "America/Chicago",
        "timezone_offset": offset,
        "current": {
            "dt": current_dt if current_dt is not None else base,
            "feels_like": current_feels if current_feels is not None else feels[0] if feels else 78.0,
            "wind_speed": current_wind if current_wind is not None else winds[0] if winds else 0.0,
            "humidity": 40,
        },
        "hourly": hourly,
    }


def calm_between(start: int, stop: int, n: int = 48) -> List[float]:
    """Windy everywhere except hours [start, stop)."""
    return [CALM_MPH if start <= i < stop else WINDY_MPH for i in range(n)]


@pytest.fixture
def snapshot_of() -> Callable[..., WeatherSnapshot]:
    def _make(*args, **kwargs) -> WeatherSnapshot:
        return WeatherSnapshot.from_document(make_doc(*args, **kwargs))
    return _make


class FakeUpstream:
    """Stands in for the One Call endpoint and counts requests."""

    def __init__(self):
        self.calls = 0
        self.requests: List[httpx.Request] = []
        self.respond: Callable[[httpx.Request], httpx.Response] = (
            lambda request: httpx.Response(200, json=make_doc(calm_between(10, 18)))
        )

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.calls += 1
        self.requests.append(request)
        return self.respond(request)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def settings() -> Settings:
    return Settings(api_key="test-key")


@pytest.fixture
def client(upstream: FakeUpstream, settings: Settings):
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_clock] = lambda: (lambda: FIXED_NOW)
    app.dependency_overrides[get_transport] = upstream.transport
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
