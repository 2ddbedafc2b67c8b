from __future__ import annotations

import logging
from typing import Optional

import httpx
from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from comfortdash import dashboard
from comfortdash.clock import Clock, utc_now
from comfortdash.config import Settings, get_settings
from comfortdash.errors import ConfigurationError, UpstreamFailure
from comfortdash.logging_config import setup_logging
from comfortdash.providers import OneCallProvider

APP_NAME = "Comfort Dashboard API"

_settings = get_settings()
setup_logging(_settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title=APP_NAME, version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=_settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---------- Errors ----------
async def _configuration_error(request: Request, exc: ConfigurationError) -> JSONResponse:
    logger.error("Configuration error on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=500, content={"error": exc.public_message})

async def _upstream_failure(request: Request, exc: UpstreamFailure) -> JSONResponse:
    # Full cause goes to the log only; the caller gets the generic message.
    logger.error("Error fetching weather data: %s", exc, exc_info=exc)
    return JSONResponse(status_code=500, content={"error": exc.public_message})

app.add_exception_handler(ConfigurationError, _configuration_error)
app.add_exception_handler(UpstreamFailure, _upstream_failure)

# ---------- Dependencies ----------
def get_clock() -> Clock:
    return utc_now

def get_transport() -> Optional[httpx.AsyncBaseTransport]:
    # None -> httpx default network transport
    return None

# ---------- Endpoints ----------
@app.get("/health")
def health():
    return {"ok": True, "name": APP_NAME, "version": app.version}

@app.api_route(
    "/api/weather",
    methods=["GET", "POST"],
    response_model=dashboard.WeatherResponse,
    responses={500: {"model": dashboard.ErrorResponse}},
)
async def weather(
    settings: Settings = Depends(get_settings),
    clock: Clock = Depends(get_clock),
    transport: Optional[httpx.AsyncBaseTransport] = Depends(get_transport),
):
    if not settings.api_key:
        raise ConfigurationError("OPEN_WEATHER_MAP_API_KEY is not set")

    provider = OneCallProvider(
        api_key=settings.api_key,
        lat=settings.lat,
        lon=settings.lon,
        url=settings.onecall_url,
        timeout=settings.upstream_timeout,
        transport=transport,
    )
    try:
        snapshot = await provider.fetch()
        return dashboard.build_dashboard(
            snapshot,
            now=clock(),
            display_tz=settings.display_tz,
            hours=settings.chart_hours,
        )
    except UpstreamFailure:
        raise
    except Exception as e:
        raise UpstreamFailure(f"Unexpected error building dashboard: {e!r}") from e
