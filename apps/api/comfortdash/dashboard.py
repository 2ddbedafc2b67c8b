from __future__ import annotations

import math
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from comfortdash.calm import find_calm_period
from comfortdash.clock import DISPLAY_TZ, format_clock, format_in_zone, local_wallclock
from comfortdash.providers import WeatherSnapshot
from comfortdash.scoring import mph_to_bft, overall_score, temp_score, wind_score
from comfortdash.series import HOURS_TO_DISPLAY, build_chart_data

NO_CALM_PERIOD = "--"

# ---------- Models ----------
class CurrentConditions(BaseModel):
    model_config = ConfigDict(extra="forbid")
    feels_like: int
    wind_speed_mph: float
    wind_speed_bft: int
    overall_score: int
    wind_score: int
    temp_score: int
    updated_at: str

class ChartData(BaseModel):
    model_config = ConfigDict(extra="forbid")
    overall: List[List[int]]
    wind: List[List[int]]
    temp: List[List[int]]

class WeatherResponse(BaseModel):
    model_config = ConfigDict(extra="forbid")
    current: CurrentConditions
    chart_data: ChartData
    calm_period: str

class ErrorResponse(BaseModel):
    error: str

# ---------- Assembly ----------
def _half_up(x: float) -> int:
    # halves round up: 72.5 -> 73, -0.5 -> 0
    return int(math.floor(x + 0.5))

def calm_period_text(calm_start: Optional[int], offset_s: int) -> str:
    if calm_start is None:
        return NO_CALM_PERIOD
    return format_clock(local_wallclock(calm_start, offset_s))

def build_dashboard(
    snapshot: WeatherSnapshot,
    now: datetime,
    display_tz: str = DISPLAY_TZ,
    hours: int = HOURS_TO_DISPLAY,
) -> WeatherResponse:
    cur = snapshot.current
    bft = mph_to_bft(cur.wind_speed)

    current = CurrentConditions(
        feels_like=_half_up(cur.feels_like),
        wind_speed_mph=cur.wind_speed,
        wind_speed_bft=bft,
        overall_score=overall_score(cur.feels_like, bft),
        wind_score=wind_score(bft),
        temp_score=temp_score(cur.feels_like),
        updated_at=format_in_zone(now, display_tz),
    )
    calm_start = find_calm_period(snapshot)

    return WeatherResponse(
        current=current,
        chart_data=ChartData(**build_chart_data(snapshot, hours=hours)),
        calm_period=calm_period_text(calm_start, snapshot.timezone_offset),
    )
