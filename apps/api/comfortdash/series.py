from __future__ import annotations

from typing import Dict, List

from comfortdash.providers import WeatherSnapshot
from comfortdash.scoring import mph_to_bft, overall_score, score_hourly, temp_score, wind_score

HOURS_TO_DISPLAY = 3
MS_PER_HOUR = 3600 * 1000

def local_millis(epoch_s: int, offset_s: int) -> int:
    return (epoch_s + offset_s) * 1000

def build_chart_data(snapshot: WeatherSnapshot, hours: int = HOURS_TO_DISPLAY) -> Dict[str, List[List[int]]]:
    """Chart series for "now" plus the next `hours` forecast hours.

    hourly[0] is the current hour again, so the forecast part starts at index 1.
    Only the current point is floored to the hour; forecast points already
    sit on the hour upstream.
    """
    cur = snapshot.current
    offset = snapshot.timezone_offset

    ts_now = local_millis(cur.dt, offset)
    ts_now -= ts_now % MS_PER_HOUR
    bft = mph_to_bft(cur.wind_speed)

    overall = [[ts_now, overall_score(cur.feels_like, bft)]]
    wind = [[ts_now, wind_score(bft)]]
    temp = [[ts_now, temp_score(cur.feels_like)]]

    ahead = score_hourly(snapshot.df_hourly.iloc[1:hours + 1])
    for row in ahead.itertuples(index=False):
        ts = local_millis(int(row.dt), offset)
        overall.append([ts, int(row.overall_score)])
        wind.append([ts, int(row.wind_score)])
        temp.append([ts, int(row.temp_score)])

    return {"overall": overall, "wind": wind, "temp": temp}
