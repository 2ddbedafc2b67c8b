from __future__ import annotations

import logging
from typing import Optional

from comfortdash.clock import local_wallclock
from comfortdash.providers import WeatherSnapshot
from comfortdash.scoring import score_hourly

logger = logging.getLogger(__name__)

SEARCH_HORIZON_HOURS = 36
CALM_RUN_HOURS = 8
CALM_MAX_BFT = 3          # exclusive
START_HOUR_MIN = 8        # 8am, inclusive
START_HOUR_MAX = 21       # 9pm, exclusive

def find_calm_period(snapshot: WeatherSnapshot) -> Optional[int]:
    """Epoch second of the first hour of the next calm stretch, or None.

    A calm stretch is CALM_RUN_HOURS consecutive forecast hours below
    CALM_MAX_BFT whose first hour starts between 8am and 9pm local time,
    looking at most SEARCH_HORIZON_HOURS ahead.

    The start hour is only checked once the run reaches full length. A run
    that fails the check is dropped whole and counting starts over at the
    next hour; the later hours of that run are not retried as start hours.
    """
    df = snapshot.df_hourly
    limit = min(SEARCH_HORIZON_HOURS, int(df.shape[0]))
    scored = score_hourly(df.iloc[:limit])

    candidate: Optional[int] = None
    count = 0
    for row in scored.itertuples(index=False):
        if row.bft >= CALM_MAX_BFT:
            count = 0
            candidate = None
            continue
        if count == 0:
            candidate = int(row.dt)
        count += 1
        if count == CALM_RUN_HOURS:
            start_hour = local_wallclock(candidate, snapshot.timezone_offset).hour
            if START_HOUR_MIN <= start_hour < START_HOUR_MAX:
                return candidate
            logger.debug("calm run from dt=%s starts at %02d:00 local, outside window", candidate, start_hour)
            count = 0
            candidate = None
    return None
