from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable

import pytz

logger = logging.getLogger(__name__)

DISPLAY_TZ = "America/Chicago"

Clock = Callable[[], datetime]

def utc_now() -> datetime:
    return datetime.now(timezone.utc)

def local_wallclock(epoch_s: int, offset_s: int) -> datetime:
    """Shift a UTC epoch by a fixed offset and read it back as if it were UTC.

    The fields of the result are the location's local wall-clock time. No tz
    database is involved, so DST is whatever the upstream offset says it is.
    """
    return datetime.fromtimestamp(epoch_s + offset_s, tz=timezone.utc)

def format_clock(t: datetime) -> str:
    """12-hour H:MMam/pm, e.g. 9:05am, 12:00pm."""
    ampm = "pm" if t.hour >= 12 else "am"
    hour = t.hour % 12 or 12
    return f"{hour}:{t.minute:02d}{ampm}"

def format_in_zone(t: datetime, tz_name: str) -> str:
    try:
        tzinfo = pytz.timezone(tz_name)
    except pytz.UnknownTimeZoneError:
        logger.warning("Unknown display timezone %r, formatting in UTC", tz_name)
        tzinfo = pytz.UTC
    if t.tzinfo is None:
        t = pytz.UTC.localize(t)
    return format_clock(t.astimezone(tzinfo))
