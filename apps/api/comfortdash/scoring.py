from __future__ import annotations

import math
from typing import List, Tuple

import numpy as np
import pandas as pd

# (upper bound mph exclusive, wind-force class)
BFT_THRESHOLDS: List[Tuple[float, int]] = [
    (1, 0),
    (4, 1),
    (8, 2),
    (13, 3),
    (18, 4),
    (24, 5),
    (31, 6),
    (38, 7),
    (46, 8),
]

def mph_to_bft(mph: float) -> int:
    """Map a wind speed in mph to a Beaufort-like wind-force class.

    Speeds of 46 mph and above fall back to round(mph / 5) with no upper cap,
    so gale-force input yields classes above 8.
    """
    for upper, bft in BFT_THRESHOLDS:
        if mph < upper:
            return bft
    # half-up rounding, not Python's banker's rounding
    return int(math.floor(mph / 5 + 0.5))

def temp_score(temp: float) -> int:
    if 75 <= temp <= 85:
        return 5
    if 70 <= temp < 75 or 85 < temp <= 90:
        return 4
    if 65 <= temp < 70 or 90 < temp <= 95:
        return 3
    if 60 <= temp < 65 or 95 < temp <= 100:
        return 2
    return 1

def wind_score(bft: int) -> int:
    # Steps 5 -> 3 between class 2 and 3; a wind score of 4 is unreachable.
    if bft < 3:
        return 5
    if bft == 3:
        return 3
    if bft == 4:
        return 2
    return 1

def overall_score(temp: float, bft: int) -> int:
    return min(temp_score(temp), wind_score(bft))

def score_hourly(df: pd.DataFrame) -> pd.DataFrame:
    """Add bft / temp_score / wind_score / overall_score columns to an hourly frame.

    Expects columns feels_like (F) and wind_speed (mph). Returns a copy.
    """
    out = df.copy()
    if out.empty:
        for col in ["bft", "temp_score", "wind_score", "overall_score"]:
            out[col] = pd.Series(dtype=int)
        return out
    out["bft"] = out["wind_speed"].map(mph_to_bft).astype(int)
    out["temp_score"] = out["feels_like"].map(temp_score).astype(int)
    out["wind_score"] = out["bft"].map(wind_score).astype(int)
    out["overall_score"] = np.minimum(out["temp_score"], out["wind_score"]).astype(int)
    return out
