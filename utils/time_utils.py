"""
Time utility functions for timestamp parsing and window arithmetic.

Time Complexity: O(n) per parsed column
Memory: O(n) for the parsed copy
"""

from typing import List

import numpy as np
import pandas as pd


def to_utc_timestamps(values) -> pd.Series:
    """
    Parse ISO-8601 timestamps into a tz-aware UTC Series.

    Naive values are taken as UTC. Unparseable values become NaT.
    """
    series = values if isinstance(values, pd.Series) else pd.Series(values)
    if pd.api.types.is_datetime64_any_dtype(series):
        if series.dt.tz is None:
            return series.dt.tz_localize("UTC")
        return series.dt.tz_convert("UTC")
    return pd.to_datetime(series, errors="coerce", utc=True, format="ISO8601")


def window_delta(hours: int) -> np.timedelta64:
    """Window length as a numpy timedelta for searchsorted arithmetic."""
    return np.timedelta64(int(hours) * 3600, "s")


def get_time_span_hours(timestamps: List) -> float:
    """Calculate time span in hours between min and max timestamps."""
    if not len(timestamps):
        return 0.0
    ts = to_utc_timestamps(timestamps)
    span = ts.max() - ts.min()
    return span.total_seconds() / 3600
