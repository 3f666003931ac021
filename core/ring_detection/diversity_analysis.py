"""
Counterparty Diversity Analysis — burst search shared by fan-in and fan-out.

For one hub account, scans its time-sorted transactions in one direction and
finds windows in which it deals with at least ``min_counterparties`` distinct
counterparties.

Time Complexity: O(T log T + T × W) per hub, T = hub transactions, W = window size
Memory: O(W)
"""

from typing import Any, Dict, List

import numpy as np

from core.temporal.rolling_window import forward_windows
from utils.time_utils import get_time_span_hours


def find_counterparty_bursts(
    hub_id: str,
    times: np.ndarray,
    counterparties: np.ndarray,
    amounts: np.ndarray,
    min_counterparties: int,
    window_hours: int,
    first_match_only: bool = True,
) -> List[Dict[str, Any]]:
    """
    Find forward-anchored windows with enough distinct counterparties.

    The hub itself never counts as its own counterparty. With
    ``first_match_only`` the scan stops at the first qualifying anchor;
    otherwise the next anchor starts after the matched span, so reported
    bursts never overlap.

    Returns:
        List of {"counterparties", "total_volume", "span_hours"} dicts.
    """
    bursts: List[Dict[str, Any]] = []
    next_anchor = 0

    for anchor, end in forward_windows(times, window_hours):
        if anchor < next_anchor:
            continue
        if end - anchor < min_counterparties:
            continue

        window = slice(anchor, end)
        mask = counterparties[window] != hub_id
        distinct = list(dict.fromkeys(counterparties[window][mask].tolist()))
        if len(distinct) < min_counterparties:
            continue

        bursts.append(
            {
                "counterparties": [str(c) for c in distinct],
                "total_volume": float(amounts[window][mask].sum()),
                "span_hours": round(get_time_span_hours(times[window]), 2),
            }
        )
        if first_match_only:
            break
        next_anchor = end

    return bursts
