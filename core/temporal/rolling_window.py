"""
Rolling Window Utility.

Forward-anchored, time-bounded windows over a time-sorted array: the window
of anchor ``i`` holds every later row whose timestamp is within
``window_hours`` of the anchor, boundary inclusive.

Time Complexity: O(n log n) for n anchors
Memory: O(1) beyond the input arrays
"""

from typing import Generator, Tuple

import numpy as np

from utils.time_utils import window_delta


def forward_windows(
    times: np.ndarray,
    window_hours: int = 72,
) -> Generator[Tuple[int, int], None, None]:
    """
    Yield (anchor, end) index pairs; the window is ``times[anchor:end]``.

    Args:
        times: datetime64 array sorted ascending.
        window_hours: Window length in hours.
    """
    delta = window_delta(window_hours)
    for anchor in range(len(times)):
        end = int(np.searchsorted(times, times[anchor] + delta, side="right"))
        yield anchor, end
