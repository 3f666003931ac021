"""
Search Budget — caps the work a single graph search may do.

Cycle and shell-chain searches are combinatorial in branching factor. Each
detector gets its own budget; when it runs out the search stops and the rings
found so far are kept.
"""

import logging
import time

from app.config import DETECTOR_TIME_BUDGET_SECONDS, MAX_SEARCH_VISITS

logger = logging.getLogger(__name__)

# Wall clock is only sampled every this many visits.
_CLOCK_CHECK_INTERVAL = 1024


class SearchBudget:
    """Node-visit and wall-clock limit for one detector."""

    def __init__(
        self,
        name: str,
        max_visits: int = MAX_SEARCH_VISITS,
        time_limit: float = DETECTOR_TIME_BUDGET_SECONDS,
    ):
        self.name = name
        self.max_visits = max_visits
        self.time_limit = time_limit
        self.visits = 0
        self.exhausted = False
        # Clock starts on the first visit, not at construction.
        self._deadline: float | None = None

    def spend(self, visits: int = 1) -> bool:
        """Record visits. Returns False once the budget is exhausted."""
        if self.exhausted:
            return False
        if self.visits == 0 and self.time_limit > 0:
            self._deadline = time.monotonic() + self.time_limit
        self.visits += visits
        if self.max_visits > 0 and self.visits > self.max_visits:
            self._exhaust("visit limit of %d" % self.max_visits)
        elif (
            self._deadline is not None
            and self.visits % _CLOCK_CHECK_INTERVAL == 0
            and time.monotonic() > self._deadline
        ):
            self._exhaust("time limit of %.1fs" % self.time_limit)
        return not self.exhausted

    def _exhaust(self, reason: str) -> None:
        self.exhausted = True
        logger.warning(
            "Detector [%s] hit its %s after %d visits; returning partial results",
            self.name,
            reason,
            self.visits,
        )
