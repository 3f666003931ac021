"""
Processing statistics tracker.

Keeps the summary of the most recent analysis run plus running totals for
the /metrics endpoint. In-process only; nothing is persisted.

Time Complexity: O(1) per operation
Memory: O(1)
"""

import threading
from typing import Any, Dict


class MetricsTracker:
    """Tracks processing statistics across API calls."""

    def __init__(self):
        self._lock = threading.Lock()
        self._total_runs = 0
        self._total_transactions = 0
        self._total_rings = 0
        self._last_run: Dict[str, Any] | None = None

    def record(self, summary: Dict[str, Any]) -> None:
        """Record the formatted summary of one processing run."""
        with self._lock:
            self._total_runs += 1
            self._total_transactions += int(summary.get("total_transactions", 0))
            self._total_rings += int(summary.get("fraud_rings_detected", 0))
            self._last_run = dict(summary)

    def get_metrics(self) -> Dict[str, Any]:
        """Return the latest metrics."""
        with self._lock:
            if self._last_run is None:
                return {"status": "no_processing_yet", "total_runs": 0}
            return {
                "status": "ready",
                "total_runs": self._total_runs,
                "total_transactions": self._total_transactions,
                "total_rings_detected": self._total_rings,
                "last_run": self._last_run,
            }
