"""
Smurfing Detection Module — Fan-In / Fan-Out Structuring.

Detects structuring / smurfing bursts in a 72-hour forward window.
Delegates to fan_in and fan_out sub-modules.

Time Complexity: O(n × k)
Memory: O(n)
"""

from typing import List

from app.config import SMURFING_MIN_COUNTERPARTIES, SMURFING_WINDOW_HOURS
from core.graph.graph_builder import TransactionGraph
from core.models import FraudRing
from core.ring_detection.fan_in import detect_fan_in
from core.ring_detection.fan_out import detect_fan_out


def detect_smurfing(
    graph: TransactionGraph,
    min_counterparties: int = SMURFING_MIN_COUNTERPARTIES,
    window_hours: int = SMURFING_WINDOW_HOURS,
) -> List[FraudRing]:
    """
    Detect smurfing patterns (fan-in aggregators and fan-out dispersers).

    Returns:
        FAN_IN rings followed by FAN_OUT rings.
    """
    fan_in_rings = detect_fan_in(graph, min_counterparties, window_hours)
    fan_out_rings = detect_fan_out(graph, min_counterparties, window_hours)
    return fan_in_rings + fan_out_rings
