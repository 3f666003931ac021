"""
Fan-Out Detection — Disperser pattern.

1 sender → ≥10 distinct receivers within a forward-anchored 72h window.
"""

import logging
from typing import List

from app.config import (
    SMURFING_FIRST_MATCH_ONLY,
    SMURFING_MIN_COUNTERPARTIES,
    SMURFING_RISK_SCORE,
    SMURFING_WINDOW_HOURS,
)
from core.graph.graph_builder import TransactionGraph
from core.models import FraudRing, PatternType
from core.ring_detection.diversity_analysis import find_counterparty_bursts

logger = logging.getLogger(__name__)


def detect_fan_out(
    graph: TransactionGraph,
    min_receivers: int = SMURFING_MIN_COUNTERPARTIES,
    window_hours: int = SMURFING_WINDOW_HOURS,
    first_match_only: bool = SMURFING_FIRST_MATCH_ONLY,
) -> List[FraudRing]:
    """
    Detect fan-out disperser patterns.

    Args:
        graph: Snapshot whose transactions are already sorted by timestamp
        min_receivers: Distinct receivers needed inside one window
        window_hours: Window length, boundary inclusive
        first_match_only: Stop at the first qualifying window per sender

    Returns:
        FAN_OUT rings with the sending hub first, then its receivers in
        first-seen order.
    """
    rings: List[FraudRing] = []
    df = graph.transactions
    if df.empty:
        return rings

    for sender, group in df.groupby("sender_id", sort=False):
        sender_id = str(sender)
        if graph.nodes[sender_id].out_degree < min_receivers:
            continue

        bursts = find_counterparty_bursts(
            sender_id,
            group["timestamp"].to_numpy(dtype="datetime64[ns]"),
            group["receiver_id"].astype(str).to_numpy(),
            group["amount"].to_numpy(dtype=float),
            min_counterparties=min_receivers,
            window_hours=window_hours,
            first_match_only=first_match_only,
        )
        for burst in bursts:
            receivers = burst["counterparties"]
            rings.append(
                FraudRing.create(
                    PatternType.FAN_OUT,
                    [sender_id] + receivers,
                    risk_score=SMURFING_RISK_SCORE,
                    explanation=(
                        f"Fan-out: {len(receivers)} distinct recipients within "
                        f"{burst['span_hours']}h (window {window_hours}h)"
                    ),
                    total_volume=burst["total_volume"],
                )
            )

    logger.debug("Fan-out detection produced %d rings", len(rings))
    return rings
