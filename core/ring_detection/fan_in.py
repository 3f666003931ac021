"""
Fan-In Detection — Aggregator pattern.

≥10 distinct senders → 1 receiver within a forward-anchored 72h window.
"""

import logging
from typing import List

import pandas as pd

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


def detect_fan_in(
    graph: TransactionGraph,
    min_senders: int = SMURFING_MIN_COUNTERPARTIES,
    window_hours: int = SMURFING_WINDOW_HOURS,
    first_match_only: bool = SMURFING_FIRST_MATCH_ONLY,
) -> List[FraudRing]:
    """
    Detect fan-in aggregator patterns.

    Returns:
        FAN_IN rings with the receiving hub first, then its senders in
        first-seen order.
    """
    rings: List[FraudRing] = []
    df: pd.DataFrame = graph.transactions
    if df.empty:
        return rings

    for receiver, group in df.groupby("receiver_id", sort=False):
        receiver_id = str(receiver)
        if graph.nodes[receiver_id].in_degree < min_senders:
            continue

        bursts = find_counterparty_bursts(
            receiver_id,
            group["timestamp"].to_numpy(dtype="datetime64[ns]"),
            group["sender_id"].astype(str).to_numpy(),
            group["amount"].to_numpy(dtype=float),
            min_counterparties=min_senders,
            window_hours=window_hours,
            first_match_only=first_match_only,
        )
        for burst in bursts:
            senders = burst["counterparties"]
            rings.append(
                FraudRing.create(
                    PatternType.FAN_IN,
                    [receiver_id] + senders,
                    risk_score=SMURFING_RISK_SCORE,
                    explanation=(
                        f"Fan-in: {len(senders)} distinct senders within "
                        f"{burst['span_hours']}h (window {window_hours}h)"
                    ),
                    total_volume=burst["total_volume"],
                )
            )

    logger.debug("Fan-in detection produced %d rings", len(rings))
    return rings
