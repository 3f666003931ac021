"""
Summary Builder — constructs processing summary statistics.

Time Complexity: O(V)
Memory: O(1)
"""

from typing import Dict, List

from core.graph.graph_builder import TransactionGraph
from core.models import AccountNode, AnalysisSummary, FraudRing


def build_summary(
    graph: TransactionGraph,
    nodes: Dict[str, AccountNode],
    rings: List[FraudRing],
    processing_time: float = 0.0,
    rejected_transactions: int = 0,
    truncated_detectors: List[str] | None = None,
) -> AnalysisSummary:
    """Build the summary block of an analysis result."""
    return AnalysisSummary(
        accounts_analyzed=len(nodes),
        accounts_flagged=sum(1 for n in nodes.values() if n.flagged),
        rings_detected=len(rings),
        elapsed_seconds=round(processing_time, 4),
        total_transactions=len(graph.records),
        total_volume=round(graph.total_volume, 2),
        whitelisted_account_count=sum(1 for n in nodes.values() if n.whitelisted),
        rejected_transactions=rejected_transactions,
        truncated_detectors=list(truncated_detectors or []),
    )
