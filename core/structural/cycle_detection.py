"""
Cycle Detection Module — Circular Fund Routing.

Finds every simple directed cycle of length MIN_CYCLE_LENGTH..MAX_CYCLE_LENGTH
(3–5) with a depth-limited DFS started from each account that has both
incoming and outgoing transactions. Each rotation of a cycle is reported from
its own start node; the ring aggregator collapses them.

Time Complexity: O(V * b^L) where b = branching factor, L = MAX_CYCLE_LENGTH,
    capped by the detector's SearchBudget.
Memory: O(V) for the in-path buffer + O(L) for the current path.
"""

import logging
from typing import List, Optional

from app.config import (
    CYCLE_BASE_RISK,
    CYCLE_RISK_PER_HOP,
    MAX_CYCLE_LENGTH,
    MIN_CYCLE_LENGTH,
)
from core.graph.graph_builder import TransactionGraph
from core.graph.search_budget import SearchBudget
from core.models import FraudRing, PatternType

logger = logging.getLogger(__name__)


def cycle_risk(length: int) -> float:
    return min(100.0, CYCLE_BASE_RISK + CYCLE_RISK_PER_HOP * length)


def _cycles_from(
    start: int,
    successors: List[List[int]],
    on_path: List[bool],
    min_length: int,
    max_length: int,
    budget: SearchBudget,
):
    """Yield index paths of cycles that close back on ``start``."""
    path = [start]
    on_path[start] = True
    stack = [iter(successors[start])]

    try:
        while stack:
            nxt = next(stack[-1], None)
            if nxt is None:
                stack.pop()
                on_path[path.pop()] = False
                continue
            if not budget.spend():
                return

            if nxt == start:
                if len(path) >= min_length:
                    yield list(path)
                continue
            if on_path[nxt] or len(path) >= max_length:
                continue

            path.append(nxt)
            on_path[nxt] = True
            stack.append(iter(successors[nxt]))
    finally:
        # Leave the shared buffer clean for the next start node.
        for node in path:
            on_path[node] = False


def detect_cycles(
    graph: TransactionGraph,
    budget: Optional[SearchBudget] = None,
    min_length: int = MIN_CYCLE_LENGTH,
    max_length: int = MAX_CYCLE_LENGTH,
) -> List[FraudRing]:
    """
    Detect circular fund routing.

    Returns:
        One CYCLE ring per (start node, cycle) pair found, members in
        traversal order starting at the start node.
    """
    budget = budget or SearchBudget("cycle_detection")
    rings: List[FraudRing] = []
    on_path = [False] * graph.node_count

    for start, account_id in enumerate(graph.account_ids):
        node = graph.nodes[account_id]
        if node.out_degree == 0 or node.in_degree == 0:
            continue

        for cycle in _cycles_from(
            start, graph.successors, on_path, min_length, max_length, budget
        ):
            members = [graph.account_ids[i] for i in cycle]
            rings.append(
                FraudRing.create(
                    PatternType.CYCLE,
                    members,
                    risk_score=cycle_risk(len(cycle)),
                    explanation=f"Circular flow of length {len(cycle)}",
                    total_volume=graph.path_volume(cycle, closed=True),
                )
            )

        if budget.exhausted:
            break

    logger.debug("Cycle search visited %d edges, %d raw cycles", budget.visits, len(rings))
    return rings
