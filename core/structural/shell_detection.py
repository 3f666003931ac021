"""
Shell Chain Detection Module — Layering.

Identifies shell accounts (total degree ≤ SHELL_MAX_DEGREE) and finds chains
A → S1 → ... → Sk → Z of at least SHELL_MIN_CHAIN_LENGTH accounts whose
interior accounts are all shells. Every qualifying simple path up to
SHELL_MAX_CHAIN_LENGTH accounts is reported, including the longer extensions
of a shorter qualifying chain.

Time Complexity: O(V × 3^D) bounded by shell degree ≤ 3, D = max chain length
Memory: O(V + chains × chain_length)
"""

import logging
from typing import List, Optional, Set

from app.config import (
    SHELL_BASE_RISK,
    SHELL_MAX_CHAIN_LENGTH,
    SHELL_MAX_DEGREE,
    SHELL_MIN_CHAIN_LENGTH,
    SHELL_RISK_PER_MEMBER,
)
from core.graph.graph_builder import TransactionGraph
from core.graph.search_budget import SearchBudget
from core.models import FraudRing, PatternType

logger = logging.getLogger(__name__)


def shell_risk(length: int) -> float:
    return min(100.0, SHELL_BASE_RISK + SHELL_RISK_PER_MEMBER * length)


def identify_shell_accounts(
    graph: TransactionGraph, max_degree: int = SHELL_MAX_DEGREE
) -> Set[int]:
    """Dense indices of accounts whose total degree is at most ``max_degree``."""
    return {
        i
        for i, acct in enumerate(graph.account_ids)
        if graph.nodes[acct].total_degree <= max_degree
    }


def _find_shell_chains(
    graph: TransactionGraph,
    shells: Set[int],
    min_length: int,
    max_length: int,
    budget: SearchBudget,
) -> List[List[int]]:
    """DFS over simple paths; only shell accounts are extended past."""
    chains: List[List[int]] = []
    on_path = [False] * graph.node_count

    for start, acct in enumerate(graph.account_ids):
        if graph.nodes[acct].out_degree == 0:
            continue

        stack = [(start, [start])]
        while stack:
            current, path = stack.pop()
            for node in path:
                on_path[node] = True

            for neighbor in graph.successors[current]:
                if not budget.spend():
                    break
                if on_path[neighbor]:
                    continue

                new_path = path + [neighbor]
                if len(new_path) >= min_length:
                    chains.append(new_path)
                if neighbor in shells and len(new_path) < max_length:
                    stack.append((neighbor, new_path))

            for node in path:
                on_path[node] = False
            if budget.exhausted:
                return chains

    return chains


def detect_shell_chains(
    graph: TransactionGraph,
    budget: Optional[SearchBudget] = None,
    max_degree: int = SHELL_MAX_DEGREE,
    min_length: int = SHELL_MIN_CHAIN_LENGTH,
    max_length: int = SHELL_MAX_CHAIN_LENGTH,
) -> List[FraudRing]:
    """
    Detect layered shell chains.

    Returns:
        One LAYERED_SHELL ring per qualifying path, members in path order.
    """
    budget = budget or SearchBudget("shell_chain_detection")
    shells = identify_shell_accounts(graph, max_degree)
    chains = _find_shell_chains(graph, shells, min_length, max_length, budget)

    rings: List[FraudRing] = []
    for chain in chains:
        members = [graph.account_ids[i] for i in chain]
        rings.append(
            FraudRing.create(
                PatternType.LAYERED_SHELL,
                members,
                risk_score=shell_risk(len(chain)),
                explanation=(
                    f"Layering chain of {len(chain)} accounts through "
                    f"{len(chain) - 2} shell accounts"
                ),
                total_volume=graph.path_volume(chain),
            )
        )

    logger.debug(
        "Shell search: %d shell accounts, %d chains, %d visits",
        len(shells),
        len(rings),
        budget.visits,
    )
    return rings
