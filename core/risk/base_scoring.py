"""
Suspicion Scoring Engine.

Folds the deduplicated rings back onto their member accounts:

  +RING_SCORE_WEIGHT × ring risk   per ring the account belongs to
  +MULTI_PATTERN_BONUS             account shows more than one pattern type

Whitelisted accounts accumulate nothing. The final score is clamped to
[0, 100] once, after every contribution has been added, so the result does
not depend on ring order.

Time Complexity: O(V + Σ ring sizes)
Memory: O(V)
"""

from typing import Dict, List, Set

from app.config import MULTI_PATTERN_BONUS, RING_SCORE_WEIGHT
from core.models import AccountNode, FraudRing
from core.risk.normalization import normalize_scores


def compute_scores(
    nodes: Dict[str, AccountNode],
    rings: List[FraudRing],
    whitelist: Set[str],
) -> Dict[str, AccountNode]:
    """
    Compute final suspicion scores in place.

    Returns:
        The same ``nodes`` mapping, with risk_score, patterns, ring_ids,
        flagged and whitelisted filled in.
    """
    for node in nodes.values():
        node.reset_scoring()
        node.whitelisted = node.account_id in whitelist

    raw: Dict[str, float] = {acct: 0.0 for acct in nodes}

    for ring in rings:
        for member in ring.members:
            if member in whitelist:
                continue
            node = nodes[member]
            if ring.pattern_type not in node.patterns:
                node.patterns.append(ring.pattern_type)
            if ring.ring_id in node.ring_ids:
                continue
            node.ring_ids.append(ring.ring_id)
            raw[member] += ring.risk_score * RING_SCORE_WEIGHT

    # Multi-pattern bonus
    for acct, node in nodes.items():
        if len(node.patterns) > 1:
            raw[acct] += MULTI_PATTERN_BONUS

    for acct, score in normalize_scores(raw).items():
        node = nodes[acct]
        node.risk_score = score
        node.flagged = score > 0

    return nodes
