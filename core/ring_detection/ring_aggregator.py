"""
Ring Aggregator — combines and deduplicates rings from all detectors.

Two rings are the same ring when they share pattern type and member set;
rotations of one cycle reached from different start accounts collapse to the
first one observed.
"""

from typing import Dict, List, Tuple

from core.models import FraudRing


def deduplicate_rings(*ring_lists: List[FraudRing]) -> List[FraudRing]:
    """
    Combine ring lists in the given order, keeping the first ring per
    (pattern type, sorted member set) key.
    """
    seen: Dict[Tuple[str, Tuple[str, ...]], FraudRing] = {}
    for ring_list in ring_lists:
        for ring in ring_list:
            seen.setdefault(ring.canonical_key, ring)
    return list(seen.values())
