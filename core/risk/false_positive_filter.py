"""
False Positive Control Module.

High-volume accounts (payment processors, merchants, payroll hubs) sit on many
detected structures without being part of them. Accounts whose total degree
exceeds WHITELIST_MIN_DEGREE, plus any explicitly configured ids, are
whitelisted and never scored.

Time Complexity: O(V)
Memory: O(V)
"""

from typing import Dict, Iterable, Set

from app.config import WHITELIST_MIN_DEGREE, WHITELISTED_ACCOUNTS
from core.models import AccountNode


def detect_high_volume_accounts(
    nodes: Dict[str, AccountNode],
    min_degree: int = WHITELIST_MIN_DEGREE,
    extra_accounts: Iterable[str] = WHITELISTED_ACCOUNTS,
) -> Set[str]:
    """Return the ids of accounts exempt from scoring."""
    whitelist = {acct for acct, node in nodes.items() if node.total_degree > min_degree}
    whitelist.update(acct for acct in extra_accounts if acct in nodes)
    return whitelist
