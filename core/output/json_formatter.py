"""
JSON Output Formatter.

Flattens an AnalysisResult into the report structure returned by the API:
{
    "suspicious_accounts": [...],
    "fraud_rings": [...],
    "summary": {...},
    "graph_data": {...}      # optional
}

Time Complexity: O(V + E + R)
Memory: O(V + E + R)
"""

from typing import Any, Dict, List

from app.config import MAX_GRAPH_EDGES_RESPONSE, MAX_GRAPH_NODES_RESPONSE
from core.models import AccountNode, AnalysisResult, AnalysisSummary, FraudRing


def _format_account(node: AccountNode) -> Dict[str, Any]:
    return {
        "account_id": node.account_id,
        "suspicion_score": round(float(node.risk_score), 2),
        "detected_patterns": [p.value for p in node.patterns],
        "ring_ids": list(node.ring_ids),
        "whitelisted": node.whitelisted,
        "in_degree": node.in_degree,
        "out_degree": node.out_degree,
    }


def _format_ring(ring: FraudRing) -> Dict[str, Any]:
    return {
        "ring_id": ring.ring_id,
        "member_accounts": list(ring.members),
        "pattern_type": ring.pattern_type.value,
        "risk_score": round(float(ring.risk_score), 2),
        "total_volume": round(float(ring.total_volume), 2),
        "explanation": ring.explanation,
    }


def _format_summary(summary: AnalysisSummary) -> Dict[str, Any]:
    return {
        "total_accounts_analyzed": summary.accounts_analyzed,
        "suspicious_accounts_flagged": summary.accounts_flagged,
        "fraud_rings_detected": summary.rings_detected,
        "processing_time_seconds": round(summary.elapsed_seconds, 2),
        "total_transactions": summary.total_transactions,
        "total_volume": round(summary.total_volume, 2),
        "whitelisted_accounts": summary.whitelisted_account_count,
        "rejected_transactions": summary.rejected_transactions,
        "truncated_detectors": list(summary.truncated_detectors),
    }


def build_graph_data(result: AnalysisResult) -> Dict[str, List[Dict[str, Any]]]:
    """Node/edge lists for a client-side graph view, highest risk first."""
    scored = {n.account_id: n for n in result.suspicious_accounts}
    account_ids: Dict[str, None] = {}
    for tx in result.transactions:
        account_ids.setdefault(tx.sender_id)
        account_ids.setdefault(tx.receiver_id)

    nodes = []
    for acct in account_ids:
        node = scored.get(acct)
        nodes.append(
            {
                "id": acct,
                "risk_score": round(float(node.risk_score), 2) if node else 0.0,
                "flagged": bool(node and node.flagged),
                "pattern_type": node.patterns[0].value if node and node.patterns else None,
            }
        )
    nodes.sort(key=lambda n: n["risk_score"], reverse=True)
    nodes = nodes[:MAX_GRAPH_NODES_RESPONSE]
    kept = {n["id"] for n in nodes}

    edges = [
        {
            "source": tx.sender_id,
            "target": tx.receiver_id,
            "amount": tx.amount,
            "timestamp": tx.timestamp.isoformat(),
            "transaction_id": tx.transaction_id,
        }
        for tx in result.transactions
        if tx.sender_id in kept and tx.receiver_id in kept
    ][:MAX_GRAPH_EDGES_RESPONSE]

    return {"nodes": nodes, "edges": edges}


def format_output(result: AnalysisResult, include_graph: bool = False) -> Dict[str, Any]:
    """Build the final JSON-compatible output dict."""
    output: Dict[str, Any] = {
        "suspicious_accounts": [_format_account(n) for n in result.suspicious_accounts],
        "fraud_rings": [_format_ring(r) for r in result.fraud_rings],
        "summary": _format_summary(result.summary),
    }
    if result.diagnostics:
        output["diagnostics"] = list(result.diagnostics)
    if include_graph:
        output["graph_data"] = build_graph_data(result)
    return output
