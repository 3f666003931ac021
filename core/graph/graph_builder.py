"""
Graph Builder — constructs the directed account graph for one analysis run.

Nodes represent account IDs. Edges represent individual transactions with
attributes: amount, timestamp, transaction_id. Alongside the NetworkX
MultiDiGraph, every account gets a dense integer index so the detectors can
search over plain lists instead of string-keyed dicts.

Time Complexity: O(E log E) for the timestamp sort, O(V + E) otherwise
Memory: O(V + E)
"""

from dataclasses import dataclass, field
from typing import Dict, List, Tuple

import networkx as nx
import pandas as pd

from core.models import AccountNode, Transaction


@dataclass
class TransactionGraph:
    """Read-only snapshot shared by all detectors of a run."""

    graph: nx.MultiDiGraph
    transactions: pd.DataFrame
    records: List[Transaction]
    nodes: Dict[str, AccountNode]
    account_ids: List[str]
    index: Dict[str, int]
    adjacency: List[List[int]]
    successors: List[List[int]]
    pair_volume: Dict[Tuple[int, int], float] = field(default_factory=dict)

    @property
    def node_count(self) -> int:
        return len(self.account_ids)

    @property
    def total_volume(self) -> float:
        return float(self.transactions["amount"].sum()) if len(self.transactions) else 0.0

    def path_volume(self, path: List[int], closed: bool = False) -> float:
        """Sum of transaction amounts along consecutive pairs of ``path``."""
        hops = list(zip(path, path[1:]))
        if closed and path:
            hops.append((path[-1], path[0]))
        return sum(self.pair_volume.get(hop, 0.0) for hop in hops)


def sort_transactions(df: pd.DataFrame) -> pd.DataFrame:
    """Ascending by timestamp; ties keep their original relative order."""
    return df.sort_values("timestamp", kind="stable").reset_index(drop=True)


def build_graph(df: pd.DataFrame) -> TransactionGraph:
    """
    Build the graph snapshot from a sanitized transaction DataFrame.

    Args:
        df: DataFrame with columns [transaction_id, sender_id, receiver_id, amount, timestamp]

    Returns:
        TransactionGraph with a MultiDiGraph (one edge per transaction),
        per-account degree/volume metrics and integer adjacency lists.
    """
    df = sort_transactions(df)

    G = nx.MultiDiGraph()
    G.add_edges_from(
        zip(
            df["sender_id"],
            df["receiver_id"],
            [
                {"amount": float(a), "timestamp": t, "transaction_id": str(tid)}
                for a, t, tid in zip(df["amount"], df["timestamp"], df["transaction_id"])
            ],
        )
    )

    account_ids = [str(n) for n in G.nodes()]
    index = {acct: i for i, acct in enumerate(account_ids)}

    in_volume = dict(G.in_degree(weight="amount"))
    out_volume = dict(G.out_degree(weight="amount"))
    nodes: Dict[str, AccountNode] = {
        acct: AccountNode(
            account_id=acct,
            in_degree=G.in_degree(acct),
            out_degree=G.out_degree(acct),
            total_in_volume=float(in_volume[acct]),
            total_out_volume=float(out_volume[acct]),
        )
        for acct in account_ids
    }

    adjacency: List[List[int]] = [[] for _ in account_ids]
    pair_volume: Dict[Tuple[int, int], float] = {}
    records: List[Transaction] = []
    for row in df.itertuples(index=False):
        tx = Transaction(
            transaction_id=str(row.transaction_id),
            sender_id=str(row.sender_id),
            receiver_id=str(row.receiver_id),
            amount=float(row.amount),
            timestamp=row.timestamp,
        )
        records.append(tx)

        u, v = index[tx.sender_id], index[tx.receiver_id]
        adjacency[u].append(v)
        pair_volume[(u, v)] = pair_volume.get((u, v), 0.0) + tx.amount

        nodes[tx.sender_id].transactions.append(tx)
        if v != u:
            nodes[tx.receiver_id].transactions.append(tx)

    successors = [list(dict.fromkeys(neighbors)) for neighbors in adjacency]

    return TransactionGraph(
        graph=G,
        transactions=df,
        records=records,
        nodes=nodes,
        account_ids=account_ids,
        index=index,
        adjacency=adjacency,
        successors=successors,
        pair_volume=pair_volume,
    )
