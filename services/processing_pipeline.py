"""
Processing Pipeline — Full Pipeline Orchestrator.

Coordinates the complete detection pipeline:
   1. Validate input rows & parse timestamps
   2. Build the account graph snapshot
   3. Cycle detection            ┐
   4. Smurfing detection         ├ independent, run in parallel
   5. Shell chain detection      ┘
   6. Ring deduplication
   7. High-volume whitelist
   8. Suspicion scoring + normalization
   9. Rank accounts & build summary

Every call builds its own graph snapshot; nothing survives between runs.

Memory: O(V + E) for graph + O(R) for rings.
"""

import concurrent.futures
import contextlib
import logging
import time
from typing import Any, Callable, List, Tuple

from app.config import (
    DETECTOR_TIME_BUDGET_SECONDS,
    MAX_SEARCH_VISITS,
    PARALLEL_DETECTORS,
)
from core.graph.graph_builder import TransactionGraph, build_graph
from core.graph.search_budget import SearchBudget
from core.models import AnalysisResult, FraudRing
from core.output.summary_builder import build_summary
from core.ring_detection.ring_aggregator import deduplicate_rings
from core.ring_detection.smurfing import detect_smurfing
from core.risk.base_scoring import compute_scores
from core.risk.false_positive_filter import detect_high_volume_accounts
from core.structural.cycle_detection import detect_cycles
from core.structural.shell_detection import detect_shell_chains
from utils.validators import sanitize_transactions

logger = logging.getLogger(__name__)


@contextlib.contextmanager
def log_timer(label: str):
    start = time.perf_counter()
    yield
    elapsed = time.perf_counter() - start
    logger.info("Module [%s] took %.4f seconds", label, elapsed)


class ProcessingService:
    """Orchestrates the laundering-topology detection pipeline."""

    def __init__(
        self,
        parallel: bool = PARALLEL_DETECTORS,
        max_visits: int = MAX_SEARCH_VISITS,
        time_limit: float = DETECTOR_TIME_BUDGET_SECONDS,
    ):
        self.parallel = parallel
        self.max_visits = max_visits
        self.time_limit = time_limit

    def _budget(self, name: str) -> SearchBudget:
        return SearchBudget(name, max_visits=self.max_visits, time_limit=self.time_limit)

    def _run_detectors(
        self, graph: TransactionGraph
    ) -> Tuple[List[List[FraudRing]], List[str]]:
        """
        Run the three detectors over the same snapshot.

        Returns:
            (ring lists in fixed detector order, names of truncated detectors)
        """
        cycle_budget = self._budget("cycle_detection")
        shell_budget = self._budget("shell_chain_detection")
        detectors: List[Tuple[str, Callable[[], List[FraudRing]]]] = [
            ("cycle_detection", lambda: detect_cycles(graph, cycle_budget)),
            ("smurfing_detection", lambda: detect_smurfing(graph)),
            ("shell_chain_detection", lambda: detect_shell_chains(graph, shell_budget)),
        ]

        def _timed(label: str, detector: Callable[[], List[FraudRing]]) -> List[FraudRing]:
            with log_timer(label):
                return detector()

        if self.parallel:
            with concurrent.futures.ThreadPoolExecutor(max_workers=len(detectors)) as pool:
                futures = [pool.submit(_timed, label, fn) for label, fn in detectors]
                ring_lists = [f.result() for f in futures]
        else:
            ring_lists = [_timed(label, fn) for label, fn in detectors]

        truncated = [b.name for b in (cycle_budget, shell_budget) if b.exhausted]
        return ring_lists, truncated

    def process(self, transactions: Any) -> AnalysisResult:
        """
        Run the full pipeline on one batch of transactions.

        Args:
            transactions: DataFrame, list of Transaction records, or list of
                mappings with transaction_id, sender_id, receiver_id, amount,
                timestamp.

        Returns:
            AnalysisResult with ranked accounts, deduplicated rings and summary.
        """
        t_start = time.perf_counter()

        with log_timer("validation"):
            df, diagnostics = sanitize_transactions(transactions)

        with log_timer("graph_build"):
            graph = build_graph(df)
        logger.info(
            "Graph built: %d accounts, %d transactions", graph.node_count, len(graph.records)
        )

        ring_lists, truncated = self._run_detectors(graph)

        with log_timer("ring_deduplication"):
            raw_count = sum(len(r) for r in ring_lists)
            rings = deduplicate_rings(*ring_lists)
            rings.sort(key=lambda r: r.risk_score, reverse=True)
        logger.info("Rings: %d raw, %d after deduplication", raw_count, len(rings))

        with log_timer("scoring"):
            whitelist = detect_high_volume_accounts(graph.nodes)
            nodes = compute_scores(graph.nodes, rings, whitelist)

        suspicious = sorted(
            (n for n in nodes.values() if n.flagged or n.whitelisted),
            key=lambda n: (-n.risk_score, n.account_id),
        )

        summary = build_summary(
            graph,
            nodes,
            rings,
            processing_time=time.perf_counter() - t_start,
            rejected_transactions=_count_rejected(transactions, len(df)),
            truncated_detectors=truncated,
        )

        return AnalysisResult(
            transactions=graph.records,
            suspicious_accounts=suspicious,
            fraud_rings=rings,
            summary=summary,
            diagnostics=diagnostics,
        )


def _count_rejected(transactions: Any, kept: int) -> int:
    try:
        return max(0, len(transactions) - kept)
    except TypeError:
        return 0


def analyze_transactions(transactions: Any) -> AnalysisResult:
    """Analyze one batch of transactions with the default configuration."""
    return ProcessingService().process(transactions)
