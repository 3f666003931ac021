"""
Data model shared by the graph builder, detectors, scorer and formatter.
"""

import hashlib
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple

import pandas as pd


class PatternType(str, Enum):
    CYCLE = "CYCLE"
    FAN_IN = "FAN_IN"
    FAN_OUT = "FAN_OUT"
    LAYERED_SHELL = "LAYERED_SHELL"


@dataclass(frozen=True)
class Transaction:
    transaction_id: str
    sender_id: str
    receiver_id: str
    amount: float
    timestamp: pd.Timestamp


@dataclass
class AccountNode:
    """One account in the transaction graph plus its scoring state."""

    account_id: str
    in_degree: int = 0
    out_degree: int = 0
    total_in_volume: float = 0.0
    total_out_volume: float = 0.0
    transactions: List[Transaction] = field(default_factory=list)
    risk_score: float = 0.0
    patterns: List[PatternType] = field(default_factory=list)
    ring_ids: List[str] = field(default_factory=list)
    flagged: bool = False
    whitelisted: bool = False

    @property
    def total_degree(self) -> int:
        return self.in_degree + self.out_degree

    def reset_scoring(self) -> None:
        self.risk_score = 0.0
        self.patterns = []
        self.ring_ids = []
        self.flagged = False
        self.whitelisted = False


def ring_key(pattern_type: PatternType, members: List[str]) -> Tuple[str, Tuple[str, ...]]:
    """Canonical identity of a ring: pattern plus sorted unique members."""
    return PatternType(pattern_type).value, tuple(sorted(set(members)))


def make_ring_id(pattern_type: PatternType, members: List[str]) -> str:
    """Stable ring id derived from the canonical key."""
    pattern, sorted_members = ring_key(pattern_type, members)
    digest = hashlib.sha1(
        (pattern + "|" + "|".join(sorted_members)).encode("utf-8")
    ).hexdigest()
    return f"{pattern}-{digest[:12]}"


@dataclass
class FraudRing:
    ring_id: str
    pattern_type: PatternType
    members: List[str]
    risk_score: float
    explanation: str = ""
    total_volume: float = 0.0

    @classmethod
    def create(
        cls,
        pattern_type: PatternType,
        members: List[str],
        risk_score: float,
        explanation: str = "",
        total_volume: float = 0.0,
    ) -> "FraudRing":
        return cls(
            ring_id=make_ring_id(pattern_type, members),
            pattern_type=PatternType(pattern_type),
            members=list(members),
            risk_score=round(float(min(100.0, max(0.0, risk_score))), 2),
            explanation=explanation,
            total_volume=round(float(total_volume), 2),
        )

    @property
    def canonical_key(self) -> Tuple[str, Tuple[str, ...]]:
        return ring_key(self.pattern_type, self.members)


@dataclass
class AnalysisSummary:
    accounts_analyzed: int = 0
    accounts_flagged: int = 0
    rings_detected: int = 0
    elapsed_seconds: float = 0.0
    total_transactions: int = 0
    total_volume: float = 0.0
    whitelisted_account_count: int = 0
    rejected_transactions: int = 0
    truncated_detectors: List[str] = field(default_factory=list)


@dataclass
class AnalysisResult:
    transactions: List[Transaction] = field(default_factory=list)
    suspicious_accounts: List[AccountNode] = field(default_factory=list)
    fraud_rings: List[FraudRing] = field(default_factory=list)
    summary: AnalysisSummary = field(default_factory=AnalysisSummary)
    diagnostics: List[str] = field(default_factory=list)
