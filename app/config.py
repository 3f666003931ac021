"""
Engine configuration.

Every detection threshold and scoring constant lives here. Values can be
overridden through environment variables of the same name.
"""

import os


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


# ── Boundary ──────────────────────────────────────────────────────────
# Self-transactions (sender == receiver) are kept as ordinary edges unless
# this is set; they can never close a cycle or extend a shell chain.
DROP_SELF_TRANSACTIONS: bool = _env_bool("DROP_SELF_TRANSACTIONS", "false")

# ── Cycle detection ───────────────────────────────────────────────────
MIN_CYCLE_LENGTH: int = int(os.getenv("MIN_CYCLE_LENGTH", "3"))
MAX_CYCLE_LENGTH: int = int(os.getenv("MAX_CYCLE_LENGTH", "5"))
# risk = min(100, CYCLE_BASE_RISK + CYCLE_RISK_PER_HOP * length)
CYCLE_BASE_RISK: float = float(os.getenv("CYCLE_BASE_RISK", "80.0"))
CYCLE_RISK_PER_HOP: float = float(os.getenv("CYCLE_RISK_PER_HOP", "2.0"))

# ── Structuring (fan-in / fan-out) ────────────────────────────────────
SMURFING_MIN_COUNTERPARTIES: int = int(os.getenv("SMURFING_MIN_COUNTERPARTIES", "10"))
SMURFING_WINDOW_HOURS: int = int(os.getenv("SMURFING_WINDOW_HOURS", "72"))
SMURFING_RISK_SCORE: float = float(os.getenv("SMURFING_RISK_SCORE", "75.0"))
# Only the first qualifying window per hub is reported. When disabled, every
# non-overlapping window is reported.
SMURFING_FIRST_MATCH_ONLY: bool = _env_bool("SMURFING_FIRST_MATCH_ONLY", "true")

# ── Layered shell chains ──────────────────────────────────────────────
# Shell account: total degree (in + out) <= SHELL_MAX_DEGREE
SHELL_MAX_DEGREE: int = int(os.getenv("SHELL_MAX_DEGREE", "3"))
SHELL_MIN_CHAIN_LENGTH: int = int(os.getenv("SHELL_MIN_CHAIN_LENGTH", "4"))
SHELL_MAX_CHAIN_LENGTH: int = int(os.getenv("SHELL_MAX_CHAIN_LENGTH", "7"))
# risk = min(100, SHELL_BASE_RISK + SHELL_RISK_PER_MEMBER * length)
SHELL_BASE_RISK: float = float(os.getenv("SHELL_BASE_RISK", "60.0"))
SHELL_RISK_PER_MEMBER: float = float(os.getenv("SHELL_RISK_PER_MEMBER", "5.0"))

# ── Search budgets (per detector) ─────────────────────────────────────
MAX_SEARCH_VISITS: int = int(os.getenv("MAX_SEARCH_VISITS", "2000000"))
DETECTOR_TIME_BUDGET_SECONDS: float = float(os.getenv("DETECTOR_TIME_BUDGET_SECONDS", "20.0"))
PARALLEL_DETECTORS: bool = _env_bool("PARALLEL_DETECTORS", "true")

# ── Scoring ───────────────────────────────────────────────────────────
RING_SCORE_WEIGHT: float = float(os.getenv("RING_SCORE_WEIGHT", "0.5"))
MULTI_PATTERN_BONUS: float = float(os.getenv("MULTI_PATTERN_BONUS", "20.0"))
MAX_SCORE: float = 100.0

# ── False positive control ────────────────────────────────────────────
# High-volume accounts (total degree above this) are never scored.
WHITELIST_MIN_DEGREE: int = int(os.getenv("WHITELIST_MIN_DEGREE", "500"))
WHITELISTED_ACCOUNTS: frozenset = frozenset(
    a.strip() for a in os.getenv("WHITELISTED_ACCOUNTS", "").split(",") if a.strip()
)

# ── API ───────────────────────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
MAX_GRAPH_NODES_RESPONSE: int = int(os.getenv("MAX_GRAPH_NODES_RESPONSE", "1000"))
MAX_GRAPH_EDGES_RESPONSE: int = int(os.getenv("MAX_GRAPH_EDGES_RESPONSE", "1500"))
