"""
Transaction input validation.

The detectors assume every record has both endpoints, a positive finite
amount and a parseable timestamp. This module is the boundary that enforces
that: structural problems are reported as errors, bad rows are dropped with a
recorded diagnostic.

Time Complexity: O(n) where n = number of rows
Memory: O(n) for the cleaned copy
"""

import logging
from dataclasses import asdict, is_dataclass
from typing import Any, List, Tuple

import numpy as np
import pandas as pd

from app.config import DROP_SELF_TRANSACTIONS
from utils.time_utils import to_utc_timestamps

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = [
    "transaction_id",
    "sender_id",
    "receiver_id",
    "amount",
    "timestamp",
]


class TransactionInputError(ValueError):
    """Raised when transaction input cannot be interpreted at all."""


def to_dataframe(transactions: Any) -> pd.DataFrame:
    """Accept a DataFrame, a list of Transaction records or a list of mappings."""
    if isinstance(transactions, pd.DataFrame):
        df = transactions.copy()
    else:
        rows = [asdict(t) if is_dataclass(t) else dict(t) for t in (transactions or [])]
        df = pd.DataFrame(rows, columns=REQUIRED_COLUMNS) if not rows else pd.DataFrame(rows)

    missing = [col for col in REQUIRED_COLUMNS if col not in df.columns]
    if missing:
        raise TransactionInputError(f"Missing required columns: {', '.join(missing)}")
    return df[REQUIRED_COLUMNS].reset_index(drop=True)


def validate_csv(df: pd.DataFrame) -> str | None:
    """
    Validate uploaded CSV structure. Returns error message if invalid, None if valid.

    Checks:
        1. All required columns present
        2. File is not empty

    Row-level problems are left to ``sanitize_transactions``.
    """
    missing = [col for col in REQUIRED_COLUMNS if col not in df.columns]
    if missing:
        return f"Missing required columns: {', '.join(missing)}"

    if df.empty:
        return "CSV file is empty."

    return None


def _drop(df: pd.DataFrame, mask: pd.Series, reason: str, diagnostics: List[str]) -> pd.DataFrame:
    if not mask.any():
        return df
    ids = df.loc[mask, "transaction_id"].astype(str).tolist()
    preview = ", ".join(ids[:5]) + (" ..." if len(ids) > 5 else "")
    message = f"Dropped {len(ids)} transaction(s) with {reason}: {preview}"
    logger.warning(message)
    diagnostics.append(message)
    return df.loc[~mask]


def sanitize_transactions(
    transactions: Any,
    drop_self_transactions: bool = DROP_SELF_TRANSACTIONS,
) -> Tuple[pd.DataFrame, List[str]]:
    """
    Normalize types and drop malformed rows.

    Returns:
        (clean_df, diagnostics) where clean_df has string ids, float amounts
        and tz-aware UTC timestamps, in the original row order.
    """
    df = to_dataframe(transactions)
    diagnostics: List[str] = []

    missing_endpoint = (
        df["sender_id"].isna()
        | df["receiver_id"].isna()
        | (df["sender_id"].astype(str).str.strip() == "")
        | (df["receiver_id"].astype(str).str.strip() == "")
    )
    df = _drop(df, missing_endpoint, "missing sender or receiver", diagnostics)

    df = df.assign(
        transaction_id=df["transaction_id"].astype(str),
        sender_id=df["sender_id"].astype(str).str.strip(),
        receiver_id=df["receiver_id"].astype(str).str.strip(),
        amount=pd.to_numeric(df["amount"], errors="coerce").astype(float),
        timestamp=to_utc_timestamps(df["timestamp"]),
    )

    bad_amount = ~np.isfinite(df["amount"].astype(float)) | (df["amount"] <= 0)
    df = _drop(df, bad_amount, "non-numeric or non-positive amount", diagnostics)

    df = _drop(df, df["timestamp"].isna(), "unparseable timestamp", diagnostics)

    if drop_self_transactions:
        df = _drop(df, df["sender_id"] == df["receiver_id"], "sender equal to receiver", diagnostics)

    return df.reset_index(drop=True), diagnostics
