"""
Risk Score Normalizer.

Clamps raw suspicion scores to [0, 100] and rounds to 2 decimal places.

Time Complexity: O(V)
Memory: O(V)
"""

from typing import Dict

from app.config import MAX_SCORE


def normalize_scores(scores: Dict[str, float]) -> Dict[str, float]:
    """Clamp all scores to [0, MAX_SCORE] and round to 2 decimal places."""
    return {
        account: round(max(0.0, min(MAX_SCORE, float(score))), 2)
        for account, score in scores.items()
    }
