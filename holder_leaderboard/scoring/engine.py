from __future__ import annotations

from holder_leaderboard.config import ScoringConfig
from holder_leaderboard.records import HolderMetrics
from holder_leaderboard.scoring.features import log10_bigint, round_half_away
from holder_leaderboard.scoring.modifiers import apply_modifiers


def base_score(holder: HolderMetrics, scoring: ScoringConfig) -> float:
    """Log-weighted conviction score before modifiers.

    Uses the bounded-precision float logarithm from ``log10_bigint``; this is
    the only place token amounts leave integer arithmetic.
    """

    return (
        log10_bigint(holder.balance + 1) * scoring.balance_weight
        + log10_bigint(holder.time_weighted_balance + 1) * scoring.time_weighted_weight
        - log10_bigint(holder.total_sold + 1) * scoring.sold_penalty_weight
    )


def score_holder(holder: HolderMetrics, scoring: ScoringConfig) -> float:
    return round_half_away(apply_modifiers(base_score(holder, scoring), holder, scoring))
