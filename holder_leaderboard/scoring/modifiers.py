from __future__ import annotations

from functools import reduce
from typing import Callable

from holder_leaderboard.config import ScoringConfig
from holder_leaderboard.records import HolderMetrics
from holder_leaderboard.scoring.features import truncated_ratio

Modifier = Callable[[HolderMetrics, ScoringConfig], float]


def is_paper_hands(holder: HolderMetrics) -> bool:
    return holder.balance == 0 and holder.total_sold > 0


def is_diamond_hands(holder: HolderMetrics) -> bool:
    return holder.total_sold == 0


def paper_hands(holder: HolderMetrics, scoring: ScoringConfig) -> float:
    return scoring.paper_hands_penalty if is_paper_hands(holder) else 1.0


def diamond_hands(holder: HolderMetrics, scoring: ScoringConfig) -> float:
    return scoring.diamond_hands_bonus if is_diamond_hands(holder) else 1.0


def og(holder: HolderMetrics, scoring: ScoringConfig) -> float:
    return scoring.og_bonus if holder.is_og else 1.0


def peak_dump(holder: HolderMetrics, scoring: ScoringConfig) -> float:
    """Penalty tier for how far the balance sits below its historical peak."""

    if holder.historical_high_balance <= 0:
        return 1.0
    ratio = truncated_ratio(holder.balance, holder.historical_high_balance)
    tiers = scoring.dump_penalties
    if ratio < tiers.major_below:
        return tiers.major
    if ratio < tiers.significant_below:
        return tiers.significant
    if ratio < tiers.moderate_below:
        return tiers.moderate
    return 1.0


# Application order is part of the score definition.
MODIFIERS: tuple[Modifier, ...] = (paper_hands, diamond_hands, og, peak_dump)


def apply_modifiers(
    base: float,
    holder: HolderMetrics,
    scoring: ScoringConfig,
    modifiers: tuple[Modifier, ...] = MODIFIERS,
) -> float:
    return reduce(lambda score, modifier: score * modifier(holder, scoring), modifiers, base)
