from __future__ import annotations

import logging
from typing import Any, Iterable

from holder_leaderboard.analytics.holder_metrics import HolderMap, build_holder_metrics
from holder_leaderboard.config import AppConfig
from holder_leaderboard.records import HolderMetrics, SwapRecord, TransferRecord
from holder_leaderboard.scoring.engine import score_holder
from holder_leaderboard.scoring.modifiers import is_diamond_hands, is_paper_hands

logger = logging.getLogger(__name__)


def holder_row(address: str, holder: HolderMetrics, score: float) -> dict[str, Any]:
    return {
        "address": address,
        "balance": str(holder.balance),
        "totalReceived": str(holder.total_received),
        "totalSent": str(holder.total_sent),
        "totalSold": str(holder.total_sold),
        "totalProfitEth": str(holder.total_profit_eth),
        "timeWeightedBalance": str(holder.time_weighted_balance),
        "historicalHighBalance": str(holder.historical_high_balance),
        "score": score,
        "isDiamondHands": is_diamond_hands(holder),
        "isPaperHands": is_paper_hands(holder),
        "isOG": holder.is_og,
    }


def build_leaderboard(holders: HolderMap, config: AppConfig) -> list[dict[str, Any]]:
    rows = [
        holder_row(address, holder, score_holder(holder, config.scoring))
        for address, holder in holders.items()
        if holder.has_activity
    ]
    # Equal scores fall back to address order so output is reproducible.
    rows.sort(key=lambda row: row["address"])
    rows.sort(key=lambda row: row["score"], reverse=True)
    return rows


def compute_leaderboard(
    transfers: Iterable[TransferRecord],
    swaps: Iterable[SwapRecord],
    config: AppConfig,
    now: int,
) -> list[dict[str, Any]]:
    holders = build_holder_metrics(
        transfers,
        swaps,
        deployer_address=config.token.deployer_address,
        zero_address=config.token.zero_address,
        now=now,
    )
    leaderboard = build_leaderboard(holders, config)
    logger.info("Scored %d of %d tracked holders", len(leaderboard), len(holders))
    return leaderboard


def describe_scoring(config: AppConfig) -> dict[str, Any]:
    scoring = config.scoring
    dump = scoring.dump_penalties
    return {
        "message": f"{config.token.name} Leaderboard API",
        "endpoints": {
            "/leaderboard": "Get holder leaderboard with scores calculated from transfer and swap data",
        },
        "scoring": {
            "formula": (
                f"log10(balance + 1) * {_fmt(scoring.balance_weight)}"
                f" + log10(timeWeightedBalance + 1) * {_fmt(scoring.time_weighted_weight)}"
                f" - log10(totalSold + 1) * {_fmt(scoring.sold_penalty_weight)}"
            ),
            "bonuses": {
                "Diamond hands (never sold)": f"{_fmt(scoring.diamond_hands_bonus)}x",
                "OG (received from deployer)": f"{_fmt(scoring.og_bonus)}x",
            },
            "penalties": {
                "Sold everything": f"{_fmt(scoring.paper_hands_penalty)}x",
                f"Major dump (below {_pct(dump.major_below)} of peak)": f"{_fmt(dump.major)}x",
                f"Significant dump (below {_pct(dump.significant_below)} of peak)": f"{_fmt(dump.significant)}x",
                f"Moderate dump (below {_pct(dump.moderate_below)} of peak)": f"{_fmt(dump.moderate)}x",
            },
        },
        "statusFlags": {
            "isDiamondHands": "Never sold any tokens (totalSold = 0)",
            "isPaperHands": "Sold everything (balance = 0 and totalSold > 0)",
            "isOG": "Received tokens directly from deployer",
        },
        "config": {
            "deployerAddress": config.token.deployer_address,
            "tokenAddress": config.token.contract_address,
            "weights": {
                "balance": scoring.balance_weight,
                "timeWeighted": scoring.time_weighted_weight,
                "soldPenalty": scoring.sold_penalty_weight,
            },
        },
    }


def _fmt(value: float) -> str:
    return f"{value:g}"


def _pct(value: float) -> str:
    return f"{value * 100:g}%"
