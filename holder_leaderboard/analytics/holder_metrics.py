from __future__ import annotations

import logging
from typing import Iterable

from holder_leaderboard.records import PRICE_SCALE, HolderMetrics, SwapRecord, TransferRecord

logger = logging.getLogger(__name__)

HolderMap = dict[str, HolderMetrics]


def get_holder(holders: HolderMap, address: str) -> HolderMetrics:
    return holders.setdefault(address.lower(), HolderMetrics())


def chronological(records: Iterable[TransferRecord | SwapRecord]) -> list:
    """Records ordered by block number, then log index within the block."""

    return sorted(records, key=lambda record: record.chronological_key)


def process_transfers(
    transfers: Iterable[TransferRecord],
    holders: HolderMap,
    deployer_address: str,
    zero_address: str,
) -> None:
    deployer = deployer_address.lower()
    zero = zero_address.lower()
    count = 0
    for transfer in chronological(transfers):
        sender = transfer.from_address.lower()
        recipient = transfer.to_address.lower()
        value = transfer.value

        if recipient != zero:
            holder = get_holder(holders, recipient)
            holder.balance += value
            holder.total_received += value
            if holder.balance > holder.historical_high_balance:
                holder.historical_high_balance = holder.balance
            if sender == deployer:
                holder.has_bought = True
                holder.is_og = True
            holder.balance_history.append((transfer.timestamp, holder.balance))

        if sender != zero:
            holder = get_holder(holders, sender)
            holder.balance -= value
            holder.total_sent += value
            holder.balance_history.append((transfer.timestamp, holder.balance))
        count += 1

    logger.debug("Applied %d transfers across %d holders", count, len(holders))


def eth_value(amount1: int, effective_price: int) -> int:
    """ETH value of a swap's opposite leg at its 18-decimal effective price.

    Truncates toward zero; sub-wei remainders are dropped on every swap.
    """

    return abs(amount1) * effective_price // PRICE_SCALE


def process_swaps(
    swaps: Iterable[SwapRecord],
    holders: HolderMap,
    zero_address: str,
) -> None:
    zero = zero_address.lower()
    for swap in chronological(swaps):
        if swap.amount0 > 0:
            if swap.sender.lower() == zero:
                continue
            holder = get_holder(holders, swap.sender)
            holder.total_sold += swap.amount0
            if holder.has_bought:
                holder.total_profit_eth += eth_value(swap.amount1, swap.effective_price)
        elif swap.amount0 < 0:
            if swap.recipient.lower() == zero:
                continue
            holder = get_holder(holders, swap.recipient)
            holder.has_bought = True
            holder.total_profit_eth -= eth_value(swap.amount1, swap.effective_price)


def time_weighted_balance(history: list[tuple[int, int]], now: int) -> int:
    if not history:
        return 0
    ordered = sorted(history, key=lambda entry: entry[0])
    total = 0
    for (timestamp, balance), (next_timestamp, _) in zip(ordered, ordered[1:]):
        total += balance * (next_timestamp - timestamp)
    last_timestamp, last_balance = ordered[-1]
    total += last_balance * (now - last_timestamp)
    return total


def compute_time_weighted_balances(holders: HolderMap, now: int) -> None:
    for holder in holders.values():
        holder.time_weighted_balance = time_weighted_balance(holder.balance_history, now)


def build_holder_metrics(
    transfers: Iterable[TransferRecord],
    swaps: Iterable[SwapRecord],
    deployer_address: str,
    zero_address: str,
    now: int,
) -> HolderMap:
    holders: HolderMap = {}
    process_transfers(transfers, holders, deployer_address, zero_address)
    process_swaps(swaps, holders, zero_address)
    compute_time_weighted_balances(holders, now)
    return holders
