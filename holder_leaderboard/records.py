from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

PRICE_SCALE = 10**18
Q192 = 2**192


@dataclass(frozen=True)
class TransferRecord:
    id: str
    tx_hash: str
    block_number: int
    timestamp: int
    log_index: int
    from_address: str
    to_address: str
    value: int

    @property
    def chronological_key(self) -> tuple[int, int]:
        return (self.block_number, self.log_index)

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "TransferRecord":
        value = _int_field(row, "value")
        if value < 0:
            raise ValueError(f"Negative transfer value in record {row.get('id')}")
        return cls(
            id=str(_field(row, "id")),
            tx_hash=str(_field(row, "txHash", "tx_hash", default="")),
            block_number=_int_field(row, "blockNumber", "block_number"),
            timestamp=_int_field(row, "timestamp"),
            log_index=_int_field(row, "logIndex", "log_index"),
            from_address=str(_field(row, "from", "from_address")),
            to_address=str(_field(row, "to", "to_address")),
            value=value,
        )

    def to_row(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "txHash": self.tx_hash,
            "blockNumber": self.block_number,
            "timestamp": self.timestamp,
            "logIndex": self.log_index,
            "from": self.from_address,
            "to": self.to_address,
            "value": str(self.value),
        }


@dataclass(frozen=True)
class SwapRecord:
    id: str
    tx_hash: str
    block_number: int
    timestamp: int
    log_index: int
    sender: str
    recipient: str
    amount0: int
    amount1: int
    effective_price: int

    @property
    def chronological_key(self) -> tuple[int, int]:
        return (self.block_number, self.log_index)

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "SwapRecord":
        if _has_field(row, "effectivePrice", "effective_price"):
            price = _int_field(row, "effectivePrice", "effective_price")
        else:
            price = effective_price_from_sqrt_price_x96(_int_field(row, "sqrtPriceX96", "sqrt_price_x96"))
        if price < 0:
            raise ValueError(f"Negative effective price in record {row.get('id')}")
        return cls(
            id=str(_field(row, "id")),
            tx_hash=str(_field(row, "txHash", "tx_hash", default="")),
            block_number=_int_field(row, "blockNumber", "block_number"),
            timestamp=_int_field(row, "timestamp"),
            log_index=_int_field(row, "logIndex", "log_index"),
            sender=str(_field(row, "sender")),
            recipient=str(_field(row, "recipient")),
            amount0=_int_field(row, "amount0"),
            amount1=_int_field(row, "amount1"),
            effective_price=price,
        )

    def to_row(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "txHash": self.tx_hash,
            "blockNumber": self.block_number,
            "timestamp": self.timestamp,
            "logIndex": self.log_index,
            "sender": self.sender,
            "recipient": self.recipient,
            "amount0": str(self.amount0),
            "amount1": str(self.amount1),
            "effectivePrice": str(self.effective_price),
        }


@dataclass
class HolderMetrics:
    """Per-holder accumulator for one leaderboard computation.

    All token and ETH amounts are base-unit integers. ``balance_history`` holds
    ``(timestamp, balance)`` snapshots, one per transfer leg touching the holder.
    """

    balance: int = 0
    total_received: int = 0
    total_sent: int = 0
    total_sold: int = 0
    total_profit_eth: int = 0
    time_weighted_balance: int = 0
    has_bought: bool = False
    is_og: bool = False
    historical_high_balance: int = 0
    balance_history: list[tuple[int, int]] = field(default_factory=list)

    @property
    def has_activity(self) -> bool:
        return self.balance > 0 or self.total_received > 0 or self.total_sent > 0


def effective_price_from_sqrt_price_x96(sqrt_price_x96: int) -> int:
    """18-decimal fixed-point pool price from a Uniswap V3 ``sqrtPriceX96``."""

    return sqrt_price_x96 * sqrt_price_x96 * PRICE_SCALE // Q192


def _has_field(row: Mapping[str, Any], *names: str) -> bool:
    return any(row.get(name) is not None for name in names)


def _field(row: Mapping[str, Any], *names: str, default: Any = None) -> Any:
    for name in names:
        value = row.get(name)
        if value is not None:
            return value
    if default is not None:
        return default
    raise ValueError(f"Record {row.get('id')} is missing field {names[0]}")


def _int_field(row: Mapping[str, Any], *names: str) -> int:
    value = _field(row, *names)
    if isinstance(value, bool):
        raise ValueError(f"Field {names[0]} must be an integer, got {value!r}")
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        raise ValueError(f"Field {names[0]} must be an integer, got {value!r}") from None
