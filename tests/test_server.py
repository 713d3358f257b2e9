from __future__ import annotations

from fastapi.testclient import TestClient

from holder_leaderboard.api.server import create_app
from holder_leaderboard.config import AppConfig
from holder_leaderboard.records import SwapRecord, TransferRecord

ZERO = "0x0000000000000000000000000000000000000000"
DEPLOYER = "0x34919f7dd781e5cdbda923392dbc627add997a8f"
HOLDER = "0x00000000000000000000000000000000000000a1"


class _StaticSource:
    def __init__(self, transfers: list[TransferRecord], swaps: list[SwapRecord]) -> None:
        self.transfers = transfers
        self.swaps = swaps

    def fetch_transfers(self) -> list[TransferRecord]:
        return list(self.transfers)

    def fetch_swaps(self) -> list[SwapRecord]:
        return list(self.swaps)


class _BrokenSource:
    def fetch_transfers(self) -> list[TransferRecord]:
        raise ConnectionError("indexer unavailable")

    def fetch_swaps(self) -> list[SwapRecord]:
        return []


def _transfer(block: int, sender: str, recipient: str, value: int) -> TransferRecord:
    return TransferRecord(
        id=f"t-{block}",
        tx_hash=f"0xtx{block}",
        block_number=block,
        timestamp=block * 10,
        log_index=0,
        from_address=sender,
        to_address=recipient,
        value=value,
    )


def test_leaderboard_endpoint_returns_scored_holders() -> None:
    source = _StaticSource([_transfer(1, DEPLOYER, HOLDER, 10**20)], [])
    client = TestClient(create_app(config=AppConfig(), source=source, clock=lambda: 1_000))

    response = client.get("/leaderboard")
    assert response.status_code == 200
    rows = response.json()
    holder = next(row for row in rows if row["address"] == HOLDER)
    assert holder["balance"] == str(10**20)
    assert holder["timeWeightedBalance"] == str(10**20 * 990)
    assert holder["isOG"] is True
    assert isinstance(holder["score"], float)


def test_leaderboard_endpoint_hides_internal_failures() -> None:
    client = TestClient(create_app(config=AppConfig(), source=_BrokenSource(), clock=lambda: 1_000))

    response = client.get("/leaderboard")
    assert response.status_code == 500
    assert response.json() == {"error": "Failed to fetch leaderboard"}


def test_index_describes_scoring() -> None:
    client = TestClient(create_app(config=AppConfig(), source=_StaticSource([], [])))

    response = client.get("/")
    assert response.status_code == 200
    body = response.json()
    assert body["config"]["deployerAddress"] == DEPLOYER
    assert body["config"]["weights"] == {"balance": 40, "timeWeighted": 40, "soldPenalty": 20}
    assert "/leaderboard" in body["endpoints"]
