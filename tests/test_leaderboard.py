from __future__ import annotations

import csv

from holder_leaderboard.config import AppConfig
from holder_leaderboard.pipeline.leaderboard import compute_leaderboard, describe_scoring
from holder_leaderboard.pipeline.report import write_report
from holder_leaderboard.records import SwapRecord, TransferRecord

ZERO = "0x0000000000000000000000000000000000000000"
DEPLOYER = "0x34919f7dd781e5cdbda923392dbc627add997a8f"
HOLDER_X = "0x000000000000000000000000000000000000000a"
HOLDER_Y = "0x000000000000000000000000000000000000000b"
WEI = 10**18


def _transfer(block: int, sender: str, recipient: str, value: int, timestamp: int) -> TransferRecord:
    return TransferRecord(
        id=f"t-{block}",
        tx_hash=f"0xtx{block}",
        block_number=block,
        timestamp=timestamp,
        log_index=0,
        from_address=sender,
        to_address=recipient,
        value=value,
    )


def _swap(block: int, sender: str, recipient: str, amount0: int, amount1: int, price: int) -> SwapRecord:
    return SwapRecord(
        id=f"s-{block}",
        tx_hash=f"0xswap{block}",
        block_number=block,
        timestamp=block * 10,
        log_index=1,
        sender=sender,
        recipient=recipient,
        amount0=amount0,
        amount1=amount1,
        effective_price=price,
    )


def _scenario() -> tuple[list[TransferRecord], list[SwapRecord]]:
    transfers = [
        _transfer(1, ZERO, HOLDER_X, 100, timestamp=0),
        _transfer(2, DEPLOYER, HOLDER_Y, 50, timestamp=10),
    ]
    swaps = [_swap(3, HOLDER_Y, HOLDER_Y, 20, -20, 2 * WEI)]
    return transfers, swaps


def test_mint_og_and_sell_scenario() -> None:
    transfers, swaps = _scenario()
    rows = compute_leaderboard(transfers, swaps, AppConfig(), now=100)
    by_address = {row["address"]: row for row in rows}

    holder_x = by_address[HOLDER_X]
    assert holder_x["balance"] == "100"
    assert holder_x["isOG"] is False
    assert holder_x["isDiamondHands"] is True
    assert holder_x["timeWeightedBalance"] == "10000"

    holder_y = by_address[HOLDER_Y]
    assert holder_y["isOG"] is True
    assert holder_y["balance"] == "50"
    assert holder_y["totalSold"] == "20"
    assert holder_y["totalProfitEth"] == "40"
    assert holder_y["isDiamondHands"] is False
    assert holder_y["isPaperHands"] is False

    assert [row["address"] for row in rows] == [HOLDER_X, HOLDER_Y, DEPLOYER]
    assert by_address[DEPLOYER]["balance"] == "-50"


def test_rows_serialize_integers_as_strings() -> None:
    transfers, swaps = _scenario()
    rows = compute_leaderboard(transfers, swaps, AppConfig(), now=100)
    integer_fields = [
        "balance",
        "totalReceived",
        "totalSent",
        "totalSold",
        "totalProfitEth",
        "timeWeightedBalance",
        "historicalHighBalance",
    ]
    for row in rows:
        assert all(isinstance(row[field], str) for field in integer_fields)
        assert isinstance(row["score"], float)


def test_leaderboard_is_sorted_and_deterministic() -> None:
    transfers, swaps = _scenario()
    transfers.append(_transfer(4, HOLDER_X, HOLDER_Y, 95, timestamp=40))
    config = AppConfig()

    first = compute_leaderboard(transfers, swaps, config, now=1_000)
    second = compute_leaderboard(list(reversed(transfers)), swaps, config, now=1_000)

    assert first == second
    scores = [row["score"] for row in first]
    assert all(a >= b for a, b in zip(scores, scores[1:]))


def test_equal_scores_are_ordered_by_address() -> None:
    late = "0x00000000000000000000000000000000000000ff"
    early = "0x0000000000000000000000000000000000000001"
    transfers = [
        _transfer(1, ZERO, late, 10, timestamp=0),
        _transfer(2, ZERO, early, 10, timestamp=0),
    ]
    rows = compute_leaderboard(transfers, [], AppConfig(), now=50)
    assert rows[0]["score"] == rows[1]["score"]
    assert [row["address"] for row in rows] == [early, late]


def test_zero_activity_holders_are_excluded() -> None:
    idle = "0x00000000000000000000000000000000000000cc"
    swap_only = "0x00000000000000000000000000000000000000dd"
    transfers = [
        _transfer(1, ZERO, HOLDER_X, 10, timestamp=0),
        _transfer(2, ZERO, idle, 0, timestamp=5),
    ]
    swaps = [_swap(3, HOLDER_X, swap_only, -5, WEI, WEI)]

    rows = compute_leaderboard(transfers, swaps, AppConfig(), now=50)
    addresses = [row["address"] for row in rows]
    assert addresses == [HOLDER_X]


def test_describe_scoring_reflects_config() -> None:
    config = AppConfig()
    doc = describe_scoring(config)
    assert doc["message"] == "Froge Leaderboard API"
    assert doc["scoring"]["formula"] == (
        "log10(balance + 1) * 40 + log10(timeWeightedBalance + 1) * 40 - log10(totalSold + 1) * 20"
    )
    assert doc["scoring"]["bonuses"]["OG (received from deployer)"] == "1.15x"
    assert doc["scoring"]["penalties"]["Major dump (below 10% of peak)"] == "0.6x"
    assert doc["config"]["deployerAddress"] == DEPLOYER


def test_write_report_outputs(tmp_path) -> None:
    transfers, swaps = _scenario()
    rows = compute_leaderboard(transfers, swaps, AppConfig(), now=100)
    paths = write_report(rows, tmp_path / "out", now=100)

    assert paths["csv"].name == "leaderboard_1970-01-01.csv"
    assert paths["json"].exists()
    with paths["csv"].open(encoding="utf-8") as handle:
        reader = csv.DictReader(handle)
        csv_rows = list(reader)
    assert reader.fieldnames[:3] == ["rank", "address", "score"]
    assert [row["rank"] for row in csv_rows] == ["1", "2", "3"]
    assert csv_rows[0]["address"] == HOLDER_X

    markdown = paths["markdown"].read_text(encoding="utf-8")
    assert "- og: 1" in markdown
    assert "| 2 | " + HOLDER_Y in markdown
