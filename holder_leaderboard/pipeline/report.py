from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import Any

from holder_leaderboard.utils.io import ensure_dir, save_json
from holder_leaderboard.utils.time import utc_date

logger = logging.getLogger(__name__)

HEADERS = [
    "rank",
    "address",
    "score",
    "balance",
    "totalReceived",
    "totalSent",
    "totalSold",
    "totalProfitEth",
    "timeWeightedBalance",
    "historicalHighBalance",
    "isDiamondHands",
    "isPaperHands",
    "isOG",
]


def write_report(rows: list[dict[str, Any]], out_dir: Path, now: int, top_n: int = 20) -> dict[str, Path]:
    ensure_dir(out_dir)
    report_date = utc_date(now)
    csv_path = out_dir / f"leaderboard_{report_date}.csv"
    json_path = out_dir / f"leaderboard_{report_date}.json"
    md_path = out_dir / f"leaderboard_{report_date}.md"

    csv_rows = [{**{key: row.get(key) for key in HEADERS}, "rank": idx} for idx, row in enumerate(rows, start=1)]
    with csv_path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.DictWriter(handle, fieldnames=HEADERS)
        writer.writeheader()
        writer.writerows(csv_rows)

    save_json(json_path, rows)

    counts = status_counts(rows)
    with md_path.open("w", encoding="utf-8") as handle:
        handle.write(f"# Holder Leaderboard ({report_date})\n\n")
        handle.write(f"- evaluated_at: {now}\n")
        handle.write(f"- holders: {len(rows)}\n")
        handle.write(f"- diamond_hands: {counts['diamond_hands']}\n")
        handle.write(f"- paper_hands: {counts['paper_hands']}\n")
        handle.write(f"- og: {counts['og']}\n\n")
        if not rows:
            handle.write("No holders with recorded activity.\n")
        else:
            handle.write("| Rank | Address | Score | Balance | Sold | Profit (wei) | Flags |\n")
            handle.write("| --- | --- | --- | --- | --- | --- | --- |\n")
            for idx, row in enumerate(rows[:top_n], start=1):
                handle.write(
                    f"| {idx} | {row['address']} | {row['score']:.2f} | {row['balance']} "
                    f"| {row['totalSold']} | {row['totalProfitEth']} | {_flags(row)} |\n"
                )

    logger.info("Wrote leaderboard reports to %s", out_dir)
    return {"csv": csv_path, "json": json_path, "markdown": md_path}


def status_counts(rows: list[dict[str, Any]]) -> dict[str, int]:
    return {
        "diamond_hands": sum(1 for row in rows if row.get("isDiamondHands")),
        "paper_hands": sum(1 for row in rows if row.get("isPaperHands")),
        "og": sum(1 for row in rows if row.get("isOG")),
    }


def _flags(row: dict[str, Any]) -> str:
    flags = []
    if row.get("isOG"):
        flags.append("OG")
    if row.get("isDiamondHands"):
        flags.append("diamond")
    if row.get("isPaperHands"):
        flags.append("paper")
    return ", ".join(flags) or "-"
