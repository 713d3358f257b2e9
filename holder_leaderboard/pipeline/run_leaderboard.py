from __future__ import annotations

import logging

from holder_leaderboard.config import AppConfig, load_config, resolve_path
from holder_leaderboard.pipeline.leaderboard import compute_leaderboard
from holder_leaderboard.pipeline.report import status_counts, write_report
from holder_leaderboard.pipeline.sources import build_source, fetch_record_sets
from holder_leaderboard.utils.time import now_seconds, parse_timestamp

logger = logging.getLogger(__name__)


def resolve_now(config: AppConfig) -> int:
    if config.run.now_override:
        pinned = parse_timestamp(config.run.now_override)
        if pinned is None:
            raise ValueError(f"Invalid run.now_override: {config.run.now_override!r}")
        return pinned
    return now_seconds()


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    config = load_config()
    now = resolve_now(config)

    logger.info("Fetching transfer and swap records (source=%s)", config.source.kind)
    transfers, swaps = fetch_record_sets(build_source(config))

    logger.info("Computing leaderboard at now=%d", now)
    rows = compute_leaderboard(transfers, swaps, config, now)

    out_dir = resolve_path(config.run.out_dir)
    write_report(rows, out_dir, now, top_n=config.run.top_n)

    counts = status_counts(rows)
    logger.info(
        "Run summary transfers=%d swaps=%d holders=%d diamond=%d paper=%d og=%d outputs=%s",
        len(transfers),
        len(swaps),
        len(rows),
        counts["diamond_hands"],
        counts["paper_hands"],
        counts["og"],
        out_dir,
    )
    for idx, row in enumerate(rows[: config.run.top_n], start=1):
        print(f"{idx:>3}. {row['address']} score={row['score']:.2f} balance={row['balance']}")


if __name__ == "__main__":
    main()
