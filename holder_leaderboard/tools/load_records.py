from __future__ import annotations

import argparse
import logging
from pathlib import Path

from holder_leaderboard.config import load_config, resolve_path
from holder_leaderboard.db import store
from holder_leaderboard.records import SwapRecord, TransferRecord
from holder_leaderboard.utils.io import extract_records, load_json

logger = logging.getLogger(__name__)


def load_dumps(
    db_path: Path,
    transfers_path: Path | None = None,
    swaps_path: Path | None = None,
) -> dict[str, int]:
    """Load JSON (or .json.gz) record dumps into the sqlite store."""

    transfers = []
    swaps = []
    if transfers_path is not None:
        transfers = [TransferRecord.from_row(row) for row in extract_records(load_json(transfers_path))]
    if swaps_path is not None:
        swaps = [SwapRecord.from_row(row) for row in extract_records(load_json(swaps_path))]

    conn = store.get_connection(db_path)
    try:
        store.init_db(conn)
        conn.execute("BEGIN")
        store.insert_transfers(conn, transfers, commit=False)
        store.insert_swaps(conn, swaps, commit=False)
        conn.commit()
        totals = store.count_records(conn)
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()

    logger.info(
        "Loaded transfers=%d swaps=%d (store totals transfers=%d swaps=%d)",
        len(transfers),
        len(swaps),
        totals["transfers"],
        totals["swaps"],
    )
    return totals


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    parser = argparse.ArgumentParser(description="Load transfer and swap record dumps into the sqlite store")
    parser.add_argument("--transfers", type=Path, help="JSON or .json.gz file of transfer records")
    parser.add_argument("--swaps", type=Path, help="JSON or .json.gz file of swap records")
    parser.add_argument("--db", type=Path, help="sqlite path (defaults to source.db_path)")
    args = parser.parse_args()

    db_path = args.db or resolve_path(load_config().source.db_path)
    totals = load_dumps(db_path, args.transfers, args.swaps)
    print(f"transfers: {totals['transfers']}")
    print(f"swaps: {totals['swaps']}")


if __name__ == "__main__":
    main()
