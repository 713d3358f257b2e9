from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Protocol

from holder_leaderboard.api.indexer import IndexerClient
from holder_leaderboard.config import AppConfig, resolve_path
from holder_leaderboard.db import store
from holder_leaderboard.records import SwapRecord, TransferRecord

logger = logging.getLogger(__name__)


class RecordSource(Protocol):
    def fetch_transfers(self) -> list[TransferRecord]: ...

    def fetch_swaps(self) -> list[SwapRecord]: ...


class SqliteRecordSource:
    """Reads records from the indexer's sqlite store, one connection per read."""

    def __init__(self, db_path: Path) -> None:
        self.db_path = db_path

    def fetch_transfers(self) -> list[TransferRecord]:
        conn = store.get_connection(self.db_path)
        try:
            store.init_db(conn)
            return store.fetch_transfers(conn)
        finally:
            conn.close()

    def fetch_swaps(self) -> list[SwapRecord]:
        conn = store.get_connection(self.db_path)
        try:
            store.init_db(conn)
            return store.fetch_swaps(conn)
        finally:
            conn.close()


def build_source(config: AppConfig) -> RecordSource:
    if config.source.kind == "indexer":
        return IndexerClient(
            config.source.indexer_url,
            timeout_s=config.source.request_timeout_s,
            page_size=config.source.page_size,
            retry_max=config.source.retry_max,
        )
    return SqliteRecordSource(resolve_path(config.source.db_path))


def fetch_record_sets(source: RecordSource) -> tuple[list[TransferRecord], list[SwapRecord]]:
    with ThreadPoolExecutor(max_workers=2) as pool:
        transfers_future = pool.submit(source.fetch_transfers)
        swaps_future = pool.submit(source.fetch_swaps)
        transfers = transfers_future.result()
        swaps = swaps_future.result()
    logger.info("Fetched %d transfers and %d swaps", len(transfers), len(swaps))
    return transfers, swaps
