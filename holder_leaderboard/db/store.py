from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Iterable

from holder_leaderboard.db.schema import SCHEMA_SQL
from holder_leaderboard.records import SwapRecord, TransferRecord


def get_connection(db_path: Path) -> sqlite3.Connection:
    db_path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    return conn


def init_db(conn: sqlite3.Connection) -> None:
    conn.executescript(SCHEMA_SQL)
    conn.commit()


def insert_transfers(
    conn: sqlite3.Connection,
    transfers: Iterable[TransferRecord],
    commit: bool = True,
) -> int:
    rows = []
    for transfer in transfers:
        rows.append(
            (
                transfer.id,
                transfer.tx_hash,
                transfer.block_number,
                transfer.timestamp,
                transfer.log_index,
                transfer.from_address,
                transfer.to_address,
                str(transfer.value),
            )
        )
    conn.executemany(
        """
        INSERT OR REPLACE INTO transfers
        (id, tx_hash, block_number, timestamp, log_index, from_address, to_address, value)
        VALUES (?, ?, ?, ?, ?, ?, ?, ?)
        """,
        rows,
    )
    if commit:
        conn.commit()
    return len(rows)


def insert_swaps(
    conn: sqlite3.Connection,
    swaps: Iterable[SwapRecord],
    commit: bool = True,
) -> int:
    rows = []
    for swap in swaps:
        rows.append(
            (
                swap.id,
                swap.tx_hash,
                swap.block_number,
                swap.timestamp,
                swap.log_index,
                swap.sender,
                swap.recipient,
                str(swap.amount0),
                str(swap.amount1),
                str(swap.effective_price),
            )
        )
    conn.executemany(
        """
        INSERT OR REPLACE INTO swaps
        (id, tx_hash, block_number, timestamp, log_index, sender, recipient,
         amount0, amount1, effective_price)
        VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
        """,
        rows,
    )
    if commit:
        conn.commit()
    return len(rows)


def fetch_transfers(conn: sqlite3.Connection) -> list[TransferRecord]:
    rows = conn.execute(
        """
        SELECT id, tx_hash, block_number, timestamp, log_index, from_address, to_address, value
        FROM transfers ORDER BY block_number, log_index
        """
    ).fetchall()
    return [TransferRecord.from_row(dict(row)) for row in rows]


def fetch_swaps(conn: sqlite3.Connection) -> list[SwapRecord]:
    rows = conn.execute(
        """
        SELECT id, tx_hash, block_number, timestamp, log_index, sender, recipient,
               amount0, amount1, effective_price
        FROM swaps ORDER BY block_number, log_index
        """
    ).fetchall()
    return [SwapRecord.from_row(dict(row)) for row in rows]


def count_records(conn: sqlite3.Connection) -> dict[str, int]:
    transfers = conn.execute("SELECT COUNT(*) AS count FROM transfers").fetchone()
    swaps = conn.execute("SELECT COUNT(*) AS count FROM swaps").fetchone()
    return {"transfers": transfers["count"], "swaps": swaps["count"]}
