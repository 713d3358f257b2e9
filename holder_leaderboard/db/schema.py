SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS transfers (
    id TEXT PRIMARY KEY,
    tx_hash TEXT,
    block_number INTEGER NOT NULL,
    timestamp INTEGER NOT NULL,
    log_index INTEGER NOT NULL,
    from_address TEXT NOT NULL,
    to_address TEXT NOT NULL,
    value TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS transfers_timestamp_idx ON transfers (timestamp);
CREATE INDEX IF NOT EXISTS transfers_from_idx ON transfers (from_address);
CREATE INDEX IF NOT EXISTS transfers_to_idx ON transfers (to_address);
CREATE INDEX IF NOT EXISTS transfers_block_idx ON transfers (block_number, log_index);

CREATE TABLE IF NOT EXISTS swaps (
    id TEXT PRIMARY KEY,
    tx_hash TEXT NOT NULL,
    block_number INTEGER NOT NULL,
    timestamp INTEGER NOT NULL,
    log_index INTEGER NOT NULL,
    sender TEXT NOT NULL,
    recipient TEXT NOT NULL,
    amount0 TEXT NOT NULL,
    amount1 TEXT NOT NULL,
    effective_price TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS swaps_timestamp_idx ON swaps (timestamp);
CREATE INDEX IF NOT EXISTS swaps_sender_idx ON swaps (sender);
CREATE INDEX IF NOT EXISTS swaps_recipient_idx ON swaps (recipient);
CREATE INDEX IF NOT EXISTS swaps_block_idx ON swaps (block_number, log_index);
"""
