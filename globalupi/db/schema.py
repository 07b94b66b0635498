"""Database schema DDL definitions and initialization utilities.

Tables:
  - accounts: registered users, credential hash and per-currency balances
  - transactions: append-only ledger of money movements (sent / received / conversion)
  - conversions: append-only audit of currency conversion quotes
  - investments: holdings listed on the dashboard
  - metadata: key/value store (schema version)
"""

from __future__ import annotations
import sqlite3
from typing import Sequence
from pathlib import Path

BASIC_UTC_NOW = "strftime('%Y-%m-%dT%H:%M:%fZ','now')"

ACCOUNTS_DDL = f"""
CREATE TABLE IF NOT EXISTS accounts (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    email TEXT NOT NULL UNIQUE,
    phone TEXT,
    bank_name TEXT,
    account_number TEXT,
    password_hash TEXT NOT NULL,
    balance_inr REAL NOT NULL DEFAULT 25500.00 CHECK (balance_inr >= 0),
    balance_usd REAL NOT NULL DEFAULT 500.00 CHECK (balance_usd >= 0),
    balance_eur REAL NOT NULL DEFAULT 300.00 CHECK (balance_eur >= 0),
    created_at TEXT NOT NULL DEFAULT ({BASIC_UTC_NOW})
);
"""

TRANSACTIONS_DDL = f"""
CREATE TABLE IF NOT EXISTS transactions (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    account_id INTEGER NOT NULL,
    type TEXT NOT NULL CHECK (type IN ('sent','received','conversion')),
    recipient_name TEXT,
    recipient_email TEXT,
    recipient_bank_name TEXT,
    recipient_account_number TEXT,
    amount REAL NOT NULL,
    currency TEXT NOT NULL, -- 'INR' | 'USD' | 'EUR'
    description TEXT,
    status TEXT NOT NULL DEFAULT 'completed',
    created_at TEXT NOT NULL DEFAULT ({BASIC_UTC_NOW}),
    FOREIGN KEY (account_id) REFERENCES accounts(id)
);
"""

CONVERSIONS_DDL = f"""
CREATE TABLE IF NOT EXISTS conversions (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    account_id INTEGER NOT NULL,
    from_currency TEXT NOT NULL,
    to_currency TEXT NOT NULL,
    from_amount REAL NOT NULL,
    to_amount REAL NOT NULL,
    rate REAL NOT NULL,
    created_at TEXT NOT NULL DEFAULT ({BASIC_UTC_NOW}),
    FOREIGN KEY (account_id) REFERENCES accounts(id)
);
"""

INVESTMENTS_DDL = f"""
CREATE TABLE IF NOT EXISTS investments (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    account_id INTEGER NOT NULL,
    symbol TEXT NOT NULL,
    name TEXT NOT NULL,
    type TEXT NOT NULL,
    quantity REAL NOT NULL,
    current_price REAL NOT NULL,
    performance REAL NOT NULL DEFAULT 0,
    created_at TEXT NOT NULL DEFAULT ({BASIC_UTC_NOW}),
    FOREIGN KEY (account_id) REFERENCES accounts(id)
);
"""

METADATA_DDL = f"""
CREATE TABLE IF NOT EXISTS metadata (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at TEXT NOT NULL DEFAULT ({BASIC_UTC_NOW})
);
"""

DDL_ORDER: Sequence[str] = (
    ACCOUNTS_DDL,
    TRANSACTIONS_DDL,
    CONVERSIONS_DDL,
    INVESTMENTS_DDL,
    METADATA_DDL,
)


def init_db(path: Path) -> None:
    """Create all tables idempotently.

    Parameters
    ----------
    path: Path to SQLite database file.
    """
    conn = sqlite3.connect(path)
    try:
        cur = conn.cursor()
        for ddl in DDL_ORDER:
            cur.execute(ddl)
        conn.commit()
    finally:
        conn.close()
