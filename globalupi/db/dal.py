"""Data Access Layer for accounts, the ledger and investments.

Responsibilities
----------------
- Account store: create accounts, read balances, apply conditional debits.
- Ledger: append transaction and conversion records, list history newest first.
- Investments: list and add holdings per account.

Write helpers accept an optional cursor so that services can compose several
of them inside one `transaction()` scope; without a cursor each call runs in
its own short-lived connection and commits on return.
"""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Union

from globalupi.core.errors import (
    DuplicateEmail,
    InsufficientFunds,
    NotFound,
    ValidationError,
)
from globalupi.models.constants import (
    ALL_KINDS,
    BALANCE_COLUMNS,
    STARTING_BALANCES,
    STATUS_COMPLETED,
    Currency,
    TransactionKind,
)
from globalupi.models.transaction import Recipient
from globalupi.services.money import has_cent_precision, is_amount

UTC_NOW_SQL = "strftime('%Y-%m-%dT%H:%M:%fZ','now')"
PUBLIC_ACCOUNT_COLUMNS = (
    "id, name, email, phone, bank_name, account_number, created_at"
)


def _currency(value: Union[Currency, str]) -> Currency:
    try:
        return Currency(value)
    except ValueError as e:
        raise ValidationError(f"Unsupported currency '{value}'") from e


def _balance_column(currency: Union[Currency, str]) -> str:
    return BALANCE_COLUMNS[_currency(currency)]


def _transaction_kind(kind: Union[TransactionKind, str, None]) -> Optional[str]:
    """Normalize a history filter; None means no filter."""
    if kind is None or kind == ALL_KINDS:
        return None
    try:
        return TransactionKind(kind).value
    except ValueError as e:
        raise ValidationError(f"Unsupported transaction type '{kind}'") from e


class TransactionHistory:
    """Lazy view over an account's ledger, newest first.

    Each iteration runs the query afresh, so the same object can be walked
    more than once and always reflects committed state.
    """

    def __init__(self, db: "Database", account_id: int, kind: Optional[str] = None):
        self._db = db
        self.account_id = account_id
        self.kind = kind

    def _query(self) -> tuple[str, List[Any]]:
        sql = "SELECT * FROM transactions WHERE account_id = ?"
        params: List[Any] = [self.account_id]
        if self.kind is not None:
            sql += " AND type = ?"
            params.append(self.kind)
        sql += " ORDER BY created_at DESC, id DESC"
        return sql, params

    def __iter__(self) -> Iterator[Dict[str, Any]]:
        sql, params = self._query()
        conn = self._db._connect()
        try:
            for row in conn.execute(sql, params):
                yield dict(row)
        finally:
            conn.close()


class Database:
    def __init__(self, db_path: Path, timeout: float = 10.0):
        self.db_path = db_path
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Connection helpers
    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path, timeout=self.timeout)
        conn.row_factory = sqlite3.Row
        return conn

    @contextmanager
    def _cursor(self, cur: Optional[sqlite3.Cursor] = None) -> Iterator[sqlite3.Cursor]:
        """Reuse the caller's cursor or open a connection that commits on success."""
        if cur is not None:
            yield cur
            return
        conn = self._connect()
        try:
            with conn:
                yield conn.cursor()
        finally:
            conn.close()

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Cursor]:
        """Yield a cursor inside a write transaction.

        `BEGIN IMMEDIATE` takes the write lock up front, so a balance read
        inside the scope cannot be invalidated by another writer before the
        debit lands. Commits when the block exits cleanly, rolls back on any
        exception.
        """
        conn = self._connect()
        conn.isolation_level = None
        try:
            conn.execute("BEGIN IMMEDIATE")
            try:
                yield conn.cursor()
            except BaseException:
                if conn.in_transaction:
                    conn.execute("ROLLBACK")
                raise
            conn.execute("COMMIT")
        finally:
            conn.close()

    # ------------------------------------------------------------------
    # Account store
    def create_account(
        self,
        name: str,
        email: str,
        phone: str,
        bank_name: str,
        account_number: str,
        password_hash: str,
        cur: Optional[sqlite3.Cursor] = None,
    ) -> int:
        with self._cursor(cur) as c:
            try:
                c.execute(
                    f"""
                    INSERT INTO accounts (
                        name, email, phone, bank_name, account_number, password_hash,
                        balance_inr, balance_usd, balance_eur, created_at
                    ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ({UTC_NOW_SQL}))
                    """,
                    (
                        name,
                        email,
                        phone,
                        bank_name,
                        account_number,
                        password_hash,
                        STARTING_BALANCES[Currency.INR],
                        STARTING_BALANCES[Currency.USD],
                        STARTING_BALANCES[Currency.EUR],
                    ),
                )
            except sqlite3.IntegrityError as e:
                raise DuplicateEmail() from e
            return int(c.lastrowid)

    def get_account(self, account_id: int) -> Optional[Dict[str, Any]]:
        """Public profile columns only."""
        with self._connect() as conn:
            cur = conn.cursor()
            cur.execute(
                f"SELECT {PUBLIC_ACCOUNT_COLUMNS} FROM accounts WHERE id = ?",
                (account_id,),
            )
            row = cur.fetchone()
            return dict(row) if row else None

    def get_account_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        """Full row including the credential hash, for login checks."""
        with self._connect() as conn:
            cur = conn.cursor()
            cur.execute("SELECT * FROM accounts WHERE email = ?", (email,))
            row = cur.fetchone()
            return dict(row) if row else None

    def get_balances(
        self, account_id: int, cur: Optional[sqlite3.Cursor] = None
    ) -> Dict[str, float]:
        columns = ", ".join(BALANCE_COLUMNS.values())
        with self._cursor(cur) as c:
            c.execute(f"SELECT {columns} FROM accounts WHERE id = ?", (account_id,))
            row = c.fetchone()
        if row is None:
            raise NotFound()
        return {col: float(row[col]) for col in BALANCE_COLUMNS.values()}

    def get_balance(
        self,
        account_id: int,
        currency: Union[Currency, str],
        cur: Optional[sqlite3.Cursor] = None,
    ) -> float:
        col = _balance_column(currency)
        with self._cursor(cur) as c:
            c.execute(f"SELECT {col} FROM accounts WHERE id = ?", (account_id,))
            row = c.fetchone()
        if row is None:
            raise NotFound()
        return float(row[0])

    def debit(
        self,
        account_id: int,
        currency: Union[Currency, str],
        amount: float,
        cur: Optional[sqlite3.Cursor] = None,
    ) -> float:
        """Subtract `amount` if the balance covers it; return the new balance.

        The check and the update are one conditional UPDATE statement, so two
        concurrent debits can never both pass against the same funds.
        """
        col = _balance_column(currency)
        if not is_amount(amount):
            raise ValidationError("Amount must be greater than zero")
        if not has_cent_precision(amount):
            raise ValidationError("Amount cannot have more than 2 decimal places")
        with self._cursor(cur) as c:
            c.execute(
                f"UPDATE accounts SET {col} = ROUND({col} - ?, 2) "
                f"WHERE id = ? AND {col} >= ?",
                (amount, account_id, amount),
            )
            if c.rowcount == 0:
                c.execute("SELECT 1 FROM accounts WHERE id = ?", (account_id,))
                if c.fetchone() is None:
                    raise NotFound()
                raise InsufficientFunds()
            c.execute(f"SELECT {col} FROM accounts WHERE id = ?", (account_id,))
            return float(c.fetchone()[0])

    # ------------------------------------------------------------------
    # Ledger
    def record_transaction(
        self,
        account_id: int,
        kind: Union[TransactionKind, str],
        recipient: Optional[Recipient],
        amount: float,
        currency: Union[Currency, str],
        description: Optional[str],
        status: str = STATUS_COMPLETED,
        cur: Optional[sqlite3.Cursor] = None,
    ) -> int:
        kind_value = _transaction_kind(kind)
        if kind_value is None:
            raise ValidationError("Transaction type is required")
        with self._cursor(cur) as c:
            c.execute(
                f"""
                INSERT INTO transactions (
                    account_id, type, recipient_name, recipient_email,
                    recipient_bank_name, recipient_account_number,
                    amount, currency, description, status, created_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ({UTC_NOW_SQL}))
                """,
                (
                    account_id,
                    kind_value,
                    recipient.name if recipient else None,
                    recipient.email if recipient else None,
                    recipient.bank_name if recipient else None,
                    recipient.account_number if recipient else None,
                    amount,
                    _currency(currency).value,
                    description,
                    status,
                ),
            )
            return int(c.lastrowid)

    def record_conversion(
        self,
        account_id: int,
        from_currency: Union[Currency, str],
        to_currency: Union[Currency, str],
        from_amount: float,
        to_amount: float,
        rate: float,
        cur: Optional[sqlite3.Cursor] = None,
    ) -> int:
        with self._cursor(cur) as c:
            c.execute(
                f"""
                INSERT INTO conversions (
                    account_id, from_currency, to_currency, from_amount, to_amount,
                    rate, created_at
                ) VALUES (?, ?, ?, ?, ?, ?, ({UTC_NOW_SQL}))
                """,
                (
                    account_id,
                    _currency(from_currency).value,
                    _currency(to_currency).value,
                    from_amount,
                    to_amount,
                    rate,
                ),
            )
            return int(c.lastrowid)

    def list_transactions(
        self, account_id: int, kind: Union[TransactionKind, str, None] = None
    ) -> TransactionHistory:
        return TransactionHistory(self, account_id, _transaction_kind(kind))

    def list_conversions(self, account_id: int) -> List[Dict[str, Any]]:
        with self._connect() as conn:
            cur = conn.cursor()
            cur.execute(
                "SELECT * FROM conversions WHERE account_id = ? "
                "ORDER BY created_at DESC, id DESC",
                (account_id,),
            )
            return [dict(r) for r in cur.fetchall()]

    # ------------------------------------------------------------------
    # Investments
    def list_investments(self, account_id: int) -> List[Dict[str, Any]]:
        with self._connect() as conn:
            cur = conn.cursor()
            cur.execute(
                "SELECT * FROM investments WHERE account_id = ? ORDER BY id",
                (account_id,),
            )
            return [dict(r) for r in cur.fetchall()]

    def add_investment(
        self,
        account_id: int,
        symbol: str,
        name: str,
        type_: str,
        quantity: float,
        current_price: float,
        performance: float = 0.0,
    ) -> int:
        with self._cursor() as c:
            c.execute(
                f"""
                INSERT INTO investments (
                    account_id, symbol, name, type, quantity, current_price,
                    performance, created_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ({UTC_NOW_SQL}))
                """,
                (account_id, symbol, name, type_, quantity, current_price, performance),
            )
            return int(c.lastrowid)

    # ------------------------------------------------------------------
    # Metadata
    def get_metadata(self, key: str) -> Optional[str]:
        with self._connect() as conn:
            cur = conn.cursor()
            cur.execute("SELECT value FROM metadata WHERE key = ?", (key,))
            row = cur.fetchone()
            return row[0] if row else None
