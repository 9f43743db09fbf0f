"""SQL queries over the accounts, entries and transfers tables."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Sequence

from .models import Account, Entry, Transfer

_SCHEMA = """
CREATE TABLE IF NOT EXISTS accounts (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    owner TEXT NOT NULL,
    balance INTEGER NOT NULL,
    currency TEXT NOT NULL,
    created_at TEXT NOT NULL
        DEFAULT (strftime('%Y-%m-%dT%H:%M:%f', 'now') || '+00:00')
);

CREATE TABLE IF NOT EXISTS entries (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    account_id INTEGER NOT NULL REFERENCES accounts (id),
    amount INTEGER NOT NULL,
    created_at TEXT NOT NULL
        DEFAULT (strftime('%Y-%m-%dT%H:%M:%f', 'now') || '+00:00')
);

CREATE TABLE IF NOT EXISTS transfers (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    from_account_id INTEGER NOT NULL REFERENCES accounts (id),
    to_account_id INTEGER NOT NULL REFERENCES accounts (id),
    amount INTEGER NOT NULL,
    created_at TEXT NOT NULL
        DEFAULT (strftime('%Y-%m-%dT%H:%M:%f', 'now') || '+00:00')
);

CREATE INDEX IF NOT EXISTS accounts_owner_idx ON accounts (owner);
CREATE INDEX IF NOT EXISTS entries_account_idx ON entries (account_id);
CREATE INDEX IF NOT EXISTS transfers_from_idx ON transfers (from_account_id);
CREATE INDEX IF NOT EXISTS transfers_to_idx ON transfers (to_account_id);
CREATE INDEX IF NOT EXISTS transfers_pair_idx
    ON transfers (from_account_id, to_account_id);
"""

_ACCOUNT_COLUMNS = "id, owner, balance, currency, created_at"
_ENTRY_COLUMNS = "id, account_id, amount, created_at"
_TRANSFER_COLUMNS = "id, from_account_id, to_account_id, amount, created_at"


class NotFoundError(LookupError):
    """Raised when a query that returns one row finds none."""

    def __init__(self, message: str = "sql: no rows in result set") -> None:
        super().__init__(message)


@dataclass(frozen=True)
class CreateAccountParams:
    owner: str
    balance: int
    currency: str


@dataclass(frozen=True)
class UpdateAccountBalanceParams:
    amount: int
    id: int


@dataclass(frozen=True)
class CreateEntryParams:
    account_id: int
    amount: int


@dataclass(frozen=True)
class CreateTransferParams:
    from_account_id: int
    to_account_id: int
    amount: int


def create_schema(conn: Any) -> None:
    """Create the bank tables on a SQLite connection and enforce foreign keys."""
    conn.execute("PRAGMA foreign_keys = ON")
    conn.executescript(_SCHEMA)


def _account(row: Sequence[Any]) -> Account:
    id_, owner, balance, currency, created_at = row
    return Account(id_, owner, balance, currency, datetime.fromisoformat(created_at))


def _entry(row: Sequence[Any]) -> Entry:
    id_, account_id, amount, created_at = row
    return Entry(id_, account_id, amount, datetime.fromisoformat(created_at))


def _transfer(row: Sequence[Any]) -> Transfer:
    id_, from_id, to_id, amount, created_at = row
    return Transfer(id_, from_id, to_id, amount, datetime.fromisoformat(created_at))


class Queries:
    """Typed access to the bank tables through a DB-API connection or cursor.

    Statements are issued on ``db`` without committing; the caller decides
    whether they run in autocommit mode or inside a transaction.
    """

    def __init__(self, db: Any) -> None:
        self._db = db

    def with_tx(self, tx: Any) -> Queries:
        """Return a copy of these queries bound to ``tx``."""
        return Queries(tx)

    def _one(self, sql: str, params: Sequence[Any]) -> Sequence[Any]:
        row = self._db.execute(sql, params).fetchone()
        if row is None:
            raise NotFoundError()
        return row

    def _all(self, sql: str) -> list[Sequence[Any]]:
        return self._db.execute(sql).fetchall()

    # accounts

    def create_account(self, arg: CreateAccountParams) -> Account:
        cursor = self._db.execute(
            "INSERT INTO accounts (owner, balance, currency) VALUES (?, ?, ?)",
            (arg.owner, arg.balance, arg.currency),
        )
        return self.get_account_by_id(cursor.lastrowid)

    def delete_account(self, account_id: int) -> None:
        self._db.execute("DELETE FROM accounts WHERE id = ?", (account_id,))

    def get_account_by_id(self, account_id: int) -> Account:
        return _account(
            self._one(
                f"SELECT {_ACCOUNT_COLUMNS} FROM accounts WHERE id = ? LIMIT 1",
                (account_id,),
            )
        )

    def get_account_for_update(self, account_id: int) -> Account:
        """Fetch an account inside a transaction that will change its balance.

        SQLite locks the whole database for writers, so no row lock is taken.
        """
        return self.get_account_by_id(account_id)

    def list_accounts(self) -> list[Account]:
        return [_account(row) for row in self._all(f"SELECT {_ACCOUNT_COLUMNS} FROM accounts")]

    def update_account_balance(self, arg: UpdateAccountBalanceParams) -> Account:
        """Add ``arg.amount`` to the account's balance and return the account."""
        cursor = self._db.execute(
            "UPDATE accounts SET balance = balance + ? WHERE id = ?",
            (arg.amount, arg.id),
        )
        if cursor.rowcount == 0:
            raise NotFoundError()
        return self.get_account_by_id(arg.id)

    # entries

    def create_entry(self, arg: CreateEntryParams) -> Entry:
        cursor = self._db.execute(
            "INSERT INTO entries (account_id, amount) VALUES (?, ?)",
            (arg.account_id, arg.amount),
        )
        return self.get_entry(cursor.lastrowid)

    def get_entry(self, entry_id: int) -> Entry:
        return _entry(
            self._one(f"SELECT {_ENTRY_COLUMNS} FROM entries WHERE id = ?", (entry_id,))
        )

    def list_entries(self) -> list[Entry]:
        return [_entry(row) for row in self._all(f"SELECT {_ENTRY_COLUMNS} FROM entries")]

    # transfers

    def create_transfer(self, arg: CreateTransferParams) -> Transfer:
        cursor = self._db.execute(
            "INSERT INTO transfers (from_account_id, to_account_id, amount) VALUES (?, ?, ?)",
            (arg.from_account_id, arg.to_account_id, arg.amount),
        )
        return self.get_transfer(cursor.lastrowid)

    def get_transfer(self, transfer_id: int) -> Transfer:
        return _transfer(
            self._one(
                f"SELECT {_TRANSFER_COLUMNS} FROM transfers WHERE id = ?", (transfer_id,)
            )
        )

    def list_transfers(self) -> list[Transfer]:
        return [
            _transfer(row) for row in self._all(f"SELECT {_TRANSFER_COLUMNS} FROM transfers")
        ]