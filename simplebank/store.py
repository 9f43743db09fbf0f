"""Transactional store that moves money between accounts."""

from __future__ import annotations

import sqlite3
import threading
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Iterator, Sequence

from .models import Account, Entry, Transfer
from .queries import (
    CreateEntryParams,
    CreateTransferParams,
    Queries,
    UpdateAccountBalanceParams,
)


@dataclass(frozen=True)
class _Result:
    """Fully fetched outcome of one statement."""

    rows: list[Sequence[Any]]
    lastrowid: int | None
    rowcount: int

    def fetchone(self) -> Sequence[Any] | None:
        return self.rows[0] if self.rows else None

    def fetchall(self) -> list[Sequence[Any]]:
        return list(self.rows)


class _SerialConnection:
    """Runs statements on a shared connection one at a time."""

    def __init__(self, conn: sqlite3.Connection, lock: threading.RLock) -> None:
        self._conn = conn
        self._lock = lock

    def execute(self, sql: str, params: Sequence[Any] = ()) -> _Result:
        with self._lock:
            cursor = self._conn.execute(sql, params)
            try:
                return _Result(cursor.fetchall(), cursor.lastrowid, cursor.rowcount)
            finally:
                cursor.close()


@dataclass(frozen=True)
class TransferTxParams:
    from_account_id: int
    to_account_id: int
    amount: int
    currency: str = ""


@dataclass(frozen=True)
class TransferTxResult:
    transfer: Transfer
    from_entry: Entry
    to_entry: Entry
    from_account: Account
    to_account: Account


class Store(Queries):
    """All queries plus transactions over one SQLite connection.

    The connection is switched to autocommit mode: statements issued
    directly on the store commit at once, while those issued inside
    :meth:`transaction` commit or roll back together. Access from several
    threads is serialised, and a transaction holds the connection until it
    ends.
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        conn.isolation_level = None
        self._conn = conn
        self._lock = threading.RLock()
        self._serial = _SerialConnection(conn, self._lock)
        super().__init__(self._serial)

    @contextmanager
    def transaction(self) -> Iterator[Queries]:
        """Run the enclosed block in one transaction and yield its queries.

        The transaction commits when the block ends normally and rolls back
        when it raises; the exception is then re-raised.
        """
        with self._lock:
            self._conn.execute("BEGIN IMMEDIATE")
            try:
                yield Queries(self._serial)
            except BaseException as exc:
                try:
                    self._conn.execute("ROLLBACK")
                except sqlite3.Error as rb_exc:
                    raise RuntimeError(f"tx err: {exc}, rb err: {rb_exc}") from exc
                raise
            self._conn.execute("COMMIT")

    def transfer_tx(self, params: TransferTxParams) -> TransferTxResult:
        """Record a transfer, its two entries and both new balances atomically."""
        with self.transaction() as q:
            transfer = q.create_transfer(
                CreateTransferParams(
                    from_account_id=params.from_account_id,
                    to_account_id=params.to_account_id,
                    amount=params.amount,
                )
            )
            from_entry = q.create_entry(
                CreateEntryParams(account_id=params.from_account_id, amount=-params.amount)
            )
            to_entry = q.create_entry(
                CreateEntryParams(account_id=params.to_account_id, amount=params.amount)
            )

            # Update the lower id first so concurrent opposite transfers agree on order.
            if params.from_account_id < params.to_account_id:
                from_account, to_account = _add_money(
                    q,
                    params.from_account_id,
                    -params.amount,
                    params.to_account_id,
                    params.amount,
                )
            else:
                to_account, from_account = _add_money(
                    q,
                    params.to_account_id,
                    params.amount,
                    params.from_account_id,
                    -params.amount,
                )

        return TransferTxResult(
            transfer=transfer,
            from_entry=from_entry,
            to_entry=to_entry,
            from_account=from_account,
            to_account=to_account,
        )


def _add_money(
    q: Queries, account1_id: int, amount1: int, account2_id: int, amount2: int
) -> tuple[Account, Account]:
    account1 = q.update_account_balance(
        UpdateAccountBalanceParams(amount=amount1, id=account1_id)
    )
    account2 = q.update_account_balance(
        UpdateAccountBalanceParams(amount=amount2, id=account2_id)
    )
    return account1, account2