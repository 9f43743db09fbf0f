import sqlite3
from concurrent.futures import ThreadPoolExecutor

import pytest

from simplebank.queries import CreateAccountParams, NotFoundError, create_schema
from simplebank.randutil import random_currency, random_name
from simplebank.store import Store, TransferTxParams


@pytest.fixture
def store():
    conn = sqlite3.connect(":memory:", check_same_thread=False, isolation_level=None)
    create_schema(conn)
    yield Store(conn)
    conn.close()


def create_random_account(store):
    arg = CreateAccountParams(owner=random_name(), balance=1000, currency=random_currency())
    account = store.create_account(arg)
    assert account.owner == arg.owner
    assert account.balance == arg.balance
    assert account.currency == arg.currency
    return account


def test_create_transfer_concurrent(store):
    from_account = create_random_account(store)
    to_account = create_random_account(store)
    n = 3
    amount = 10

    with ThreadPoolExecutor(max_workers=n) as pool:
        futures = [
            pool.submit(
                store.transfer_tx,
                TransferTxParams(
                    from_account_id=from_account.id,
                    to_account_id=to_account.id,
                    amount=amount,
                ),
            )
            for _ in range(n)
        ]
        results = [future.result() for future in futures]

    for result in results:
        assert result.from_account.id == from_account.id
        assert result.to_account.id == to_account.id
        diff1 = from_account.balance - result.from_account.balance
        diff2 = result.to_account.balance - to_account.balance
        assert diff1 == diff2
        assert diff1 > 0
        assert diff1 % amount == 0

    updated1 = store.get_account_by_id(from_account.id)
    updated2 = store.get_account_by_id(to_account.id)
    assert from_account.balance - updated1.balance == amount * n
    assert updated2.balance - to_account.balance == amount * n


def test_create_transfer_two_way(store):
    account1 = create_random_account(store)
    account2 = create_random_account(store)
    n = 10
    amount = 10

    def params(i):
        if i % 2 == 0:
            return TransferTxParams(account1.id, account2.id, amount)
        return TransferTxParams(account2.id, account1.id, amount)

    with ThreadPoolExecutor(max_workers=n) as pool:
        futures = [pool.submit(store.transfer_tx, params(i)) for i in range(n)]
        for future in futures:
            future.result()

    assert store.get_account_by_id(account1.id).balance == account1.balance
    assert store.get_account_by_id(account2.id).balance == account2.balance
    assert len(store.list_transfers()) == n


def test_transfer_tx_records_everything(store):
    from_account = create_random_account(store)
    to_account = create_random_account(store)

    result = store.transfer_tx(TransferTxParams(from_account.id, to_account.id, 25))

    assert result.transfer.from_account_id == from_account.id
    assert result.transfer.to_account_id == to_account.id
    assert result.transfer.amount == 25
    assert result.from_entry.account_id == from_account.id
    assert result.from_entry.amount == -25
    assert result.to_entry.account_id == to_account.id
    assert result.to_entry.amount == 25
    assert result.from_account.balance == from_account.balance - 25
    assert result.to_account.balance == to_account.balance + 25
    assert store.get_transfer(result.transfer.id) == result.transfer
    assert store.get_entry(result.from_entry.id) == result.from_entry
    assert store.get_entry(result.to_entry.id) == result.to_entry


def test_transfer_from_higher_id_updates_both_accounts(store):
    first = create_random_account(store)
    second = create_random_account(store)

    result = store.transfer_tx(TransferTxParams(second.id, first.id, 40))

    assert result.from_account.id == second.id
    assert result.to_account.id == first.id
    assert result.from_account.balance == second.balance - 40
    assert result.to_account.balance == first.balance + 40


def test_transfer_to_missing_account_rolls_back(store):
    account = create_random_account(store)

    with pytest.raises(sqlite3.IntegrityError):
        store.transfer_tx(TransferTxParams(account.id, account.id + 100, 10))

    assert store.list_transfers() == []
    assert store.list_entries() == []
    assert store.get_account_by_id(account.id).balance == account.balance


def test_transaction_commits(store):
    with store.transaction() as q:
        created = q.create_account(CreateAccountParams("alice", 5, "USD"))

    assert store.get_account_by_id(created.id) == created


def test_transaction_rolls_back_on_error(store):
    with pytest.raises(ValueError):
        with store.transaction() as q:
            created = q.create_account(CreateAccountParams("bob", 5, "USD"))
            raise ValueError("abort")

    assert store.list_accounts() == []
    with pytest.raises(NotFoundError):
        store.get_account_by_id(created.id)


def test_store_can_run_another_transaction_after_rollback(store):
    with pytest.raises(ValueError):
        with store.transaction() as q:
            q.create_account(CreateAccountParams("carol", 1, "EUR"))
            raise ValueError("abort")

    with store.transaction() as q:
        q.create_account(CreateAccountParams("dave", 2, "EUR"))

    assert [account.owner for account in store.list_accounts()] == ["dave"]