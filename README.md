# simplebank

A small banking service. It keeps accounts, the ledger entries made
against them and the transfers between them in a SQLite database, and
serves accounts over a JSON HTTP API.

## Installing

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Running the server

```
simplebank
```

The command opens (or creates) the SQLite database, creates the tables
if they are missing, and serves the API with Flask's built-in server.

Options:

- `--db PATH` – the SQLite database file, `simple_bank.db` by default.
- `--address HOST:PORT` – where to listen, `0.0.0.0:8080` by default. An
  empty host (`:8080`) means all interfaces; an IPv6 host may be written
  in brackets.

If the database cannot be opened the command exits with `DB connect err`;
if the server cannot bind its address it exits with
`Failed to start server`.

### Endpoints

| Method | Path             | Purpose                                   |
|--------|------------------|-------------------------------------------|
| GET    | `/`              | Health check, answers `"Hello"`           |
| POST   | `/accounts`      | Create an account                         |
| GET    | `/accounts/<id>` | Fetch one account by its id               |

Creating an account takes a JSON body with an `owner` and a `currency`,
which must be `USD` or `EUR`. New accounts start with a balance of 0:

```
POST /accounts
{"owner": "alice", "currency": "USD"}
```

The reply is the account as JSON, with `id`, `owner`, `balance`,
`currency` and `created_at` (an ISO 8601 timestamp in UTC).

Errors come back as `{"error": "<message>"}`: status 400 for a request
that fails validation (an empty or malformed body, a missing field, an
unknown currency, an id that is not an integer or is below 1), 404 for an
account that does not exist, and 500 for a database error.

## Using it as a library

The storage layer can be used without the HTTP server.

- `simplebank.queries` holds `create_schema(conn)`, which creates the
  `accounts`, `entries` and `transfers` tables on a SQLite connection, and
  the `Queries` class, with one method per statement: `create_account`,
  `delete_account`, `get_account_by_id`, `get_account_for_update`,
  `list_accounts`, `update_account_balance`, `create_entry`, `get_entry`,
  `list_entries`, `create_transfer`, `get_transfer` and `list_transfers`.
  Their arguments are the `CreateAccountParams`,
  `UpdateAccountBalanceParams`, `CreateEntryParams` and
  `CreateTransferParams` dataclasses. Looking up or updating a row that
  does not exist raises `NotFoundError`.
- `simplebank.store` holds `Store`, a `Queries` over one SQLite connection
  that adds transactions. The connection is put in autocommit mode, and
  use from several threads is serialised. `Store.transaction()` is a
  context manager that yields a `Queries` whose statements commit together
  when the block ends and roll back if it raises.
  `Store.transfer_tx(TransferTxParams(...))` moves money between two
  accounts in one transaction: it records the transfer, a debit entry on
  the sending account and a credit entry on the receiving one, and updates
  both balances, the lower account id first. It returns a
  `TransferTxResult` with `transfer`, `from_entry`, `to_entry`,
  `from_account` and `to_account`. If any step fails the whole transfer is
  rolled back.
- `simplebank.models` holds the frozen `Account`, `Entry` and `Transfer`
  records, each with `to_dict()` for JSON output.
- `simplebank.api` holds `Server`, which wires a `Store` to the HTTP
  routes above (its Flask application is `Server.app`), and
  `error_response`; `Server.start((host, port))` runs it.
- `simplebank.main` holds `main`, the `simplebank` command, and
  `parse_address`, which turns `host:port` into a `(host, port)` pair.

A transfer looks like this:

```python
import sqlite3

from simplebank.queries import CreateAccountParams, create_schema
from simplebank.store import Store, TransferTxParams

conn = sqlite3.connect("bank.db", check_same_thread=False)
create_schema(conn)
store = Store(conn)

alice = store.create_account(CreateAccountParams(owner="alice", balance=1000, currency="USD"))
bob = store.create_account(CreateAccountParams(owner="bob", balance=1000, currency="USD"))

result = store.transfer_tx(
    TransferTxParams(from_account_id=alice.id, to_account_id=bob.id, amount=10)
)
print(result.from_account.balance, result.to_account.balance)  # 990 1010
```

`simplebank.randutil` has helpers for producing test data:
`random_int`, `random_string`, `random_name`, `random_balance` and
`random_currency` (one of `USD`, `YEN` or `VND`).

## What it does not do

- The HTTP API only creates and reads accounts. Transfers, entries,
  balance changes, deletion and listing are available through
  `Store` and `Queries` in Python, not over HTTP.
- Transfers do not check currencies or balances: `TransferTxParams.currency`
  is accepted but not used, and a balance may go below zero.
- Storage is SQLite only; there is no support for other database servers
  and no migration tooling beyond `create_schema`.
- There is no authentication.