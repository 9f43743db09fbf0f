"""Records stored by the bank: accounts, balance entries and transfers."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any


def _serialise(record: Any) -> dict[str, Any]:
    data = asdict(record)
    data["created_at"] = record.created_at.isoformat()
    return data


@dataclass(frozen=True)
class Account:
    """A bank account with its current balance."""

    id: int
    owner: str
    balance: int
    currency: str
    created_at: datetime

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready mapping of the account."""
        return _serialise(self)


@dataclass(frozen=True)
class Entry:
    """A single change to one account's balance."""

    id: int
    account_id: int
    amount: int
    created_at: datetime

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready mapping of the entry."""
        return _serialise(self)


@dataclass(frozen=True)
class Transfer:
    """A movement of money from one account to another."""

    id: int
    from_account_id: int
    to_account_id: int
    amount: int
    created_at: datetime

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready mapping of the transfer."""
        return _serialise(self)