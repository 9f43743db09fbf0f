"""Accounts, ledger entries and money transfers in SQLite, with a JSON HTTP API for accounts."""

__version__ = "0.1.0"