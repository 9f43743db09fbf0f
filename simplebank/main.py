"""Command that opens the bank database and serves the HTTP API."""

from __future__ import annotations

import argparse
import sqlite3
from typing import Sequence

from .api import Server
from .queries import create_schema
from .store import Store

DB_SOURCE = "simple_bank.db"
SERVER_ADDRESS = "0.0.0.0:8080"


def parse_address(address: str) -> tuple[str, int]:
    """Split ``host:port`` into a host and a port; an empty host means all interfaces."""
    host, sep, port_text = address.rpartition(":")
    if not sep:
        raise ValueError(f"missing port in address {address!r}")
    if not (port_text.isascii() and port_text.isdigit()):
        raise ValueError(f"invalid port {port_text!r} in address {address!r}")
    port = int(port_text)
    if port > 65535:
        raise ValueError(f"port {port} out of range in address {address!r}")
    host = host.removeprefix("[").removesuffix("]") or "0.0.0.0"
    return host, port


def _open_store(path: str) -> Store:
    try:
        conn = sqlite3.connect(path, check_same_thread=False, isolation_level=None)
        conn.execute("SELECT 1")
        create_schema(conn)
    except sqlite3.Error as exc:
        raise SystemExit("DB connect err") from exc
    return Store(conn)


def main(argv: Sequence[str] | None = None) -> None:
    """Open the database and serve the API until interrupted."""
    parser = argparse.ArgumentParser(
        prog="simplebank", description="Serve the bank account HTTP API."
    )
    parser.add_argument("--db", default=DB_SOURCE, help="SQLite database file")
    parser.add_argument("--address", default=SERVER_ADDRESS, help="host:port to listen on")
    args = parser.parse_args(argv)

    try:
        address = parse_address(args.address)
    except ValueError as exc:
        parser.error(str(exc))

    store = _open_store(args.db)
    server = Server(store)
    try:
        server.start(address)
    except OSError as exc:
        raise SystemExit("Failed to start server") from exc


if __name__ == "__main__":
    main()