"""HTTP API for creating and reading accounts."""

from __future__ import annotations

import json
import re
import sqlite3
from typing import Any

from flask import Flask, Response, jsonify, request

from .queries import CreateAccountParams, NotFoundError
from .store import Store

_CURRENCIES = ("USD", "EUR")
_INT_PATTERN = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


class _BindingError(ValueError):
    """Raised when a request does not satisfy its binding rules."""


def error_response(err: BaseException) -> dict[str, str]:
    """Return the JSON body used for every error reply."""
    return {"error": str(err)}


def _field_error(struct: str, field: str, tag: str) -> str:
    return (
        f"Key: '{struct}.{field}' Error:Field validation for '{field}' "
        f"failed on the '{tag}' tag"
    )


def _lookup(payload: dict[str, Any], key: str) -> Any:
    if key in payload:
        return payload[key]
    return next((value for name, value in payload.items() if name.lower() == key), None)


def _bind_create_account(body: bytes) -> tuple[str, str]:
    if not body.strip():
        raise _BindingError("EOF")
    try:
        payload = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise _BindingError(str(exc)) from exc
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        kind = "array" if isinstance(payload, list) else type(payload).__name__
        raise _BindingError(f"json: cannot unmarshal {kind} into request body")

    values = {}
    for key in ("owner", "currency"):
        value = _lookup(payload, key)
        if value is None:
            value = ""
        if not isinstance(value, str):
            raise _BindingError(f"json: field {key} must be a string")
        values[key] = value

    problems = []
    if not values["owner"]:
        problems.append(_field_error("createAccountRequest", "Owner", "required"))
    if not values["currency"]:
        problems.append(_field_error("createAccountRequest", "Currency", "required"))
    elif values["currency"] not in _CURRENCIES:
        problems.append(_field_error("createAccountRequest", "Currency", "oneof"))
    if problems:
        raise _BindingError("\n".join(problems))
    return values["owner"], values["currency"]


def _bind_account_id(raw: str) -> int:
    if not _INT_PATTERN.fullmatch(raw):
        raise _BindingError(f'strconv.ParseInt: parsing "{raw}": invalid syntax')
    value = int(raw)
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise _BindingError(f'strconv.ParseInt: parsing "{raw}": value out of range')
    if value == 0:
        raise _BindingError(_field_error("getAccountRequest", "ID", "required"))
    if value < 1:
        raise _BindingError(_field_error("getAccountRequest", "ID", "min"))
    return value


class Server:
    """Serves the account endpoints backed by a :class:`Store`."""

    def __init__(self, store: Store) -> None:
        self.store = store
        self.app = Flask(__name__)
        self.app.add_url_rule("/", "hello", self._hello, methods=["GET"])
        self.app.add_url_rule(
            "/accounts", "create_account", self._create_account, methods=["POST"]
        )
        self.app.add_url_rule(
            "/accounts/<account_id>", "get_account", self._get_account, methods=["GET"]
        )

    def start(self, address: tuple[str, int]) -> None:
        """Serve HTTP on the ``(host, port)`` pair until interrupted."""
        host, port = address
        self.app.run(host=host, port=port)

    def _hello(self) -> tuple[Response, int]:
        return jsonify("Hello"), 200

    def _create_account(self) -> tuple[Response, int]:
        try:
            owner, currency = _bind_create_account(request.get_data())
        except _BindingError as exc:
            return jsonify(error_response(exc)), 400

        params = CreateAccountParams(owner=owner, balance=0, currency=currency)
        try:
            account = self.store.create_account(params)
        except sqlite3.Error as exc:
            return jsonify(error_response(exc)), 500
        return jsonify(account.to_dict()), 200

    def _get_account(self, account_id: str) -> tuple[Response, int]:
        try:
            wanted = _bind_account_id(account_id)
        except _BindingError as exc:
            return jsonify(error_response(exc)), 400

        try:
            account = self.store.get_account_by_id(wanted)
        except NotFoundError as exc:
            return jsonify(error_response(exc)), 404
        except sqlite3.Error as exc:
            return jsonify(error_response(exc)), 500
        return jsonify(account.to_dict()), 200