"""Random values for test fixtures and sample data."""

from __future__ import annotations

import random
import string

_rng = random.Random()

_CURRENCIES = ("USD", "YEN", "VND")


def random_int(low: int, high: int) -> int:
    """Return a random integer in the inclusive range [low, high].

    Raises ValueError when ``high`` is smaller than ``low``.
    """
    return _rng.randint(low, high)


def random_string(length: int) -> str:
    """Return a string of ``length`` random lower-case ASCII letters."""
    return "".join(_rng.choice(string.ascii_lowercase) for _ in range(length))


def random_name() -> str:
    """Return a random six-letter owner name."""
    return random_string(6)


def random_balance() -> int:
    """Return a random balance between 0 and 99999."""
    return random_int(0, 99999)


def random_currency() -> str:
    """Return one of the sample currency codes."""
    return _rng.choice(_CURRENCIES)