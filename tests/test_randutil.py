import string

import pytest

from simplebank import randutil


@pytest.mark.parametrize("low,high", [(0, 10), (-5, 5), (100, 200)])
def test_random_int_stays_in_range(low, high):
    for _ in range(200):
        value = randutil.random_int(low, high)
        assert low <= value <= high


def test_random_int_single_value_range():
    assert randutil.random_int(7, 7) == 7


def test_random_int_rejects_inverted_range():
    with pytest.raises(ValueError):
        randutil.random_int(5, 4)


@pytest.mark.parametrize("length", [0, 1, 6, 32])
def test_random_string_length_and_alphabet(length):
    value = randutil.random_string(length)
    assert len(value) == length
    assert set(value) <= set(string.ascii_lowercase)


def test_random_string_negative_length_is_empty():
    assert randutil.random_string(-3) == ""


def test_random_name_is_six_letters():
    name = randutil.random_name()
    assert len(name) == 6
    assert name.isalpha() and name.islower()


def test_random_balance_range():
    for _ in range(200):
        assert 0 <= randutil.random_balance() <= 99999


def test_random_currency_choices():
    seen = {randutil.random_currency() for _ in range(300)}
    assert seen <= {"USD", "YEN", "VND"}
    assert len(seen) >= 2