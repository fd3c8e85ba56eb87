import pytest

from bonds_core.engine.limits import OrderLimitChecker


@pytest.fixture
def bond(swapper_bond):
    swapper_bond.order_quantity_limits = {"aaa": 100, "bbb": 200}
    return swapper_bond


@pytest.mark.parametrize(
    "amounts, expected",
    [
        ({"aaa": 99}, False),
        ({"aaa": 100}, False),
        ({"aaa": 101}, True),
        ({"bbb": 101}, False),
        ({"aaa": 100, "bbb": 200}, False),
        ({"aaa": 101, "bbb": 200}, True),
        ({"aaa": 100, "bbb": 201}, True),
        ({"aaa": 101, "bbb": 201}, True),
        ({"ccc": 10 ** 9}, False),
        ({}, False),
    ]
)
def test_exceeds_any_order_limit(bond, amounts, expected):
    assert OrderLimitChecker.exceeds_any_order_limit(bond, amounts) is expected


def test_no_limits_never_exceeded(power_bond):
    assert OrderLimitChecker.exceeds_any_order_limit(power_bond, {"res": 10 ** 18}) is False


@pytest.mark.parametrize(
    "candidate, expected",
    [
        (["a1"], False),
        (["a1", "a2", "a3"], False),
        (["a1", "a3"], False),
        (["a2", "a1"], False),
        (["a1", "a2"], True),
    ]
)
def test_signers_equal(power_bond, candidate, expected):
    power_bond.signers = ["a1", "a2"]
    assert OrderLimitChecker.signers_equal(power_bond, candidate) is expected


@pytest.mark.parametrize(
    "candidate, expected",
    [
        (["d1", "d2"], True),
        (["d2", "d1"], True),
        (["d1"], False),
        (["d1", "d2", "d3"], False),
        (["d1", "d3"], False),
        (["d1", "d1"], False),
    ]
)
def test_reserve_tokens_equal(power_bond, candidate, expected):
    power_bond.reserve_tokens = ["d1", "d2"]
    assert OrderLimitChecker.reserve_tokens_equal(power_bond, candidate) is expected
