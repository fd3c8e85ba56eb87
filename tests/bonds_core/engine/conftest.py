import pytest

from decimal import Decimal

from bonds_core.common.enums import FunctionType
from bonds_core.common.model import Bond


@pytest.fixture
def power_bond():
    return Bond(
        token="abc",
        function_type=FunctionType.POWER,
        function_parameters={"m": 12, "n": 2, "c": 100},
        reserve_tokens=["res"],
        tx_fee_percentage=Decimal("0.1"),
        exit_fee_percentage=Decimal("0.1"),
        max_supply=1000000,
        signers=["signer1"],
    )


@pytest.fixture
def sigmoid_bond():
    return Bond(
        token="abc",
        function_type=FunctionType.SIGMOID,
        function_parameters={"a": 3, "b": 5, "c": 1},
        reserve_tokens=["res"],
        max_supply=1000000,
        signers=["signer1"],
    )


@pytest.fixture
def swapper_bond():
    return Bond(
        token="abc",
        function_type=FunctionType.SWAPPER,
        reserve_tokens=["res", "rez"],
        tx_fee_percentage=Decimal("0.1"),
        exit_fee_percentage=Decimal("0.1"),
        max_supply=1000000,
        signers=["signer1"],
    )
