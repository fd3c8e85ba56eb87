import pytest

from decimal import Decimal

from bonds_core.common.enums import FunctionType
from bonds_core.common.math import DecimalArithmetic
from bonds_core.common.config import NumericConfig
from bonds_core.common.model import Bond, FunctionParams
from bonds_core.curves.power import PowerCurve
from bonds_core.curves.registry import build_curve, curve_for_bond
from bonds_core.curves.sigmoid import SigmoidCurve
from bonds_core.curves.swapper import SwapperCurve


@pytest.mark.parametrize(
    "function_type, expected_cls",
    [
        (FunctionType.POWER, PowerCurve),
        (FunctionType.SIGMOID, SigmoidCurve),
        (FunctionType.SWAPPER, SwapperCurve),
    ]
)
def test_build_curve(function_type, expected_cls):
    curve = build_curve(function_type)
    assert isinstance(curve, expected_cls)
    assert curve.function_type == function_type


def test_build_curve_unknown_type():
    with pytest.raises(NotImplementedError):
        build_curve("linear_function")


def test_curve_for_bond_uses_bond_parameters():
    params = FunctionParams.from_mapping({"m": 12, "n": 2, "c": 100})
    bond = Bond(token="abc", function_type=FunctionType.POWER, function_parameters=params,
                reserve_tokens=["res"])
    curve = curve_for_bond(bond)
    assert isinstance(curve, PowerCurve)
    assert curve.params == params


def test_curve_for_bond_uses_given_arithmetic():
    arithmetic = DecimalArithmetic(NumericConfig(precision=6))
    bond = Bond(token="abc", function_type=FunctionType.SIGMOID,
                function_parameters={"a": 3, "b": 5, "c": 1}, reserve_tokens=["res"])
    curve = curve_for_bond(bond, arithmetic)
    # 3 * (sqrt(17) + 1 - sqrt(26)) with three digit roots
    assert curve.integral(1) == Decimal("0.072")
    assert curve.integral(0) == 0
