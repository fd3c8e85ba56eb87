from typing import Optional

from bonds_core.common.enums import FunctionType
from bonds_core.common.math import DecimalArithmetic
from bonds_core.common.model import Bond, FunctionParams
from bonds_core.curves.base import CurveFunction
from bonds_core.curves.power import PowerCurve
from bonds_core.curves.sigmoid import SigmoidCurve
from bonds_core.curves.swapper import SwapperCurve


def build_curve(
    function_type: FunctionType,
    params: Optional[FunctionParams] = None,
    arithmetic: Optional[DecimalArithmetic] = None,
) -> CurveFunction:
    """Returns the curve implementation for `function_type`."""
    if function_type == FunctionType.POWER:
        return PowerCurve(params, arithmetic)
    elif function_type == FunctionType.SIGMOID:
        return SigmoidCurve(params, arithmetic)
    elif function_type == FunctionType.SWAPPER:
        return SwapperCurve(params, arithmetic)
    else:
        raise NotImplementedError(f"No curve implementation for {function_type}")


def curve_for_bond(bond: Bond, arithmetic: Optional[DecimalArithmetic] = None) -> CurveFunction:
    return build_curve(bond.function_type, bond.function_parameters, arithmetic)
