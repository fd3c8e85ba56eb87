from decimal import Decimal

from bonds_core.common.enums import FunctionType
from bonds_core.common.errors import FunctionNotAvailableError, SwapAmountInvalidError
from bonds_core.curves.base import CurveFunction


class SwapperCurve(CurveFunction):
    """
    Direct exchange between exactly two reserve tokens.

    There is no supply curve: price and integral are unavailable. The only
    pricing it defines is the constant-product output of a swap:
        output = floor(to_balance * amount_in / (from_balance + amount_in))
    """
    function_type = FunctionType.SWAPPER

    def price(self, supply: int) -> Decimal:
        raise FunctionNotAvailableError("price is not available for the swapper function")

    def integral(self, supply: int) -> Decimal:
        raise FunctionNotAvailableError("integral is not available for the swapper function")

    def output_for_input(self, from_balance: int, to_balance: int, amount_in: int) -> int:
        """
        Integer constant-product output for `amount_in` units entering a pool holding
        `from_balance` and `to_balance`. Computed on Python ints, so no intermediate
        value can wrap; only the operands and the result are range checked.
        """
        for value in (from_balance, to_balance, amount_in):
            self._math.check_int(value)
        if from_balance + amount_in == 0:
            raise SwapAmountInvalidError("cannot swap zero into an empty pool")
        return self._math.check_int(to_balance * amount_in // (from_balance + amount_in))
