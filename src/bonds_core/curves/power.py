from decimal import Decimal

from bonds_core.common.enums import FunctionType
from bonds_core.curves.base import CurveFunction


class PowerCurve(CurveFunction):
    """
    A curve where the price is modeled as:
        price(x) = m * x^n + c

    and the reserve backing a supply x is:
        integral(x) = m * x^(n+1) / (n+1) + c * x

    n must be a whole, non-negative number so x^n can be evaluated exactly.
    """
    function_type = FunctionType.POWER

    def _coefficients(self):
        m = self.params.get("m")
        n = self.params.get("n")
        c = self.params.get("c")
        if n < 0 or n != n.to_integral_value():
            raise ValueError(f"Power curve exponent must be a non-negative integer, got {n}.")
        return m, int(n), c

    def price(self, supply: int) -> Decimal:
        self._check_supply(supply)
        m, n, c = self._coefficients()
        x = self._math.dec(supply)
        return self._math.add(self._math.mul(self._math.power(x, n), m), c)

    def integral(self, supply: int) -> Decimal:
        self._check_supply(supply)
        m, n, c = self._coefficients()
        x = self._math.dec(supply)
        area = self._math.quo(self._math.mul(self._math.power(x, n + 1), m), n + 1)
        return self._math.add(area, self._math.mul(x, c))
