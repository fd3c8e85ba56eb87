from decimal import Decimal

from bonds_core.common.enums import FunctionType
from bonds_core.curves.base import CurveFunction


class SigmoidCurve(CurveFunction):
    """
    An S-shaped curve centred on supply b:
        price(x) = a * ((x - b) / sqrt((x - b)^2 + c) + 1)

    The price rises from near zero towards 2a, with c controlling steepness.
    Its antiderivative, anchored so that integral(0) == 0, is:
        integral(x) = a * (sqrt((x - b)^2 + c) + x - sqrt(b^2 + c))

    Square roots keep half of the configured precision, so identical inputs
    always give identical outputs.
    """
    function_type = FunctionType.SIGMOID

    def _coefficients(self):
        return self.params.get("a"), self.params.get("b"), self.params.get("c")

    def _root(self, offset: Decimal, c: Decimal) -> Decimal:
        """sqrt(offset^2 + c)"""
        return self._math.sqrt(self._math.add(self._math.mul(offset, offset), c))

    def price(self, supply: int) -> Decimal:
        self._check_supply(supply)
        a, b, c = self._coefficients()
        offset = self._math.sub(supply, b)
        ratio = self._math.quo(offset, self._root(offset, c))
        return self._math.mul(a, self._math.add(ratio, 1))

    def integral(self, supply: int) -> Decimal:
        self._check_supply(supply)
        a, b, c = self._coefficients()
        offset = self._math.sub(supply, b)
        anchor = self._root(b, c)
        inner = self._math.sub(self._math.add(self._root(offset, c), supply), anchor)
        return self._math.mul(a, inner)
