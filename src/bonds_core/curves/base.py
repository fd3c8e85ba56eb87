from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Optional

from bonds_core.common.enums import FunctionType
from bonds_core.common.math import DecimalArithmetic, default_arithmetic
from bonds_core.common.model import FunctionParams


class CurveFunction(ABC):
    """Abstract base class defining the interface for every bond curve function."""
    function_type: FunctionType

    def __init__(self, params: Optional[FunctionParams] = None, arithmetic: Optional[DecimalArithmetic] = None):
        """
        Initializes the curve with its coefficients.

        :param params: FunctionParams - the curve's named coefficients
        :param arithmetic: DecimalArithmetic - fixed-point settings, defaults to 18 digits
        """
        self._params = params or FunctionParams()
        self._math = arithmetic or default_arithmetic

    @property
    def params(self) -> FunctionParams:
        """Returns the curve coefficients."""
        return self._params

    @staticmethod
    def _check_supply(supply: int):
        if supply < 0:
            raise ValueError(f"Supply must be non-negative, got {supply}.")

    @abstractmethod
    def price(self, supply: int) -> Decimal:
        """
        Returns the marginal price of one token at the given supply.

        :param supply: int - circulating supply of the bond token.
        :return: Decimal: the price at that supply.
        """
        pass

    @abstractmethod
    def integral(self, supply: int) -> Decimal:
        """
        Returns the area under the price curve from 0 to `supply`, i.e. the reserve
        value backing the whole supply.

        :param supply: int - circulating supply of the bond token.
        :return: Decimal: cumulative reserve value.
        """
        pass
