from decimal import Decimal
from typing import Dict, Mapping, Optional, Union

from bonds_core.common.math import DecimalArithmetic, default_arithmetic
from bonds_core.common.model import Bond, Coin, DecCoin


class FeeCalculator:
    """
    Percentage fees, always rounded up to a whole token:
        fee = ceil(amount * percentage / 100)

    The product is taken exactly before the ceiling, so any positive amount with a
    positive percentage gives a positive fee. A zero amount or percentage gives zero.
    """

    def __init__(self, arithmetic: Optional[DecimalArithmetic] = None):
        self._math = arithmetic or default_arithmetic

    def fee(self, amount: Union[Decimal, int], percentage: Decimal) -> int:
        raw = self._math.exact_percentage(amount, percentage)
        return self._math.ceil(raw)

    def _fees(self, amounts: Mapping[str, Union[Decimal, int]], percentage: Decimal) -> Dict[str, int]:
        fees = {}
        for token in sorted(amounts):
            fee = self.fee(amounts[token], percentage)
            if fee != 0:
                fees[token] = fee
        return fees

    def tx_fee(self, bond: Bond, coin: Union[Coin, DecCoin]) -> Coin:
        return Coin(coin.token, self.fee(coin.amount, bond.tx_fee_percentage))

    def exit_fee(self, bond: Bond, coin: Union[Coin, DecCoin]) -> Coin:
        return Coin(coin.token, self.fee(coin.amount, bond.exit_fee_percentage))

    def tx_fees(self, bond: Bond, amounts: Mapping[str, Union[Decimal, int]]) -> Dict[str, int]:
        """Transaction fee per token; tokens whose fee is zero are left out."""
        return self._fees(amounts, bond.tx_fee_percentage)

    def exit_fees(self, bond: Bond, amounts: Mapping[str, Union[Decimal, int]]) -> Dict[str, int]:
        """Exit fee per token; tokens whose fee is zero are left out."""
        return self._fees(amounts, bond.exit_fee_percentage)
