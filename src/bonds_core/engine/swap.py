import logging
from typing import Dict, Mapping, Optional, Tuple

from bonds_core.common.enums import FunctionType
from bonds_core.common.errors import FunctionNotAvailableError, ReserveTokenInvalidError, SwapAmountInvalidError
from bonds_core.common.math import DecimalArithmetic, default_arithmetic
from bonds_core.common.model import Bond, Coin
from bonds_core.curves.swapper import SwapperCurve
from bonds_core.engine.fees import FeeCalculator
from bonds_core.engine.reserves import balance_of

logger = logging.getLogger(__name__)


class SwapEngine:
    """
    Direct exchange between the two reserve tokens of a swapper bond.

    The transaction fee is taken from the input first, then the remaining input is
    priced with the constant-product formula over the actual reserve balances.
    """

    def __init__(self, arithmetic: Optional[DecimalArithmetic] = None):
        self._math = arithmetic or default_arithmetic
        self._fees = FeeCalculator(self._math)

    def returns_for_swap(
        self,
        bond: Bond,
        from_coin: Coin,
        to_token: str,
        reserve_balances: Optional[Mapping[str, int]] = None,
    ) -> Tuple[Dict[str, int], Coin]:
        """
        Returns ({to_token: output}, fee) for swapping `from_coin` into `to_token`.

        :raises FunctionNotAvailableError: the bond is not a swapper bond
        :raises ReserveTokenInvalidError: either token is not one of the bond's two reserve tokens
        :raises SwapAmountInvalidError: nothing is left after the fee, or the output rounds to zero
        """
        if bond.function_type != FunctionType.SWAPPER:
            raise FunctionNotAvailableError(f"swap is not available for {bond.function_type}")

        for token in (from_coin.token, to_token):
            if token not in bond.reserve_tokens:
                raise ReserveTokenInvalidError(f"{token} is not a reserve token of {bond.token}")
        if from_coin.token == to_token:
            raise ReserveTokenInvalidError(f"cannot swap {from_coin.token} for itself")

        if from_coin.amount < 0:
            raise SwapAmountInvalidError(f"swap amount {from_coin.amount} is negative")
        fee = self._fees.tx_fee(bond, from_coin)
        amount_in = from_coin.amount - fee.amount
        if amount_in <= 0:
            logger.warning("Swap of %s%s leaves nothing after a fee of %s", from_coin.amount, from_coin.token,
                           fee.amount)
            raise SwapAmountInvalidError(
                f"swap amount {from_coin.amount}{from_coin.token} is too small to give any return"
            )

        swapper = SwapperCurve(bond.function_parameters, self._math)
        output = swapper.output_for_input(
            balance_of(reserve_balances, from_coin.token),
            balance_of(reserve_balances, to_token),
            amount_in,
        )
        if output <= 0:
            logger.warning("Swap of %s%s into %s rounds to zero output", from_coin.amount, from_coin.token,
                           to_token)
            raise SwapAmountInvalidError(
                f"swap amount {from_coin.amount}{from_coin.token} is too small to give any {to_token}"
            )

        logger.debug("Swap %s%s -> %s%s (fee %s)", from_coin.amount, from_coin.token, output, to_token, fee.amount)
        return {to_token: output}, fee
