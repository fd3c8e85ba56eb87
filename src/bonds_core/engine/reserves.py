import logging
from decimal import Decimal
from typing import Mapping, Optional

from bonds_core.common.enums import FunctionType
from bonds_core.common.errors import FunctionNotAvailableError
from bonds_core.common.math import DecimalArithmetic, default_arithmetic
from bonds_core.common.model import Bond, MultitokenReserve
from bonds_core.curves.registry import curve_for_bond

logger = logging.getLogger(__name__)


def balance_of(balances: Optional[Mapping[str, int]], token: str) -> int:
    """Balance of `token`, treating an absent mapping or entry as zero."""
    if not balances:
        return 0
    return balances.get(token, 0)


class MultitokenReserveDistributor:
    """
    Spreads a single curve value across a bond's reserve tokens.

    Power and sigmoid curves quote one price that is valid against any single
    reserve token, so the value is broadcast. Swapper bonds price each side
    from the ratio of its actual reserve balance to the current supply.
    """

    def __init__(self, arithmetic: Optional[DecimalArithmetic] = None):
        self._math = arithmetic or default_arithmetic

    @property
    def arithmetic(self) -> DecimalArithmetic:
        return self._math

    def broadcast(self, bond: Bond, amount: Decimal) -> MultitokenReserve:
        """Replicates `amount` across every reserve token of the bond."""
        return MultitokenReserve.from_dec(bond.reserve_tokens, self._math.dec(amount))

    def prices_at_supply(self, bond: Bond, supply: int) -> MultitokenReserve:
        """
        Curve price at `supply`, one entry per reserve token.
        Raises FunctionNotAvailableError for swapper bonds.
        """
        if supply < 0:
            raise ValueError(f"Supply must be non-negative, got {supply}.")
        if not bond.function_type.is_curve:
            raise FunctionNotAvailableError(f"prices at supply are not available for {bond.function_type}")
        price = curve_for_bond(bond, self._math).price(supply)
        return self.broadcast(bond, price)

    def reserve_delta_for_liquidity_delta(
        self,
        bond: Bond,
        liquidity_delta: int,
        reserve_balances: Optional[Mapping[str, int]] = None,
    ) -> MultitokenReserve:
        """
        Proportional reserve amounts matching a change of `liquidity_delta` in supply:
            liquidity_delta * balance / current_supply
        for every reserve token. A token without a balance yields an explicit zero.
        """
        if bond.current_supply == 0:
            raise FunctionNotAvailableError("reserve deltas are not available while the current supply is zero")
        return MultitokenReserve(tuple(
            (token, self._math.quo(
                self._math.mul(liquidity_delta, balance_of(reserve_balances, token)), bond.current_supply
            ))
            for token in bond.reserve_tokens
        ))

    def current_prices(
        self,
        bond: Bond,
        reserve_balances: Optional[Mapping[str, int]] = None,
    ) -> MultitokenReserve:
        """
        Per-token ("PT") price at the bond's current state.

        Power and sigmoid bonds are priced by their curve at the current supply;
        the marginal price does not depend on how far the held reserve has
        drifted. Swapper bonds are priced at the reserve delta of one unit of
        liquidity, i.e. balance / current_supply for each side.
        """
        if bond.function_type == FunctionType.SWAPPER:
            prices = self.reserve_delta_for_liquidity_delta(bond, 1, reserve_balances)
        else:
            prices = self.prices_at_supply(bond, bond.current_supply)
        logger.debug("Current prices for %s at supply %s: %s", bond.token, bond.current_supply, prices.as_dict())
        return prices
