import logging
from decimal import Decimal
from typing import Mapping, Optional

from bonds_core.common.enums import FunctionType
from bonds_core.common.errors import FunctionNotAvailableError
from bonds_core.common.math import DecimalArithmetic, default_arithmetic
from bonds_core.common.model import Bond, MultitokenReserve
from bonds_core.curves.registry import curve_for_bond
from bonds_core.engine.reserves import MultitokenReserveDistributor, balance_of

logger = logging.getLogger(__name__)


class PricingEngine:
    """
    Quotes the reserve cost of minting and the reserve return of burning bond tokens.

    For power and sigmoid bonds the quote is the area under the curve between the
    old and new supply. When the caller passes the actual reserve balances, the
    balance held in the first reserve token stands in for the curve value of the
    current supply, so the quote absorbs any drift between held and theoretical
    reserve (retained fees, rounding residue, direct deposits). Reserve balances
    of a curve bond are kept equal across tokens, so the first one is representative.

    Swapper bonds are priced proportionally to their actual reserve balances.
    """

    def __init__(self, arithmetic: Optional[DecimalArithmetic] = None):
        self._math = arithmetic or default_arithmetic
        self._distributor = MultitokenReserveDistributor(self._math)

    @property
    def distributor(self) -> MultitokenReserveDistributor:
        return self._distributor

    @staticmethod
    def _check_amount(amount: int):
        if amount < 0:
            raise ValueError(f"Amount must be non-negative, got {amount}.")

    def curve_integral(self, bond: Bond, supply: int) -> Decimal:
        """Reserve value backing `supply` tokens under the bond's curve."""
        return curve_for_bond(bond, self._math).integral(supply)

    def _held_reserve(self, bond: Bond, reserve_balances: Optional[Mapping[str, int]]) -> Decimal:
        return self._math.dec(balance_of(reserve_balances, bond.reserve_tokens[0]))

    def prices_to_mint(
        self,
        bond: Bond,
        amount: int,
        reserve_balances: Optional[Mapping[str, int]] = None,
    ) -> MultitokenReserve:
        """
        Reserve required, per reserve token, to mint `amount` more bond tokens.

        Without balances: integral(S + amount) - integral(S).
        With balances:    integral(S + amount) - held reserve, and at least one
                          unit is always charged even if earlier buyers overpaid.
        Swapper bonds:    the proportional reserve delta; unavailable at zero supply.
        """
        self._check_amount(amount)
        if bond.function_type == FunctionType.SWAPPER:
            if bond.current_supply == 0:
                raise FunctionNotAvailableError("the first swapper function mint does not have a price")
            return self._distributor.reserve_delta_for_liquidity_delta(bond, amount, reserve_balances)

        curve = curve_for_bond(bond, self._math)
        new_value = curve.integral(bond.current_supply + amount)
        if not reserve_balances:
            price = self._math.sub(new_value, curve.integral(bond.current_supply))
        else:
            price = self._math.sub(new_value, self._held_reserve(bond, reserve_balances))
            if price < 0:
                logger.warning(
                    "Held reserve of %s covers the mint of %s; charging one unit instead of %s",
                    bond.token, amount, price,
                )
                price = self._math.dec(1)

        logger.debug("Price to mint %s %s at supply %s: %s", amount, bond.token, bond.current_supply, price)
        return self._distributor.broadcast(bond, price)

    def returns_for_burn(
        self,
        bond: Bond,
        amount: int,
        reserve_balances: Optional[Mapping[str, int]] = None,
    ) -> MultitokenReserve:
        """
        Reserve returned, per reserve token, for burning `amount` bond tokens.

        Without balances: integral(S) - integral(S - amount).
        With balances:    held reserve - integral(S - amount), never below zero.
        Swapper bonds:    the proportional reserve delta.

        Burning more than the current supply is a caller precondition.
        """
        self._check_amount(amount)
        if bond.function_type == FunctionType.SWAPPER:
            return self._distributor.reserve_delta_for_liquidity_delta(bond, amount, reserve_balances)

        curve = curve_for_bond(bond, self._math)
        remaining_value = curve.integral(bond.current_supply - amount)
        if not reserve_balances:
            reserve_return = self._math.sub(curve.integral(bond.current_supply), remaining_value)
        else:
            held = self._held_reserve(bond, reserve_balances)
            if remaining_value > held:
                logger.warning(
                    "Held reserve of %s (%s) is below the curve value %s after burning %s; returning zero",
                    bond.token, held, remaining_value, amount,
                )
                reserve_return = self._math.dec(0)
            else:
                reserve_return = self._math.sub(held, remaining_value)

        logger.debug("Return for burning %s %s at supply %s: %s", amount, bond.token, bond.current_supply,
                     reserve_return)
        return self._distributor.broadcast(bond, reserve_return)

    def reserve_delta_for_liquidity_delta(
        self,
        bond: Bond,
        liquidity_delta: int,
        reserve_balances: Optional[Mapping[str, int]] = None,
    ) -> MultitokenReserve:
        return self._distributor.reserve_delta_for_liquidity_delta(bond, liquidity_delta, reserve_balances)

    def current_prices(
        self,
        bond: Bond,
        reserve_balances: Optional[Mapping[str, int]] = None,
    ) -> MultitokenReserve:
        return self._distributor.current_prices(bond, reserve_balances)
