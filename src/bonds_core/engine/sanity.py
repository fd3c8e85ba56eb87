import logging
from decimal import Decimal
from typing import Mapping, Optional

from bonds_core.common.math import DecimalArithmetic, default_arithmetic
from bonds_core.common.model import Bond
from bonds_core.engine.reserves import balance_of

logger = logging.getLogger(__name__)


class SanityChecker:
    """
    Flags reserve states whose ratio first_balance / second_balance strays from the
    bond's sanity rate by more than the sanity margin:
        [max(0, rate * (1 - margin/100)), rate * (1 + margin/100)]

    A sanity rate of zero disables the check, and it only applies to bonds with
    exactly two reserve tokens.
    """

    def __init__(self, arithmetic: Optional[DecimalArithmetic] = None):
        self._math = arithmetic or default_arithmetic

    def bounds(self, bond: Bond):
        margin = self._math.quo(bond.sanity_margin_percentage, 100)
        upper = self._math.mul(bond.sanity_rate, self._math.add(1, margin))
        lower = self._math.mul(bond.sanity_rate, self._math.sub(1, margin))
        if lower < 0:
            lower = self._math.dec(0)
        return lower, upper

    def violates_sanity_rate(self, bond: Bond, reserve_balances: Optional[Mapping[str, int]]) -> bool:
        if bond.sanity_rate == 0:
            return False
        if len(bond.reserve_tokens) != 2:
            logger.debug("Sanity rate of %s ignored: %d reserve tokens", bond.token, len(bond.reserve_tokens))
            return False

        first = balance_of(reserve_balances, bond.reserve_tokens[0])
        second = balance_of(reserve_balances, bond.reserve_tokens[1])
        if second == 0:
            return True
        rate: Decimal = self._math.quo(first, second)
        lower, upper = self.bounds(bond)
        return rate < lower or rate > upper
