from typing import Iterable, Mapping, Sequence

from bonds_core.common.model import Bond


class OrderLimitChecker:
    """Per-order ceilings and the equality checks a bond edit is gated on."""

    @staticmethod
    def exceeds_any_order_limit(bond: Bond, amounts: Mapping[str, int]) -> bool:
        """
        True iff some token in `amounts` strictly exceeds its configured order limit.
        Tokens without a limit never trigger.
        """
        for token, amount in amounts.items():
            limit = bond.order_quantity_limits.get(token)
            if limit is not None and amount > limit:
                return True
        return False

    @staticmethod
    def signers_equal(bond: Bond, candidate: Sequence[str]) -> bool:
        """Order matters: signers are a credential, not a set."""
        return list(candidate) == bond.signers

    @staticmethod
    def reserve_tokens_equal(bond: Bond, candidate: Iterable[str]) -> bool:
        """Same reserve tokens in any order; differing membership or count is a mismatch."""
        return sorted(candidate) == bond.reserve_tokens
