class BondsError(ValueError):
    """Base class for every failure the pricing and settlement engine reports."""
    code = "bonds_error"

    def __init__(self, message: str = ""):
        super().__init__(message or self.__doc__)


class FunctionNotAvailableError(BondsError):
    """Function is not available for the function type."""
    code = "function_not_available_for_function_type"


class ReserveTokenInvalidError(BondsError):
    """Token is not a valid reserve token."""
    code = "reserve_token_invalid"


class SwapAmountInvalidError(BondsError):
    """Swap amount is invalid."""
    code = "swap_amount_invalid"


class NumericOverflowError(BondsError, OverflowError):
    """Value exceeds the supported numeric magnitude."""
    code = "numeric_overflow"
