import math
from decimal import Context, Decimal, DivisionByZero, InvalidOperation, Overflow, ROUND_CEILING, ROUND_FLOOR, \
    ROUND_HALF_EVEN
from typing import Optional, Union

from bonds_core.common.config import DEFAULT_NUMERIC_CONFIG, NumericConfig
from bonds_core.common.errors import NumericOverflowError


Number = Union[Decimal, int, str]


class DecimalArithmetic:
    """
    Fixed-point arithmetic over decimal.Decimal.

    Every value is held at `precision` fractional digits and every operation is
    carried out on the scaled integer representation, so results are identical
    bit-for-bit on every run:
      - add/sub are exact
      - mul rounds the exact product half-to-even
      - quo truncates at double precision, then rounds half-to-even
      - sqrt truncates to precision / 2 fractional digits

    A result whose scaled representation needs more than `max_dec_bit_length`
    bits raises NumericOverflowError instead of wrapping.
    """

    def __init__(self, config: Optional[NumericConfig] = None):
        self._config = config or DEFAULT_NUMERIC_CONFIG
        self._one = 10 ** self._config.precision
        # Enough digits to hold the widest intermediate product exactly.
        digits = len(str(2 ** self._config.max_dec_bit_length)) * 2 + self._config.precision
        self._context = Context(
            prec=digits,
            rounding=ROUND_HALF_EVEN,
            traps=[InvalidOperation, DivisionByZero, Overflow],
        )

    @property
    def config(self) -> NumericConfig:
        return self._config

    @property
    def precision(self) -> int:
        return self._config.precision

    def _check_raw(self, raw: int) -> int:
        if raw.bit_length() > self._config.max_dec_bit_length:
            raise NumericOverflowError(
                f"decimal overflow: {raw.bit_length()} bits exceeds {self._config.max_dec_bit_length}"
            )
        return raw

    def _chop(self, raw: int) -> int:
        """
        Removes `precision` digits from a double-precision integer, rounding half-to-even.
        The sign is handled on the absolute value so negatives round symmetrically.
        """
        negative = raw < 0
        quo, rem = divmod(abs(raw), self._one)
        half = self._one // 2
        if rem > half or (rem == half and quo % 2 == 1):
            quo += 1
        return -quo if negative else quo

    def to_raw(self, value: Number) -> int:
        """Returns the scaled integer representation of `value`; extra fractional digits are rejected."""
        d = value if isinstance(value, Decimal) else Decimal(value)
        if not d.is_finite():
            raise ValueError(f"Cannot represent non-finite value {value}.")
        scaled = d.scaleb(self._config.precision, context=self._context)
        integral = scaled.to_integral_value(context=self._context)
        if scaled != integral:
            raise ValueError(f"{value} has more than {self._config.precision} fractional digits.")
        return self._check_raw(int(integral))

    def from_raw(self, raw: int) -> Decimal:
        self._check_raw(raw)
        return Decimal(raw).scaleb(-self._config.precision, context=self._context)

    def dec(self, value: Number) -> Decimal:
        """Normalizes `value` to a fixed-point decimal."""
        return self.from_raw(self.to_raw(value))

    def add(self, a: Number, b: Number) -> Decimal:
        return self.from_raw(self.to_raw(a) + self.to_raw(b))

    def sub(self, a: Number, b: Number) -> Decimal:
        return self.from_raw(self.to_raw(a) - self.to_raw(b))

    def mul(self, a: Number, b: Number) -> Decimal:
        return self.from_raw(self._chop(self.to_raw(a) * self.to_raw(b)))

    def quo(self, a: Number, b: Number) -> Decimal:
        divisor = self.to_raw(b)
        if divisor == 0:
            raise ZeroDivisionError("decimal division by zero")
        dividend = self.to_raw(a) * self._one * self._one
        # Truncate toward zero before rounding.
        quotient = abs(dividend) // abs(divisor)
        if (dividend < 0) != (divisor < 0):
            quotient = -quotient
        return self.from_raw(self._chop(quotient))

    def power(self, base: Number, exponent: int) -> Decimal:
        """
        Raises `base` to a non-negative integer power by square-and-multiply.
        Each step goes through mul, so intermediate overflow is reported.
        """
        if exponent < 0:
            raise ValueError("Exponent must be a non-negative integer.")
        result = self.dec(1)
        if exponent == 0:
            return result
        current = self.dec(base)
        i = exponent
        while i > 1:
            if i % 2 == 1:
                result = self.mul(result, current)
                i = (i - 1) // 2
            else:
                i //= 2
            current = self.mul(current, current)
        return self.mul(current, result)

    def sqrt(self, value: Number) -> Decimal:
        """Square root truncated to precision / 2 fractional digits."""
        raw = self.to_raw(value)
        if raw < 0:
            raise ValueError(f"Cannot take the square root of negative value {value}.")
        root = math.isqrt(raw)
        return self.dec(Decimal(root).scaleb(-(self._config.precision // 2), context=self._context))

    def exact_percentage(self, amount: Number, percentage: Number) -> Decimal:
        """amount * percentage / 100 without rounding to `precision`; used where a ceiling follows."""
        product = self._context.multiply(Decimal(amount), Decimal(percentage))
        return product.scaleb(-2, context=self._context)

    def ceil(self, value: Number) -> int:
        d = value if isinstance(value, Decimal) else Decimal(value)
        return self.check_int(int(d.to_integral_value(rounding=ROUND_CEILING, context=self._context)))

    def floor(self, value: Number) -> int:
        d = value if isinstance(value, Decimal) else Decimal(value)
        return self.check_int(int(d.to_integral_value(rounding=ROUND_FLOOR, context=self._context)))

    def check_int(self, value: int) -> int:
        if value.bit_length() > self._config.max_int_bit_length:
            raise NumericOverflowError(
                f"integer overflow: {value.bit_length()} bits exceeds {self._config.max_int_bit_length}"
            )
        return value


default_arithmetic = DecimalArithmetic()
