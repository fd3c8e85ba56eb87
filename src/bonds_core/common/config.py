from pydantic import BaseModel, Field, field_validator


class NumericConfig(BaseModel):
    """
    Fixed-point settings shared by every curve and engine computation.

    The defaults reproduce the reference behaviour: 18 fractional digits,
    integers bounded to 255 bits and scaled decimals bounded to 315 bits.
    """

    precision: int = Field(18, gt=0, description="Fractional digits kept after every operation")
    max_int_bit_length: int = Field(255, gt=0, description="Largest bit length of an integer amount")
    max_dec_bit_length: int = Field(
        315, gt=0, description="Largest bit length of a decimal's scaled integer representation"
    )

    model_config = {"frozen": True}

    @field_validator("precision")
    @classmethod
    def precision_must_be_even(cls, v: int) -> int:
        # Square roots keep half of the fractional digits.
        if v % 2 != 0:
            raise ValueError("precision must be an even number of digits")
        return v


DEFAULT_NUMERIC_CONFIG = NumericConfig()
