import pytest

from bonds_core.common.enums import FunctionType


class TestFunctionType:
    @pytest.mark.parametrize(
        "input_str, expected_enum",
        [
            ("power_function", FunctionType.POWER),
            ("POWER", FunctionType.POWER),
            ("power", FunctionType.POWER),
            ("sigmoid_function", FunctionType.SIGMOID),
            ("Sigmoid", FunctionType.SIGMOID),
            ("swapper_function", FunctionType.SWAPPER),
            ("SWAPPER_FUNCTION", FunctionType.SWAPPER),
        ],
    )
    def test_from_str_valid(self, input_str, expected_enum):
        """Test that from_str accepts both the member value and the member name."""
        assert FunctionType.from_str(input_str) == expected_enum

    @pytest.mark.parametrize("input_str", ["", "linear", "power_functionx", "augmented_function"])
    def test_from_str_invalid(self, input_str):
        """Test that from_str raises NotImplementedError for unknown function types."""
        with pytest.raises(NotImplementedError):
            FunctionType.from_str(input_str)

    def test_is_curve(self):
        """Only power and sigmoid define a price curve."""
        assert FunctionType.POWER.is_curve
        assert FunctionType.SIGMOID.is_curve
        assert not FunctionType.SWAPPER.is_curve

    def test_hashable(self):
        """Test that FunctionType can be used in sets/dicts."""
        test_dict = {FunctionType.SIGMOID: "sigmoid_value"}
        assert test_dict[FunctionType.SIGMOID] == "sigmoid_value"
        assert FunctionType.POWER in {FunctionType.POWER, FunctionType.SWAPPER}

    def test_str_and_repr(self):
        """Test that __str__ and __repr__ return the enum name."""
        assert str(FunctionType.POWER) == "POWER"
        assert repr(FunctionType.SWAPPER) == "SWAPPER"
