import logging

import pytest

from decimal import Decimal

from bonds_core.common.errors import FunctionNotAvailableError
from bonds_core.common.model import MultitokenReserve
from bonds_core.engine.pricing import PricingEngine


@pytest.fixture
def engine():
    return PricingEngine()


def _reserve(tokens, value):
    return MultitokenReserve.from_dec(tokens, Decimal(value))


class TestPricesToMint:
    def test_power_with_balances(self, engine, power_bond):
        """The held reserve replaces integral(S)."""
        result = engine.prices_to_mint(power_bond, 100, {"res": 10000})
        assert result == _reserve(["res"], "4000000")

    def test_power_without_balances(self, engine, power_bond):
        result = engine.prices_to_mint(power_bond, 100)
        assert result == _reserve(["res"], "4010000")

    def test_power_from_existing_supply(self, engine, power_bond):
        """integral(101) - integral(1) = 4131304 - 104"""
        result = engine.prices_to_mint(power_bond.with_supply(1), 100)
        assert result == _reserve(["res"], "4131200")

    def test_sigmoid_without_balances(self, engine, sigmoid_bond):
        result = engine.prices_to_mint(sigmoid_bond, 100)
        assert result == _reserve(["res"], "569.718730497")

    def test_sigmoid_with_balances(self, engine, sigmoid_bond):
        result = engine.prices_to_mint(sigmoid_bond, 100, {"res": 10})
        assert result == _reserve(["res"], "559.718730497")

    def test_overfunded_reserve_charges_one_unit(self, engine, power_bond, caplog):
        with caplog.at_level(logging.WARNING, logger="bonds_core.engine.pricing"):
            result = engine.prices_to_mint(power_bond, 1, {"res": 10 ** 9})
        assert result == _reserve(["res"], "1")
        assert "charging one unit" in caplog.text

    def test_swapper(self, engine, swapper_bond):
        result = engine.prices_to_mint(swapper_bond.with_supply(2), 10, {"res": 10000, "rez": 10000})
        assert result == _reserve(["res", "rez"], "50000")

    def test_swapper_without_balances(self, engine, swapper_bond):
        result = engine.prices_to_mint(swapper_bond.with_supply(2), 10)
        assert result.tokens == ["res", "rez"]
        assert all(v == 0 for v in result.as_dict().values())

    def test_swapper_first_mint_has_no_price(self, engine, swapper_bond):
        with pytest.raises(FunctionNotAvailableError):
            engine.prices_to_mint(swapper_bond, 10, {"res": 10000, "rez": 10000})

    def test_multiple_reserve_tokens_broadcast(self, engine, power_bond):
        power_bond.reserve_tokens = ["res", "rez"]
        result = engine.prices_to_mint(power_bond, 100)
        assert result == _reserve(["res", "rez"], "4010000")

    def test_negative_amount_raises(self, engine, power_bond):
        with pytest.raises(ValueError):
            engine.prices_to_mint(power_bond, -1)


class TestReturnsForBurn:
    @pytest.mark.parametrize(
        "bond_fixture, balances, expected",
        [
            ("power_bond", {"res": 232}, "128"),
            ("sigmoid_bond", {"res": 232}, "231.927741664"),
        ]
    )
    def test_with_balances(self, engine, request, bond_fixture, balances, expected):
        bond = request.getfixturevalue(bond_fixture).with_supply(2)
        assert engine.returns_for_burn(bond, 1, balances) == _reserve(["res"], expected)

    def test_swapper(self, engine, swapper_bond):
        result = engine.returns_for_burn(swapper_bond.with_supply(2), 1, {"res": 10000, "rez": 10000})
        assert result == _reserve(["res", "rez"], "5000")

    def test_swapper_divisible_share_is_exact(self, engine, swapper_bond):
        result = engine.returns_for_burn(swapper_bond.with_supply(3), 1, {"res": 9, "rez": 9})
        assert result == _reserve(["res", "rez"], "3")

    def test_without_balances(self, engine, power_bond):
        """integral(2) - integral(1) = 232 - 104"""
        result = engine.returns_for_burn(power_bond.with_supply(2), 1)
        assert result == _reserve(["res"], "128")

    def test_underfunded_reserve_returns_zero(self, engine, power_bond, caplog):
        with caplog.at_level(logging.WARNING, logger="bonds_core.engine.pricing"):
            result = engine.returns_for_burn(power_bond.with_supply(2), 1, {"res": 50})
        assert result == _reserve(["res"], "0")
        assert "returning zero" in caplog.text

    def test_mint_then_burn_round_trips(self, engine, sigmoid_bond):
        minted = engine.prices_to_mint(sigmoid_bond.with_supply(7), 30)
        burned = engine.returns_for_burn(sigmoid_bond.with_supply(37), 30)
        assert minted == burned


class TestDelegation:
    def test_current_prices(self, engine, swapper_bond):
        result = engine.current_prices(swapper_bond.with_supply(100), {"res": 10000, "rez": 10000})
        assert result == _reserve(["res", "rez"], "100")

    def test_reserve_delta(self, engine, swapper_bond):
        result = engine.reserve_delta_for_liquidity_delta(swapper_bond.with_supply(4), 1, {"res": 10, "rez": 6})
        assert result.as_dict() == {"res": Decimal("2.5"), "rez": Decimal("1.5")}

    def test_curve_integral(self, engine, power_bond):
        assert engine.curve_integral(power_bond, 100) == Decimal("4010000")
