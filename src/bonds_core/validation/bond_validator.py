from typing import Any, Dict, List

from bonds_core.common.enums import FunctionType
from bonds_core.common.model import Bond, render_decimal
from bonds_core.curves.registry import curve_for_bond
from bonds_core.engine.pricing import PricingEngine


REQUIRED_PARAMS = {
    FunctionType.POWER: ["m", "n", "c"],
    FunctionType.SIGMOID: ["a", "b", "c"],
    FunctionType.SWAPPER: [],
}

# Failures a curve evaluation can report for a badly configured bond.
EVALUATION_ERRORS = (ArithmeticError, KeyError, ValueError)


class BondValidator:
    """
    Validator run when a bond is created or edited.
    Performs:
      1) Param checks (function parameters, reserve tokens, fees, limits, signers)
      2) Boundary tests (integral(0) == 0, non-negative price at zero supply)
      3) Scenario tests (mint from zero, then burn the same amount back)

    Each step returns a dict with:
      {
        "errors": [str...],
        "warnings": [str...],
        "info": {...}
      }
    and 'run_all_validations' aggregates them into a single result.
    """

    @staticmethod
    def _validate_function_params(bond: Bond, errors: List[str]):
        required = REQUIRED_PARAMS[bond.function_type]
        names = bond.function_parameters.names()

        if len(set(names)) != len(names):
            errors.append(f"{bond.function_type}: duplicate function parameters {names}.")
        missing = [p for p in required if p not in names]
        unexpected = [p for p in names if p not in required]
        if missing:
            errors.append(f"{bond.function_type}: missing function parameters {missing}.")
        if unexpected:
            errors.append(f"{bond.function_type}: unexpected function parameters {unexpected}.")

        for fp in bond.function_parameters:
            if fp.value < 0:
                errors.append(f"{bond.function_type}: '{fp.param}' cannot be negative.")

        params = bond.function_parameters.as_map()
        if bond.function_type == FunctionType.POWER and "n" in params:
            n = params["n"]
            if n != n.to_integral_value():
                errors.append("POWER: 'n' must be a whole number.")
        if bond.function_type == FunctionType.SIGMOID and "c" in params:
            if params["c"] <= 0:
                errors.append("SIGMOID: 'c' must be > 0.")

    @staticmethod
    def validate_params(bond: Bond) -> Dict[str, Any]:
        """
        Checks that the bond's configuration is economically and structurally valid.
        """
        errors: List[str] = []
        warnings: List[str] = []
        info: Dict[str, Any] = {}

        if not bond.token:
            errors.append("Bond: 'token' must not be empty.")

        BondValidator._validate_function_params(bond, errors)

        # Reserve tokens
        if not bond.reserve_tokens:
            errors.append("Bond: at least one reserve token is required.")
        if len(set(bond.reserve_tokens)) != len(bond.reserve_tokens):
            errors.append("Bond: reserve tokens must not contain duplicates.")
        if bond.function_type == FunctionType.SWAPPER and len(bond.reserve_tokens) != 2:
            errors.append("SWAPPER: exactly two reserve tokens are required.")
        if bond.token in bond.reserve_tokens:
            errors.append("Bond: the bond token cannot be one of its own reserve tokens.")

        # Fees
        for label, pct in (("tx_fee_percentage", bond.tx_fee_percentage),
                           ("exit_fee_percentage", bond.exit_fee_percentage)):
            if pct < 0 or pct > 100:
                errors.append(f"Bond: '{label}' must be between 0 and 100.")
        if bond.tx_fee_percentage + bond.exit_fee_percentage >= 100:
            errors.append("Bond: fees cannot be or exceed 100%.")

        # Supply, limits and sanity
        if bond.max_supply < 0:
            errors.append("Bond: 'max_supply' cannot be negative.")
        for token, limit in bond.order_quantity_limits.items():
            if limit < 0:
                errors.append(f"Bond: order quantity limit for {token} cannot be negative.")
            if token not in bond.reserve_tokens:
                warnings.append(f"Bond: order quantity limit for {token} does not match a reserve token.")
        if bond.sanity_rate < 0:
            errors.append("Bond: 'sanity_rate' cannot be negative.")
        if bond.sanity_margin_percentage < 0:
            errors.append("Bond: 'sanity_margin_percentage' cannot be negative.")
        if bond.sanity_rate != 0 and len(bond.reserve_tokens) != 2:
            warnings.append("Bond: sanity rate only applies to bonds with exactly two reserve tokens; it is ignored.")

        if not bond.signers:
            errors.append("Bond: at least one signer is required.")
        if bond.batch_blocks <= 0:
            errors.append("Bond: 'batch_blocks' must be positive.")

        info["param_summary"] = {
            "token": bond.token,
            "function_type": str(bond.function_type),
            "function_parameters": bond.function_parameters.render(),
            "reserve_tokens": list(bond.reserve_tokens),
            "tx_fee_percentage": str(bond.tx_fee_percentage),
            "exit_fee_percentage": str(bond.exit_fee_percentage),
            "max_supply": str(bond.max_supply),
            "sanity_rate": str(bond.sanity_rate),
            "sanity_margin_percentage": str(bond.sanity_margin_percentage),
        }

        return {
            "errors": errors,
            "warnings": warnings,
            "info": info
        }

    @staticmethod
    def boundary_tests(bond: Bond) -> Dict[str, Any]:
        """
        Calls a few boundary conditions on the bond's curve:
          - integral(0) must be exactly zero
          - price(0) must not be negative
        Swapper bonds have no curve and are skipped.
        """
        errors: List[str] = []
        warnings: List[str] = []
        info: Dict[str, Any] = {}

        if not bond.function_type.is_curve:
            info["boundary_tests_run"] = False
            return {"errors": errors, "warnings": warnings, "info": info}

        curve = curve_for_bond(bond)
        try:
            integral_at_zero = curve.integral(0)
            if integral_at_zero != 0:
                errors.append(f"Integral at supply=0 is not zero: got {integral_at_zero}")
        except EVALUATION_ERRORS as e:
            errors.append(f"Exception calling integral(0): {e}")

        try:
            price_at_zero = curve.price(0)
            if price_at_zero < 0:
                errors.append("Price is negative at supply=0.")
            info["price_at_zero"] = render_decimal(price_at_zero)
        except EVALUATION_ERRORS as e:
            errors.append(f"Exception calling price(0): {e}")

        info["boundary_tests_run"] = True
        return {
            "errors": errors,
            "warnings": warnings,
            "info": info
        }

    @staticmethod
    def scenario_tests(bond: Bond, amount: int = 100) -> Dict[str, Any]:
        """
        Runs a small scenario without reserve balances:
          1) price to mint `amount` from zero supply
          2) return for burning the same `amount` back to zero
        The two must match exactly and neither may be negative.
        """
        errors: List[str] = []
        warnings: List[str] = []
        info: Dict[str, Any] = {}

        if not bond.function_type.is_curve:
            info["scenario_tests_run"] = False
            return {"errors": errors, "warnings": warnings, "info": info}

        engine = PricingEngine()
        try:
            empty = bond.with_supply(0)
            minted = engine.prices_to_mint(empty, amount)
            burned = engine.returns_for_burn(empty.with_supply(amount), amount)
            if any(v < 0 for v in minted.as_dict().values()):
                errors.append(f"Minting {amount} tokens => negative price.")
            if minted != burned:
                errors.append(f"Minting then burning {amount} tokens does not round-trip: {minted} vs {burned}")
            info["price_to_mint_from_zero"] = {t: render_decimal(v) for t, v in minted.as_dict().items()}
        except EVALUATION_ERRORS as e:
            errors.append(f"Exception in mint/burn scenario: {e}")

        info["scenario_tests_run"] = True
        return {
            "errors": errors,
            "warnings": warnings,
            "info": info
        }

    @staticmethod
    def run_all_validations(bond: Bond) -> Dict[str, Any]:
        """
        Aggregates:
          - param check
          - boundary tests (only when the params are valid)
          - scenario tests (only when the params are valid)
        Returns a dict with keys: errors, warnings, info
        """
        results = {
            "errors": [],
            "warnings": [],
            "info": {}
        }

        # 1) Param checks
        param_check = BondValidator.validate_params(bond)
        results["errors"].extend(param_check["errors"])
        results["warnings"].extend(param_check["warnings"])
        results["info"].update(param_check["info"])
        if param_check["errors"]:
            return results

        # 2) Boundary tests
        boundary = BondValidator.boundary_tests(bond)
        results["errors"].extend(boundary["errors"])
        results["warnings"].extend(boundary["warnings"])
        results["info"].update(boundary["info"])

        # 3) Scenario tests
        scenario = BondValidator.scenario_tests(bond)
        results["errors"].extend(scenario["errors"])
        results["warnings"].extend(scenario["warnings"])
        results["info"].update(scenario["info"])

        return results
