import copy
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, Iterable, List, Mapping, Tuple

from bonds_core.common.enums import FunctionType


def render_decimal(value: Decimal) -> str:
    """Plain text without trailing zeros or scientific notation."""
    if value == 0:
        return "0"
    text = format(value, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


@dataclass(frozen=True)
class FunctionParam:
    """A single named coefficient of a curve function."""
    param: str
    value: Decimal


@dataclass(frozen=True)
class FunctionParams:
    """
    Ordered, immutable set of curve coefficients (e.g. m, n, c for a power curve).
    Insertion order is kept only so the rendered form is deterministic.
    """
    params: Tuple[FunctionParam, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "params", tuple(self.params))

    @classmethod
    def from_mapping(cls, values: Mapping[str, object]) -> "FunctionParams":
        return cls(tuple(FunctionParam(k, Decimal(v)) for k, v in values.items()))

    def get(self, name: str) -> Decimal:
        for fp in self.params:
            if fp.param == name:
                return fp.value
        raise KeyError(f"Function parameter '{name}' is not defined.")

    def as_map(self) -> Dict[str, Decimal]:
        return {fp.param: fp.value for fp in self.params}

    def names(self) -> List[str]:
        return [fp.param for fp in self.params]

    def render(self) -> str:
        return "{" + ",".join(f"{fp.param}:{render_decimal(fp.value)}" for fp in self.params) + "}"

    def __len__(self):
        return len(self.params)

    def __iter__(self):
        return iter(self.params)

    def __str__(self):
        return self.render()


@dataclass(frozen=True)
class Coin:
    """An integer amount of a single token."""
    token: str
    amount: int = 0


@dataclass(frozen=True)
class DecCoin:
    """A decimal amount of a single token."""
    token: str
    amount: Decimal = Decimal("0")


@dataclass(frozen=True)
class MultitokenReserve:
    """
    Amount per reserve token: a per-token price, a total mint cost or a total burn return.
    Stored sorted by token; two reserves are equal iff their token -> amount mappings are.
    """
    amounts: Tuple[Tuple[str, Decimal], ...] = ()

    def __post_init__(self):
        items = self.amounts.items() if isinstance(self.amounts, Mapping) else self.amounts
        object.__setattr__(self, "amounts", tuple(sorted(items)))

    @classmethod
    def from_dec(cls, tokens: Iterable[str], value: Decimal) -> "MultitokenReserve":
        return cls(tuple((t, value) for t in tokens))

    @classmethod
    def from_int(cls, tokens: Iterable[str], value: int) -> "MultitokenReserve":
        return cls.from_dec(tokens, Decimal(value))

    @property
    def tokens(self) -> List[str]:
        return [t for t, _ in self.amounts]

    def amount_of(self, token: str) -> Decimal:
        for t, amount in self.amounts:
            if t == token:
                return amount
        return Decimal("0")

    def as_dict(self) -> Dict[str, Decimal]:
        return dict(self.amounts)

    def __getitem__(self, token: str) -> Decimal:
        return self.as_dict()[token]

    def __len__(self):
        return len(self.amounts)


@dataclass
class Bond:
    """
    Curve definition and economic configuration of a bond.

    reserve_tokens and order_quantity_limits are put in token order once, here,
    so every later comparison or output can rely on that order. current_supply
    always starts at zero; the settlement layer hands over later snapshots
    through with_supply().
    """
    token: str
    function_type: FunctionType
    function_parameters: FunctionParams = field(default_factory=FunctionParams)
    reserve_tokens: List[str] = field(default_factory=list)
    reserve_address: str = ""
    tx_fee_percentage: Decimal = Decimal("0")
    exit_fee_percentage: Decimal = Decimal("0")
    fee_address: str = ""
    max_supply: int = 0
    order_quantity_limits: Dict[str, int] = field(default_factory=dict)
    sanity_rate: Decimal = Decimal("0")
    sanity_margin_percentage: Decimal = Decimal("0")
    allow_sell: bool = True
    signers: List[str] = field(default_factory=list)
    name: str = ""
    description: str = ""
    creator: str = ""
    batch_blocks: int = 1
    current_supply: int = field(default=0, init=False)

    def __post_init__(self):
        if self.function_parameters is None:
            self.function_parameters = FunctionParams()
        elif isinstance(self.function_parameters, Mapping):
            self.function_parameters = FunctionParams.from_mapping(self.function_parameters)
        self.reserve_tokens = sorted(self.reserve_tokens)
        self.order_quantity_limits = {
            t: limit for t, limit in sorted(self.order_quantity_limits.items()) if limit != 0
        }
        self.signers = list(self.signers)

    def with_supply(self, supply: int) -> "Bond":
        """Returns a copy of this bond with `current_supply` set to `supply`."""
        if supply < 0:
            raise ValueError("Current supply must be non-negative.")
        snapshot = copy.deepcopy(self)
        snapshot.current_supply = supply
        return snapshot
