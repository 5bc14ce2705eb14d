"""
Fee helpers.

Converts a gas limit and a gas price into a Fee. Choosing the price is left
to the caller.
"""

from __future__ import annotations
from dataclasses import dataclass
from decimal import ROUND_CEILING, Decimal, InvalidOperation
from typing import Union
import re

from ..messages.types import Coin
from .models import Fee

_GAS_PRICE = re.compile(r"^([0-9]+(?:\.[0-9]+)?)([a-zA-Z][a-zA-Z0-9/:._-]{2,127})$")


@dataclass(frozen=True)
class GasPrice:
    """Price of one unit of gas in a single denom."""
    amount: Decimal
    denom: str

    @classmethod
    def from_string(cls, value: str) -> GasPrice:
        """
        Parse "<decimal><denom>", e.g. "0.025ucosm".

        Raises:
            ValueError: If the string is not a valid gas price
        """
        match = _GAS_PRICE.match(value.strip())
        if not match:
            raise ValueError(f"Invalid gas price string: {value!r}")
        try:
            amount = Decimal(match.group(1))
        except InvalidOperation as e:
            raise ValueError(f"Invalid gas price amount: {match.group(1)!r}") from e
        return cls(amount=amount, denom=match.group(2))

    def __str__(self) -> str:
        return f"{self.amount}{self.denom}"


def calculate_fee(gas_limit: int, gas_price: Union[GasPrice, str]) -> Fee:
    """
    Fee for gas_limit at gas_price, rounded up to a whole base unit.

    Args:
        gas_limit: Positive gas limit
        gas_price: GasPrice or its string form

    Returns:
        Fee with a single coin
    """
    if isinstance(gas_price, str):
        gas_price = GasPrice.from_string(gas_price)
    if gas_limit <= 0:
        raise ValueError(f"gas_limit must be positive, got {gas_limit}")
    amount = (gas_price.amount * gas_limit).to_integral_value(rounding=ROUND_CEILING)
    return Fee(amount=(Coin(denom=gas_price.denom, amount=str(int(amount))),), gas_limit=gas_limit)


__all__ = [
    "GasPrice",
    "calculate_fee",
]
