"""Token amount conversion between display decimals and integer base units.

All base-unit arithmetic uses ``int``; display values go through
``decimal.Decimal`` so no precision is lost at 18 decimals.
"""

from decimal import Decimal, InvalidOperation, localcontext
from typing import Union

from .errors import AmountError

TOKEN_DECIMALS = 18

# Largest amount an ERC-20 uint256 can carry.
MAX_UINT256 = 2 ** 256 - 1

AmountLike = Union[str, int, float, Decimal]


def parse_units(value: AmountLike, decimals: int = TOKEN_DECIMALS) -> int:
    """Convert a decimal token amount into integer base units.

    Raises ``AmountError`` for negative, non-finite or non-numeric input and
    for values with more fractional digits than ``decimals`` or above the
    uint256 range.
    """
    if isinstance(value, float):
        # Route floats through their repr so 0.1 stays 0.1.
        value = repr(value)
    text = str(value).strip()
    try:
        amount = Decimal(text)
    except InvalidOperation:
        raise AmountError(f"Invalid token amount: {text!r}", value=text) from None

    if not amount.is_finite():
        raise AmountError(f"Invalid token amount: {text!r}", value=text)
    if amount < 0:
        raise AmountError(f"Token amount must be non-negative, got {text}", value=text)

    with localcontext() as ctx:
        ctx.prec = max(100, len(amount.as_tuple().digits))
        scaled = amount.scaleb(decimals)
        if scaled != scaled.to_integral_value():
            raise AmountError(
                f"Token amount {text} has more than {decimals} decimal places",
                value=text,
            )
        if scaled > MAX_UINT256:
            raise AmountError(
                f"Token amount {text} exceeds the uint256 range", value=text
            )
        return int(scaled)


def format_units(value: int, decimals: int = TOKEN_DECIMALS) -> str:
    """Render integer base units as the shortest exact decimal string."""
    negative = value < 0
    whole, fraction = divmod(abs(int(value)), 10 ** decimals)
    text = str(whole)
    if fraction:
        text += "." + str(fraction).rjust(decimals, "0").rstrip("0")
    return "-" + text if negative else text


def parse_ether(value: AmountLike) -> int:
    return parse_units(value, TOKEN_DECIMALS)


def format_ether(value: int) -> str:
    return format_units(value, TOKEN_DECIMALS)
