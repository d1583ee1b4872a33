"""Display formatting for token stats.

Pure functions with no I/O. Prices and amounts are rendered the way the page
shows them: micro-cap prices stay readable and large amounts get K/M/B
suffixes.

Rounding is half-up on the exact binary value of the float, so ties such as
1.25 round to 1.3 rather than to the even digit.
"""

import re
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal

_TRAILING_ZEROS = re.compile(r"\.?0+$")


def _round_half_up(value: float, places: int) -> Decimal:
    return Decimal(value).quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


def _fixed(value: float, places: int) -> str:
    return f"{_round_half_up(value, places):f}"


def _exponential(value: float, places: int) -> str:
    # Exponent without zero padding: 1.14e-7, not 1.14e-07
    exact = Decimal(value)
    exponent = exact.adjusted()
    rounded = exact.quantize(Decimal(1).scaleb(exponent - places), rounding=ROUND_HALF_UP)
    if rounded.adjusted() > exponent:
        # 9.995e-7 rounds up to 1.00e-6
        exponent += 1
        rounded = exact.quantize(Decimal(1).scaleb(exponent - places), rounding=ROUND_HALF_UP)
    return f"{rounded.scaleb(-exponent):f}e{exponent:+d}"


def format_price(price: float) -> str:
    """Format a token price in USD with precision tiered by magnitude.

    Args:
        price: Price in USD

    Returns:
        Price string prefixed with ``$``, e.g. ``$1.14e-7``, ``$1e-5``,
        ``$0.00005``, ``$0.0050`` or ``$1.50``
    """
    if price == 0:
        return "$0.00"

    if price < 0.000001:
        return f"${_exponential(price, 2)}"
    elif price < 0.00001:
        return f"${_fixed(price * 100000, 0)}e-5"
    elif price < 0.0001:
        return f"${_TRAILING_ZEROS.sub('', _fixed(price, 6))}"
    elif price < 0.01:
        return f"${_fixed(price, 4)}"
    else:
        return f"${_fixed(price, 2)}"


def format_large_number(num: float) -> str:
    """Format an amount with a K, M or B suffix.

    Amounts below one thousand keep two decimals with en-US grouping.

    Args:
        num: Amount to format

    Returns:
        Formatted amount, e.g. ``2.5B``, ``1.3M``, ``15.0K`` or ``999.00``
    """
    if num >= 1_000_000_000:
        return f"{_fixed(num / 1_000_000_000, 1)}B"
    elif num >= 1_000_000:
        return f"{_fixed(num / 1_000_000, 1)}M"
    elif num >= 1_000:
        return f"{_fixed(num / 1_000, 1)}K"
    else:
        return f"{_round_half_up(num, 2):,f}"


def format_holders(holders: int) -> str:
    """Format a holder count with en-US thousands separators."""
    return f"{holders:,}"


def format_time(moment: datetime) -> str:
    """Format a timestamp as an en-US locale time string (``3:04:05 PM``)."""
    return moment.strftime("%I:%M:%S %p").lstrip("0")
