"""Number rendering for totals.

Both helpers round half away from zero on the shortest decimal form of the
value, so ``1.005`` rounds to ``1.01`` rather than to the binary float below it.
Non-finite values render as ``inf``, ``-inf`` or ``nan``.
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal, localcontext

from runtotal.config import TotalConfig

__all__ = ["number_format", "round_half_up", "format_value"]


def _quantize(value: float, decimals: int) -> Decimal:
    exact = Decimal(repr(float(value)))
    exponent = Decimal(1).scaleb(-decimals)
    with localcontext() as ctx:
        # room for every integer digit plus the requested places
        ctx.prec = max(exact.adjusted() + 1, 1) + decimals + 2
        result = exact.quantize(exponent, rounding=ROUND_HALF_UP)
    if result.is_zero():
        result = abs(result)
    return result


def number_format(value: float, decimals: int = 0) -> str:
    """Render ``value`` with ``decimals`` places and ``,`` thousands separators.

    Examples:
        >>> number_format(1234567.891, 2)
        '1,234,567.89'
        >>> number_format(-0.001, 2)
        '0.00'
    """
    if not math.isfinite(value):
        return repr(float(value))
    return f"{_quantize(value, decimals):,.{decimals}f}"


def round_half_up(value: float, decimals: int = 0) -> str:
    """Round ``value`` to ``decimals`` places and render it without padding zeros.

    Examples:
        >>> round_half_up(3.14159, 2)
        '3.14'
        >>> round_half_up(45.0, 1)
        '45'
    """
    if not math.isfinite(value):
        return repr(float(value))
    text = f"{_quantize(value, decimals):f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text == "-0":
        text = "0"
    return text


def format_value(value: float, config: TotalConfig) -> str:
    """Apply ``config`` to a raw number: number_format wins over round, then prefix/suffix."""
    if config.number_format is not False:
        text = number_format(value, config.number_format)
    elif config.round is not False:
        text = round_half_up(value, config.round)
    else:
        text = _plain(value)
    return f"{config.prefix or ''}{text}{config.suffix or ''}"


def _plain(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))
