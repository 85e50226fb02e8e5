"""Numeric text helpers shared by the range parser and the derived-value engine.

Result and age fields are free text typed by the operator, so parsing is
lenient (leading number wins, trailing text ignored) and never raises.
"""

import math
import re
from decimal import ROUND_HALF_EVEN, ROUND_HALF_UP, Decimal, localcontext

# Leading signed decimal, optionally with an exponent ("5 Y" -> 5, "1e3" -> 1000)
_LEADING_NUMBER_RE = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")

# Precision used to squash binary floating-point noise before display rounding
_NOISE_QUANTUM = Decimal("1e-9")


def parse_number(value: object) -> float | None:
    """Parse a leading number from free text.

    Args:
        value: A string, int or float. Anything else yields None.

    Returns:
        The parsed finite float, or None if no number leads the text.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
        return number if math.isfinite(number) else None
    if not isinstance(value, str):
        return None

    match = _LEADING_NUMBER_RE.match(value)
    if not match:
        return None
    number = float(match.group(1))
    return number if math.isfinite(number) else None


def format_fixed(value: float, places: int) -> str:
    """Format a float with a fixed number of decimals.

    Rounds half away from zero. The value is first normalised to nine
    decimals so that e.g. 28.7 * 6.0 - 46.7 (just under 125.5 in binary)
    displays as "126" rather than "125". Non-finite values come back as
    their str() ("inf", "nan"), which parse_number rejects.
    """
    if not math.isfinite(value):
        return str(value)
    exact = Decimal(repr(value))
    quantum = Decimal(1).scaleb(-places)
    with localcontext() as ctx:
        # Enough digits for every integer digit plus the noise quantum
        ctx.prec = max(60, exact.adjusted() + places + 12)
        cleaned = exact.quantize(_NOISE_QUANTUM, rounding=ROUND_HALF_EVEN)
        rounded = cleaned.quantize(quantum, rounding=ROUND_HALF_UP)
    if rounded.is_zero():
        # Avoid "-0.0"
        rounded = abs(rounded)
    return f"{rounded:.{places}f}"
