"""Normal/High/Low classification of results against resolved range text.

Consumes only already-resolved range text (see reference_ranges.resolve_range);
no sex or age logic lives here. Bound patterns, first match wins:

    "less than X" / "< X"      -> {0, X}
    "greater than X" / "> X"   -> {X, 1.5 * X}
    "X-Y"                      -> {X, Y}

Text holding several clauses (comma or newline separated) is not classified,
since picking one of them would be a guess.
"""

import re

from labreport.schemas.report import (
    ChartBar,
    RangeAssessment,
    RangeBounds,
    RangeStatus,
    ResultComparison,
)
from labreport.utils.numbers import format_fixed, parse_number

_NUMBER = r"(\d+(?:\.\d+)?)"
_LESS_THAN_RE = re.compile(r"(?:\bless\s+than|<)\s*=?\s*" + _NUMBER, re.IGNORECASE)
_GREATER_THAN_RE = re.compile(r"(?:\bgreater\s+than|>)\s*=?\s*" + _NUMBER, re.IGNORECASE)
_SPAN_RE = re.compile(_NUMBER + r"\s*[-–—]\s*" + _NUMBER)
_CLAUSE_SEPARATOR_RE = re.compile(r"[,\n\r]")

# First number anywhere in a result ("<0.5" -> 0.5, "12 (repeat)" -> 12,
# "-5" -> -5). A minus only counts when it does not follow a word ("5-10" -> 5).
_RESULT_VALUE_RE = re.compile(r"((?:(?<![\w.])-)?\d+(?:\.\d+)?)")

# Upper bound stand-in for open-ended "greater than" ranges
GREATER_THAN_SPAN = 1.5


def parse_range_bounds(range_text: str) -> RangeBounds | None:
    """Parse numeric bounds from resolved range text, or None."""
    if not range_text:
        return None
    text = range_text.strip()
    if not text or _CLAUSE_SEPARATOR_RE.search(text):
        return None

    match = _LESS_THAN_RE.search(text)
    if match:
        return RangeBounds(min=0.0, max=float(match.group(1)))

    match = _GREATER_THAN_RE.search(text)
    if match:
        low = float(match.group(1))
        return RangeBounds(min=low, max=low * GREATER_THAN_SPAN)

    match = _SPAN_RE.search(text)
    if match:
        return RangeBounds(min=float(match.group(1)), max=float(match.group(2)))

    return None


def classify_result(value: float, bounds: RangeBounds) -> RangeStatus:
    """Exclusive bounds: only values strictly outside [min, max] are flagged."""
    if value < bounds.min:
        return RangeStatus.LOW
    if value > bounds.max:
        return RangeStatus.HIGH
    return RangeStatus.NORMAL


def extract_result_value(result_text: str) -> float | None:
    """First decimal number appearing in result text."""
    if not result_text:
        return None
    match = _RESULT_VALUE_RE.search(result_text)
    return float(match.group(1)) if match else None


def assess_result(result_text: str, range_text: str) -> RangeAssessment | None:
    """Classify a result for printing; None when either side is not numeric."""
    value = extract_result_value(result_text)
    if value is None:
        return None
    bounds = parse_range_bounds(range_text)
    if bounds is None:
        return None
    return RangeAssessment(value=value, bounds=bounds, status=classify_result(value, bounds))


def _format_bound(value: float) -> str:
    return f"{value:g}"


def build_comparison(
    analyte_name: str,
    result_text: str,
    range_text: str,
    units: str = "",
) -> ResultComparison | None:
    """Build bar-chart data comparing a result with its reference span.

    Returns None (chart omitted) when the result is not a leading number or
    the range has no numeric bounds.
    """
    value = parse_number(result_text)
    bounds = parse_range_bounds(range_text)
    if value is None or bounds is None:
        return None

    status = classify_result(value, bounds)
    deviation = None
    if status == RangeStatus.LOW:
        deviation = f"{format_fixed(bounds.min - value, 1)} below minimum"
    elif status == RangeStatus.HIGH:
        deviation = f"{format_fixed(value - bounds.max, 1)} above maximum"

    return ResultComparison(
        analyte_name=analyte_name,
        units=units,
        bars=[
            ChartBar(
                name="Reference Range",
                value=bounds.max - bounds.min,
                label=f"{_format_bound(bounds.min)} - {_format_bound(bounds.max)}",
            ),
            ChartBar(name="Your Result", value=value, label=format_fixed(value, 1)),
        ],
        bounds=bounds,
        status=status,
        domain_min=min(bounds.min, value) * 0.8,
        domain_max=max(bounds.max, value) * 1.2,
        deviation=deviation,
    )
