"""Quantity string parsing."""

import math


def _to_float(value: str) -> float | None:
    try:
        number = float(value)
    except ValueError:
        return None
    # "nan" and "inf" parse as floats but are not quantities
    if not math.isfinite(number):
        return None
    return number


def parse_quantity(quantity: str | None) -> float | None:
    """
    Parse a quantity string into a float.

    Handles formats like:
    - "2"
    - "1.5"
    - "3/4"

    Fractions are split on "/" and only the first two segments are used, so
    "1/2/3" parses as 0.5. Anything unparsable (including a zero denominator)
    yields None; this function never raises.
    """
    if quantity is None:
        return None

    if "/" in quantity:
        parts = quantity.split("/")
        numerator = _to_float(parts[0])
        denominator = _to_float(parts[1])
        if numerator is None or denominator is None or denominator == 0:
            return None
        return numerator / denominator

    return _to_float(quantity)
