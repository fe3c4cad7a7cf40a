"""Numeric capability shared by item weights and costs.

Weights and costs may be any real scalar (int, float, numpy scalars).
The exact DP path additionally needs integral values; ratios and
scaling go through float conversion.
"""

import math
import numbers


def is_numeric(value) -> bool:
    """True for finite real scalars. Booleans are not numbers here."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return False
    return math.isfinite(value)


def is_integral(value) -> bool:
    """True for integer-typed scalars (5 yes, 5.0 no)."""
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


def zero(value):
    """Additive identity of the type of `value`."""
    return value - value


def to_float(value) -> float:
    return float(value)


def require_numeric(value, name: str):
    """Validate a scalar at an input boundary and return it unchanged.

    Raises:
        TypeError: If value is not a real number (or is a bool)
        ValueError: If value is NaN or infinite
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise TypeError(f"{name} must be a real number, got {type(value).__name__}")
    if not math.isfinite(value):
        raise ValueError(f"{name} must be finite, got {value}")
    return value


def require_integral(value, name: str):
    """Validate an integral scalar (weights/capacity on the DP path)."""
    if not is_integral(value):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    return int(value)
