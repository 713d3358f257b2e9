from __future__ import annotations

import math

MAX_MANTISSA_DIGITS = 15


def log10_bigint(value: int) -> float:
    """Approximate base-10 logarithm of an arbitrary-precision integer.

    Only the leading 15 decimal digits take part; the remaining digits count
    toward the exponent. The result is a float with bounded precision, not an
    exact value. Non-positive inputs return 0.
    """

    if value <= 0:
        return 0.0
    digits = str(value)
    mantissa = digits[:MAX_MANTISSA_DIGITS]
    exponent = len(digits) - len(mantissa)
    return math.log10(int(mantissa)) + exponent


def truncated_ratio(numerator: int, denominator: int, places: int = 3) -> float:
    """numerator / denominator truncated toward zero at ``places`` decimals."""

    scale = 10**places
    scaled = abs(numerator) * scale // abs(denominator)
    if (numerator < 0) != (denominator < 0):
        scaled = -scaled
    return scaled / scale


def round_half_away(value: float, places: int = 2) -> float:
    scale = 10**places
    rounded = math.floor(abs(value) * scale + 0.5) / scale
    return math.copysign(rounded, value) if rounded else 0.0
