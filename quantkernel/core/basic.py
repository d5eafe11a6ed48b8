"""
Foundational scalar operations used by the rest of the kernel.

None of these iterate. Rounding helpers keep NaN and infinities unchanged
and return values in the same type as their input.
"""

import math
import operator
from functools import reduce

from quantkernel.utils.traits import require_integral


def isnan(x) -> bool:
    """True only if x != x."""
    return x != x


def isfinite(x) -> bool:
    """True unless x is NaN or ±infinity."""
    return not isnan(x) and x != float("inf") and x != float("-inf")


def fabs(x):
    """
    Absolute value.

    Negative zero maps to positive zero.

    Examples:
        >>> fabs(-2.5)
        2.5
        >>> str(fabs(-0.0))
        '0.0'
    """
    if x == 0:
        return type(x)(0)
    return x if x > 0 else -x


def floor(x):
    """
    Greatest integral value no greater than x, in x's type.

    Examples:
        >>> floor(2.7)
        2.0
        >>> floor(-2.2)
        -3.0
    """
    if not isfinite(x):
        return x
    truncated = int(x)
    if truncated == x:
        return x
    return type(x)(truncated if x > 0 else truncated - 1)


def ceil(x):
    """Least integral value no less than x, in x's type."""
    if not isfinite(x):
        return x
    truncated = int(x)
    if truncated == x:
        return x
    return type(x)(truncated + 1 if x > 0 else truncated)


def round_half_up(x):
    """Nearest integral value; halves round towards +infinity."""
    if not isfinite(x):
        return x
    return floor(x + type(x)(0.5))


def fraction(x):
    """
    Signed distance from x to its nearest integer, in [-0.5, 0.5).

    Examples:
        >>> fraction(2.25)
        0.25
        >>> fraction(2.75)
        -0.25
    """
    if not isfinite(x):
        return x
    return x - floor(x + type(x)(0.5))


def _require_group(values: tuple, name: str) -> None:
    if len(values) < 2:
        raise TypeError(f"{name}() expects at least 2 arguments, got {len(values)}")


def minimum(*values):
    """Least of two or more values; ties keep the earlier argument."""
    _require_group(values, "minimum")
    result = values[0]
    for value in values[1:]:
        if value < result:
            result = value
    return result


def maximum(*values):
    """Greatest of two or more values; ties keep the earlier argument."""
    _require_group(values, "maximum")
    result = values[0]
    for value in values[1:]:
        if value > result:
            result = value
    return result


def total(*values):
    """Sum of two or more values."""
    _require_group(values, "total")
    return reduce(operator.add, values)


def product(*values):
    """Product of two or more values."""
    _require_group(values, "product")
    return reduce(operator.mul, values)


def odd(n) -> bool:
    return bool(require_integral(n) & 1)


def even(n) -> bool:
    return not odd(n)


def gcd(x, y) -> int:
    """Greatest common divisor by Euclid's algorithm."""
    x = require_integral(x, "x")
    y = require_integral(y, "y")
    while y:
        x, y = y, x % y
    return abs(x)


def lcm(x, y) -> int:
    """Least common multiple, lcm(x, y) = |x·y| / gcd(x, y)."""
    divisor = gcd(x, y)
    if divisor == 0:
        return 0
    return abs(int(x) * int(y)) // divisor


def divide(numerator, denominator):
    """
    Quotient with IEEE-754 semantics for a zero denominator.

    Python raises ``ZeroDivisionError`` on float division by zero; the
    kernel instead returns ±infinity, or NaN for 0/0 and NaN/0. The sign
    of a zero denominator is honoured.

    Examples:
        >>> divide(1.0, -0.0)
        -inf
        >>> divide(0.0, 0.0)
        nan
    """
    if denominator != 0:
        return numerator / denominator
    kind = float if isinstance(numerator, int) else type(numerator)
    if numerator == 0 or isnan(numerator):
        return kind("nan")
    sign = math.copysign(1.0, numerator) * math.copysign(1.0, denominator)
    return kind(sign * float("inf"))
