"""
Integer powers by repeated squaring.
"""

from quantkernel.core.basic import divide
from quantkernel.utils.traits import promote, require_integral


def power(x, n):
    """
    Raise x to an integer power using exponentiation by squaring.

    Negative exponents raise the reciprocal of x. The result is exact
    whenever every intermediate square is representable.

    Args:
        x: Base, integral or floating
        n: Integer exponent

    Returns:
        x**n in the promoted floating type of x

    Examples:
        >>> power(2, 10)
        1024.0
        >>> power(2, -1)
        0.5
    """
    base = promote(x)
    exponent = require_integral(n)
    kind = type(base)

    if exponent < 0:
        base = divide(kind(1), base)
        exponent = -exponent

    result = kind(1)
    while exponent > 0:
        if exponent & 1:
            result = result * base
        exponent >>= 1
        if exponent:
            base = base * base
    return kind(result)
