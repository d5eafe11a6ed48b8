"""
Exponential function from first principles.

The argument is split as x = n + f with n an integer and f in [-0.5, 0.5).
e^n comes from repeated squaring of Euler's number and e^f from a
fixed-depth Taylor series, so the truncation error of the series does not
depend on the magnitude of x.
"""

from quantkernel.core.basic import fraction, isnan, round_half_up
from quantkernel.core.power import power
from quantkernel.utils.constants import E, EXP_SERIES_TERMS
from quantkernel.utils.traits import promote, promoted_type


def _exp_taylor(f: float, terms: int) -> float:
    """
    Evaluate 1 + f + f²/2! + ... by backward Horner accumulation.

    Starting from the innermost term, acc_k = acc_{k+1}·(f/k) + 1.
    """
    acc = 1.0
    for k in range(terms, 0, -1):
        acc = acc * (f / k) + 1.0
    return acc


def _exp_fraction(f: float, terms: int) -> float:
    """e^f for f in [-0.5, 0.5); negative f goes through the reciprocal."""
    if f == 0:
        return 1.0
    if f > 0:
        return _exp_taylor(f, terms)
    return 1.0 / _exp_taylor(-f, terms)


def exp(x, *, terms: int = EXP_SERIES_TERMS):
    """
    Euler's number raised to the power x.

    Args:
        x: Exponent, integral or floating
        terms: Depth of the Taylor series for the fractional part

    Returns:
        e^x in the promoted type of x. -inf gives 0, +inf and NaN propagate,
        0 gives exactly 1.

    Examples:
        >>> exp(0)
        1.0
        >>> abs(exp(1) - 2.718281828459045) < 1e-15
        True
    """
    kind = promoted_type(x)
    x = promote(x)

    if x == float("-inf"):
        return kind(0)
    if x == float("inf") or isnan(x):
        return x
    if x == 0:
        return kind(1)

    whole = int(round_half_up(x))
    return kind(power(E, whole) * _exp_fraction(fraction(x), terms))
