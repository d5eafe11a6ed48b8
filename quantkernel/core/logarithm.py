"""
Natural logarithm by Newton-Raphson iteration on the exponential.

Inputs above e are divided by e until they fall in (1, e], each division
adding one to the result; inputs below one use ln(x) = -ln(1/x). On the
reduced range the iteration

    L_{n+1} = L_n + 2·(x - e^L_n) / (x + e^L_n)

converges cubically and never overshoots the way the plain Newton step
L - (e^L - x)/e^L does when e^L is far from x.
"""

from quantkernel.core.basic import fabs, isfinite, isnan
from quantkernel.core.exponential import exp
from quantkernel.core.power import power
from quantkernel.utils.constants import E, LN2, LN10, LN_MAX_ITERATIONS
from quantkernel.utils.traits import epsilon, promote, promoted_type

# 2^128 brings any subnormal double into a range whose reciprocal is finite
_SUBNORMAL_EXPONENT = 128
_SUBNORMAL_SCALE = power(2.0, _SUBNORMAL_EXPONENT)


def _ln_newton(x: float, eps: float, max_iterations: int) -> float:
    """
    Solve e^L = x for x in (1, e]; the cap makes this a best effort.

    Stops once the relative step is below eps, or once the step stops
    shrinking, which means rounding in e^L has become the only signal.
    """
    current = x
    previous_step = float("inf")
    for _ in range(max_iterations):
        exp_current = exp(current)
        step = 2.0 * (x - exp_current) / (x + exp_current)
        updated = current + step
        if fabs(step) < eps * fabs(updated) or fabs(step) >= previous_step:
            return updated
        previous_step = fabs(step)
        current = updated
    return current


def _ln_reduce(x: float, eps: float, max_iterations: int) -> float:
    """ln(x) for finite x > 1."""
    whole = 0
    while x > E and fabs(x - E) >= eps:
        x = x / E
        whole += 1
    if fabs(x - E) < eps:
        return whole + 1.0
    return whole + _ln_newton(x, eps, max_iterations)


def ln(x, *, max_iterations: int = LN_MAX_ITERATIONS):
    """
    Natural logarithm.

    Args:
        x: Argument, integral or floating
        max_iterations: Newton-Raphson cap on the reduced range

    Returns:
        ln(x) in the promoted type of x; NaN for x <= 0, exactly 0 for x == 1,
        +inf and NaN propagate.

    Notes:
        ln(2) and ln(10) are returned from correctly rounded literals.
        Accuracy degrades slowly for huge arguments because every range
        reduction step divides by a rounded e.
    """
    kind = promoted_type(x)

    if x == 2:
        return kind(LN2)
    if x == 10:
        return kind(LN10)

    x = promote(x)
    if isnan(x) or x == float("inf"):
        return x
    if x <= 0:
        return kind("nan")
    if x == 1:
        return kind(0)

    eps = epsilon(x)
    if x < 1:
        reciprocal = 1.0 / x
        if not isfinite(reciprocal):
            scaled = ln(float(x) * _SUBNORMAL_SCALE, max_iterations=max_iterations)
            return kind(scaled - _SUBNORMAL_EXPONENT * LN2)
        return kind(-_ln_reduce(reciprocal, eps, max_iterations))
    return kind(_ln_reduce(x, eps, max_iterations))


def log2(x, *, max_iterations: int = LN_MAX_ITERATIONS):
    """Base 2 logarithm."""
    return ln(x, max_iterations=max_iterations) / ln(2)


def log10(x, *, max_iterations: int = LN_MAX_ITERATIONS):
    """Base 10 logarithm."""
    return ln(x, max_iterations=max_iterations) / ln(10)
