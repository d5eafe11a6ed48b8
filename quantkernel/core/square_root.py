"""
Principal square root by Babylonian (Newton-Raphson) iteration.
"""

from quantkernel.core.basic import fabs, isnan
from quantkernel.utils.constants import SQRT_MAX_ITERATIONS
from quantkernel.utils.traits import epsilon, promote, promoted_type


def sqrt(x, *, max_iterations: int = SQRT_MAX_ITERATIONS):
    """
    Principal square root.

    Iterates s_{n+1} = (s_n + x/s_n)/2 from s_0 = 1 until the relative
    change drops below machine epsilon. Hitting the cap returns the last
    iterate.

    Args:
        x: Argument, integral or floating
        max_iterations: Iteration cap

    Returns:
        √x in the promoted type of x; NaN for x < 0, +0 for ±0,
        +inf and NaN propagate.
    """
    kind = promoted_type(x)
    x = promote(x)

    if isnan(x) or x == float("inf"):
        return x
    if x < 0:
        return kind("nan")
    if x == 0:
        return kind(0)

    eps = epsilon(x)
    current = 1.0
    for _ in range(max_iterations):
        updated = 0.5 * (current + x / current)
        if fabs(updated - current) < eps * updated:
            return kind(updated)
        current = updated
    return kind(current)
