"""
Standard normal distribution built on the numeric kernel.

This module provides the standard normal cumulative distribution function
(CDF) and probability density function (PDF), with special handling for
extreme values. Both are composed from the kernel's exp, sqrt and
error function; no platform math library is involved.
"""

from quantkernel.core.error_function import erfc
from quantkernel.core.exponential import exp
from quantkernel.core.square_root import sqrt
from quantkernel.utils.constants import MAX_PDF_ARGUMENT, MAX_STANDARD_DEVIATIONS, PI, SQRT2
from quantkernel.utils.traits import promote, promoted_type

_INV_SQRT_2PI = 1.0 / sqrt(2.0 * PI)


def normal_cdf(x) -> float:
    """
    Standard normal cumulative distribution function with bounds clamping.

    For |x| > 8, the CDF is effectively 0 (x < -8) or 1 (x > 8) due to
    floating point precision limits. We clamp to these values to prevent
    underflow and improve numerical stability.

    Args:
        x: Value at which to evaluate the CDF

    Returns:
        Probability that a standard normal random variable is less than x

    Examples:
        >>> normal_cdf(0.0)  # Median
        0.5
        >>> normal_cdf(10.0)  # Deep in tail
        1.0

    Notes:
        Evaluated as N(x) = erfc(-x/√2)/2. For negative x the complementary
        function takes its asymptotic branch, which keeps the left tail's
        relative precision instead of computing 1 - (almost 1).
    """
    kind = promoted_type(x)
    x = promote(x)

    if x > MAX_STANDARD_DEVIATIONS:
        return kind(1)
    if x < -MAX_STANDARD_DEVIATIONS:
        return kind(0)

    return kind(0.5 * erfc(-x / SQRT2))


def normal_pdf(x) -> float:
    """
    Standard normal probability density function with overflow protection.

    For |x| > 10, the PDF is negligible (< 2e-22) and can be safely
    approximated as zero to prevent numerical issues in subsequent calculations.

    Args:
        x: Value at which to evaluate the PDF

    Returns:
        Probability density at x for standard normal distribution

    Examples:
        >>> abs(normal_pdf(0.0) - 0.3989) < 0.001  # Peak at zero
        True
        >>> normal_pdf(15.0)  # Effectively zero
        0.0

    Notes:
        The standard normal PDF is given by:
            φ(x) = (1/√(2π)) * exp(-x²/2)
    """
    kind = promoted_type(x)
    x = promote(x)

    if abs(x) > MAX_PDF_ARGUMENT:
        return kind(0)

    return kind(_INV_SQRT_2PI * exp(-0.5 * x * x))
