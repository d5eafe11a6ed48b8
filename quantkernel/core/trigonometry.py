"""
Trigonometric functions on a normalized angle.

Every angle is first wrapped into [-π, π). Sine and cosine return exact
values at -π, 0 and ±π/2 and otherwise sum a fixed-depth Taylor series.
Tangent, secant, cosecant and cotangent are quotients of the two and
inherit their singularities: a zero denominator yields ±inf or NaN.
"""

from quantkernel.core.basic import divide, fabs, fraction, isfinite
from quantkernel.utils.constants import HALF_PI, PI, TRIG_SERIES_TERMS, TWO_PI
from quantkernel.utils.traits import epsilon, promote, promoted_type


def wrap_angle(x):
    """
    Normalize an angle in radians to [-π, π).

    Returns NaN for NaN and ±inf.

    Examples:
        >>> wrap_angle(0.5)
        0.5
        >>> abs(wrap_angle(2 * 3.141592653589793 + 0.5) - 0.5) < 1e-15
        True
    """
    kind = promoted_type(x)
    x = promote(x)

    if not isfinite(x):
        return kind("nan")
    if -PI <= x < PI:
        return x

    wrapped = fraction(x / TWO_PI) * TWO_PI
    if wrapped >= PI:
        wrapped -= TWO_PI
    return kind(wrapped)


def rad(x):
    """Degrees to radians."""
    kind = promoted_type(x)
    return kind(promote(x) / 180.0 * PI)


def deg(x):
    """Radians to degrees."""
    kind = promoted_type(x)
    return kind(promote(x) * 180.0 / PI)


def _sin_series(x: float, terms: int) -> float:
    acc = 0.0
    term = x
    for k in range(1, terms + 1):
        acc += term
        term = -term * x * x / ((2 * k) * (2 * k + 1))
    return acc


def _cos_series(x: float, terms: int) -> float:
    acc = 0.0
    term = 1.0
    for k in range(1, terms + 1):
        acc += term
        term = -term * x * x / ((2 * k) * (2 * k - 1))
    return acc


def sin(x, *, terms: int = TRIG_SERIES_TERMS):
    """
    Sine of an angle in radians.

    Args:
        x: Angle, integral or floating
        terms: Depth of the Taylor series

    Returns:
        sin(x) in the promoted type of x; NaN for non-finite input.
    """
    kind = promoted_type(x)
    angle = wrap_angle(x)
    if not isfinite(angle):
        return angle

    eps = epsilon(angle)
    if fabs(angle + PI) < eps or fabs(angle) < eps:
        return kind(0)
    if fabs(angle - HALF_PI) < eps:
        return kind(1)
    if fabs(angle + HALF_PI) < eps:
        return kind(-1)
    return kind(_sin_series(angle, terms))


def cos(x, *, terms: int = TRIG_SERIES_TERMS):
    """
    Cosine of an angle in radians.

    Args:
        x: Angle, integral or floating
        terms: Depth of the Taylor series

    Returns:
        cos(x) in the promoted type of x; NaN for non-finite input.

    Examples:
        >>> cos(0.5 * 3.141592653589793)
        0.0
    """
    kind = promoted_type(x)
    angle = wrap_angle(x)
    if not isfinite(angle):
        return angle

    eps = epsilon(angle)
    if fabs(angle + PI) < eps:
        return kind(-1)
    if fabs(angle) < eps:
        return kind(1)
    if fabs(angle - HALF_PI) < eps or fabs(angle + HALF_PI) < eps:
        return kind(0)
    return kind(_cos_series(angle, terms))


def tan(x, *, terms: int = TRIG_SERIES_TERMS):
    """Tangent, sin(x)/cos(x)."""
    return divide(sin(x, terms=terms), cos(x, terms=terms))


def sec(x, *, terms: int = TRIG_SERIES_TERMS):
    """Secant, 1/cos(x)."""
    return divide(promoted_type(x)(1), cos(x, terms=terms))


def csc(x, *, terms: int = TRIG_SERIES_TERMS):
    """Cosecant, 1/sin(x)."""
    return divide(promoted_type(x)(1), sin(x, terms=terms))


def ctg(x, *, terms: int = TRIG_SERIES_TERMS):
    """Cotangent, cos(x)/sin(x)."""
    return divide(cos(x, terms=terms), sin(x, terms=terms))
