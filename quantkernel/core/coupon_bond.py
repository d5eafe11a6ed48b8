"""
Fixed-coupon bond pricing and interest-rate risk on the numeric kernel.

Conventions:
    - Prices are quoted per 100 of face value (dirty price, no accrual split).
    - The coupon rate is in percent of par: 4 means 4% a year, paid in
      ``m`` equal instalments.
    - The yield is a decimal, compounded ``m`` times a year
      (bond-equivalent yield for m = 2).
    - Coupons fall every 1/m years counting back from maturity, so a
      maturity that is not a whole number of periods has a short first
      period.

With v(t) = (1 + y/m)^(-m·t):

    P        = Σ CF_i · v(t_i)
    ∂P/∂y    = -Σ t_i · CF_i · v(t_i) / (1 + y/m)
    D_mac    = Σ t_i · CF_i · v(t_i) / P
    D_mod    = D_mac / (1 + y/m)
    C        = Σ t_i·(t_i + 1/m) · CF_i · v(t_i) / (P · (1 + y/m)²)
"""

from quantkernel.core.basic import ceil
from quantkernel.core.exponential import exp
from quantkernel.core.logarithm import ln
from quantkernel.utils.constants import DEFAULT_FACE_VALUE, DEFAULT_PAYMENTS_PER_YEAR
from quantkernel.utils.traits import require_integral

# Absorbs representation error in T·m so that 3.0 years × 2 gives 6 periods
_PERIOD_ROUNDING = 1e-9


def _validate_inputs(T: float, coupon_rate: float, m: int, face_value: float) -> int:
    """
    Check bond terms and return the payment frequency as an int.

    Raises:
        ValueError: If maturity, frequency or face value is not positive,
            or the coupon rate is negative
        TypeError: If the payment frequency is not an integer
    """
    m = require_integral(m, "payments_per_year")
    if T <= 0:
        raise ValueError(f"Time to maturity must be positive, got T={T}")
    if coupon_rate < 0:
        raise ValueError(f"Coupon rate cannot be negative, got coupon_rate={coupon_rate}")
    if m < 1:
        raise ValueError(f"Payments per year must be at least 1, got m={m}")
    if face_value <= 0:
        raise ValueError(f"Face value must be positive, got face_value={face_value}")
    return m


def cash_flows(
    T: float,
    coupon_rate: float,
    m: int = DEFAULT_PAYMENTS_PER_YEAR,
    face_value: float = DEFAULT_FACE_VALUE,
) -> list[tuple[float, float]]:
    """
    Remaining payments as (time in years, amount) pairs, earliest first.

    Examples:
        >>> cash_flows(1.0, 4.0, 2)
        [(0.5, 2.0), (1.0, 102.0)]
    """
    m = _validate_inputs(T, coupon_rate, m, face_value)

    # At least the redemption payment, however close maturity is
    periods = max(1, int(ceil(T * m - _PERIOD_ROUNDING)))
    coupon = coupon_rate / 100.0 * face_value / m

    flows = []
    for i in range(1, periods + 1):
        t = T - (periods - i) / m
        amount = coupon + face_value if i == periods else coupon
        flows.append((t, amount))
    return flows


def _discounted_flows(T, coupon_rate, y, m, face_value) -> tuple[list[tuple[float, float]], float]:
    """(t_i, CF_i · v(t_i)) pairs plus the per-period growth factor 1 + y/m."""
    flows = cash_flows(T, coupon_rate, m, face_value)
    growth = 1.0 + y / m
    log_growth = ln(growth)
    return [(t, amount * exp(-m * t * log_growth)) for t, amount in flows], growth


def bond_price(
    T: float,
    coupon_rate: float,
    y: float,
    m: int = DEFAULT_PAYMENTS_PER_YEAR,
    face_value: float = DEFAULT_FACE_VALUE,
) -> float:
    """
    Present value of the remaining cash flows.

    Args:
        T: Time to maturity in years
        coupon_rate: Annual coupon in percent of par
        y: Yield to maturity, decimal, compounded m times a year
        m: Coupon payments per year
        face_value: Redemption amount

    Returns:
        Bond price; NaN when 1 + y/m <= 0

    Examples:
        >>> abs(bond_price(3.0, 4.0, 0.04) - 100.0) < 1e-9  # priced at par
        True
    """
    discounted, _ = _discounted_flows(T, coupon_rate, y, m, face_value)
    return sum(value for _, value in discounted)


def bond_price_derivative(
    T: float,
    coupon_rate: float,
    y: float,
    m: int = DEFAULT_PAYMENTS_PER_YEAR,
    face_value: float = DEFAULT_FACE_VALUE,
) -> float:
    """∂P/∂y, always negative for a positive price."""
    discounted, growth = _discounted_flows(T, coupon_rate, y, m, face_value)
    return -sum(t * value for t, value in discounted) / growth


def macaulay_duration(
    T: float,
    coupon_rate: float,
    y: float,
    m: int = DEFAULT_PAYMENTS_PER_YEAR,
    face_value: float = DEFAULT_FACE_VALUE,
) -> float:
    """Present-value weighted average time to the cash flows, in years."""
    discounted, _ = _discounted_flows(T, coupon_rate, y, m, face_value)
    price = sum(value for _, value in discounted)
    return sum(t * value for t, value in discounted) / price


def modified_duration(
    T: float,
    coupon_rate: float,
    y: float,
    m: int = DEFAULT_PAYMENTS_PER_YEAR,
    face_value: float = DEFAULT_FACE_VALUE,
) -> float:
    """Relative price sensitivity, -(1/P)·∂P/∂y."""
    return macaulay_duration(T, coupon_rate, y, m, face_value) / (1.0 + y / m)


def convexity(
    T: float,
    coupon_rate: float,
    y: float,
    m: int = DEFAULT_PAYMENTS_PER_YEAR,
    face_value: float = DEFAULT_FACE_VALUE,
) -> float:
    """Relative curvature of the price-yield relation, (1/P)·∂²P/∂y²."""
    discounted, growth = _discounted_flows(T, coupon_rate, y, m, face_value)
    price = sum(value for _, value in discounted)
    weighted = sum(t * (t + 1.0 / m) * value for t, value in discounted)
    return weighted / (price * growth * growth)
