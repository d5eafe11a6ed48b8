"""
Yield to maturity from an observed bond price.

Mirrors the implied volatility entry point: Newton-Raphson from the
default yield guess, then Brent over [YTM_MIN, YTM_MAX] if Newton fails.
Price is strictly decreasing in yield, so the root is unique whenever
it exists.
"""

import logging
from typing import Optional

from quantkernel.core.basic import isfinite
from quantkernel.solvers.brent import brent_ytm
from quantkernel.solvers.newton_raphson import newton_raphson_ytm
from quantkernel.utils.constants import DEFAULT_FACE_VALUE, DEFAULT_PAYMENTS_PER_YEAR, DEFAULT_YIELD
from quantkernel.utils.exceptions import ArbitrageViolationError
from quantkernel.utils.types import SolverResult

logger = logging.getLogger(__name__)


def validate_bond_price(market_price: float) -> None:
    """
    Reject prices no yield can reproduce.

    Raises:
        ValueError: If the price is NaN or infinite
        ArbitrageViolationError: If the price is not positive
    """
    if not isfinite(market_price):
        raise ValueError(f"Bond price must be finite, got {market_price}")
    if market_price <= 0:
        raise ArbitrageViolationError(
            f"Bond price {market_price:.4f} is not positive. "
            f"Arbitrage: receive the bond's cash flows for nothing."
        )


def implied_yield(
    market_price: float,
    T: float,
    coupon_rate: float,
    m: int = DEFAULT_PAYMENTS_PER_YEAR,
    face_value: float = DEFAULT_FACE_VALUE,
    method: str = "auto",
    initial_guess: Optional[float] = None,
) -> SolverResult:
    """
    Solve for the yield to maturity that reprices the bond at market_price.

    Args:
        market_price: Observed price per 100 of face value
        T: Time to maturity in years
        coupon_rate: Annual coupon in percent of par
        m: Coupon payments per year
        face_value: Redemption amount
        method: "auto" (default), "newton", or "brent"
        initial_guess: Starting yield, DEFAULT_YIELD if None

    Returns:
        SolverResult whose value is the yield (decimal, m-compounded)

    Raises:
        ArbitrageViolationError: If the price is not positive
        ValueError: If method is unknown or the bond terms are invalid

    Examples:
        >>> result = implied_yield(100.0, 3.0, 4.0)
        >>> round(result.value, 10)
        0.04
    """
    if method not in ("auto", "newton", "brent"):
        raise ValueError(f"method must be 'auto', 'newton' or 'brent', got '{method}'")

    validate_bond_price(market_price)

    if initial_guess is None:
        initial_guess = DEFAULT_YIELD

    if method in ("auto", "newton"):
        nr_result = newton_raphson_ytm(market_price, T, coupon_rate, m, face_value, initial_guess)
        if nr_result.success or method == "newton":
            return nr_result
        logger.info("Falling back to Brent for yield to maturity: %s", nr_result.message)

    return brent_ytm(market_price, T, coupon_rate, m, face_value)
