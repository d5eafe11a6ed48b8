"""
Brent's method as the robust fallback for model inversion.

Brent's method (a hybrid of bisection, secant and inverse quadratic
interpolation) converges whenever the objective changes sign over the
search interval. It is slower than Newton-Raphson but needs no
derivative, so it takes over where vega or ∂P/∂y vanish. The objective
is still priced through the kernel; only the bracketing search is
delegated to scipy.
"""

import logging
from collections.abc import Callable

from scipy.optimize import brentq

from quantkernel.core.black_scholes import black_scholes_price
from quantkernel.core.coupon_bond import bond_price
from quantkernel.utils.constants import (
    DEFAULT_FACE_VALUE,
    DEFAULT_PAYMENTS_PER_YEAR,
    IV_MAX_VOL,
    IV_MIN_VOL,
    NEWTON_MAX_ITERATIONS,
    YTM_MAX,
    YTM_MIN,
)
from quantkernel.utils.types import OptionType, SolverResult

logger = logging.getLogger(__name__)

_XTOL = 1e-12
_RTOL = 1e-12


def brent_solve(
    objective: Callable[[float], float],
    lower: float,
    upper: float,
    *,
    xtol: float = _XTOL,
    rtol: float = _RTOL,
    max_iterations: int = NEWTON_MAX_ITERATIONS,
) -> SolverResult:
    """
    Find a root of objective on [lower, upper].

    Args:
        objective: Function whose zero is sought
        lower: Lower end of the search interval
        upper: Upper end of the search interval
        xtol: Absolute tolerance on the root
        rtol: Relative tolerance on the root
        max_iterations: Iteration cap passed to brentq

    Returns:
        SolverResult; success is False when the interval does not bracket
        a root or the iteration cap is reached
    """
    try:
        root, info = brentq(
            objective,
            lower,
            upper,
            xtol=xtol,
            rtol=rtol,
            maxiter=max_iterations,
            full_output=True,
            disp=False,
        )
    except ValueError:
        # brentq requires objective(lower) and objective(upper) of opposite sign
        message = (
            f"Objective does not bracket a root: "
            f"f({lower:.4g}) = {objective(lower):.4g}, "
            f"f({upper:.4g}) = {objective(upper):.4g}"
        )
        logger.warning("Brent method failed: %s", message)
        return SolverResult(value=float("nan"), iterations=0, method="brent", success=False, message=message)

    if not info.converged:
        message = f"Max iterations ({max_iterations}) reached: {info.flag}"
        logger.warning("Brent method failed: %s", message)
        return SolverResult(
            value=float(root), iterations=info.iterations, method="brent", success=False, message=message
        )

    logger.debug("Brent method converged in %d iterations", info.iterations)
    return SolverResult(
        value=float(root),
        iterations=info.iterations,
        method="brent",
        success=True,
        message=f"Converged in {info.iterations} iterations",
    )


def brent_iv(
    market_price: float,
    S: float,
    K: float,
    T: float,
    r: float,
    q: float,
    option_type: OptionType,
    vol_lower: float = IV_MIN_VOL,
    vol_upper: float = IV_MAX_VOL,
) -> SolverResult:
    """
    Solve BS(σ) = market_price for σ in [vol_lower, vol_upper].

    The premium is increasing in σ, so a price inside the arbitrage
    bounds is bracketed unless it corresponds to a volatility outside
    the search interval.
    """

    def objective(sigma: float) -> float:
        return black_scholes_price(S, K, T, r, sigma, q, option_type) - market_price

    return brent_solve(objective, vol_lower, vol_upper)


def brent_ytm(
    market_price: float,
    T: float,
    coupon_rate: float,
    m: int = DEFAULT_PAYMENTS_PER_YEAR,
    face_value: float = DEFAULT_FACE_VALUE,
    yield_lower: float = YTM_MIN,
    yield_upper: float = YTM_MAX,
) -> SolverResult:
    """Solve P(y) = market_price for y in [yield_lower, yield_upper]."""

    def objective(y: float) -> float:
        return bond_price(T, coupon_rate, y, m, face_value) - market_price

    return brent_solve(objective, yield_lower, yield_upper)
