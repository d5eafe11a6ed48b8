"""
Implied volatility solver with automatic method selection.

This module provides a high-level interface for solving implied volatility,
automatically choosing between Newton-Raphson and Brent's method based on
convergence behavior.
"""

import logging
from typing import Optional

from quantkernel.core.black_scholes import spot_pv, strike_pv
from quantkernel.core.square_root import sqrt
from quantkernel.solvers.brent import brent_iv
from quantkernel.solvers.newton_raphson import newton_raphson_iv
from quantkernel.utils.constants import ARBITRAGE_TOLERANCE, DEFAULT_IMPLIED_VOL, PI
from quantkernel.utils.exceptions import ArbitrageViolationError
from quantkernel.utils.types import OptionType, SolverResult

logger = logging.getLogger(__name__)


def brenner_subrahmanyam_approximation(market_price: float, S: float, T: float) -> float:
    """
    Brenner-Subrahmanyam approximation for ATM implied volatility.

    Formula (for ATM):
        σ ≈ √(2π/T) × (C/S)

    Args:
        market_price: Option market price
        S: Spot price
        T: Time to expiration

    Returns:
        Initial volatility guess, clamped to [1%, 500%]

    Reference:
        Brenner, M., & Subrahmanyam, M. G. (1988). A Simple Formula to
        Compute the Implied Standard Deviation. Financial Analysts Journal, 44(5), 80-83.
    """
    if S <= 0 or T <= 0 or market_price <= 0:
        return DEFAULT_IMPLIED_VOL

    sigma_guess = sqrt(2.0 * PI / T) * (market_price / S)
    return max(0.01, min(sigma_guess, 5.0))


def get_initial_guess(
    market_price: float,
    S: float,
    K: float,
    T: float,
) -> float:
    """
    Starting volatility for Newton-Raphson.

    Brenner-Subrahmanyam for near-ATM options (0.9 <= S/K <= 1.1),
    the fixed default of 50% otherwise.
    """
    moneyness = S / K
    if 0.9 <= moneyness <= 1.1:
        return brenner_subrahmanyam_approximation(market_price, S, T)
    return DEFAULT_IMPLIED_VOL


def validate_arbitrage_bounds(
    market_price: float,
    S: float,
    K: float,
    T: float,
    r: float,
    q: float,
    option_type: OptionType,
) -> None:
    """
    Check that a market price lies within the no-arbitrage bounds.

    Call: max(S·e^(-qT) - K·e^(-rT), 0) <= C <= S·e^(-qT)
    Put:  max(K·e^(-rT) - S·e^(-qT), 0) <= P <= K·e^(-rT)

    Raises:
        ArbitrageViolationError: If the price lies outside the bounds
    """
    discount_spot = spot_pv(S, T, q)
    discount_strike = strike_pv(K, T, r)

    if option_type == "call":
        lower_bound = max(discount_spot - discount_strike, 0.0)
        upper_bound = discount_spot
        if market_price < lower_bound - ARBITRAGE_TOLERANCE:
            raise ArbitrageViolationError(
                f"Call price {market_price:.4f} below lower bound {lower_bound:.4f}. "
                f"Arbitrage: buy call, short stock, lend strike PV."
            )
        if market_price > upper_bound + ARBITRAGE_TOLERANCE:
            raise ArbitrageViolationError(
                f"Call price {market_price:.4f} above upper bound {upper_bound:.4f}. "
                f"Arbitrage: sell call, cannot exceed stock value."
            )
    else:
        lower_bound = max(discount_strike - discount_spot, 0.0)
        upper_bound = discount_strike
        if market_price < lower_bound - ARBITRAGE_TOLERANCE:
            raise ArbitrageViolationError(
                f"Put price {market_price:.4f} below lower bound {lower_bound:.4f}. "
                f"Arbitrage: buy put, buy stock, borrow strike PV."
            )
        if market_price > upper_bound + ARBITRAGE_TOLERANCE:
            raise ArbitrageViolationError(
                f"Put price {market_price:.4f} above upper bound {upper_bound:.4f}. "
                f"Arbitrage: sell put, cannot exceed strike PV."
            )


def implied_volatility(
    market_price: float,
    S: float,
    K: float,
    T: float,
    r: float,
    q: float = 0.0,
    option_type: OptionType = "call",
    method: str = "auto",
    initial_guess: Optional[float] = None,
) -> SolverResult:
    """
    Solve for implied volatility with automatic method selection.

    1. Validates arbitrage bounds
    2. Generates an initial guess (if not provided)
    3. Tries Newton-Raphson first (fast, quadratic convergence)
    4. Falls back to Brent if Newton-Raphson fails (robust, bracketed)

    Args:
        market_price: Observed market price
        S: Spot price
        K: Strike price
        T: Time to expiration in years
        r: Risk-free rate (annualized, continuous)
        q: Dividend yield (annualized, continuous), default 0.0
        option_type: "call" or "put"
        method: "auto" (default), "newton", or "brent"
        initial_guess: Starting volatility (auto-generated if None)

    Returns:
        SolverResult whose value is the implied volatility

    Raises:
        ArbitrageViolationError: If market price violates no-arbitrage bounds
        ValueError: If method is not one of the three names above

    Examples:
        >>> result = implied_volatility(10.4506, S=100, K=100, T=1.0, r=0.05)
        >>> f"{result.value:.2%}", result.method
        ('20.00%', 'newton-raphson')
    """
    if method not in ("auto", "newton", "brent"):
        raise ValueError(f"method must be 'auto', 'newton' or 'brent', got '{method}'")

    validate_arbitrage_bounds(market_price, S, K, T, r, q, option_type)

    if initial_guess is None:
        initial_guess = get_initial_guess(market_price, S, K, T)

    if method in ("auto", "newton"):
        nr_result = newton_raphson_iv(market_price, S, K, T, r, q, option_type, initial_guess)
        if nr_result.success or method == "newton":
            return nr_result
        logger.info("Falling back to Brent for implied volatility: %s", nr_result.message)

    return brent_iv(market_price, S, K, T, r, q, option_type)


def implied_volatility_vectorized(
    market_prices: list[float],
    S: float,
    strikes: list[float],
    T: float,
    r: float,
    q: float = 0.0,
    option_type: OptionType = "call",
) -> list[SolverResult]:
    """
    Implied volatilities across strikes, e.g. for a volatility smile.

    Raises:
        ValueError: If market_prices and strikes have different lengths
    """
    if len(market_prices) != len(strikes):
        raise ValueError(
            f"market_prices ({len(market_prices)}) and strikes ({len(strikes)}) "
            f"must have same length"
        )

    return [
        implied_volatility(price, S, strike, T, r, q, option_type)
        for price, strike in zip(market_prices, strikes)
    ]
