"""
Newton-Raphson inversion of a one-parameter pricing model.

Given a model f(x), its derivative f'(x) and an observed value, this
module solves f(x) = target with the update

    x_{n+1} = x_n - (f(x_n) - target) / f'(x_n)

The iteration is always bounded. Non-convergence is reported in the
returned SolverResult, never raised and never looped on: a vanishing
derivative, a step outside the admissible bounds, a non-finite model
value or an exhausted iteration budget each end the search with
success=False.

The implied volatility and implied yield wrappers plug the option and
bond formulas into the same loop, with vega and ∂P/∂y as derivatives.
"""

import logging
from collections.abc import Callable
from typing import Optional

from quantkernel.core.basic import fabs, isfinite
from quantkernel.core.black_scholes import black_scholes_price, vega
from quantkernel.core.coupon_bond import bond_price, bond_price_derivative
from quantkernel.utils.constants import (
    DEFAULT_FACE_VALUE,
    DEFAULT_IMPLIED_VOL,
    DEFAULT_PAYMENTS_PER_YEAR,
    DEFAULT_YIELD,
    IMPLIED_ERROR_SCALE,
    IV_MAX_VOL,
    IV_MIN_VOL,
    NEWTON_MAX_ITERATIONS,
    NEWTON_MIN_DERIVATIVE,
    NEWTON_STEP_TOLERANCE,
    YTM_MAX,
    YTM_MIN,
)
from quantkernel.utils.traits import epsilon
from quantkernel.utils.types import OptionType, SolverResult

logger = logging.getLogger(__name__)

_METHOD = "newton-raphson"


def _failure(value: float, iterations: int, message: str) -> SolverResult:
    logger.warning("Newton-Raphson did not converge: %s", message)
    return SolverResult(
        value=value,
        iterations=iterations,
        method=_METHOD,
        success=False,
        message=message,
    )


def newton_raphson(
    model: Callable[[float], float],
    derivative: Callable[[float], float],
    target: float,
    initial_guess: float,
    *,
    max_iterations: int = NEWTON_MAX_ITERATIONS,
    error_scale: float = IMPLIED_ERROR_SCALE,
    step_tolerance: float = NEWTON_STEP_TOLERANCE,
    min_derivative: float = NEWTON_MIN_DERIVATIVE,
    bounds: Optional[tuple[float, float]] = None,
) -> SolverResult:
    """
    Solve model(x) = target by Newton-Raphson iteration.

    Args:
        model: Function of the unknown parameter
        derivative: Derivative of model with respect to the parameter
        target: Observed value to match
        initial_guess: Starting parameter
        max_iterations: Hard cap on the number of updates
        error_scale: Converged once |model(x) - target| < error_scale·eps·|target|
        step_tolerance: Converged once an update moves x by less than this
        min_derivative: Give up when |derivative(x)| drops below this
        bounds: Admissible (lower, upper) range for x, unbounded if None

    Returns:
        SolverResult with the solved (or last) parameter, iteration count
        and success flag

    Examples:
        >>> result = newton_raphson(lambda x: x * x, lambda x: 2 * x, 2.0, 1.0)
        >>> result.success, round(result.value, 12)
        (True, 1.414213562373)
    """
    guess = initial_guess
    threshold = error_scale * epsilon(target) * fabs(target)

    for iteration in range(1, max_iterations + 1):
        value = model(guess)
        if not isfinite(value):
            return _failure(guess, iteration, f"Model value is not finite at x={guess!r}")

        error = value - target
        if fabs(error) < threshold:
            logger.debug("Newton-Raphson converged in %d iterations (value tol)", iteration)
            return SolverResult(
                value=guess,
                iterations=iteration,
                method=_METHOD,
                success=True,
                message=f"Converged in {iteration} iterations (value tol)",
            )

        slope = derivative(guess)
        if not isfinite(slope) or fabs(slope) < min_derivative:
            return _failure(
                guess,
                iteration,
                f"Derivative too small ({slope:.2e}) at iteration {iteration}",
            )

        updated = guess - error / slope

        if bounds is not None and not bounds[0] <= updated <= bounds[1]:
            return _failure(
                guess,
                iteration,
                f"Stepped out of bounds (x={updated:.6g}) at iteration {iteration}",
            )

        if fabs(updated - guess) < step_tolerance:
            logger.debug("Newton-Raphson converged in %d iterations (step tol)", iteration)
            return SolverResult(
                value=updated,
                iterations=iteration,
                method=_METHOD,
                success=True,
                message=f"Converged in {iteration} iterations (step tol)",
            )

        guess = updated

    return _failure(
        guess,
        max_iterations,
        f"Max iterations ({max_iterations}) reached without convergence",
    )


def newton_raphson_iv(
    market_price: float,
    S: float,
    K: float,
    T: float,
    r: float,
    q: float,
    option_type: OptionType,
    initial_guess: float = DEFAULT_IMPLIED_VOL,
    max_iterations: int = NEWTON_MAX_ITERATIONS,
) -> SolverResult:
    """
    Solve for implied volatility, σ_{n+1} = σ_n - (BS(σ_n) - price) / vega(σ_n).

    Quadratic convergence near the solution, but vega vanishes deep in or
    out of the money, where the caller should fall back to Brent.
    """
    return newton_raphson(
        lambda sigma: black_scholes_price(S, K, T, r, sigma, q, option_type),
        lambda sigma: vega(S, K, T, r, sigma, q),
        market_price,
        initial_guess,
        max_iterations=max_iterations,
        bounds=(IV_MIN_VOL, IV_MAX_VOL),
    )


def newton_raphson_ytm(
    market_price: float,
    T: float,
    coupon_rate: float,
    m: int = DEFAULT_PAYMENTS_PER_YEAR,
    face_value: float = DEFAULT_FACE_VALUE,
    initial_guess: float = DEFAULT_YIELD,
    max_iterations: int = NEWTON_MAX_ITERATIONS,
) -> SolverResult:
    """Solve for yield to maturity, y_{n+1} = y_n - (P(y_n) - price) / P'(y_n)."""
    return newton_raphson(
        lambda y: bond_price(T, coupon_rate, y, m, face_value),
        lambda y: bond_price_derivative(T, coupon_rate, y, m, face_value),
        market_price,
        initial_guess,
        max_iterations=max_iterations,
        bounds=(YTM_MIN, YTM_MAX),
    )
