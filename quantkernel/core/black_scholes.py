"""
Black-Scholes-Merton formulas for European options on the numeric kernel.

Closed-form premium and Greeks for calls and puts on an asset paying a
continuous dividend yield. Every transcendental evaluation goes through
the kernel (ln, exp, sqrt, normal_cdf, normal_pdf). Call and put share
one function per quantity and branch on the option type.

Sensitivities are per unit change: theta per year, vega per 1.00 of
volatility, rho per 1.00 of rate.

References:
    Black, F., & Scholes, M. (1973). The Pricing of Options and Corporate Liabilities.
    Journal of Political Economy, 81(3), 637-654.
    Merton, R. C. (1973). Theory of Rational Option Pricing.
    Bell Journal of Economics and Management Science, 4(1), 141-183.
"""

from quantkernel.core.distributions import normal_cdf, normal_pdf
from quantkernel.core.exponential import exp
from quantkernel.core.logarithm import ln
from quantkernel.core.square_root import sqrt
from quantkernel.utils.constants import EPSILON_TIME, EPSILON_VOL, MAX_STANDARD_DEVIATIONS
from quantkernel.utils.types import Greeks, OptionType


def _validate_inputs(S: float, K: float, T: float, r: float, sigma: float, q: float) -> None:
    """
    Reject inputs for which the model is undefined.

    Raises:
        ValueError: If S or K is not positive, or T or sigma is negative
    """
    if S <= 0:
        raise ValueError(f"Spot price must be positive, got S={S}")
    if K <= 0:
        raise ValueError(f"Strike price must be positive, got K={K}")
    if T < 0:
        raise ValueError(f"Time to expiration cannot be negative, got T={T}")
    if sigma < 0:
        raise ValueError(f"Volatility cannot be negative, got sigma={sigma}")


def _validate_option_type(option_type: str) -> None:
    if option_type not in ("call", "put"):
        raise ValueError(f"option_type must be 'call' or 'put', got '{option_type}'")


def _is_degenerate(T: float, sigma: float) -> bool:
    """No diffusion left: expired, or volatility too small to matter."""
    return T < EPSILON_TIME or sigma < EPSILON_VOL


def spot_pv(S: float, T: float, q: float) -> float:
    """Spot discounted at the dividend yield, S·e^(-qT)."""
    return S * exp(-q * T)


def strike_pv(K: float, T: float, r: float) -> float:
    """Strike discounted at the risk-free rate, K·e^(-rT)."""
    return K * exp(-r * T)


def d1(S: float, K: float, T: float, r: float, sigma: float, q: float) -> float:
    """
    d1 = [ln(S/K) + (r - q + σ²/2)T] / (σ√T)

    When no diffusion is left, d1 collapses to ±inf according to whether
    the forward (or the spot, at expiry) finishes above the strike.
    """
    _validate_inputs(S, K, T, r, sigma, q)

    if T < EPSILON_TIME:
        return float("inf") if S > K else float("-inf")
    if sigma < EPSILON_VOL:
        forward = S * exp((r - q) * T)
        return float("inf") if forward > K else float("-inf")

    return (ln(S / K) + (r - q + 0.5 * sigma * sigma) * T) / (sigma * sqrt(T))


def d2(S: float, K: float, T: float, r: float, sigma: float, q: float) -> float:
    """
    d2 = d1 - σ√T

    N(d2) is the risk-neutral probability that a call finishes in the money.
    """
    d1_value = d1(S, K, T, r, sigma, q)
    if _is_degenerate(T, sigma):
        return d1_value
    return d1_value - sigma * sqrt(T)


def _degenerate_price(S, K, T, r, q, option_type: OptionType) -> float:
    """Discounted intrinsic value of the forward, for T → 0 or σ → 0."""
    if T < EPSILON_TIME:
        forward_gap = spot_pv(S, T, q) - strike_pv(K, T, r)
    else:
        forward_gap = (S * exp((r - q) * T) - K) * exp(-r * T)
    if option_type == "put":
        forward_gap = -forward_gap
    return max(forward_gap, 0.0)


def black_scholes_call(
    S: float, K: float, T: float, r: float, sigma: float, q: float = 0.0
) -> float:
    """
    European call premium, C = S·e^(-qT)·N(d1) - K·e^(-rT)·N(d2).

    Examples:
        >>> price = black_scholes_call(100, 100, 1.0, 0.05, 0.20, 0.0)
        >>> abs(price - 10.4506) < 0.01
        True
    """
    return black_scholes_price(S, K, T, r, sigma, q, "call")


def black_scholes_put(
    S: float, K: float, T: float, r: float, sigma: float, q: float = 0.0
) -> float:
    """
    European put premium, P = K·e^(-rT)·N(-d2) - S·e^(-qT)·N(-d1).

    Examples:
        >>> price = black_scholes_put(100, 100, 1.0, 0.05, 0.20, 0.0)
        >>> abs(price - 5.5735) < 0.01
        True
    """
    return black_scholes_price(S, K, T, r, sigma, q, "put")


def black_scholes_price(
    S: float,
    K: float,
    T: float,
    r: float,
    sigma: float,
    q: float = 0.0,
    option_type: OptionType = "call",
) -> float:
    """
    European option premium.

    Args:
        S: Current spot price
        K: Strike price
        T: Time to expiration in years
        r: Risk-free interest rate (annualized, continuous)
        sigma: Volatility (annualized standard deviation)
        q: Continuous dividend yield, default 0.0
        option_type: "call" or "put"

    Returns:
        Option premium

    Raises:
        ValueError: If option_type is not "call" or "put", or inputs are invalid

    Edge Cases:
        - T → 0 or σ → 0: discounted intrinsic value of the forward
        - d2 > 8 or d1 < -8: both normal probabilities are exactly 0 or 1
          and the premium is the discounted forward gap or 0
    """
    _validate_option_type(option_type)
    _validate_inputs(S, K, T, r, sigma, q)

    if _is_degenerate(T, sigma):
        return _degenerate_price(S, K, T, r, q, option_type)

    d1_value = d1(S, K, T, r, sigma, q)
    d2_value = d1_value - sigma * sqrt(T)
    discount_spot = spot_pv(S, T, q)
    discount_strike = strike_pv(K, T, r)

    # N(d1), N(d2) are exactly 0 or 1 this far out (d2 < d1)
    if d2_value > MAX_STANDARD_DEVIATIONS:
        return discount_spot - discount_strike if option_type == "call" else 0.0
    if d1_value < -MAX_STANDARD_DEVIATIONS:
        return 0.0 if option_type == "call" else discount_strike - discount_spot

    if option_type == "call":
        return discount_spot * normal_cdf(d1_value) - discount_strike * normal_cdf(d2_value)
    return discount_strike * normal_cdf(-d2_value) - discount_spot * normal_cdf(-d1_value)


# ===========================
# Greeks
# ===========================


def delta(
    S: float,
    K: float,
    T: float,
    r: float,
    sigma: float,
    q: float = 0.0,
    option_type: OptionType = "call",
) -> float:
    """
    ∂V/∂S.

    Call: e^(-qT)·N(d1), in [0, 1]. Put: -e^(-qT)·N(-d1), in [-1, 0].
    """
    _validate_option_type(option_type)
    _validate_inputs(S, K, T, r, sigma, q)

    if T < EPSILON_TIME:
        if option_type == "call":
            return 1.0 if S > K else 0.0
        return -1.0 if S < K else 0.0

    discount_factor = exp(-q * T)
    if sigma < EPSILON_VOL:
        forward = S * exp((r - q) * T)
        if option_type == "call":
            return discount_factor if forward > K else 0.0
        return -discount_factor if forward < K else 0.0

    d1_value = d1(S, K, T, r, sigma, q)
    if option_type == "call":
        return discount_factor * normal_cdf(d1_value)
    return -discount_factor * normal_cdf(-d1_value)


def gamma(S: float, K: float, T: float, r: float, sigma: float, q: float = 0.0) -> float:
    """
    ∂²V/∂S² = e^(-qT)·φ(d1) / (S·σ·√T), identical for calls and puts.

    Zero once no diffusion is left, since delta becomes a step function.
    """
    _validate_inputs(S, K, T, r, sigma, q)

    if _is_degenerate(T, sigma):
        return 0.0

    d1_value = d1(S, K, T, r, sigma, q)
    return exp(-q * T) * normal_pdf(d1_value) / (S * sigma * sqrt(T))


def vega(S: float, K: float, T: float, r: float, sigma: float, q: float = 0.0) -> float:
    """
    ∂V/∂σ = S·e^(-qT)·√T·φ(d1), identical for calls and puts.

    Per 1.00 of volatility, which is the derivative Newton-Raphson needs
    when solving for implied volatility.
    """
    _validate_inputs(S, K, T, r, sigma, q)

    if T < EPSILON_TIME:
        return 0.0

    d1_value = d1(S, K, T, r, sigma, q)
    return spot_pv(S, T, q) * sqrt(T) * normal_pdf(d1_value)


def theta(
    S: float,
    K: float,
    T: float,
    r: float,
    sigma: float,
    q: float = 0.0,
    option_type: OptionType = "call",
) -> float:
    """
    Time decay per year, -∂V/∂T.

    Formulas:
        Call: -S·σ·e^(-qT)·φ(d1)/(2√T) - r·K·e^(-rT)·N(d2) + q·S·e^(-qT)·N(d1)
        Put:  -S·σ·e^(-qT)·φ(d1)/(2√T) + r·K·e^(-rT)·N(-d2) - q·S·e^(-qT)·N(-d1)
    """
    _validate_option_type(option_type)
    _validate_inputs(S, K, T, r, sigma, q)

    if _is_degenerate(T, sigma):
        return 0.0

    d1_value = d1(S, K, T, r, sigma, q)
    d2_value = d1_value - sigma * sqrt(T)
    discount_spot = spot_pv(S, T, q)
    discount_strike = strike_pv(K, T, r)

    diffusion = -discount_spot * normal_pdf(d1_value) * sigma / (2.0 * sqrt(T))
    if option_type == "call":
        carry = -r * discount_strike * normal_cdf(d2_value) + q * discount_spot * normal_cdf(d1_value)
    else:
        carry = r * discount_strike * normal_cdf(-d2_value) - q * discount_spot * normal_cdf(-d1_value)
    return diffusion + carry


def rho(
    S: float,
    K: float,
    T: float,
    r: float,
    sigma: float,
    q: float = 0.0,
    option_type: OptionType = "call",
) -> float:
    """
    ∂V/∂r per 1.00 of rate.

    Call: T·K·e^(-rT)·N(d2). Put: -T·K·e^(-rT)·N(-d2).
    """
    _validate_option_type(option_type)
    _validate_inputs(S, K, T, r, sigma, q)

    if _is_degenerate(T, sigma):
        return 0.0

    d2_value = d2(S, K, T, r, sigma, q)
    weighted_strike = T * strike_pv(K, T, r)
    if option_type == "call":
        return weighted_strike * normal_cdf(d2_value)
    return -weighted_strike * normal_cdf(-d2_value)


def calculate_greeks(
    S: float,
    K: float,
    T: float,
    r: float,
    sigma: float,
    q: float = 0.0,
    option_type: OptionType = "call",
) -> Greeks:
    """
    All Greeks in one call.

    Example:
        >>> greeks = calculate_greeks(100, 100, 1.0, 0.05, 0.20)
        >>> round(greeks.delta, 4)
        0.6368
    """
    return Greeks(
        delta=delta(S, K, T, r, sigma, q, option_type),
        gamma=gamma(S, K, T, r, sigma, q),
        vega=vega(S, K, T, r, sigma, q),
        theta=theta(S, K, T, r, sigma, q, option_type),
        rho=rho(S, K, T, r, sigma, q, option_type),
    )
