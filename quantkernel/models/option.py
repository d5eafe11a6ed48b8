"""
European option as an immutable parameter set.

An EuropeanOption bundles the six Black-Scholes-Merton inputs with the
option type and exposes the premium and Greeks as methods. Solving for
implied volatility returns a new instance rather than mutating one.
"""

import logging
from dataclasses import dataclass

from quantkernel.core import black_scholes as bs
from quantkernel.solvers.implied_vol import implied_volatility
from quantkernel.utils.exceptions import ConvergenceError
from quantkernel.utils.types import Greeks, OptionType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EuropeanOption:
    """
    European call or put on an asset with a continuous dividend yield.

    Attributes:
        spot: Current price of the underlying
        strike: Strike price
        time: Time to expiration in years
        rate: Risk-free rate (annualized, continuous)
        dividend: Dividend yield (annualized, continuous)
        volatility: Annualized volatility
        option_type: "call" or "put"

    Examples:
        >>> option = EuropeanOption(100, 100, 1.0, 0.05, 0.0, 0.3)
        >>> round(option.premium(), 4)
        14.2313
    """
    spot: float
    strike: float
    time: float
    rate: float
    dividend: float
    volatility: float
    option_type: OptionType = "call"

    def __post_init__(self) -> None:
        if self.option_type not in ("call", "put"):
            raise ValueError(f"option_type must be 'call' or 'put', got '{self.option_type}'")
        if self.spot <= 0:
            raise ValueError(f"Spot price must be positive, got spot={self.spot}")
        if self.strike <= 0:
            raise ValueError(f"Strike price must be positive, got strike={self.strike}")
        if self.time < 0:
            raise ValueError(f"Time to expiration cannot be negative, got time={self.time}")
        if self.volatility < 0:
            raise ValueError(f"Volatility cannot be negative, got volatility={self.volatility}")

    @property
    def _args(self) -> tuple[float, float, float, float, float, float]:
        return self.spot, self.strike, self.time, self.rate, self.volatility, self.dividend

    def premium(self) -> float:
        return bs.black_scholes_price(*self._args, self.option_type)

    def delta(self) -> float:
        return bs.delta(*self._args, self.option_type)

    def gamma(self) -> float:
        return bs.gamma(*self._args)

    def vega(self) -> float:
        """Per 1.00 of volatility."""
        return bs.vega(*self._args)

    def theta(self) -> float:
        """Per year."""
        return bs.theta(*self._args, self.option_type)

    def rho(self) -> float:
        """Per 1.00 of rate."""
        return bs.rho(*self._args, self.option_type)

    def d1(self) -> float:
        return bs.d1(*self._args)

    def d2(self) -> float:
        return bs.d2(*self._args)

    def spot_pv(self) -> float:
        """Spot discounted at the dividend yield."""
        return bs.spot_pv(self.spot, self.time, self.dividend)

    def strike_pv(self) -> float:
        """Strike discounted at the risk-free rate."""
        return bs.strike_pv(self.strike, self.time, self.rate)

    def greeks(self) -> Greeks:
        return bs.calculate_greeks(*self._args, self.option_type)

    @classmethod
    def implied(
        cls,
        spot: float,
        strike: float,
        time: float,
        rate: float,
        dividend: float,
        price: float,
        option_type: OptionType = "call",
    ) -> "EuropeanOption":
        """
        Build the option whose premium equals an observed price.

        Raises:
            ArbitrageViolationError: If the price violates no-arbitrage bounds
            ConvergenceError: If no volatility reproduces the price

        Examples:
            >>> option = EuropeanOption.implied(100, 100, 1.0, 0.05, 0.0, 14.2313)
            >>> round(option.volatility, 4)
            0.3
        """
        if option_type not in ("call", "put"):
            raise ValueError(f"option_type must be 'call' or 'put', got '{option_type}'")

        result = implied_volatility(price, spot, strike, time, rate, dividend, option_type)
        if not result.success:
            raise ConvergenceError(
                f"Implied volatility did not converge for price {price}: {result.message}",
                result,
            )

        logger.debug(
            "Implied volatility %.6f via %s in %d iterations",
            result.value,
            result.method,
            result.iterations,
        )
        return cls(spot, strike, time, rate, dividend, result.value, option_type)
