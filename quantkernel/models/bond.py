"""
Fixed-coupon bond as an immutable parameter set.

Coupon rate is in percent of par (4 for 4%), the yield is a decimal
compounded payments_per_year times a year, and prices are per 100 of
face value. with_price solves for the yield that reproduces an observed
price and returns a new bond carrying it.
"""

import logging
from dataclasses import dataclass

from quantkernel.core import coupon_bond as cb
from quantkernel.solvers.implied_yield import implied_yield
from quantkernel.utils.constants import DEFAULT_FACE_VALUE, DEFAULT_PAYMENTS_PER_YEAR, DEFAULT_YIELD
from quantkernel.utils.exceptions import ConvergenceError
from quantkernel.utils.traits import is_integral
from quantkernel.utils.types import BondRisk

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CouponBond:
    """
    Bond paying a fixed coupon payments_per_year times a year until maturity.

    Examples:
        >>> bond = CouponBond(3.0, 4.0, 2, 0.04)
        >>> round(bond.price(), 10)
        100.0
    """
    time_to_maturity: float
    coupon_rate: float
    payments_per_year: int = DEFAULT_PAYMENTS_PER_YEAR
    ytm: float = DEFAULT_YIELD
    face_value: float = DEFAULT_FACE_VALUE

    def __post_init__(self) -> None:
        if self.time_to_maturity <= 0:
            raise ValueError(f"Time to maturity must be positive, got {self.time_to_maturity}")
        if self.coupon_rate < 0:
            raise ValueError(f"Coupon rate cannot be negative, got {self.coupon_rate}")
        if not is_integral(self.payments_per_year):
            raise TypeError(
                f"payments_per_year must be an integer, got {type(self.payments_per_year).__name__}"
            )
        if self.payments_per_year < 1:
            raise ValueError(f"Payments per year must be at least 1, got {self.payments_per_year}")
        if self.face_value <= 0:
            raise ValueError(f"Face value must be positive, got {self.face_value}")
        if 1.0 + self.ytm / self.payments_per_year <= 0:
            raise ValueError(
                f"Yield {self.ytm} leaves no positive growth factor "
                f"at {self.payments_per_year} payments per year"
            )

    @property
    def _args(self) -> tuple[float, float, float, int, float]:
        return (
            self.time_to_maturity,
            self.coupon_rate,
            self.ytm,
            self.payments_per_year,
            self.face_value,
        )

    def price(self) -> float:
        return cb.bond_price(*self._args)

    def duration(self) -> float:
        """Macaulay duration in years."""
        return cb.macaulay_duration(*self._args)

    def modified_duration(self) -> float:
        return cb.modified_duration(*self._args)

    def convexity(self) -> float:
        return cb.convexity(*self._args)

    def yield_to_maturity(self) -> float:
        """Decimal yield, compounded payments_per_year times a year."""
        return self.ytm

    def cash_flows(self) -> list[tuple[float, float]]:
        return cb.cash_flows(self.time_to_maturity, self.coupon_rate, self.payments_per_year, self.face_value)

    def risk(self) -> BondRisk:
        return BondRisk(
            price=self.price(),
            macaulay_duration=self.duration(),
            modified_duration=self.modified_duration(),
            convexity=self.convexity(),
        )

    @classmethod
    def with_price(
        cls,
        time_to_maturity: float,
        coupon_rate: float,
        price: float,
        payments_per_year: int = DEFAULT_PAYMENTS_PER_YEAR,
        face_value: float = DEFAULT_FACE_VALUE,
    ) -> "CouponBond":
        """
        Build the bond whose price equals an observed price.

        Raises:
            ArbitrageViolationError: If the price is not positive
            ConvergenceError: If no yield reproduces the price
        """
        result = implied_yield(price, time_to_maturity, coupon_rate, payments_per_year, face_value)
        if not result.success:
            raise ConvergenceError(
                f"Yield to maturity did not converge for price {price}: {result.message}",
                result,
            )

        logger.debug(
            "Yield to maturity %.8f via %s in %d iterations",
            result.value,
            result.method,
            result.iterations,
        )
        return cls(time_to_maturity, coupon_rate, payments_per_year, result.value, face_value)
