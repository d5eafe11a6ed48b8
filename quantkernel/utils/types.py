"""
Data types and structures for the pricing models.

This module defines dataclasses and types shared by the formula layer,
the solvers and the model objects.
"""

from dataclasses import dataclass
from typing import Literal

OptionType = Literal["call", "put"]

SolverMethod = Literal["newton-raphson", "brent"]


@dataclass(frozen=True)
class Greeks:
    """
    Container for option Greeks, all expressed per unit change.

    Attributes:
        delta: ∂V/∂S
        gamma: ∂²V/∂S²
        vega: ∂V/∂σ per 1.00 of volatility
        theta: ∂V/∂t per year (negative of ∂V/∂T)
        rho: ∂V/∂r per 1.00 of rate
    """
    delta: float
    gamma: float
    vega: float
    theta: float
    rho: float


@dataclass(frozen=True)
class BondRisk:
    """
    Price and interest-rate sensitivities of a coupon bond.

    Attributes:
        price: Dirty price per 100 of face value
        macaulay_duration: Cash-flow weighted average time, in years
        modified_duration: -(1/P)·∂P/∂y
        convexity: (1/P)·∂²P/∂y²
    """
    price: float
    macaulay_duration: float
    modified_duration: float
    convexity: float


@dataclass(frozen=True)
class SolverResult:
    """
    Outcome of a one-dimensional inversion.

    Attributes:
        value: Solved parameter (best estimate when success is False)
        iterations: Number of iterations performed
        method: Method that produced the value
        success: Whether the solver met its convergence criterion
        message: Additional information about convergence
    """
    value: float
    iterations: int
    method: SolverMethod
    success: bool
    message: str = ""
