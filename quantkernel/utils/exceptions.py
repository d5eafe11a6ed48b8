"""
Exceptions raised by the model layer.

The numeric kernel never raises for numeric reasons: domain errors come
back as NaN. These exceptions are for the pricing models and solvers.
"""

from quantkernel.utils.types import SolverResult


class QuantKernelError(Exception):
    """Base class for library errors."""


class ArbitrageViolationError(QuantKernelError, ValueError):
    """Raised when an observed price lies outside no-arbitrage bounds."""


class ConvergenceError(QuantKernelError):
    """Raised when an implied parameter cannot be solved for.

    The failing :class:`SolverResult` is kept on ``result`` so callers can
    inspect the best estimate and the iteration count.
    """

    def __init__(self, message: str, result: SolverResult) -> None:
        super().__init__(message)
        self.result = result
