"""
Numeric type traits for the kernel.

Kernel functions accept integral or floating-point scalars. Integral
inputs are promoted to ``float`` (IEEE double) before any transcendental
computation; floating inputs, including numpy floating scalars, keep
their own type. Everything else is rejected.
"""

import numbers
import sys

import numpy as np


def is_integral(x: object) -> bool:
    """True for ``int``, ``bool`` and numpy integer scalars."""
    return isinstance(x, (numbers.Integral, np.integer))


def is_floating(x: object) -> bool:
    """True for ``float`` and numpy floating scalars."""
    return isinstance(x, (float, np.floating))


def promoted_type(x: object) -> type:
    """
    Return the floating type a kernel function computes in for ``x``.

    Raises:
        TypeError: If ``x`` is neither integral nor floating
    """
    if is_floating(x):
        return type(x)
    if is_integral(x):
        return float
    raise TypeError(f"Expected an integral or floating-point value, got {type(x).__name__}")


def promote(x: object):
    """
    Convert ``x`` to its promoted floating type.

    Examples:
        >>> promote(3)
        3.0
        >>> promote(2.5)
        2.5
    """
    return promoted_type(x)(x)


def epsilon(x: object) -> float:
    """Machine epsilon of the promoted type of ``x``."""
    kind = promoted_type(x)
    if kind is float:
        return sys.float_info.epsilon
    return float(np.finfo(kind).eps)


def require_integral(n: object, name: str = "n") -> int:
    """
    Validate that ``n`` is an integer and return it as ``int``.

    Raises:
        TypeError: If ``n`` is not integral
    """
    if not is_integral(n):
        raise TypeError(f"{name} must be an integer, got {type(n).__name__}")
    return int(n)
