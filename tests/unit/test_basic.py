"""
Unit tests for the foundational scalar operations.
"""

import math

import pytest

from quantkernel.core.basic import (
    ceil,
    divide,
    even,
    fabs,
    floor,
    fraction,
    gcd,
    isfinite,
    isnan,
    lcm,
    maximum,
    minimum,
    odd,
    product,
    round_half_up,
    total,
)
from quantkernel.core.power import power

NAN = float("nan")
INF = float("inf")


# ===========================
# Classification
# ===========================


def test_isnan():
    assert isnan(NAN)
    assert not isnan(INF)
    assert not isnan(0.0)


@pytest.mark.parametrize("value,expected", [(1.0, True), (-0.0, True), (INF, False), (-INF, False), (NAN, False)])
def test_isfinite(value, expected):
    assert isfinite(value) is expected


def test_fabs_negative_zero_is_positive():
    assert math.copysign(1.0, fabs(-0.0)) == 1.0
    assert fabs(-3.5) == 3.5
    assert fabs(-INF) == INF


# ===========================
# Rounding
# ===========================


@pytest.mark.parametrize("value", [2.7, -2.7, 2.0, -2.0, 0.5, -0.5, 1e17, -1e-300])
def test_floor_and_ceil_match_math(value):
    assert floor(value) == math.floor(value)
    assert ceil(value) == math.ceil(value)


def test_rounding_keeps_type_and_non_finite():
    assert type(floor(2.7)) is float
    assert floor(INF) == INF
    assert ceil(-INF) == -INF
    assert isnan(floor(NAN))


@pytest.mark.parametrize("value,expected", [(2.5, 3.0), (-2.5, -2.0), (2.4, 2.0), (-2.6, -3.0)])
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected


@pytest.mark.parametrize("value", [0.0, 0.49, 0.5, 2.25, 2.75, -1.3, 1234.5678])
def test_fraction_range(value):
    f = fraction(value)
    assert -0.5 <= f < 0.5
    assert (value - f) == round_half_up(value)


# ===========================
# Aggregates
# ===========================


def test_variadic_aggregates():
    assert minimum(3, 1, 2) == 1
    assert maximum(3.0, 7.5) == 7.5
    assert total(1, 2, 3, 4) == 10
    assert product(2.0, 3.0, 4.0) == 24.0


@pytest.mark.parametrize("func", [minimum, maximum, total, product])
def test_aggregates_need_two_arguments(func):
    with pytest.raises(TypeError):
        func(1.0)


def test_odd_even():
    assert odd(3) and not odd(4)
    assert even(0) and even(-2)
    with pytest.raises(TypeError):
        odd(3.0)


def test_gcd_lcm():
    assert gcd(48, 18) == 6
    assert gcd(-12, 8) == 4
    assert gcd(0, 5) == 5
    assert lcm(4, 6) == 12
    assert lcm(0, 6) == 0


def test_divide_by_zero_follows_ieee():
    assert divide(1.0, 0.0) == INF
    assert divide(-1.0, 0.0) == -INF
    assert divide(1.0, -0.0) == -INF
    assert isnan(divide(0.0, 0.0))
    assert divide(3.0, 2.0) == 1.5


# ===========================
# Integer Power
# ===========================


def test_power_exact_results():
    assert power(2, 10) == 1024
    assert power(2, -1) == 0.5
    assert power(3.0, 0) == 1.0
    assert power(-2, 3) == -8.0
    assert power(10, 22) == 1e22


def test_power_of_zero_with_negative_exponent():
    assert power(0.0, -1) == INF
    assert power(-0.0, -1) == -INF


def test_power_matches_pow():
    for base in (1.5, 0.9, -1.1):
        for n in (-7, -1, 1, 5, 13):
            assert power(base, n) == pytest.approx(base**n, rel=1e-14)


def test_power_requires_integral_exponent():
    with pytest.raises(TypeError):
        power(2.0, 0.5)
