"""
Unit tests for coupon bond pricing, duration and convexity.

This module validates:
1. Cash flow schedule (including a short first period)
2. Pricing identities (par, zero coupon, face scaling)
3. Sensitivities against finite differences
4. The CouponBond model object
"""

import dataclasses
import math

import pytest

from quantkernel.core.coupon_bond import (
    bond_price,
    bond_price_derivative,
    cash_flows,
    convexity,
    macaulay_duration,
    modified_duration,
)
from quantkernel.models.bond import CouponBond
from quantkernel.utils.types import BondRisk


# ===========================
# Cash Flows
# ===========================


def test_cash_flows_whole_periods():
    flows = cash_flows(3.0, 4.0, 2)

    assert [t for t, _ in flows] == pytest.approx([0.5, 1.0, 1.5, 2.0, 2.5, 3.0])
    assert [amount for _, amount in flows] == [2.0] * 5 + [102.0]


def test_cash_flows_short_first_period():
    flows = cash_flows(2.25, 6.0, 2)

    assert [t for t, _ in flows] == pytest.approx([0.25, 0.75, 1.25, 1.75, 2.25])
    assert flows[0][1] == 3.0
    assert flows[-1][1] == 103.0


def test_cash_flows_rounding_in_maturity():
    # 0.1 · 3 · 10 is 3.0000000000000004 in binary; still 3 periods
    assert len(cash_flows(0.1 * 3, 5.0, 10)) == 3


@pytest.mark.parametrize("T", [1e-10, 1e-12])
def test_maturity_inside_rounding_still_redeems(T):
    assert cash_flows(T, 4.0, 2) == [(T, 102.0)]
    assert bond_price(T, 4.0, 0.05, 2) == pytest.approx(102.0, rel=1e-10)
    assert macaulay_duration(T, 4.0, 0.05, 2) == pytest.approx(T, rel=1e-12)


def test_cash_flows_zero_coupon():
    assert cash_flows(5.0, 0.0, 1) == [(1.0, 0.0), (2.0, 0.0), (3.0, 0.0), (4.0, 0.0), (5.0, 100.0)]


@pytest.mark.parametrize(
    "T,coupon_rate,m,face_value,error",
    [
        (0.0, 4.0, 2, 100.0, ValueError),
        (-1.0, 4.0, 2, 100.0, ValueError),
        (3.0, -4.0, 2, 100.0, ValueError),
        (3.0, 4.0, 0, 100.0, ValueError),
        (3.0, 4.0, 2, 0.0, ValueError),
        (3.0, 4.0, 2.5, 100.0, TypeError),
    ],
)
def test_invalid_terms(T, coupon_rate, m, face_value, error):
    with pytest.raises(error):
        cash_flows(T, coupon_rate, m, face_value)


# ===========================
# Pricing
# ===========================


@pytest.mark.parametrize("T,coupon_rate,m", [(3.0, 4.0, 2), (10.0, 6.5, 2), (1.0, 5.0, 1), (5.0, 3.0, 4)])
def test_priced_at_par_when_yield_equals_coupon(T, coupon_rate, m):
    assert bond_price(T, coupon_rate, coupon_rate / 100.0, m) == pytest.approx(100.0, abs=1e-10)


def test_premium_and_discount(bond_params):
    p = bond_params
    assert bond_price(p["T"], p["coupon_rate"], 0.03, p["m"]) > 100.0
    assert bond_price(p["T"], p["coupon_rate"], p["y"], p["m"]) < 100.0


def test_zero_coupon_price():
    assert bond_price(4.0, 0.0, 0.06, 2) == pytest.approx(100.0 * 1.03**-8, rel=1e-14)


def test_zero_yield_is_sum_of_flows():
    assert bond_price(3.0, 4.0, 0.0, 2) == pytest.approx(112.0, rel=1e-15)


def test_face_value_scales_price(bond_params):
    p = bond_params
    base = bond_price(p["T"], p["coupon_rate"], p["y"], p["m"])
    scaled = bond_price(p["T"], p["coupon_rate"], p["y"], p["m"], face_value=1000.0)
    assert scaled == pytest.approx(10.0 * base, rel=1e-14)


def test_price_decreasing_in_yield():
    prices = [bond_price(7.0, 5.0, y / 100.0, 2) for y in range(-1, 15)]
    assert all(a > b for a, b in zip(prices, prices[1:]))


def test_no_growth_factor_gives_nan():
    assert math.isnan(bond_price(3.0, 4.0, -2.5, 2))


# ===========================
# Sensitivities
# ===========================


@pytest.mark.parametrize("y", [0.01, 0.05, 0.10])
def test_derivative_matches_finite_difference(bond_params, y):
    p = bond_params
    h = 1e-6
    up = bond_price(p["T"], p["coupon_rate"], y + h, p["m"])
    down = bond_price(p["T"], p["coupon_rate"], y - h, p["m"])

    assert bond_price_derivative(p["T"], p["coupon_rate"], y, p["m"]) == pytest.approx(
        (up - down) / (2 * h), rel=1e-7
    )


def test_modified_duration_relations(bond_params):
    p = bond_params
    args = (p["T"], p["coupon_rate"], p["y"], p["m"])

    mac = macaulay_duration(*args)
    mod = modified_duration(*args)
    assert mod == pytest.approx(mac / (1.0 + p["y"] / p["m"]), rel=1e-15)
    assert mod == pytest.approx(-bond_price_derivative(*args) / bond_price(*args), rel=1e-13)


def test_macaulay_duration_bounds(bond_params):
    p = bond_params
    mac = macaulay_duration(p["T"], p["coupon_rate"], p["y"], p["m"])
    assert 0.5 < mac < p["T"]


@pytest.mark.parametrize("T", [1.0, 2.5, 10.0])
def test_zero_coupon_duration_is_maturity(T):
    assert macaulay_duration(T, 0.0, 0.07, 2) == pytest.approx(T, rel=1e-14)


def test_convexity_matches_second_difference(bond_params):
    p = bond_params
    h = 1e-4
    center = bond_price(p["T"], p["coupon_rate"], p["y"], p["m"])
    up = bond_price(p["T"], p["coupon_rate"], p["y"] + h, p["m"])
    down = bond_price(p["T"], p["coupon_rate"], p["y"] - h, p["m"])
    numeric = (up - 2.0 * center + down) / (h * h) / center

    assert convexity(p["T"], p["coupon_rate"], p["y"], p["m"]) == pytest.approx(numeric, rel=1e-5)


def test_zero_coupon_convexity():
    # T·(T + 1/m) / (1 + y/m)²
    assert convexity(5.0, 0.0, 0.04, 2) == pytest.approx(5.0 * 5.5 / 1.02**2, rel=1e-14)


# ===========================
# CouponBond Model
# ===========================


def test_model_matches_kernel(three_year_bond, bond_params):
    p = bond_params
    args = (p["T"], p["coupon_rate"], p["y"], p["m"])

    assert three_year_bond.price() == bond_price(*args)
    assert three_year_bond.duration() == macaulay_duration(*args)
    assert three_year_bond.modified_duration() == modified_duration(*args)
    assert three_year_bond.convexity() == convexity(*args)
    assert three_year_bond.yield_to_maturity() == 0.05


def test_model_risk_bundle(three_year_bond):
    risk = three_year_bond.risk()

    assert isinstance(risk, BondRisk)
    assert risk.price == three_year_bond.price()
    assert risk.macaulay_duration > risk.modified_duration > 0.0
    assert risk.convexity > 0.0


def test_model_cash_flows(three_year_bond):
    assert three_year_bond.cash_flows() == cash_flows(3.0, 4.0, 2)


def test_model_defaults():
    bond = CouponBond(5.0, 6.0)
    assert bond.payments_per_year == 2
    assert bond.ytm == 0.1
    assert bond.face_value == 100.0


def test_model_is_immutable(three_year_bond):
    with pytest.raises(dataclasses.FrozenInstanceError):
        three_year_bond.ytm = 0.06


@pytest.mark.parametrize(
    "changes,error",
    [
        ({"time_to_maturity": 0.0}, ValueError),
        ({"coupon_rate": -1.0}, ValueError),
        ({"payments_per_year": 0}, ValueError),
        ({"payments_per_year": 2.0}, TypeError),
        ({"face_value": -100.0}, ValueError),
        ({"ytm": -2.0}, ValueError),
    ],
)
def test_model_validation(three_year_bond, changes, error):
    with pytest.raises(error):
        dataclasses.replace(three_year_bond, **changes)
