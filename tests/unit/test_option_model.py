"""
Unit tests for the EuropeanOption model object.
"""

import dataclasses

import pytest

from quantkernel.core.black_scholes import black_scholes_put
from quantkernel.models.option import EuropeanOption
from quantkernel.utils.exceptions import ArbitrageViolationError, ConvergenceError
from quantkernel.utils.types import Greeks


def test_atm_premium(atm_call):
    assert atm_call.premium() == pytest.approx(14.2313, abs=1e-4)


def test_put_matches_formula(atm_put):
    assert atm_put.premium() == pytest.approx(black_scholes_put(100.0, 100.0, 1.0, 0.05, 0.30, 0.0), abs=1e-14)


def test_put_call_parity(atm_call, atm_put):
    parity = atm_call.spot_pv() - atm_call.strike_pv()
    assert atm_call.premium() - atm_put.premium() == pytest.approx(parity, abs=1e-10)


def test_option_is_immutable(atm_call):
    with pytest.raises(dataclasses.FrozenInstanceError):
        atm_call.volatility = 0.5


def test_replace_reprices(atm_call):
    wider = dataclasses.replace(atm_call, volatility=0.40)
    assert wider.premium() > atm_call.premium()
    assert atm_call.volatility == 0.30


def test_d1_d2_relation(atm_call):
    assert atm_call.d1() - atm_call.d2() == pytest.approx(0.30, abs=1e-14)


def test_greeks_bundle(atm_call):
    greeks = atm_call.greeks()

    assert isinstance(greeks, Greeks)
    assert greeks.delta == pytest.approx(atm_call.delta(), abs=1e-14)
    assert greeks.gamma == pytest.approx(atm_call.gamma(), abs=1e-14)
    assert greeks.vega == pytest.approx(atm_call.vega(), abs=1e-12)
    assert greeks.theta == pytest.approx(atm_call.theta(), abs=1e-12)
    assert greeks.rho == pytest.approx(atm_call.rho(), abs=1e-12)


def test_put_greek_signs(atm_put):
    assert -1.0 < atm_put.delta() < 0.0
    assert atm_put.gamma() > 0.0
    assert atm_put.rho() < 0.0


@pytest.mark.parametrize(
    "field,value",
    [
        ("spot", 0.0),
        ("strike", -1.0),
        ("time", -0.1),
        ("volatility", -0.2),
        ("option_type", "straddle"),
    ],
)
def test_invalid_parameters_rejected(atm_call, field, value):
    with pytest.raises(ValueError):
        dataclasses.replace(atm_call, **{field: value})


# ===========================
# Implied Volatility
# ===========================


def test_implied_recovers_volatility():
    option = EuropeanOption.implied(100, 100, 1.0, 0.05, 0.0, 14.2313)

    assert option.volatility == pytest.approx(0.30, abs=1e-4)
    assert option.premium() == pytest.approx(14.2313, abs=1e-9)


@pytest.mark.parametrize("option_type", ["call", "put"])
def test_implied_round_trip(option_type):
    original = EuropeanOption(90.0, 100.0, 0.75, 0.04, 0.015, 0.42, option_type)
    solved = EuropeanOption.implied(90.0, 100.0, 0.75, 0.04, 0.015, original.premium(), option_type)

    assert solved.volatility == pytest.approx(0.42, abs=1e-8)
    assert solved.option_type == option_type


def test_implied_rejects_arbitrage():
    with pytest.raises(ArbitrageViolationError):
        EuropeanOption.implied(100, 100, 1.0, 0.05, 0.0, 150.0)


def test_implied_rejects_unknown_type():
    with pytest.raises(ValueError, match="option_type"):
        EuropeanOption.implied(100, 100, 1.0, 0.05, 0.0, 10.0, "digital")


def test_implied_unreachable_price_raises_convergence_error():
    """Exactly intrinsic: only σ → 0 reproduces it, below the search floor."""
    option = EuropeanOption(100.0, 100.0, 1.0, 0.05, 0.0, 0.0)

    with pytest.raises(ConvergenceError) as excinfo:
        EuropeanOption.implied(100, 100, 1.0, 0.05, 0.0, option.premium() - 1e-7)

    assert excinfo.value.result.success is False
