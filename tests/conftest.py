"""
Pytest configuration and shared fixtures.
"""

import logging

import pytest

from quantkernel.models.bond import CouponBond
from quantkernel.models.option import EuropeanOption
from quantkernel.utils.logging_config import LOGGER_NAME


@pytest.fixture
def standard_params():
    """Standard at-the-money option parameters."""
    return {
        "S": 100.0,
        "K": 100.0,
        "T": 1.0,
        "r": 0.05,
        "sigma": 0.20,
        "q": 0.0,
    }


@pytest.fixture
def itm_call_params():
    """In-the-money call parameters."""
    return {
        "S": 110.0,
        "K": 100.0,
        "T": 1.0,
        "r": 0.05,
        "sigma": 0.20,
        "q": 0.0,
    }


@pytest.fixture
def with_dividend_params():
    """Parameters with non-zero dividend yield."""
    return {
        "S": 100.0,
        "K": 100.0,
        "T": 1.0,
        "r": 0.05,
        "sigma": 0.20,
        "q": 0.02,
    }


@pytest.fixture
def atm_call():
    """ATM one-year call at 30% volatility."""
    return EuropeanOption(spot=100.0, strike=100.0, time=1.0, rate=0.05, dividend=0.0, volatility=0.30)


@pytest.fixture
def atm_put():
    """ATM one-year put at 30% volatility."""
    return EuropeanOption(
        spot=100.0, strike=100.0, time=1.0, rate=0.05, dividend=0.0, volatility=0.30, option_type="put"
    )


@pytest.fixture
def bond_params():
    """Three-year 4% semiannual bond at a 5% yield."""
    return {
        "T": 3.0,
        "coupon_rate": 4.0,
        "y": 0.05,
        "m": 2,
    }


@pytest.fixture
def three_year_bond():
    """Three-year 4% semiannual bond at a 5% yield."""
    return CouponBond(time_to_maturity=3.0, coupon_rate=4.0, payments_per_year=2, ytm=0.05)


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo handlers installed by setup_logging so caplog keeps seeing records."""
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
