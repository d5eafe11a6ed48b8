"""
Unit tests for the command-line interface.
"""

import pytest
from click.testing import CliRunner

from interfaces.cli import cli

OPTION_ARGS = ["-S", "100", "-K", "100", "-T", "1", "-r", "0.05"]
BOND_ARGS = ["--maturity", "3", "--coupon", "4", "--frequency", "2"]


@pytest.fixture
def runner():
    return CliRunner()


def test_version(runner):
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "1.0.0" in result.output


def test_price_call(runner):
    result = runner.invoke(cli, ["price", *OPTION_ARGS, "-v", "0.3"])

    assert result.exit_code == 0
    assert "Call Option Price: $14.2313" in result.output


def test_price_put(runner):
    result = runner.invoke(cli, ["price", *OPTION_ARGS, "-v", "0.2", "-t", "put"])

    assert result.exit_code == 0
    assert "Put Option Price: $5.5735" in result.output


def test_price_invalid_spot(runner):
    result = runner.invoke(cli, ["price", "-S", "0", "-K", "100", "-T", "1", "-r", "0.05", "-v", "0.3"])
    assert "Error:" in result.output


def test_greeks(runner):
    result = runner.invoke(cli, ["greeks", *OPTION_ARGS, "-v", "0.2"])

    assert result.exit_code == 0
    for name in ("Delta:", "Gamma:", "Vega:", "Theta:", "Rho:"):
        assert name in result.output
    assert "(per year)" in result.output


def test_implied_volatility(runner):
    result = runner.invoke(cli, ["iv", "-p", "14.2313", *OPTION_ARGS])

    assert result.exit_code == 0
    assert "Implied Volatility: 0.3000 (30.00%)" in result.output


def test_implied_volatility_arbitrage(runner):
    result = runner.invoke(cli, ["iv", "-p", "150", *OPTION_ARGS])
    assert "above upper bound" in result.output


def test_bond(runner):
    result = runner.invoke(cli, ["bond", *BOND_ARGS, "--yield", "0.04"])

    assert result.exit_code == 0
    assert "Bond Price:" in result.output
    assert "100.000000" in result.output
    assert "Macaulay Duration:" in result.output
    assert "Convexity:" in result.output


def test_bond_invalid_frequency(runner):
    result = runner.invoke(cli, ["bond", "-T", "3", "-c", "4", "-m", "0", "-y", "0.04"])
    assert "Error:" in result.output


def test_yield_to_maturity(runner):
    result = runner.invoke(cli, ["ytm", "-p", "100", *BOND_ARGS])

    assert result.exit_code == 0
    assert "Yield to Maturity: 0.040000 (4.0000%)" in result.output


def test_yield_to_maturity_unreachable(runner):
    result = runner.invoke(cli, ["ytm", "-p", "1000000", *BOND_ARGS])
    assert "Solver failed:" in result.output


@pytest.mark.parametrize(
    "function,x,expected",
    [
        ("floor", "2.7", "floor(2.7) = 2.0"),
        ("fabs", "3.5", "fabs(3.5) = 3.5"),
        ("ln", "1", "ln(1.0) = 0.0"),
        ("exp", "0", "exp(0.0) = 1.0"),
    ],
)
def test_eval(runner, function, x, expected):
    result = runner.invoke(cli, ["eval", function, x])

    assert result.exit_code == 0
    assert expected in result.output


def test_eval_unknown_function(runner):
    result = runner.invoke(cli, ["eval", "gamma", "1.0"])
    assert result.exit_code != 0

