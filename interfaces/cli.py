"""
Command-line interface for the quantkernel toolkit.

This CLI provides access to:
- Option pricing and Greeks (Black-Scholes-Merton)
- Implied volatility solving
- Coupon bond pricing, duration and convexity
- Yield to maturity solving
- Direct evaluation of the numeric kernel functions
"""

import click

from quantkernel.core.basic import ceil, fabs, floor
from quantkernel.core.distributions import normal_cdf, normal_pdf
from quantkernel.core.error_function import erf, erfc
from quantkernel.core.exponential import exp
from quantkernel.core.logarithm import ln, log2, log10
from quantkernel.core.square_root import sqrt
from quantkernel.core.trigonometry import cos, csc, ctg, sec, sin, tan
from quantkernel.models.bond import CouponBond
from quantkernel.models.option import EuropeanOption
from quantkernel.utils.exceptions import ConvergenceError
from quantkernel.utils.logging_config import setup_logging

KERNEL_FUNCTIONS = {
    "exp": exp,
    "ln": ln,
    "log2": log2,
    "log10": log10,
    "sqrt": sqrt,
    "erf": erf,
    "erfc": erfc,
    "sin": sin,
    "cos": cos,
    "tan": tan,
    "sec": sec,
    "csc": csc,
    "ctg": ctg,
    "normal_pdf": normal_pdf,
    "normal_cdf": normal_cdf,
    "fabs": fabs,
    "floor": floor,
    "ceil": ceil,
}


def option_arguments(command):
    """Shared spot/strike/time/rate/dividend/type options."""
    decorators = [
        click.option("--spot", "-S", type=float, required=True, help="Spot price"),
        click.option("--strike", "-K", type=float, required=True, help="Strike price"),
        click.option("--time", "-T", type=float, required=True, help="Time to expiry (years)"),
        click.option("--rate", "-r", type=float, required=True, help="Risk-free rate"),
        click.option("--div", "-q", type=float, default=0.0, help="Dividend yield"),
        click.option("--type", "-t", type=click.Choice(["call", "put"]), default="call"),
    ]
    for decorator in reversed(decorators):
        command = decorator(command)
    return command


def bond_arguments(command):
    """Shared maturity/coupon/frequency options."""
    decorators = [
        click.option("--maturity", "-T", type=float, required=True, help="Time to maturity (years)"),
        click.option("--coupon", "-c", type=float, required=True, help="Annual coupon, percent of par"),
        click.option("--frequency", "-m", type=int, default=2, help="Coupon payments per year"),
    ]
    for decorator in reversed(decorators):
        command = decorator(command)
    return command


@click.group()
@click.version_option(version="1.0.0")
@click.option("--verbose", is_flag=True, help="Log solver iterations at DEBUG level")
def cli(verbose):
    """quantkernel - first-principles numeric kernel with option and bond models."""
    setup_logging("DEBUG" if verbose else "WARNING")


@cli.command()
@option_arguments
@click.option("--vol", "-v", type=float, required=True, help="Volatility (annualized)")
def price(spot, strike, time, rate, div, type, vol):
    """Calculate option price using Black-Scholes."""
    try:
        option = EuropeanOption(spot, strike, time, rate, div, vol, type)
    except ValueError as e:
        click.echo(f"\nError: {e}", err=True)
        return
    click.echo(f"\n{type.capitalize()} Option Price: ${option.premium():.4f}")


@cli.command()
@option_arguments
@click.option("--vol", "-v", type=float, required=True, help="Volatility (annualized)")
def greeks(spot, strike, time, rate, div, type, vol):
    """Calculate all option Greeks."""
    try:
        option = EuropeanOption(spot, strike, time, rate, div, vol, type)
    except ValueError as e:
        click.echo(f"\nError: {e}", err=True)
        return
    greeks_values = option.greeks()

    click.echo(f"\nGreeks for {type.capitalize()} Option:")
    click.echo(f"  Delta:  {greeks_values.delta:>10.6f}")
    click.echo(f"  Gamma:  {greeks_values.gamma:>10.6f}")
    click.echo(f"  Vega:   {greeks_values.vega:>10.6f}")
    click.echo(f"  Theta:  {greeks_values.theta:>10.6f} (per year)")
    click.echo(f"  Rho:    {greeks_values.rho:>10.6f}")


@cli.command()
@click.option("--market-price", "-p", type=float, required=True, help="Market price")
@option_arguments
def iv(market_price, spot, strike, time, rate, div, type):
    """Solve for implied volatility."""
    try:
        option = EuropeanOption.implied(spot, strike, time, rate, div, market_price, type)
    except ConvergenceError as e:
        click.echo(f"\nSolver failed: {e.result.message}", err=True)
        return
    except ValueError as e:
        click.echo(f"\nError: {e}", err=True)
        return

    click.echo(f"\nImplied Volatility: {option.volatility:.4f} ({option.volatility*100:.2f}%)")


@cli.command()
@bond_arguments
@click.option("--yield", "-y", "ytm", type=float, required=True, help="Yield to maturity (decimal)")
def bond(maturity, coupon, frequency, ytm):
    """Price a coupon bond and report its duration and convexity."""
    try:
        risk = CouponBond(maturity, coupon, frequency, ytm).risk()
    except ValueError as e:
        click.echo(f"\nError: {e}", err=True)
        return

    click.echo(f"\nBond Price:         {risk.price:>12.6f}")
    click.echo(f"Macaulay Duration:  {risk.macaulay_duration:>12.6f} years")
    click.echo(f"Modified Duration:  {risk.modified_duration:>12.6f}")
    click.echo(f"Convexity:          {risk.convexity:>12.6f}")


@cli.command()
@click.option("--market-price", "-p", type=float, required=True, help="Bond price per 100 face")
@bond_arguments
def ytm(market_price, maturity, coupon, frequency):
    """Solve for yield to maturity."""
    try:
        solved = CouponBond.with_price(maturity, coupon, market_price, frequency)
    except ConvergenceError as e:
        click.echo(f"\nSolver failed: {e.result.message}", err=True)
        return
    except ValueError as e:
        click.echo(f"\nError: {e}", err=True)
        return

    click.echo(f"\nYield to Maturity: {solved.ytm:.6f} ({solved.ytm*100:.4f}%)")


@cli.command(name="eval")
@click.argument("function", type=click.Choice(sorted(KERNEL_FUNCTIONS)))
@click.argument("x", type=float)
def evaluate(function, x):
    """Evaluate a kernel function at X."""
    click.echo(f"{function}({x!r}) = {KERNEL_FUNCTIONS[function](x)!r}")


if __name__ == "__main__":
    cli()
