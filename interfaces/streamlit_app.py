"""
Streamlit web interface for the quantkernel toolkit.

Interactive UI with tabs for:
- Option pricing, Greeks and implied volatility
- Coupon bond pricing, risk and yield to maturity
- Accuracy of the kernel functions against numpy/scipy
"""

import streamlit as st
import numpy as np
import pandas as pd
import plotly.graph_objects as go
from scipy.special import erf as scipy_erf

from quantkernel.core.black_scholes import delta, gamma
from quantkernel.core.error_function import erf
from quantkernel.core.exponential import exp
from quantkernel.core.logarithm import ln
from quantkernel.core.square_root import sqrt
from quantkernel.core.trigonometry import cos, sin
from quantkernel.models.bond import CouponBond
from quantkernel.models.option import EuropeanOption
from quantkernel.utils.exceptions import ConvergenceError

KERNEL_REFERENCES = {
    "exp": (exp, np.exp, (-20.0, 20.0)),
    "ln": (ln, np.log, (0.01, 100.0)),
    "sqrt": (sqrt, np.sqrt, (0.0, 100.0)),
    "erf": (erf, scipy_erf, (-6.0, 6.0)),
    "sin": (sin, np.sin, (-10.0, 10.0)),
    "cos": (cos, np.cos, (-10.0, 10.0)),
}

st.set_page_config(page_title="quantkernel", layout="wide")

st.title("quantkernel")
st.markdown("Options and bonds priced on a first-principles numeric kernel")

tab1, tab2, tab3 = st.tabs(["Options", "Bonds", "Kernel Accuracy"])

with tab1:
    st.header("European Option")

    col_inputs, col_results = st.columns(2)

    with col_inputs:
        S = st.number_input("Spot Price (S)", value=100.0, min_value=0.01)
        K = st.number_input("Strike Price (K)", value=100.0, min_value=0.01)
        T = st.slider("Time to Expiry (years)", 0.01, 5.0, 1.0)
        r = st.slider("Risk-Free Rate (%)", 0.0, 20.0, 5.0) / 100
        q = st.slider("Dividend Yield (%)", 0.0, 10.0, 0.0) / 100
        sigma = st.slider("Volatility (%)", 1.0, 200.0, 30.0) / 100
        option_type = st.selectbox("Option Type", ["call", "put"])

    option = EuropeanOption(S, K, T, r, q, sigma, option_type)
    premium = option.premium()

    with col_results:
        st.metric(label=f"{option_type.capitalize()} Price", value=f"${premium:.4f}")

        greeks_vals = option.greeks()
        st.subheader("Greeks")
        greeks_df = pd.DataFrame({
            "Greek": ["Delta", "Gamma", "Vega", "Theta", "Rho"],
            "Value": [
                f"{greeks_vals.delta:.6f}",
                f"{greeks_vals.gamma:.6f}",
                f"{greeks_vals.vega:.6f}",
                f"{greeks_vals.theta:.6f}",
                f"{greeks_vals.rho:.6f}",
            ],
            "Description": [
                "Price change per $1 spot move",
                "Delta change per $1 spot move",
                "Price change per 1.00 vol move",
                "Price change per year",
                "Price change per 1.00 rate move",
            ],
        })
        st.table(greeks_df)

    spot_range = np.linspace(S * 0.7, S * 1.3, 50)
    sensitivity = pd.DataFrame({
        "spot": spot_range,
        "delta": [delta(s, K, T, r, sigma, q, option_type) for s in spot_range],
        "gamma": [gamma(s, K, T, r, sigma, q) for s in spot_range],
    })

    fig_delta = go.Figure()
    fig_delta.add_trace(go.Scatter(x=sensitivity["spot"], y=sensitivity["delta"], name="Delta"))
    fig_delta.add_trace(
        go.Scatter(x=sensitivity["spot"], y=sensitivity["gamma"], name="Gamma", yaxis="y2", line=dict(color="orange"))
    )
    fig_delta.update_layout(
        title="Delta and Gamma vs Spot Price",
        xaxis_title="Spot Price",
        yaxis=dict(title="Delta"),
        yaxis2=dict(title="Gamma", overlaying="y", side="right"),
    )
    st.plotly_chart(fig_delta, use_container_width=True)

    st.subheader("Implied Volatility")
    market_price = st.number_input("Market Price", value=premium, min_value=0.01)

    if st.button("Solve for Implied Volatility"):
        try:
            solved = EuropeanOption.implied(S, K, T, r, q, market_price, option_type)
            st.success(f"Implied Volatility: {solved.volatility:.4f} ({solved.volatility*100:.2f}%)")
        except ConvergenceError as e:
            st.error(f"Solver failed: {e.result.message}")
        except ValueError as e:
            st.error(f"Error: {e}")

with tab2:
    st.header("Coupon Bond")

    col_inputs, col_results = st.columns(2)

    with col_inputs:
        maturity = st.slider("Time to Maturity (years)", 0.5, 30.0, 3.0, step=0.5)
        coupon = st.slider("Coupon Rate (% of par)", 0.0, 15.0, 4.0, step=0.25)
        frequency = st.selectbox("Payments per Year", [1, 2, 4, 12], index=1)
        ytm = st.slider("Yield to Maturity (%)", 0.0, 20.0, 4.0, step=0.05) / 100

    bond = CouponBond(maturity, coupon, frequency, ytm)
    risk = bond.risk()

    with col_results:
        st.metric(label="Price (per 100 face)", value=f"{risk.price:.4f}")
        st.table(pd.DataFrame({
            "Measure": ["Macaulay Duration", "Modified Duration", "Convexity"],
            "Value": [
                f"{risk.macaulay_duration:.6f}",
                f"{risk.modified_duration:.6f}",
                f"{risk.convexity:.6f}",
            ],
        }))

    yields = np.linspace(0.0, 0.2, 81)
    curve = pd.DataFrame({
        "yield": yields,
        "price": [CouponBond(maturity, coupon, frequency, float(y)).price() for y in yields],
    })
    fig_curve = go.Figure()
    fig_curve.add_trace(go.Scatter(x=curve["yield"] * 100, y=curve["price"], name="Price"))
    fig_curve.update_layout(title="Price-Yield Curve", xaxis_title="Yield (%)", yaxis_title="Price")
    st.plotly_chart(fig_curve, use_container_width=True)

    st.subheader("Yield to Maturity")
    bond_price = st.number_input("Observed Price", value=risk.price, min_value=0.01)

    if st.button("Solve for Yield"):
        try:
            solved = CouponBond.with_price(maturity, coupon, bond_price, frequency)
            st.success(f"Yield to Maturity: {solved.ytm:.6f} ({solved.ytm*100:.4f}%)")
        except ConvergenceError as e:
            st.error(f"Solver failed: {e.result.message}")
        except ValueError as e:
            st.error(f"Error: {e}")

with tab3:
    st.header("Kernel Accuracy")

    name = st.selectbox("Function", list(KERNEL_REFERENCES))
    kernel_fn, reference_fn, (low, high) = KERNEL_REFERENCES[name]

    xs = np.linspace(low, high, 401)
    kernel_values = np.array([kernel_fn(float(x)) for x in xs])
    reference_values = reference_fn(xs)
    abs_error = np.abs(kernel_values - reference_values)
    rel_error = abs_error / np.maximum(np.abs(reference_values), np.finfo(float).tiny)

    st.metric(label="Max relative error", value=f"{rel_error.max():.3e}")

    fig_error = go.Figure()
    fig_error.add_trace(go.Scatter(x=xs, y=rel_error, name="Relative error"))
    fig_error.update_layout(
        title=f"{name}: kernel vs reference",
        xaxis_title="x",
        yaxis_title="Relative error",
        yaxis_type="log",
    )
    st.plotly_chart(fig_error, use_container_width=True)
