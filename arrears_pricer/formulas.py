"""Analytic Black formulas consumed by the pricing kernels.

This module is the only place where the pricer touches an option-pricing
formula. Both functions share the argument order

    (forward, risk_free_rate, volatility, maturity, strike)

and treat ``forward`` as the initial value of a lognormal underlying growing at
``risk_free_rate``. The kernels always pass ``risk_free_rate=0``, in which case
the underlying is a driftless forward (the Libor under its own forward measure)
and no discounting is applied.

The actual evaluation is delegated to QuantLib's ``BlackCalculator``. Any
failure reported by QuantLib (for instance a negative forward) is re-raised as
:class:`ExternalFormulaError`. A zero forward never reaches QuantLib: it stays
at zero under lognormal dynamics, so both options are worth their intrinsic
value of zero for a positive strike.

A negative volatility or maturity is rejected with
:class:`ExternalFormulaError` instead of being priced at intrinsic value, as a
plain Black-Scholes library would do. A negative volatility is almost always a
data error upstream.
"""

import math

import QuantLib as ql

from .errors import ExternalFormulaError


def _check_inputs(volatility, maturity):
    if not volatility >= 0.0:
        raise ExternalFormulaError(f"volatility must be non-negative, got {volatility!r}")
    if not maturity >= 0.0:
        raise ExternalFormulaError(f"maturity must be non-negative, got {maturity!r}")


def _black_calculator(payoff, forward, risk_free_rate, volatility, maturity):
    growth = math.exp(float(risk_free_rate) * float(maturity))
    std_dev = float(volatility) * math.sqrt(float(maturity))
    try:
        return ql.BlackCalculator(payoff, float(forward) * growth, std_dev, 1.0 / growth)
    except RuntimeError as exc:
        raise ExternalFormulaError(str(exc)) from exc


def black_scholes_option_value(forward, risk_free_rate, volatility, maturity, strike):
    """Value of a European call under lognormal dynamics.

    A non-positive strike returns the value of the forward contract paying
    ``S(T) - K`` at maturity.
    """
    _check_inputs(volatility, maturity)
    discount = math.exp(-float(risk_free_rate) * float(maturity))
    if strike <= 0.0:
        return float(forward) - float(strike) * discount
    if forward == 0.0:
        return 0.0

    payoff = ql.PlainVanillaPayoff(ql.Option.Call, float(strike))
    calc = _black_calculator(payoff, forward, risk_free_rate, volatility, maturity)
    return float(calc.value())


def black_scholes_digital_option_value(forward, risk_free_rate, volatility, maturity, strike):
    """Value of a digital call paying one unit when ``S(T) > K``."""
    _check_inputs(volatility, maturity)
    if strike <= 0.0:
        return math.exp(-float(risk_free_rate) * float(maturity))
    if forward == 0.0:
        return 0.0

    payoff = ql.CashOrNothingPayoff(ql.Option.Call, float(strike), 1.0)
    calc = _black_calculator(payoff, forward, risk_free_rate, volatility, maturity)
    return float(calc.value())
