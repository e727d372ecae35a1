"""Pricing tables and sensitivity sweeps for in-arrears contracts.

These utilities are meant for *reporting*: they run deterministic sweeps
through :class:`ArrearsPricer` without adding any pricing logic of their own.

``scenarios`` is always a list of ``(label, method, params)`` tuples, e.g.
``("Caplet K=4.4%", "CAPLET", {"strike": 0.044})``.

The sweeps return ``pandas.DataFrame`` objects in a *wide* format: the first
column is the x-axis, and for each scenario label there are three columns
``"<label> natural"``, ``"<label> adjustment"`` and ``"<label> arrears"``.
"""

import numpy as np
import pandas as pd

from .market import RateCurvePoint
from .pricer import ArrearsPricer


def _add_result(row, label, result):
    row[f"{label} natural"] = result.natural_price
    row[f"{label} adjustment"] = result.convexity_adjustment
    row[f"{label} arrears"] = result.arrears_price


def price_table(pricer, scenarios):
    """One row per scenario with natural price, adjustment and arrears price."""
    rows = []
    for label, method, params in scenarios:
        result = pricer.calculate(method, params)
        rows.append(
            {
                "contract": label,
                "method": method,
                "natural_price": result.natural_price,
                "convexity_adjustment": result.convexity_adjustment,
                "arrears_price": result.arrears_price,
            }
        )
    return pd.DataFrame(rows)


def price_vs_volatility(curve, scenarios, notional, volatilities):
    """Sweep the Libor volatility on a fixed curve point."""
    rows = []
    for vol in np.asarray(volatilities, dtype=float):
        pricer = ArrearsPricer(curve, float(vol), notional)
        row = {"volatility": float(vol)}
        for label, method, params in scenarios:
            _add_result(row, label, pricer.calculate(method, params))
        rows.append(row)
    return pd.DataFrame(rows)


def price_vs_libor(curve, scenarios, notional, volatility, libors):
    """Sweep the initial forward Libor, holding ``T1``, ``T2`` and ``P2``.

    ``P1`` is re-derived from each Libor, so every point is a consistent curve.
    """
    rows = []
    for libor in np.asarray(libors, dtype=float):
        shifted = RateCurvePoint.from_libor(curve.first_time, curve.second_time, float(libor), curve.second_bond)
        pricer = ArrearsPricer(shifted, volatility, notional)
        row = {"initial_libor": float(libor)}
        for label, method, params in scenarios:
            _add_result(row, label, pricer.calculate(method, params))
        rows.append(row)
    return pd.DataFrame(rows)


def adjustment_vs_fixing_time(curve, scenarios, notional, volatility, fixing_times):
    """Sweep the fixing time, keeping the period length, ``L0`` and ``P2``.

    The adjustment grows with ``sigma^2 * T1`` through the shifted Libor.
    """
    tau = curve.period_length
    rows = []
    for t1 in np.asarray(fixing_times, dtype=float):
        moved = RateCurvePoint.from_libor(float(t1), float(t1) + tau, curve.initial_libor, curve.second_bond)
        pricer = ArrearsPricer(moved, volatility, notional)
        row = {"fixing_time": float(t1)}
        for label, method, params in scenarios:
            _add_result(row, label, pricer.calculate(method, params))
        rows.append(row)
    return pd.DataFrame(rows)
