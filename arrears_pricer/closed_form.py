"""Instrument-specific closed forms under the Black model.

These are the per-product formulas that :class:`ConvexityEngine` generalizes.
They are written out independently of the kernels and are used to cross-check
the engine (tests, ``run_analysis.py``).

Common notation: ``L0 = L(T1,T2;0)``, ``tau = T2 - T1``, ``P2 = P(T2;0)``,
``N`` the notional.
"""

import math

from .formulas import black_scholes_option_value


def caplet_value_black(initial_libor, volatility, strike, fixing_time, payment_time, payment_bond, notional):
    """Caplet paid at ``T2``: ``N P2 tau Black(L0, K, sigma, T1)``."""
    tau = payment_time - fixing_time
    return notional * payment_bond * tau * black_scholes_option_value(
        initial_libor, 0.0, volatility, fixing_time, strike
    )


def caplet_in_arrears_convexity_adjustment(
    initial_libor, volatility, strike, fixing_time, payment_time, payment_bond, notional
):
    """``N P2 tau^2 L0 Black(L0 exp(sigma^2 T1), K, sigma, T1)``."""
    tau = payment_time - fixing_time
    shifted = initial_libor * math.exp(volatility * volatility * fixing_time)
    return notional * payment_bond * tau * tau * initial_libor * black_scholes_option_value(
        shifted, 0.0, volatility, fixing_time, strike
    )


def caplet_in_arrears_value(initial_libor, volatility, strike, fixing_time, payment_time, payment_bond, notional):
    args = (initial_libor, volatility, strike, fixing_time, payment_time, payment_bond, notional)
    return caplet_value_black(*args) + caplet_in_arrears_convexity_adjustment(*args)


def floater_value(first_bond, second_bond, notional):
    """Floater paid at ``T2``: ``N (P1 - P2)``."""
    return notional * (first_bond - second_bond)


def floater_in_arrears_convexity_adjustment(initial_libor, volatility, fixing_time, payment_time, payment_bond, notional):
    """``N P2 L0^2 tau^2 exp(sigma^2 T1)``, i.e. ``N P2 tau^2 E[L(T1)^2]``."""
    tau = payment_time - fixing_time
    return notional * payment_bond * initial_libor * initial_libor * tau * tau * math.exp(
        volatility * volatility * fixing_time
    )


def quanto_caplet_value(
    initial_foreign_libor,
    foreign_libor_volatility,
    fx_volatility,
    correlation,
    fixing_time,
    payment_time,
    strike,
    payment_bond,
    foreign_notional,
    quanto_rate,
):
    """Caplet on a foreign Libor paid in domestic currency at a fixed FX rate.

    With lognormal foreign Libor and forward FX correlated by ``rho``, the
    foreign Libor drifts at ``-rho sigma_L sigma_FX`` under the domestic
    payment measure, i.e. its initial value is scaled by
    ``exp(-rho sigma_L sigma_FX T1)`` inside the Black formula.
    """
    quanto_adjustment = math.exp(-correlation * foreign_libor_volatility * fx_volatility * fixing_time)
    return quanto_rate * caplet_value_black(
        initial_foreign_libor * quanto_adjustment,
        foreign_libor_volatility,
        strike,
        fixing_time,
        payment_time,
        payment_bond,
        foreign_notional,
    )
