import math

import pytest

from arrears_pricer import closed_form


def test_floater_in_arrears_adjustment_is_second_moment():
    libor, sigma = 0.05, 0.25
    adjustment = closed_form.floater_in_arrears_convexity_adjustment(libor, sigma, 1.0, 2.0, 0.9, 10000.0)
    assert adjustment == pytest.approx(10000.0 * 0.9 * libor ** 2 * math.exp(sigma ** 2), rel=1e-14)


def test_quanto_without_correlation_is_scaled_caplet():
    caplet = closed_form.caplet_value_black(0.05, 0.3, 0.044, 1.0, 2.0, 0.91, 10000.0)
    quanto = closed_form.quanto_caplet_value(0.05, 0.3, 0.15, 0.0, 1.0, 2.0, 0.044, 0.91, 10000.0, 1.2)
    assert quanto == pytest.approx(1.2 * caplet, rel=1e-14)


def test_positive_correlation_lowers_quanto_caplet():
    args = dict(
        initial_foreign_libor=0.05,
        foreign_libor_volatility=0.3,
        fx_volatility=0.15,
        fixing_time=1.0,
        payment_time=2.0,
        strike=0.044,
        payment_bond=0.91,
        foreign_notional=10000.0,
        quanto_rate=1.0,
    )
    assert closed_form.quanto_caplet_value(correlation=0.5, **args) < closed_form.quanto_caplet_value(
        correlation=-0.5, **args
    )
