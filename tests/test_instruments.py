import dataclasses

import pytest

from arrears_pricer import closed_form
from arrears_pricer.errors import ExternalFormulaError
from arrears_pricer.instruments import CapletKernel, DigitalCapletKernel, FloaterKernel, PricingKernel
from arrears_pricer.market import RateCurvePoint


@pytest.fixture
def curve():
    return RateCurvePoint.from_libor(1.0, 2.0, 0.05, 0.91)


def test_floater_natural_price_is_bond_difference():
    curve = RateCurvePoint.from_bonds(1.0, 2.0, 0.95, 0.90)
    kernel = FloaterKernel.for_curve(curve, 10000.0)
    assert kernel(curve.initial_libor) == pytest.approx(500.0, abs=1e-9)
    assert kernel(curve.initial_libor) == pytest.approx(closed_form.floater_value(0.95, 0.90, 10000.0), abs=1e-9)


def test_floater_is_linear_in_libor(curve):
    kernel = FloaterKernel.for_curve(curve, 1.0)
    assert kernel(0.02) == pytest.approx(0.91 * 0.02)
    assert kernel(0.0) == 0.0


def test_caplet_kernel_matches_black_caplet(curve):
    kernel = CapletKernel.for_curve(curve, 0.3, 10000.0, 0.044)
    assert kernel(0.05) == pytest.approx(82.81616933, abs=1e-6)
    assert kernel(0.05) == pytest.approx(
        closed_form.caplet_value_black(0.05, 0.3, 0.044, 1.0, 2.0, 0.91, 10000.0), rel=1e-14
    )


def test_digital_caplet_kernel(curve):
    kernel = DigitalCapletKernel.for_curve(curve, 0.3, 10000.0, 0.044)
    assert kernel(0.05) == pytest.approx(5539.79503752, abs=1e-6)


def test_digital_caplet_is_bounded_by_discounted_accrual(curve):
    kernel = DigitalCapletKernel.for_curve(curve, 0.3, 10000.0, 0.044)
    assert 0.0 < kernel(1.0) <= 10000.0 * 0.91 * 1.0


def test_kernels_accept_shifted_libor(curve):
    caplet = CapletKernel.for_curve(curve, 0.3, 1.0, 0.044)
    assert caplet(0.08) > caplet(0.05)


def test_caplet_and_digital_vanish_at_zero_libor(curve):
    caplet = CapletKernel.for_curve(curve, 0.3, 10000.0, 0.044)
    digital = DigitalCapletKernel.for_curve(curve, 0.3, 10000.0, 0.044)
    assert caplet(0.0) == 0.0
    assert digital(0.0) == 0.0


def test_kernel_delegates_domain_errors(curve):
    caplet = CapletKernel.for_curve(curve, 0.3, 1.0, 0.044)
    with pytest.raises(ExternalFormulaError):
        caplet(-0.01)


def test_kernels_are_immutable(curve):
    kernel = CapletKernel.for_curve(curve, 0.3, 1.0, 0.044)
    with pytest.raises(dataclasses.FrozenInstanceError):
        kernel.strike = 0.05


def test_pricing_kernel_is_abstract():
    with pytest.raises(TypeError):
        PricingKernel()
