import math

import pytest

from arrears_pricer import closed_form
from arrears_pricer.engines import ConvexityEngine, PriceResult
from arrears_pricer.instruments import CapletKernel, DigitalCapletKernel, FloaterKernel
from arrears_pricer.market import RateCurvePoint

NOTIONAL = 10000.0
STRIKE = 0.044


def _kernels(curve, sigma):
    return [
        CapletKernel.for_curve(curve, sigma, NOTIONAL, STRIKE),
        DigitalCapletKernel.for_curve(curve, sigma, NOTIONAL, STRIKE),
        FloaterKernel.for_curve(curve, NOTIONAL),
    ]


def test_caplet_reference_convexity_adjustment():
    curve = RateCurvePoint.from_libor(1.0, 2.0, 0.05, 0.91)
    kernel = CapletKernel.for_curve(curve, 0.3, NOTIONAL, STRIKE)

    result = ConvexityEngine().price(curve, 0.3, kernel)

    assert result.convexity_adjustment == pytest.approx(5.7819, abs=1e-4)


def test_caplet_matches_closed_form():
    curve = RateCurvePoint.from_bonds(1.0, 2.0, 0.95, 0.91)
    sigma = 0.2
    kernel = CapletKernel.for_curve(curve, sigma, NOTIONAL, STRIKE)
    args = (curve.initial_libor, sigma, STRIKE, 1.0, 2.0, 0.91, NOTIONAL)

    result = ConvexityEngine().price(curve, sigma, kernel)

    assert result.natural_price == pytest.approx(closed_form.caplet_value_black(*args), rel=1e-12)
    assert result.convexity_adjustment == pytest.approx(closed_form.caplet_in_arrears_convexity_adjustment(*args), rel=1e-12)
    assert result.arrears_price == pytest.approx(closed_form.caplet_in_arrears_value(*args), rel=1e-12)
    assert result.convexity_adjustment == pytest.approx(1.80680779, abs=1e-6)


def test_floater_matches_closed_form():
    curve = RateCurvePoint.from_bonds(1.0, 2.0, 0.95, 0.90)
    sigma = 0.25
    kernel = FloaterKernel.for_curve(curve, NOTIONAL)

    result = ConvexityEngine().price(curve, sigma, kernel)

    expected_adjustment = closed_form.floater_in_arrears_convexity_adjustment(
        curve.initial_libor, sigma, 1.0, 2.0, 0.90, NOTIONAL
    )
    assert result.natural_price == pytest.approx(500.0, abs=1e-9)
    assert result.convexity_adjustment == pytest.approx(expected_adjustment, rel=1e-12)
    assert result.convexity_adjustment == pytest.approx(29.56929053, abs=1e-6)


def test_digital_caplet_adjustment():
    curve = RateCurvePoint.from_libor(1.0, 2.0, 0.05, 0.91)
    kernel = DigitalCapletKernel.for_curve(curve, 0.3, NOTIONAL, STRIKE)
    assert ConvexityEngine().convexity_adjustment(curve, 0.3, kernel) == pytest.approx(326.56715098, abs=1e-6)


@pytest.mark.parametrize("sigma", [0.0, 0.1, 0.3, 0.8])
def test_arrears_is_natural_plus_adjustment(sigma):
    curve = RateCurvePoint.from_bonds(0.5, 1.0, 0.98, 0.96)
    engine = ConvexityEngine()
    for kernel in _kernels(curve, sigma):
        result = engine.price(curve, sigma, kernel)
        assert result.arrears_price == result.natural_price + result.convexity_adjustment
        assert engine.arrears_price(curve, sigma, kernel) == result.arrears_price


def test_natural_price_is_kernel_at_initial_libor():
    curve = RateCurvePoint.from_bonds(1.0, 2.0, 0.95, 0.91)
    engine = ConvexityEngine()
    for kernel in _kernels(curve, 0.2):
        assert engine.natural_price(curve, kernel) == kernel(curve.initial_libor)


def test_zero_volatility_leaves_libor_unshifted():
    curve = RateCurvePoint.from_bonds(1.0, 2.0, 0.95, 0.91)
    engine = ConvexityEngine()

    assert engine.adjusted_libor(curve, 0.0) == curve.initial_libor
    for kernel in _kernels(curve, 0.0):
        expected = curve.initial_libor * curve.period_length * kernel(curve.initial_libor)
        assert engine.convexity_adjustment(curve, 0.0, kernel) == expected


def test_adjusted_libor_shift():
    curve = RateCurvePoint.from_libor(2.0, 3.0, 0.04, 0.9)
    assert ConvexityEngine().adjusted_libor(curve, 0.3) == pytest.approx(0.04 * math.exp(0.09 * 2.0), rel=1e-15)


def test_engine_accepts_any_callable_kernel():
    curve = RateCurvePoint.from_libor(1.0, 2.0, 0.05, 0.91)

    def squared(libor):
        return libor * libor

    result = ConvexityEngine().price(curve, 0.2, squared)

    assert result.natural_price == pytest.approx(0.0025)
    assert result.convexity_adjustment == pytest.approx(0.05 * (0.05 * math.exp(0.04)) ** 2)


def test_flat_curve_prices_to_zero():
    curve = RateCurvePoint.from_bonds(1.0, 2.0, 0.91, 0.91)
    assert curve.initial_libor == 0.0

    for kernel in _kernels(curve, 0.2):
        result = ConvexityEngine().price(curve, 0.2, kernel)
        assert result.natural_price == 0.0
        assert result.convexity_adjustment == 0.0
        assert result.arrears_price == 0.0


def test_overflow_propagates_as_non_finite_value():
    curve = RateCurvePoint.from_libor(10.0, 11.0, 0.05, 0.5)
    kernel = FloaterKernel.for_curve(curve, NOTIONAL)

    result = ConvexityEngine().price(curve, 10.0, kernel)

    assert math.isinf(result.convexity_adjustment)
    assert math.isinf(result.arrears_price)
    assert not result.is_finite()
    assert result.natural_price == kernel(0.05)


def test_price_result_is_finite():
    assert PriceResult(1.0, 0.1, 1.1).is_finite()
    assert not PriceResult(1.0, float("nan"), float("nan")).is_finite()
