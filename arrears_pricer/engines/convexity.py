import logging
import math
from dataclasses import dataclass

import numpy as np

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PriceResult:
    """Natural price, convexity adjustment and arrears price of one contract."""

    natural_price: float
    convexity_adjustment: float
    arrears_price: float

    def is_finite(self):
        """False when the adjustment overflowed (large ``sigma^2 * T1``)."""
        return all(math.isfinite(v) for v in (self.natural_price, self.convexity_adjustment, self.arrears_price))


class ConvexityEngine:
    """Price in arrears of any European payoff on a Black-model Libor.

    Let ``V(L)`` be the price, paid at ``T2``, of a payoff ``f(L(T1))`` when the
    Libor starts at ``L``. Paying the same payoff at ``T1`` instead is worth

        V(L0) + L0 * (T2 - T1) * V(L0 * exp(sigma^2 * T1))

    The second term is the convexity adjustment: changing from the
    T1-forward to the T2-forward measure weights the payoff by
    ``1 + (T2-T1) L(T1)``, and for a driftless lognormal Libor
    ``E[L(T1) f(L(T1))] = L0 E[f(L(T1) exp(sigma^2 T1))]``. The rule is the same for
    every payoff, so the engine only needs the kernel ``V``; it does no
    payoff-specific work.

    The engine holds no state. ``exp(sigma^2 * T1)`` may overflow for extreme
    inputs; the resulting ``inf``/``nan`` is returned, not raised.
    """

    def natural_price(self, curve, kernel):
        return float(kernel(curve.initial_libor))

    def adjusted_libor(self, curve, volatility):
        with np.errstate(over="ignore"):
            shift = float(np.exp(volatility * volatility * curve.first_time))
        return curve.initial_libor * shift

    def convexity_adjustment(self, curve, volatility, kernel):
        shifted = self.adjusted_libor(curve, volatility)
        return curve.initial_libor * curve.period_length * float(kernel(shifted))

    def arrears_price(self, curve, volatility, kernel):
        return self.price(curve, volatility, kernel).arrears_price

    def price(self, curve, volatility, kernel):
        """Return a :class:`PriceResult` for ``kernel`` on ``curve``."""
        natural = self.natural_price(curve, kernel)
        adjustment = self.convexity_adjustment(curve, volatility, kernel)
        result = PriceResult(
            natural_price=natural,
            convexity_adjustment=adjustment,
            arrears_price=natural + adjustment,
        )
        if not result.is_finite():
            logger.debug("Non-finite price for sigma=%s T1=%s: %s", volatility, curve.first_time, result)
        return result
