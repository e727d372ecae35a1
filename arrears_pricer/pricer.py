import logging
import math
from dataclasses import dataclass, field

from .engines import ConvexityEngine
from .errors import ConfigurationError
from .instruments import CapletKernel, DigitalCapletKernel, FloaterKernel, PricingKernel
from .market import RateCurvePoint

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Contract:
    """A kernel bound to its curve point and volatility.

    Gives the zero-argument accessors for a single contract: the natural price
    is exactly ``kernel(L0)``, the arrears price is natural + adjustment.
    """

    curve: RateCurvePoint
    volatility: float
    kernel: PricingKernel
    engine: ConvexityEngine = field(default_factory=ConvexityEngine)

    def natural_price(self):
        return self.engine.natural_price(self.curve, self.kernel)

    def convexity_adjustment(self):
        return self.engine.convexity_adjustment(self.curve, self.volatility, self.kernel)

    def arrears_price(self):
        return self.engine.arrears_price(self.curve, self.volatility, self.kernel)

    def result(self):
        return self.engine.price(self.curve, self.volatility, self.kernel)


class ArrearsPricer:
    """High-level orchestrator.

    Responsibilities
    ----------------
    - Validate the pricing request (volatility) once, up front
    - Build the pricing kernel for a method key
    - Provide natural price, convexity adjustment and arrears price through
      :class:`ConvexityEngine`

    Method keys and the parameters they read from ``params``:

    ================  ==================
    CAPLET            ``strike``
    DIGITAL_CAPLET    ``strike``
    FLOATER           (none)
    ================  ==================

    Notes
    -----
    The volatility must be a finite, non-negative number; it is checked here
    rather than left to the Black formulas. Domain problems with the Libor
    itself (e.g. a non-positive forward in a caplet) are reported by the
    formulas as ``ExternalFormulaError`` when the kernel is evaluated.
    """

    METHODS = ("CAPLET", "DIGITAL_CAPLET", "FLOATER")

    def __init__(self, curve, volatility, notional=None, cfg=None):
        """Create a pricer.

        Parameters
        ----------
        curve : RateCurvePoint
            Fixing/payment times, bonds and forward Libor.
        volatility : float
            Black volatility of the forward Libor.
        notional : float, optional
            Defaults to ``cfg.notional`` if a config is given, else 1.
        cfg : AppConfig, optional
        """
        try:
            vol = float(volatility)
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(f"volatility must be a number, got {volatility!r}") from exc
        if not math.isfinite(vol) or vol < 0.0:
            raise ConfigurationError(f"volatility must be finite and non-negative, got {volatility!r}")

        if notional is None:
            notional = cfg.notional if cfg is not None else 1.0

        self.curve = curve
        self.volatility = vol
        self.notional = float(notional)
        self.cfg = cfg
        self.engine = ConvexityEngine()

    def _strike(self, method, params):
        if not params or params.get("strike") is None:
            raise ConfigurationError(f"{method} requires a 'strike' parameter")
        return float(params["strike"])

    def kernel(self, method, params=None):
        """Return the pricing kernel for ``method``."""
        key = str(method).upper()

        if key == "CAPLET":
            return CapletKernel.for_curve(self.curve, self.volatility, self.notional, self._strike(key, params))
        if key == "DIGITAL_CAPLET":
            return DigitalCapletKernel.for_curve(
                self.curve, self.volatility, self.notional, self._strike(key, params)
            )
        if key == "FLOATER":
            return FloaterKernel.for_curve(self.curve, self.notional)

        raise ConfigurationError(f"Unknown pricing method {method!r}; expected one of {self.METHODS}")

    def contract(self, method, params=None):
        return Contract(self.curve, self.volatility, self.kernel(method, params), self.engine)

    def calculate(self, method, params=None):
        """Price ``method`` and return a :class:`PriceResult`."""
        result = self.engine.price(self.curve, self.volatility, self.kernel(method, params))
        logger.debug("%s %s -> %s", method, params, result)
        return result

    def natural_price(self, method, params=None):
        return self.contract(method, params).natural_price()

    def convexity_adjustment(self, method, params=None):
        return self.contract(method, params).convexity_adjustment()

    def arrears_price(self, method, params=None):
        return self.contract(method, params).arrears_price()
