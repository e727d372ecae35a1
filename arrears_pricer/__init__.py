"""Black-model pricer for interest-rate payoffs paid naturally or in arrears.

This package provides:
- Curve points tying two zero-coupon bonds to the forward Libor between them
- Pricing kernels (caplet, digital caplet, floater) giving the natural price
  as a function of the initial Libor
- A payoff-agnostic convexity engine turning any kernel into an in-arrears price
- An orchestrator, sensitivity sweeps, a CSV scenario loader and reporting helpers
"""

from .config import AppConfig
from .engines import ConvexityEngine, PriceResult
from .errors import ConfigurationError, ExternalFormulaError, PricingError
from .instruments import CapletKernel, DigitalCapletKernel, FloaterKernel, PricingKernel
from .market import MarketLoader, MarketScenario, RateCurvePoint
from .pricer import ArrearsPricer, Contract
