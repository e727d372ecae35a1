"""Exception types raised by the pricer.

Numeric overflow in the convexity adjustment is not an exception: it shows up
as ``inf``/``nan`` in the result (see ``PriceResult.is_finite``).
"""


class PricingError(Exception):
    """Base class for all errors raised by this package."""


class ConfigurationError(PricingError, ValueError):
    """Invalid construction input (curve geometry, bond, volatility, method)."""


class ExternalFormulaError(PricingError, RuntimeError):
    """Failure reported by the analytic Black formulas."""
