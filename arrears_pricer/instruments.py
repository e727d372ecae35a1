import abc
from dataclasses import dataclass

from .formulas import black_scholes_digital_option_value, black_scholes_option_value


class PricingKernel(abc.ABC):
    """Natural-unit price of a payoff as a function of the initial Libor.

    A kernel maps a *hypothetical* initial value ``L`` of the forward Libor
    ``L(T1,T2)`` to the price of the contract paid at ``T2``. It must accept any
    non-negative ``L``: the convexity engine evaluates it at the shifted value
    ``L0 * exp(sigma^2 T1)`` as well as at ``L0``.

    Implementations are immutable value objects; all payoff parameters are
    fixed at construction.
    """

    @abc.abstractmethod
    def __call__(self, libor):
        raise NotImplementedError


@dataclass(frozen=True)
class CapletKernel(PricingKernel):
    """Caplet paying ``N (T2-T1) max(L(T1) - K, 0)`` at ``T2`` (Black model)."""

    notional: float
    second_bond: float
    period_length: float
    fixing_time: float
    volatility: float
    strike: float

    @classmethod
    def for_curve(cls, curve, volatility, notional, strike):
        return cls(
            notional=float(notional),
            second_bond=curve.second_bond,
            period_length=curve.period_length,
            fixing_time=curve.first_time,
            volatility=float(volatility),
            strike=float(strike),
        )

    def __call__(self, libor):
        return self.notional * self.second_bond * self.period_length * black_scholes_option_value(
            libor, 0.0, self.volatility, self.fixing_time, self.strike
        )


@dataclass(frozen=True)
class DigitalCapletKernel(PricingKernel):
    """Digital caplet paying ``N (T2-T1)`` at ``T2`` when ``L(T1) > K``."""

    notional: float
    second_bond: float
    period_length: float
    fixing_time: float
    volatility: float
    strike: float

    @classmethod
    def for_curve(cls, curve, volatility, notional, strike):
        return cls(
            notional=float(notional),
            second_bond=curve.second_bond,
            period_length=curve.period_length,
            fixing_time=curve.first_time,
            volatility=float(volatility),
            strike=float(strike),
        )

    def __call__(self, libor):
        return self.notional * self.second_bond * self.period_length * black_scholes_digital_option_value(
            libor, 0.0, self.volatility, self.fixing_time, self.strike
        )


@dataclass(frozen=True)
class FloaterKernel(PricingKernel):
    """Floating coupon ``N (T2-T1) L(T1)`` paid at ``T2``.

    Evaluated at ``L0`` this is ``N (P1 - P2)``, but it is written as a function
    of the Libor so that it can be shifted by the convexity engine.
    """

    notional: float
    second_bond: float
    period_length: float

    @classmethod
    def for_curve(cls, curve, notional):
        return cls(
            notional=float(notional),
            second_bond=curve.second_bond,
            period_length=curve.period_length,
        )

    def __call__(self, libor):
        return self.notional * self.second_bond * self.period_length * libor

