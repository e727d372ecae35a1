import logging
import math
from dataclasses import InitVar, dataclass, field

import pandas as pd

from .errors import ConfigurationError
from .utils import DateUtils

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RateCurvePoint:
    """Two zero-coupon bonds and the forward Libor between their maturities.

    The bonds ``P(T1;0)`` and ``P(T2;0)`` and the forward Libor
    ``L(T1,T2;0)`` are tied together by

        L0 = (P1 / P2 - 1) / (T2 - T1)

    ``P2`` is always given. The caller supplies either ``P1``
    (``give_libor=False``) or ``L0`` (``give_libor=True``) through
    ``first_bond_or_libor``; the missing value is derived once here and both
    are exposed as read-only attributes afterwards.

    Raises
    ------
    ConfigurationError
        If ``T2 <= T1``, ``P2 <= 0`` or any input is not a finite number.
    """

    first_time: float
    second_time: float
    first_bond_or_libor: InitVar[float]
    second_bond: float
    give_libor: InitVar[bool] = False

    first_bond: float = field(init=False)
    initial_libor: float = field(init=False)

    def __post_init__(self, first_bond_or_libor, give_libor):
        values = {
            "first_time": self.first_time,
            "second_time": self.second_time,
            "first_bond_or_libor": first_bond_or_libor,
            "second_bond": self.second_bond,
        }
        for name, value in values.items():
            try:
                ok = math.isfinite(float(value))
            except (TypeError, ValueError):
                ok = False
            if not ok:
                raise ConfigurationError(f"{name} must be a finite number, got {value!r}")

        t1, t2 = float(self.first_time), float(self.second_time)
        p2 = float(self.second_bond)
        if t2 <= t1:
            raise ConfigurationError(f"second_time ({t2}) must be after first_time ({t1})")
        if p2 <= 0.0:
            raise ConfigurationError(f"second_bond must be positive, got {p2}")

        tau = t2 - t1
        if give_libor:
            libor = float(first_bond_or_libor)
            bond = p2 * (libor * tau + 1.0)
        else:
            bond = float(first_bond_or_libor)
            libor = (bond / p2 - 1.0) / tau

        object.__setattr__(self, "first_time", t1)
        object.__setattr__(self, "second_time", t2)
        object.__setattr__(self, "second_bond", p2)
        object.__setattr__(self, "first_bond", bond)
        object.__setattr__(self, "initial_libor", libor)

    @classmethod
    def from_bonds(cls, first_time, second_time, first_bond, second_bond):
        return cls(first_time, second_time, first_bond, second_bond, give_libor=False)

    @classmethod
    def from_libor(cls, first_time, second_time, initial_libor, second_bond):
        return cls(first_time, second_time, initial_libor, second_bond, give_libor=True)

    @property
    def period_length(self):
        """Accrual period ``T2 - T1``."""
        return self.second_time - self.first_time


@dataclass(frozen=True)
class MarketScenario:
    """One row of market input: a curve point and the Libor volatility."""

    name: str
    curve: RateCurvePoint
    volatility: float


# Accepted (normalized) column names, in order of preference.
_COLUMNS = {
    "name": ("name", "scenario", "label"),
    "first_time": ("t1", "first_time", "fixing_time", "fixing"),
    "second_time": ("t2", "second_time", "payment_time", "payment"),
    "first_date": ("fixing_date", "first_date", "t1_date"),
    "second_date": ("payment_date", "second_date", "t2_date"),
    "first_bond": ("p1", "first_bond", "bond1", "df1"),
    "second_bond": ("p2", "second_bond", "bond2", "df2"),
    "initial_libor": ("l0", "libor", "initial_libor", "forward_libor"),
    "volatility": ("sigma", "vol", "volatility", "libor_volatility"),
}


def _normalize(col):
    return str(col).strip().lower().replace(" ", "_").replace("-", "_")


def _find_column(df, key):
    by_norm = {_normalize(c): c for c in df.columns}
    return next((by_norm[c] for c in _COLUMNS[key] if c in by_norm), None)


def _has_value(row, col):
    return col is not None and not pd.isna(row[col])


class MarketLoader:
    """Load pricing scenarios (curve points + volatilities) from a CSV.

    The loader is permissive regarding column names so that exports with
    slightly different headers work unchanged. Each row needs:

    - the fixing and payment times (``t1``/``t2``) or the corresponding dates
      (``fixing_date``/``payment_date``), which are converted to year fractions
      from ``cfg.val_date`` using ``cfg.day_count``;
    - the payment-date bond ``p2``;
    - either the fixing-date bond ``p1`` or the forward Libor ``l0``
      (``p1`` wins when both are present);
    - the Libor volatility ``sigma``.
    """

    def __init__(self, cfg):
        self.cfg = cfg

    def _times(self, row, cols):
        if _has_value(row, cols["first_time"]) and _has_value(row, cols["second_time"]):
            return float(row[cols["first_time"]]), float(row[cols["second_time"]])
        if _has_value(row, cols["first_date"]) and _has_value(row, cols["second_date"]):
            t1 = DateUtils.year_fraction(self.cfg.val_date, row[cols["first_date"]], self.cfg.day_count)
            t2 = DateUtils.year_fraction(self.cfg.val_date, row[cols["second_date"]], self.cfg.day_count)
            return t1, t2
        raise ConfigurationError("fixing/payment times (t1, t2) or dates are required")

    def _scenario(self, idx, row, cols):
        name = str(row[cols["name"]]) if _has_value(row, cols["name"]) else f"scenario_{idx}"
        try:
            if not _has_value(row, cols["second_bond"]):
                raise ConfigurationError("payment-date bond p2 is required")
            if not _has_value(row, cols["volatility"]):
                raise ConfigurationError("volatility sigma is required")

            t1, t2 = self._times(row, cols)
            p2 = float(row[cols["second_bond"]])
            if _has_value(row, cols["first_bond"]):
                curve = RateCurvePoint.from_bonds(t1, t2, float(row[cols["first_bond"]]), p2)
            elif _has_value(row, cols["initial_libor"]):
                curve = RateCurvePoint.from_libor(t1, t2, float(row[cols["initial_libor"]]), p2)
            else:
                raise ConfigurationError("either p1 or l0 is required")
        except ConfigurationError as exc:
            raise ConfigurationError(f"row {idx} ({name}): {exc}") from exc

        return MarketScenario(name=name, curve=curve, volatility=float(row[cols["volatility"]]))

    def load_scenarios(self, path):
        """Return a list of :class:`MarketScenario` read from ``path``."""
        df = pd.read_csv(path)
        cols = {key: _find_column(df, key) for key in _COLUMNS}

        if cols["second_bond"] is None or cols["volatility"] is None:
            raise ConfigurationError(
                "Scenario CSV must contain a payment-date bond column (p2) and a volatility column (sigma)."
            )
        if cols["first_bond"] is None and cols["initial_libor"] is None:
            raise ConfigurationError("Scenario CSV must contain either a p1 or an l0 column.")

        scenarios = [self._scenario(idx, row, cols) for idx, row in df.iterrows()]
        logger.debug("Loaded %d scenarios from %s", len(scenarios), path)
        return scenarios
