import QuantLib as ql
import pandas as pd

from .errors import ConfigurationError


def thirty360_usa():
    """Return a 30/360 day count with robust fallbacks."""

    try:
        return ql.Thirty360(ql.Thirty360.USA)
    except Exception:
        pass

    return ql.Thirty360(ql.Thirty360.BondBasis)


_DAY_COUNTS = {
    "ACT/365F": ql.Actual365Fixed,
    "ACT/365": ql.Actual365Fixed,
    "ACT/360": ql.Actual360,
    "30/360": thirty360_usa,
}


class DateUtils:
    """Small helpers to keep date and day-count parsing in one place."""

    @staticmethod
    def to_ql_date(d):
        """Convert common Python date representations into QuantLib.Date."""
        if isinstance(d, ql.Date):
            return d
        if isinstance(d, str):
            d = pd.to_datetime(d).date()
        elif isinstance(d, pd.Timestamp):
            d = d.date()
        return ql.Date(d.day, d.month, d.year)

    @staticmethod
    def day_count(name_or_dc):
        """Return a QuantLib DayCounter from a name such as 'ACT/365F' or '30/360'."""
        if isinstance(name_or_dc, ql.DayCounter):
            return name_or_dc
        key = str(name_or_dc).strip().upper().replace("ACTUAL", "ACT")
        if key not in _DAY_COUNTS:
            raise ConfigurationError(f"Unknown day count convention: {name_or_dc!r}")
        return _DAY_COUNTS[key]()

    @staticmethod
    def year_fraction(start, end, day_count="ACT/365F"):
        """Year fraction between two dates under the given day count."""
        dc = DateUtils.day_count(day_count)
        return float(dc.yearFraction(DateUtils.to_ql_date(start), DateUtils.to_ql_date(end)))
