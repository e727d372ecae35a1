import logging
import warnings

import QuantLib as ql


class AppConfig:
    """Central configuration object.

    All the knobs used by the demo script, the sensitivity sweeps and the
    scenario loader live here, so that a run can be reproduced from a single
    snapshot (see ``reporting.save_config_snapshot``).

    Parameters
    ----------
    val_date : QuantLib.Date
        Valuation date. Used to turn fixing/payment dates into year fractions.
    notional : float
        Default notional for the priced contracts.
    day_count : str
        Day count used for date -> year fraction conversion ('ACT/365F',
        'ACT/360' or '30/360').
    """

    def __init__(self, val_date=None, notional=10000.0, day_count="ACT/365F"):
        self.val_date = val_date if val_date is not None else ql.Date.todaysDate()
        self.notional = float(notional)
        self.day_count = day_count

        # ----------------
        # Sensitivity sweeps
        # ----------------
        self.volatility_grid = [0.0, 0.1, 0.2, 0.3, 0.4, 0.5]
        self.libor_grid = [0.01, 0.02, 0.03, 0.04, 0.05, 0.06, 0.08]
        self.fixing_time_grid = [0.25, 0.5, 1.0, 2.0, 5.0, 10.0]

        # ----------------
        # Outputs
        # ----------------
        self.output_dir = "outputs"

        # ----------------
        # Global flags
        # ----------------
        self.suppress_warnings = True
        self.log_level = "INFO"

    def apply_global_settings(self):
        """Apply global settings (warnings filter + logging)."""
        if self.suppress_warnings:
            warnings.filterwarnings("ignore")
        logging.basicConfig(
            level=getattr(logging, str(self.log_level).upper(), logging.INFO),
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
