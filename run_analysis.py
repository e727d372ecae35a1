from pathlib import Path

import QuantLib as ql
import pandas as pd

from arrears_pricer import closed_form
from arrears_pricer.config import AppConfig
from arrears_pricer.errors import PricingError
from arrears_pricer.market import MarketLoader
from arrears_pricer.pricer import ArrearsPricer
from arrears_pricer.reporting import (
    maybe_plot_results,
    maybe_plot_sensitivity,
    save_config_snapshot,
    save_dataframe,
    save_results_table,
)
from arrears_pricer.sensitivity import (
    adjustment_vs_fixing_time,
    price_table,
    price_vs_libor,
    price_vs_volatility,
)


def closed_form_check(scenario, notional, strike):
    """Closed-form caplet and floater arrears prices for one scenario."""
    c = scenario.curve
    caplet = closed_form.caplet_in_arrears_value(
        c.initial_libor, scenario.volatility, strike, c.first_time, c.second_time, c.second_bond, notional
    )
    floater = closed_form.floater_value(c.first_bond, c.second_bond, notional) + (
        closed_form.floater_in_arrears_convexity_adjustment(
            c.initial_libor, scenario.volatility, c.first_time, c.second_time, c.second_bond, notional
        )
    )
    return caplet, floater


def main():
    # -------------------------------------------------------------------------
    # 0. Inputs
    # -------------------------------------------------------------------------
    cfg = AppConfig(ql.Date(18, 10, 2026), notional=10000.0)
    cfg.apply_global_settings()

    strike = 0.044
    contracts = [
        (f"Caplet K={strike:.2%}", "CAPLET", {"strike": strike}),
        (f"Digital K={strike:.2%}", "DIGITAL_CAPLET", {"strike": strike}),
        ("Floater", "FLOATER", None),
    ]

    project_root = Path(__file__).resolve().parent
    scenarios_csv = project_root / "data" / "scenarios.csv"
    out_dir = project_root / cfg.output_dir

    # -------------------------------------------------------------------------
    # 1. Load scenarios
    # -------------------------------------------------------------------------
    print("--- 1. Scenarios ---")
    scenarios = MarketLoader(cfg).load_scenarios(scenarios_csv)
    for s in scenarios:
        c = s.curve
        print(
            f"{s.name:<16} T1={c.first_time:.2f} T2={c.second_time:.2f} "
            f"P1={c.first_bond:.6f} P2={c.second_bond:.6f} L0={c.initial_libor:.6f} sigma={s.volatility:.2f}"
        )

    # -------------------------------------------------------------------------
    # 2. Natural vs in-arrears prices
    # -------------------------------------------------------------------------
    print(f"\n--- 2. Prices (N={cfg.notional:.0f}) ---")
    print(f"{'SCENARIO':<16} | {'CONTRACT':<16} | {'NATURAL':>12} | {'ADJUST':>10} | {'ARREARS':>12}")
    print("-" * 78)

    tables = []
    for s in scenarios:
        pricer = ArrearsPricer(s.curve, s.volatility, cfg=cfg)
        try:
            table = price_table(pricer, contracts)
        except PricingError as e:
            print(f"{s.name:<16} | ERROR: {e}")
            continue
        table.insert(0, "scenario", s.name)
        tables.append(table)

        for _, row in table.iterrows():
            print(
                f"{s.name:<16} | {row['contract']:<16} | {row['natural_price']:>12.4f} | "
                f"{row['convexity_adjustment']:>10.4f} | {row['arrears_price']:>12.4f}"
            )

        caplet_cf, floater_cf = closed_form_check(s, cfg.notional, strike)
        print(f"{'':<16} | closed form: caplet arrears {caplet_cf:.4f}, floater arrears {floater_cf:.4f}")

    results_df = pd.concat(tables, ignore_index=True) if tables else pd.DataFrame()

    # -------------------------------------------------------------------------
    # 3. Outputs (CSV + figures)
    # -------------------------------------------------------------------------
    save_results_table(results_df, out_dir)
    save_config_snapshot(cfg, out_dir)
    if not results_df.empty:
        maybe_plot_results(results_df[results_df["scenario"] == scenarios[0].name], out_dir)

    # -------------------------------------------------------------------------
    # 4. Sensitivities on the first scenario
    # -------------------------------------------------------------------------
    base = scenarios[0]

    df_vol = price_vs_volatility(base.curve, contracts, cfg.notional, cfg.volatility_grid)
    save_dataframe(df_vol, out_dir, "sensitivity_price_vs_volatility.csv")
    maybe_plot_sensitivity(
        df_vol,
        out_dir,
        x_col="volatility",
        title="Convexity adjustment vs Libor volatility",
        xlabel="Black volatility",
        ylabel="Convexity adjustment",
        filename_png="adjustment_vs_volatility.png",
        suffix="adjustment",
    )

    df_libor = price_vs_libor(base.curve, contracts, cfg.notional, base.volatility, cfg.libor_grid)
    save_dataframe(df_libor, out_dir, "sensitivity_price_vs_libor.csv")
    maybe_plot_sensitivity(
        df_libor,
        out_dir,
        x_col="initial_libor",
        title="Arrears price vs initial forward Libor",
        xlabel="L(T1,T2;0)",
        ylabel="Arrears price",
        filename_png="arrears_vs_libor.png",
        suffix="arrears",
    )

    df_t1 = adjustment_vs_fixing_time(base.curve, contracts, cfg.notional, base.volatility, cfg.fixing_time_grid)
    save_dataframe(df_t1, out_dir, "sensitivity_adjustment_vs_fixing_time.csv")
    maybe_plot_sensitivity(
        df_t1,
        out_dir,
        x_col="fixing_time",
        title="Convexity adjustment vs fixing time",
        xlabel="T1 (years)",
        ylabel="Convexity adjustment",
        filename_png="adjustment_vs_fixing_time.png",
        suffix="adjustment",
    )

    print(f"\nOutputs written to: {out_dir}")


if __name__ == "__main__":
    main()
