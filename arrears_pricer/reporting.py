import json
from pathlib import Path


def ensure_dir(path):
    p = Path(path)
    p.mkdir(parents=True, exist_ok=True)
    return p


def save_results_table(results_df, output_dir):
    """Save the pricing table (natural, adjustment, arrears) as CSV."""
    out = ensure_dir(output_dir)
    csv_path = out / "results_summary.csv"
    results_df.to_csv(csv_path, index=False)
    return csv_path


def save_dataframe(df, output_dir, filename):
    """Save a DataFrame to CSV inside ``output_dir``."""
    out = ensure_dir(output_dir)
    p = out / filename
    df.to_csv(p, index=False)
    return p


def save_config_snapshot(cfg, output_dir):
    """Persist the JSON-serializable config fields (reproducibility)."""
    out = ensure_dir(output_dir)
    path = out / "config_snapshot.json"
    d = {}
    for k, v in cfg.__dict__.items():
        if k == "val_date":
            d[k] = str(v)
        elif isinstance(v, (int, float, str, bool)):
            d[k] = v
        elif isinstance(v, (list, tuple)) and all(isinstance(x, (int, float)) for x in v):
            d[k] = [float(x) for x in v]
    with open(path, "w", encoding="utf-8") as f:
        json.dump(d, f, indent=2, sort_keys=True)
    return path


def maybe_plot_results(results_df, output_dir):
    """Grouped bar chart of natural vs arrears price per contract.

    Produces ``figures/natural_vs_arrears.png``. If matplotlib is not
    available, this function does nothing.
    """
    try:
        import matplotlib.pyplot as plt
    except Exception:
        return None

    if results_df.empty:
        return None

    labels = list(results_df["contract"])
    x = range(len(labels))
    width = 0.4

    fig = plt.figure()
    ax = fig.add_subplot(111)
    ax.bar([i - width / 2 for i in x], results_df["natural_price"], width, label="Natural (paid at T2)")
    ax.bar([i + width / 2 for i in x], results_df["arrears_price"], width, label="In arrears (paid at T1)")
    ax.set_xticks(list(x))
    ax.set_xticklabels(labels, rotation=45, ha="right")
    ax.set_ylabel("Price")
    ax.legend(fontsize=8)
    fig.tight_layout()

    fig_dir = ensure_dir(Path(output_dir) / "figures")
    p = fig_dir / "natural_vs_arrears.png"
    fig.savefig(p, dpi=200)
    plt.close(fig)
    return p


def maybe_plot_sensitivity(df, output_dir, x_col, title, xlabel, ylabel, filename_png, suffix=None):
    """Plot the y columns of a wide sensitivity DataFrame against ``x_col``.

    Parameters
    ----------
    df : pandas.DataFrame
        Output of one of the ``sensitivity`` sweeps.
    x_col : str
        Name of the x-axis column.
    suffix : str, optional
        Only plot columns ending with this suffix (e.g. ``"adjustment"``).
    """
    try:
        import matplotlib.pyplot as plt
    except Exception:
        return None

    cols = [c for c in df.columns if c != x_col and (suffix is None or str(c).endswith(suffix))]
    if not cols:
        return None

    fig = plt.figure()
    ax = fig.add_subplot(111)

    x = df[x_col].values
    for col in cols:
        ax.plot(x, df[col].values, marker="o", linewidth=1.5, label=str(col))

    ax.set_title(title)
    ax.set_xlabel(xlabel)
    ax.set_ylabel(ylabel)
    ax.grid(True, alpha=0.3)
    ax.legend(fontsize=8)
    fig.tight_layout()

    fig_dir = ensure_dir(Path(output_dir) / "figures")
    p = fig_dir / filename_png
    fig.savefig(p, dpi=200)
    plt.close(fig)
    return p
