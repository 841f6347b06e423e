from pathlib import Path

import matplotlib.pyplot as plt
import pandas as pd


def plot_cumulative(table: pd.DataFrame, out_path, title: str, xlabel: str) -> Path:
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    fig, ax = plt.subplots(figsize=(11, 5))

    # Per-bucket arrivals (lighter) under the cumulative curve (main signal)
    ax.bar(table["bucket"], table["count"], alpha=0.3, label="Per bucket")
    ax.plot(table["bucket"], table["cumulative"], linewidth=2.5, marker="o", label="Cumulative")

    ax.set_title(title)
    ax.set_xlabel(xlabel)
    ax.set_ylabel("Bug reports")
    ax.set_xticks(table["bucket"].tolist())
    ax.grid(True, alpha=0.3)
    ax.legend(loc="upper left")
    plt.tight_layout()

    plt.savefig(out_path, dpi=300, bbox_inches="tight")
    plt.close(fig)
    return out_path
