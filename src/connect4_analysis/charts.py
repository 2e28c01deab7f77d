from __future__ import annotations

from pathlib import Path

import matplotlib.pyplot as plt
import pandas as pd


def _save(fig, outdir: Path, filename: str, *, show: bool) -> Path | None:
    if show:
        plt.show()
        return None
    outdir.mkdir(parents=True, exist_ok=True)
    out = outdir / filename
    fig.savefig(out, dpi=150, bbox_inches="tight")
    plt.close(fig)
    return out


def _presets(df: pd.DataFrame) -> pd.DataFrame:
    return df.dropna(subset=["depth"]).sort_values("depth", kind="stable")


def plot_random_rate(df: pd.DataFrame, outdir: Path, *, show: bool) -> Path | None:
    """Configured random factor against the share of moves actually played at random."""
    presets = _presets(df)
    if presets.empty:
        return None

    x = range(len(presets))
    fig, ax = plt.subplots(figsize=(8, 4))
    ax.bar([i - 0.2 for i in x], presets["random_factor"], width=0.4, label="configured")
    ax.bar([i + 0.2 for i in x], presets["random_rate"], width=0.4, label="observed")
    ax.set_xticks(list(x))
    ax.set_xticklabels(presets["name"], rotation=20, ha="right")
    ax.set_ylabel("random moves / move")
    ax.set_title("Random-move rate per difficulty")
    ax.legend()
    return _save(fig, outdir, "random_rate.png", show=show)


def plot_search_cost(df: pd.DataFrame, outdir: Path, *, show: bool) -> Path | None:
    """Nodes per searched move (log scale), labelled with the cutoff rate."""
    presets = _presets(df)
    presets = presets[presets["nodes_per_search"] > 0]
    if presets.empty:
        return None

    fig, ax = plt.subplots(figsize=(8, 4))
    bars = ax.bar(presets["name"], presets["nodes_per_search"])
    ax.set_yscale("log")
    for bar, rate in zip(bars, presets["cutoffs_per_node"]):
        ax.annotate(f"{100 * rate:.0f}% cut", (bar.get_x() + bar.get_width() / 2, bar.get_height()),
                    ha="center", va="bottom", fontsize=8)
    ax.set_ylabel("nodes / searched move")
    ax.set_title("Alpha-beta search cost per difficulty")
    plt.setp(ax.get_xticklabels(), rotation=20, ha="right")
    return _save(fig, outdir, "search_cost.png", show=show)


def plot_strength(df: pd.DataFrame, outdir: Path, *, show: bool) -> Path | None:
    if df.empty:
        return None

    ranked = df.sort_values("ppg", ascending=False, kind="stable")
    fig, ax = plt.subplots(figsize=(8, 4))
    ax.bar(ranked["name"], ranked["ppg"], label="points per game")
    if "strength_wilson_lcb" in ranked.columns:
        ax.scatter(ranked["name"], ranked["strength_wilson_lcb"], color="black", zorder=3, label="Wilson lower bound")
    ax.set_ylim(0, 1)
    ax.set_title("Arena results")
    ax.legend()
    plt.setp(ax.get_xticklabels(), rotation=20, ha="right")
    return _save(fig, outdir, "strength.png", show=show)
