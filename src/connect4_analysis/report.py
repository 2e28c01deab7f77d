from __future__ import annotations

from pathlib import Path

import pandas as pd

# Raw counters written by the arena; every rate below is rebuilt from these
COUNTER_COLS = ["games", "wins", "draws", "losses", "moves", "time_ms", "nodes", "cutoffs", "random_moves"]

REPORT_COLS = [
    "name",
    "depth", "random_factor",
    "random_rate", "random_drift",
    "ppg", "strength_wilson_lcb",
    "ms_per_move", "nodes_per_search", "cutoffs_per_node",
]

# Roster names look like "Minimax hard (d6 p0.00)"
_PRESET_RE = r"\(d(?P<depth>\d+) p(?P<random_factor>[0-9.]+)\)"


def latest_results(results_dir: Path, pattern: str = "arena_results_*.csv") -> Path:
    if not results_dir.exists():
        raise FileNotFoundError(f"Results directory not found: {results_dir}")
    files = sorted(results_dir.glob(pattern))
    if not files:
        raise FileNotFoundError(f"No files matching {pattern} in {results_dir}")
    # timestamped names sort chronologically
    return files[-1]


def _per(num: pd.Series, den: pd.Series) -> pd.Series:
    return (num / den.where(den > 0)).fillna(0.0)


def with_engine_columns(df: pd.DataFrame) -> pd.DataFrame:
    """
    Add the per-agent rates the engine is judged on, plus the configured
    depth/random factor parsed back out of the roster name (NaN for the
    random baseline).
    """
    out = df.copy()
    out["ppg"] = _per(out["wins"] + 0.5 * out["draws"], out["games"])
    out["ms_per_move"] = _per(out["time_ms"], out["moves"])
    out["random_rate"] = _per(out["random_moves"], out["moves"])
    out["nodes_per_search"] = _per(out["nodes"], out["moves"] - out["random_moves"])
    out["cutoffs_per_node"] = _per(out["cutoffs"], out["nodes"])

    preset = out["name"].str.extract(_PRESET_RE)
    out["depth"] = pd.to_numeric(preset["depth"], errors="coerce")
    out["random_factor"] = pd.to_numeric(preset["random_factor"], errors="coerce")
    out["random_drift"] = out["random_rate"] - out["random_factor"]
    return out


def load_arena_csv(path: Path) -> pd.DataFrame:
    if not path.exists():
        raise FileNotFoundError(f"CSV not found: {path}")

    df = pd.read_csv(path)
    df.columns = [c.strip() for c in df.columns]
    missing = [c for c in ["name", *COUNTER_COLS] if c not in df.columns]
    if missing:
        raise ValueError(f"CSV missing columns {missing}. Columns: {list(df.columns)}")

    df["name"] = df["name"].astype(str).str.strip()
    df = df[df["name"].str.len() > 0].copy()
    for c in COUNTER_COLS:
        df[c] = pd.to_numeric(df[c], errors="coerce").fillna(0)

    return with_engine_columns(df)


def difficulty_report(df: pd.DataFrame) -> pd.DataFrame:
    """One row per agent, shallowest preset first, the random baseline last."""
    keep = [c for c in REPORT_COLS if c in df.columns]
    out = df.sort_values(["depth", "name"], na_position="last", kind="stable")
    return out[keep].reset_index(drop=True)


def depth_growth(df: pd.DataFrame) -> pd.DataFrame:
    """
    Search cost per preset depth, with the node growth factor over the next
    shallower depth in the run.
    """
    presets = df.dropna(subset=["depth"])
    if presets.empty:
        return pd.DataFrame(columns=["depth", "nodes_per_search", "cutoffs_per_node", "growth"])

    out = (
        presets.groupby("depth", as_index=False)[["nodes_per_search", "cutoffs_per_node"]]
        .mean()
        .sort_values("depth")
        .reset_index(drop=True)
    )
    out["depth"] = out["depth"].astype(int)
    out["growth"] = out["nodes_per_search"] / out["nodes_per_search"].shift(1)
    return out
