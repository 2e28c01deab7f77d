from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .charts import plot_random_rate, plot_search_cost, plot_strength
from .report import depth_growth, difficulty_report, latest_results, load_arena_csv


def build_argparser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="connect4_analysis", description="Analyze Connect-4 arena results.")
    sub = ap.add_subparsers(dest="cmd", required=True)

    an = sub.add_parser("analyze", help="Summarise an arena CSV and draw charts.")
    an.add_argument("--csv", type=str, default=None, help="Results CSV. If omitted, uses the latest in --results-dir.")
    an.add_argument("--results-dir", type=str, default="data/results", help="Directory containing arena_results_*.csv")
    an.add_argument("--pattern", type=str, default="arena_results_*.csv", help="Glob pattern for selecting latest file")
    an.add_argument("--outdir", type=str, default="figures", help="Directory for saving plots")
    an.add_argument("--show", action="store_true", help="Show plots instead of saving")
    an.add_argument("--no-plots", action="store_true", help="Print tables only")
    return ap


def analyze(args: argparse.Namespace) -> int:
    csv_path = Path(args.csv) if args.csv else latest_results(Path(args.results_dir), pattern=args.pattern)
    df = load_arena_csv(csv_path)

    print(f"\nLoaded: {csv_path} ({len(df)} agents)")
    print("\n=== Difficulty report ===")
    print(difficulty_report(df).to_string(index=False))

    growth = depth_growth(df)
    if not growth.empty:
        print("\n=== Search cost by depth ===")
        print(growth.to_string(index=False))

    if args.no_plots:
        return 0

    outdir = Path(args.outdir)
    for plot in (plot_strength, plot_random_rate, plot_search_cost):
        plot(df, outdir, show=args.show)

    if not args.show:
        print(f"\nSaved figures to: {outdir.resolve()}")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_argparser().parse_args(argv)
    try:
        return analyze(args)
    except (FileNotFoundError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
