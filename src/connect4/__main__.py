from __future__ import annotations

import argparse
import logging
import random
import sys
from pathlib import Path

from connect4.ai.difficulty import DIFFICULTIES, get_difficulty
from connect4.ai.search import SearchStats, choose_move
from connect4.config import AI_PLAYER, DEFAULT_DIFFICULTY, LOG_FORMAT, RESULTS_DIR
from connect4.core.board import Board
from connect4.errors import Connect4Error


def _add_common(ap: argparse.ArgumentParser) -> None:
    ap.add_argument("--log-level", type=str, default="WARNING", help="Logging level (DEBUG, INFO, WARNING, ...)")


def build_argparser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="connect4", description="Connect-4 minimax engine.")
    sub = ap.add_subparsers(dest="cmd", required=True)

    mv = sub.add_parser("move", help="Print the engine's column for a board.")
    mv.add_argument(
        "--board",
        type=str,
        required=True,
        help="Rows top-first separated by '/', cells '.', 'X' or 'O' (e.g. '......./.../...XO...').",
    )
    mv.add_argument("--difficulty", type=str, default=DEFAULT_DIFFICULTY, choices=sorted(DIFFICULTIES))
    mv.add_argument("--side", type=str, default=AI_PLAYER, choices=["X", "O"], help="Side the engine plays")
    mv.add_argument("--seed", type=int, default=None, help="Seed for the random-move branch")
    _add_common(mv)

    ar = sub.add_parser("arena", help="Round robin between difficulty presets.")
    ar.add_argument("--difficulties", nargs="+", default=list(DIFFICULTIES), choices=sorted(DIFFICULTIES))
    ar.add_argument("--no-random", action="store_true", help="Leave the random baseline out of the roster")
    ar.add_argument("--games-per-pair", type=int, default=2)
    ar.add_argument("--opening-moves", type=int, default=2, help="Random moves played before the agents take over")
    ar.add_argument("--seed", type=int, default=1234)
    ar.add_argument("--workers", type=int, default=0, help="Process pool size (0 runs in-process)")
    ar.add_argument("--results-dir", type=str, default=RESULTS_DIR)
    ar.add_argument("--no-export", action="store_true", help="Do not write the results CSV")
    _add_common(ar)

    return ap


def run_move(args: argparse.Namespace) -> int:
    board = Board.from_rows(args.board.split("/"))
    difficulty = get_difficulty(args.difficulty)
    stats = SearchStats()

    col = choose_move(board, difficulty, args.side, random.Random(args.seed), stats)

    print(int(col))
    if stats.randomized:
        print("random move", file=sys.stderr)
    else:
        print(f"eval={stats.best_score} nodes={stats.nodes} cutoffs={stats.cutoffs}", file=sys.stderr)
    return 0


def run_arena_cmd(args: argparse.Namespace) -> int:
    from connect4.scripts.arena import build_roster, export_csv, print_standings, run_arena

    roster = build_roster(args.difficulties, include_random=not args.no_random)
    if len(roster) < 2:
        print("Need at least two teams.", file=sys.stderr)
        return 2

    tallies = run_arena(
        roster,
        games_per_pair=args.games_per_pair,
        seed=args.seed,
        max_workers=args.workers,
        opening_moves=args.opening_moves,
    )
    print_standings(tallies)

    if not args.no_export:
        out_path = export_csv(tallies, Path(args.results_dir))
        print(f"Wrote CSV: {out_path}")
    return 0


def main(argv: list[str] | None = None) -> int:
    ap = build_argparser()
    args = ap.parse_args(argv)

    try:
        logging.basicConfig(level=args.log_level.upper(), format=LOG_FORMAT)
        if args.cmd == "move":
            return run_move(args)
        return run_arena_cmd(args)
    except (Connect4Error, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
