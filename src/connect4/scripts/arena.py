from __future__ import annotations

import csv
import logging
import time
from concurrent.futures import ProcessPoolExecutor, as_completed
from functools import partial
from pathlib import Path
from typing import Dict, Iterable, List, Sequence, Tuple

from connect4.ai.difficulty import DIFFICULTIES, get_difficulty
from connect4.ai.minimax_agent import MinimaxAgent
from connect4.ai.random_agent import RandomAgent
from connect4.game.controller import play_game

from .arena_format import fmt_ppg, fmt_row, hr, style, term_width
from .arena_stats import Tally, Team

logger = logging.getLogger(__name__)

CSV_COLUMNS = [
    "name",
    "games", "wins", "draws", "losses",
    "points", "ppg",
    "strength_wilson_lcb",
    "ms_per_move", "random_rate", "nodes_per_search", "cutoffs_per_node",
    "moves", "time_ms", "nodes", "cutoffs", "random_moves",
]

# (A name, B name, A plays X, outcome, per-side stats)
GameResult = Tuple[str, str, bool, str, Dict[str, Dict[str, int]]]


def build_roster(difficulties: Iterable[str] = tuple(DIFFICULTIES), include_random: bool = True) -> List[Team]:
    teams: List[Team] = []
    if include_random:
        teams.append(Team("Random", partial(RandomAgent, name="Random")))
    for level in difficulties:
        d = get_difficulty(level)
        name = f"Minimax {d.name} (d{d.depth} p{d.random_factor:.2f})"
        teams.append(Team(name, partial(MinimaxAgent, name=name, difficulty=d)))
    return teams


def score_game(a: Tally, b: Tally, outcome: str, a_is_x: bool) -> None:
    if outcome == "D":
        a.record("D")
        b.record("D")
        return
    a_won = (outcome == "X") == a_is_x
    a.record("W" if a_won else "L")
    b.record("L" if a_won else "W")


def run_pairings_batch(args) -> List[GameResult]:
    (batch_items, games_per_pair, opening_moves) = args
    out: List[GameResult] = []
    for (a_name, b_name, a_make, b_make, base_seed) in batch_items:
        for g in range(games_per_pair):
            # alternate colours
            if g % 2 == 0:
                rec = play_game(a_make(), b_make(), opening_moves=opening_moves, seed=base_seed + g)
                out.append((a_name, b_name, True, rec.outcome, rec.stats))
            else:
                rec = play_game(b_make(), a_make(), opening_moves=opening_moves, seed=base_seed + g)
                out.append((a_name, b_name, False, rec.outcome, rec.stats))
    return out


def chunked(lst, size: int):
    for i in range(0, len(lst), size):
        yield lst[i : i + size]


def run_arena(
    teams: Sequence[Team],
    games_per_pair: int = 2,
    seed: int = 1234,
    max_workers: int = 0,
    batch_pairings: int = 2,
    opening_moves: int = 2,
) -> Dict[str, Tally]:
    """
    Play every pairing of `teams` and tally the results per team.

    With max_workers > 0 batches of pairings run in a process pool,
    otherwise everything runs in this process.
    """
    tallies: Dict[str, Tally] = {t.name: Tally() for t in teams}

    pair_items = []
    n = len(teams)
    for i in range(n):
        for j in range(i + 1, n):
            base_seed = seed + i * 10_000 + j * 100
            pair_items.append((teams[i].name, teams[j].name, teams[i].make, teams[j].make, base_seed))

    batches = [(chunk, games_per_pair, opening_moves) for chunk in chunked(pair_items, max(1, batch_pairings))]
    logger.info("Arena: %d teams, %d pairings, %d games each", n, len(pair_items), games_per_pair)

    def apply(results: List[GameResult]) -> None:
        for (a_name, b_name, a_is_x, outcome, stats) in results:
            a, b = tallies[a_name], tallies[b_name]
            score_game(a, b, outcome, a_is_x=a_is_x)
            a.absorb(stats["X" if a_is_x else "O"])
            b.absorb(stats["O" if a_is_x else "X"])

    if max_workers > 0:
        with ProcessPoolExecutor(max_workers=max_workers) as ex:
            futures = [ex.submit(run_pairings_batch, b) for b in batches]
            for fut in as_completed(futures):
                apply(fut.result())
    else:
        for b in batches:
            apply(run_pairings_batch(b))

    return tallies


def print_standings(tallies: Dict[str, Tally], z: float = 1.28) -> None:
    w = term_width(100)
    rows = sorted(tallies.items(), key=lambda r: r[1].strength(z), reverse=True)
    widths = [3, max([18] + [len(name) for name, _ in rows]), 8, 5, 8, 7, 5, 9, 6]

    print("\n" + style("=== Arena standings ===", "bold"))
    print(style(hr("═", w), "dim"))
    header = ["rk", "agent", "strength", "ppg", "W-D-L", "ms/mv", "rand%", "nodes/mv", "cut%"]
    print(style(fmt_row(header, widths), "dim"))
    for i, (name, t) in enumerate(rows, start=1):
        print(fmt_row([
            str(i),
            name,
            f"{t.strength(z):.4f}",
            fmt_ppg(t.ppg),
            f"{t.wins}-{t.draws}-{t.losses}",
            f"{t.ms_per_move:.1f}",
            f"{100 * t.random_rate:.1f}",
            f"{t.nodes_per_search:.0f}",
            f"{100 * t.cutoffs_per_node:.1f}",
        ], widths))
    print(style(hr("─", w), "dim"))


def export_csv(tallies: Dict[str, Tally], out_dir: Path, z: float = 1.28) -> Path:
    out_dir.mkdir(parents=True, exist_ok=True)
    ts = time.strftime("%Y%m%d_%H%M%S")
    out_path = out_dir / f"arena_results_{ts}.csv"

    with open(out_path, "w", newline="") as f:
        w = csv.writer(f)
        w.writerow(CSV_COLUMNS)
        for name, t in tallies.items():
            w.writerow([
                name,
                t.games, t.wins, t.draws, t.losses,
                t.points, round(t.ppg, 6),
                round(t.strength(z), 6),
                round(t.ms_per_move, 3), round(t.random_rate, 6),
                round(t.nodes_per_search, 3), round(t.cutoffs_per_node, 6),
                t.moves, t.time_ms, t.nodes, t.cutoffs, t.random_moves,
            ])

    logger.info("Wrote arena results to %s", out_path)
    return out_path
