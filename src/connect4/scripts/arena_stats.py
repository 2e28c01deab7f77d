from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Mapping

# Per-side counters reported by the game controller
SIDE_COUNTERS = ("moves", "time_ms", "nodes", "cutoffs", "random_moves")


@dataclass(frozen=True)
class Team:
    name: str
    make: Callable[[], object]  # called inside worker processes: partial, not lambda


def wilson_lcb(p: float, n: int, z: float) -> float:
    """
    Lower bound of the Wilson interval for a success rate `p` over `n` games.
    """
    if n <= 0:
        return 0.0
    p = min(1.0, max(0.0, p))
    zz_n = z * z / n
    spread = z * math.sqrt(p * (1.0 - p) / n + zz_n / (4.0 * n))
    return max(0.0, (p + zz_n / 2.0 - spread) / (1.0 + zz_n))


@dataclass
class Tally:
    """Running totals for one roster entry over an arena run."""
    games: int = 0
    wins: int = 0
    draws: int = 0
    losses: int = 0

    moves: int = 0
    time_ms: int = 0
    nodes: int = 0
    cutoffs: int = 0
    random_moves: int = 0

    def record(self, result: str) -> None:
        """result is "W", "D" or "L" from this team's side."""
        if result not in ("W", "D", "L"):
            raise ValueError(f"Unknown result {result!r}.")
        self.games += 1
        if result == "W":
            self.wins += 1
        elif result == "D":
            self.draws += 1
        else:
            self.losses += 1

    def absorb(self, side: Mapping[str, int]) -> None:
        for key in SIDE_COUNTERS:
            setattr(self, key, getattr(self, key) + int(side[key]))

    @property
    def points(self) -> float:
        return self.wins + 0.5 * self.draws

    @property
    def ppg(self) -> float:
        return self.points / self.games if self.games else 0.0

    @property
    def ms_per_move(self) -> float:
        return self.time_ms / self.moves if self.moves else 0.0

    @property
    def random_rate(self) -> float:
        return self.random_moves / self.moves if self.moves else 0.0

    @property
    def nodes_per_search(self) -> float:
        searched = self.moves - self.random_moves
        return self.nodes / searched if searched > 0 else 0.0

    @property
    def cutoffs_per_node(self) -> float:
        return self.cutoffs / self.nodes if self.nodes else 0.0

    def strength(self, z: float = 1.28) -> float:
        return wilson_lcb(self.ppg, self.games, z)
