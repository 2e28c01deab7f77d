from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Union

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Difficulty:
    name: str
    depth: int
    random_factor: float  # chance of playing a random legal column instead of searching

    def __post_init__(self) -> None:
        if isinstance(self.depth, bool) or not isinstance(self.depth, int) or self.depth < 1:
            raise ValueError(f"Search depth must be an integer >= 1, got {self.depth!r}.")
        if not 0.0 <= float(self.random_factor) <= 1.0:
            raise ValueError(f"random_factor must be in [0, 1], got {self.random_factor}.")


EASY = Difficulty("easy", depth=2, random_factor=0.4)
MEDIUM = Difficulty("medium", depth=4, random_factor=0.2)
HARD = Difficulty("hard", depth=6, random_factor=0.0)

DIFFICULTIES: Dict[str, Difficulty] = {d.name: d for d in (EASY, MEDIUM, HARD)}


def get_difficulty(level: Union[str, Difficulty]) -> Difficulty:
    if isinstance(level, Difficulty):
        return level

    key = str(level).strip().lower()
    try:
        d = DIFFICULTIES[key]
    except KeyError:
        choices = ", ".join(DIFFICULTIES)
        raise ValueError(f"Unknown difficulty {level!r}; choose one of: {choices}.") from None

    logger.info("AI difficulty set to %s (depth=%d, random_factor=%.2f)", d.name, d.depth, d.random_factor)
    return d
