# src/connect4/config.py

from __future__ import annotations

ROWS = 6
COLS = 7
CONNECT_N = 4

# Side the engine plays when the caller does not say (the AI moves second)
AI_PLAYER = "O"

# Difficulty used when none is given (see connect4.ai.difficulty)
DEFAULT_DIFFICULTY = "medium"

# Arena output
RESULTS_DIR = "data/results"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
