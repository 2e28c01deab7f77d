import random
import unittest

from connect4.ai.difficulty import Difficulty, HARD
from connect4.ai.minimax_agent import MinimaxAgent
from connect4.ai.random_agent import RandomAgent
from connect4.core.board import Board
from connect4.core.rules import check_winner
from connect4.errors import NoLegalMove
from connect4.game.controller import play_game
from connect4.game.state import GameState
from tests.helpers import DRAW_ROWS, FEW_OPEN_ROWS, board, snapshot


class TestMinimaxAgent(unittest.TestCase):
    def test_plays_for_the_side_to_move(self):
        agent = MinimaxAgent(difficulty=Difficulty("d2", 2, 0.0))
        b = board("OO.....", "XXX....")
        # X to move takes the win, O to move blocks; both at column 3
        self.assertEqual(agent.choose_move(GameState(b, "X")), 3)
        self.assertEqual(agent.choose_move(GameState(b, "O")), 3)

    def test_last_info(self):
        agent = MinimaxAgent(name="Hard", difficulty=HARD)
        b = Board.from_rows(FEW_OPEN_ROWS)
        before = snapshot(b)
        move = agent.choose_move(GameState(b, "O"))

        info = agent.last_info
        self.assertEqual(b.grid, before)
        self.assertEqual(info["difficulty"], "hard")
        self.assertEqual(info["depth"], 6)
        self.assertEqual(info["move_col"], int(move) + 1)
        self.assertFalse(info["random"])
        self.assertGreater(info["nodes"], 0)
        self.assertGreaterEqual(info["time_ms"], 1)

    def test_random_move_info(self):
        agent = MinimaxAgent(difficulty=Difficulty("always", 3, 1.0), rng=random.Random(1))
        agent.choose_move(GameState(Board(), "X"))
        self.assertTrue(agent.last_info["random"])
        self.assertEqual(agent.last_info["depth"], 0)
        self.assertEqual(agent.last_info["nodes"], 0)
        self.assertIsNone(agent.last_info["eval"])

    def test_default_difficulty(self):
        self.assertEqual(MinimaxAgent().difficulty.name, "medium")


class TestRandomAgent(unittest.TestCase):
    def test_only_legal_columns(self):
        agent = RandomAgent(rng=random.Random(3))
        b = Board.from_rows(["OOXX..."] + DRAW_ROWS[1:])
        for _ in range(50):
            self.assertIn(agent.choose_move(GameState(b, "X")), (4, 5, 6))

    def test_full_board(self):
        with self.assertRaises(NoLegalMove):
            RandomAgent().choose_move(GameState(Board.from_rows(DRAW_ROWS), "X"))


class ColumnAgent:
    def __init__(self, col: int) -> None:
        self.col = col

    def choose_move(self, state):
        return self.col


class TestPlayGame(unittest.TestCase):
    def test_records_the_winning_line(self):
        rec = play_game(ColumnAgent(0), ColumnAgent(1))
        self.assertEqual(rec.outcome, "X")
        self.assertEqual(rec.moves, [0, 1, 0, 1, 0, 1, 0])
        self.assertEqual(rec.win_line, [(0, 0), (1, 0), (2, 0), (3, 0)])

    def test_random_game_is_reproducible(self):
        first = play_game(RandomAgent(), RandomAgent(), seed=11)
        second = play_game(RandomAgent(), RandomAgent(), seed=11)
        self.assertEqual(first.moves, second.moves)
        self.assertEqual(first.outcome, second.outcome)

    def test_record_matches_the_board(self):
        rec = play_game(RandomAgent(), RandomAgent(), opening_moves=2, seed=5)
        self.assertIn(rec.outcome, ("X", "O", "D"))

        pieces = sum(1 for row in rec.board.grid for p in row if p is not None)
        self.assertEqual(pieces, len(rec.moves))
        winner = check_winner(rec.board)
        self.assertEqual(rec.outcome, winner if winner is not None else "D")
        if winner is None:
            self.assertEqual(rec.win_line, [])
        else:
            self.assertEqual(len(rec.win_line), 4)
            self.assertTrue(all(rec.board.grid[r][c] == winner for r, c in rec.win_line))
        # opening moves are not credited to the agents
        agent_moves = rec.stats["X"]["moves"] + rec.stats["O"]["moves"]
        self.assertEqual(agent_moves, len(rec.moves) - 2)

    def test_minimax_stats_are_collected(self):
        mm = MinimaxAgent(difficulty=Difficulty("d1", 1, 0.0))
        rec = play_game(mm, RandomAgent(), seed=3)
        self.assertGreater(rec.stats["X"]["moves"], 0)
        self.assertGreater(rec.stats["X"]["nodes"], 0)
        self.assertEqual(rec.stats["O"]["nodes"], 0)
        self.assertEqual(rec.stats["X"]["random_moves"], 0)


if __name__ == "__main__":
    unittest.main()
