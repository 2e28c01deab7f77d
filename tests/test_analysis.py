import io
import math
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import pandas as pd

from connect4_analysis.__main__ import main
from connect4_analysis.charts import plot_random_rate, plot_search_cost, plot_strength
from connect4_analysis.report import depth_growth, difficulty_report, latest_results, load_arena_csv

CSV_TEXT = """name,games,wins,draws,losses,strength_wilson_lcb,moves,time_ms,nodes,cutoffs,random_moves
Random,6,0,0,6,0.0,60,60,0,0,0
Minimax hard (d6 p0.00),6,6,0,0,0.8,40,10000,200000,50000,0
Minimax easy (d2 p0.40),6,3,0,3,0.3,50,200,300,30,20
"""


class TestReport(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)
        self.csv_path = self.tmp / "arena_results_20260101_120000.csv"
        self.csv_path.write_text(CSV_TEXT)

    def tearDown(self):
        self._tmp.cleanup()

    def test_engine_columns(self):
        df = load_arena_csv(self.csv_path).set_index("name")
        easy = df.loc["Minimax easy (d2 p0.40)"]
        self.assertEqual((easy["depth"], easy["random_factor"]), (2, 0.4))
        self.assertAlmostEqual(easy["random_rate"], 0.4)
        self.assertAlmostEqual(easy["random_drift"], 0.0)
        self.assertAlmostEqual(easy["nodes_per_search"], 10.0)
        self.assertAlmostEqual(easy["cutoffs_per_node"], 0.1)
        self.assertAlmostEqual(easy["ppg"], 0.5)

        rnd = df.loc["Random"]
        self.assertTrue(math.isnan(rnd["depth"]))
        self.assertEqual((rnd["nodes_per_search"], rnd["cutoffs_per_node"]), (0.0, 0.0))

    def test_latest_results(self):
        (self.tmp / "arena_results_20250101_000000.csv").write_text(CSV_TEXT)
        self.assertEqual(latest_results(self.tmp), self.csv_path)
        with self.assertRaises(FileNotFoundError):
            latest_results(self.tmp / "missing")

    def test_missing_counters(self):
        bad = self.tmp / "bad.csv"
        bad.write_text("name,games,wins\nRandom,1,1\n")
        with self.assertRaisesRegex(ValueError, "moves"):
            load_arena_csv(bad)

    def test_report_orders_by_depth(self):
        report = difficulty_report(load_arena_csv(self.csv_path))
        self.assertEqual(
            list(report["name"]),
            ["Minimax easy (d2 p0.40)", "Minimax hard (d6 p0.00)", "Random"],
        )
        self.assertIn("random_drift", report.columns)

    def test_depth_growth(self):
        growth = depth_growth(load_arena_csv(self.csv_path))
        self.assertEqual(list(growth["depth"]), [2, 6])
        self.assertTrue(math.isnan(growth["growth"].iloc[0]))
        self.assertAlmostEqual(growth["growth"].iloc[1], 5000.0 / 10.0)

        only_random = load_arena_csv(self.csv_path)
        only_random = only_random[only_random["name"] == "Random"]
        self.assertTrue(depth_growth(only_random).empty)

    def test_charts_are_written(self):
        df = load_arena_csv(self.csv_path)
        outdir = self.tmp / "figures"
        for plot in (plot_strength, plot_random_rate, plot_search_cost):
            with self.subTest(plot=plot.__name__):
                path = plot(df, outdir, show=False)
                self.assertTrue(path.exists())

        baseline = df[df["name"] == "Random"]
        self.assertIsNone(plot_random_rate(baseline, outdir, show=False))
        self.assertIsNone(plot_search_cost(baseline, outdir, show=False))
        self.assertIsNone(plot_strength(pd.DataFrame(), outdir, show=False))

    def test_cli(self):
        out = io.StringIO()
        with redirect_stdout(out):
            code = main(["analyze", "--results-dir", str(self.tmp), "--no-plots"])
        self.assertEqual(code, 0)
        self.assertIn("Difficulty report", out.getvalue())
        self.assertIn("Search cost by depth", out.getvalue())

        with redirect_stdout(io.StringIO()):
            self.assertEqual(main(["analyze", "--results-dir", str(self.tmp / "missing")]), 2)


if __name__ == "__main__":
    unittest.main()
