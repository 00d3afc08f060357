#!/usr/bin/env python3
"""
KENOBRAIN — Unit & Integration Test Suite

Run: python tests.py
     python tests.py -v              # verbose
     python tests.py TestOddsDescription   # run specific class

Test categories:
  TestCombinatorics     — factorial, binomial, symmetry, big values
  TestHypergeometric    — exact probabilities, guards, domain errors
  TestGameConstants     — parameter object validation, other games
  TestOddsDescription   — "1 in X" rounding policy
  TestPayoutTable       — read-only view, coercion, missing entries
  TestOutcomeAggregator — EV / house edge / RTP / win probability
  TestGameReport        — whole-game report, idempotence, JSON shape
  TestPayoutLoader      — CSV parsing rules, file listing
  TestCli               — console and JSON output, exit codes
"""

import json
import sys
import tempfile
import unittest
from fractions import Fraction
from pathlib import Path
from unittest.mock import patch

# ── Ensure project root is on sys.path ──
PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from keno_engine import (
    IMPOSSIBLE, KENO_80_20, DomainError, GameConstants, PayoutFileError,
    PayoutTable, PayoutTableError, binomial, compute_game_report,
    compute_outcome, factorial, hit_distribution, hit_probability,
    odds_description,
)
from keno_engine.aggregator import compute_pick_summary
from keno_engine.odds import odds_value

SAMPLE_CSV = """Picks,0,1,2,3,4,5,6,7,8,9,10
1,,3.8,,,,,,,,,
2,,,15,,,,,,,,
4,,,1,5,72,,,,,,
"""


# ============================================================
# Combinatorics
# ============================================================

class TestCombinatorics(unittest.TestCase):

    def test_factorial_small(self):
        self.assertEqual(factorial(0), 1)
        self.assertEqual(factorial(1), 1)
        self.assertEqual(factorial(5), 120)
        self.assertEqual(factorial(-3), 1)

    def test_factorial_exceeds_64_bits(self):
        """80! is exact, far beyond any fixed-width integer."""
        f80 = factorial(80)
        self.assertGreater(f80, 2 ** 64)
        self.assertEqual(f80 // factorial(79), 80)

    def test_binomial_known_values(self):
        self.assertEqual(binomial(80, 10), 1_646_492_110_120)
        self.assertEqual(binomial(20, 10), 184_756)
        self.assertEqual(binomial(80, 2), 3160)
        self.assertEqual(binomial(60, 0), 1)
        self.assertEqual(binomial(60, 60), 1)

    def test_binomial_out_of_range_is_zero(self):
        self.assertEqual(binomial(20, 21), 0)
        self.assertEqual(binomial(20, -1), 0)
        self.assertEqual(binomial(0, 1), 0)

    def test_binomial_symmetry(self):
        for n in (0, 1, 7, 20, 60, 80):
            for k in range(n + 1):
                self.assertEqual(binomial(n, k), binomial(n, n - k), f"C({n},{k})")

    def test_binomial_pascal_rule(self):
        for k in range(1, 11):
            self.assertEqual(binomial(80, k), binomial(79, k - 1) + binomial(79, k))


# ============================================================
# Hypergeometric probability
# ============================================================

class TestHypergeometric(unittest.TestCase):

    def test_single_pick(self):
        self.assertEqual(hit_probability(1, 0), Fraction(3, 4))
        self.assertEqual(hit_probability(1, 1), Fraction(1, 4))

    def test_two_picks(self):
        self.assertEqual(hit_probability(2, 0), Fraction(1770, 3160))
        self.assertEqual(hit_probability(2, 1), Fraction(1200, 3160))
        self.assertEqual(hit_probability(2, 2), Fraction(190, 3160))

    def test_ten_of_ten(self):
        p = hit_probability(10, 10)
        self.assertEqual(p, Fraction(184_756, 1_646_492_110_120))
        self.assertAlmostEqual(float(p), 1.122118951e-07, delta=1e-15)

    def test_distribution_sums_to_one(self):
        """Hit counts 0..picks partition the sample space."""
        for picks in range(1, 11):
            total = sum(o.probability for o in hit_distribution(picks))
            self.assertEqual(total, 1, f"picks={picks}")
            self.assertAlmostEqual(float(total), 1.0, delta=1e-9)

    def test_distribution_is_ordered(self):
        dist = hit_distribution(6)
        self.assertEqual([o.hits for o in dist], list(range(7)))
        self.assertTrue(all(0 <= o.probability <= 1 for o in dist))

    def test_hits_above_picks_is_zero(self):
        self.assertEqual(hit_probability(3, 4), 0)
        self.assertEqual(hit_probability(10, 25), 0)

    def test_guards_on_wide_game(self):
        """hits > drawn or misses > not_drawn are impossible, not errors."""
        game = GameConstants(pool_size=30, drawn_count=5, max_picks=30)
        self.assertEqual(hit_probability(10, 6, game), 0)       # only 5 drawn
        self.assertEqual(hit_probability(27, 1, game), 0)       # 26 misses > 25
        self.assertGreater(hit_probability(10, 5, game), 0)

    def test_invalid_picks_rejected(self):
        for picks in (0, 11, -1):
            with self.assertRaises(DomainError):
                hit_probability(picks, 0)

    def test_negative_hits_rejected(self):
        with self.assertRaises(DomainError):
            hit_probability(5, -1)

    def test_non_integer_rejected(self):
        with self.assertRaises(DomainError):
            hit_probability(2.0, 1)
        with self.assertRaises(DomainError):
            hit_probability(True, 1)
        with self.assertRaises(DomainError):
            hit_probability(2, "1")

    def test_domain_error_is_value_error(self):
        with self.assertRaises(ValueError):
            hit_probability(12, 0)


# ============================================================
# Game constants
# ============================================================

class TestGameConstants(unittest.TestCase):

    def test_defaults(self):
        self.assertEqual(KENO_80_20.pool_size, 80)
        self.assertEqual(KENO_80_20.drawn_count, 20)
        self.assertEqual(KENO_80_20.not_drawn_count, 60)
        self.assertEqual(list(KENO_80_20.pick_range), list(range(1, 11)))

    def test_invariant_holds(self):
        g = GameConstants(pool_size=40, drawn_count=10, max_picks=8)
        self.assertEqual(g.drawn_count + g.not_drawn_count, g.pool_size)

    def test_frozen(self):
        with self.assertRaises(Exception):
            KENO_80_20.pool_size = 90

    def test_rejects_impossible_shapes(self):
        with self.assertRaises(ValueError):
            GameConstants(pool_size=10, drawn_count=20)
        with self.assertRaises(ValueError):
            GameConstants(pool_size=5, drawn_count=2, max_picks=6)
        with self.assertRaises(ValueError):
            GameConstants(pool_size=0)

    def test_other_game_sums_to_one(self):
        game = GameConstants(pool_size=40, drawn_count=10, max_picks=8)
        for picks in game.pick_range:
            total = sum(o.probability for o in hit_distribution(picks, game))
            self.assertEqual(total, 1)


# ============================================================
# Odds formatting
# ============================================================

class TestOddsDescription(unittest.TestCase):

    def test_sentinels(self):
        self.assertEqual(odds_description(0), IMPOSSIBLE)
        self.assertEqual(odds_description(Fraction(0)), "impossible")
        self.assertEqual(odds_description(1), "1 in 1")

    def test_whole_numbers_drop_decimals(self):
        self.assertEqual(odds_description(Fraction(1, 4)), "1 in 4")
        self.assertEqual(odds_description(0.25), "1 in 4")
        self.assertEqual(odds_description(Fraction(3, 4)), "1 in 1.33")

    def test_rounding_and_separators(self):
        self.assertEqual(odds_description(Fraction(190, 3160)), "1 in 16.63")
        self.assertEqual(odds_description(hit_probability(10, 10)), "1 in 8,911,711.18")

    def test_half_even(self):
        # 1/p = 2.125 exactly → 2.12 under half-even; 2.375 → 2.38
        self.assertEqual(odds_description(Fraction(8, 17)), "1 in 2.12")
        self.assertEqual(odds_description(Fraction(8, 19)), "1 in 2.38")

    def test_places(self):
        self.assertEqual(odds_description(Fraction(3, 4), places=4), "1 in 1.3333")
        self.assertEqual(odds_description(Fraction(3, 4), places=0), "1 in 1")

    def test_negative_places_rejected(self):
        for bad in (-1, 1.5, True, "2"):
            with self.assertRaises(ValueError, msg=repr(bad)):
                odds_description(Fraction(3, 4), places=bad)
        with self.assertRaises(ValueError):
            odds_value(Fraction(3, 4), -1)
        with self.assertRaises(ValueError):
            compute_outcome(1, 1, PayoutTable(), odds_places=-1)

    def test_many_places(self):
        text = odds_description(Fraction(3, 4), places=70)
        self.assertEqual(text, "1 in 1." + "3" * 70)
        value = odds_value(Fraction(1, 3), 70)
        self.assertEqual(value, 3)
        self.assertEqual(-value.as_tuple().exponent, 70)
        big = odds_description(hit_probability(10, 10), places=70)
        self.assertTrue(big.startswith("1 in 8,911,711.176"))


# ============================================================
# Payout table
# ============================================================

class TestPayoutTable(unittest.TestCase):

    def test_missing_entries_are_zero(self):
        t = PayoutTable.from_mapping({1: {1: 3.8}})
        self.assertEqual(t.multiplier(1, 0), 0)
        self.assertEqual(t.multiplier(7, 3), 0)
        self.assertEqual(t.multiplier(1, 1), Fraction(19, 5))

    def test_string_keys_and_values(self):
        t = PayoutTable.from_mapping({"2": {"2": "15"}, "3": {"3": "27.5"}})
        self.assertEqual(t.multiplier(2, 2), 15)
        self.assertEqual(t.multiplier(3, 3), Fraction(55, 2))
        self.assertEqual(t.picks_levels, [2, 3])

    def test_does_not_alias_caller_data(self):
        source = {1: {1: 3.8}}
        t = PayoutTable.from_mapping(source)
        source[1][1] = 100
        source[2] = {2: 10}
        self.assertEqual(t.multiplier(1, 1), Fraction(19, 5))
        self.assertNotIn(2, t)

    def test_read_only(self):
        t = PayoutTable.from_mapping({1: {1: 3.8}})
        with self.assertRaises(TypeError):
            t.row(1)[1] = Fraction(5)

    def test_rejects_bad_values(self):
        for bad in (-1, float("nan"), float("inf"), "abc", None):
            with self.assertRaises(PayoutTableError, msg=repr(bad)):
                PayoutTable.from_mapping({1: {1: bad}})
        with self.assertRaises(PayoutTableError):
            PayoutTable.from_mapping({"one": {1: 2}})

    def test_constructor_normalises(self):
        t = PayoutTable({"1": {"1": 3.8}, 2: {2: "15"}})
        self.assertEqual(t.multiplier(1, 1), Fraction(19, 5))
        self.assertEqual(t.multiplier(2, 2), 15)
        self.assertEqual(t.picks_levels, [1, 2])
        self.assertEqual(t, PayoutTable.from_mapping({1: {1: "3.8"}, 2: {2: 15}}))

    def test_constructor_gives_exact_ev(self):
        report = compute_game_report(PayoutTable({1: {1: 3.8}}))
        self.assertEqual(report.summary_for(1).total_ev, Fraction(19, 20))
        o = compute_outcome(1, 1, PayoutTable({1: {1: "3.8"}}))
        self.assertEqual(o.ev_contribution, Fraction(19, 20))

    def test_constructor_rejects_bad_values(self):
        with self.assertRaises(PayoutTableError):
            PayoutTable({1: {1: -5}})
        with self.assertRaises(PayoutTableError):
            PayoutTable({1: {"x": 2}})
        with self.assertRaises(PayoutTableError):
            PayoutTable({True: {1: 2}})

    def test_to_dict(self):
        t = PayoutTable.from_mapping({2: {2: 15}, 1: {1: 3.8}})
        self.assertEqual(t.to_dict(), {"1": {"1": 3.8}, "2": {"2": 15}})


# ============================================================
# Aggregation
# ============================================================

class TestOutcomeAggregator(unittest.TestCase):

    def setUp(self):
        self.table = PayoutTable.from_mapping({1: {1: 3.8}, 2: {2: 15}, 3: {2: 2, 3: 2}})

    def test_compute_outcome(self):
        o = compute_outcome(1, 1, self.table)
        self.assertEqual(o.probability, Fraction(1, 4))
        self.assertEqual(o.payout_multiplier, Fraction(19, 5))
        self.assertEqual(o.ev_contribution, Fraction(19, 20))
        self.assertEqual(o.odds_description, "1 in 4")
        self.assertTrue(o.pays)

    def test_outcome_without_payout(self):
        o = compute_outcome(1, 0, self.table)
        self.assertEqual(o.payout_multiplier, 0)
        self.assertEqual(o.ev_contribution, 0)
        self.assertFalse(o.pays)

    def test_compute_outcome_validates(self):
        with self.assertRaises(DomainError):
            compute_outcome(0, 0, self.table)
        with self.assertRaises(DomainError):
            compute_outcome(3, -2, self.table)

    def test_single_pick_ev(self):
        """3.8x on 1-of-1: EV 0.95, house edge 5%, RTP 95%."""
        s = compute_pick_summary(1, self.table)
        self.assertEqual(s.total_ev, Fraction(19, 20))
        self.assertEqual(s.house_edge, Fraction(1, 20))
        self.assertEqual(s.rtp, Fraction(19, 20))
        self.assertAlmostEqual(float(s.house_edge) * 100, 5.0)
        self.assertEqual(s.max_payout, Fraction(19, 5))
        self.assertEqual(s.combined_win_probability, Fraction(1, 4))
        self.assertEqual(s.best_odds_to_win, "1 in 4")

    def test_outcomes_ordered_by_hits(self):
        s = compute_pick_summary(3, self.table)
        self.assertEqual([o.hits for o in s.outcomes], [0, 1, 2, 3])
        self.assertEqual(s.probability_total, 1)

    def test_equal_multipliers_both_count(self):
        s = compute_pick_summary(3, self.table)
        expected = hit_probability(3, 2) + hit_probability(3, 3)
        self.assertEqual(s.combined_win_probability, expected)
        self.assertEqual(s.max_payout, 2)

    def test_unpaid_level(self):
        s = compute_pick_summary(9, self.table)
        self.assertEqual(s.total_ev, 0)
        self.assertEqual(s.house_edge, 1)
        self.assertEqual(s.rtp, 0)
        self.assertEqual(s.max_payout, 0)
        self.assertEqual(s.combined_win_probability, 0)
        self.assertEqual(s.best_odds_to_win, "impossible")
        self.assertFalse(s.has_payout)

    def test_ev_matches_manual_sum(self):
        s = compute_pick_summary(2, self.table)
        self.assertEqual(s.total_ev, Fraction(190, 3160) * 15)

    def test_validates_once_per_call(self):
        import keno_engine.aggregator as agg
        import keno_engine.probability as prob
        with patch.object(agg, "validate_hits", wraps=agg.validate_hits) as outer, \
                patch.object(prob, "validate_hits", wraps=prob.validate_hits) as inner:
            compute_outcome(3, 2, self.table)
            self.assertEqual(outer.call_count, 1)
            self.assertEqual(inner.call_count, 0)

            outer.reset_mock()
            s = compute_pick_summary(10, self.table)
            self.assertEqual(outer.call_count, 0)
            self.assertEqual(inner.call_count, 0)
        self.assertEqual(s.probability_total, 1)
        self.assertEqual([o.hits for o in s.outcomes], list(range(11)))


# ============================================================
# Game report
# ============================================================

class TestGameReport(unittest.TestCase):

    def setUp(self):
        self.table = PayoutTable.from_mapping({1: {1: 3.8}, 2: {2: 15}, 10: {0: 2, 10: 100000}})

    def test_covers_every_pick_level(self):
        report = compute_game_report(self.table)
        self.assertEqual([s.picks for s in report.pick_summaries], list(range(1, 11)))

    def test_empty_table(self):
        report = compute_game_report(PayoutTable())
        for s in report.pick_summaries:
            self.assertEqual(s.total_ev, 0)
            self.assertEqual(s.best_odds_to_win, IMPOSSIBLE)
        self.assertIsNone(report.best_rtp)
        self.assertEqual(report.overview()["paying_levels"], 0)

    def test_idempotent(self):
        self.assertEqual(compute_game_report(self.table), compute_game_report(self.table))
        self.assertEqual(compute_game_report(self.table).to_dict(),
                         compute_game_report(self.table).to_dict())

    def test_summary_for(self):
        report = compute_game_report(self.table)
        self.assertEqual(report.summary_for(1).total_ev, Fraction(19, 20))
        self.assertIsNone(report.summary_for(11))

    def test_overview(self):
        report = compute_game_report(self.table)
        ov = report.overview()
        self.assertEqual(ov["paying_levels"], 3)
        self.assertEqual(ov["best_rtp_picks"], 1)
        self.assertEqual(ov["best_rtp_pct"], 95.0)
        self.assertEqual(ov["easiest_win_picks"], 1)

    def test_custom_constants(self):
        game = GameConstants(pool_size=40, drawn_count=10, max_picks=4)
        report = compute_game_report(PayoutTable.from_mapping({1: {1: 3}}), game)
        self.assertEqual(len(report.pick_summaries), 4)
        self.assertEqual(report.summary_for(1).total_ev, Fraction(3, 4))

    def test_to_dict_is_json(self):
        data = compute_game_report(self.table).to_dict()
        text = json.dumps(data)
        self.assertIn("best_odds_to_win", text)
        self.assertEqual(data["game"]["not_drawn_count"], 60)
        pick1 = data["picks"][0]
        self.assertAlmostEqual(pick1["rtp"], 0.95)
        self.assertAlmostEqual(pick1["house_edge_pct"], 5.0)
        self.assertEqual(len(pick1["outcomes"]), 2)
        self.assertEqual(data["picks"][3]["best_odds_to_win"], "impossible")


# ============================================================
# Payout loader
# ============================================================

class TestPayoutLoader(unittest.TestCase):

    def test_parse_text(self):
        from tools.payout_loader import parse_payouts_text
        t = parse_payouts_text(SAMPLE_CSV)
        self.assertEqual(t.picks_levels, [1, 2, 4])
        self.assertEqual(t.multiplier(1, 1), Fraction(19, 5))
        self.assertEqual(t.multiplier(4, 4), 72)
        self.assertEqual(t.multiplier(4, 0), 0)

    def test_skips_malformed_rows_and_cells(self):
        from tools.payout_loader import parse_payouts_text
        text = ("Picks,0,1,2\n"
                ",,5\n"
                "abc,1,2\n"
                "2,,x,15\n"
                "3,,-4,\n")
        with self.assertLogs("kenobrain.loader", level="WARNING"):
            t = parse_payouts_text(text)
        self.assertEqual(t.picks_levels, [2, 3])
        self.assertEqual(dict(t.row(2)), {2: Fraction(15)})
        self.assertEqual(dict(t.row(3)), {})

    def test_later_row_replaces_earlier(self):
        from tools.payout_loader import parse_payouts_text
        t = parse_payouts_text("Picks,0,1\n1,,2\n1,,3\n")
        self.assertEqual(t.multiplier(1, 1), 3)

    def test_file_roundtrip_and_listing(self):
        from tools.payout_loader import list_payout_files, parse_payouts_csv
        with tempfile.TemporaryDirectory() as tmp:
            d = Path(tmp)
            (d / "b_table.csv").write_text(SAMPLE_CSV)
            (d / "a_table.csv").write_text(SAMPLE_CSV)
            (d / "notes.txt").write_text("ignore me")
            files = list_payout_files(d)
            self.assertEqual(files, [
                {"filename": "a_table.csv", "name": "a_table"},
                {"filename": "b_table.csv", "name": "b_table"},
            ])
            t = parse_payouts_csv(d / "a_table.csv")
            self.assertEqual(t.multiplier(2, 2), 15)

    def test_missing_directory_lists_nothing(self):
        from tools.payout_loader import list_payout_files
        self.assertEqual(list_payout_files("/nonexistent/keno/payouts"), [])

    def test_missing_file_raises(self):
        from tools.payout_loader import parse_payouts_csv, resolve_payout_file
        with self.assertRaises(PayoutFileError):
            parse_payouts_csv("/nonexistent/payouts.csv")
        with self.assertRaises(PayoutFileError):
            resolve_payout_file("nope.csv", "/nonexistent")

    def test_bundled_tables_load(self):
        from tools.payout_loader import parse_payouts_csv
        t = parse_payouts_csv(PROJECT_ROOT / "payouts" / "payouts_original.csv")
        report = compute_game_report(t)
        self.assertEqual(report.summary_for(1).total_ev, Fraction(19, 20))
        for s in report.pick_summaries:
            self.assertTrue(s.has_payout)
            self.assertLess(s.rtp, 1, f"picks={s.picks}")


# ============================================================
# CLI
# ============================================================

class TestCli(unittest.TestCase):

    def _run(self, *argv):
        from rich.console import Console
        from tools.keno_cli import main
        console = Console(record=True, width=200)
        code = main(list(argv), console=console)
        return code, console.export_text()

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.dir = Path(self._tmp.name)
        (self.dir / "sample.csv").write_text(SAMPLE_CSV)

    def tearDown(self):
        self._tmp.cleanup()

    def test_console_report(self):
        code, out = self._run("sample.csv", "--payouts-dir", str(self.dir))
        self.assertEqual(code, 0)
        self.assertIn("KENO ODDS & PAYOUT ANALYSIS", out)
        self.assertIn("PICK 1 NUMBER", out)
        self.assertIn("SUMMARY BY PICKS", out)
        self.assertIn("House Edge: 5.00%", out)
        self.assertIn("1 in 4", out)

    def test_single_level(self):
        code, out = self._run("sample.csv", "--payouts-dir", str(self.dir), "--picks", "2")
        self.assertEqual(code, 0)
        self.assertIn("PICK 2 NUMBERS", out)
        self.assertNotIn("PICK 1 NUMBER", out)

    def test_json_output(self):
        code, out = self._run("sample.csv", "--payouts-dir", str(self.dir), "--json")
        self.assertEqual(code, 0)
        data = json.loads(out)
        self.assertEqual(len(data["picks"]), 10)
        self.assertAlmostEqual(data["picks"][0]["rtp"], 0.95)

    def test_list(self):
        code, out = self._run("--list", "--payouts-dir", str(self.dir))
        self.assertEqual(code, 0)
        self.assertIn("sample.csv", out)

    def test_missing_file(self):
        code, out = self._run("missing.csv", "--payouts-dir", str(self.dir))
        self.assertEqual(code, 1)
        self.assertIn("not found", out)

    def test_bad_constants(self):
        code, _ = self._run("sample.csv", "--payouts-dir", str(self.dir),
                            "--pool", "10", "--drawn", "20")
        self.assertEqual(code, 1)
        code, _ = self._run("sample.csv", "--payouts-dir", str(self.dir), "--picks", "11")
        self.assertEqual(code, 1)

    def test_negative_decimals(self):
        code, out = self._run("sample.csv", "--payouts-dir", str(self.dir), "--decimals", "-1")
        self.assertEqual(code, 1)
        self.assertIn("❌", out)
        self.assertIn("--decimals", out)

    def test_many_decimals(self):
        code, out = self._run("sample.csv", "--payouts-dir", str(self.dir),
                              "--decimals", "70", "--json")
        self.assertEqual(code, 0)
        data = json.loads(out)
        self.assertEqual(data["picks"][0]["best_odds_to_win"], "1 in 4")


if __name__ == "__main__":
    unittest.main()
