"""
KENOBRAIN — Keno Odds & Payout Engine

Exact hypergeometric odds for keno-style draws and the expected value,
house edge and RTP of a payout schedule.

Usage:
    from keno_engine import PayoutTable, compute_game_report
    table = PayoutTable.from_mapping({1: {1: 3.8}})
    report = compute_game_report(table)
    report.summary_for(1).rtp        # Fraction(19, 20)
"""

from keno_engine.aggregator import compute_game_report, compute_outcome, compute_pick_summary
from keno_engine.combinatorics import binomial, factorial
from keno_engine.errors import DomainError, KenoError, PayoutFileError, PayoutTableError
from keno_engine.odds import IMPOSSIBLE, odds_description
from keno_engine.paytable import PayoutTable
from keno_engine.probability import (
    KENO_80_20, GameConstants, OutcomeProbability, hit_distribution,
    hit_probability, outcome_probability,
)
from keno_engine.report import GameReport, OutcomeReport, PickSummary

__all__ = [
    "binomial", "factorial",
    "GameConstants", "KENO_80_20", "OutcomeProbability",
    "hit_probability", "outcome_probability", "hit_distribution",
    "PayoutTable", "odds_description", "IMPOSSIBLE",
    "OutcomeReport", "PickSummary", "GameReport",
    "compute_outcome", "compute_pick_summary", "compute_game_report",
    "KenoError", "DomainError", "PayoutTableError", "PayoutFileError",
]
