"""
KENOBRAIN — Outcome Aggregator

Joins hypergeometric probabilities with a payout table:

  EV(picks)          = Σ_hits P(hits | picks) × mult(picks, hits)
  RTP                = EV
  House edge         = 1 − EV
  P(win)             = Σ P(hits | picks) over hit levels with mult > 0
  Best odds to win   = 1 / P(win)   ("impossible" when P(win) = 0)

Hit levels sharing a multiplier all count toward P(win). A pick level the
table does not mention is valid and simply has EV 0.
"""

from __future__ import annotations

import logging
from fractions import Fraction

from keno_engine.odds import DEFAULT_PLACES, odds_description, validate_places
from keno_engine.paytable import PayoutTable
from keno_engine.probability import (
    KENO_80_20, GameConstants, _hit_probability, validate_hits, validate_picks,
)
from keno_engine.report import GameReport, OutcomeReport, PickSummary

logger = logging.getLogger("kenobrain.engine")


def compute_outcome(picks: int, hits: int, payout_table: PayoutTable,
                    constants: GameConstants = KENO_80_20,
                    odds_places: int = DEFAULT_PLACES) -> OutcomeReport:
    """Probability, odds, payout and EV contribution for one (picks, hits)."""
    picks = validate_picks(picks, constants)
    hits = validate_hits(hits)
    validate_places(odds_places)
    return _outcome(picks, hits, payout_table, constants, odds_places)


def _outcome(picks: int, hits: int, payout_table: PayoutTable,
             constants: GameConstants, odds_places: int) -> OutcomeReport:
    # inputs validated by the public entry points
    probability = _hit_probability(picks, hits, constants)
    mult = payout_table.multiplier(picks, hits)
    return OutcomeReport(
        picks=picks,
        hits=hits,
        probability=probability,
        odds_description=odds_description(probability, odds_places),
        payout_multiplier=mult,
        ev_contribution=probability * mult,
    )


def compute_pick_summary(picks: int, payout_table: PayoutTable,
                         constants: GameConstants = KENO_80_20,
                         odds_places: int = DEFAULT_PLACES) -> PickSummary:
    picks = validate_picks(picks, constants)
    validate_places(odds_places)

    outcomes = []
    total_ev = Fraction(0)
    max_payout = Fraction(0)
    win_probability = Fraction(0)

    for hits in range(picks + 1):
        o = _outcome(picks, hits, payout_table, constants, odds_places)
        outcomes.append(o)
        total_ev += o.ev_contribution
        if o.payout_multiplier > max_payout:
            max_payout = o.payout_multiplier
        if o.pays:
            win_probability += o.probability

    return PickSummary(
        picks=picks,
        outcomes=tuple(outcomes),
        total_ev=total_ev,
        max_payout=max_payout,
        combined_win_probability=win_probability,
        odds_places=odds_places,
    )


def compute_game_report(payout_table: PayoutTable,
                        constants: GameConstants = KENO_80_20,
                        odds_places: int = DEFAULT_PLACES) -> GameReport:
    """Analyse every pick level 1..max_picks of the game."""
    summaries = tuple(
        compute_pick_summary(picks, payout_table, constants, odds_places)
        for picks in constants.pick_range
    )
    unpaid = [s.picks for s in summaries if not s.has_payout]
    if unpaid:
        logger.debug(f"No payouts configured for picks {unpaid}")
    return GameReport(pick_summaries=summaries, constants=constants)
