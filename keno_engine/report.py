"""
KENOBRAIN — Report Model

Structured results handed to presentation layers (rich console, JSON API).
Rationals stay exact on the dataclasses; `to_dict()` converts to floats.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from fractions import Fraction
from typing import Optional

from keno_engine.odds import odds_description
from keno_engine.probability import KENO_80_20, GameConstants


@dataclass(frozen=True)
class OutcomeReport:
    """One (picks, hits) row of the analysis."""
    picks: int
    hits: int
    probability: Fraction
    odds_description: str
    payout_multiplier: Fraction
    ev_contribution: Fraction          # probability × payout_multiplier

    @property
    def pays(self) -> bool:
        return self.payout_multiplier > 0

    def to_dict(self) -> dict:
        return {
            "picks": self.picks,
            "hits": self.hits,
            "probability": float(self.probability),
            "probability_pct": float(self.probability * 100),
            "odds": self.odds_description,
            "payout": float(self.payout_multiplier),
            "ev_contribution": float(self.ev_contribution),
        }


@dataclass(frozen=True)
class PickSummary:
    """Aggregate metrics for one pick level."""
    picks: int
    outcomes: tuple[OutcomeReport, ...]
    total_ev: Fraction
    max_payout: Fraction
    combined_win_probability: Fraction
    odds_places: int = 2

    @property
    def rtp(self) -> Fraction:
        return self.total_ev

    @property
    def house_edge(self) -> Fraction:
        return 1 - self.total_ev

    @property
    def has_payout(self) -> bool:
        return self.max_payout > 0

    @property
    def probability_total(self) -> Fraction:
        return sum((o.probability for o in self.outcomes), Fraction(0))

    @property
    def best_odds_to_win(self) -> str:
        return odds_description(self.combined_win_probability, self.odds_places)

    def to_dict(self, include_outcomes: bool = True) -> dict:
        d = {
            "picks": self.picks,
            "expected_value": float(self.total_ev),
            "house_edge": float(self.house_edge),
            "house_edge_pct": round(float(self.house_edge) * 100, 4),
            "rtp": float(self.rtp),
            "rtp_pct": round(float(self.rtp) * 100, 4),
            "max_payout": float(self.max_payout),
            "combined_win_probability": float(self.combined_win_probability),
            "best_odds_to_win": self.best_odds_to_win,
        }
        if include_outcomes:
            d["outcomes"] = [o.to_dict() for o in self.outcomes]
        return d


@dataclass(frozen=True)
class GameReport:
    """Full analysis of a payout table across every pick level."""
    pick_summaries: tuple[PickSummary, ...]
    constants: GameConstants = field(default=KENO_80_20)

    def summary_for(self, picks: int) -> Optional[PickSummary]:
        for s in self.pick_summaries:
            if s.picks == picks:
                return s
        return None

    @property
    def paying_levels(self) -> list[PickSummary]:
        return [s for s in self.pick_summaries if s.has_payout]

    @property
    def best_rtp(self) -> Optional[PickSummary]:
        levels = self.paying_levels
        # ties go to the lower pick count
        return max(levels, key=lambda s: (s.rtp, -s.picks)) if levels else None

    @property
    def worst_rtp(self) -> Optional[PickSummary]:
        levels = self.paying_levels
        return min(levels, key=lambda s: (s.rtp, s.picks)) if levels else None

    @property
    def easiest_win(self) -> Optional[PickSummary]:
        levels = self.paying_levels
        if not levels:
            return None
        return max(levels, key=lambda s: (s.combined_win_probability, -s.picks))

    def overview(self) -> dict:
        best, worst, easiest = self.best_rtp, self.worst_rtp, self.easiest_win
        return {
            "pick_levels": len(self.pick_summaries),
            "paying_levels": len(self.paying_levels),
            "best_rtp_picks": best.picks if best else None,
            "best_rtp_pct": round(float(best.rtp) * 100, 4) if best else None,
            "worst_rtp_picks": worst.picks if worst else None,
            "worst_rtp_pct": round(float(worst.rtp) * 100, 4) if worst else None,
            "easiest_win_picks": easiest.picks if easiest else None,
            "easiest_win_odds": easiest.best_odds_to_win if easiest else None,
        }

    def to_dict(self) -> dict:
        return {
            "game": {
                "pool_size": self.constants.pool_size,
                "drawn_count": self.constants.drawn_count,
                "not_drawn_count": self.constants.not_drawn_count,
                "max_picks": self.constants.max_picks,
            },
            "summary": self.overview(),
            "picks": [s.to_dict() for s in self.pick_summaries],
        }
