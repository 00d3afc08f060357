"""
KENOBRAIN — Hypergeometric Probability Engine

A keno draw is sampling without replacement from a pool split into two
classes: the numbers the house draws and the ones it does not. For a ticket
with `picks` spots the chance of exactly `hits` matches is

    P(hits | picks) = C(drawn, hits) × C(not_drawn, picks − hits) / C(pool, picks)

Every value is kept as an exact `Fraction`; floats appear only when a report
is serialised.
"""

from __future__ import annotations

from dataclasses import dataclass
from fractions import Fraction

from pydantic import BaseModel, ConfigDict, Field, model_validator

from keno_engine.combinatorics import binomial
from keno_engine.errors import DomainError


# ═══════════════════════════════════════════════════════════════
# Game Constants
# ═══════════════════════════════════════════════════════════════

class GameConstants(BaseModel):
    """Shape of a hypergeometric draw game. Frozen once built."""
    model_config = ConfigDict(frozen=True)

    pool_size: int = Field(80, ge=1)          # Numbers in the pool (1-80)
    drawn_count: int = Field(20, ge=0)        # House draws 20 numbers
    max_picks: int = Field(10, ge=1)          # Player picks 1-10 spots

    @model_validator(mode="after")
    def _check_shape(self) -> "GameConstants":
        if self.drawn_count > self.pool_size:
            raise ValueError(
                f"drawn_count ({self.drawn_count}) exceeds pool_size ({self.pool_size})")
        if self.max_picks > self.pool_size:
            raise ValueError(
                f"max_picks ({self.max_picks}) exceeds pool_size ({self.pool_size})")
        return self

    @property
    def not_drawn_count(self) -> int:
        return self.pool_size - self.drawn_count

    @property
    def pick_range(self) -> range:
        return range(1, self.max_picks + 1)


KENO_80_20 = GameConstants()


@dataclass(frozen=True)
class OutcomeProbability:
    picks: int
    hits: int
    probability: Fraction


# ═══════════════════════════════════════════════════════════════
# Validation
# ═══════════════════════════════════════════════════════════════

def _require_int(name: str, value) -> int:
    # bool is an int subclass, but True spots is never meaningful
    if isinstance(value, bool) or not isinstance(value, int):
        raise DomainError(f"{name} must be an integer, got {value!r}")
    return value


def validate_picks(picks, constants: GameConstants = KENO_80_20) -> int:
    picks = _require_int("picks", picks)
    if not 1 <= picks <= constants.max_picks:
        raise DomainError(
            f"picks must be between 1 and {constants.max_picks}, got {picks}")
    return picks


def validate_hits(hits) -> int:
    hits = _require_int("hits", hits)
    if hits < 0:
        raise DomainError(f"hits must be non-negative, got {hits}")
    return hits


# ═══════════════════════════════════════════════════════════════
# Probability
# ═══════════════════════════════════════════════════════════════

def hit_probability(picks: int, hits: int,
                    constants: GameConstants = KENO_80_20) -> Fraction:
    """Exact P(exactly `hits` matches | `picks` spots).

    Raises DomainError for picks outside 1..max_picks or negative hits.
    Combinatorially impossible outcomes return Fraction(0).
    """
    picks = validate_picks(picks, constants)
    hits = validate_hits(hits)
    return _hit_probability(picks, hits, constants)


def _hit_probability(picks: int, hits: int, constants: GameConstants) -> Fraction:
    # callers have already validated picks and hits
    misses = picks - hits
    if hits > picks or hits > constants.drawn_count or misses > constants.not_drawn_count:
        return Fraction(0)

    ways_to_hit = binomial(constants.drawn_count, hits)
    ways_to_miss = binomial(constants.not_drawn_count, misses)
    total_ways = binomial(constants.pool_size, picks)

    return Fraction(ways_to_hit * ways_to_miss, total_ways)


def outcome_probability(picks: int, hits: int,
                        constants: GameConstants = KENO_80_20) -> OutcomeProbability:
    return OutcomeProbability(picks, hits, hit_probability(picks, hits, constants))


def hit_distribution(picks: int,
                     constants: GameConstants = KENO_80_20) -> list[OutcomeProbability]:
    """All outcomes for a pick level, ordered by ascending hits."""
    picks = validate_picks(picks, constants)
    return [OutcomeProbability(picks, h, _hit_probability(picks, h, constants))
            for h in range(picks + 1)]
