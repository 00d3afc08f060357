"""Read-only payout table: picks → hits → multiplier."""

from __future__ import annotations

import math
from fractions import Fraction
from types import MappingProxyType
from typing import Mapping

from keno_engine.errors import PayoutTableError


def to_multiplier(value) -> Fraction:
    """Coerce a payout cell into an exact, non-negative Fraction.

    Floats go through their shortest repr so 3.8 becomes exactly 19/5.
    """
    if isinstance(value, bool):
        raise PayoutTableError(f"Invalid multiplier: {value!r}")
    try:
        if isinstance(value, float):
            if not math.isfinite(value):
                raise PayoutTableError(f"Multiplier must be finite, got {value!r}")
            mult = Fraction(repr(value))
        elif isinstance(value, str):
            mult = Fraction(value.strip())
        else:
            mult = Fraction(value)
    except (TypeError, ValueError, ZeroDivisionError) as e:
        raise PayoutTableError(f"Invalid multiplier {value!r}: {e}") from e
    if mult < 0:
        raise PayoutTableError(f"Multiplier must be non-negative, got {value!r}")
    return mult


class PayoutTable:
    """Immutable view over a payout schedule.

    Keys absent from the table mean "no payout" (multiplier 0), never an error.
    """

    __slots__ = ("_rows",)

    def __init__(self, rows: Mapping | None = None):
        """Normalise `rows` into int keys and exact Fraction multipliers.

        Keys may be ints or numeric strings. Raises PayoutTableError for
        keys or multipliers that cannot be used.
        """
        normalised = {}
        for picks, hits_map in (rows or {}).items():
            row = {}
            for hits, value in (hits_map or {}).items():
                row[_to_key("hits", hits)] = to_multiplier(value)
            normalised[_to_key("picks", picks)] = MappingProxyType(row)
        self._rows = MappingProxyType(normalised)

    @classmethod
    def from_mapping(cls, data: Mapping) -> "PayoutTable":
        """Build from a plain nested mapping (int or numeric-string keys)."""
        return cls(data)

    def multiplier(self, picks: int, hits: int) -> Fraction:
        return self._rows.get(picks, {}).get(hits, Fraction(0))

    def row(self, picks: int) -> Mapping[int, Fraction]:
        return self._rows.get(picks, MappingProxyType({}))

    @property
    def picks_levels(self) -> list[int]:
        return sorted(self._rows)

    def __contains__(self, picks) -> bool:
        return picks in self._rows

    def __len__(self) -> int:
        return len(self._rows)

    def __eq__(self, other) -> bool:
        if not isinstance(other, PayoutTable):
            return NotImplemented
        return ({p: dict(r) for p, r in self._rows.items()}
                == {p: dict(r) for p, r in other._rows.items()})

    def __repr__(self) -> str:
        return f"PayoutTable(picks={self.picks_levels})"

    def to_dict(self) -> dict:
        """JSON shape: {"<picks>": {"<hits>": float}}."""
        return {
            str(p): {str(h): _plain_number(m) for h, m in sorted(row.items())}
            for p, row in sorted(self._rows.items())
        }


def _plain_number(value: Fraction):
    if value.denominator == 1:
        return int(value)
    return float(value)


def _to_key(name: str, key) -> int:
    if isinstance(key, bool):
        raise PayoutTableError(f"Invalid {name} key: {key!r}")
    try:
        return int(key)
    except (TypeError, ValueError) as e:
        raise PayoutTableError(f"Invalid {name} key: {key!r}") from e
