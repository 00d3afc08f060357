"""Probability → "1 in X" odds strings.

Rounding policy: X = 1/p is computed from the exact probability, rounded to
`places` decimals with ROUND_HALF_EVEN, shown with thousands separators and
without trailing fractional zeros ("1 in 4", "1 in 16.63").
"""

from __future__ import annotations

from decimal import Decimal
from fractions import Fraction

IMPOSSIBLE = "impossible"
DEFAULT_PLACES = 2


def validate_places(places) -> int:
    if isinstance(places, bool) or not isinstance(places, int) or places < 0:
        raise ValueError(f"decimal places must be a non-negative integer, got {places!r}")
    return places


def odds_value(probability, places: int = DEFAULT_PLACES) -> Decimal | None:
    """1/p rounded per the policy above, or None when p == 0."""
    places = validate_places(places)
    p = Fraction(probability)
    if p == 0:
        return None
    # round() on a Fraction is exact and rounds half to even
    scaled = round((1 / p) * 10 ** places)
    return Decimal(f"{scaled}e-{places}")


def odds_description(probability, places: int = DEFAULT_PLACES) -> str:
    places = validate_places(places)
    p = Fraction(probability)
    if p == 0:
        return IMPOSSIBLE
    if p == 1:
        return "1 in 1"
    text = f"{odds_value(p, places):,.{places}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return f"1 in {text}"
