from __future__ import annotations
from functools import lru_cache

from matka.errors import UnsupportedBetType
from matka.types import BetType, MainBetType, canonical
from matka.utils.strings import classify_pana

DRAW_SPACE = 1000  # every pana 000-999 is a possible draw

@lru_cache(maxsize=None)
def _panas(kind: str) -> tuple[str, ...]:
    return tuple(n for n in (f"{i:03d}" for i in range(DRAW_SPACE)) if kind == "any" or classify_pana(n) == kind)

def possible_numbers(bet_type: str | BetType) -> list[str]:
    """Every bet number a bet type accepts. Single pana accepts any 3 digits."""
    bt = canonical(bet_type)
    if bt is MainBetType.SINGLE:
        return [str(d) for d in range(10)]
    if bt is MainBetType.JODI:
        return [f"{i:02d}" for i in range(100)]
    if bt is MainBetType.SINGLE_PANNA:
        return list(_panas("any"))
    if bt is MainBetType.DOUBLE_PANNA:
        return list(_panas("double"))
    if bt is MainBetType.TRIPLE_PANNA:
        return list(_panas("triple"))
    raise UnsupportedBetType(f"No enumerable number space for {bt.value}")

def win_probability(bet_type: str | BetType) -> float:
    bt = canonical(bet_type)
    if bt is MainBetType.TRIPLE_PANNA:
        # 10 triples, but the draw can land on any of the 1000 panas
        return 1 / DRAW_SPACE
    return 1 / len(possible_numbers(bt))

def expected_return(bet_type: str | BetType, multiplier: float) -> float:
    """Expected payout per unit staked on one number."""
    return win_probability(bet_type) * multiplier
