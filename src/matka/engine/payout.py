from __future__ import annotations
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Mapping

from matka.errors import ConfigurationGap, InvalidStake
from matka.types import BetType, MatchOutcome, WinDetermination, parse_bet_type

def _to_decimal(x: object, what: str, error: type[Exception] = InvalidStake) -> Decimal:
    try:
        d = Decimal(str(x))
    except (InvalidOperation, ValueError) as e:
        raise error(f"{what} is not a number: {x!r}") from e
    if not d.is_finite():
        raise error(f"{what} is not a number: {x!r}")
    return d

def round_half_up(x: Decimal) -> int:
    return int(x.quantize(Decimal("1"), rounding=ROUND_HALF_UP))

def rate_for(bet_type: str | BetType, payout_rates: Mapping) -> Decimal:
    """Multiplier for a bet type; the table may be keyed by enum member or tag."""
    bt = parse_bet_type(bet_type)
    if bt in payout_rates:
        raw = payout_rates[bt]
    elif bt.value in payout_rates:
        raw = payout_rates[bt.value]
    else:
        raise ConfigurationGap(f"No payout rate configured for {bt.value!r}")
    rate = _to_decimal(raw, f"Rate for {bt.value}", error=ConfigurationGap)
    if rate <= 0:
        raise ConfigurationGap(f"Rate for {bt.value} must be positive, got {raw!r}")
    return rate

def compute_win_amount(bet_type: str | BetType, bet_amount: float | int | str, payout_rates: Mapping) -> int:
    stake = _to_decimal(bet_amount, "Bet amount")
    if stake <= 0:
        raise InvalidStake(f"Bet amount must be positive, got {bet_amount!r}")
    return round_half_up(stake * rate_for(bet_type, payout_rates))

def determine_win(
    outcome: MatchOutcome, bet_type: str | BetType, bet_amount: float | int | str, payout_rates: Mapping
) -> WinDetermination:
    if outcome is MatchOutcome.MATCHED:
        return WinDetermination(True, compute_win_amount(bet_type, bet_amount, payout_rates), outcome)
    return WinDetermination(False, 0, outcome)
