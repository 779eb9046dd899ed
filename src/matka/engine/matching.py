from __future__ import annotations

from matka.errors import UnsupportedBetType
from matka.logging import get_logger
from matka.types import (
    BetType,
    DayResult,
    DeclaredResult,
    MainBetType,
    MatchOutcome,
    canonical,
)
from matka.utils.strings import norm

log = get_logger(__name__)

PANA_TYPES = frozenset({MainBetType.SINGLE_PANNA, MainBetType.DOUBLE_PANNA, MainBetType.TRIPLE_PANNA})
SESSION_TYPES = PANA_TYPES | {MainBetType.SINGLE}
DAY_TYPES = frozenset({MainBetType.JODI, MainBetType.HALF_SANGAM, MainBetType.FULL_SANGAM})


def _eq(declared: object, bet_number: str) -> MatchOutcome:
    return MatchOutcome.MATCHED if norm(declared) == bet_number else MatchOutcome.NOT_MATCHED


def match_bet(bet_type: str | BetType, bet_number: object, result: DeclaredResult) -> MatchOutcome:
    """Match a bet against one declared result.

    Plain string equality after trimming: "07" never matches "7". Pana bets
    compare against the pana (or the Starline winning number) whatever their
    declared repetition pattern. Jodi and sangam bets need both sessions of a
    day, so they come back UNSUPPORTED here; settle them with match_day_bet.
    """
    bt = canonical(bet_type)
    n = norm(bet_number)

    if bt in DAY_TYPES:
        return MatchOutcome.UNSUPPORTED
    if not n:
        return MatchOutcome.NOT_MATCHED
    if bt is MainBetType.SINGLE:
        return _eq(result.digit, n)
    return _eq(result.pana_like, n)


def is_winning_bet(bet_type: str | BetType, bet_number: object, result: DeclaredResult) -> bool:
    outcome = match_bet(bet_type, bet_number, result)
    if outcome is MatchOutcome.UNSUPPORTED:
        raise UnsupportedBetType(f"{norm(getattr(bet_type, 'value', bet_type))} cannot be settled against a single result")
    log.debug("match %s %r vs %s -> %s", bet_type, bet_number, result.label(), outcome.value)
    return outcome is MatchOutcome.MATCHED


def match_day_bet(
    bet_type: str | BetType, bet_number: object, day: DayResult, session: str | None = None
) -> MatchOutcome | None:
    """Match a main-game bet against a day's open/close results.

    Returns None while a result the bet depends on is still undeclared.
    Single and pana bets settle against their own session; jodi and sangam
    bets need both sessions.
    """
    bt = canonical(bet_type)
    n = norm(bet_number)

    if bt in SESSION_TYPES:
        res = day.for_session(session)
        if res is None:
            return None
        return match_bet(bt, n, res)

    if not day.complete:
        return None
    if not n:
        return MatchOutcome.NOT_MATCHED

    if bt is MainBetType.JODI:
        return _eq(day.jodi, n)

    if bt is MainBetType.HALF_SANGAM:
        parts = n.split("|")
        if len(parts) != 3:
            return MatchOutcome.NOT_MATCHED
        side, digit, pana = parts
        if side == "openDigitClosePanna":
            ok = day.open.digit == digit and day.close.pana_like == pana
        elif side == "closeDigitOpenPanna":
            ok = day.close.digit == digit and day.open.pana_like == pana
        else:
            ok = False
        return MatchOutcome.MATCHED if ok else MatchOutcome.NOT_MATCHED

    parts = n.split("|")
    if len(parts) != 2:
        return MatchOutcome.NOT_MATCHED
    open_pana, close_pana = parts
    ok = day.open.pana_like == open_pana and day.close.pana_like == close_pana
    return MatchOutcome.MATCHED if ok else MatchOutcome.NOT_MATCHED
