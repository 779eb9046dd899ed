from __future__ import annotations
from dataclasses import asdict, dataclass
from typing import Mapping

import pandas as pd

from matka.datasets.bets_store import frame_to_bets
from matka.engine.matching import SESSION_TYPES, match_bet, match_day_bet
from matka.engine.payout import determine_win
from matka.errors import UnsupportedBetType
from matka.logging import get_logger
from matka.types import (
    Bet,
    DayResult,
    DeclaredResult,
    MatchOutcome,
    StarlineBetType,
    canonical,
)

log = get_logger(__name__)

PENDING, WON, LOST = "pending", "won", "lost"


@dataclass(frozen=True)
class Settlement:
    bet_id: str
    bet_type: str
    bet_number: str
    bet_amount: float
    status: str
    win_amount: int
    result: str | None


def _settled(bet: Bet, outcome: MatchOutcome, rates: Mapping, result: str) -> Settlement:
    win = determine_win(outcome, bet.bet_type, bet.bet_amount, rates)
    return Settlement(
        bet_id=bet.bet_id,
        bet_type=bet.bet_type.value,
        bet_number=bet.bet_number,
        bet_amount=bet.bet_amount,
        status=WON if win.is_winner else LOST,
        win_amount=win.win_amount,
        result=result,
    )


def _pending(bet: Bet) -> Settlement:
    return Settlement(bet.bet_id, bet.bet_type.value, bet.bet_number, bet.bet_amount, PENDING, 0, None)


def settle_session_bets(bets: list[Bet], day: DayResult, rates: Mapping) -> list[Settlement]:
    """Settle main-game bets against whatever sessions of the day are declared.

    Bets that depend on an undeclared session stay pending so the next
    declaration can pick them up.
    """
    out: list[Settlement] = []
    for bet in bets:
        if isinstance(bet.bet_type, StarlineBetType):
            raise UnsupportedBetType(f"Starline bet {bet.bet_id or bet.bet_number} in a main-game settlement")
        outcome = match_day_bet(bet.bet_type, bet.bet_number, day, session=bet.session)
        if outcome is None:
            out.append(_pending(bet))
            continue
        if canonical(bet.bet_type) in SESSION_TYPES:
            label = day.for_session(bet.session).label()
        else:
            label = day.label()
        out.append(_settled(bet, outcome, rates, label))
    _log_counts("session", out)
    return out


def settle_starline_bets(bets: list[Bet], result: DeclaredResult, rates: Mapping) -> list[Settlement]:
    out: list[Settlement] = []
    for bet in bets:
        if not isinstance(bet.bet_type, StarlineBetType):
            raise UnsupportedBetType(f"Main-game bet {bet.bet_id or bet.bet_number} in a starline settlement")
        outcome = match_bet(bet.bet_type, bet.bet_number, result)
        out.append(_settled(bet, outcome, rates, result.pana_like))
    _log_counts("starline", out)
    return out


def _log_counts(kind: str, out: list[Settlement]) -> None:
    won = sum(s.status == WON for s in out)
    pending = sum(s.status == PENDING for s in out)
    log.info("Settled %s bets (%s): won=%s lost=%s pending=%s", len(out), kind, won, len(out) - won - pending, pending)


def settle_frame(
    bets_df: pd.DataFrame,
    rates: Mapping,
    day: DayResult | None = None,
    starline: DeclaredResult | None = None,
) -> pd.DataFrame:
    """One row per bet with status and win_amount; pass day for main game, starline otherwise."""
    if (day is None) == (starline is None):
        raise ValueError("Pass exactly one of day or starline")
    bets = frame_to_bets(bets_df)
    if starline is not None:
        rows = settle_starline_bets(bets, starline, rates)
    else:
        rows = settle_session_bets(bets, day, rates)
    cols = list(Settlement.__dataclass_fields__)
    return pd.DataFrame([asdict(s) for s in rows], columns=cols)
