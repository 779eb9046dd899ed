from __future__ import annotations
from pathlib import Path

import pandas as pd

from matka.datasets.schemas import BET_COLS, missing_columns
from matka.engine.validation import validate_bet_number_format, validate_bet_session
from matka.errors import FormatError
from matka.logging import get_logger
from matka.types import Bet, BetType, ValidationResult, parse_bet_type

log = get_logger(__name__)


def read_bets(path: str | Path) -> pd.DataFrame:
    df = pd.read_csv(path, dtype=str, keep_default_na=False)
    missing = missing_columns(df.columns, BET_COLS)
    if missing:
        raise ValueError(f"Missing columns in bets csv: {missing}")
    df = df[BET_COLS].copy()
    df["bet_amount"] = pd.to_numeric(df["bet_amount"], errors="raise")
    return df


def frame_to_bets(df: pd.DataFrame) -> list[Bet]:
    return [
        Bet(
            bet_type=parse_bet_type(r["bet_type"]),
            bet_number=r["bet_number"],
            bet_amount=float(r["bet_amount"]),
            bet_id=r["bet_id"],
            session=r["session"] or None,
        )
        for _, r in df.iterrows()
    ]


def _check_row(bet_type: str | BetType, bet_number: str, session: str | None) -> ValidationResult:
    check = validate_bet_number_format(bet_type, bet_number)
    if not check.valid:
        return check
    return validate_bet_session(bet_type, session)


def reject_invalid(df: pd.DataFrame) -> tuple[pd.DataFrame, pd.DataFrame]:
    """Split a bets frame into (accepted, rejected) by bet number format and session."""
    checks = [_check_row(t, n, s) for t, n, s in zip(df["bet_type"], df["bet_number"], df["session"])]
    ok = pd.Series([c.valid for c in checks], index=df.index, dtype=bool)
    rejected = df[~ok].copy()
    rejected["reason"] = [c.reason for c in checks if not c.valid]
    if not rejected.empty:
        log.warning("Rejected %s of %s bets with malformed numbers or sessions", len(rejected), len(df))
    return df[ok].copy(), rejected


def append_bet(bet: Bet, game: str, game_date: str, out_path: str | Path) -> None:
    """Stake-time entry point: a malformed number or missing session never reaches the store."""
    check = _check_row(bet.bet_type, bet.bet_number, bet.session)
    if not check.valid:
        raise FormatError(check.reason)
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    row = pd.DataFrame(
        [
            {
                "bet_id": bet.bet_id,
                "game": game,
                "game_date": game_date,
                "session": bet.session or "",
                "bet_type": bet.bet_type.value,
                "bet_number": bet.bet_number.strip(),
                "bet_amount": bet.bet_amount,
            }
        ]
    )
    row.to_csv(out_path, mode="a", header=not out_path.exists(), index=False)
    log.info("Stored bet %s -> %s", bet.bet_id or "?", out_path)
