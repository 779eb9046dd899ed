from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd

from matka.datasets.schemas import RESULT_COLS, RESULT_KEY, validate_result_row
from matka.errors import ResultAlreadyDeclared
from matka.types import DayResult, DeclaredResult

logger = logging.getLogger(__name__)


def read_results(path: str | Path) -> pd.DataFrame:
    path = Path(path)
    if not path.exists():
        return pd.DataFrame(columns=RESULT_COLS)

    # str dtype keeps leading zeros ("007", "0")
    df = pd.read_csv(path, dtype=str, keep_default_na=False)
    for c in RESULT_COLS:
        if c not in df.columns:
            df[c] = ""

    return df[RESULT_COLS].copy()


def upsert_results(rows: list[dict], out_path: str | Path) -> None:
    """
    Append/merge declared results into a CSV at out_path.

    - If rows empty, still write a header-only CSV when none exists.
    - Deduplicate on (game, game_date, session); a re-declared session replaces the old one.
    - Sort by game_date, game, session.
    """
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    if not rows:
        if not out_path.exists():
            pd.DataFrame(columns=RESULT_COLS).to_csv(out_path, index=False)
        logger.info("Saved results -> %s (rows=%s)", out_path, 0)
        return

    for r in rows:
        validate_result_row(r)

    df_new = pd.DataFrame(rows).copy()
    for c in RESULT_COLS:
        if c not in df_new.columns:
            df_new[c] = ""
    df_new = df_new[RESULT_COLS].fillna("").astype(str)

    if out_path.exists():
        df_old = read_results(out_path)
        df_all = pd.concat([df_old, df_new], ignore_index=True)
        df_all = df_all.drop_duplicates(subset=RESULT_KEY, keep="last")
    else:
        df_all = df_new

    df_all = df_all.sort_values(["game_date", "game", "session"]).reset_index(drop=True)
    df_all.to_csv(out_path, index=False)
    logger.info("Saved results -> %s (rows=%s)", out_path, len(df_all))


def result_row(game: str, game_date: str, result: DeclaredResult) -> dict:
    return {
        "game": game,
        "game_date": game_date,
        "session": result.session or "",
        "pana": result.pana or "",
        "digit": result.digit,
        "winning_number": result.winning_number or "",
    }


def declare_session(game: str, game_date: str, result: DeclaredResult, out_path: str | Path) -> None:
    upsert_results([result_row(game, game_date, result)], out_path)


def declare_starline(game: str, game_date: str, result: DeclaredResult, out_path: str | Path) -> None:
    """Starline takes one result per game per date."""
    df = read_results(out_path)
    taken = df[(df["game"] == game) & (df["game_date"] == game_date) & (df["session"] == "")]
    if not taken.empty:
        raise ResultAlreadyDeclared(f"Result already declared for {game} on {game_date}")
    upsert_results([result_row(game, game_date, result)], out_path)


def _to_declared(row: pd.Series) -> DeclaredResult:
    return DeclaredResult(
        digit=row["digit"],
        pana=row["pana"] or None,
        winning_number=row["winning_number"] or None,
        session=row["session"] or None,
    )


def load_day(results: pd.DataFrame, game: str, game_date: str) -> DayResult:
    rows = results[(results["game"] == game) & (results["game_date"] == game_date)]
    by_session = {r["session"]: _to_declared(r) for _, r in rows.iterrows() if r["session"]}
    return DayResult(open=by_session.get("open"), close=by_session.get("close"))


def load_starline(results: pd.DataFrame, game: str, game_date: str) -> DeclaredResult | None:
    rows = results[(results["game"] == game) & (results["game_date"] == game_date) & (results["session"] == "")]
    if rows.empty:
        return None
    return _to_declared(rows.iloc[-1])
