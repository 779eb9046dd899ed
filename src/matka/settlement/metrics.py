from __future__ import annotations
import pandas as pd

def _totals(df: pd.DataFrame) -> dict:
    stake = float(df["bet_amount"].sum())
    payout = float(df["win_amount"].sum())
    return {
        "bets": int(len(df)),
        "winning_bets": int((df["status"] == "won").sum()),
        "stake_total": stake,
        "payout_total": payout,
        "house_profit": stake - payout,
    }

def summarize(per_bet: pd.DataFrame) -> dict:
    """Totals over settled bets plus a per-bet-type breakdown; pending bets are counted apart."""
    settled = per_bet[per_bet["status"] != "pending"]
    out = _totals(settled)
    out["pending_bets"] = int((per_bet["status"] == "pending").sum())
    out["hit_rate"] = float((settled["status"] == "won").mean()) if len(settled) else 0.0
    out["by_bet_type"] = {str(t): _totals(g) for t, g in settled.groupby("bet_type", sort=True)}
    return out
