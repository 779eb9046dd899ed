from __future__ import annotations
import json
from pathlib import Path
import pandas as pd
from matka.settlement.metrics import summarize


def write_reports(per_bet: pd.DataFrame, out_dir: Path, rejected: pd.DataFrame | None = None) -> dict:
    """per_bet.csv, by_bet_type.csv and summary.json; rejected.csv when stake-time rejects are given."""
    out_dir.mkdir(parents=True, exist_ok=True)
    summary = summarize(per_bet)
    paths = {
        "per_bet": out_dir / "per_bet.csv",
        "by_bet_type": out_dir / "by_bet_type.csv",
        "summary": out_dir / "summary.json",
    }
    per_bet.to_csv(paths["per_bet"], index=False)
    breakdown = pd.DataFrame.from_dict(summary["by_bet_type"], orient="index")
    breakdown.index.name = "bet_type"
    breakdown.to_csv(paths["by_bet_type"])
    if rejected is not None and not rejected.empty:
        summary["rejected_bets"] = int(len(rejected))
        paths["rejected"] = out_dir / "rejected.csv"
        rejected.to_csv(paths["rejected"], index=False)
    paths["summary"].write_text(json.dumps(summary, indent=2), encoding="utf-8")
    return {**paths, "summary_obj": summary}
