from __future__ import annotations
import os
from dataclasses import dataclass
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()

def _env(key: str, default: str) -> str:
    v = os.getenv(key)
    return default if v is None or v == "" else v

def _flag(key: str, default: bool) -> bool:
    return _env(key, "1" if default else "0").strip().lower() in {"1", "true", "yes", "on"}

@dataclass(frozen=True)
class Config:
    rates_csv: Path = Path(_env("MATKA_RATES_CSV", "data/rates/main.csv"))
    starline_rates_csv: Path = Path(_env("MATKA_STARLINE_RATES_CSV", "data/rates/starline.csv"))

    bets_csv: Path = Path(_env("MATKA_BETS_CSV", "data/processed/bets.csv"))
    results_csv: Path = Path(_env("MATKA_RESULTS_CSV", "data/processed/results.csv"))

    report_dir: Path = Path(_env("MATKA_REPORT_DIR", "reports"))
    log_level: str = _env("MATKA_LOG_LEVEL", "INFO")

    # declared digit must equal digit-sum(pana) % 10
    strict_digit: bool = _flag("MATKA_STRICT_DIGIT", True)

CFG = Config()
