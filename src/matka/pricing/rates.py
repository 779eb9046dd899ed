from __future__ import annotations
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

import pandas as pd

from matka.errors import ConfigurationGap
from matka.logging import get_logger
from matka.types import BetType, MainBetType, StarlineBetType, parse_bet_type

log = get_logger(__name__)

DEFAULT_MAIN_RATES: dict[BetType, float] = {
    MainBetType.SINGLE: 10,
    MainBetType.JODI: 90,
    MainBetType.SINGLE_PANNA: 140,
    MainBetType.DOUBLE_PANNA: 280,
    MainBetType.TRIPLE_PANNA: 700,
    MainBetType.HALF_SANGAM: 1000,
    MainBetType.FULL_SANGAM: 10000,
}

DEFAULT_STARLINE_RATES: dict[BetType, float] = {
    StarlineBetType.SINGLE_DIGIT: 9.5,
    StarlineBetType.SINGLE_PANA: 140,
    StarlineBetType.DOUBLE_PANA: 280,
    StarlineBetType.TRIPLE_PANA: 700,
}


@dataclass(frozen=True)
class RateMetrics:
    multiplier: float
    roi_percent: float


def _positive(x: object) -> bool:
    return isinstance(x, (int, float)) and not isinstance(x, bool) and x > 0


def rate_metrics(min_stake: object, max_payout: object) -> RateMetrics:
    """Admin rates read "stake min, win max"; invalid pairs give zeros."""
    if not (_positive(min_stake) and _positive(max_payout)):
        return RateMetrics(0.0, 0.0)
    return RateMetrics(
        multiplier=max_payout / min_stake,
        roi_percent=(max_payout - min_stake) / min_stake * 100,
    )


def payout_from_rate(min_stake: float | None, max_payout: float | None, stake: float | None) -> float:
    if not min_stake or not max_payout or not stake:
        return 0.0
    return float(stake) / float(min_stake) * float(max_payout)


def rates_from_min_max(table: Mapping[str | BetType, Mapping[str, float]]) -> dict[BetType, float]:
    """Multiplier table from {type: {"min", "max"}}; a pair that cannot pay raises ConfigurationGap."""
    out: dict[BetType, float] = {}
    for tag, pair in table.items():
        bt = parse_bet_type(tag)
        m = rate_metrics(pair.get("min"), pair.get("max"))
        if m.multiplier <= 0:
            raise ConfigurationGap(f"Invalid min/max rate for {bt.value!r}: {dict(pair)}")
        out[bt] = m.multiplier
    return out


def _multiplier(tag: BetType, raw: object) -> float:
    try:
        m = float(raw)
    except (TypeError, ValueError) as e:
        raise ConfigurationGap(f"Multiplier for {tag.value!r} is not a number: {raw!r}") from e
    if not math.isfinite(m) or m <= 0:
        raise ConfigurationGap(f"Multiplier for {tag.value!r} must be positive, got {raw!r}")
    return m


def load_rates(path: str | Path) -> dict[BetType, float]:
    """Read a rate table CSV: bet_type,multiplier or bet_type,min,max."""
    path = Path(path)
    df = pd.read_csv(path, dtype={"bet_type": str})
    if "bet_type" not in df.columns:
        raise ValueError(f"rates csv must contain a bet_type column: {path}")
    df["bet_type"] = df["bet_type"].str.strip()
    dupes = sorted(set(df.loc[df["bet_type"].duplicated(), "bet_type"]))
    if dupes:
        raise ValueError(f"Duplicate bet types in rates csv {path}: {dupes}")

    if "multiplier" in df.columns:
        rates = {}
        for t, m in zip(df["bet_type"], df["multiplier"]):
            bt = parse_bet_type(t)
            rates[bt] = _multiplier(bt, m)
    elif {"min", "max"} <= set(df.columns):
        rates = rates_from_min_max(
            {t: {"min": float(lo), "max": float(hi)} for t, lo, hi in zip(df["bet_type"], df["min"], df["max"])}
        )
    else:
        raise ValueError(f"rates csv needs multiplier or min,max columns: {path}")

    log.info("Loaded %s rates from %s", len(rates), path)
    return rates
