from __future__ import annotations

import argparse
import pandas as pd

from matka.engine.numbers import expected_return, possible_numbers, win_probability
from matka.pricing.rates import DEFAULT_MAIN_RATES, DEFAULT_STARLINE_RATES, load_rates


def parse_args():
    p = argparse.ArgumentParser(description="House edge per bet type for a payout rate table")
    p.add_argument("--rates", default="", help="rate table csv; defaults to the built-in table")
    p.add_argument("--starline", action="store_true")
    return p.parse_args()


def main():
    args = parse_args()
    if args.rates:
        rates = load_rates(args.rates)
    else:
        rates = DEFAULT_STARLINE_RATES if args.starline else DEFAULT_MAIN_RATES

    rows = []
    for bt, mult in rates.items():
        try:
            n = len(possible_numbers(bt))
            p = win_probability(bt)
        except ValueError:
            # sangam types have no enumerable space
            continue
        er = expected_return(bt, float(mult))
        rows.append(
            {
                "bet_type": bt.value,
                "numbers": n,
                "multiplier": float(mult),
                "win_probability": p,
                "expected_return": er,
                "house_edge": 1.0 - er,
            }
        )

    df = pd.DataFrame(rows)
    print(f"Rate table: {args.rates or ('built-in starline' if args.starline else 'built-in main')}")
    print(df.to_string(index=False, float_format=lambda x: f"{x:.4f}"))


if __name__ == "__main__":
    main()
