from __future__ import annotations

from pathlib import Path

import typer
from rich import print

from matka.config import CFG
from matka.engine.matching import match_bet
from matka.engine.numbers import possible_numbers, win_probability
from matka.engine.payout import compute_win_amount
from matka.engine.validation import (
    declare_session_result,
    declare_starline_result,
    validate_bet_number_format,
)
from matka.errors import MatkaError
from matka.pricing.rates import DEFAULT_MAIN_RATES, DEFAULT_STARLINE_RATES, load_rates
from matka.types import DeclaredResult, StarlineBetType, parse_bet_type

app = typer.Typer(add_completion=False)


def _fail(e: Exception) -> None:
    print({"ok": False, "error": type(e).__name__, "msg": str(e)})
    raise typer.Exit(code=1)


def _rates(path: Path | None, starline: bool) -> dict:
    if path is not None:
        return load_rates(path)
    default = CFG.starline_rates_csv if starline else CFG.rates_csv
    if default.exists():
        return load_rates(default)
    return dict(DEFAULT_STARLINE_RATES if starline else DEFAULT_MAIN_RATES)


@app.command("validate-bet")
def cmd_validate_bet(
    bet_type: str = typer.Argument(..., help="e.g. single, doublePanna, 'single pana'"),
    bet_number: str = typer.Argument(...),
):
    res = validate_bet_number_format(bet_type, bet_number)
    print({"ok": res.valid, "bet_type": bet_type, "bet_number": bet_number, "reason": res.reason})
    if not res.valid:
        raise typer.Exit(code=1)


@app.command("check-bet")
def cmd_check_bet(
    bet_type: str = typer.Argument(...),
    bet_number: str = typer.Argument(...),
    pana: str | None = typer.Option(None, help="Declared pana (main game)"),
    digit: str | None = typer.Option(None, help="Declared digit; derived from the pana when omitted"),
    winning_number: str | None = typer.Option(None, help="Declared winning number (starline)"),
):
    try:
        if winning_number:
            result = declare_starline_result(winning_number, digit)
        elif pana:
            result = declare_session_result(pana, digit)
        elif digit:
            result = DeclaredResult(digit=digit.strip())
        else:
            raise typer.BadParameter("Pass --pana, --winning-number or --digit")
        outcome = match_bet(bet_type, bet_number, result)
    except MatkaError as e:
        _fail(e)
    print({"bet_type": bet_type, "bet_number": bet_number, "result": result.label(), "outcome": outcome.value})


@app.command("win-amount")
def cmd_win_amount(
    bet_type: str = typer.Argument(...),
    amount: float = typer.Argument(...),
    rates: Path | None = typer.Option(None, help="Rate table CSV (bet_type,multiplier or bet_type,min,max)"),
):
    try:
        bt = parse_bet_type(bet_type)
        table = _rates(rates, starline=isinstance(bt, StarlineBetType))
        win = compute_win_amount(bt, amount, table)
    except MatkaError as e:
        _fail(e)
    print({"bet_type": bt.value, "amount": amount, "win_amount": win})


@app.command("declare")
def cmd_declare(
    game: str = typer.Option(...),
    date: str = typer.Option(..., help="YYYY-MM-DD"),
    pana: str = typer.Option(..., help="Pana, or winning number with --starline"),
    session: str | None = typer.Option(None, help="open | close (main game)"),
    digit: str | None = typer.Option(None),
    starline: bool = typer.Option(False),
    out: Path = typer.Option(CFG.results_csv),
):
    from matka.datasets.results_store import declare_session, declare_starline

    try:
        if starline:
            result = declare_starline_result(pana, digit)
            declare_starline(game, date, result, out)
        else:
            if session not in ("open", "close"):
                raise typer.BadParameter("--session must be open or close")
            result = declare_session_result(pana, digit, session=session)
            declare_session(game, date, result, out)
    except MatkaError as e:
        _fail(e)
    print({"ok": True, "game": game, "date": date, "session": session, "result": result.label(), "results_csv": str(out)})


@app.command("settle")
def cmd_settle(
    game: str = typer.Option(...),
    date: str = typer.Option(..., help="YYYY-MM-DD"),
    bets: Path = typer.Option(CFG.bets_csv),
    results: Path = typer.Option(CFG.results_csv),
    rates: Path | None = typer.Option(None),
    starline: bool = typer.Option(False),
    report_dir: Path = typer.Option(CFG.report_dir),
):
    from matka.datasets.bets_store import read_bets, reject_invalid
    from matka.datasets.results_store import load_day, load_starline, read_results
    from matka.settlement.engine import settle_frame
    from matka.settlement.report import write_reports

    df = read_bets(bets)
    df = df[(df["game"] == game) & (df["game_date"] == date)]
    accepted, rejected = reject_invalid(df)
    res = read_results(results)

    try:
        table = _rates(rates, starline)
        if starline:
            declared = load_starline(res, game, date)
            if declared is None:
                raise typer.BadParameter(f"No starline result declared for {game} on {date}")
            per_bet = settle_frame(accepted, table, starline=declared)
        else:
            per_bet = settle_frame(accepted, table, day=load_day(res, game, date))
    except MatkaError as e:
        _fail(e)

    out = write_reports(per_bet, report_dir / f"{game}_{date}", rejected=rejected)
    print(out["summary_obj"])


@app.command("numbers")
def cmd_numbers(
    bet_type: str = typer.Argument(...),
    show: bool = typer.Option(False, help="List every number"),
):
    try:
        nums = possible_numbers(bet_type)
        p = win_probability(bet_type)
    except MatkaError as e:
        _fail(e)
    info = {"bet_type": bet_type, "count": len(nums), "win_probability": p}
    if show:
        info["numbers"] = nums
    print(info)


def main():
    app()


if __name__ == "__main__":
    main()
