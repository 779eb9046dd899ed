from __future__ import annotations
import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from matka.cli.main import app
from matka.datasets.bets_store import append_bet, read_bets
from matka.datasets.results_store import declare_starline, load_day, load_starline, read_results, upsert_results
from matka.engine.validation import declare_session_result, declare_starline_result
from matka.errors import FormatError, ResultAlreadyDeclared
from matka.types import Bet, MainBetType

FIXTURES = Path(__file__).parent / "fixtures"
runner = CliRunner()


def test_results_store_roundtrip_keeps_leading_zeros(tmp_path: Path):
    out = tmp_path / "results.csv"
    upsert_results([], out)
    assert out.exists()

    r = declare_session_result("007", session="open")
    upsert_results([{"game": "KALYAN", "game_date": "2026-10-01", "session": "open", "pana": r.pana, "digit": r.digit}], out)
    # re-declaring a session replaces it
    upsert_results([{"game": "KALYAN", "game_date": "2026-10-01", "session": "open", "pana": "008", "digit": "8"}], out)

    df = read_results(out)
    assert len(df) == 1
    day = load_day(df, "KALYAN", "2026-10-01")
    assert day.open.pana == "008" and day.open.digit == "8"
    assert day.close is None


def test_starline_declared_once(tmp_path: Path):
    out = tmp_path / "results.csv"
    result = declare_starline_result("223")
    declare_starline("STAR-10AM", "2026-10-01", result, out)
    with pytest.raises(ResultAlreadyDeclared):
        declare_starline("STAR-10AM", "2026-10-01", result, out)
    assert load_starline(read_results(out), "STAR-10AM", "2026-10-01").winning_number == "223"
    assert load_starline(read_results(out), "STAR-10AM", "2026-10-02") is None


def test_append_bet_validates_at_stake_time(tmp_path: Path):
    out = tmp_path / "bets.csv"
    append_bet(Bet(MainBetType.JODI, "07", 10, bet_id="x1"), "KALYAN", "2026-10-01", out)
    with pytest.raises(FormatError):
        append_bet(Bet(MainBetType.TRIPLE_PANNA, "123", 10, bet_id="x2"), "KALYAN", "2026-10-01", out)
    df = read_bets(out)
    assert list(df["bet_number"]) == ["07"]


def test_cli_validate_and_check():
    ok = runner.invoke(app, ["validate-bet", "doublePanna", "112"])
    assert ok.exit_code == 0
    bad = runner.invoke(app, ["validate-bet", "doublePanna", "111"])
    assert bad.exit_code == 1

    hit = runner.invoke(app, ["check-bet", "single", "6", "--pana", "123"])
    assert hit.exit_code == 0
    assert "matched" in hit.output and "not_matched" not in hit.output

    unsupported = runner.invoke(app, ["check-bet", "jodi", "65", "--pana", "123"])
    assert "unsupported" in unsupported.output


def test_cli_win_amount_and_gap(tmp_path: Path):
    res = runner.invoke(app, ["win-amount", "single", "100"])
    assert res.exit_code == 0
    assert "1000" in res.output

    rates = tmp_path / "rates.csv"
    rates.write_text("bet_type,multiplier\nsingle,10\n", encoding="utf-8")
    gap = runner.invoke(app, ["win-amount", "jodi", "10", "--rates", str(rates)])
    assert gap.exit_code == 1
    assert "ConfigurationGap" in gap.output


def test_cli_declare_and_settle(tmp_path: Path):
    results = tmp_path / "results.csv"
    for session, pana in [("open", "123"), ("close", "456")]:
        r = runner.invoke(
            app,
            ["declare", "--game", "KALYAN", "--date", "2026-10-01", "--session", session, "--pana", pana, "--out", str(results)],
        )
        assert r.exit_code == 0, r.output

    bad = runner.invoke(
        app,
        ["declare", "--game", "KALYAN", "--date", "2026-10-01", "--session", "open", "--pana", "123", "--digit", "1", "--out", str(results)],
    )
    assert bad.exit_code == 1

    reports = tmp_path / "reports"
    res = runner.invoke(
        app,
        [
            "settle",
            "--game", "KALYAN",
            "--date", "2026-10-01",
            "--bets", str(FIXTURES / "bets_sample.csv"),
            "--results", str(results),
            "--rates", str(Path(__file__).parents[1] / "data" / "rates" / "main.csv"),
            "--report-dir", str(reports),
        ],
    )
    assert res.exit_code == 0, res.output

    out_dir = reports / "KALYAN_2026-10-01"
    summary = json.loads((out_dir / "summary.json").read_text(encoding="utf-8"))
    assert summary["payout_total"] == 13400.0
    assert summary["rejected_bets"] == 1
    assert (out_dir / "per_bet.csv").exists()
    assert (out_dir / "rejected.csv").exists()


def test_cli_numbers():
    res = runner.invoke(app, ["numbers", "double pana"])
    assert res.exit_code == 0
    assert "270" in res.output


def test_append_bet_needs_a_session_for_single_and_pana(tmp_path: Path):
    out = tmp_path / "bets.csv"
    with pytest.raises(FormatError, match="session"):
        append_bet(Bet(MainBetType.SINGLE, "6", 10, bet_id="x1"), "KALYAN", "2026-10-01", out)
    assert not out.exists()
    append_bet(Bet(MainBetType.SINGLE, "6", 10, bet_id="x2", session="open"), "KALYAN", "2026-10-01", out)
    append_bet(Bet(MainBetType.JODI, "65", 10, bet_id="x3"), "KALYAN", "2026-10-01", out)
    assert list(read_bets(out)["bet_id"]) == ["x2", "x3"]


def test_cli_settle_survives_a_sessionless_row(tmp_path: Path):
    bets = tmp_path / "bets.csv"
    bets.write_text(
        "bet_id,game,game_date,session,bet_type,bet_number,bet_amount\n"
        "y1,KALYAN,2026-10-01,,single,6,10\n"
        "y2,KALYAN,2026-10-01,,jodi,65,10\n",
        encoding="utf-8",
    )
    results = tmp_path / "results.csv"
    for session, pana in [("open", "123"), ("close", "456")]:
        runner.invoke(
            app,
            ["declare", "--game", "KALYAN", "--date", "2026-10-01", "--session", session, "--pana", pana, "--out", str(results)],
        )
    reports = tmp_path / "reports"
    res = runner.invoke(
        app,
        [
            "settle",
            "--game", "KALYAN",
            "--date", "2026-10-01",
            "--bets", str(bets),
            "--results", str(results),
            "--rates", str(Path(__file__).parents[1] / "data" / "rates" / "main.csv"),
            "--report-dir", str(reports),
        ],
    )
    assert res.exit_code == 0, res.output
    summary = json.loads((reports / "KALYAN_2026-10-01" / "summary.json").read_text(encoding="utf-8"))
    assert summary["rejected_bets"] == 1
    assert summary["payout_total"] == 900.0
