from __future__ import annotations
import re
from dataclasses import dataclass
from datetime import datetime, time

HHMM = re.compile(r"^([0-1]?[0-9]|2[0-3]):[0-5][0-9]$")


@dataclass(frozen=True)
class BettingWindow:
    allowed: bool
    message: str


def time_to_minutes(hhmm: str | None) -> int:
    if not hhmm or not HHMM.match(hhmm.strip()):
        return 0
    h, m = hhmm.strip().split(":")
    return int(h) * 60 + int(m)


def _minutes(now: datetime | time) -> int:
    return now.hour * 60 + now.minute


def betting_allowed(session: str, open_time: str, close_time: str, now: datetime | time) -> BettingWindow:
    """Open session takes bets until open time (exclusive); close session until close time (inclusive)."""
    cur = _minutes(now)
    if session == "open":
        if cur < time_to_minutes(open_time):
            return BettingWindow(True, "Open session betting is available")
        return BettingWindow(False, "Open session betting has closed")
    if session == "close":
        if cur <= time_to_minutes(close_time):
            return BettingWindow(True, "Close session betting is available")
        return BettingWindow(False, "Close session betting has closed")
    raise ValueError(f"Session must be 'open' or 'close', got {session!r}")


def starline_game_status(open_time: str | None, now: datetime | time, has_result_today: bool = False) -> str:
    """'result_declared', 'open' (up to and including open time) or 'closed'."""
    if not open_time:
        return "closed"
    if has_result_today:
        return "result_declared"
    return "open" if _minutes(now) <= time_to_minutes(open_time) else "closed"
