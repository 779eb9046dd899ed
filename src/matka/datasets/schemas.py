from __future__ import annotations
from matka.errors import FormatError
from matka.utils.strings import is_digits

BET_COLS = ["bet_id", "game", "game_date", "session", "bet_type", "bet_number", "bet_amount"]
RESULT_COLS = ["game", "game_date", "session", "pana", "digit", "winning_number"]
RESULT_KEY = ["game", "game_date", "session"]

def missing_columns(columns, required: list[str]) -> set[str]:
    return set(required) - set(columns)

def validate_result_row(row: dict) -> None:
    pana = str(row.get("pana") or "")
    winning = str(row.get("winning_number") or "")
    digit = str(row.get("digit") or "")
    if not pana and not winning:
        raise FormatError(f"Result needs a pana or a winning number: {row}")
    for value in (pana, winning):
        if value and not is_digits(value, 3):
            raise FormatError(f"Result number must be 3 digits, got {value!r}")
    if not is_digits(digit, 1):
        raise FormatError(f"Result digit must be one digit, got {digit!r}")
