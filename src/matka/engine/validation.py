from __future__ import annotations
import re

from matka.config import CFG
from matka.engine.matching import SESSION_TYPES
from matka.errors import FormatError, UnsupportedBetType
from matka.types import (
    BetType,
    DeclaredResult,
    MainBetType,
    SESSIONS,
    Session,
    ValidationResult,
    canonical,
    parse_bet_type,
)
from matka.utils.strings import classify_pana, is_digits, norm, sum_to_digit

HALF_SANGAM_SIDES = ("openDigitClosePanna", "closeDigitOpenPanna")

_OK = ValidationResult(True)


def _bad(reason: str) -> ValidationResult:
    return ValidationResult(False, reason)


def _check_pana(n: str, expected: str) -> ValidationResult:
    if not is_digits(n, 3):
        return _bad("Pana must be a 3-digit number")
    if expected == "single":
        return _OK
    actual = classify_pana(n)
    if actual != expected:
        return _bad(f"{n} is a {actual} pana, not a {expected} pana")
    return _OK


def _check_half_sangam(n: str) -> ValidationResult:
    parts = n.split("|")
    if len(parts) != 3 or parts[0] not in HALF_SANGAM_SIDES:
        return _bad("Half sangam format: <side>|<digit>|<pana>, side one of " + ", ".join(HALF_SANGAM_SIDES))
    _, digit, pana = parts
    if not is_digits(digit, 1) or not is_digits(pana, 3):
        return _bad("Half sangam needs a 1-digit digit and a 3-digit pana")
    return _OK


def _check_full_sangam(n: str) -> ValidationResult:
    parts = n.split("|")
    if len(parts) != 2 or not all(is_digits(p, 3) for p in parts):
        return _bad("Full sangam format: <openPana>|<closePana>, e.g. 123|456")
    return _OK


def validate_bet_number_format(bet_type: str | BetType, bet_number: object) -> ValidationResult:
    """Check a bet number against the shape its bet type requires.

    Runs at stake time, before the bet is accepted. Digit-repetition patterns
    are enforced here (double pana = exactly one repeated digit, triple pana =
    all three the same); settlement never re-checks them.
    """
    try:
        bt = canonical(bet_type)
    except UnsupportedBetType as e:
        return _bad(str(e))

    n = norm(bet_number)
    if not n:
        return _bad("Bet number is required")

    if bt is MainBetType.SINGLE:
        return _OK if is_digits(n, 1) else _bad("Single digit must be one number between 0-9")
    if bt is MainBetType.JODI:
        return _OK if is_digits(n, 2) else _bad("Jodi must be a 2-digit number")
    if bt is MainBetType.SINGLE_PANNA:
        return _check_pana(n, "single")
    if bt is MainBetType.DOUBLE_PANNA:
        return _check_pana(n, "double")
    if bt is MainBetType.TRIPLE_PANNA:
        return _check_pana(n, "triple")
    if bt is MainBetType.HALF_SANGAM:
        return _check_half_sangam(n)
    return _check_full_sangam(n)


def ensure_bet_number_format(bet_type: str | BetType, bet_number: object) -> str:
    """Raising form of validate_bet_number_format; returns the trimmed number."""
    validate_bet_number_format(bet_type, bet_number).raise_for_error()
    return norm(bet_number)


def format_bet_number(bet_type: str | BetType, raw: object) -> str:
    """Strip non-digits and fit to the width of the bet type (pana is zero padded).

    Sangam tokens keep their separators and are only trimmed.
    """
    bt = canonical(bet_type)
    if bt in (MainBetType.HALF_SANGAM, MainBetType.FULL_SANGAM):
        return norm(raw)
    clean = re.sub(r"\D", "", norm(raw))
    if not clean:
        return ""
    if bt is MainBetType.SINGLE:
        return clean[-1]
    if bt in (MainBetType.SINGLE_PANNA, MainBetType.DOUBLE_PANNA, MainBetType.TRIPLE_PANNA):
        return clean.zfill(3)[-3:]
    return clean.zfill(2)[-2:]


def validate_declared_result(pana: object, digit: object = None, strict: bool | None = None) -> tuple[str, str]:
    """Normalize an admin-entered (pana, digit) pair.

    A missing digit is derived as digit-sum(pana) % 10. A supplied digit must
    agree with that rule unless strict is off.
    """
    p = norm(pana)
    if not is_digits(p, 3):
        raise FormatError(f"Pana must be a 3-digit number, got {pana!r}")
    derived = sum_to_digit(p)
    d = norm(digit)
    if not d:
        return p, derived
    if not is_digits(d, 1):
        raise FormatError(f"Digit must be between 0 and 9, got {digit!r}")
    strict = CFG.strict_digit if strict is None else strict
    if strict and d != derived:
        raise FormatError(f"Digit {d} does not match pana {p} (digit sum gives {derived})")
    return p, d


def declare_session_result(
    pana: object, digit: object = None, session: Session | None = None, strict: bool | None = None
) -> DeclaredResult:
    p, d = validate_declared_result(pana, digit, strict=strict)
    if session is not None and session not in SESSIONS:
        raise FormatError(f"Session must be 'open' or 'close', got {session!r}")
    return DeclaredResult(digit=d, pana=p, session=session)


def declare_starline_result(winning_number: object, digit: object = None, strict: bool | None = None) -> DeclaredResult:
    n, d = validate_declared_result(winning_number, digit, strict=strict)
    return DeclaredResult(digit=d, winning_number=n)


def validate_bet_session(bet_type: str | BetType, session: object) -> ValidationResult:
    """Single and pana bets of the main game settle against one session and must name it."""
    try:
        bt = parse_bet_type(bet_type)
    except UnsupportedBetType as e:
        return _bad(str(e))
    if isinstance(bt, MainBetType) and bt in SESSION_TYPES and norm(session) not in SESSIONS:
        return _bad(f"{bt.value} bets need a session of 'open' or 'close', got {session!r}")
    return _OK
