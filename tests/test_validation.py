import pytest

from matka.engine.validation import (
    declare_session_result,
    declare_starline_result,
    ensure_bet_number_format,
    format_bet_number,
    validate_bet_number_format,
    validate_declared_result,
)
from matka.errors import FormatError
from matka.types import MainBetType, StarlineBetType


@pytest.mark.parametrize(
    "bet_type,number,valid",
    [
        ("single", "7", True),
        ("single", "07", False),
        ("single", "a", False),
        ("single digit", "0", True),
        ("single digit", "10", False),
        ("jodi", "65", True),
        ("jodi", "6", False),
        ("singlePanna", "123", True),
        ("singlePanna", "112", True),
        ("single pana", "12", False),
        ("doublePanna", "112", True),
        ("doublePanna", "223", True),
        ("doublePanna", "111", False),
        ("doublePanna", "123", False),
        ("doublePanna", "1234", False),
        ("double pana", "001", True),
        ("triplePanna", "000", True),
        ("triple pana", "777", True),
        ("triplePanna", "776", False),
    ],
)
def test_bet_number_shapes(bet_type, number, valid):
    res = validate_bet_number_format(bet_type, number)
    assert res.valid is valid
    assert (res.reason is None) is valid


def test_sangam_composite_formats():
    assert validate_bet_number_format("halfSangam", "openDigitClosePanna|5|123").valid
    assert validate_bet_number_format("halfSangam", "closeDigitOpenPanna|0|999").valid
    assert not validate_bet_number_format("halfSangam", "5-123").valid
    assert not validate_bet_number_format("halfSangam", "sideways|5|123").valid
    assert validate_bet_number_format("fullSangam", "123|456").valid
    assert not validate_bet_number_format("fullSangam", "123|45").valid
    assert not validate_bet_number_format("fullSangam", "anything").valid


def test_unknown_type_and_empty_number_are_invalid():
    res = validate_bet_number_format("Single", "7")
    assert not res.valid and "Unknown bet type" in res.reason
    assert not validate_bet_number_format("single", "").valid
    assert not validate_bet_number_format("single", None).valid


def test_enum_members_accepted():
    assert validate_bet_number_format(MainBetType.TRIPLE_PANNA, "555").valid
    assert validate_bet_number_format(StarlineBetType.DOUBLE_PANA, "556").valid


def test_ensure_raises_format_error_with_reason():
    assert ensure_bet_number_format("jodi", " 42 ") == "42"
    with pytest.raises(FormatError, match="double"):
        ensure_bet_number_format("triplePanna", "112")


def test_format_bet_number():
    assert format_bet_number("single digit", "a17") == "7"
    assert format_bet_number("single pana", "7") == "007"
    assert format_bet_number("doublePanna", "1-1-2") == "112"
    assert format_bet_number("singlePanna", "12345") == "345"
    assert format_bet_number("jodi", "5") == "05"
    assert format_bet_number("single", "") == ""
    assert format_bet_number("fullSangam", " 123|456 ") == "123|456"


def test_declared_digit_derived_when_missing():
    assert validate_declared_result("123") == ("123", "6")
    assert validate_declared_result("456", "") == ("456", "5")


def test_declared_digit_must_agree_with_pana():
    assert validate_declared_result("456", "5") == ("456", "5")
    with pytest.raises(FormatError, match="does not match"):
        validate_declared_result("456", "4", strict=True)
    assert validate_declared_result("456", "4", strict=False) == ("456", "4")


def test_declared_result_shapes():
    with pytest.raises(FormatError):
        validate_declared_result("12")
    with pytest.raises(FormatError):
        validate_declared_result("123", "12")
    with pytest.raises(FormatError):
        declare_session_result("123", session="noon")


def test_declare_helpers():
    r = declare_session_result("221", session="open")
    assert (r.pana, r.digit, r.session, r.winning_number) == ("221", "5", "open", None)
    s = declare_starline_result("223")
    assert (s.pana, s.winning_number, s.digit) == (None, "223", "7")


def test_session_bets_must_name_their_session():
    from matka.engine.validation import validate_bet_session

    assert validate_bet_session("single", "open").valid
    assert validate_bet_session("triplePanna", " close ").valid
    res = validate_bet_session("single", None)
    assert not res.valid and "session" in res.reason
    assert not validate_bet_session("doublePanna", "noon").valid
    # day bets and starline bets carry no session
    assert validate_bet_session("jodi", None).valid
    assert validate_bet_session("fullSangam", "").valid
    assert validate_bet_session("single digit", None).valid
