from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Literal, Union

from matka.errors import FormatError, UnsupportedBetType
from matka.utils.strings import build_jodi

Session = Literal["open", "close"]
SESSIONS: tuple[str, ...] = ("open", "close")


class MainBetType(str, Enum):
    SINGLE = "single"
    JODI = "jodi"
    SINGLE_PANNA = "singlePanna"
    DOUBLE_PANNA = "doublePanna"
    TRIPLE_PANNA = "triplePanna"
    HALF_SANGAM = "halfSangam"
    FULL_SANGAM = "fullSangam"


class StarlineBetType(str, Enum):
    SINGLE_DIGIT = "single digit"
    SINGLE_PANA = "single pana"
    DOUBLE_PANA = "double pana"
    TRIPLE_PANA = "triple pana"


BetType = Union[MainBetType, StarlineBetType]

STARLINE_TO_MAIN: dict[StarlineBetType, MainBetType] = {
    StarlineBetType.SINGLE_DIGIT: MainBetType.SINGLE,
    StarlineBetType.SINGLE_PANA: MainBetType.SINGLE_PANNA,
    StarlineBetType.DOUBLE_PANA: MainBetType.DOUBLE_PANNA,
    StarlineBetType.TRIPLE_PANA: MainBetType.TRIPLE_PANNA,
}
MAIN_TO_STARLINE: dict[MainBetType, StarlineBetType] = {v: k for k, v in STARLINE_TO_MAIN.items()}

_BY_TAG: dict[str, BetType] = {t.value: t for t in (*MainBetType, *StarlineBetType)}


def parse_bet_type(tag: str | BetType) -> BetType:
    """Resolve an exact tag to its enum member. No case folding, no aliases."""
    if isinstance(tag, (MainBetType, StarlineBetType)):
        return tag
    bt = _BY_TAG.get(str(tag))
    if bt is None:
        raise UnsupportedBetType(f"Unknown bet type: {tag!r}")
    return bt


def canonical(bet_type: str | BetType) -> MainBetType:
    """Main-game concept behind a tag from either vocabulary."""
    bt = parse_bet_type(bet_type)
    if isinstance(bt, StarlineBetType):
        return STARLINE_TO_MAIN[bt]
    return bt


class MatchOutcome(str, Enum):
    MATCHED = "matched"
    NOT_MATCHED = "not_matched"
    UNSUPPORTED = "unsupported"


@dataclass(frozen=True)
class Bet:
    bet_type: BetType
    bet_number: str
    bet_amount: float
    bet_id: str = ""
    session: Session | None = None


@dataclass(frozen=True)
class DeclaredResult:
    """A declared draw. Main game carries pana+digit, Starline carries winning_number+digit."""
    digit: str
    pana: str | None = None
    winning_number: str | None = None
    session: Session | None = None

    @property
    def pana_like(self) -> str | None:
        return self.pana if self.pana is not None else self.winning_number

    def label(self) -> str:
        return f"{self.pana_like}-{self.digit}"


@dataclass(frozen=True)
class DayResult:
    """Open and close session results of one main-game day; either may be pending."""
    open: DeclaredResult | None = None
    close: DeclaredResult | None = None

    def for_session(self, session: str | None) -> DeclaredResult | None:
        if session == "open":
            return self.open
        if session == "close":
            return self.close
        raise FormatError(f"Session must be 'open' or 'close', got {session!r}")

    @property
    def complete(self) -> bool:
        return self.open is not None and self.close is not None

    @property
    def jodi(self) -> str | None:
        if not self.complete:
            return None
        return build_jodi(self.open.digit, self.close.digit)

    def label(self) -> str:
        return f"{self.open.label()}/{self.close.label()}"


@dataclass(frozen=True)
class WinDetermination:
    is_winner: bool
    win_amount: int
    outcome: MatchOutcome


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    reason: str | None = None

    def raise_for_error(self) -> None:
        if not self.valid:
            raise FormatError(self.reason or "Invalid bet number")
