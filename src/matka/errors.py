from __future__ import annotations


class MatkaError(ValueError):
    """Base class for rule violations raised by the engine."""


class FormatError(MatkaError):
    """Bet number or declared result does not have the shape its type requires."""


class UnsupportedBetType(MatkaError):
    """Unknown bet type tag, or a type the called operation cannot settle."""


class ConfigurationGap(MatkaError):
    """Bet type missing from the payout rate table."""


class InvalidStake(MatkaError):
    pass


class ResultAlreadyDeclared(MatkaError):
    pass
