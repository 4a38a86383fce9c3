"""Error handling drills: name tags, token costs and positive non-zero integers."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

__all__ = [
    "CreationReason",
    "CreationError",
    "ParsePosNonzeroError",
    "PositiveNonzeroInteger",
    "generate_nametag_text",
    "total_cost",
    "remaining_tokens",
    "parse_pos_nonzero",
]

_INTEGER = re.compile(r"[+-]?[0-9]+")
_PROCESSING_FEE = 1
_COST_PER_ITEM = 5


def _parse_int(text: str, bits: int) -> int:
    """Parse a signed decimal integer of the given width strictly.

    Raises ValueError with a message naming the problem.
    """
    if text == "":
        raise ValueError("cannot parse integer from empty string")
    if not _INTEGER.fullmatch(text):
        raise ValueError("invalid digit found in string")
    value = int(text)
    limit = 1 << (bits - 1)
    if value >= limit:
        raise ValueError("number too large to fit in target type")
    if value < -limit:
        raise ValueError("number too small to fit in target type")
    return value


def generate_nametag_text(name: str) -> str:
    """Text for a name tag; raise ValueError for an empty name."""
    if not name:
        raise ValueError("`name` was empty; it must be nonempty.")
    return f"Hi! My name is {name}"


def total_cost(item_quantity: str) -> int:
    """Tokens needed for the typed quantity of items, fee included.

    Raises ValueError when the quantity is not a number.
    """
    quantity = _parse_int(item_quantity, 32)
    return quantity * _COST_PER_ITEM + _PROCESSING_FEE


def remaining_tokens(tokens: int, item_quantity: str) -> int:
    """Tokens left after buying; unchanged when the purchase is unaffordable."""
    cost = total_cost(item_quantity)
    if cost > tokens:
        return tokens
    return tokens - cost


class CreationReason(Enum):
    """Why a value cannot be a positive non-zero integer."""

    NEGATIVE = "number is negative"
    ZERO = "number is zero"


class CreationError(ValueError):
    """A value is negative or zero."""

    def __init__(self, reason: CreationReason):
        super().__init__(reason.value)
        self.reason = reason


@dataclass(frozen=True)
class PositiveNonzeroInteger:
    """An integer greater than zero."""

    value: int

    @classmethod
    def new(cls, value: int) -> PositiveNonzeroInteger:
        """Wrap the value; raise CreationError when it is not positive."""
        if value < 0:
            raise CreationError(CreationReason.NEGATIVE)
        if value == 0:
            raise CreationError(CreationReason.ZERO)
        return cls(value)


class ParsePosNonzeroError(ValueError):
    """A text is not a number, or not a positive non-zero one."""

    def __init__(
        self,
        message: str,
        creation: CreationError | None = None,
        parse_int: ValueError | None = None,
    ):
        super().__init__(message)
        self.creation = creation
        self.parse_int = parse_int

    @classmethod
    def from_creation(cls, error: CreationError) -> ParsePosNonzeroError:
        return cls(str(error), creation=error)

    @classmethod
    def from_parse_int(cls, error: ValueError) -> ParsePosNonzeroError:
        return cls(str(error), parse_int=error)


def parse_pos_nonzero(text: str) -> PositiveNonzeroInteger:
    """Parse a positive non-zero integer; raise ParsePosNonzeroError otherwise."""
    try:
        value = _parse_int(text, 64)
    except ValueError as error:
        raise ParsePosNonzeroError.from_parse_int(error) from error
    try:
        return PositiveNonzeroInteger.new(value)
    except CreationError as error:
        raise ParsePosNonzeroError.from_creation(error) from error