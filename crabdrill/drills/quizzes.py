"""Quiz drills: apple pricing, a string transforming machine and report cards."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

__all__ = [
    "Uppercase",
    "Trim",
    "Append",
    "ReportCard",
    "calculate_price_of_apples",
    "transformer",
]

_BULK_THRESHOLD = 40
_REGULAR_PRICE = 2
_BULK_PRICE = 1


def calculate_price_of_apples(quantity: int) -> int:
    """Price of an order: 2 per apple, or 1 per apple above 40 apples."""
    if quantity > _BULK_THRESHOLD:
        return quantity * _BULK_PRICE
    return quantity * _REGULAR_PRICE


@dataclass(frozen=True)
class Uppercase:
    """Turn the string to upper case."""


@dataclass(frozen=True)
class Trim:
    """Strip whitespace from both ends of the string."""


@dataclass(frozen=True)
class Append:
    """Append "bar" to the string ``count`` times."""

    count: int


Command = Uppercase | Trim | Append


def transformer(items: Iterable[tuple[str, Command]]) -> list[str]:
    """Apply each command to its string and return the results in order."""
    output = []
    for text, command in items:
        match command:
            case Uppercase():
                output.append(text.upper())
            case Trim():
                output.append(text.strip())
            case Append(count=count):
                output.append(text + "bar" * count)
            case _:
                raise TypeError(f"unknown command: {command!r}")
    return output


@dataclass
class ReportCard:
    """A report card with a numeric or an alphabetical grade."""

    grade: float | str
    student_name: str
    student_age: int

    def print(self) -> str:
        """Render the card as a single line of text."""
        return (
            f"{self.student_name} ({self.student_age}) - "
            f"achieved a grade of {self.grade}"
        )