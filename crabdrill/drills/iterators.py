"""Iterator drills: capitalising words, division results, factorials and progress counts."""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping, Sequence
from enum import Enum

__all__ = [
    "DivisionError",
    "DivideByZero",
    "NotDivisibleError",
    "Progress",
    "capitalize_first",
    "capitalize_words_vector",
    "capitalize_words_string",
    "divide",
    "result_with_list",
    "list_of_results",
    "factorial",
    "count_for",
    "count_iterator",
    "count_collection_for",
    "count_collection_iterator",
]

_NUMBERS = (27, 297, 38502, 81)
_DIVISOR = 27


def capitalize_first(text: str) -> str:
    """Upper-case the first character: "hello" -> "Hello"."""
    if not text:
        return ""
    return text[0].upper() + text[1:]


def capitalize_words_vector(words: Iterable[str]) -> list[str]:
    """Capitalise each word: ["hello", "world"] -> ["Hello", "World"]."""
    return [capitalize_first(word) for word in words]


def capitalize_words_string(words: Iterable[str]) -> str:
    """Capitalise each word and join them: ["hello", " ", "world"] -> "Hello World"."""
    return "".join(capitalize_first(word) for word in words)


class DivisionError(ArithmeticError):
    """A division that cannot give an exact integer result."""


class DivideByZero(DivisionError):
    """The divisor is zero."""

    def __init__(self) -> None:
        super().__init__("division by zero")


class NotDivisibleError(DivisionError):
    """The dividend is not a multiple of the divisor."""

    def __init__(self, dividend: int, divisor: int):
        super().__init__(f"{dividend} is not divisible by {divisor}")
        self.dividend = dividend
        self.divisor = divisor

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NotDivisibleError):
            return NotImplemented
        return (self.dividend, self.divisor) == (other.dividend, other.divisor)

    __hash__ = None  # type: ignore[assignment]


def divide(a: int, b: int) -> int:
    """Divide a by b exactly; raise a DivisionError when that is impossible."""
    if b == 0:
        raise DivideByZero()
    if a % b != 0:
        raise NotDivisibleError(a, b)
    return a // b


def result_with_list() -> list[int]:
    """All quotients of the sample numbers by 27; the first failure is raised."""
    return [divide(n, _DIVISOR) for n in _NUMBERS]


def list_of_results() -> list[int | DivisionError]:
    """Each quotient of the sample numbers by 27, or the error that division gave."""

    def attempt(n: int) -> int | DivisionError:
        try:
            return divide(n, _DIVISOR)
        except DivisionError as error:
            return error

    return [attempt(n) for n in _NUMBERS]


def factorial(num: int) -> int:
    """num!; raise ValueError for a negative number."""
    if num < 0:
        raise ValueError("factorial is not defined for negative numbers")
    return math.prod(range(1, num + 1))


class Progress(Enum):
    """How far along an exercise is."""

    NONE = "none"
    SOME = "some"
    COMPLETE = "complete"


def count_for(progress_map: Mapping[str, Progress], value: Progress) -> int:
    """Number of entries with the given progress, counted one by one."""
    count = 0
    for entry in progress_map.values():
        if entry == value:
            count += 1
    return count


def count_iterator(progress_map: Mapping[str, Progress], value: Progress) -> int:
    """Number of entries with the given progress."""
    return sum(1 for entry in progress_map.values() if entry == value)


def count_collection_for(
    collection: Sequence[Mapping[str, Progress]], value: Progress
) -> int:
    """Number of entries with the given progress across maps, counted one by one."""
    count = 0
    for progress_map in collection:
        for entry in progress_map.values():
            if entry == value:
                count += 1
    return count


def count_collection_iterator(
    collection: Sequence[Mapping[str, Progress]], value: Progress
) -> int:
    """Number of entries with the given progress across all maps."""
    return sum(count_iterator(progress_map, value) for progress_map in collection)