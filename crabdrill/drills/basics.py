"""Basic drills: conditionals, strings, structs, enums, options, vectors, traits and lists."""

from __future__ import annotations

from dataclasses import dataclass
from functools import singledispatch

__all__ = [
    "Package",
    "Point",
    "ChangeColor",
    "Echo",
    "Move",
    "Quit",
    "MachineState",
    "Cons",
    "Nil",
    "bigger",
    "foo_if_fizz",
    "animal_habitat",
    "trim_me",
    "compose_me",
    "replace_me",
    "maybe_icecream",
    "vec_loop",
    "vec_map",
    "append_bar",
    "sale_price",
    "is_even",
    "create_empty_list",
    "create_non_empty_list",
]

_MIN_WEIGHT_GRAMS = 10


def bigger(a: int, b: int) -> int:
    """The bigger of two numbers."""
    return a if a > b else b


def foo_if_fizz(fizzish: str) -> str:
    """"foo" for "fizz", "bar" for "fuzz", and "baz" for anything else."""
    if fizzish == "fizz":
        return "foo"
    if fizzish == "fuzz":
        return "bar"
    return "baz"


_HABITATS = {"crab": "Beach", "gopher": "Burrow", "snake": "Desert"}


def animal_habitat(animal: str) -> str:
    """Where the animal lives, or "Unknown"."""
    return _HABITATS.get(animal, "Unknown")


def trim_me(text: str) -> str:
    """Remove whitespace from both ends."""
    return text.strip()


def compose_me(text: str) -> str:
    """Append " world!"."""
    return f"{text} world!"


def replace_me(text: str) -> str:
    """Replace every "cars" with "balloons"."""
    return text.replace("cars", "balloons")


@dataclass(frozen=True)
class Package:
    """A package to ship; it must weigh at least 10 grams."""

    sender_country: str
    recipient_country: str
    weight_in_grams: int

    def __post_init__(self) -> None:
        if self.weight_in_grams < _MIN_WEIGHT_GRAMS:
            raise ValueError("Can not ship a package with weight below 10 grams.")

    def is_international(self) -> bool:
        """True when sender and recipient countries differ."""
        return self.sender_country != self.recipient_country

    def get_fees(self, cents_per_gram: int) -> int:
        """Shipping fee in cents."""
        return self.weight_in_grams * cents_per_gram


@dataclass(frozen=True)
class Point:
    """A position on a small grid."""

    x: int
    y: int


@dataclass(frozen=True)
class ChangeColor:
    """Change the colour to the given RGB components."""

    red: int
    green: int
    blue: int


@dataclass(frozen=True)
class Echo:
    """Replace the stored message."""

    text: str


@dataclass(frozen=True)
class Move:
    """Move to a new position."""

    point: Point


@dataclass(frozen=True)
class Quit:
    """Ask the machine to quit."""


Message = ChangeColor | Echo | Move | Quit


@dataclass
class MachineState:
    """A small state machine driven by messages."""

    color: tuple[int, int, int] = (0, 0, 0)
    position: Point = Point(0, 0)
    quit: bool = False
    message: str = ""

    def process(self, message: Message) -> None:
        """Apply one message to the state."""
        match message:
            case ChangeColor(red=red, green=green, blue=blue):
                self.color = (red, green, blue)
            case Echo(text=text):
                self.message = text
            case Move(point=point):
                self.position = point
            case Quit():
                self.quit = True
            case _:
                raise TypeError(f"unknown message: {message!r}")


def maybe_icecream(time_of_day: int) -> int | None:
    """Ice cream left at the given hour: 5 before 22, 0 until 23, None past 23."""
    if time_of_day > 23:
        return None
    if time_of_day < 22:
        return 5
    return 0


def vec_loop(values: list[int]) -> list[int]:
    """Double every element of the list in place and return it."""
    values[:] = [element * 2 for element in values]
    return values


def vec_map(values: list[int]) -> list[int]:
    """A new list with every element doubled."""
    return [element * 2 for element in values]


@singledispatch
def append_bar(value):
    """Append "Bar" to a string, or the item "Bar" to a list of strings."""
    raise TypeError(f"cannot append Bar to {type(value).__name__}")


@append_bar.register
def _(value: str) -> str:
    return value + "Bar"


@append_bar.register
def _(value: list) -> list:
    return [*value, "Bar"]


def is_even(num: int) -> bool:
    """True for an even number."""
    return num % 2 == 0


def sale_price(price: int) -> int:
    """10 off an even price, 3 off an odd one."""
    if is_even(price):
        return price - 10
    return price - 3


@dataclass(frozen=True)
class Nil:
    """The end of a cons list."""


@dataclass(frozen=True)
class Cons:
    """A cons list cell holding a value and the rest of the list."""

    value: int
    rest: Cons | Nil


def create_empty_list() -> Nil:
    """An empty cons list."""
    return Nil()


def create_non_empty_list() -> Cons:
    """A cons list holding a single value."""
    return Cons(1, Nil())