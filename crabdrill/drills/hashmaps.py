"""Hash map drills: fruit baskets and a football scores table."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

__all__ = [
    "Fruit",
    "Team",
    "fruit_basket",
    "fill_fruit_basket",
    "build_scores_table",
]


def fruit_basket() -> dict[str, int]:
    """A basket of at least three kinds of fruit and at least five pieces."""
    basket = {"banana": 2}
    basket["apple"] = 3
    basket["mango"] = 1
    return basket


class Fruit(Enum):
    """Kinds of fruit that can go into the cake basket."""

    APPLE = "apple"
    BANANA = "banana"
    MANGO = "mango"
    LYCHEE = "lychee"
    PINEAPPLE = "pineapple"


def fill_fruit_basket(basket: dict[Fruit, int]) -> None:
    """Add one of every missing kind of fruit; fruit already present is left alone."""
    for fruit in Fruit:
        basket.setdefault(fruit, 1)


@dataclass
class Team:
    """Goals a team scored and conceded."""

    goals_scored: int = 0
    goals_conceded: int = 0


def _parse_goals(text: str, line: str) -> int:
    try:
        goals = int(text)
    except ValueError as error:
        raise ValueError(f"invalid goal count {text!r} in line {line!r}") from error
    if goals < 0:
        raise ValueError(f"negative goal count {text!r} in line {line!r}")
    return goals


def build_scores_table(results: str) -> dict[str, Team]:
    """Build a table of goals from lines of ``team1,team2,goals1,goals2``.

    Raises ValueError for a line that is not of that form.
    """
    scores: dict[str, Team] = {}
    for line in results.splitlines():
        fields = line.split(",")
        if len(fields) < 4:
            raise ValueError(f"expected four fields in line {line!r}")
        team_1_name, team_2_name = fields[0], fields[1]
        team_1_score = _parse_goals(fields[2], line)
        team_2_score = _parse_goals(fields[3], line)

        team_1 = scores.setdefault(team_1_name, Team())
        team_1.goals_scored += team_1_score
        team_1.goals_conceded += team_2_score

        team_2 = scores.setdefault(team_2_name, Team())
        team_2.goals_scored += team_2_score
        team_2.goals_conceded += team_1_score
    return scores