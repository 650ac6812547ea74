"""Goal totals per team, built from lines of match results."""

from __future__ import annotations

import re
from dataclasses import dataclass

_GOALS = re.compile(r"\+?[0-9]+")
_MAX_GOALS = 255


@dataclass
class Team:
    """Goals a team scored and conceded."""

    goals_scored: int = 0
    goals_conceded: int = 0


def _goals(field: str) -> int:
    if not _GOALS.fullmatch(field):
        raise ValueError(f"invalid goal count: {field!r}")
    value = int(field)
    if value > _MAX_GOALS:
        raise ValueError(f"goal count out of range: {field!r}")
    return value


def build_scores_table(results: str) -> dict[str, Team]:
    """Parse "team_1,team_2,goals_1,goals_2" lines into a table of team totals."""
    scores: dict[str, Team] = {}
    for line in results.splitlines():
        fields = line.split(",")
        if len(fields) < 4:
            raise ValueError(f"expected four comma-separated fields: {line!r}")
        team_1, team_2 = fields[0], fields[1]
        goals_1, goals_2 = _goals(fields[2]), _goals(fields[3])

        first = scores.setdefault(team_1, Team())
        first.goals_scored += goals_1
        first.goals_conceded += goals_2

        second = scores.setdefault(team_2, Team())
        second.goals_scored += goals_2
        second.goals_conceded += goals_1
    return scores