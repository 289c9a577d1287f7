"""Candidate qualification schedules and how they are scored.

Teams are numbered 1..N inside the optimizer. A schedule is a list of
matches, each a pair of (red, blue) team lists with two teams per side.
Per-team statistics are always recomputed from scratch from the match list
(``compute_stats``) instead of being patched after every swap.
"""

# Alliance Pairing
# Copyright (C) 2025  Alliance Pairing developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import math
import random
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, List

from alliancepairing.constants import (
    COLOR_BALANCE_PENALTY,
    OPPONENT_REPEAT_PENALTY,
    PARTNER_REPEAT_PENALTY,
    SEPARATION_PENALTY,
    STATION_BALANCE_PENALTY,
    STATIONS_PER_MATCH,
    TEAMS_PER_ALLIANCE,
    TEAMS_PER_MATCH,
)
from alliancepairing.type_hints import MatchSlots, TeamNumber

RED = 0
BLUE = 1


@dataclass
class ScheduleState:
    """A candidate assignment of teams to matches.

    Attributes:
        num_teams: Number of teams N (numbered 1..N)
        matches: ``(red, blue)`` team lists per match, in play order
    """

    num_teams: int
    matches: List[MatchSlots] = field(default_factory=list)

    def copy(self) -> "ScheduleState":
        return ScheduleState(
            num_teams=self.num_teams,
            matches=[(list(red), list(blue)) for red, blue in self.matches],
        )

    def teams_in(self, match_index: int) -> List[TeamNumber]:
        red, blue = self.matches[match_index]
        return red + blue

    def is_valid(self) -> bool:
        """Every alliance has two slots and no team appears twice in a match."""
        for red, blue in self.matches:
            if len(red) != TEAMS_PER_ALLIANCE or len(blue) != TEAMS_PER_ALLIANCE:
                return False
            if len(set(red + blue)) != TEAMS_PER_MATCH:
                return False
        return True


@dataclass
class TeamStats:
    """Derived statistics of one team within a schedule.

    Station index: 0 = red 1, 1 = red 2, 2 = blue 1, 3 = blue 2.
    """

    appearances: List[int] = field(default_factory=list)
    partner_counts: Dict[TeamNumber, int] = field(
        default_factory=lambda: defaultdict(int)
    )
    opponent_counts: Dict[TeamNumber, int] = field(
        default_factory=lambda: defaultdict(int)
    )
    red_count: int = 0
    blue_count: int = 0
    station_counts: List[int] = field(
        default_factory=lambda: [0] * STATIONS_PER_MATCH
    )


def compute_stats(state: ScheduleState) -> Dict[TeamNumber, TeamStats]:
    """Recompute every team's statistics from the match list."""
    stats = {team: TeamStats() for team in range(1, state.num_teams + 1)}

    for index, (red, blue) in enumerate(state.matches):
        for side, own, other in ((RED, red, blue), (BLUE, blue, red)):
            for position, team in enumerate(own):
                team_stats = stats[team]
                team_stats.appearances.append(index)
                if side == RED:
                    team_stats.red_count += 1
                else:
                    team_stats.blue_count += 1
                team_stats.station_counts[side * TEAMS_PER_ALLIANCE + position] += 1
                for partner in own:
                    if partner != team:
                        team_stats.partner_counts[partner] += 1
                for opponent in other:
                    team_stats.opponent_counts[opponent] += 1

    return stats


def score_schedule(
    stats: Dict[TeamNumber, TeamStats], min_separation: int
) -> float:
    """Penalty score of a schedule; lower is better.

    Per team:

    * +3.0 per partner pairing beyond the first
    * +2.0 per opponent pairing beyond the first
    * +10 * (S - gap) for successive appearances closer than S matches,
      where gap counts the matches strictly between them
    * +2 * |red - blue|
    * +0.5 * |station count - expected| per station
    """
    score = 0.0
    for team_stats in stats.values():
        for count in team_stats.partner_counts.values():
            if count > 1:
                score += PARTNER_REPEAT_PENALTY * (count - 1)
        for count in team_stats.opponent_counts.values():
            if count > 1:
                score += OPPONENT_REPEAT_PENALTY * (count - 1)

        appearances = team_stats.appearances
        for previous, current in zip(appearances, appearances[1:]):
            gap = current - previous - 1
            if gap < min_separation:
                score += SEPARATION_PENALTY * (min_separation - gap)

        score += COLOR_BALANCE_PENALTY * abs(
            team_stats.red_count - team_stats.blue_count
        )

        expected = len(appearances) / STATIONS_PER_MATCH
        for count in team_stats.station_counts:
            score += STATION_BALANCE_PENALTY * abs(count - expected)

    return score


def required_matches(num_teams: int, rounds: int) -> int:
    """Number of matches needed for every team to play ``rounds`` times."""
    return math.ceil(num_teams * rounds / TEAMS_PER_MATCH)


def build_initial_schedule(
    num_teams: int, rounds: int, rng: random.Random
) -> ScheduleState:
    """Build the starting point for annealing.

    With N divisible by 4 teams are dealt cyclically: match k gets teams
    ``(4k .. 4k+3) mod N``. Otherwise each match takes the four least-played
    teams, ties broken at random.
    """
    num_matches = required_matches(num_teams, rounds)
    state = ScheduleState(num_teams=num_teams)

    if num_teams % TEAMS_PER_MATCH == 0:
        for k in range(num_matches):
            teams = [
                (TEAMS_PER_MATCH * k + offset) % num_teams + 1
                for offset in range(TEAMS_PER_MATCH)
            ]
            state.matches.append(
                (teams[:TEAMS_PER_ALLIANCE], teams[TEAMS_PER_ALLIANCE:])
            )
        return state

    played = {team: 0 for team in range(1, num_teams + 1)}
    for _ in range(num_matches):
        ordered = sorted(played, key=lambda team: (played[team], rng.random()))
        teams = ordered[:TEAMS_PER_MATCH]
        for team in teams:
            played[team] += 1
        state.matches.append((teams[:TEAMS_PER_ALLIANCE], teams[TEAMS_PER_ALLIANCE:]))
    return state
