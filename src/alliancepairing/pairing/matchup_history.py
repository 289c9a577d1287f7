"""Opponent history used to avoid repeat matchups."""

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

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Sequence, Tuple

from alliancepairing.constants import TEAMS_PER_ALLIANCE, TEAMS_PER_MATCH
from alliancepairing.models import AllianceColor, Match, TeamRecord
from alliancepairing.type_hints import OpponentHistory


@dataclass
class MatchupHistory:
    """Tracks which teams have already faced each other.

    Attributes:
        previous_opponents: Team id -> ids of every team it played against
    """

    previous_opponents: OpponentHistory = field(
        default_factory=lambda: defaultdict(set)
    )

    @classmethod
    def from_matches(cls, matches: Iterable[Match]) -> "MatchupHistory":
        """Build the history from every match of a stage, whatever its status."""
        history = cls()
        for match in matches:
            red = match.alliance(AllianceColor.RED)
            blue = match.alliance(AllianceColor.BLUE)
            if red is None or blue is None:
                continue
            history.add_match(red.team_ids, blue.team_ids)
        return history

    def add_match(self, red_ids: Sequence[str], blue_ids: Sequence[str]) -> None:
        """Record that every red team faced every blue team."""
        for red_id in red_ids:
            self.previous_opponents[red_id].update(blue_ids)
        for blue_id in blue_ids:
            self.previous_opponents[blue_id].update(red_ids)

    def have_faced(self, team_a: str, team_b: str) -> bool:
        """Check if two teams have previously been opponents."""
        return team_b in self.previous_opponents.get(team_a, ())

    def repeat_penalty(self, red_ids: Sequence[str], blue_ids: Sequence[str]) -> int:
        """Number of red/blue pairs that already met as opponents."""
        return sum(
            1 for red_id in red_ids for blue_id in blue_ids if self.have_faced(red_id, blue_id)
        )

    def optimize_alliance_assignment(
        self, teams: Sequence[TeamRecord]
    ) -> Tuple[List[TeamRecord], List[TeamRecord]]:
        """Split four teams into red and blue with the fewest repeat opponents.

        The default split (first two red, last two blue) is compared with the
        alternative (positions 0 and 2 red, 1 and 3 blue). The default wins
        ties.
        """
        if len(teams) != TEAMS_PER_MATCH:
            raise ValueError(f"Expected {TEAMS_PER_MATCH} teams, got {len(teams)}")

        default_red = list(teams[:TEAMS_PER_ALLIANCE])
        default_blue = list(teams[TEAMS_PER_ALLIANCE:])
        alternative_red = [teams[0], teams[2]]
        alternative_blue = [teams[1], teams[3]]

        default_penalty = self.repeat_penalty(_ids(default_red), _ids(default_blue))
        alternative_penalty = self.repeat_penalty(
            _ids(alternative_red), _ids(alternative_blue)
        )

        if alternative_penalty < default_penalty:
            return alternative_red, alternative_blue
        return default_red, default_blue

    def to_dict(self) -> Dict[str, Any]:
        """Serialize history to dictionary."""
        return {
            team_id: sorted(opponents)
            for team_id, opponents in self.previous_opponents.items()
        }


def _ids(records: Sequence[TeamRecord]) -> List[str]:
    return [record.team_id for record in records]
