"""Per-team, per-stage aggregate record."""

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

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

from alliancepairing.constants import TIE_RANKING_POINTS, WIN_RANKING_POINTS

# Fields MatchStore.update_team_record is allowed to write
UPDATABLE_FIELDS = frozenset(
    {
        "wins",
        "losses",
        "ties",
        "matches_played",
        "points_scored",
        "points_conceded",
        "ranking_points",
        "opponent_win_percentage",
        "point_differential",
        "rank",
    }
)


@dataclass
class TeamRecord:
    """Win-loss-tie record of one team within one stage.

    Invariant at rest: ``wins + losses + ties == matches_played``.

    Attributes:
        team_id: Team the record belongs to
        stage_id: Stage the record is scoped to, or None for a
            tournament-level record
        tournament_id: Owning tournament
        wins: Matches won
        losses: Matches lost
        ties: Matches tied
        matches_played: Matches counted toward the record
        points_scored: Sum of own alliance totals
        points_conceded: Sum of opposing alliance totals
        ranking_points: ``2 * wins + ties``
        opponent_win_percentage: Mean win percentage of every opponent faced
        point_differential: ``points_scored - points_conceded``
        rank: Final integer rank, None until computed
    """

    team_id: str
    stage_id: Optional[str]
    tournament_id: str
    wins: int = 0
    losses: int = 0
    ties: int = 0
    matches_played: int = 0
    points_scored: int = 0
    points_conceded: int = 0
    ranking_points: int = 0
    opponent_win_percentage: float = 0.0
    point_differential: int = 0
    rank: Optional[int] = None

    @property
    def win_percentage(self) -> float:
        if self.matches_played == 0:
            return 0.0
        return self.wins / self.matches_played

    @property
    def avg_points_scored(self) -> float:
        if self.matches_played == 0:
            return 0.0
        return self.points_scored / self.matches_played

    @property
    def avg_points_conceded(self) -> float:
        if self.matches_played == 0:
            return 0.0
        return self.points_conceded / self.matches_played

    @property
    def record(self) -> str:
        """Record string used to group teams, e.g. ``"2-1-0"``."""
        return f"{self.wins}-{self.losses}-{self.ties}"

    def calculate_ranking_points(self) -> int:
        return self.wins * WIN_RANKING_POINTS + self.ties * TIE_RANKING_POINTS

    def apply(self, fields: Dict[str, Any]) -> None:
        """Overwrite the given fields in place."""
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Unknown team record fields: {sorted(unknown)}")
        for name, value in fields.items():
            setattr(self, name, value)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize record to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TeamRecord":
        """Deserialize record from dictionary."""
        return cls(**data)
