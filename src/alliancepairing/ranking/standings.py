"""Record aggregation and the ranking order shared by every engine.

Ranking order, best first:

1. ranking points (``2 * wins + ties``)
2. opponent win percentage (OWP)
3. point differential
4. matches played

Teams equal on all four keep their incoming order (stable sort).
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

import functools
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Set

from alliancepairing.constants import TIE_RANKING_POINTS, WIN_RANKING_POINTS
from alliancepairing.models import AllianceColor, Match, TeamRecord, WinningAlliance
from alliancepairing.type_hints import RecordFields


@dataclass
class TeamResult:
    """Running totals for one team while walking completed matches."""

    wins: int = 0
    losses: int = 0
    ties: int = 0
    points_scored: int = 0
    points_conceded: int = 0
    opponents: Set[str] = field(default_factory=set)

    @property
    def matches_played(self) -> int:
        return self.wins + self.losses + self.ties

    @property
    def win_percentage(self) -> float:
        played = self.matches_played
        return self.wins / played if played > 0 else 0.0


def match_outcome(match: Match) -> Optional[WinningAlliance]:
    """Outcome of a completed match.

    The recorded winning alliance wins out; without one the alliance
    totals decide, equal totals being a tie.
    """
    if match.winning_alliance is not None:
        return match.winning_alliance
    if match.score is None:
        return None
    red, blue = match.score.red_total_score, match.score.blue_total_score
    if red > blue:
        return WinningAlliance.RED
    if blue > red:
        return WinningAlliance.BLUE
    return WinningAlliance.TIE


def compute_team_results(
    matches: Iterable[Match], team_ids: Iterable[str]
) -> Dict[str, TeamResult]:
    """Aggregate wins, losses, ties, points and opponents per team.

    Only teams in ``team_ids`` are tracked. A surrogate appearance adds
    nothing to the surrogate's own result, but the surrogate still counts as
    an opponent of the teams it played against.

    Args:
        matches: Completed matches of the stage
        team_ids: Teams to aggregate

    Returns:
        Mapping team id -> TeamResult
    """
    results: Dict[str, TeamResult] = {team_id: TeamResult() for team_id in team_ids}

    for match in matches:
        outcome = match_outcome(match)
        if outcome is None:
            continue
        for color in (AllianceColor.RED, AllianceColor.BLUE):
            own = match.alliance(color)
            other = match.alliance(color.opposite)
            if own is None or other is None:
                continue
            own_total = match.score.total_for(color) if match.score else 0
            other_total = match.score.total_for(color.opposite) if match.score else 0

            for entry in own.entries:
                result = results.get(entry.team_id)
                if result is None or entry.is_surrogate:
                    continue
                result.points_scored += own_total
                result.points_conceded += other_total
                result.opponents.update(other.team_ids)
                if outcome is WinningAlliance.TIE:
                    result.ties += 1
                elif outcome.value == color.value:
                    result.wins += 1
                else:
                    result.losses += 1

    return results


def derive_record_fields(results: Dict[str, TeamResult]) -> Dict[str, RecordFields]:
    """Turn aggregated results into the fields written to each team record."""
    win_percentages = {
        team_id: result.win_percentage for team_id, result in results.items()
    }

    fields: Dict[str, RecordFields] = {}
    for team_id, result in results.items():
        owp = 0.0
        if result.opponents:
            owp = sum(win_percentages.get(op, 0.0) for op in result.opponents) / len(
                result.opponents
            )
        fields[team_id] = {
            "wins": result.wins,
            "losses": result.losses,
            "ties": result.ties,
            "points_scored": result.points_scored,
            "points_conceded": result.points_conceded,
            "matches_played": result.matches_played,
            "ranking_points": result.wins * WIN_RANKING_POINTS
            + result.ties * TIE_RANKING_POINTS,
            "opponent_win_percentage": owp,
            "point_differential": result.points_scored - result.points_conceded,
        }
    return fields


def compare_records(a: TeamRecord, b: TeamRecord) -> int:
    """Comparator for the ranking order; negative means ``a`` ranks higher."""
    if a.ranking_points != b.ranking_points:
        return b.ranking_points - a.ranking_points
    if a.opponent_win_percentage != b.opponent_win_percentage:
        return -1 if a.opponent_win_percentage > b.opponent_win_percentage else 1
    if a.point_differential != b.point_differential:
        return b.point_differential - a.point_differential
    return b.matches_played - a.matches_played


ranking_key = functools.cmp_to_key(compare_records)


def sort_standings(records: Iterable[TeamRecord]) -> List[TeamRecord]:
    """Return records in ranking order, best first."""
    return sorted(records, key=ranking_key)


@dataclass(frozen=True)
class StandingsEntry:
    """One leaderboard row."""

    position: int
    team_id: str
    record: str
    ranking_points: int
    opponent_win_percentage: float
    point_differential: int
    matches_played: int
    win_percentage: float
    avg_points_scored: float
    avg_points_conceded: float
    rank: Optional[int]


def build_standings(records: Sequence[TeamRecord]) -> List[StandingsEntry]:
    """Build leaderboard rows in ranking order."""
    return [
        StandingsEntry(
            position=position,
            team_id=record.team_id,
            record=record.record,
            ranking_points=record.ranking_points,
            opponent_win_percentage=record.opponent_win_percentage,
            point_differential=record.point_differential,
            matches_played=record.matches_played,
            win_percentage=record.win_percentage,
            avg_points_scored=record.avg_points_scored,
            avg_points_conceded=record.avg_points_conceded,
            rank=record.rank,
        )
        for position, record in enumerate(sort_standings(records), start=1)
    ]
