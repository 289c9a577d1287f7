"""Match, alliance and score records.

A match holds exactly two alliances (RED and BLUE). Alliances are created by
the schedulers and only grow afterwards, when the bracket engine advances a
winner into a later match.
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

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from alliancepairing.exceptions import InvalidMatchTransitionException
from alliancepairing.models.enums import AllianceColor, MatchStatus, WinningAlliance


@dataclass
class TeamAllianceEntry:
    """One team slot inside an alliance.

    Attributes:
        team_id: Team occupying the slot
        station_position: 1-based driver station
        is_surrogate: The result does not count toward this team's record
    """

    team_id: str
    station_position: int
    is_surrogate: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "team_id": self.team_id,
            "station_position": self.station_position,
            "is_surrogate": self.is_surrogate,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TeamAllianceEntry":
        return cls(
            team_id=data["team_id"],
            station_position=data["station_position"],
            is_surrogate=data.get("is_surrogate", False),
        )


@dataclass
class Alliance:
    """A colour tag plus an ordered list of team entries."""

    id: str
    color: AllianceColor
    entries: List[TeamAllianceEntry] = field(default_factory=list)

    @property
    def team_ids(self) -> List[str]:
        return [entry.team_id for entry in self.entries]

    def has_team(self, team_id: str) -> bool:
        return any(entry.team_id == team_id for entry in self.entries)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "color": self.color.value,
            "entries": [e.to_dict() for e in self.entries],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Alliance":
        return cls(
            id=data["id"],
            color=AllianceColor(data["color"]),
            entries=[TeamAllianceEntry.from_dict(e) for e in data.get("entries", [])],
        )


@dataclass
class MatchScore:
    """Score sheet of a match. Created zeroed alongside every new match."""

    match_id: str
    red_auto_score: int = 0
    red_drive_score: int = 0
    red_total_score: int = 0
    blue_auto_score: int = 0
    blue_drive_score: int = 0
    blue_total_score: int = 0

    def total_for(self, color: AllianceColor) -> int:
        if color is AllianceColor.RED:
            return self.red_total_score
        return self.blue_total_score

    def to_dict(self) -> Dict[str, Any]:
        return {
            "match_id": self.match_id,
            "red_auto_score": self.red_auto_score,
            "red_drive_score": self.red_drive_score,
            "red_total_score": self.red_total_score,
            "blue_auto_score": self.blue_auto_score,
            "blue_drive_score": self.blue_drive_score,
            "blue_total_score": self.blue_total_score,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MatchScore":
        return cls(**data)


@dataclass
class Match:
    """One scheduled contest between a RED and a BLUE alliance.

    Attributes:
        id: Match id
        stage_id: Stage the match belongs to
        match_number: Sequence number (within the round for Swiss play)
        round_number: 1-based round
        alliances: RED and BLUE alliances
        field_id: Assigned field, if any
        scheduled_time: Planned start time
        status: Lifecycle status
        winning_alliance: Outcome, set once the match is completed
        score: Score sheet, if one was created
    """

    id: str
    stage_id: str
    match_number: int
    round_number: int
    alliances: List[Alliance] = field(default_factory=list)
    field_id: Optional[str] = None
    scheduled_time: Optional[datetime] = None
    status: MatchStatus = MatchStatus.PENDING
    winning_alliance: Optional[WinningAlliance] = None
    score: Optional[MatchScore] = None

    def alliance(self, color: AllianceColor) -> Optional[Alliance]:
        """Return the alliance of the given colour, or None."""
        for alliance in self.alliances:
            if alliance.color is color:
                return alliance
        return None

    @property
    def team_ids(self) -> List[str]:
        return [team_id for a in self.alliances for team_id in a.team_ids]

    def winner_and_loser(self) -> Optional[Tuple[Alliance, Alliance]]:
        """Return (winning, losing) alliances, or None without a decisive result."""
        if self.winning_alliance is None or self.winning_alliance is WinningAlliance.TIE:
            return None
        winner_color = AllianceColor(self.winning_alliance.value)
        winner = self.alliance(winner_color)
        loser = self.alliance(winner_color.opposite)
        if winner is None or loser is None:
            return None
        return winner, loser

    # --- Lifecycle ---

    def start(self) -> None:
        """PENDING -> IN_PROGRESS."""
        if self.status is not MatchStatus.PENDING:
            raise InvalidMatchTransitionException(
                f"Match {self.id} cannot start from {self.status.value}"
            )
        self.status = MatchStatus.IN_PROGRESS

    def complete(self, winning_alliance: WinningAlliance) -> None:
        """PENDING or IN_PROGRESS -> COMPLETED with a recorded outcome."""
        if self.status not in (MatchStatus.PENDING, MatchStatus.IN_PROGRESS):
            raise InvalidMatchTransitionException(
                f"Match {self.id} cannot complete from {self.status.value}"
            )
        if winning_alliance is None:
            raise InvalidMatchTransitionException(
                f"Match {self.id} cannot complete without a winning alliance"
            )
        self.winning_alliance = winning_alliance
        self.status = MatchStatus.COMPLETED

    def cancel(self) -> None:
        """Any non-completed status -> CANCELLED."""
        if self.status is MatchStatus.COMPLETED:
            raise InvalidMatchTransitionException(
                f"Match {self.id} is already completed and cannot be cancelled"
            )
        self.status = MatchStatus.CANCELLED

    def to_dict(self) -> Dict[str, Any]:
        """Serialize match to dictionary."""
        return {
            "id": self.id,
            "stage_id": self.stage_id,
            "match_number": self.match_number,
            "round_number": self.round_number,
            "alliances": [a.to_dict() for a in self.alliances],
            "field_id": self.field_id,
            "scheduled_time": (
                self.scheduled_time.isoformat() if self.scheduled_time else None
            ),
            "status": self.status.value,
            "winning_alliance": (
                self.winning_alliance.value if self.winning_alliance else None
            ),
            "score": self.score.to_dict() if self.score else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Match":
        """Deserialize match from dictionary."""
        scheduled = data.get("scheduled_time")
        winner = data.get("winning_alliance")
        score = data.get("score")
        return cls(
            id=data["id"],
            stage_id=data["stage_id"],
            match_number=data["match_number"],
            round_number=data["round_number"],
            alliances=[Alliance.from_dict(a) for a in data.get("alliances", [])],
            field_id=data.get("field_id"),
            scheduled_time=datetime.fromisoformat(scheduled) if scheduled else None,
            status=MatchStatus(data.get("status", MatchStatus.PENDING.value)),
            winning_alliance=WinningAlliance(winner) if winner else None,
            score=MatchScore.from_dict(score) if score else None,
        )


@dataclass
class MatchSpec:
    """Everything the store needs to create a match.

    Attributes:
        stage_id: Stage the match belongs to
        match_number: Sequence number
        round_number: 1-based round
        red: Entries of the RED alliance
        blue: Entries of the BLUE alliance
        field_id: Assigned field, if any
        scheduled_time: Planned start time
    """

    stage_id: str
    match_number: int
    round_number: int
    red: List[TeamAllianceEntry] = field(default_factory=list)
    blue: List[TeamAllianceEntry] = field(default_factory=list)
    field_id: Optional[str] = None
    scheduled_time: Optional[datetime] = None

    def entries_for(self, color: AllianceColor) -> List[TeamAllianceEntry]:
        return self.red if color is AllianceColor.RED else self.blue
