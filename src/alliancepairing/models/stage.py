"""Teams, fields and the stage descriptor."""

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
from typing import Any, Dict, List, Optional

from alliancepairing.models.enums import StageType


@dataclass(frozen=True)
class Team:
    """A competing team. The engine never mutates it."""

    id: str
    team_number: str = ""
    name: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "team_number": self.team_number, "name": self.name}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Team":
        return cls(
            id=data["id"],
            team_number=data.get("team_number", ""),
            name=data.get("name", ""),
        )


@dataclass(frozen=True)
class Field:
    """A playing field matches can be assigned to."""

    id: str
    number: int
    name: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "number": self.number, "name": self.name}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Field":
        return cls(id=data["id"], number=data["number"], name=data.get("name", ""))


@dataclass
class Stage:
    """A competition phase of a tournament.

    Attributes:
        id: Stage id
        tournament_id: Owning tournament
        type: SWISS, PLAYOFF or QUALIFICATION
        teams: Teams taking part in this stage
        fields: Fields configured for the tournament
        name: Display name
    """

    id: str
    tournament_id: str
    type: StageType
    teams: List[Team] = field(default_factory=list)
    fields: List[Field] = field(default_factory=list)
    name: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize stage to dictionary."""
        return {
            "id": self.id,
            "tournament_id": self.tournament_id,
            "type": self.type.value,
            "teams": [t.to_dict() for t in self.teams],
            "fields": [f.to_dict() for f in self.fields],
            "name": self.name,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Stage":
        """Deserialize stage from dictionary."""
        return cls(
            id=data["id"],
            tournament_id=data["tournament_id"],
            type=StageType(data["type"]),
            teams=[Team.from_dict(t) for t in data.get("teams", [])],
            fields=[Field.from_dict(f) for f in data.get("fields", [])],
            name=data.get("name"),
        )
