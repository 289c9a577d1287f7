"""Bracket edges: which match a winner advances into."""

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
from types import MappingProxyType
from typing import Any, Dict, Iterator, Mapping, Optional

from alliancepairing.models.enums import AllianceColor


@dataclass(frozen=True)
class AdvancementEntry:
    """Destination of a match winner."""

    next_match_id: str
    color: AllianceColor


@dataclass(frozen=True)
class AdvancementMap:
    """Read-only edge set ``match_id -> (next_match_id, colour)``.

    Built once together with the bracket and never mutated afterwards.
    Final-round matches have no entry.
    """

    stage_id: str
    entries: Mapping[str, AdvancementEntry] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "entries", MappingProxyType(dict(self.entries))
        )

    def get(self, match_id: str) -> Optional[AdvancementEntry]:
        return self.entries.get(match_id)

    def __contains__(self, match_id: object) -> bool:
        return match_id in self.entries

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    def items(self):
        return self.entries.items()

    def feeders_of(self, next_match_id: str) -> Dict[AllianceColor, str]:
        """Return the matches feeding ``next_match_id`` keyed by target colour."""
        return {
            entry.color: match_id
            for match_id, entry in self.entries.items()
            if entry.next_match_id == next_match_id
        }

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the map for persistence alongside its stage."""
        return {
            "stage_id": self.stage_id,
            "entries": {
                match_id: {
                    "next_match_id": entry.next_match_id,
                    "color": entry.color.value,
                }
                for match_id, entry in self.entries.items()
            },
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AdvancementMap":
        """Deserialize a persisted map."""
        return cls(
            stage_id=data["stage_id"],
            entries={
                match_id: AdvancementEntry(
                    next_match_id=entry["next_match_id"],
                    color=AllianceColor(entry["color"]),
                )
                for match_id, entry in data.get("entries", {}).items()
            },
        )
